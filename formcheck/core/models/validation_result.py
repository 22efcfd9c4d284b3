"""
ValidationResult model representing the outcome of validating one field (ephemeral).
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ValidationResult(BaseModel):
    """
    Outcome of validating a single field value.

    Results are never updated in place: each evaluation pass produces a new
    instance which replaces the previous one.

    Attributes:
        is_valid: True iff no rule failed
        messages: Messages of the failing rules, in rule-list order
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "is_valid": False,
                "messages": [
                    "This field is required",
                    "Please enter a valid email address",
                ],
            }
        },
    )

    is_valid: bool
    messages: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_valid_consistency(self) -> "ValidationResult":
        """Validate that is_valid=True implies messages is empty."""
        if self.is_valid and self.messages:
            raise ValueError("is_valid=True but messages is not empty")
        return self

    @classmethod
    def valid(cls) -> "ValidationResult":
        """Trivially valid result, used for fields with nothing to check."""
        return cls(is_valid=True, messages=[])
