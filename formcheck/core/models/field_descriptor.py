"""
Field configuration models.

FieldConfig is what users write; FieldValidationDescriptor is the normalized,
fully-populated form the engine works with after initialization.
"""

from typing import Callable, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

InvalidAction = Callable[[List[str]], None]


def no_action(messages: List[str]) -> None:
    """Default side effect: do nothing."""
    return None


class FieldValidationDescriptor(BaseModel):
    """
    Normalized validation configuration for one field.

    Attributes:
        name: Field name, matched against the field source
        rule_names: Rules applied to the field, in order
        message_overrides: Per-rule messages replacing the rule's default
        on_invalid: Side effect invoked with the failure messages
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    rule_names: Tuple[str, ...] = ()
    message_overrides: Dict[str, str] = Field(default_factory=dict)
    on_invalid: InvalidAction = no_action

    def message_for(self, rule_name: str, default: str) -> str:
        """Return the override for rule_name, falling back to default."""
        return self.message_overrides.get(rule_name, default)


class FieldConfig(BaseModel):
    """
    User-supplied validation configuration for one field.

    Attributes:
        name: Field name
        rules: Names of the rules to apply, in order
        messages: Optional per-rule message overrides
        on_invalid: Optional side effect; the form's default action is used when absent
    """

    name: str = Field(..., min_length=1)
    rules: List[str] = Field(default_factory=list)
    messages: Dict[str, str] | None = None
    on_invalid: InvalidAction | None = None

    def normalize(self, default_action: InvalidAction = no_action) -> FieldValidationDescriptor:
        """Fill every optional setting and freeze the result."""
        return FieldValidationDescriptor(
            name=self.name,
            rule_names=tuple(self.rules),
            message_overrides=dict(self.messages or {}),
            on_invalid=self.on_invalid or default_action,
        )
