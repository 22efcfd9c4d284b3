"""
Core data models for the form validation engine.

All models use Pydantic for runtime validation and type safety.
"""

from .field_descriptor import FieldConfig, FieldValidationDescriptor, InvalidAction, no_action
from .init_options import InitOptions
from .rule import NEUTRAL_RULE, FieldValue, Rule
from .validation_result import ValidationResult

__all__ = [
    "FieldValue",
    "Rule",
    "NEUTRAL_RULE",
    "FieldConfig",
    "FieldValidationDescriptor",
    "InvalidAction",
    "no_action",
    "InitOptions",
    "ValidationResult",
]
