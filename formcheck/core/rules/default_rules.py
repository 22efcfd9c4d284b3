"""
Rules installed in every RuleRegistry.

- required: fails only on the empty string; 0, "0" and whitespace pass
- email: local part, "@", then one or more dot-separated domain labels
"""

import re
from re import Pattern

from formcheck.core.models import FieldValue, Rule

EMAIL_PATTERN: Pattern = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9-]+(?:\.[a-zA-Z0-9-]+)*"
)


def is_present(value: FieldValue) -> bool:
    """True unless value is exactly the empty string."""
    return value != ""


def is_email(value: FieldValue) -> bool:
    """True when the whole value has the shape of an email address."""
    return EMAIL_PATTERN.fullmatch(str(value)) is not None


REQUIRED = Rule(message="This field is required", logic=is_present)
EMAIL = Rule(message="Please enter a valid email address", logic=is_email)

DEFAULT_RULES = {
    "required": REQUIRED,
    "email": EMAIL,
}
