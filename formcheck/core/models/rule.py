"""
Rule model representing a named, pluggable predicate with a default failure message.
"""

from typing import Callable, Union

from pydantic import BaseModel, ConfigDict

# Value read from a field; numbers are kept as numbers
FieldValue = Union[str, int, float]


def _always_pass(value: FieldValue) -> bool:
    return True


class Rule(BaseModel):
    """
    A validation predicate and the message reported when it fails.

    The rule's name is not part of the model: rules are keyed by name in
    a RuleRegistry so the same predicate can be registered under several names.

    Attributes:
        message: Default message reported when logic returns False
        logic: Pure, synchronous, total predicate; True means the value passes
    """

    model_config = ConfigDict(frozen=True)

    message: str = ""
    logic: Callable[[FieldValue], bool]

    def check(self, value: FieldValue) -> bool:
        """Run the predicate and coerce its outcome to a bool."""
        return bool(self.logic(value))


# Rule used for names that resolve to nothing in a registry
NEUTRAL_RULE = Rule(message="", logic=_always_pass)
