"""
InitOptions model holding the form-wide settings passed at initialization.
"""

from typing import Callable, Dict

from pydantic import BaseModel, Field

from .field_descriptor import InvalidAction, no_action
from .rule import Rule


class InitOptions(BaseModel):
    """
    Form-wide options.

    Attributes:
        additional_rules: Rules merged into the registry before the first evaluation
        default_action: Side effect for fields configured without one
        should_disable_submit: Whether the submit control follows form validity
        submit_action: Called when a submission attempt is allowed
    """

    additional_rules: Dict[str, Rule] = Field(default_factory=dict)
    default_action: InvalidAction = no_action
    should_disable_submit: bool = False
    submit_action: Callable[[], None] | None = None
