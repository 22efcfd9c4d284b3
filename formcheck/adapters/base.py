"""
Collaborator interfaces between the validation engine and a concrete UI.

A FieldSource reads field values and delivers commit notifications; a
FieldSurface owns the submit control and the submission itself.
"""

from abc import ABC, abstractmethod
from typing import Callable

from formcheck.core.models import FieldValue

ValueHandler = Callable[[FieldValue], None]


class SubmitAttempt:
    """
    One attempt to submit the form.

    The default submission proceeds only if no interceptor prevented it,
    or an interceptor that prevented it explicitly allowed it afterwards.
    """

    def __init__(self):
        self._default_prevented = False
        self._allowed = False
        self._blocked = False

    def prevent_default(self) -> None:
        self._default_prevented = True

    def allow(self) -> None:
        self._allowed = True
        self._blocked = False

    def block(self) -> None:
        self._blocked = True
        self._allowed = False

    @property
    def default_prevented(self) -> bool:
        return self._default_prevented

    @property
    def allowed(self) -> bool:
        return self._allowed

    @property
    def blocked(self) -> bool:
        return self._blocked

    @property
    def proceeds(self) -> bool:
        """Whether the submission goes through."""
        return self._allowed or not (self._default_prevented or self._blocked)


SubmitHandler = Callable[[SubmitAttempt], None]


class FieldSource(ABC):
    """Reads field values and notifies when the user commits an edit."""

    @abstractmethod
    def has_field(self, name: str) -> bool:
        """Return True if a field called name exists."""
        pass

    @abstractmethod
    def read_value(self, name: str) -> FieldValue:
        """
        Read the current value of an existing field.

        Raises:
            KeyError: If the field does not exist
        """
        pass

    @abstractmethod
    def subscribe(self, name: str, handler: ValueHandler) -> None:
        """Call handler with the new value each time the field's edit is committed."""
        pass


class FieldSurface(ABC):
    """Owns the submit control and intercepts submission attempts."""

    @abstractmethod
    def set_submit_disabled(self, disabled: bool) -> None:
        """
        Set or clear the submit control's disabled flag.

        Raises:
            FormConfigurationError: If there is no submit control
        """
        pass

    @abstractmethod
    def intercept_submit(self, handler: SubmitHandler) -> None:
        """
        Run handler on every submission attempt, before the default action.

        Raises:
            FormConfigurationError: If there is no form to intercept
        """
        pass
