"""
In-memory field source and surface.

Used by the CLI and the tests to drive a form without any real UI:
values live in a dict and notifications are delivered synchronously.
"""

from typing import Mapping

from formcheck.core.errors import FormConfigurationError
from formcheck.core.models import FieldValue
from formcheck.observability.logger import get_logger

from .base import FieldSource, FieldSurface, SubmitAttempt, SubmitHandler, ValueHandler

logger = get_logger(__name__)


class InMemoryFieldSource(FieldSource):
    """
    Field values held in a dict.

    set_value simulates typing (no notification); commit simulates the user
    leaving the field and notifies subscribers in subscription order.
    """

    def __init__(self, values: Mapping[str, FieldValue] | None = None):
        self.values: dict[str, FieldValue] = dict(values or {})
        self._handlers: dict[str, list[ValueHandler]] = {}

    def has_field(self, name: str) -> bool:
        return name in self.values

    def read_value(self, name: str) -> FieldValue:
        return self.values[name]

    def subscribe(self, name: str, handler: ValueHandler) -> None:
        self._handlers.setdefault(name, []).append(handler)

    def set_value(self, name: str, value: FieldValue) -> None:
        self.values[name] = value

    def commit(self, name: str, value: FieldValue | None = None) -> None:
        """
        Store value (if given) and notify the field's subscribers.

        Raises:
            KeyError: If the field does not exist
        """
        if value is not None:
            self.values[name] = value
        current = self.values[name]
        for handler in list(self._handlers.get(name, [])):
            handler(current)

    def subscriber_count(self, name: str) -> int:
        return len(self._handlers.get(name, []))


class InMemoryFieldSurface(FieldSurface):
    """
    Submit control and form held in memory.

    Args:
        has_form: False simulates a page without the form element
        has_submit_control: False simulates a page without the submit control
    """

    def __init__(self, has_form: bool = True, has_submit_control: bool = True):
        self.has_form = has_form
        self.has_submit_control = has_submit_control
        self.submit_disabled = False
        self.submissions = 0
        self._interceptors: list[SubmitHandler] = []

    def set_submit_disabled(self, disabled: bool) -> None:
        if not self.has_submit_control:
            raise FormConfigurationError("Submit control not found")
        self.submit_disabled = disabled

    def intercept_submit(self, handler: SubmitHandler) -> None:
        if not self.has_form:
            raise FormConfigurationError("Form not found")
        self._interceptors.append(handler)

    def attempt_submit(self) -> SubmitAttempt:
        """Run every interceptor; count the submission if it proceeds."""
        attempt = SubmitAttempt()
        for handler in list(self._interceptors):
            handler(attempt)
        if attempt.proceeds:
            self.submissions += 1
            logger.debug("Form submitted", extra={"submissions": self.submissions})
        return attempt
