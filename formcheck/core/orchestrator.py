"""
Form validator orchestrating per-field validation state.

The FormValidator owns one form's descriptors and current results, keeps
the submit control in step with aggregate validity, re-validates a field
whenever its edit is committed and re-validates everything before a
submission is allowed through.
"""

from functools import partial
from typing import Any, Iterable, Mapping

from formcheck.adapters.base import FieldSource, FieldSurface, SubmitAttempt
from formcheck.core.errors import FormConfigurationError
from formcheck.core.models import (
    FieldConfig,
    FieldValidationDescriptor,
    FieldValue,
    InitOptions,
    Rule,
    ValidationResult,
)
from formcheck.core.rules import RuleRegistry
from formcheck.core.validators import ValidationEvaluator
from formcheck.observability.logger import get_form_logger, log_operation
from formcheck.observability.metrics import (
    increment_counter,
    invalid_fields,
    revalidation_duration_seconds,
    set_gauge,
    submit_attempts_total,
    track_duration,
)

class FormValidator:
    """
    Validation state and reactive revalidation for one form.

    Each instance owns its own RuleRegistry, so several forms can live in
    one process with different rule sets.
    """

    def __init__(
        self,
        source: FieldSource,
        surface: FieldSurface,
        registry: RuleRegistry | None = None,
        form_id: str = "form",
    ):
        """
        Initialize the form validator.

        Args:
            source: Reads field values and delivers commit notifications
            surface: Owns the submit control and submission interception
            registry: Rules available to this form (defaults to a fresh registry)
            form_id: Identifier used in logs and metrics
        """
        self.source = source
        self.surface = surface
        self.registry = registry if registry is not None else RuleRegistry()
        self.evaluator = ValidationEvaluator(self.registry)
        self.form_id = form_id
        self.log = get_form_logger(__name__, form_id)
        self.options = InitOptions()
        self._descriptors: dict[str, FieldValidationDescriptor] = {}
        self._results: dict[str, ValidationResult] = {}
        self._initialized = False

    # =======================
    # LIFECYCLE
    # =======================

    def initialize(
        self,
        fields: Iterable[FieldConfig | Mapping[str, Any]] = (),
        options: InitOptions | Mapping[str, Any] | None = None,
    ) -> None:
        """
        Set up the form.

        Normalizes the field configurations, merges additional rules, evaluates
        every field once without side effects, sets the initial state of the
        submit control, intercepts submission and subscribes to commit
        notifications. A call that raises leaves no handler attached and may
        be retried.

        Args:
            fields: Field configurations, as FieldConfig or plain dicts
            options: InitOptions or a dict of its fields

        Raises:
            FormConfigurationError: If called twice, a field name repeats, or
                the surface has no form or submit control
        """
        if self._initialized:
            raise FormConfigurationError(f"Form '{self.form_id}' is already initialized")

        if options is None:
            options = InitOptions()
        elif not isinstance(options, InitOptions):
            options = InitOptions(**options)

        with log_operation("Initializing form", logger=self.log):
            self.options = options
            self.add_rules(options.additional_rules)
            self._descriptors = self._normalize(fields, options)
            self._results = {name: ValidationResult.valid() for name in self._descriptors}

            self.revalidate_all(suppress_actions=True)
            # Surface calls that can fail run before any commit handler is attached
            self._refresh_submit_state()
            self.surface.intercept_submit(self._handle_submit)
            self._subscribe_fields()
            self._initialized = True

    def _normalize(
        self,
        fields: Iterable[FieldConfig | Mapping[str, Any]],
        options: InitOptions,
    ) -> dict[str, FieldValidationDescriptor]:
        descriptors: dict[str, FieldValidationDescriptor] = {}
        for field in fields:
            config = field if isinstance(field, FieldConfig) else FieldConfig(**field)
            if config.name in descriptors:
                raise FormConfigurationError(f"Field '{config.name}' is configured more than once")
            descriptors[config.name] = config.normalize(options.default_action)
        return descriptors

    def _subscribe_fields(self) -> None:
        for name in self._descriptors:
            if not self.source.has_field(name):
                self.log.warning(
                    f"Field '{name}' not found; it will only be checked on submit",
                    extra={"field_name": name},
                )
                continue
            self.source.subscribe(name, partial(self.revalidate_field, name))

    # =======================
    # REVALIDATION
    # =======================

    def revalidate_field(self, name: str, value: FieldValue) -> ValidationResult:
        """
        Re-evaluate one field against value and run its side effect if invalid.

        Repeating the call with the same value gives the same result and runs
        the side effect again.

        Args:
            name: Field name
            value: The field's new value

        Returns:
            The field's new result
        """
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            self.log.warning(
                f"Ignoring revalidation of unconfigured field '{name}'",
                extra={"field_name": name},
            )
            return ValidationResult.valid()

        result = self.evaluator.evaluate(descriptor, value)
        self._results[name] = result
        self._refresh_submit_state()
        self._dispatch(descriptor, result)
        return result

    def revalidate_all(self, suppress_actions: bool = False) -> None:
        """
        Re-evaluate every field from its current source value.

        Fields missing from the source get a valid result.

        Args:
            suppress_actions: Skip the side effects of invalid fields
        """
        with track_duration(revalidation_duration_seconds, form_id=self.form_id):
            for name, descriptor in list(self._descriptors.items()):
                result = self._evaluate_from_source(descriptor)
                self._results[name] = result
                if not suppress_actions:
                    self._dispatch(descriptor, result)
        self._record_invalid_count()

    def _evaluate_from_source(self, descriptor: FieldValidationDescriptor) -> ValidationResult:
        if not self.source.has_field(descriptor.name):
            return ValidationResult.valid()
        return self.evaluator.evaluate(descriptor, self.source.read_value(descriptor.name))

    def _dispatch(self, descriptor: FieldValidationDescriptor, result: ValidationResult) -> None:
        if result.is_valid:
            return
        self.log.debug(
            f"Running invalid action for field '{descriptor.name}'",
            extra={"field_name": descriptor.name, "messages": result.messages},
        )
        descriptor.on_invalid(list(result.messages))

    # =======================
    # AGGREGATE STATE
    # =======================

    def is_form_invalid(self) -> bool:
        """True iff any stored result is invalid. Never evaluates."""
        return any(not result.is_valid for result in self._results.values())

    def invalid_fields(self) -> list[str]:
        """Names of the fields whose stored result is invalid, in registration order."""
        return [name for name, result in self._results.items() if not result.is_valid]

    def add_rules(self, rules: Mapping[str, Rule]) -> None:
        """Merge rules into this form's registry; later registrations win."""
        self.registry.add_rules(rules)

    @property
    def results(self) -> dict[str, ValidationResult]:
        return dict(self._results)

    @property
    def descriptors(self) -> tuple[FieldValidationDescriptor, ...]:
        return tuple(self._descriptors.values())

    def result_for(self, name: str) -> ValidationResult:
        """
        Current result of a configured field.

        Raises:
            KeyError: If name is not a configured field
        """
        return self._results[name]

    def _refresh_submit_state(self) -> None:
        self._record_invalid_count()
        if self.options.should_disable_submit:
            self.surface.set_submit_disabled(self.is_form_invalid())

    def _record_invalid_count(self) -> None:
        set_gauge(invalid_fields, len(self.invalid_fields()), form_id=self.form_id)

    # =======================
    # SUBMISSION
    # =======================

    def _handle_submit(self, attempt: SubmitAttempt) -> None:
        attempt.prevent_default()
        self.revalidate_all()
        self._refresh_submit_state()

        if self.is_form_invalid():
            increment_counter(submit_attempts_total, form_id=self.form_id, outcome="blocked")
            self.log.warning(
                "Submission blocked",
                extra={"invalid_fields": self.invalid_fields()},
            )
            attempt.block()
            return

        increment_counter(submit_attempts_total, form_id=self.form_id, outcome="allowed")
        self.log.info("Submission allowed")
        attempt.allow()
        if self.options.submit_action is not None:
            self.options.submit_action()
