"""
Validation evaluator: applies a field descriptor's rules to a value.
"""

from formcheck.core.models import FieldValidationDescriptor, FieldValue, ValidationResult
from formcheck.core.rules import RuleRegistry
from formcheck.observability.logger import get_logger
from formcheck.observability.metrics import field_evaluations_total, increment_counter, rule_failures_total

logger = get_logger(__name__)


class ValidationEvaluator:
    """
    Evaluates descriptors against values using a RuleRegistry.

    Rules are looked up at evaluation time, so rules registered after a
    descriptor was created still apply to it.
    """

    def __init__(self, registry: RuleRegistry):
        self.registry = registry

    def evaluate(self, descriptor: FieldValidationDescriptor, value: FieldValue) -> ValidationResult:
        """
        Apply every rule of the descriptor to value.

        Every rule runs exactly once, in order, even after a failure, so the
        result carries the message of each failing rule.

        Args:
            descriptor: Normalized field configuration
            value: Current field value

        Returns:
            ValidationResult, valid iff no rule failed
        """
        rules = [(rule_name, self.registry.resolve(rule_name)) for rule_name in descriptor.rule_names]
        outcomes = [(rule_name, rule, rule.check(value)) for rule_name, rule in rules]

        messages = []
        for rule_name, rule, passed in outcomes:
            if passed:
                continue
            messages.append(descriptor.message_for(rule_name, rule.message))
            increment_counter(rule_failures_total, field_name=descriptor.name, rule_name=rule_name)

        is_valid = all(passed for _, _, passed in outcomes)

        increment_counter(
            field_evaluations_total,
            field_name=descriptor.name,
            outcome="valid" if is_valid else "invalid",
        )
        logger.debug(
            f"Evaluated field '{descriptor.name}'",
            extra={"field_name": descriptor.name, "is_valid": is_valid, "failures": len(messages)},
        )

        return ValidationResult(is_valid=is_valid, messages=messages)
