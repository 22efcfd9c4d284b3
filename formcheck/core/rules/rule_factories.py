"""
Factories building Rules for common value shapes.

Every rule built here is total: values are stringified before matching and
values that are not numbers fail numeric checks instead of raising.
"""

import re
from re import Pattern
from typing import Any, Callable

from formcheck.core.errors import FormConfigurationError
from formcheck.core.models import FieldValue, Rule


def pattern_rule(pattern: str | Pattern, message: str = "", flags: int = 0) -> Rule:
    """
    Build a rule passing when the value matches a regular expression.

    Matching is anchored at the start of the value, as with re.match;
    end the pattern with "$" to require a full match.

    Raises:
        FormConfigurationError: If the pattern does not compile
    """
    try:
        if isinstance(pattern, str):
            compiled: Pattern = re.compile(pattern, flags)
        elif isinstance(pattern, Pattern):
            compiled = pattern
        else:
            raise FormConfigurationError(f"Pattern must be string or compiled Pattern, got {type(pattern)}")
    except re.error as e:
        raise FormConfigurationError(f"Invalid regex pattern: {e}")

    def logic(value: FieldValue) -> bool:
        return compiled.match(str(value)) is not None

    return Rule(message=message or f"Value must match pattern '{compiled.pattern}'", logic=logic)


def _check_bounds(rule_type: str, low: Any, high: Any, integral: bool = False) -> None:
    """
    Reject bounds that would make a rule raise when it runs.

    Raises:
        FormConfigurationError: If no bound is given, a bound is not a number,
            or low is greater than high
    """
    if low is None and high is None:
        raise FormConfigurationError(f"{rule_type} rule requires 'min' or 'max'")

    allowed = (int,) if integral else (int, float)
    for key, bound in (("min", low), ("max", high)):
        if bound is None:
            continue
        # bool is an int subclass but never a meaningful bound
        if isinstance(bound, bool) or not isinstance(bound, allowed):
            kind = "an integer" if integral else "a number"
            raise FormConfigurationError(f"{rule_type} rule '{key}' must be {kind}, got {bound!r}")

    if low is not None and high is not None and low > high:
        raise FormConfigurationError(f"{rule_type} rule 'min' ({low}) is greater than 'max' ({high})")


def _bounds_message(subject: str, low: Any, high: Any) -> str:
    if low is not None and high is not None:
        return f"{subject} must be between {low} and {high}"
    if low is not None:
        return f"{subject} must be at least {low}"
    return f"{subject} must be at most {high}"


def length_rule(min_length: int | None = None, max_length: int | None = None, message: str = "") -> Rule:
    """
    Build a rule bounding the length of the stringified value (inclusive).

    Raises:
        FormConfigurationError: If the bounds are missing, not integers or reversed
    """
    _check_bounds("length", min_length, max_length, integral=True)

    def logic(value: FieldValue) -> bool:
        length = len(str(value))
        if min_length is not None and length < min_length:
            return False
        if max_length is not None and length > max_length:
            return False
        return True

    return Rule(message=message or _bounds_message("Length", min_length, max_length), logic=logic)


def range_rule(min_value: float | None = None, max_value: float | None = None, message: str = "") -> Rule:
    """
    Build a rule bounding the numeric value (inclusive).

    Strings are parsed with float(); anything unparsable fails.

    Raises:
        FormConfigurationError: If the bounds are missing, not numbers or reversed
    """
    _check_bounds("range", min_value, max_value)

    def logic(value: FieldValue) -> bool:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return False
        if min_value is not None and number < min_value:
            return False
        if max_value is not None and number > max_value:
            return False
        return True

    return Rule(message=message or _bounds_message("Value", min_value, max_value), logic=logic)



def _build_pattern(params: dict[str, Any], message: str) -> Rule:
    if not params.get("pattern"):
        raise FormConfigurationError("pattern rule requires 'pattern' parameter")
    return pattern_rule(params["pattern"], message)


def _build_length(params: dict[str, Any], message: str) -> Rule:
    return length_rule(params.get("min"), params.get("max"), message)


def _build_range(params: dict[str, Any], message: str) -> Rule:
    return range_rule(params.get("min"), params.get("max"), message)


RULE_FACTORIES: dict[str, Callable[[dict[str, Any], str], Rule]] = {
    "pattern": _build_pattern,
    "length": _build_length,
    "range": _build_range,
}


def build_rule(rule_type: str, parameters: dict[str, Any] | None = None, message: str = "") -> Rule:
    """
    Build a rule from a factory type name and its parameters.

    Raises:
        FormConfigurationError: If rule_type is unknown or parameters are invalid
    """
    factory = RULE_FACTORIES.get(rule_type)
    if not factory:
        raise FormConfigurationError(f"Unknown rule type: {rule_type}")
    if parameters is not None and not isinstance(parameters, dict):
        raise FormConfigurationError(f"Parameters of a {rule_type} rule must be a mapping")
    return factory(parameters or {}, message)
