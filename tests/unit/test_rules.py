"""
Unit tests for the rule registry, default rules and rule factories.

Includes property-based testing with hypothesis for the default rules.
"""

import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from formcheck.core.errors import FormConfigurationError
from formcheck.core.models import NEUTRAL_RULE, Rule
from formcheck.core.rules import (
    EMAIL,
    REQUIRED,
    RuleRegistry,
    build_rule,
    length_rule,
    pattern_rule,
    range_rule,
)


class TestRequiredRule:
    """Tests for the default 'required' rule"""

    def test_empty_string_fails(self):
        assert REQUIRED.check("") is False

    @pytest.mark.parametrize("value", ["0", 0, " ", "abc", 0.0])
    def test_falsy_but_present_values_pass(self, value):
        """Only the empty string counts as missing"""
        assert REQUIRED.check(value) is True

    @given(st.text(min_size=1))
    def test_property_any_nonempty_string_passes(self, value):
        assert REQUIRED.check(value) is True

    @given(st.integers())
    def test_property_any_integer_passes(self, value):
        assert REQUIRED.check(value) is True


class TestEmailRule:
    """Tests for the default 'email' rule"""

    @pytest.mark.parametrize("value", [
        "a@b.co",
        "a.b@sub.domain.com",
        "user+tag@example.org",
        "x@localhost",
    ])
    def test_valid_addresses_pass(self, value):
        assert EMAIL.check(value) is True

    @pytest.mark.parametrize("value", [
        "a@@b.co",
        "plainstring",
        "",
        "@example.com",
        "user@",
        "user@example.com.",
        "user@exa mple.com",
        "user@example.com\n",
    ])
    def test_invalid_addresses_fail(self, value):
        assert EMAIL.check(value) is False

    def test_number_fails_without_raising(self):
        assert EMAIL.check(12345) is False

    @given(st.text(alphabet=st.characters(exclude_characters="@"), max_size=30))
    def test_property_without_at_sign_fails(self, value):
        assert EMAIL.check(value) is False


class TestRuleRegistry:
    """Tests for RuleRegistry"""

    def test_defaults_are_installed(self, registry):
        assert "required" in registry
        assert "email" in registry
        assert len(registry) == 2

    def test_registry_without_defaults(self):
        registry = RuleRegistry(include_defaults=False)
        assert len(registry) == 0
        assert registry.resolve("required") is NEUTRAL_RULE

    def test_resolve_unknown_returns_neutral_rule(self, registry):
        rule = registry.resolve("no_such_rule")
        assert rule.message == ""
        assert rule.check("") is True
        assert rule.check("anything") is True

    def test_register_overwrites(self, registry):
        """Last registration wins, no duplicate-name error"""
        strict = Rule(message="Must be at least 3 characters", logic=lambda v: len(str(v)) >= 3)
        registry.register("required", strict)

        assert registry.resolve("required") is strict
        assert len(registry) == 2

    def test_add_rules_merges_in_order(self, registry):
        first = Rule(message="first", logic=lambda v: True)
        second = Rule(message="second", logic=lambda v: True)
        registry.add_rules({"custom": first})
        registry.add_rules({"custom": second, "other": first})

        assert registry.resolve("custom") is second
        assert registry.names() == ["required", "email", "custom", "other"]

    def test_registries_are_independent(self):
        """Rules registered on one form never leak into another"""
        a = RuleRegistry()
        b = RuleRegistry()
        a.register("digits", pattern_rule(r"^\d+$"))

        assert "digits" in a
        assert "digits" not in b

    def test_summary(self, registry):
        summary = registry.summary()
        assert summary["total_rules"] == 2
        assert summary["messages"]["required"] == REQUIRED.message


class TestRuleFactories:
    """Tests for factory-built rules"""

    def test_pattern_rule(self):
        rule = pattern_rule(r"^[0-9]{3}-[0-9]{4}$", "bad zip")
        assert rule.check("123-4567") is True
        assert rule.check("1234567") is False
        assert rule.message == "bad zip"

    def test_pattern_rule_stringifies_numbers(self):
        rule = pattern_rule(r"^\d+$")
        assert rule.check(42) is True

    def test_pattern_rule_accepts_compiled_pattern(self):
        rule = pattern_rule(re.compile(r"^abc", re.IGNORECASE))
        assert rule.check("ABCdef") is True

    def test_pattern_rule_default_message(self):
        assert "^x$" in pattern_rule("^x$").message

    def test_invalid_pattern_raises(self):
        with pytest.raises(FormConfigurationError) as exc_info:
            pattern_rule("[unclosed")
        assert "Invalid regex" in str(exc_info.value)

    def test_length_rule(self):
        rule = length_rule(min_length=2, max_length=4)
        assert rule.check("a") is False
        assert rule.check("ab") is True
        assert rule.check("abcd") is True
        assert rule.check("abcde") is False

    def test_length_rule_requires_a_bound(self):
        with pytest.raises(FormConfigurationError):
            length_rule()

    def test_range_rule(self):
        rule = range_rule(min_value=0, max_value=120)
        assert rule.check(30) is True
        assert rule.check("30") is True
        assert rule.check(-1) is False
        assert rule.check(121) is False

    def test_range_rule_non_numeric_fails(self):
        rule = range_rule(min_value=0)
        assert rule.check("abc") is False
        assert rule.check("") is False

    @given(st.text())
    def test_property_range_rule_never_raises(self, value):
        rule = range_rule(min_value=0, max_value=10)
        assert rule.check(value) in (True, False)

    def test_build_rule(self):
        rule = build_rule("range", {"min": 1, "max": 5}, "out of range")
        assert rule.message == "out of range"
        assert rule.check(3) is True

    def test_build_rule_unknown_type(self):
        with pytest.raises(FormConfigurationError) as exc_info:
            build_rule("no_such_type")
        assert "Unknown rule type" in str(exc_info.value)

    def test_build_pattern_requires_pattern(self):
        with pytest.raises(FormConfigurationError):
            build_rule("pattern", {})

    @pytest.mark.parametrize("params", [
        {"max": "5"},
        {"min": "3"},
        {"min": True},
        {"max": None, "min": [1]},
    ])
    def test_non_numeric_bounds_rejected(self, params):
        """Bounds that would make the rule raise at check time fail at build time"""
        for rule_type in ("length", "range"):
            with pytest.raises(FormConfigurationError) as exc_info:
                build_rule(rule_type, params)
            assert "must be" in str(exc_info.value)

    def test_length_bounds_must_be_integers(self):
        with pytest.raises(FormConfigurationError):
            length_rule(min_length=1.5)

    def test_range_accepts_float_bounds(self):
        rule = range_rule(min_value=0.5, max_value=1.5)
        assert rule.check("1.0") is True

    def test_reversed_bounds_rejected(self):
        with pytest.raises(FormConfigurationError) as exc_info:
            length_rule(min_length=5, max_length=2)
        assert "greater than" in str(exc_info.value)
        with pytest.raises(FormConfigurationError):
            range_rule(min_value=10, max_value=1)

    def test_equal_bounds_allowed(self):
        rule = length_rule(min_length=3, max_length=3)
        assert rule.check("abc") is True
        assert rule.check("ab") is False

    def test_default_bound_messages(self):
        assert length_rule(min_length=3).message == "Length must be at least 3"
        assert length_rule(max_length=8).message == "Length must be at most 8"
        assert length_rule(min_length=3, max_length=8).message == "Length must be between 3 and 8"
        assert range_rule(max_value=10).message == "Value must be at most 10"
        assert range_rule(min_value=0).message == "Value must be at least 0"

    def test_build_rule_params_must_be_mapping(self):
        with pytest.raises(FormConfigurationError):
            build_rule("range", [1, 5])
