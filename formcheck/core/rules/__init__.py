"""
Rule registry, default rules and form configuration management.
"""

from .default_rules import DEFAULT_RULES, EMAIL, EMAIL_PATTERN, REQUIRED
from .registry import RuleRegistry
from .rule_config import FormConfig, FormConfigBuilder, FormConfigLoader, parse_form_config
from .rule_factories import RULE_FACTORIES, build_rule, length_rule, pattern_rule, range_rule

__all__ = [
    "RuleRegistry",
    "DEFAULT_RULES",
    "REQUIRED",
    "EMAIL",
    "EMAIL_PATTERN",
    "FormConfig",
    "FormConfigBuilder",
    "FormConfigLoader",
    "parse_form_config",
    "RULE_FACTORIES",
    "build_rule",
    "pattern_rule",
    "length_rule",
    "range_rule",
]
