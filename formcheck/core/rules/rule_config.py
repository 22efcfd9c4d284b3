"""
Form configuration management.

Loads field configurations and named rules from YAML files and provides
a builder for assembling the same configuration in code.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List

import yaml
from pydantic import BaseModel, Field, ValidationError

from formcheck.core.errors import FormConfigurationError
from formcheck.core.models import FieldConfig, InitOptions, InvalidAction, Rule

from .rule_factories import build_rule


class FormConfig(BaseModel):
    """
    Complete configuration of one form.

    Attributes:
        fields: Field configurations, in registration order
        rules: Named rules merged into the registry at initialization
        should_disable_submit: Whether the submit control follows form validity
    """

    fields: List[FieldConfig] = Field(default_factory=list)
    rules: Dict[str, Rule] = Field(default_factory=dict)
    should_disable_submit: bool = False

    def to_options(
        self,
        default_action: InvalidAction | None = None,
        submit_action: Callable[[], None] | None = None,
    ) -> InitOptions:
        """Build InitOptions, adding the callables YAML cannot express."""
        options: dict[str, Any] = {
            "additional_rules": dict(self.rules),
            "should_disable_submit": self.should_disable_submit,
            "submit_action": submit_action,
        }
        if default_action is not None:
            options["default_action"] = default_action
        return InitOptions(**options)


class FormConfigLoader:
    """
    Loads a form configuration from a YAML file.

    Expected YAML format:
    ```yaml
    options:
      should_disable_submit: true

    rules:
      postal_code:
        type: pattern
        params:
          pattern: "^[0-9]{3}-[0-9]{4}$"
        message: "Use the format 123-4567"

    fields:
      - name: email
        rules: [required, email]
        messages:
          required: "Email is required"
      - name: zip
        rules: [postal_code]
    ```

    `fields` may also be a mapping of field name to a list of rule names.
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the form config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Form configuration file not found: {config_path}")

    def load(self) -> FormConfig:
        """
        Load and parse the form configuration.

        Returns:
            FormConfig ready to feed FormValidator.initialize

        Raises:
            FormConfigurationError: If YAML is invalid or sections are malformed
        """
        try:
            with open(self.config_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise FormConfigurationError(f"Invalid YAML in {self.config_path}: {e}")

        return parse_form_config(config)


def parse_form_config(config: Any) -> FormConfig:
    """
    Parse an already-loaded configuration document.

    Raises:
        FormConfigurationError: If the document is malformed
    """
    if not isinstance(config, dict) or "fields" not in config:
        raise FormConfigurationError("Configuration must contain a 'fields' section")

    options = config.get("options") or {}
    if not isinstance(options, dict):
        raise FormConfigurationError("'options' must be a mapping")

    return FormConfig(
        fields=_parse_fields(config["fields"]),
        rules=_parse_rules(config.get("rules") or {}),
        should_disable_submit=bool(options.get("should_disable_submit", False)),
    )


def _parse_fields(fields: Any) -> list[FieldConfig]:
    if isinstance(fields, dict):
        entries = []
        for name, field_def in fields.items():
            if isinstance(field_def, list):
                entries.append({"name": name, "rules": field_def})
            elif isinstance(field_def, dict):
                entries.append({"name": name, **field_def})
            else:
                raise FormConfigurationError(f"Rules for field '{name}' must be a list or mapping")
    elif isinstance(fields, list):
        entries = fields
    else:
        raise FormConfigurationError("'fields' must be a list or mapping")

    parsed = []
    for entry in entries:
        if not isinstance(entry, dict) or "name" not in entry:
            raise FormConfigurationError(f"Field entry is missing 'name': {entry!r}")
        rules = entry.get("rules") or []
        if isinstance(rules, str):
            rules = [rules]
        elif not isinstance(rules, list):
            raise FormConfigurationError(f"Rules for field '{entry['name']}' must be a list")
        try:
            parsed.append(
                FieldConfig(
                    name=entry["name"],
                    rules=list(rules),
                    messages=entry.get("messages"),
                )
            )
        except ValidationError as e:
            raise FormConfigurationError(f"Invalid configuration for field '{entry['name']}': {e}")
    return parsed


def _parse_rules(rules: Any) -> dict[str, Rule]:
    if not isinstance(rules, dict):
        raise FormConfigurationError("'rules' must be a mapping of rule name to definition")

    parsed = {}
    for name, rule_def in rules.items():
        if not isinstance(rule_def, dict) or "type" not in rule_def:
            raise FormConfigurationError(f"Rule '{name}' is missing 'type'")
        parameters = rule_def.get("params", rule_def.get("parameters", {}))
        message = rule_def.get("message", "")
        if not isinstance(message, str):
            raise FormConfigurationError(f"Message of rule '{name}' must be a string, got {message!r}")
        parsed[name] = build_rule(rule_def["type"], parameters, message)
    return parsed


class FormConfigBuilder:
    """
    Programmatically build form configurations (for testing or dynamic forms).
    """

    def __init__(self):
        """Initialize empty form configuration."""
        self.fields: list[FieldConfig] = []
        self.rules: dict[str, Rule] = {}
        self.should_disable_submit = False

    def add_field(
        self,
        name: str,
        *rule_names: str,
        messages: dict[str, str] | None = None,
        on_invalid: InvalidAction | None = None,
    ) -> "FormConfigBuilder":
        """Add a field validated by rule_names, in order."""
        self.fields.append(
            FieldConfig(name=name, rules=list(rule_names), messages=messages, on_invalid=on_invalid)
        )
        return self

    def add_rule(self, name: str, rule: Rule) -> "FormConfigBuilder":
        """Add a named rule."""
        self.rules[name] = rule
        return self

    def disable_submit_when_invalid(self, enabled: bool = True) -> "FormConfigBuilder":
        self.should_disable_submit = enabled
        return self

    def build(self) -> FormConfig:
        """Build and return the form configuration."""
        return FormConfig(
            fields=list(self.fields),
            rules=dict(self.rules),
            should_disable_submit=self.should_disable_submit,
        )
