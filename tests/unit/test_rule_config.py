"""
Unit tests for form configuration loading and building.
"""

import pytest
import tempfile
from pathlib import Path

from formcheck.core.errors import FormConfigurationError
from formcheck.core.models import Rule
from formcheck.core.rules import FormConfigBuilder, FormConfigLoader, parse_form_config


def write_config(content: str) -> Path:
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    f.write(content)
    f.close()
    return Path(f.name)


class TestFormConfigLoader:
    """Tests for FormConfigLoader"""

    def test_load_full_config(self):
        path = write_config("""
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
""")
        try:
            config = FormConfigLoader(path).load()
        finally:
            path.unlink()

        assert config.should_disable_submit is True
        assert [f.name for f in config.fields] == ["email", "zip"]
        assert config.fields[0].rules == ["required", "email"]
        assert config.fields[0].messages == {"required": "Email is required"}
        assert config.rules["postal_code"].message == "Use the format 123-4567"
        assert config.rules["postal_code"].check("123-4567") is True

    def test_fields_as_mapping(self):
        config = parse_form_config({
            "fields": {
                "email": ["required", "email"],
                "name": {"rules": ["required"], "messages": {"required": "Name please"}},
            }
        })

        assert [f.name for f in config.fields] == ["email", "name"]
        assert config.fields[1].messages == {"required": "Name please"}

    def test_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            FormConfigLoader("/nonexistent/form.yaml")

    def test_missing_fields_section(self):
        path = write_config("rules: {}\n")
        try:
            with pytest.raises(FormConfigurationError) as exc_info:
                FormConfigLoader(path).load()
        finally:
            path.unlink()
        assert "fields" in str(exc_info.value)

    def test_invalid_yaml(self):
        path = write_config("fields: [unclosed\n")
        try:
            with pytest.raises(FormConfigurationError) as exc_info:
                FormConfigLoader(path).load()
        finally:
            path.unlink()
        assert "Invalid YAML" in str(exc_info.value)

    def test_rule_without_type(self):
        with pytest.raises(FormConfigurationError) as exc_info:
            parse_form_config({"fields": [], "rules": {"zip": {"params": {}}}})
        assert "missing 'type'" in str(exc_info.value)

    def test_unknown_rule_type(self):
        with pytest.raises(FormConfigurationError):
            parse_form_config({"fields": [], "rules": {"zip": {"type": "telepathy"}}})

    def test_field_without_name(self):
        with pytest.raises(FormConfigurationError):
            parse_form_config({"fields": [{"rules": ["required"]}]})

    def test_malformed_messages_rejected(self):
        with pytest.raises(FormConfigurationError):
            parse_form_config({"fields": [{"name": "x", "messages": ["not", "a", "mapping"]}]})

    def test_non_string_message_override_rejected(self):
        with pytest.raises(FormConfigurationError) as exc_info:
            parse_form_config({"fields": [{"name": "email", "messages": {"required": 5}}]})
        assert "email" in str(exc_info.value)

    def test_non_string_rule_message_rejected(self):
        with pytest.raises(FormConfigurationError):
            parse_form_config({"fields": [], "rules": {"short": {"type": "length", "params": {"max": 3}, "message": 7}}})

    def test_field_rules_must_be_a_list(self):
        with pytest.raises(FormConfigurationError):
            parse_form_config({"fields": [{"name": "email", "rules": 5}]})

    def test_single_rule_name_accepted(self):
        config = parse_form_config({"fields": [{"name": "email", "rules": "required"}]})
        assert config.fields[0].rules == ["required"]

    def test_quoted_bound_rejected_before_initialize(self):
        """A string bound never reaches a form, where it would raise on first check"""
        path = write_config("""
rules:
  short:
    type: length
    params:
      max: "5"
fields:
  - name: username
    rules: [short]
""")
        try:
            with pytest.raises(FormConfigurationError) as exc_info:
                FormConfigLoader(path).load()
        finally:
            path.unlink()
        assert "'max'" in str(exc_info.value)

    def test_to_options(self):
        def action(messages):
            pass

        config = parse_form_config({
            "options": {"should_disable_submit": True},
            "rules": {"short": {"type": "length", "params": {"max": 3}}},
            "fields": [],
        })
        options = config.to_options(default_action=action)

        assert options.should_disable_submit is True
        assert options.default_action is action
        assert "short" in options.additional_rules


class TestFormConfigBuilder:
    """Tests for FormConfigBuilder"""

    def test_build(self):
        rule = Rule(message="m", logic=lambda v: True)
        config = FormConfigBuilder() \
            .add_field("email", "required", "email", messages={"email": "Bad email"}) \
            .add_field("nickname") \
            .add_rule("anything", rule) \
            .disable_submit_when_invalid() \
            .build()

        assert [f.name for f in config.fields] == ["email", "nickname"]
        assert config.fields[0].rules == ["required", "email"]
        assert config.fields[1].rules == []
        assert config.rules == {"anything": rule}
        assert config.should_disable_submit is True
