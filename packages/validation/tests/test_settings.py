"""Tests for validation settings."""

import json

import pytest

from dataknobs_validation.exceptions import SettingsError
from dataknobs_validation.settings import ValidationSettings, get_settings


class TestValidationSettings:
    """Test settings construction."""

    def test_defaults(self):
        """Defaults match the documented behavior."""
        settings = ValidationSettings()
        assert settings.invalid_input_message == "Error: cannot validate object: {value}"
        assert settings.strict_schema is True
        assert settings.log_failures is True

    def test_format_invalid_input(self):
        """The template receives the stringified input."""
        assert ValidationSettings().format_invalid_input(123) == "Error: cannot validate object: 123"

    def test_bad_template(self):
        """Templates must only use the value placeholder."""
        with pytest.raises(SettingsError):
            ValidationSettings(invalid_input_message="{missing}")

    def test_template_attribute_access_rejected(self):
        """Attribute lookups on the value are reported as SettingsError."""
        with pytest.raises(SettingsError):
            ValidationSettings(invalid_input_message="{value.nope}")

    def test_format_spec_applies_to_stringified_input(self):
        """String format specs work for any input type."""
        settings = ValidationSettings(invalid_input_message="cannot validate object: {value:s}")
        assert settings.format_invalid_input(123) == "cannot validate object: 123"
        assert settings.format_invalid_input(None) == "cannot validate object: None"

    def test_bad_boolean(self):
        """Boolean settings reject other types."""
        with pytest.raises(SettingsError):
            ValidationSettings(strict_schema="yes")

    def test_from_dict(self):
        """Flat dictionaries are accepted."""
        settings = ValidationSettings.from_dict({"strict_schema": False})
        assert settings.strict_schema is False
        assert settings.log_failures is True

    def test_from_dict_section(self):
        """A validation section is unwrapped."""
        settings = ValidationSettings.from_dict({"validation": {"log_failures": False}})
        assert settings.log_failures is False

    def test_from_dict_unknown_key(self):
        """Unknown keys are reported."""
        with pytest.raises(SettingsError) as exc_info:
            ValidationSettings.from_dict({"strict": True})
        assert exc_info.value.context["unknown"] == ["strict"]

    def test_round_trip(self):
        """to_dict feeds back into from_dict."""
        settings = ValidationSettings(log_failures=False)
        assert ValidationSettings.from_dict(settings.to_dict()) == settings

    def test_merge(self):
        """merge returns new settings."""
        settings = ValidationSettings()
        merged = settings.merge({"strict_schema": False})
        assert merged.strict_schema is False
        assert settings.strict_schema is True


class TestEnvironmentOverrides:
    """Test environment variable overrides."""

    def test_boolean_override(self, env_vars, clear_env):
        """Boolean values are parsed."""
        env_vars(DATAKNOBS_VALIDATION_STRICT_SCHEMA="false", DATAKNOBS_VALIDATION_LOG_FAILURES="no")
        settings = ValidationSettings.from_env()
        assert settings.strict_schema is False
        assert settings.log_failures is False

    def test_message_override_kept_as_string(self, env_vars, clear_env):
        """The message is never parsed as another type."""
        env_vars(DATAKNOBS_VALIDATION_INVALID_INPUT_MESSAGE="1")
        assert ValidationSettings.from_env().invalid_input_message == "1"

    def test_unknown_variables_ignored(self, env_vars, clear_env):
        """Variables for unknown settings do not fail."""
        env_vars(DATAKNOBS_VALIDATION_SOMETHING_ELSE="x")
        assert ValidationSettings.from_env() == ValidationSettings()

    def test_invalid_value(self, env_vars, clear_env):
        """Values of the wrong type are rejected."""
        env_vars(DATAKNOBS_VALIDATION_STRICT_SCHEMA="maybe")
        with pytest.raises(SettingsError):
            ValidationSettings.from_env()

    def test_custom_prefix(self, env_vars):
        """A custom prefix can be used."""
        env_vars(MYAPP_STRICT_SCHEMA="0")
        assert ValidationSettings.from_env(prefix="MYAPP_").strict_schema is False

    def test_overrides_base(self, env_vars, clear_env):
        """Environment values apply on top of a base."""
        env_vars(DATAKNOBS_VALIDATION_LOG_FAILURES="true")
        base = ValidationSettings(strict_schema=False, log_failures=False)
        settings = ValidationSettings.from_env(base=base)
        assert settings.strict_schema is False
        assert settings.log_failures is True

    def test_get_settings_cached(self, env_vars, clear_env):
        """get_settings reads the environment once."""
        env_vars(DATAKNOBS_VALIDATION_LOG_FAILURES="false")
        first = get_settings()
        env_vars(DATAKNOBS_VALIDATION_LOG_FAILURES="true")
        assert get_settings() is first
        assert first.log_failures is False


class TestSettingsFiles:
    """Test loading settings from files."""

    def test_yaml_file(self, temp_dir):
        """YAML files are read with a validation section."""
        path = temp_dir / "settings.yaml"
        path.write_text("validation:\n  strict_schema: false\n  invalid_input_message: 'bad: {value}'\n")

        settings = ValidationSettings.from_file(path)

        assert settings.strict_schema is False
        assert settings.format_invalid_input(1) == "bad: 1"

    def test_json_file(self, temp_dir):
        """JSON files are supported."""
        path = temp_dir / "settings.json"
        path.write_text(json.dumps({"log_failures": False}))

        assert ValidationSettings.from_file(path).log_failures is False

    def test_empty_yaml_file(self, temp_dir):
        """An empty file gives defaults."""
        path = temp_dir / "empty.yml"
        path.write_text("")

        assert ValidationSettings.from_file(path) == ValidationSettings()

    def test_missing_file(self, temp_dir):
        """Missing files raise SettingsError."""
        with pytest.raises(SettingsError):
            ValidationSettings.from_file(temp_dir / "nope.yaml")

    def test_unsupported_extension(self, temp_dir):
        """Only YAML and JSON are understood."""
        path = temp_dir / "settings.ini"
        path.write_text("[validation]\n")

        with pytest.raises(SettingsError):
            ValidationSettings.from_file(path)

    def test_non_mapping_file(self, temp_dir):
        """The file must hold a mapping."""
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(SettingsError):
            ValidationSettings.from_file(path)
