"""
Unit tests for the error hierarchy and the log-and-raise helper.
"""

import pytest

from half_looted_emptier.exceptions import (
    ConfigMigrationError,
    ConfigurationError,
    ErrorContext,
    HalfLootedEmptierError,
    create_error_context,
)
from half_looted_emptier.utils.error_logging import log_and_raise


def test_error_context_to_dict():
    """Context serializes every field, timestamp as ISO text."""
    context = create_error_context(container_id="42", operation="load_config", metadata={"path": "x.json"})

    data = context.to_dict()

    assert data["container_id"] == "42"
    assert data["player_id"] is None
    assert data["operation"] == "load_config"
    assert data["metadata"] == {"path": "x.json"}
    assert isinstance(data["timestamp"], str)


def test_base_error_defaults():
    """Missing context and user message fall back to defaults."""
    error = HalfLootedEmptierError("boom")

    assert str(error) == "boom"
    assert isinstance(error.context, ErrorContext)
    assert error.details == {}
    assert error.user_friendly == "boom"


def test_error_to_dict():
    """to_dict reports the concrete error type and its details."""
    error = ConfigurationError("bad value", config_key="Number Of Items To Trigger Emptying")

    data = error.to_dict()

    assert data["error_type"] == "ConfigurationError"
    assert data["details"] == {"config_key": "Number Of Items To Trigger Emptying"}
    assert error.config_key == "Number Of Items To Trigger Emptying"


def test_migration_error_is_configuration_error():
    """Migration failures are configuration errors that remember the old version."""
    error = ConfigMigrationError("cannot upgrade", from_version="0.9.0")

    assert isinstance(error, ConfigurationError)
    assert error.from_version == "0.9.0"
    assert error.details["from_version"] == "0.9.0"


def test_log_and_raise_passes_through_arguments():
    """log_and_raise raises the requested class with context, details and extra kwargs."""
    context = create_error_context(operation="load_config")

    with pytest.raises(ConfigurationError) as exc_info:
        log_and_raise(
            ConfigurationError,
            "Configuration file is not valid JSON",
            context=context,
            details={"path": "config/HalfLootedEmptier.json"},
            user_friendly="Fix the configuration file",
            config_key="Version",
        )

    error = exc_info.value
    assert error.context is context
    assert error.details == {"path": "config/HalfLootedEmptier.json", "config_key": "Version"}
    assert error.user_friendly == "Fix the configuration file"


def test_log_and_raise_creates_context_when_missing():
    """A fresh context is created if none is given."""
    with pytest.raises(HalfLootedEmptierError) as exc_info:
        log_and_raise(HalfLootedEmptierError, "boom", logger_name="tests")

    assert isinstance(exc_info.value.context, ErrorContext)
