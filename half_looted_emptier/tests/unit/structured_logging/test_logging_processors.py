"""
Unit tests for the structured logging setup.
"""

import uuid

import pytest

from half_looted_emptier import __title__, __version__
from half_looted_emptier.config.models import PluginSettings
from half_looted_emptier.structured_logging import enhanced_logging_config
from half_looted_emptier.structured_logging.enhanced_logging_config import (
    detect_environment,
    setup_logging,
    strip_ansi_renderer,
)
from half_looted_emptier.structured_logging.logging_processors import add_plugin_context, stringify_identifiers


@pytest.fixture
def fresh_logging_state(monkeypatch):
    """Make setup_logging behave as if it had never run."""
    monkeypatch.setattr(enhanced_logging_config._logging_state, "initialized", False)
    monkeypatch.setattr(enhanced_logging_config._logging_state, "signature", None)
    return enhanced_logging_config._logging_state


def test_add_plugin_context_stamps_metadata():
    """Entries carry the plugin name and version."""
    event_dict = add_plugin_context(None, "info", {"event": "x"})

    assert event_dict["plugin"] == __title__
    assert event_dict["plugin_version"] == __version__


def test_add_plugin_context_keeps_explicit_values():
    """Values already on the entry are not overwritten."""
    event_dict = add_plugin_context(None, "info", {"event": "x", "plugin": "other"})

    assert event_dict["plugin"] == "other"


def test_stringify_identifiers_converts_host_ids():
    """Container and player ids render as strings."""
    player_id = uuid.uuid4()
    event_dict = stringify_identifiers(None, "info", {"container_id": 42, "player_id": player_id, "count": 3})

    assert event_dict["container_id"] == "42"
    assert event_dict["player_id"] == str(player_id)
    assert event_dict["count"] == 3


def test_stringify_identifiers_leaves_missing_ids_alone():
    """Absent or None identifiers are not added."""
    event_dict = stringify_identifiers(None, "info", {"event": "x", "container_id": None})

    assert event_dict["container_id"] is None
    assert "player_id" not in event_dict


def test_strip_ansi_renderer_removes_escape_sequences():
    """Rendered output has no terminal color codes."""
    rendered = strip_ansi_renderer(None, "info", {"event": "\x1b[31mred\x1b[0m", "level": "info"})

    assert "\x1b" not in rendered
    assert "red" in rendered


def test_detect_environment_under_pytest():
    """Running under pytest is always the unit_test environment."""
    assert detect_environment() == "unit_test"


def test_setup_logging_is_idempotent(fresh_logging_state, mocker):
    """A second setup_logging call does not reconfigure."""
    configure = mocker.patch.object(enhanced_logging_config, "configure_structlog")
    settings = PluginSettings(environment="unit_test", log_level="DEBUG")

    setup_logging(settings)
    setup_logging(settings)

    configure.assert_called_once_with("unit_test", "DEBUG", None)
    assert fresh_logging_state.initialized


def test_setup_logging_force_reconfigure(fresh_logging_state, mocker):
    """force_reconfigure reinstalls the configuration."""
    configure = mocker.patch.object(enhanced_logging_config, "configure_structlog")
    settings = PluginSettings(environment="unit_test", log_level="INFO")

    setup_logging(settings)
    setup_logging(settings, force_reconfigure=True)

    assert configure.call_count == 2
