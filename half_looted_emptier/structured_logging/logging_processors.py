"""
Logging processors for structlog event processing.

This module provides processors that stamp plugin metadata on every entry and
normalize host identifiers so container ids render consistently.
"""

from typing import Any

from .. import __title__, __version__

# Fields that carry host identifiers; hosts hand us ints, UUIDs or custom types
_IDENTIFIER_FIELDS = ("container_id", "player_id")


def add_plugin_context(_logger: Any, _name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Add plugin name and version to the log entry.

    Args:
        _logger: Logger instance (unused)
        _name: Logger name (unused)
        event_dict: Event dictionary to enrich

    Returns:
        Event dictionary with plugin metadata
    """
    event_dict.setdefault("plugin", __title__)
    event_dict.setdefault("plugin_version", __version__)
    return event_dict


def stringify_identifiers(_logger: Any, _name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Render host identifiers as plain strings.

    Args:
        _logger: Logger instance (unused)
        _name: Logger name (unused)
        event_dict: Event dictionary to normalize

    Returns:
        Event dictionary with identifier fields converted to str
    """
    for key in _IDENTIFIER_FIELDS:
        value = event_dict.get(key)
        if value is not None and not isinstance(value, str):
            event_dict[key] = str(value)
    return event_dict
