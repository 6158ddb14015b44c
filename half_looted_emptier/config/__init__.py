"""
Configuration module for Half Looted Emptier.

Runtime settings come from HALF_LOOTED_EMPTIER_* environment variables via
Pydantic BaseSettings; the plugin's own tunables live in a versioned JSON file
handled by the loader.

Usage:
    from half_looted_emptier.config import get_settings, load_config

    settings = get_settings()
    config = load_config(settings.config_path)
"""

import sys
import threading
from functools import lru_cache
from os import getenv

from .loader import load_config, save_config
from .models import EmptierConfig, PluginSettings, default_config

__all__ = [
    "EmptierConfig",
    "PluginSettings",
    "default_config",
    "get_settings",
    "load_config",
    "reset_settings",
    "save_config",
]

_settings_instance: PluginSettings | None = None
_settings_lock = threading.Lock()


def _is_test_mode() -> bool:
    """Detect pytest execution so tests always see fresh settings."""
    if "pytest" in sys.modules:
        return True
    return bool(getenv("PYTEST_CURRENT_TEST"))


@lru_cache(maxsize=1)
def _get_settings_cached() -> PluginSettings:
    """Production settings loader with caching."""
    global _settings_instance  # pylint: disable=global-statement  # Reason: process-wide settings singleton
    with _settings_lock:
        if _settings_instance is None:
            _settings_instance = PluginSettings()
    return _settings_instance


def get_settings() -> PluginSettings:
    """
    Get runtime settings (singleton in production, fresh in tests).

    Returns:
        PluginSettings: Settings loaded from the environment

    Raises:
        ValidationError: If an environment value is invalid
    """
    if _is_test_mode():
        return PluginSettings()
    return _get_settings_cached()


def reset_settings() -> None:
    """Clear the cached settings so the next get_settings() rereads the environment."""
    global _settings_instance  # pylint: disable=global-statement  # Reason: process-wide settings singleton
    with _settings_lock:
        _get_settings_cached.cache_clear()
        _settings_instance = None
