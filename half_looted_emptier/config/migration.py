"""
Configuration migration for Half Looted Emptier.

Stored configs carry the plugin version that wrote them. When an older file
is loaded, every migration whose threshold version is above the stored
version runs in order, then the record is stamped with the current version.
Migrations work on the raw on-disk dict, before validation.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from packaging.version import InvalidVersion, Version

from .. import __version__
from ..exceptions import ConfigMigrationError, create_error_context
from ..structured_logging.enhanced_logging_config import get_logger
from ..utils.error_logging import log_and_raise
from .models import default_config

logger = get_logger(__name__)

_UNVERSIONED = Version("0.0.0")


@dataclass(frozen=True)
class ConfigMigration:
    """A single upgrade step applied to configs older than below_version."""

    below_version: Version
    description: str
    apply: Callable[[dict[str, Any]], dict[str, Any]]


def _reset_to_defaults(_data: dict[str, Any]) -> dict[str, Any]:
    return default_config().to_file_dict()


def _reset_trigger_settings(data: dict[str, Any]) -> dict[str, Any]:
    defaults = default_config().to_file_dict()
    migrated = dict(data)
    migrated["Emptying Trigger Mode"] = defaults["Emptying Trigger Mode"]
    migrated["Number Of Items To Trigger Emptying"] = defaults["Number Of Items To Trigger Emptying"]
    return migrated


CONFIG_MIGRATIONS: tuple[ConfigMigration, ...] = (
    ConfigMigration(Version("1.0.0"), "Pre-release config; replace with defaults", _reset_to_defaults),
    ConfigMigration(Version("1.1.0"), "Add trigger mode and item threshold", _reset_trigger_settings),
)


def parse_config_version(raw: Any) -> Version:
    """
    Parse the version stored in a config record.

    Missing or malformed versions are treated as 0.0.0 so every migration runs.
    """
    if raw is None:
        return _UNVERSIONED
    try:
        return Version(str(raw))
    except InvalidVersion:
        logger.warning("Invalid config version; treating as unversioned", version=str(raw))
        return _UNVERSIONED


def needs_migration(data: dict[str, Any], current_version: str = __version__) -> bool:
    """Return True when the stored config predates current_version."""
    return parse_config_version(data.get("Version")) < Version(current_version)


def migrate_config(data: dict[str, Any], current_version: str = __version__) -> dict[str, Any]:
    """
    Upgrade a raw config record to current_version.

    Args:
        data: Raw config dict as read from disk
        current_version: Version to migrate to (the plugin version)

    Returns:
        dict: Migrated record (a new dict; data is not modified)

    Raises:
        ConfigMigrationError: If a migration step fails
    """
    stored_version = data.get("Version")
    from_version = parse_config_version(stored_version)
    target_version = Version(current_version)

    if from_version >= target_version:
        return dict(data)

    logger.warning("Config changes detected! Updating...", from_version=str(stored_version))

    migrated = dict(data)
    for migration in CONFIG_MIGRATIONS:
        if from_version >= migration.below_version or migration.below_version > target_version:
            continue
        try:
            migrated = migration.apply(migrated)
        except (KeyError, TypeError, ValueError) as e:
            context = create_error_context(operation="migrate_config")
            context.metadata["migration"] = migration.description
            log_and_raise(
                ConfigMigrationError,
                f"Config migration failed: {migration.description}: {e}",
                context=context,
                details={"below_version": str(migration.below_version)},
                user_friendly="The configuration file could not be upgraded",
                from_version=str(stored_version),
            )
        logger.debug("Config migration applied", migration=migration.description)

    migrated["Version"] = current_version
    logger.warning(
        "Config update complete!",
        from_version=str(stored_version),
        to_version=current_version,
    )
    return migrated
