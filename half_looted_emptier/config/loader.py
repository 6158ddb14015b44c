"""
Config loader for Half Looted Emptier.

Reads the JSON configuration file, upgrades it through the migration table,
validates it, and writes it back so new fields appear on disk. A missing file
is created with defaults.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..exceptions import ConfigurationError, create_error_context
from ..structured_logging.enhanced_logging_config import get_logger
from ..utils.error_logging import log_and_raise
from .migration import migrate_config, needs_migration
from .models import EmptierConfig, default_config

logger = get_logger(__name__)


def _read_raw_config(path: Path) -> dict[str, Any]:
    context = create_error_context(operation="load_config")
    context.metadata["config_path"] = str(path)

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        log_and_raise(
            ConfigurationError,
            f"Configuration file is not valid JSON: {e}",
            context=context,
            details={"line": e.lineno, "column": e.colno},
            user_friendly="The configuration file contains errors",
        )
    except OSError as e:
        log_and_raise(
            ConfigurationError,
            f"Configuration file could not be read: {e}",
            context=context,
            user_friendly="The configuration file could not be read",
        )

    if not isinstance(data, dict):
        log_and_raise(
            ConfigurationError,
            "Configuration file must contain a JSON object",
            context=context,
            details={"found_type": type(data).__name__},
            user_friendly="The configuration file contains errors",
        )
    return data


def save_config(config: EmptierConfig, path: Path) -> None:
    """
    Write a configuration to disk with the on-disk key names.

    Args:
        config: Configuration to write
        path: Destination file (parent directories are created)
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_file_dict(), f, indent=2)
        f.write("\n")
    logger.debug("Configuration saved", config_path=str(path))


def load_config(path: Path | str) -> EmptierConfig:
    """
    Load, migrate and validate the plugin configuration.

    Args:
        path: Location of the JSON configuration file

    Returns:
        EmptierConfig: Validated configuration at the current version

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated
    """
    path = Path(path)

    if not path.exists():
        logger.warning("Configuration file not found; writing defaults", config_path=str(path))
        config = default_config()
        save_config(config, path)
        return config

    data = _read_raw_config(path)
    if needs_migration(data):
        data = migrate_config(data)

    try:
        config = EmptierConfig.model_validate(data)
    except ValidationError as e:
        first_error = e.errors()[0]
        config_key = ".".join(str(part) for part in first_error.get("loc", ()))
        log_and_raise(
            ConfigurationError,
            f"Invalid configuration: {first_error.get('msg', str(e))}",
            context=create_error_context(operation="load_config"),
            details={"errors": e.errors(include_url=False, include_context=False)},
            user_friendly="The configuration file contains invalid values",
            config_key=config_key or None,
        )

    save_config(config, path)
    logger.info(
        "Configuration loaded",
        config_path=str(path),
        trigger_mode=config.emptying_trigger_mode.value,
        threshold=config.number_of_items_to_trigger_emptying,
        delay_seconds=config.delay_before_emptying_container_seconds,
        remove_items=config.remove_items_instead_of_dropping,
    )
    return config
