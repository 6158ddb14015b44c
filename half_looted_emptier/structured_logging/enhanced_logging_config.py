"""
Structlog-based logging configuration for Half Looted Emptier.

This is the main entry point for the logging system. All plugin modules obtain
their loggers through get_logger() so entries carry structured key/value
context:

    from ..structured_logging.enhanced_logging_config import get_logger
    logger = get_logger(__name__)
    logger.info("Container emptied", container_id=container_id)
"""

import json
import logging
import os
import re
import sys
from pathlib import Path
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.stdlib import BoundLogger, LoggerFactory

from .logging_processors import add_plugin_context, stringify_identifiers

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")

VALID_ENVIRONMENTS = ("unit_test", "local", "production")

# Handlers installed by this module, so reconfiguration can remove only ours
_HANDLER_MARKER = "_half_looted_emptier_handler"


class _LoggingState:  # pylint: disable=too-few-public-methods  # Reason: State container with focused responsibility
    """State container for logging initialization to avoid global statements."""

    initialized: bool = False
    signature: str | None = None


_logging_state = _LoggingState()


def detect_environment() -> str:
    """
    Detect the current environment.

    Returns:
        Environment name: "unit_test", "local", or "production"
    """
    if "pytest" in sys.modules:
        return "unit_test"

    env = os.getenv("HALF_LOOTED_EMPTIER_ENVIRONMENT", "")
    if env in VALID_ENVIRONMENTS:
        return env

    return "local"


def strip_ansi_renderer(bound_logger: Any, name: str, event_dict: dict[str, Any]) -> str:
    """Render key=value output with ANSI escape sequences removed."""
    try:
        formatted = structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"])(
            bound_logger, name, event_dict
        )
        return _ANSI_ESCAPE.sub("", formatted)
    except Exception as e:  # pylint: disable=broad-exception-caught  # Reason: a renderer failure must never take down the host process
        return f"Logging renderer error: {type(e).__name__}: {str(e)}"


def _install_handlers(log_level: str, log_file: Path | None) -> None:
    """Attach stream (and optional file) handlers to the root logger."""
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(handler, _HANDLER_MARKER, True)
        root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def configure_structlog(
    environment: str | None = None,
    log_level: str = "INFO",
    log_file: Path | None = None,
) -> None:
    """
    Configure structlog with the plugin's processor chain.

    Args:
        environment: Environment name (auto-detected if None)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file that receives a copy of every entry
    """
    if environment is None:
        environment = detect_environment()

    _install_handlers(log_level, log_file)

    structlog.configure(
        processors=[
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_plugin_context,
            stringify_identifiers,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            strip_ansi_renderer,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=False,
    )

    structlog.get_logger(__name__).debug(
        "Structlog configured",
        environment=environment,
        log_level=log_level,
        log_file=str(log_file) if log_file else None,
    )


def setup_logging(settings: Any, *, force_reconfigure: bool = False) -> None:
    """
    Set up logging from plugin settings.

    Repeated calls are skipped unless force_reconfigure is set, so the host can
    reload the plugin without stacking handlers.

    Args:
        settings: PluginSettings instance (log_level, environment, log_file)
        force_reconfigure: When True, reinstall handlers even if already configured
    """
    signature = json.dumps(
        {
            "log_level": settings.log_level,
            "environment": settings.environment,
            "log_file": str(settings.log_file) if settings.log_file else None,
        },
        sort_keys=True,
    )

    if _logging_state.initialized and not force_reconfigure:
        get_logger(__name__).debug("setup_logging skipped; already initialized", signature=_logging_state.signature)
        return

    configure_structlog(settings.environment, settings.log_level, settings.log_file)
    get_logger(__name__).info(
        "Logging system initialized",
        environment=settings.environment,
        log_level=settings.log_level,
    )

    _logging_state.initialized = True
    _logging_state.signature = signature


def get_logger(name: str) -> Any:  # Returns BoundLogger but typed as Any for flexibility
    """
    Get a structlog logger with the specified name.

    This is the public API for obtaining loggers. Plugin code should use this
    function rather than calling structlog.get_logger() directly.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)
