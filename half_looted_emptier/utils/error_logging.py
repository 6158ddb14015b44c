"""
Error logging utilities for Half Looted Emptier.

Provides a single log-then-raise helper so configuration failures are
reported with the same structured context everywhere.
"""

from typing import Any, NoReturn

from ..exceptions import ErrorContext, HalfLootedEmptierError, create_error_context
from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


def log_and_raise(
    exception_class: type[HalfLootedEmptierError],
    message: str,
    context: ErrorContext | None = None,
    details: dict[str, Any] | None = None,
    user_friendly: str | None = None,
    logger_name: str | None = None,
    **exception_kwargs: Any,
) -> NoReturn:
    """
    Log an error and raise a Half Looted Emptier exception.

    Args:
        exception_class: The exception class to raise
        message: Technical error message
        context: Error context information
        details: Additional error details
        user_friendly: Operator-facing error message
        logger_name: Specific logger name to use (defaults to current module)
        **exception_kwargs: Extra keyword arguments for the exception (e.g. config_key)

    Raises:
        The specified exception
    """
    error_logger = get_logger(logger_name) if logger_name else logger

    if context is None:
        context = create_error_context()

    error_logger.error(
        f"Error logged and exception raised: {message}",
        error_type=exception_class.__name__,
        details=details or {},
        user_friendly=user_friendly,
    )

    raise exception_class(
        message,
        context=context,
        details=details,
        user_friendly=user_friendly,
        **exception_kwargs,
    )
