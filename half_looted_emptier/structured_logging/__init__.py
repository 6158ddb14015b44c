"""
Structured logging package for Half Looted Emptier.

All imports should use explicit paths like
'from half_looted_emptier.structured_logging.enhanced_logging_config import get_logger'.

The directory is named 'structured_logging' rather than 'logging' so it never
shadows the standard library module.
"""

__all__ = []
