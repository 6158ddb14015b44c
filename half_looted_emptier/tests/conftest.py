"""
Test configuration and fixtures for the Half Looted Emptier test suite.
"""

import os
from collections.abc import Generator

import pytest

# Keep settings deterministic regardless of the developer's shell
os.environ.setdefault("HALF_LOOTED_EMPTIER_ENVIRONMENT", "unit_test")
os.environ.setdefault("HALF_LOOTED_EMPTIER_LOG_LEVEL", "DEBUG")

from half_looted_emptier.config import reset_settings  # noqa: E402

pytest_plugins = [
    "half_looted_emptier.tests.fixtures.unit",
]


@pytest.fixture(autouse=True)
def reset_settings_singleton() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    reset_settings()
    yield
    reset_settings()
