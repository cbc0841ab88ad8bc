"""
Root Pytest Fixtures.

Shared fixtures available to all test types.
"""

import logging
from collections.abc import Generator

import pytest

from shortener.core import logging as logging_module
from shortener.core.config import get_app_config


@pytest.fixture(autouse=True)
def _clear_config_cache() -> Generator[None, None, None]:
    """Clear cached configuration so each test gets a fresh load."""
    get_app_config.cache_clear()
    logging_module._logging_config = None
    yield
    get_app_config.cache_clear()
    logging_module._logging_config = None


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Put the root logger's handlers and level back after a test that reconfigures it."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
