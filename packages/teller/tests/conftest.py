"""
Pytest configuration for teller tests.
"""

import sys

import pytest
from loguru import logger

from teller.register import Register


@pytest.fixture
def register() -> Register:
    """Fresh register with the default 1, 5, 10, 20 chain."""
    return Register()


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def reset_loguru():
    """Restore the default loguru sink after tests that reconfigure logging."""
    yield
    logger.remove()
    logger.add(sys.stderr)
