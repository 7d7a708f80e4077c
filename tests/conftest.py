"""Pytest configuration shared by all flagspec tests.

Ensures:
1. Structured logging state does not leak between tests
2. Message catalogs are restored after tests that register their own
"""

import logging

import pytest
import structlog

from flagspec.core.logging import clear_context
from flagspec.validation import messages


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging() calls made by CLI tests."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()
    clear_context()


@pytest.fixture
def isolated_catalogs(monkeypatch):
    """Let a test register message catalogs without touching the global table."""
    monkeypatch.setattr(messages, "_CATALOGS", dict(messages._CATALOGS))
    return messages
