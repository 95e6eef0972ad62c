"""
Pytest configuration for unit tests.

Provides sample EBP documents and isolation for global logging and
error handler state.
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from ebp_reader.utils import error_handler as error_handler_module
from ebp_reader.utils.error_handler import ErrorHandler

from .helpers import SAMPLE_EBP


@pytest.fixture
def sample_ebp():
    """Complete project document with units, schemas, components, alarms and memory."""
    return SAMPLE_EBP


@pytest.fixture
def sample_ebp_file(tmp_path):
    """SAMPLE_EBP written to disk."""
    path = tmp_path / "project.ebp"
    path.write_text(SAMPLE_EBP, encoding="utf-8")
    return path


@pytest.fixture
def error_handler(monkeypatch):
    """Fresh process-wide error handler for one test."""
    handler = ErrorHandler()
    monkeypatch.setattr(error_handler_module, "_error_handler", handler)
    return handler


@pytest.fixture
def restore_logging():
    """Remove handlers installed by setup_logger() and restore the root level."""
    root = logging.getLogger()
    saved_level = root.level
    yield
    # pytest's own capture handlers are subclasses and are managed by pytest
    for handler in list(root.handlers):
        if isinstance(handler, RotatingFileHandler) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
