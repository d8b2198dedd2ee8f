"""pytest configuration and fixtures for formbox tests."""

import os

import pytest

# Widget tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from formbox.protocols.form_config import set_form_config
from formbox.protocols.schema_provider import register_schema_provider


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def reset_globals():
    """Restore the global form config and schema provider after each test."""
    yield
    set_form_config(None)
    register_schema_provider(None)
