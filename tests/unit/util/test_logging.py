"""Unit tests for logging setup."""

import logging

from haven.config import Settings
from haven.util.logging import setup_logging


def test_debug_settings_enable_debug_level():
    level = setup_logging(Settings(debug=True))

    assert level == logging.DEBUG
    assert logging.getLogger("haven").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING


def test_default_level_is_info():
    assert setup_logging(Settings(debug=False)) == logging.INFO
