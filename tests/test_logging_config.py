"""
Unit tests for wifimanager/logging_config.py
"""

import logging

import pytest

from wifimanager import config, logging_config


def console_handler():
    return next(h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler)


@pytest.mark.unit
class TestLoggingSetup:
    def test_console_shows_warnings_by_default(self):
        logging_config.setup_logging(debug=False, force_reinit=True)

        assert console_handler().level == logging.WARNING
        assert not logging_config.is_debug_enabled()

    def test_file_always_records_debug(self):
        logging_config.setup_logging(debug=False, force_reinit=True)

        logging_config.get_logger("wifimanager.tests").debug("scan details")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "scan details" in config.LOG_FILE.read_text()

    def test_set_debug_changes_console_level(self):
        logging_config.setup_logging(debug=False, force_reinit=True)

        logging_config.set_debug(True)
        assert console_handler().level == logging.DEBUG
        assert logging_config.is_debug_enabled()

        logging_config.set_debug(False)
        assert console_handler().level == logging.WARNING

    def test_repeat_setup_only_adjusts_debug(self):
        logging_config.setup_logging(debug=False, force_reinit=True)
        handlers = list(logging.getLogger().handlers)

        logging_config.setup_logging(debug=True)

        assert logging.getLogger().handlers == handlers
        assert console_handler().level == logging.DEBUG

    def test_get_logger_installs_nothing(self):
        before = list(logging.getLogger().handlers)

        logging_config.get_logger("wifimanager.tests")

        assert logging.getLogger().handlers == before
