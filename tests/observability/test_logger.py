"""
Test suite for logging configuration.

System role: Verification of stdout logging setup
"""

import logging

import pytest

from backend.observability.logger import NOISY_LOGGERS, configure_logging, get_logger


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    """Test suite for configure_logging()."""

    def test_single_stdout_handler(self, restore_logging) -> None:
        # Act
        configure_logging("debug")
        configure_logging("debug")

        # Assert
        assert len(restore_logging.handlers) == 1
        assert restore_logging.level == logging.DEBUG

    def test_noisy_loggers_are_quietened(self, restore_logging) -> None:
        configure_logging("INFO")

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_sql_echo_controls_engine_logger(self, restore_logging) -> None:
        configure_logging("INFO", echo_sql=False)

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_get_logger_returns_named_logger(self) -> None:
        assert get_logger("backend.test").name == "backend.test"
