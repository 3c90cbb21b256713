import logging
from datetime import date

from logger import LOGGER_NAME, get_logger, log_file_path, setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_creates_dated_log_file(self, test_config):
        """Test that records land in today's log file."""
        logger = setup_logging(test_config)
        try:
            logger.info("hello from the ledger")
            for handler in logger.handlers:
                handler.flush()

            path = log_file_path(test_config)
            assert path.parent == test_config.log_dir
            assert "hello from the ledger" in path.read_text()
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()

    def test_repeat_calls_do_not_stack_handlers(self, test_config):
        """Test that calling setup twice keeps one file and one console handler."""
        setup_logging(test_config)
        logger = setup_logging(test_config)
        try:
            assert len(logger.handlers) == 2
            assert logger.level == logging.DEBUG
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()

    def test_get_logger_returns_configured_logger(self, test_config):
        logger = setup_logging(test_config)
        try:
            assert get_logger() is logger
            assert logger.name == LOGGER_NAME
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()


def test_log_file_path_for_given_day(test_config):
    path = log_file_path(test_config, date(2024, 3, 9))

    assert path == test_config.log_dir / "finflow-2024-03-09.log"
