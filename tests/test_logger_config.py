"""Test suite for logging setup."""

import logging
from logging.handlers import RotatingFileHandler

from config import settings
from services.logger_config import setup_logging


class TestSetupLogging:
    def test_adds_console_and_file_handlers(self, tmp_path) -> None:
        logger = setup_logging(level="debug", log_file=str(tmp_path / "logs" / "app.log"))

        assert logger.name == settings.LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
        assert (tmp_path / "logs" / "app.log").exists()

    def test_repeated_setup_does_not_duplicate_handlers(self, tmp_path) -> None:
        setup_logging(log_file=str(tmp_path / "a.log"))
        logger = setup_logging(log_file=str(tmp_path / "a.log"))

        assert len(logger.handlers) == 2
