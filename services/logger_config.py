# services/logger_config.py
import logging
from logging.handlers import RotatingFileHandler
import os
from typing import Optional

from config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'


def _file_handler(path: str, formatter: logging.Formatter) -> Optional[logging.Handler]:
    """Rotating file handler (5MB x 5), or None when the path is unusable."""
    try:
        log_dir = os.path.dirname(path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handler = RotatingFileHandler(path, maxBytes=5 * 1024 * 1024, backupCount=5)
    except OSError as e:
        print(f"Error setting up file logger: {e}")
        return None
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the application logger once per process.

    Console and file handlers share one format. Re-running replaces the
    handlers instead of stacking duplicates.
    """
    logger = logging.getLogger(settings.LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    file_handler = _file_handler(log_file or settings.LOG_FILE_PATH, formatter)
    if file_handler is not None:
        logger.addHandler(file_handler)

    logger.info(
        f"Logging configured (level={logging.getLevelName(logger.level)}, "
        f"database={settings.DATABASE_URL}, dimensions={settings.EMBEDDING_DIMENSIONS})"
    )
    return logger
