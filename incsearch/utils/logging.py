"""Simple logging utilities for incsearch.

Standard Logger Initialization Pattern
--------------------------------------
Modules use the standard Python pattern:

    import logging
    logger = logging.getLogger(__name__)

The application entry points call `setup_logging()` once, which attaches a
rotating file handler to the package logger. Logging goes to a file rather
than the console so it never interferes with the TUI.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from ..config.constants import LOG_BACKUP_COUNT, LOG_FILE_NAME, MAX_LOG_BYTES

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _file_handler(log_dir: Path, level: int) -> RotatingFileHandler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUP_COUNT
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def setup_logging(log_dir: Path, level: int = logging.INFO) -> logging.Logger:
    """Configure the package logger to write to `log_dir`.

    Calling it again only adjusts the level.
    """
    logger = logging.getLogger("incsearch")
    if not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        logger.addHandler(_file_handler(log_dir, level))
    for handler in logger.handlers:
        handler.setLevel(level)
    logger.setLevel(level)
    return logger

