"""
Logging configuration for the SRT editor.

All modules log through children of one application logger obtained with
get_logger(__name__). The console shows short level-prefixed messages
(colored on a terminal); an optional log file receives the full format with
timestamps and module names.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .constants import (
    APP_LOGGER_NAME, CONSOLE_LOG_FORMAT, DEFAULT_LOG_DATE_FORMAT, DEFAULT_LOG_FORMAT,
)


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name for terminal output."""

    # ANSI color codes
    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',     # Cyan
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        color = self.LEVEL_COLORS.get(record.levelno)
        if color:
            record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # The record is shared with the file handler
            record.levelname = levelname


def _console_handler(level: int, use_colors: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if use_colors and sys.stdout.isatty():
        handler.setFormatter(ColoredFormatter(CONSOLE_LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
    return handler


def _file_handler(log_file: Path, level: int) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT, datefmt=DEFAULT_LOG_DATE_FORMAT))
    return handler


def setup_logging(level: int = logging.INFO, log_file: Optional[Path] = None,
                  use_colors: bool = True) -> logging.Logger:
    """
    Configure the application logger.

    Calling it again replaces the previous handlers, so the CLI can be
    invoked several times in one process.

    Args:
        level: Logging level for the console and the log file
        log_file: Optional path of a UTF-8 log file
        use_colors: Whether to color level names when stdout is a terminal

    Returns:
        The application logger

    Example:
        >>> logger = setup_logging(logging.DEBUG, Path("srted.log"))
        >>> logger.info("Processing started")
    """
    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_console_handler(level, use_colors))
    if log_file:
        logger.addHandler(_file_handler(log_file, level))

    return logger


def get_logger(name: str = APP_LOGGER_NAME) -> logging.Logger:
    """
    Get a module logger under the application logger.

    Args:
        name: Logger name, usually the module's __name__

    Returns:
        Logger instance

    Note:
        Handlers are attached by setup_logging(); until it is called the
        standard library's last-resort handler applies.
    """
    if name == APP_LOGGER_NAME or name.startswith(APP_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")
