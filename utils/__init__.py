"""
Utility modules.

This package contains shared utility functions and configurations:
- File I/O operations and backup utilities
- Logging configuration
- Shared constants and configurations
"""

from .file_operations import FileHandler
from .logging_config import setup_logging, get_logger
from .constants import (
    SUBTITLE_EXTENSIONS,
    CYRILLIC_OUTPUT_SUFFIX,
    CODEC_NAMES,
    ENCODING_TARGETS,
    DEFAULT_SETTINGS_PATH,
    BACKUP_DIR_NAME,
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_DATE_FORMAT,
    APP_NAME,
    APP_VERSION,
    APP_DESCRIPTION,
)

__all__ = [
    'FileHandler',
    'setup_logging',
    'get_logger',
    'SUBTITLE_EXTENSIONS',
    'CYRILLIC_OUTPUT_SUFFIX',
    'CODEC_NAMES',
    'ENCODING_TARGETS',
    'DEFAULT_SETTINGS_PATH',
    'BACKUP_DIR_NAME',
    'DEFAULT_LOG_FORMAT',
    'DEFAULT_LOG_DATE_FORMAT',
    'APP_NAME',
    'APP_VERSION',
    'APP_DESCRIPTION',
]
