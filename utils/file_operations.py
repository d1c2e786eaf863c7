"""
File operations and backup utilities for subtitle processing.

This module provides safe file operations including:
- Backup creation with timestamps
- Raw byte reading and writing (encoding is handled by the codec layer)
- Subtitle file discovery
"""

import shutil
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from .constants import BACKUP_DIR_NAME, CYRILLIC_OUTPUT_SUFFIX, SUBTITLE_EXTENSIONS
from .logging_config import get_logger

logger = get_logger(__name__)


class FileHandler:
    """Handles file operations with proper error handling and logging."""

    @staticmethod
    def create_backup(file_path: Path, backup_dir: Optional[Path] = None) -> Path:
        """
        Create a backup of the file with timestamp.

        Args:
            file_path: Path to the file to backup
            backup_dir: Optional custom backup directory

        Returns:
            Path to the created backup file

        Raises:
            FileNotFoundError: If the file does not exist
            IOError: If backup creation fails

        Example:
            >>> backup_path = FileHandler.create_backup(Path("movie.srt"))
            >>> print(f"Backup created at: {backup_path}")
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if backup_dir is None:
            backup_dir = file_path.parent / BACKUP_DIR_NAME
        backup_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        backup_path = backup_dir / f"{file_path.stem}_{timestamp}{file_path.suffix}"

        try:
            shutil.copy2(file_path, backup_path)
            logger.debug(f"Created backup: {backup_path}")
            return backup_path
        except OSError as e:
            logger.error(f"Failed to create backup for {file_path}: {e}")
            raise IOError(f"Backup creation failed for {file_path.name}: {e}")

    @staticmethod
    def read_bytes(file_path: Path) -> bytes:
        """
        Read a file's raw content.

        Raises:
            IOError: If the file cannot be read
        """
        try:
            return file_path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read file {file_path}: {e}")
            raise IOError(f"Cannot read {file_path.name}: {e}")

    @staticmethod
    def safe_write_bytes(file_path: Path, data: bytes, create_backup: bool = False) -> None:
        """
        Write raw bytes to a file with optional backup of an existing file.

        Args:
            file_path: Path to write to
            data: Content to write
            create_backup: Whether to back up the file first if it exists

        Raises:
            IOError: If the write operation fails

        Example:
            >>> FileHandler.safe_write_bytes(Path("movie.cyr.sr.srt"), document.to_bytes())
        """
        try:
            if create_backup and file_path.exists():
                FileHandler.create_backup(file_path)

            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(data)
            logger.debug(f"Successfully wrote file: {file_path}")

        except OSError as e:
            logger.error(f"Failed to write file {file_path}: {e}")
            raise IOError(f"Write operation failed for {file_path.name}: {e}")

    @staticmethod
    def is_subtitle_file(file_path: Path) -> bool:
        """Check whether a path has a supported subtitle extension."""
        return file_path.suffix.lower() in SUBTITLE_EXTENSIONS

    @staticmethod
    def find_subtitle_files(directory: Path, recursive: bool = False) -> List[Path]:
        """
        Find subtitle files in a directory, skipping previous Cyrillic outputs.

        Args:
            directory: Directory to search
            recursive: Whether to search recursively

        Returns:
            Sorted list of subtitle file paths
        """
        if not directory.exists() or not directory.is_dir():
            logger.warning(f"Directory not found or not a directory: {directory}")
            return []

        pattern_func = directory.rglob if recursive else directory.glob
        subtitle_files = [
            path for path in pattern_func("*")
            if path.is_file() and FileHandler.is_subtitle_file(path)
            and not path.name.lower().endswith(CYRILLIC_OUTPUT_SUFFIX)
        ]
        subtitle_files.sort()

        logger.debug(f"Found {len(subtitle_files)} subtitle files in {directory}")
        return subtitle_files

    @staticmethod
    def collect_inputs(paths: Iterable[Path], recursive: bool = False) -> List[Path]:
        """
        Expand command-line paths into subtitle files.

        Directories are searched for subtitle files; plain files are kept
        as given. Missing paths are logged and skipped.

        Args:
            paths: Files and directories
            recursive: Whether to search directories recursively

        Returns:
            List of file paths without duplicates, in input order
        """
        collected: List[Path] = []
        for path in paths:
            if path.is_dir():
                candidates = FileHandler.find_subtitle_files(path, recursive)
            elif path.exists():
                candidates = [path]
            else:
                logger.warning(f"Path not found: {path}")
                continue

            for candidate in candidates:
                if candidate not in collected:
                    collected.append(candidate)
        return collected

    @staticmethod
    def output_path(source: Path, output_name: str, output_dir: Optional[Path] = None) -> Path:
        """
        Get the destination path for a processed file.

        Args:
            source: Path the document was loaded from
            output_name: File name derived by the document
            output_dir: Optional directory overriding the source directory
        """
        return (output_dir or source.parent) / output_name
