"""
Subtitle data structures and the SubRip (SRT) format handler.

This module provides:
- SubtitleEntry: one timed subtitle block
- SubtitleDocument: a loaded file with its original and working timelines
- SRTParser: resilient block-level parsing and renumbering serialization
"""

import re
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from core.codec import EncodingDetector
from core.errors import EncodingError, FormatError
from core.timing_utils import TimeConverter
from utils.constants import CYRILLIC_OUTPUT_SUFFIX
from utils.logging_config import get_logger

logger = get_logger(__name__)

_BLOCK_SEPARATOR_RE = re.compile(r'(\n{2,})')
_SRT_SUFFIX_RE = re.compile(r'\.srt$', re.IGNORECASE)
_ORDINAL_RE = re.compile(r'[+-]?[0-9]+')


@dataclass
class SubtitleEntry:
    """Represents a single subtitle block."""
    index: int     # Ordinal as found in the file; only order is meaningful
    start_ms: int  # Start time in milliseconds
    end_ms: int    # End time in milliseconds
    lines: List[str] = field(default_factory=list)

    @property
    def duration_ms(self) -> int:
        """Get the duration of this entry in milliseconds."""
        return self.end_ms - self.start_ms

    @property
    def text(self) -> str:
        """Get the text lines joined by newlines."""
        return '\n'.join(self.lines)

    def copy(self) -> 'SubtitleEntry':
        """Return a copy that shares no mutable state with this entry."""
        return replace(self, lines=list(self.lines))

    def same_content(self, other: 'SubtitleEntry') -> bool:
        """Check whether timing and text are identical (the ordinal is ignored)."""
        return (self.start_ms == other.start_ms
                and self.end_ms == other.end_ms
                and self.lines == other.lines)

    def format_time_range(self) -> str:
        """Format the time range as an SRT timing line."""
        return (f"{TimeConverter.format_timestamp(self.start_ms)} --> "
                f"{TimeConverter.format_timestamp(self.end_ms)}")


class SRTParser:
    """Parser and serializer for the SubRip subtitle format."""

    @staticmethod
    def parse(content: str, document: Optional[str] = None) -> List[SubtitleEntry]:
        """
        Parse SRT text, skipping malformed blocks.

        Args:
            content: Decoded file content
            document: Optional document name used in log messages

        Returns:
            List of parsed entries in file order

        Example:
            >>> entries = SRTParser.parse("1\\n00:00:01,000 --> 00:00:02,000\\nHello")
            >>> entries[0].lines
            ['Hello']
        """
        entries, errors = SRTParser.parse_with_diagnostics(content, document)
        for error in errors:
            logger.warning(f"Skipped malformed block: {error}")
        return entries

    @staticmethod
    def parse_with_diagnostics(content: str, document: Optional[str] = None
                               ) -> Tuple[List[SubtitleEntry], List[FormatError]]:
        """
        Parse SRT text and report every skipped block.

        Line endings are normalized, the text is trimmed and split on blank
        lines. A block needs at least three lines: an integer ordinal, a
        timing line with exactly two timestamps, and the text lines, which
        are kept verbatim.

        Args:
            content: Decoded file content
            document: Optional document name attached to diagnostics

        Returns:
            Tuple of (entries, format_errors)
        """
        normalized = content.replace('\r\n', '\n').replace('\r', '\n')
        stripped = normalized.strip()
        if not stripped:
            return [], []

        leading = normalized[:len(normalized) - len(normalized.lstrip())]
        line_number = leading.count('\n') + 1

        entries: List[SubtitleEntry] = []
        errors: List[FormatError] = []

        parts = _BLOCK_SEPARATOR_RE.split(stripped)
        for block_number, part_idx in enumerate(range(0, len(parts), 2), start=1):
            block = parts[part_idx]
            try:
                entries.append(SRTParser._parse_block(block))
            except FormatError as e:
                e.block = block_number
                e.line = line_number
                e.document = document
                errors.append(e)

            line_number += block.count('\n')
            if part_idx + 1 < len(parts):
                line_number += len(parts[part_idx + 1])

        logger.debug(f"Parsed {len(entries)} entries, skipped {len(errors)} blocks")
        return entries, errors

    @staticmethod
    def _parse_block(block: str) -> SubtitleEntry:
        """Parse one block, raising FormatError when it has to be skipped."""
        block_lines = block.strip().split('\n')
        if len(block_lines) < 3:
            raise FormatError(f"Incomplete block ({len(block_lines)} lines)")

        ordinal = block_lines[0].strip()
        if not _ORDINAL_RE.fullmatch(ordinal):
            raise FormatError(f'Invalid subtitle number: "{ordinal}"')
        index = int(ordinal)

        start_ms, end_ms = TimeConverter.parse_timing_line(block_lines[1])
        return SubtitleEntry(index=index, start_ms=start_ms, end_ms=end_ms,
                             lines=block_lines[2:])

    @staticmethod
    def serialize(entries: Sequence[SubtitleEntry]) -> str:
        """
        Serialize entries to SRT text, renumbering from 1.

        Args:
            entries: Entries to write

        Returns:
            SRT text with blocks separated by a blank line and a trailing newline
        """
        blocks = [
            f"{position}\n{entry.format_time_range()}\n" + '\n'.join(entry.lines)
            for position, entry in enumerate(entries, start=1)
        ]
        return '\n\n'.join(blocks) + '\n'


@dataclass
class SubtitleDocument:
    """Represents a loaded subtitle file with its original and working timelines."""
    name: str
    original_entries: Tuple[SubtitleEntry, ...]
    original_encoding: str
    entries: Optional[List[SubtitleEntry]] = None
    encoding: Optional[str] = None
    diagnostics: List[FormatError] = field(default_factory=list)

    def __post_init__(self):
        """Freeze the original timeline and default the working state to it."""
        self.original_entries = tuple(entry.copy() for entry in self.original_entries)
        if self.entries is None:
            self.entries = self.fresh_copy()
        if self.encoding is None:
            self.encoding = self.original_encoding

    @classmethod
    def from_bytes(cls, name: str, data: bytes) -> 'SubtitleDocument':
        """
        Load a document from raw file content.

        Args:
            name: File name
            data: Raw bytes

        Returns:
            SubtitleDocument with the detected encoding and parsed timeline

        Raises:
            EncodingError: If the content cannot be decoded with the
                detected encoding
        """
        encoding = EncodingDetector.detect_encoding(data)
        try:
            content = EncodingDetector.decode(data, encoding)
        except EncodingError as e:
            e.document = name
            raise

        entries, errors = SRTParser.parse_with_diagnostics(content, document=name)
        for error in errors:
            logger.warning(f"Skipped malformed block: {error}")
        logger.info(f"Loaded {len(entries)} entries from {name} ({encoding})")
        return cls(name=name, original_entries=tuple(entries),
                   original_encoding=encoding, diagnostics=errors)

    def fresh_copy(self) -> List[SubtitleEntry]:
        """Return a deep copy of the original timeline."""
        return [entry.copy() for entry in self.original_entries]

    def with_working(self, entries: List[SubtitleEntry], encoding: str) -> 'SubtitleDocument':
        """Return a document sharing the original timeline with new working state."""
        return replace(self, entries=entries, encoding=encoding)

    @property
    def changed(self) -> bool:
        """Check whether the working timeline differs from the original."""
        if len(self.entries) != len(self.original_entries):
            return True
        return not all(working.same_content(original)
                       for working, original in zip(self.entries, self.original_entries))

    def serialize(self) -> str:
        """Serialize the working timeline."""
        return SRTParser.serialize(self.entries)

    def to_bytes(self) -> bytes:
        """
        Serialize the working timeline at the working encoding.

        Raises:
            EncodingError: If the text cannot be represented in the encoding
        """
        try:
            return EncodingDetector.encode(self.serialize(), self.encoding)
        except EncodingError as e:
            e.document = self.name
            raise

    def output_name(self, cyrillic: bool = False) -> str:
        """
        Get the file name for the processed output.

        Args:
            cyrillic: Whether Cyrillization was enabled for the run

        Example:
            >>> doc.output_name(cyrillic=True)   # for "movie.srt"
            'movie.cyr.sr.srt'
        """
        if cyrillic:
            return _SRT_SUFFIX_RE.sub(CYRILLIC_OUTPUT_SUFFIX, self.name)
        return self.name
