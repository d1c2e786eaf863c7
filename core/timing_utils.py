"""
Time conversion and manipulation utilities for subtitle processing.

This module provides functions for:
- Converting between SRT timestamps and integer milliseconds
- Parsing SRT timing lines
- Capped, never-shrinking end time extension shared by timing plugins
- Human-readable timestamps
"""

import math
import re
from typing import Optional, Tuple

from core.errors import FormatError
from utils.constants import MIN_SUBTITLE_BUFFER_MS

_SRT_TIMESTAMP_RE = re.compile(r'^([0-9]{2}):([0-9]{2}):([0-9]{2}),([0-9]{3})$')


class TimeConverter:
    """Handles time format conversions and manipulations for subtitles."""

    @staticmethod
    def parse_timestamp(timestamp: str) -> int:
        """
        Convert an SRT timestamp to milliseconds.

        Args:
            timestamp: Timestamp in the exact HH:MM:SS,mmm form (surrounding
                whitespace is ignored)

        Returns:
            Time in milliseconds

        Raises:
            FormatError: If the timestamp has any other shape

        Example:
            >>> TimeConverter.parse_timestamp("01:02:03,456")
            3723456
        """
        match = _SRT_TIMESTAMP_RE.match(timestamp.strip())
        if not match:
            raise FormatError(f'Invalid timestamp: "{timestamp.strip()}"')
        h, m, s, ms = (int(part) for part in match.groups())
        return h * 3600000 + m * 60000 + s * 1000 + ms

    @staticmethod
    def format_timestamp(ms: float) -> str:
        """
        Convert milliseconds to an SRT timestamp.

        Args:
            ms: Time in milliseconds, rounded to the nearest integer

        Returns:
            Zero-padded HH:MM:SS,mmm string

        Example:
            >>> TimeConverter.format_timestamp(9045123)
            '02:30:45,123'
        """
        total_ms = int(math.floor(ms + 0.5))
        if total_ms < 0:
            total_ms = 0

        h, total_ms = divmod(total_ms, 3600000)
        m, total_ms = divmod(total_ms, 60000)
        s, remainder = divmod(total_ms, 1000)
        return f"{h:02d}:{m:02d}:{s:02d},{remainder:03d}"

    @staticmethod
    def parse_timing_line(timing_line: str) -> Tuple[int, int]:
        """
        Parse an SRT timing line into start and end milliseconds.

        Args:
            timing_line: Line such as "00:01:23,456 --> 00:01:26,789"

        Returns:
            Tuple of (start_ms, end_ms)

        Raises:
            FormatError: If the line does not hold exactly two valid timestamps
        """
        parts = timing_line.split('-->')
        if len(parts) != 2:
            raise FormatError(f'Invalid timing line: "{timing_line.strip()}"')
        return TimeConverter.parse_timestamp(parts[0]), TimeConverter.parse_timestamp(parts[1])

    @staticmethod
    def extend_end_time(desired_end: int, original_end: int,
                        next_start: Optional[int] = None,
                        min_gap: Optional[int] = None) -> int:
        """
        Compute an extended end time that respects the following subtitle.

        The desired end is capped at the next subtitle's start minus the
        minimum gap (or the 1 ms safety buffer when no gap is enforced), and
        the result never falls below the original end.

        Args:
            desired_end: End time the caller would like to reach
            original_end: Current end time of the subtitle
            next_start: Start time of the following subtitle, if any
            min_gap: Minimum gap enforced by the Gap plugin, if active

        Returns:
            New end time in milliseconds

        Example:
            >>> TimeConverter.extend_end_time(3000, 1500, next_start=2500, min_gap=125)
            2375
        """
        new_end = desired_end
        if next_start is not None:
            buffer = MIN_SUBTITLE_BUFFER_MS if min_gap is None else min_gap
            new_end = min(new_end, next_start - buffer)
        return max(new_end, original_end)

    @staticmethod
    def milliseconds_to_readable(ms: int) -> str:
        """
        Convert milliseconds to readable format (HH:MM:SS.mmm).

        Example:
            >>> TimeConverter.milliseconds_to_readable(3825678)
            '01:03:45.678'
        """
        if ms < 0:
            ms = 0
        hours, ms = divmod(ms, 3600000)
        minutes, ms = divmod(ms, 60000)
        seconds, milliseconds = divmod(ms, 1000)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{milliseconds:03d}"

