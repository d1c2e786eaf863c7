"""
Timeline statistics shown side by side for original and processed subtitles.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from core.markup import visible_char_count, visible_length
from core.subtitle_formats import SubtitleEntry
from utils.constants import STATS_CPS_THRESHOLDS, STATS_DURATION_THRESHOLDS_MS
from utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class StatValue:
    """A statistic and the 1-based position of the first entry that produced it."""
    value: float = 0
    position: int = 0


@dataclass
class SubtitleStatistics:
    """Aggregate statistics for one timeline."""
    entry_count: int = 0
    total_duration_ms: int = 0
    max_cps: StatValue = field(default_factory=StatValue)
    max_line_length: StatValue = field(default_factory=StatValue)
    max_duration: StatValue = field(default_factory=StatValue)   # seconds
    min_duration: StatValue = field(default_factory=StatValue)   # seconds
    more_than_two_lines: StatValue = field(default_factory=StatValue)
    cps_over: Dict[int, int] = field(default_factory=dict)
    duration_under: Dict[int, int] = field(default_factory=dict)


class StatisticsEngine:
    """Computes reading-speed, length and duration statistics."""

    @staticmethod
    def entry_cps(entry: SubtitleEntry) -> float:
        """
        Get the reading speed of an entry in visible characters per second.

        Entries with zero or negative duration report 0.
        """
        duration_sec = entry.duration_ms / 1000
        if duration_sec <= 0:
            return 0.0
        return visible_char_count(entry.lines) / duration_sec

    @staticmethod
    def compute(entries: Sequence[SubtitleEntry],
                cps_thresholds: Sequence[int] = STATS_CPS_THRESHOLDS,
                duration_thresholds_ms: Sequence[int] = STATS_DURATION_THRESHOLDS_MS
                ) -> SubtitleStatistics:
        """
        Compute statistics for a timeline.

        Maxima and minima keep the first entry that reaches them. Distribution
        counts use strict comparisons: CPS strictly above each threshold and
        duration strictly below each threshold.

        Args:
            entries: Timeline to analyze
            cps_thresholds: CPS thresholds for the distribution counts
            duration_thresholds_ms: Duration thresholds in milliseconds

        Returns:
            SubtitleStatistics (all zeros for an empty timeline)

        Example:
            >>> stats = StatisticsEngine.compute([SubtitleEntry(1, 0, 2000, ["Hello world"])])
            >>> stats.max_cps.value
            5.5
        """
        stats = SubtitleStatistics(
            entry_count=len(entries),
            cps_over={threshold: 0 for threshold in cps_thresholds},
            duration_under={threshold: 0 for threshold in duration_thresholds_ms},
        )
        if not entries:
            return stats

        stats.total_duration_ms = entries[-1].end_ms
        min_duration: Optional[StatValue] = None

        for position, entry in enumerate(entries, start=1):
            cps = StatisticsEngine.entry_cps(entry)
            if cps > stats.max_cps.value:
                stats.max_cps = StatValue(cps, position)

            for line in entry.lines:
                length = visible_length(line)
                if length > stats.max_line_length.value:
                    stats.max_line_length = StatValue(length, position)

            duration_sec = entry.duration_ms / 1000
            if duration_sec > stats.max_duration.value:
                stats.max_duration = StatValue(duration_sec, position)
            if min_duration is None or duration_sec < min_duration.value:
                min_duration = StatValue(duration_sec, position)

            if len(entry.lines) > 2:
                if stats.more_than_two_lines.value == 0:
                    stats.more_than_two_lines = StatValue(1, position)
                else:
                    stats.more_than_two_lines.value += 1

            for threshold in cps_thresholds:
                if cps > threshold:
                    stats.cps_over[threshold] += 1
            for threshold in duration_thresholds_ms:
                if entry.duration_ms < threshold:
                    stats.duration_under[threshold] += 1

        stats.min_duration = min_duration
        logger.debug(f"Computed statistics for {len(entries)} entries")
        return stats
