"""
Line-level diff between an original and a processed subtitle timeline.

Lines are aligned with difflib's longest-matching-block algorithm. A run of
removed lines immediately followed by a run of added lines is paired
positionally into "modified" rows, each carrying a character-level
highlight computed from the common prefix and suffix of the two lines.
"""

from dataclasses import dataclass, field
from difflib import SequenceMatcher
from typing import Dict, List, Optional, Sequence, Tuple

from core.subtitle_formats import SRTParser, SubtitleEntry
from utils.logging_config import get_logger

logger = get_logger(__name__)

EQUAL = 'equal'
REMOVED = 'removed'
ADDED = 'added'
MODIFIED = 'modified'


@dataclass
class DiffSegment:
    """A piece of a line, flagged when it differs from the other side."""
    text: str
    changed: bool


@dataclass
class DiffRow:
    """One row of the aligned diff."""
    kind: str                      # equal, removed, added or modified
    original: Optional[str] = None
    processed: Optional[str] = None
    original_segments: List[DiffSegment] = field(default_factory=list)
    processed_segments: List[DiffSegment] = field(default_factory=list)


class DiffEngine:
    """Aligns serialized timelines and highlights in-line changes."""

    @staticmethod
    def diff_timelines(original: Sequence[SubtitleEntry],
                       processed: Sequence[SubtitleEntry]) -> List[DiffRow]:
        """
        Diff two timelines by their serialized SRT lines.

        Args:
            original: Timeline as loaded
            processed: Working timeline after the pipeline

        Returns:
            Aligned diff rows in display order
        """
        return DiffEngine.align(DiffEngine._timeline_lines(original),
                                DiffEngine._timeline_lines(processed))

    @staticmethod
    def align(original_lines: Sequence[str], processed_lines: Sequence[str]) -> List[DiffRow]:
        """
        Align two line sequences into equal, removed, added and modified rows.

        Args:
            original_lines: Lines of the original text
            processed_lines: Lines of the processed text

        Returns:
            List of DiffRow objects

        Example:
            >>> rows = DiffEngine.align(["a", "b"], ["a", "c"])
            >>> [row.kind for row in rows]
            ['equal', 'modified']
        """
        rows: List[DiffRow] = []
        runs = DiffEngine._runs(original_lines, processed_lines)

        i = 0
        while i < len(runs):
            kind, lines = runs[i]
            if kind == EQUAL:
                rows.extend(DiffRow(EQUAL, original=line, processed=line) for line in lines)
            elif kind == REMOVED and i + 1 < len(runs) and runs[i + 1][0] == ADDED:
                added = runs[i + 1][1]
                rows.extend(DiffEngine._pair_runs(lines, added))
                i += 1
            elif kind == REMOVED:
                rows.extend(DiffRow(REMOVED, original=line) for line in lines)
            else:
                rows.extend(DiffRow(ADDED, processed=line) for line in lines)
            i += 1

        logger.debug(f"Aligned {len(original_lines)} / {len(processed_lines)} lines "
                     f"into {len(rows)} rows")
        return rows

    @staticmethod
    def highlight(original: str, processed: str) -> Tuple[List[DiffSegment], List[DiffSegment]]:
        """
        Highlight the differing middle of two lines.

        The longest common prefix and suffix are unchanged; whatever lies
        between them on each side is changed. Concatenating the segments of
        a side reproduces that side's line exactly.

        Args:
            original: Line before processing
            processed: Line after processing

        Returns:
            Tuple of (original_segments, processed_segments)

        Example:
            >>> left, right = DiffEngine.highlight("00:00:01,000", "00:00:01,680")
            >>> [(s.text, s.changed) for s in right]
            [('00:00:01,', False), ('68', True), ('0', False)]
        """
        shortest = min(len(original), len(processed))

        prefix = 0
        while prefix < shortest and original[prefix] == processed[prefix]:
            prefix += 1

        suffix = 0
        while (suffix < shortest - prefix
               and original[-1 - suffix] == processed[-1 - suffix]):
            suffix += 1

        return (DiffEngine._segments(original, prefix, suffix),
                DiffEngine._segments(processed, prefix, suffix))

    @staticmethod
    def summarize(rows: Sequence[DiffRow]) -> Dict[str, int]:
        """Count rows per kind."""
        counts = {EQUAL: 0, REMOVED: 0, ADDED: 0, MODIFIED: 0}
        for row in rows:
            counts[row.kind] += 1
        return counts

    @staticmethod
    def _timeline_lines(entries: Sequence[SubtitleEntry]) -> List[str]:
        if not entries:
            return []
        return SRTParser.serialize(entries).rstrip('\n').split('\n')

    @staticmethod
    def _runs(original_lines: Sequence[str],
              processed_lines: Sequence[str]) -> List[Tuple[str, List[str]]]:
        """Normalize difflib opcodes into runs, merging adjacent runs of one kind."""
        matcher = SequenceMatcher(None, list(original_lines), list(processed_lines),
                                  autojunk=False)
        runs: List[Tuple[str, List[str]]] = []

        def push(kind: str, lines: Sequence[str]):
            if not lines:
                return
            if runs and runs[-1][0] == kind:
                runs[-1][1].extend(lines)
            else:
                runs.append((kind, list(lines)))

        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == 'equal':
                push(EQUAL, original_lines[i1:i2])
            elif tag == 'delete':
                push(REMOVED, original_lines[i1:i2])
            elif tag == 'insert':
                push(ADDED, processed_lines[j1:j2])
            else:
                push(REMOVED, original_lines[i1:i2])
                push(ADDED, processed_lines[j1:j2])
        return runs

    @staticmethod
    def _pair_runs(removed: List[str], added: List[str]) -> List[DiffRow]:
        rows = []
        paired = min(len(removed), len(added))
        for original, processed in zip(removed[:paired], added[:paired]):
            left, right = DiffEngine.highlight(original, processed)
            rows.append(DiffRow(MODIFIED, original=original, processed=processed,
                                original_segments=left, processed_segments=right))
        rows.extend(DiffRow(REMOVED, original=line) for line in removed[paired:])
        rows.extend(DiffRow(ADDED, processed=line) for line in added[paired:])
        return rows

    @staticmethod
    def _segments(line: str, prefix: int, suffix: int) -> List[DiffSegment]:
        end = len(line) - suffix
        segments = []
        if prefix:
            segments.append(DiffSegment(line[:prefix], False))
        if end > prefix:
            segments.append(DiffSegment(line[prefix:end], True))
        if suffix:
            segments.append(DiffSegment(line[end:], False))
        return segments
