"""
Rebalancing of subtitle lines that exceed a maximum visible length.
"""

from dataclasses import replace
from typing import List, Mapping

from core.markup import visible_length
from core.subtitle_formats import SubtitleEntry
from utils.constants import DEFAULT_MAX_LINE_LENGTH, PLUGIN_LONG_LINES
from utils.logging_config import get_logger

from .base import PipelineContext, PluginDescriptor, PluginParam

logger = get_logger(__name__)


def split_into_two_lines(text: str) -> List[str]:
    """
    Split text at the word boundary that best balances the visible halves.

    Ties keep the earliest boundary. Text with a single word is returned
    as one line.

    Example:
        >>> split_into_two_lines("one two three four")
        ['one two', 'three four']
    """
    words = text.split()
    if len(words) <= 1:
        return [text]

    target = visible_length(text) / 2
    best_idx = 0
    best_diff = None
    accum = 0

    for i in range(len(words) - 1):
        accum += visible_length(words[i])
        if i > 0:
            accum += 1  # space before this word
        diff = abs(accum - target)
        if best_diff is None or diff < best_diff:
            best_diff = diff
            best_idx = i

    return [' '.join(words[:best_idx + 1]), ' '.join(words[best_idx + 1:])]


def rebalance_lines(lines: List[str], max_length: float) -> List[str]:
    """
    Rebalance an entry's lines when any of them is too long.

    All lines are merged with spaces; the merged text is kept on one line if
    it fits, otherwise it is split in two.
    """
    if not any(visible_length(line) > max_length for line in lines):
        return lines

    merged = ' '.join(lines)
    if visible_length(merged) <= max_length:
        return [merged]
    return split_into_two_lines(merged)


def long_lines(entries: List[SubtitleEntry], params: Mapping[str, float],
               context: PipelineContext) -> List[SubtitleEntry]:
    max_length = params.get('max_length', DEFAULT_MAX_LINE_LENGTH)
    result = []
    for entry in entries:
        lines = rebalance_lines(entry.lines, max_length)
        if lines is not entry.lines:
            logger.debug(f"Rebalanced entry {entry.index}: {lines}")
            entry = replace(entry, lines=lines)
        result.append(entry)
    return result


PLUGIN = PluginDescriptor(
    id=PLUGIN_LONG_LINES,
    name="Long Lines",
    description=("Splits lines that exceed the maximum character count. Merges "
                 "multi-line subtitles first, then re-splits at the best word "
                 "boundary for balanced line lengths."),
    enabled=False,
    run=long_lines,
    params=(
        PluginParam(key='max_length', label="Max Line Length",
                    default=DEFAULT_MAX_LINE_LENGTH, min=1, step=1),
    ),
)
