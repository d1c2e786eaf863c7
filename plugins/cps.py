"""
Reading speed correction.

Entries whose visible characters per second exceed the limit get a later
end time, capped before the next entry (respecting the Gap plugin's minimum
gap when it is enabled). End times are never moved earlier.
"""

import math
from dataclasses import replace
from typing import List, Mapping

from core.markup import visible_char_count
from core.subtitle_formats import SubtitleEntry
from core.timing_utils import TimeConverter
from utils.constants import DEFAULT_MAX_CPS, PLUGIN_CPS
from utils.logging_config import get_logger

from .base import PipelineContext, PluginDescriptor, PluginParam, active_min_gap

logger = get_logger(__name__)


def required_duration_ms(chars: int, max_cps: float) -> int:
    """
    Get the shortest duration that keeps the reading speed within the limit.

    Example:
        >>> required_duration_ms(42, 25)
        1680
    """
    return math.ceil(chars * 1000 / max_cps)


def fix_cps(entries: List[SubtitleEntry], params: Mapping[str, float],
            context: PipelineContext) -> List[SubtitleEntry]:
    max_cps = params.get('max_cps', DEFAULT_MAX_CPS)
    min_gap = active_min_gap(context)
    result = []

    for i, entry in enumerate(entries):
        chars = visible_char_count(entry.lines)
        duration = entry.duration_ms
        if chars == 0 or duration < 0:
            result.append(entry)
            continue

        cps = math.inf if duration == 0 else chars * 1000 / duration
        if cps <= max_cps:
            result.append(entry)
            continue

        next_start = entries[i + 1].start_ms if i + 1 < len(entries) else None
        new_end = TimeConverter.extend_end_time(
            entry.start_ms + required_duration_ms(chars, max_cps),
            entry.end_ms, next_start=next_start, min_gap=min_gap)

        if new_end != entry.end_ms:
            logger.debug(f"Entry {entry.index}: {cps:.1f} CPS, end {entry.end_ms} -> {new_end}")
            entry = replace(entry, end_ms=new_end)
        result.append(entry)

    return result


PLUGIN = PluginDescriptor(
    id=PLUGIN_CPS,
    name="CPS (Characters Per Second)",
    description=("Extends subtitle duration if CPS exceeds the threshold. "
                 "Respects Gap plugin constraints when Gap is active."),
    enabled=True,
    run=fix_cps,
    params=(
        PluginParam(key='max_cps', label="Max CPS", default=DEFAULT_MAX_CPS, min=1, step=1),
    ),
)
