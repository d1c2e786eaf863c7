"""
Minimum display duration correction.
"""

import math
from dataclasses import replace
from typing import List, Mapping

from core.subtitle_formats import SubtitleEntry
from core.timing_utils import TimeConverter
from utils.constants import DEFAULT_MIN_DURATION_MS, PLUGIN_MIN_DURATION
from utils.logging_config import get_logger

from .base import PipelineContext, PluginDescriptor, PluginParam, active_min_gap

logger = get_logger(__name__)


def fix_min_duration(entries: List[SubtitleEntry], params: Mapping[str, float],
                     context: PipelineContext) -> List[SubtitleEntry]:
    """
    Extend entries shorter than the minimum duration.

    The new end is capped like the CPS fix: before the next entry, keeping
    the Gap plugin's minimum gap when it is enabled, and never earlier than
    the current end.
    """
    min_duration = math.ceil(params.get('min_duration', DEFAULT_MIN_DURATION_MS))
    min_gap = active_min_gap(context)
    result = []

    for i, entry in enumerate(entries):
        if entry.duration_ms >= min_duration:
            result.append(entry)
            continue

        next_start = entries[i + 1].start_ms if i + 1 < len(entries) else None
        new_end = TimeConverter.extend_end_time(
            entry.start_ms + min_duration, entry.end_ms,
            next_start=next_start, min_gap=min_gap)

        if new_end != entry.end_ms:
            logger.debug(f"Entry {entry.index}: {entry.duration_ms} ms, end -> {new_end}")
            entry = replace(entry, end_ms=new_end)
        result.append(entry)

    return result


PLUGIN = PluginDescriptor(
    id=PLUGIN_MIN_DURATION,
    name="Min Duration",
    description=("Extends subtitle end time if its duration is below the minimum. "
                 "Respects Gap plugin constraints when Gap is active."),
    enabled=False,
    run=fix_min_duration,
    params=(
        PluginParam(key='min_duration', label="Min Duration (ms)",
                    default=DEFAULT_MIN_DURATION_MS, min=0, step=1),
    ),
)
