"""
Minimum gap enforcement between consecutive subtitles.
"""

import math
from dataclasses import replace
from typing import List, Mapping

from core.subtitle_formats import SubtitleEntry
from utils.constants import DEFAULT_MIN_GAP_MS, PLUGIN_GAP
from utils.logging_config import get_logger

from .base import PipelineContext, PluginDescriptor, PluginParam

logger = get_logger(__name__)


def enforce_gap(entries: List[SubtitleEntry], params: Mapping[str, float],
                context: PipelineContext) -> List[SubtitleEntry]:
    """
    Trim end times that come too close to the next entry's start.

    An entry is left as it is when trimming would leave it with no duration.
    """
    min_gap = math.ceil(params.get('min_gap', DEFAULT_MIN_GAP_MS))
    result = []

    for i, entry in enumerate(entries):
        if i + 1 < len(entries):
            next_start = entries[i + 1].start_ms
            if next_start - entry.end_ms < min_gap:
                new_end = next_start - min_gap
                if new_end > entry.start_ms:
                    logger.debug(f"Entry {entry.index}: end {entry.end_ms} -> {new_end}")
                    entry = replace(entry, end_ms=new_end)
        result.append(entry)

    return result


PLUGIN = PluginDescriptor(
    id=PLUGIN_GAP,
    name="Gap (Minimum Gap)",
    description=("Enforces a minimum gap (in ms) between the end of one subtitle and "
                 "the start of the next. If a subtitle's end time violates the gap, "
                 "it is trimmed back."),
    enabled=True,
    run=enforce_gap,
    params=(
        PluginParam(key='min_gap', label="Min Gap (ms)", default=DEFAULT_MIN_GAP_MS,
                    min=0, step=1),
    ),
)
