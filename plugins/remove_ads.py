"""
Removal of known advertisement subtitles.

Release sites prepend or append a credit subtitle. Only the first and the
last entries are checked; an identical text anywhere else is left alone.
"""

from dataclasses import replace
from typing import List, Mapping

from core.subtitle_formats import SubtitleEntry
from utils.constants import AD_TEXTS, PLUGIN_REMOVE_ADS
from utils.logging_config import get_logger

from .base import PipelineContext, PluginDescriptor

logger = get_logger(__name__)


def is_ad(entry: SubtitleEntry) -> bool:
    """Check whether an entry's text, joined with spaces and trimmed, is a known ad."""
    return ' '.join(entry.lines).strip() in AD_TEXTS


def remove_ads(entries: List[SubtitleEntry], params: Mapping[str, float],
               context: PipelineContext) -> List[SubtitleEntry]:
    """
    Drop a known ad at the last and then at the first position.

    Surviving entries are renumbered from 1 when anything was removed.
    """
    result = list(entries)

    if result and is_ad(result[-1]):
        logger.debug(f"Removing trailing ad: {result[-1].text!r}")
        result = result[:-1]

    if result and is_ad(result[0]):
        logger.debug(f"Removing leading ad: {result[0].text!r}")
        result = result[1:]

    if len(result) != len(entries):
        result = [replace(entry, index=i) for i, entry in enumerate(result, start=1)]

    return result


PLUGIN = PluginDescriptor(
    id=PLUGIN_REMOVE_ADS,
    name="Remove Ads",
    description=("Removes known advertisement subtitles (e.g. titlovi.com) "
                 "from the first and last position in the file."),
    enabled=False,
    run=remove_ads,
)
