"""
Output encoding selection.

The transform leaves the timeline untouched; the pipeline reads the target
from the run context once all plugins have run.
"""

from typing import List, Mapping, Optional

from core.subtitle_formats import SubtitleEntry
from utils.constants import ENCODING_TARGET_LABELS, ENCODING_TARGETS, PLUGIN_ENCODING

from .base import ParamOption, PipelineContext, PluginDescriptor, PluginParam


def target_encoding(context: PipelineContext) -> Optional[str]:
    """Get the configured target encoding label, or None to keep the original."""
    value = context.param(PLUGIN_ENCODING, 'target_encoding', 0)
    return ENCODING_TARGETS.get(int(value))


def retarget_encoding(entries: List[SubtitleEntry], params: Mapping[str, float],
                      context: PipelineContext) -> List[SubtitleEntry]:
    return list(entries)


PLUGIN = PluginDescriptor(
    id=PLUGIN_ENCODING,
    name="Encoding",
    description=("Choose the output encoding for processed files. When Cyrillization "
                 "is active, Windows-1250 is automatically changed to Windows-1251."),
    enabled=False,
    run=retarget_encoding,
    params=(
        PluginParam(
            key='target_encoding', label="Target Encoding", default=0,
            options=tuple(ParamOption(value, label)
                          for value, label in ENCODING_TARGET_LABELS.items()),
        ),
    ),
)
