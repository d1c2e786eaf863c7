"""
Plugin registry in execution order.
"""

from typing import Dict, List

from . import cps, cyrillization, encoding, gap, long_lines, min_duration, remove_ads
from .base import PluginDescriptor

# Text transforms first, then duration extensions, then the gap trim that
# the extensions already respect, then the output encoding.
ALL_PLUGINS: List[PluginDescriptor] = [
    remove_ads.PLUGIN,
    cyrillization.PLUGIN,
    long_lines.PLUGIN,
    cps.PLUGIN,
    min_duration.PLUGIN,
    gap.PLUGIN,
    encoding.PLUGIN,
]

PLUGINS_BY_ID: Dict[str, PluginDescriptor] = {plugin.id: plugin for plugin in ALL_PLUGINS}
