"""
Subtitle processing plugins.

This package contains the plugin chain and the machinery that runs it:
- Plugin descriptors and the read-only run context
- The seven plugins, registered in execution order
- The pipeline producing change reports
- Persisted plugin settings
- Batch processing of several documents
"""

from .base import ParamOption, PipelineContext, PluginDescriptor, PluginParam
from .registry import ALL_PLUGINS, PLUGINS_BY_ID
from .pipeline import PluginPipeline, ChangeReport, PluginOutcome
from .settings import PluginSettings
from .batch_processor import BatchProcessor, BatchResult

__all__ = [
    'ALL_PLUGINS',
    'PLUGINS_BY_ID',
    'ParamOption',
    'PipelineContext',
    'PluginDescriptor',
    'PluginParam',
    'PluginPipeline',
    'ChangeReport',
    'PluginOutcome',
    'PluginSettings',
    'BatchProcessor',
    'BatchResult',
]
