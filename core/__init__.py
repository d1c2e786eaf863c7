"""
Core subtitle processing modules.

This package contains the fundamental components for subtitle processing:
- Encoding detection and strict byte/text conversion
- SRT parsing and serialization
- Timestamp and timing helpers
- Line-level diffs and timeline statistics
"""

from .errors import SubtitleEditorError, FormatError, EncodingError, ConfigError
from .codec import EncodingDetector
from .timing_utils import TimeConverter
from .subtitle_formats import SubtitleEntry, SubtitleDocument, SRTParser
from .diff_engine import DiffEngine, DiffRow, DiffSegment
from .statistics import StatisticsEngine, SubtitleStatistics, StatValue

__all__ = [
    'SubtitleEditorError',
    'FormatError',
    'EncodingError',
    'ConfigError',
    'EncodingDetector',
    'TimeConverter',
    'SubtitleEntry',
    'SubtitleDocument',
    'SRTParser',
    'DiffEngine',
    'DiffRow',
    'DiffSegment',
    'StatisticsEngine',
    'SubtitleStatistics',
    'StatValue',
]
