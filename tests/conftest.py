"""
Shared fixtures for the test suite.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add the project root to Python path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.subtitle_formats import SubtitleDocument, SubtitleEntry  # noqa: E402
from plugins.base import PipelineContext  # noqa: E402
from utils.constants import APP_LOGGER_NAME  # noqa: E402


def sub(index, start_ms, end_ms, *lines):
    """Build a subtitle entry."""
    return SubtitleEntry(index=index, start_ms=start_ms, end_ms=end_ms, lines=list(lines))


def make_document(entries, name="movie.srt", encoding="utf-8"):
    """Build a document as if it had been loaded from a file."""
    return SubtitleDocument(name=name, original_entries=tuple(entries),
                            original_encoding=encoding)


def context(*active, **configs):
    """Build a run context; configs map plugin id to a parameter dict."""
    return PipelineContext.create(active, configs)


SAMPLE_SRT = (
    "1\n"
    "00:00:01,000 --> 00:00:02,000\n"
    "Zdravo svete\n"
    "\n"
    "2\n"
    "00:00:02,050 --> 00:00:04,000\n"
    "<i>Kako si?</i>\n"
    "Dobro sam.\n"
    "\n"
    "3\n"
    "00:00:05,000 --> 00:00:07,000\n"
    "Preuzeto sa www.titlovi.com\n"
)


@pytest.fixture
def sample_srt():
    return SAMPLE_SRT


@pytest.fixture
def srt_file(tmp_path):
    path = tmp_path / "movie.srt"
    path.write_bytes(SAMPLE_SRT.encode('utf-8'))
    return path


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "settings" / "plugin_settings.json"


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers installed by the CLI; they hold the captured stdout."""
    yield
    logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
