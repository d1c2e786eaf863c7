"""
Inline markup helpers.

Subtitle lines may carry HTML-like tags (<b>, <i>, <u>, <font ...>) and
brace tags ({b}, {/i}). These helpers measure the visible text and isolate
tag spans so that transforms can leave them untouched.
"""

import re
from typing import Iterable, List

from utils.constants import BRACE_TAG_PATTERN, HTML_TAG_PATTERN, MARKUP_SPAN_PATTERN

_HTML_TAG_RE = re.compile(HTML_TAG_PATTERN, re.IGNORECASE)
_BRACE_TAG_RE = re.compile(BRACE_TAG_PATTERN, re.IGNORECASE)
_MARKUP_SPAN_RE = re.compile(MARKUP_SPAN_PATTERN)


def strip_tags(text: str) -> str:
    """Remove formatting tags, leaving only the visible text."""
    return _BRACE_TAG_RE.sub('', _HTML_TAG_RE.sub('', text))


def visible_length(text: str) -> int:
    """
    Count visible characters in a line.

    Example:
        >>> visible_length("<b>Hello</b> <i>World</i>")
        11
    """
    return len(strip_tags(text))


def visible_char_count(lines: Iterable[str]) -> int:
    """Count visible characters across lines, without line separators."""
    return sum(visible_length(line) for line in lines)


def split_markup(line: str) -> List[str]:
    """
    Split a line into alternating text and tag spans.

    Even indexes hold text (possibly empty), odd indexes hold tags.

    Example:
        >>> split_markup("<i>Zdravo</i>")
        ['', '<i>', 'Zdravo', '</i>', '']
    """
    return _MARKUP_SPAN_RE.split(line)
