"""
Serbian Latin to Cyrillic transliteration.

Text is processed word by word. Words that look foreign (letters outside
the Serbian alphabet, a blocklist of loan words and acronyms, Roman
numerals) are kept in Latin script. Digraphs lj, nj and dž map to a single
Cyrillic letter except in the few words where the two letters belong to
different morphemes. Markup tags are passed through untouched.
"""

import re
from typing import List, Mapping

from core.markup import split_markup
from core.subtitle_formats import SubtitleEntry
from utils.constants import (
    DIGRAPH_SPLIT_PREFIXES, FOREIGN_LETTERS, FOREIGN_WORDS, LATIN_DIGRAPHS,
    LATIN_LETTERS, LATIN_WORD_PATTERN, PLUGIN_CYRILLIZATION, ROMAN_NUMERAL_PATTERN,
)

from .base import PipelineContext, PluginDescriptor

_LATIN_WORD_RE = re.compile(LATIN_WORD_PATTERN)
_ROMAN_NUMERAL_RE = re.compile(ROMAN_NUMERAL_PATTERN)


def cyrillize(text: str) -> str:
    """
    Map Latin letters to Cyrillic, preferring digraphs over single letters.

    Example:
        >>> cyrillize("ljubav")
        'љубав'
    """
    result = []
    i = 0
    while i < len(text):
        mapped = LATIN_DIGRAPHS.get(text[i:i + 2]) if i + 1 < len(text) else None
        if mapped is not None:
            result.append(mapped)
            i += 2
            continue
        result.append(LATIN_LETTERS.get(text[i], text[i]))
        i += 1
    return ''.join(result)


def is_roman_numeral(word: str) -> bool:
    """Uppercase Roman numerals of two or more letters (a lone I is a word)."""
    return len(word) >= 2 and _ROMAN_NUMERAL_RE.match(word) is not None


def is_foreign(word: str) -> bool:
    """Check whether a word must stay in Latin script."""
    if any(char in FOREIGN_LETTERS for char in word):
        return True
    if word.lower() in FOREIGN_WORDS:
        return True
    return is_roman_numeral(word)


def cyrillize_word(word: str) -> str:
    """Transliterate one word, splitting it at a known morpheme boundary first."""
    lower = word.lower()
    for prefix, split_at in DIGRAPH_SPLIT_PREFIXES:
        if lower.startswith(prefix):
            return cyrillize(word[:split_at]) + cyrillize(word[split_at:])
    return cyrillize(word)


def _cyrillize_text(text: str) -> str:
    def convert(match):
        word = match.group(0)
        return word if is_foreign(word) else cyrillize_word(word)

    return _LATIN_WORD_RE.sub(convert, text)


def transliterate(line: str) -> str:
    """
    Transliterate a subtitle line, leaving markup tags as they are.

    Example:
        >>> transliterate("<i>Zdravo</i>")
        '<i>Здраво</i>'
    """
    parts = split_markup(line)
    return ''.join(part if idx % 2 == 1 else _cyrillize_text(part)
                   for idx, part in enumerate(parts))


def cyrillization(entries: List[SubtitleEntry], params: Mapping[str, float],
                  context: PipelineContext) -> List[SubtitleEntry]:
    result = []
    for entry in entries:
        lines = [transliterate(line) for line in entry.lines]
        result.append(entry if lines == entry.lines
                      else SubtitleEntry(entry.index, entry.start_ms, entry.end_ms, lines))
    return result


PLUGIN = PluginDescriptor(
    id=PLUGIN_CYRILLIZATION,
    name="Cyrillization",
    description=("Converts subtitle text from Serbian Latin to Cyrillic. Handles "
                 "digraphs (lj→љ, nj→њ, dž→џ). Preserves formatting tags."),
    enabled=False,
    run=cyrillization,
)
