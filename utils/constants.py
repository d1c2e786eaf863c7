"""
Shared constants and configurations for the SRT editor.

This module contains all the constants used across different modules including:
- Supported file extensions and output naming
- Encoding labels, codec names and detection thresholds
- Plugin identifiers and default parameter values
- Serbian Latin to Cyrillic transliteration tables
- Statistics thresholds and logging formats
"""

from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

# ============================================================================
# FILE FORMAT CONSTANTS
# ============================================================================

# Only SubRip timed text is supported
SUBTITLE_EXTENSIONS: Set[str] = {'.srt'}

# Suffix used for output files when Cyrillization is enabled
CYRILLIC_OUTPUT_SUFFIX: str = '.cyr.sr.srt'

# ============================================================================
# ENCODING CONSTANTS
# ============================================================================

UTF8 = 'utf-8'
UTF16_LE = 'utf-16le'
UTF16_BE = 'utf-16be'
WINDOWS_1250 = 'windows-1250'
WINDOWS_1251 = 'windows-1251'

# Encoding label -> Python codec name
CODEC_NAMES: Dict[str, str] = {
    UTF8: 'utf-8',
    UTF16_LE: 'utf-16-le',
    UTF16_BE: 'utf-16-be',
    WINDOWS_1250: 'cp1250',
    WINDOWS_1251: 'cp1251',
}

# Byte order marks
UTF8_BOM: bytes = b"\xef\xbb\xbf"
UTF16_LE_BOM: bytes = b"\xff\xfe"
UTF16_BE_BOM: bytes = b"\xfe\xff"

# Checked in order; the UTF-8 BOM is longest and cannot collide with the others
BOM_SIGNATURES: List[Tuple[bytes, str]] = [
    (UTF8_BOM, UTF8),
    (UTF16_LE_BOM, UTF16_LE),
    (UTF16_BE_BOM, UTF16_BE),
]

# Share of high-range bytes among non-whitespace bytes at or above which
# non-UTF-8 input is classified as Cyrillic (Windows-1251)
CYRILLIC_HIGH_BYTE_THRESHOLD: float = 0.20

# Bytes ignored when computing the high-byte ratio
WHITESPACE_BYTES: FrozenSet[int] = frozenset(b" \t\r\n\x0b\x0c")

# Target encoding option value -> encoding label (None keeps the original)
ENCODING_TARGETS: Dict[int, Optional[str]] = {
    0: None,
    1: UTF8,
    2: WINDOWS_1250,
    3: WINDOWS_1251,
}

ENCODING_TARGET_LABELS: Dict[int, str] = {
    0: "Keep original",
    1: "UTF-8",
    2: "Windows-1250",
    3: "Windows-1251",
}

# ============================================================================
# PLUGIN CONSTANTS
# ============================================================================

PLUGIN_REMOVE_ADS = 'remove_ads'
PLUGIN_CYRILLIZATION = 'cyrillization'
PLUGIN_LONG_LINES = 'long_lines'
PLUGIN_CPS = 'cps'
PLUGIN_MIN_DURATION = 'min_duration'
PLUGIN_GAP = 'gap'
PLUGIN_ENCODING = 'encoding'

# Default plugin parameter values
DEFAULT_MAX_LINE_LENGTH: int = 42
DEFAULT_MAX_CPS: int = 25
DEFAULT_MIN_DURATION_MS: int = 2000
DEFAULT_MIN_GAP_MS: int = 125

# Gap kept before the next subtitle when extending and the Gap plugin is off
MIN_SUBTITLE_BUFFER_MS: int = 1

# Known advertisement subtitles removed from the first and last position
AD_TEXTS: List[str] = [
    "Preuzeto sa www.titlovi.com",
    "www.titlovi.com",
]

# ============================================================================
# TRANSLITERATION CONSTANTS
# ============================================================================

# Serbian Latin -> Cyrillic digraphs (matched before single letters)
LATIN_DIGRAPHS: Dict[str, str] = {
    'lj': 'љ', 'Lj': 'Љ', 'LJ': 'Љ',
    'nj': 'њ', 'Nj': 'Њ', 'NJ': 'Њ',
    'dž': 'џ', 'Dž': 'Џ', 'DŽ': 'Џ',
}

# Serbian Latin -> Cyrillic single letters
LATIN_LETTERS: Dict[str, str] = {
    'a': 'а', 'A': 'А', 'b': 'б', 'B': 'Б',
    'c': 'ц', 'C': 'Ц', 'č': 'ч', 'Č': 'Ч',
    'ć': 'ћ', 'Ć': 'Ћ', 'd': 'д', 'D': 'Д',
    'đ': 'ђ', 'Đ': 'Ђ', 'e': 'е', 'E': 'Е',
    'f': 'ф', 'F': 'Ф', 'g': 'г', 'G': 'Г',
    'h': 'х', 'H': 'Х', 'i': 'и', 'I': 'И',
    'j': 'ј', 'J': 'Ј', 'k': 'к', 'K': 'К',
    'l': 'л', 'L': 'Л', 'm': 'м', 'M': 'М',
    'n': 'н', 'N': 'Н', 'o': 'о', 'O': 'О',
    'p': 'п', 'P': 'П', 'r': 'р', 'R': 'Р',
    's': 'с', 'S': 'С', 'š': 'ш', 'Š': 'Ш',
    't': 'т', 'T': 'Т', 'u': 'у', 'U': 'У',
    'v': 'в', 'V': 'В', 'z': 'з', 'Z': 'З',
    'ž': 'ж', 'Ž': 'Ж',
}

# Letters absent from the Serbian alphabet; a word containing one is foreign
FOREIGN_LETTERS: FrozenSet[str] = frozenset('wqyxWQYX')

# Whole words that are never transliterated (compared lowercase)
FOREIGN_WORDS: FrozenSet[str] = frozenset({
    "about", "air", "alpha", "and", "back", "bitcoin", "brainz",
    "celebrities", "co2", "conditions", "cpu", "creative", "disclaimer",
    "discord", "dj", "electronics", "entertainment", "files", "fresh",
    "fun", "geographic", "gmbh", "green", "h2o", "hair", "have", "home",
    "idj", "idjtv", "latest", "life", "like", "live",
    "login", "made", "makeup", "must", "national", "previous", "public",
    "punk", "reserved", "score", "screen", "terms", "the", "url",
    "visa",
})

# Lowercase prefixes whose digraph spans a morpheme boundary, with the offset
# at which the word is split before transliteration
DIGRAPH_SPLIT_PREFIXES: List[Tuple[str, int]] = [
    ("nadž", 3),    # nad|živeti
    ("injekc", 2),  # in|jekcija
    ("konjuk", 3),  # kon|juktura
    ("konjug", 3),  # kon|jugacija
    ("tanjug", 3),  # tan|jug
]

# Uppercase Roman numerals (IV, XII, MCMXCIX)
ROMAN_NUMERAL_PATTERN: str = r'^M{0,3}(CM|CD|D?C{0,3})(XC|XL|L?X{0,3})(IX|IV|V?I{0,3})$'

# Runs of Latin letters and digits including Serbian diacritics
LATIN_WORD_PATTERN: str = r'[a-zA-Z0-9ČčĆćĐđŠšŽž]+'

# ============================================================================
# MARKUP CONSTANTS
# ============================================================================

# Any tag span, preserved as-is by transliteration
MARKUP_SPAN_PATTERN: str = r'(<[^>]+>|\{[^}]+\})'

# Formatting tags excluded from visible length
HTML_TAG_PATTERN: str = r'</?(?:b|i|u|font)(?: [^>]*)?\s*>'
BRACE_TAG_PATTERN: str = r'\{/?\s*[biu]\s*\}'

# ============================================================================
# STATISTICS CONSTANTS
# ============================================================================

# Count entries whose CPS is strictly above each threshold
STATS_CPS_THRESHOLDS: Tuple[int, ...] = (15, 20, 25, 30)

# Count entries whose duration is strictly below each threshold (ms)
STATS_DURATION_THRESHOLDS_MS: Tuple[int, ...] = (1000, 1500, 2000)

# ============================================================================
# DEFAULT CONFIGURATION VALUES
# ============================================================================

# Persisted plugin settings
SETTINGS_DIR_NAME: str = ".srt_editor"
SETTINGS_FILE_NAME: str = "plugin_settings.json"
DEFAULT_SETTINGS_PATH: Path = Path.home() / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME

# Default backup directory name
BACKUP_DIR_NAME: str = "subtitle_backups"

# Default worker count for parallel document runs
DEFAULT_MAX_WORKERS: int = 4

# Log formats: short on the console, detailed in log files
APP_LOGGER_NAME: str = "srt_editor"
CONSOLE_LOG_FORMAT: str = "%(levelname)s: %(message)s"
DEFAULT_LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

# Application metadata
APP_NAME: str = "SRT Editor"
APP_VERSION: str = "1.10.0"
APP_DESCRIPTION: str = """
A subtitle clean-up tool for SubRip (.srt) files with support for:
- Encoding detection (UTF-8, UTF-16, Windows-1250, Windows-1251)
- Removal of known advertisement subtitles
- Serbian Latin to Cyrillic transliteration
- Long line rebalancing
- Reading speed (CPS), minimum duration and minimum gap correction
- Output encoding selection, change logs, diffs and statistics
"""
