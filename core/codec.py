"""
Encoding detection and conversion utilities for subtitle files.

This module provides heuristic encoding detection with special focus on the
two single-byte code pages used for Serbian subtitles (Windows-1250 for
Latin script, Windows-1251 for Cyrillic), plus strict decoding and encoding
with byte order mark handling.
"""

from typing import Optional

from charset_normalizer import from_bytes

from core.errors import EncodingError
from utils.constants import (
    BOM_SIGNATURES, CODEC_NAMES, CYRILLIC_HIGH_BYTE_THRESHOLD, UTF8, UTF8_BOM,
    UTF16_BE, UTF16_BE_BOM, UTF16_LE, UTF16_LE_BOM, WHITESPACE_BYTES,
    WINDOWS_1250, WINDOWS_1251,
)
from utils.logging_config import get_logger

logger = get_logger(__name__)

# BOM consumed on decode and written on encode
_DECODE_BOMS = {
    UTF8: UTF8_BOM,
    UTF16_LE: UTF16_LE_BOM,
    UTF16_BE: UTF16_BE_BOM,
}
_ENCODE_BOMS = {
    UTF16_LE: UTF16_LE_BOM,
    UTF16_BE: UTF16_BE_BOM,
}


class EncodingDetector:
    """Handles encoding detection and byte/text conversion for subtitle files."""

    @staticmethod
    def detect_encoding(data: bytes) -> str:
        """
        Detect the encoding of a subtitle byte buffer.

        Byte order marks take precedence. Without a BOM, buffers that are
        well-formed UTF-8 (including pure ASCII) are UTF-8; anything else is
        classified by the share of high-range bytes among non-whitespace
        bytes: Cyrillic text in a single-byte code page is dense in high
        bytes, Latin text with diacritics is mostly ASCII.

        Args:
            data: Raw file content

        Returns:
            Encoding label (see utils.constants.CODEC_NAMES)

        Example:
            >>> EncodingDetector.detect_encoding(b"\\xef\\xbb\\xbfHi")
            'utf-8'
        """
        bom_encoding = EncodingDetector.detect_bom(data)
        if bom_encoding:
            logger.debug(f"BOM detected: {bom_encoding}")
            return bom_encoding

        if EncodingDetector.is_valid_utf8(data):
            return UTF8

        ratio = EncodingDetector.high_byte_ratio(data)
        encoding = WINDOWS_1251 if ratio >= CYRILLIC_HIGH_BYTE_THRESHOLD else WINDOWS_1250
        logger.debug(f"Invalid UTF-8, high-byte ratio {ratio:.2%} -> {encoding}")
        return encoding

    @staticmethod
    def detect_bom(data: bytes) -> Optional[str]:
        """
        Return the encoding announced by a leading byte order mark, if any.

        Args:
            data: Raw file content

        Returns:
            Encoding label or None when there is no BOM
        """
        for bom, encoding in BOM_SIGNATURES:
            if data.startswith(bom):
                return encoding
        return None

    @staticmethod
    def is_valid_utf8(data: bytes) -> bool:
        """Check whether the buffer is well-formed UTF-8 (no overlong forms, no surrogates)."""
        try:
            data.decode('utf-8', 'strict')
        except UnicodeDecodeError:
            return False
        return True

    @staticmethod
    def high_byte_ratio(data: bytes) -> float:
        """
        Compute the share of bytes >= 0x80 among non-whitespace bytes.

        Args:
            data: Raw file content

        Returns:
            Ratio between 0.0 and 1.0 (0.0 for whitespace-only input)
        """
        non_whitespace = 0
        high = 0
        for byte in data:
            if byte in WHITESPACE_BYTES:
                continue
            non_whitespace += 1
            if byte >= 0x80:
                high += 1
        if non_whitespace == 0:
            return 0.0
        return high / non_whitespace

    @staticmethod
    def decode(data: bytes, encoding: str) -> str:
        """
        Decode a byte buffer strictly, consuming a matching BOM.

        Args:
            data: Raw file content
            encoding: Encoding label

        Returns:
            Decoded text

        Raises:
            EncodingError: If the encoding is unsupported or a byte sequence
                cannot be mapped

        Example:
            >>> EncodingDetector.decode(b"\\xff\\xfeH\\x00", "utf-16le")
            'H'
        """
        codec = EncodingDetector._codec_name(encoding)

        bom = _DECODE_BOMS.get(encoding)
        offset = 0
        if bom and data.startswith(bom):
            offset = len(bom)

        try:
            return data[offset:].decode(codec, 'strict')
        except UnicodeDecodeError as e:
            position = offset + e.start
            message = (f"Cannot decode byte 0x{data[position]:02X} at offset {position} "
                       f"as {encoding}")
            guess = EncodingDetector.second_opinion(data)
            if guess:
                message += f" (content looks like {guess})"
            raise EncodingError(message, encoding=encoding, position=position) from e

    @staticmethod
    def encode(text: str, encoding: str) -> bytes:
        """
        Encode text strictly, writing a BOM for UTF-16 variants.

        Args:
            text: Text to encode
            encoding: Encoding label

        Returns:
            Encoded bytes

        Raises:
            EncodingError: If the encoding is unsupported or the text contains
                characters the encoding cannot represent
        """
        codec = EncodingDetector._codec_name(encoding)
        try:
            body = text.encode(codec, 'strict')
        except UnicodeEncodeError as e:
            char = e.object[e.start]
            line = e.object.count('\n', 0, e.start) + 1
            raise EncodingError(
                f"Character {char!r} (U+{ord(char):04X}) on line {line} "
                f"cannot be encoded as {encoding}",
                encoding=encoding, position=e.start
            ) from e
        return _ENCODE_BOMS.get(encoding, b"") + body

    @staticmethod
    def second_opinion(data: bytes) -> Optional[str]:
        """
        Ask charset-normalizer for its best guess, for diagnostics only.

        Args:
            data: Raw file content

        Returns:
            Python codec name suggested by charset-normalizer, or None
        """
        if not data:
            return None
        best = from_bytes(data).best()
        return best.encoding if best else None

    @staticmethod
    def encoding_label(encoding: str) -> str:
        """
        Get a short display label for an encoding.

        Example:
            >>> EncodingDetector.encoding_label("windows-1251")
            '1251'
        """
        if encoding.startswith('windows-'):
            return encoding[len('windows-'):]
        return encoding.upper()

    @staticmethod
    def _codec_name(encoding: str) -> str:
        try:
            return CODEC_NAMES[encoding]
        except KeyError:
            raise EncodingError(f"Unsupported encoding: {encoding}", encoding=encoding) from None
