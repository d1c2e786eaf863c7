"""
Tests for encoding detection and strict byte/text conversion.
"""

import pytest

from core.codec import EncodingDetector
from core.errors import EncodingError


def test_utf8_bom_is_detected():
    assert EncodingDetector.detect_encoding(bytes([0xEF, 0xBB, 0xBF, 0x48, 0x69])) == 'utf-8'


def test_utf16_boms_are_detected():
    assert EncodingDetector.detect_encoding(b"\xff\xfeH\x00i\x00") == 'utf-16le'
    assert EncodingDetector.detect_encoding(b"\xfe\xff\x00H\x00i") == 'utf-16be'


def test_plain_ascii_is_utf8():
    assert EncodingDetector.detect_encoding(b"Hello, world!\n") == 'utf-8'


def test_empty_input_is_utf8():
    assert EncodingDetector.detect_encoding(b"") == 'utf-8'


def test_valid_multibyte_utf8_without_bom():
    assert EncodingDetector.detect_encoding(bytes([0xC5, 0xBD])) == 'utf-8'


def test_latin_text_with_few_high_bytes_is_windows_1250():
    data = b"Hello World this is a test of encoding " + bytes([0x9A, 0x9E])
    assert EncodingDetector.detect_encoding(data) == 'windows-1250'


def test_dense_high_bytes_are_windows_1251():
    data = bytes([0xCF, 0xD0, 0xE8, 0xE2, 0xE5, 0xF2])
    assert EncodingDetector.detect_encoding(data) == 'windows-1251'


def test_high_byte_ratio_ignores_whitespace():
    # 2 high bytes out of 4 non-whitespace bytes
    assert EncodingDetector.high_byte_ratio(b"a \xe8\n\xe2\tb  ") == 0.5
    assert EncodingDetector.high_byte_ratio(b" \r\n\t") == 0.0


def test_threshold_boundary_selects_cyrillic():
    # Exactly 20% high bytes: 1 of 5, and not valid UTF-8
    data = b"abcd\xe8"
    assert EncodingDetector.high_byte_ratio(data) == pytest.approx(0.2)
    assert EncodingDetector.detect_encoding(data) == 'windows-1251'


def test_overlong_utf8_is_rejected():
    assert not EncodingDetector.is_valid_utf8(b"\xc0\xaf")
    assert not EncodingDetector.is_valid_utf8(b"\xed\xa0\x80")  # surrogate


def test_decode_consumes_bom():
    assert EncodingDetector.decode(b"\xef\xbb\xbfHi", 'utf-8') == "Hi"
    assert EncodingDetector.decode(b"\xff\xfeH\x00i\x00", 'utf-16le') == "Hi"
    assert EncodingDetector.decode(b"\xfe\xff\x00H\x00i", 'utf-16be') == "Hi"


def test_decode_windows_code_pages():
    assert EncodingDetector.decode(bytes([0xCF, 0xF0, 0xE8]), 'windows-1251') == "При"
    assert EncodingDetector.decode(bytes([0x9A, 0x9E]), 'windows-1250') == "šž"


def test_decode_failure_reports_offset():
    with pytest.raises(EncodingError) as exc_info:
        EncodingDetector.decode(b"ok\xff", 'utf-8')
    assert exc_info.value.encoding == 'utf-8'
    assert exc_info.value.position == 2


def test_encode_writes_bom_for_utf16_only():
    assert EncodingDetector.encode("Hi", 'utf-16le') == b"\xff\xfeH\x00i\x00"
    assert EncodingDetector.encode("Hi", 'utf-16be') == b"\xfe\xff\x00H\x00i"
    assert EncodingDetector.encode("Hi", 'utf-8') == b"Hi"


def test_encode_unrepresentable_character():
    with pytest.raises(EncodingError) as exc_info:
        EncodingDetector.encode("Line one\nЗдраво", 'windows-1250')
    assert exc_info.value.encoding == 'windows-1250'
    assert "line 2" in str(exc_info.value)


def test_unsupported_encoding():
    with pytest.raises(EncodingError):
        EncodingDetector.encode("Hi", 'latin-9')


@pytest.mark.parametrize("encoding", ['utf-8', 'utf-16le', 'utf-16be'])
def test_unicode_round_trip(encoding):
    text = "Ćao, šta ima? Здраво!\n"
    data = EncodingDetector.encode(text, encoding)
    assert EncodingDetector.detect_encoding(data) == encoding
    assert EncodingDetector.decode(data, encoding) == text


def test_single_byte_round_trip():
    latin = "Čačak, Đurđevdan, šišmiš, žaba\n"
    assert EncodingDetector.decode(EncodingDetector.encode(latin, 'windows-1250'),
                                   'windows-1250') == latin
    cyrillic = "Чачак, Ђурђевдан\n"
    assert EncodingDetector.decode(EncodingDetector.encode(cyrillic, 'windows-1251'),
                                   'windows-1251') == cyrillic


def test_encoding_label():
    assert EncodingDetector.encoding_label('windows-1250') == '1250'
    assert EncodingDetector.encoding_label('windows-1251') == '1251'
    assert EncodingDetector.encoding_label('utf-16le') == 'UTF-16LE'


def test_second_opinion_handles_empty_input():
    assert EncodingDetector.second_opinion(b"") is None
