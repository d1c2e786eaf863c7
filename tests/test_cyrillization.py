"""
Tests for Serbian Latin to Cyrillic transliteration.
"""

import pytest

from conftest import context, sub
from plugins.cyrillization import cyrillization, is_foreign, transliterate


@pytest.mark.parametrize("latin, cyrillic", [
    ("Zdravo", "Здраво"),
    ("ljubav", "љубав"),
    ("njuska", "њуска"),
    ("džep", "џеп"),
    ("Ljubljana", "Љубљана"),
    ("Njujork", "Њујорк"),
    ("LJUBAV", "ЉУБАВ"),
    ("Čačak i Đurđevdan", "Чачак и Ђурђевдан"),
    ("ti i ja", "ти и ја"),
    ("I DEO", "И ДЕО"),
])
def test_transliterates_serbian_words(latin, cyrillic):
    assert transliterate(latin) == cyrillic


@pytest.mark.parametrize("latin, cyrillic", [
    ("tanjug", "танјуг"),
    ("Tanjug", "Танјуг"),
    ("nadživeti", "надживети"),
    ("Nadživeo", "Надживео"),
    ("injekcija", "инјекција"),
    ("konjuktivitis", "конјуктивитис"),
    ("konjugacija", "конјугација"),
])
def test_digraphs_across_morpheme_boundaries(latin, cyrillic):
    assert transliterate(latin) == cyrillic


@pytest.mark.parametrize("word", [
    "YouTube", "live", "Discord", "VISA", "DISCLAIMER", "co2", "h2o", "Wow", "Quiz", "Xbox",
])
def test_foreign_words_are_kept(word):
    assert transliterate(word) == word


def test_words_with_x_stay_latin():
    assert transliterate("Max") == "Max"
    assert transliterate("Taksi ili taxi") == "Такси или taxi"


def test_foreign_word_inside_sentence():
    assert transliterate("Idemo na YouTube") == "Идемо на YouTube"
    assert transliterate("Fresh Air") == "Fresh Air"


def test_roman_numerals():
    assert transliterate("Luj IV") == "Луј IV"
    assert transliterate("U II svetskom ratu") == "У II светском рату"
    assert transliterate("VII vek") == "VII век"
    assert transliterate("XII") == "XII"
    assert transliterate("MCMXCIX") == "MCMXCIX"


def test_single_letter_words_are_not_roman_numerals():
    assert not is_foreign("I")
    assert is_foreign("IV")


def test_markup_is_preserved():
    assert transliterate("<i>Zdravo</i>") == "<i>Здраво</i>"
    assert transliterate("{b}Zdravo{/b}") == "{b}Здраво{/b}"
    assert transliterate('<font color="red">crveno</font>') == '<font color="red">црвено</font>'


def test_punctuation_and_digits_pass_through():
    assert transliterate("Da li je 10:30? Jeste!") == "Да ли је 10:30? Јесте!"


def test_transliteration_is_idempotent():
    for text in ["Zdravo svete", "Idemo na YouTube", "<i>Ljubljana</i> IV", "nadživeti"]:
        once = transliterate(text)
        assert transliterate(once) == once


def test_plugin_transliterates_every_line():
    entries = [sub(1, 0, 1000, "Zdravo", "<i>svete</i>"), sub(2, 1000, 2000, "123")]
    result = cyrillization(entries, {}, context())

    assert result[0].lines == ["Здраво", "<i>свете</i>"]
    assert result[0].start_ms == 0 and result[0].end_ms == 1000
    assert result[1] is entries[1]
    assert entries[0].lines == ["Zdravo", "<i>svete</i>"]
