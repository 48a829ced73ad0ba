"""Tests for Turkish collation order."""

from proctor_scheduler.services.collation import collation_key, turkish_lower


def test_turkish_lower_dotted_and_dotless_i():
    assert turkish_lower("IŞIK") == "ışık"
    assert turkish_lower("İZMİR") == "izmir"


def test_turkish_letters_sort_after_their_base_letter():
    words = ["Pazar", "Ödev", "Oyun", "Çevre", "Coğrafya", "Din"]
    assert sorted(words, key=collation_key) == ["Coğrafya", "Çevre", "Din", "Oyun", "Ödev", "Pazar"]


def test_dotless_i_sorts_before_dotted_i():
    assert sorted(["İngilizce", "Işık"], key=collation_key) == ["Işık", "İngilizce"]


def test_empty_and_none_sort_first():
    assert sorted(["Tarih", "", None], key=collation_key) == ["", None, "Tarih"]


def test_circumflex_letters_sort_with_their_base_letter():
    words = ["Kâtiplik", "Kabin", "Abc"]
    assert sorted(words, key=collation_key) == ["Abc", "Kabin", "Kâtiplik"]


def test_accent_only_breaks_ties():
    assert sorted(["Kâr", "Kar", "Kas"], key=collation_key) == ["Kar", "Kâr", "Kas"]


def test_turkish_letters_are_not_folded_into_base():
    assert sorted(["Şule", "Sude", "Tarık"], key=collation_key) == ["Sude", "Şule", "Tarık"]
