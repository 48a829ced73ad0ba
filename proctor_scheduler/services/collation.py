"""Turkish alphabetical ordering for names and branches."""

from __future__ import annotations

import unicodedata
from typing import Tuple

# Turkish letter order with q, w, x slotted where Latin puts them
ALPHABET = "abcçdefgğhıijklmnoöpqrsştuüvwxyz"
_RANK = {letter: index for index, letter in enumerate(ALPHABET)}


def turkish_lower(text: str) -> str:
    """Lowercase with the dotted/dotless I pairs handled the Turkish way."""
    return text.replace("I", "ı").replace("İ", "i").lower()


def _weights(ch: str) -> Tuple[Tuple[int, int], str]:
    """Primary weight and accent marks for one lowercased character."""
    if ch in _RANK:
        return (1, _RANK[ch]), ""
    # â, î, û, é ... rank with their base letter; the marks only break ties
    decomposed = unicodedata.normalize("NFD", ch)
    base, marks = decomposed[0], decomposed[1:]
    if base in _RANK:
        return (1, _RANK[base]), marks
    return (0, ord(ch)), ""


def collation_key(
    text: str | None,
) -> Tuple[Tuple[Tuple[int, int], ...], Tuple[str, ...], Tuple[bool, ...]]:
    """
    Sort key comparing letters by Turkish alphabet position first, then
    unaccented before accented, then lowercase before uppercase.
    Non-letters sort before letters by code point.
    """
    text = unicodedata.normalize("NFC", text or "")
    weights = [_weights(ch) for ch in turkish_lower(text)]
    primary = tuple(w for w, _ in weights)
    secondary = tuple(marks for _, marks in weights)
    tertiary = tuple(ch.isupper() for ch in text)
    return primary, secondary, tertiary
