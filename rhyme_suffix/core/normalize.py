"""Token normalisation helpers for Spanish word lists."""

from __future__ import annotations

import re
import unicodedata
from typing import Optional, Tuple

__all__ = ["ALPHABET", "normalize", "fold", "collation_key"]

ALPHABET = "a-záéíóúüñ"

_EDGE_PATTERN = re.compile(rf"^[^{ALPHABET}]+|[^{ALPHABET}]+$")
_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")


def normalize(value: Optional[str]) -> str:
    """Return the canonical form of ``value``.

    Lowercases, composes to NFC and trims any leading or trailing run of
    characters outside the Spanish alphabet. Interior characters are left
    alone, so ``"«pan-tano»"`` becomes ``"pan-tano"``.
    """

    if not value:
        return ""
    composed = unicodedata.normalize("NFC", value.lower())
    return _EDGE_PATTERN.sub("", composed)


def fold(value: Optional[str]) -> str:
    """Strip accents and case for loose comparisons (``"Canción"`` -> ``"cancion"``)."""

    if not value:
        return ""
    decomposed = unicodedata.normalize("NFD", value)
    return _COMBINING_MARKS.sub("", decomposed).lower()


def collation_key(word: str) -> Tuple[str, str, str]:
    """Sort key approximating Spanish locale ordering.

    Accented vowels collate with their base letter and ``ñ`` sorts after
    every ``n`` sequence but before ``o``. The exact word breaks ties so
    ``"papa"`` still precedes ``"papá"`` deterministically.
    """

    lowered = word.lower()
    primary = fold(lowered.replace("ñ", "n\x7f"))
    return primary, lowered, word
