"""Word-frequency corpus used to rank rhyme candidates by commonness."""

from __future__ import annotations

import unicodedata
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional

from ..utils.observability import get_logger

_logger = get_logger(__name__).bind(component="corpus_loader")


def _normalize_word(value: Optional[str]) -> str:
    if not value:
        return ""
    return unicodedata.normalize("NFC", value).lower().strip()


def _parse_frequency(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        return 0
    return max(value, 0)


class FrequencyMap(Mapping[str, int]):
    """Read-only mapping of lowercase, NFC-composed word to corpus frequency.

    Absent words have frequency ``0``; an empty map signals that no corpus
    was available and callers should fall back to alphabetical ordering.
    """

    def __init__(self, frequencies: Optional[Mapping[str, int]] = None) -> None:
        cleaned: Dict[str, int] = {}
        for word, value in (frequencies or {}).items():
            normalized = _normalize_word(word)
            if not normalized:
                continue
            cleaned[normalized] = max(int(value), 0)
        self._frequencies = MappingProxyType(cleaned)

    def __getitem__(self, word: str) -> int:
        return self._frequencies[word]

    def __iter__(self) -> Iterator[str]:
        return iter(self._frequencies)

    def __len__(self) -> int:
        return len(self._frequencies)

    def __repr__(self) -> str:
        return f"FrequencyMap({len(self)} words)"

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "FrequencyMap":
        """Parse ``<word> <frequency>`` lines, skipping malformed entries.

        Later duplicates overwrite earlier ones; non-numeric frequencies
        count as zero.
        """

        frequencies: Dict[str, int] = {}
        for line in lines:
            parts = line.strip().split()
            if len(parts) < 2:
                continue
            word, raw_frequency = parts[0], parts[1]
            frequencies[_normalize_word(word)] = _parse_frequency(raw_frequency)
        return cls(frequencies)


EMPTY_FREQUENCY_MAP = FrequencyMap()


def load_corpus(corpus_path: Optional[Path | str]) -> FrequencyMap:
    """Load a frequency corpus, returning an empty map when it is unavailable."""

    if not corpus_path:
        return EMPTY_FREQUENCY_MAP

    path = Path(corpus_path)
    if not path.is_file():
        _logger.info("Frequency corpus not found", context={"path": str(path)})
        return EMPTY_FREQUENCY_MAP

    try:
        with path.open("r", encoding="utf-8") as handle:
            frequency_map = FrequencyMap.from_lines(handle)
    except (OSError, UnicodeDecodeError) as exc:
        _logger.warning(
            "Frequency corpus unreadable; ranking alphabetically",
            context={"path": str(path), "error": str(exc)},
        )
        return EMPTY_FREQUENCY_MAP

    _logger.info(
        "Frequency corpus loaded",
        context={"path": str(path), "words": len(frequency_map)},
    )
    return frequency_map


__all__ = ["FrequencyMap", "EMPTY_FREQUENCY_MAP", "load_corpus"]
