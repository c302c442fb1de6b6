"""Ranking and merging of per-suffix candidate lists."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence, Set

from .normalize import collation_key

DEFAULT_LIMIT = 20


def rank_top(
    words: Iterable[str],
    frequency_map: Optional[Mapping[str, int]] = None,
    limit: int = DEFAULT_LIMIT,
) -> List[str]:
    """Return at most ``limit`` unique words, most frequent first.

    Without frequency data the words are ordered alphabetically (Spanish
    collation). With it, higher corpus frequency wins and ties fall back to
    the same alphabetical order; words missing from the corpus count as 0.
    """

    limit = max(1, int(limit))
    unique = set(words)
    if not unique:
        return []

    if not frequency_map:
        ordered = sorted(unique, key=collation_key)
    else:
        ordered = sorted(
            unique,
            key=lambda word: (-frequency_map.get(word, 0), collation_key(word)),
        )
    return ordered[:limit]


def merge_union(ranked_lists: Iterable[Sequence[str]]) -> List[str]:
    """Concatenate ranked lists, keeping only each word's first appearance."""

    union: List[str] = []
    seen: Set[str] = set()
    for ranked in ranked_lists:
        for word in ranked:
            if word in seen:
                continue
            seen.add(word)
            union.append(word)
    return union


__all__ = ["DEFAULT_LIMIT", "rank_top", "merge_union"]
