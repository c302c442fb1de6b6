"""Derive the search terms submitted to the rhyme page for a suffix."""

from __future__ import annotations

from typing import List

# The remote search returns little or nothing for two-letter queries, so
# those are first tried with a leading consonant ("os" -> "dos").
SHORT_SUFFIX_LENGTH = 2
SHORT_SUFFIX_PREFIX = "d"


def carrier_terms_for(suffix: str) -> List[str]:
    """Return the query terms to try, in order, for ``suffix``."""

    if len(suffix) == SHORT_SUFFIX_LENGTH:
        return [f"{SHORT_SUFFIX_PREFIX}{suffix}", suffix]
    return [suffix]


__all__ = ["carrier_terms_for", "SHORT_SUFFIX_LENGTH", "SHORT_SUFFIX_PREFIX"]
