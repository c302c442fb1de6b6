"""Extract suffix-matching words from the rhyme page HTML.

Two strategies are offered. ``structured`` reads the word list that follows
the "palabras que riman consonante con ..." heading, which is precise but
tied to the page markup. ``flat`` scans all visible text for words ending in
the suffix, which survives markup changes at the cost of picking up stray
words from the rest of the page. Both finish with :func:`filter_matches`.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence, Set

from bs4 import BeautifulSoup, Tag

from .normalize import ALPHABET, fold, normalize

__all__ = [
    "heading_markers",
    "extract_structured",
    "extract_flat",
    "filter_matches",
    "extract_candidates",
]

_HEADING_PREFIX = "palabras que riman consonante con "
_HEADING_JOINER = " de "
_RESULTS_CONTAINER = ".fz1"

_TOKEN_SPLIT = re.compile(r"[\s,;·—–-]+")
_WHITESPACE = re.compile(r"\s+")
_TWO_WORDS = re.compile(r"\b\w+[ \t]+\w+")
_LETTER_RUN = re.compile(rf"[{ALPHABET}]{{2,}}", re.IGNORECASE)


def _parse(html: Optional[str]) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def heading_markers(carrier: str) -> Sequence[str]:
    """Phrases a results heading must contain (after folding) for ``carrier``."""

    return (_HEADING_PREFIX, fold(carrier), _HEADING_JOINER)


def _looks_like_list(text: str) -> bool:
    return (
        "," in text
        or _TWO_WORDS.search(text) is not None
        or _LETTER_RUN.search(text) is not None
    )


def _list_block_after(heading: Tag) -> Optional[str]:
    sibling = heading.find_next_sibling()
    while isinstance(sibling, Tag) and sibling.name == "p":
        text = sibling.get_text()
        if _looks_like_list(text):
            return text
        sibling = sibling.find_next_sibling()
    return None


def extract_structured(html: Optional[str], carrier: str) -> List[str]:
    """Return normalized tokens from the word lists under matching headings."""

    soup = _parse(html)
    root = soup.select_one(_RESULTS_CONTAINER) or soup.body or soup
    markers = heading_markers(carrier)

    blocks: List[str] = []
    for heading in root.find_all("h3"):
        title = fold(heading.get_text())
        if not all(marker in title for marker in markers):
            continue
        block = _list_block_after(heading)
        if block is not None:
            blocks.append(block)

    tokens = (normalize(piece) for piece in _TOKEN_SPLIT.split(" ".join(blocks)))
    return [token for token in tokens if token]


def extract_flat(html: Optional[str], suffix: str) -> List[str]:
    """Return every visible word in ``html`` that ends with ``suffix``."""

    if not suffix:
        return []

    soup = _parse(html)
    for element in soup(["script", "style"]):
        element.decompose()
    text = _WHITESPACE.sub(" ", soup.get_text(" ")).lower()

    pattern = re.compile(rf"\b[{ALPHABET}]+{re.escape(suffix.lower())}\b")
    return pattern.findall(text)


def filter_matches(tokens: Iterable[str], suffix: str) -> Set[str]:
    """Keep tokens that end with ``suffix`` and are longer than it."""

    if not suffix:
        return set()
    matches: Set[str] = set()
    for token in tokens:
        word = normalize(token)
        if len(word) > len(suffix) and word.endswith(suffix):
            matches.add(word)
    return matches


def extract_candidates(
    html: Optional[str],
    suffix: str,
    carrier: Optional[str] = None,
    *,
    strategy: str = "structured",
) -> Set[str]:
    """Run one extraction strategy over ``html`` and filter to ``suffix``.

    ``carrier`` is the term that was actually submitted to the page; it
    defaults to the suffix and only matters for the structured strategy,
    whose headings quote the submitted term.
    """

    if strategy == "structured":
        tokens = extract_structured(html, carrier or suffix)
    elif strategy == "flat":
        tokens = extract_flat(html, suffix)
    else:
        raise ValueError(f"Unknown extraction strategy: {strategy!r}")
    return filter_matches(tokens, suffix)
