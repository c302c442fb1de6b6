"""Services behind the CLI and web front-ends."""

from .result_formatter import (
    NO_MATCHES_MESSAGE,
    format_markdown,
    format_no_matches,
    format_union,
)
from .search_service import (
    RhymeSearchService,
    SearchResult,
    SuffixOutcome,
    no_delay,
    prepare_suffixes,
    random_throttle,
)

__all__ = [
    "RhymeSearchService",
    "SearchResult",
    "SuffixOutcome",
    "no_delay",
    "prepare_suffixes",
    "random_throttle",
    "NO_MATCHES_MESSAGE",
    "format_markdown",
    "format_no_matches",
    "format_union",
]
