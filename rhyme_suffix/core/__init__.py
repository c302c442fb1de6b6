"""Scraping-independent core: normalisation, extraction and ranking."""

from .extractor import (
    extract_candidates,
    extract_flat,
    extract_structured,
    filter_matches,
    heading_markers,
)
from .frequency_map import EMPTY_FREQUENCY_MAP, FrequencyMap, load_corpus
from .normalize import collation_key, fold, normalize
from .query_terms import carrier_terms_for
from .ranker import DEFAULT_LIMIT, merge_union, rank_top

__all__ = [
    "FrequencyMap",
    "EMPTY_FREQUENCY_MAP",
    "load_corpus",
    "normalize",
    "fold",
    "collation_key",
    "heading_markers",
    "extract_structured",
    "extract_flat",
    "filter_matches",
    "extract_candidates",
    "carrier_terms_for",
    "DEFAULT_LIMIT",
    "rank_top",
    "merge_union",
]
