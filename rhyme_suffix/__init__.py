"""Rank Spanish rhymes for word endings scraped from an online rhyme search."""

from .config import Settings
from .errors import (
    InvalidInputError,
    RemoteUnavailableError,
    RhymeSuffixError,
    SearchFailedError,
)

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "RhymeSuffixError",
    "InvalidInputError",
    "RemoteUnavailableError",
    "SearchFailedError",
    "__version__",
]
