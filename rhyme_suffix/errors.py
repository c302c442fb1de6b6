"""Exception hierarchy for suffix rhyme searches."""

from __future__ import annotations


class RhymeSuffixError(Exception):
    """Base class for errors raised by :mod:`rhyme_suffix`."""


class InvalidInputError(RhymeSuffixError):
    """Raised when no usable suffix (or a malformed option) is supplied."""


class RemoteUnavailableError(RhymeSuffixError):
    """Raised when the remote page cannot be loaded or driven in time."""


class SearchFailedError(RhymeSuffixError):
    """Raised when every requested suffix failed to reach the remote page."""


__all__ = [
    "RhymeSuffixError",
    "InvalidInputError",
    "RemoteUnavailableError",
    "SearchFailedError",
]
