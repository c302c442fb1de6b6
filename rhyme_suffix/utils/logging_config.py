"""Helpers for configuring consistent project logging output."""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "RHYME_SUFFIX_LOG_LEVEL"

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_CONFIGURED = False


def _resolve_level(level: str | int | None, default: int = logging.INFO) -> int:
    if level is None or level == "":
        return default
    if isinstance(level, int):
        return level
    try:
        return int(level)
    except (TypeError, ValueError):
        normalized = str(level).strip().upper()
        resolved = getattr(logging, normalized, None)
        return resolved if isinstance(resolved, int) else default


def configure_logging(
    level: Optional[str | int] = None,
    *,
    default: str | int = logging.INFO,
    force: bool = False,
) -> int:
    """Initialise root logging handlers for the application.

    Records go to ``stderr`` so the single result line printed by the CLI
    on ``stdout`` is never interleaved with diagnostics. An explicit
    ``level`` wins over the ``RHYME_SUFFIX_LOG_LEVEL`` environment variable,
    which in turn wins over ``default``.

    Returns the effective level.
    """

    global _CONFIGURED

    fallback = _resolve_level(default)
    env_level = os.environ.get(LOG_LEVEL_ENV)
    resolved_level = _resolve_level(level if level is not None else env_level, fallback)

    if _CONFIGURED and not force:
        logging.getLogger("rhyme_suffix").setLevel(resolved_level)
        return resolved_level

    logging.basicConfig(level=resolved_level, format=_DEFAULT_FORMAT, force=force)
    logging.getLogger("rhyme_suffix").setLevel(resolved_level)
    _CONFIGURED = True
    return resolved_level


__all__ = ["configure_logging", "LOG_LEVEL_ENV"]
