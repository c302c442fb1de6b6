"""Utility helpers shared across the :mod:`rhyme_suffix` package."""

from __future__ import annotations

from .logging_config import configure_logging
from .observability import StructuredLoggerAdapter, get_logger
from .telemetry import StructuredTelemetry, TelemetryLogger

__all__ = [
    "configure_logging",
    "StructuredLoggerAdapter",
    "get_logger",
    "StructuredTelemetry",
    "TelemetryLogger",
]
