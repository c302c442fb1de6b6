"""Application wiring for the suffix rhyme finder."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional, Sequence

from ..config import Settings
from ..core import FrequencyMap, load_corpus
from ..utils.observability import get_logger
from ..utils.telemetry import StructuredTelemetry, TelemetryLogger
from .services.result_formatter import format_markdown
from .services.search_service import (
    DelayPolicy,
    RhymeSearchService,
    SearchResult,
    SessionOpener,
)


class RhymeSuffixApp:
    """High-level facade bundling settings, corpus and search service."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        frequency_map: Optional[FrequencyMap] = None,
        session_opener: Optional[SessionOpener] = None,
        delay_policy: Optional[DelayPolicy] = None,
        sleep: Optional[Callable[[float], None]] = None,
        search_service: Optional[RhymeSearchService] = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self._logger = get_logger(__name__).bind(component="app_facade")

        if frequency_map is None:
            corpus_path: Path = self.settings.resolved_corpus_path
            frequency_map = load_corpus(corpus_path)
        self.frequency_map = frequency_map

        if search_service is None:
            telemetry = StructuredTelemetry(listeners=[TelemetryLogger()])
            service_kwargs = {
                "frequency_map": self.frequency_map,
                "session_opener": session_opener,
                "delay_policy": delay_policy,
                "telemetry": telemetry,
            }
            if sleep is not None:
                service_kwargs["sleep"] = sleep
            search_service = RhymeSearchService(self.settings, **service_kwargs)
        self.search_service = search_service

        self._logger.info(
            "Application dependencies wired",
            context={
                "base_url": self.settings.base_url,
                "frequency_words": len(self.frequency_map),
                "strategy": self.settings.strategy,
            },
        )

    # Public API ------------------------------------------------------------
    def search(
        self,
        suffixes: Sequence[str],
        *,
        limit: Optional[int] = None,
        strategy: Optional[str] = None,
        debug: bool = False,
    ) -> SearchResult:
        return self.search_service.search(
            suffixes, limit=limit, strategy=strategy, debug=debug
        )

    def format_markdown(self, result: SearchResult) -> str:
        return format_markdown(result)

    def create_gradio_interface(self):
        from .ui.gradio import create_interface

        return create_interface(self)


def _should_share_interface() -> bool:
    """Return whether the Gradio UI should request a public share link."""

    env_value = os.environ.get("RHYME_SUFFIX_SHARE", "")
    return env_value.strip().lower() in {"1", "true", "yes", "on"}


def main() -> None:
    from ..utils.logging_config import configure_logging

    configure_logging()
    app = RhymeSuffixApp()
    interface = app.create_gradio_interface()
    interface.launch(
        server_name="0.0.0.0",
        server_port=int(os.environ.get("RHYME_SUFFIX_PORT", "7860")),
        share=_should_share_interface(),
    )


__all__ = ["RhymeSuffixApp", "main"]
