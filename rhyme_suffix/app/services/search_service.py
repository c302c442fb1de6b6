"""Search service orchestrating suffix queries, extraction and ranking."""

from __future__ import annotations

import random
import re
import time
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Set
from urllib.parse import quote

from ...config import Settings
from ...core import (
    EMPTY_FREQUENCY_MAP,
    carrier_terms_for,
    extract_candidates,
    merge_union,
    normalize,
    rank_top,
)
from ...errors import RemoteUnavailableError, SearchFailedError
from ...utils.observability import get_logger
from ...utils.telemetry import StructuredTelemetry
from ..automation import PageSession, open_playwright_session

DelayPolicy = Callable[[], float]
SessionOpener = Callable[[Settings], AbstractContextManager]

_SNAPSHOT_UNSAFE = re.compile(r"[^a-záéíóúüñ0-9]+", re.IGNORECASE)


def random_throttle(min_ms: int = 600, max_ms: int = 1_000) -> DelayPolicy:
    """Return a delay policy yielding a random pause in seconds."""

    def _delay() -> float:
        return random.randint(min_ms, max_ms) / 1000.0

    return _delay


def no_delay() -> float:
    return 0.0


def snapshot_stem(carrier: str) -> str:
    """File-name-safe stem used for debug snapshots of ``carrier``."""

    return _SNAPSHOT_UNSAFE.sub("_", f"q_{carrier}")


def query_string_url(base_url: str, term: str) -> str:
    return f"{base_url}?texto={quote(term, safe='')}"


def prepare_suffixes(raw: Iterable[Optional[str]], max_suffixes: int = 5) -> List[str]:
    """Normalize user-supplied suffixes, dropping empties, keeping the first few."""

    cleaned = [normalize(value) for value in raw]
    return [value for value in cleaned if value][: max(0, max_suffixes)]


@dataclass
class SuffixOutcome:
    """What happened for one suffix during a search run."""

    suffix: str
    carrier: Optional[str] = None
    candidates: Set[str] = field(default_factory=set)
    ranked: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class SearchResult:
    """Per-suffix outcomes in input order plus the merged union."""

    outcomes: List[SuffixOutcome] = field(default_factory=list)
    union: List[str] = field(default_factory=list)

    @property
    def suffixes(self) -> List[str]:
        return [outcome.suffix for outcome in self.outcomes]

    @property
    def failures(self) -> List[SuffixOutcome]:
        return [outcome for outcome in self.outcomes if outcome.failed]

    @property
    def has_matches(self) -> bool:
        return bool(self.union)


class RhymeSearchService:
    """Drives suffix queries against the rhyme page and ranks the results.

    One browser session is opened per :meth:`search` call and reused for
    every suffix, strictly sequentially. A suffix whose page interaction
    fails with :class:`RemoteUnavailableError` contributes nothing to the
    union; when every suffix fails that way the run raises
    :class:`SearchFailedError`.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        frequency_map: Optional[Mapping[str, int]] = None,
        session_opener: Optional[SessionOpener] = None,
        delay_policy: Optional[DelayPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        telemetry: Optional[StructuredTelemetry] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.frequency_map = frequency_map if frequency_map is not None else EMPTY_FREQUENCY_MAP
        self._session_opener = session_opener or open_playwright_session
        self._delay_policy = delay_policy or random_throttle(
            self.settings.throttle_min_ms, self.settings.throttle_max_ms
        )
        self._sleep = sleep
        self.telemetry = telemetry or StructuredTelemetry()
        self._logger = get_logger(__name__).bind(component="rhyme_search_service")

    # Single query ----------------------------------------------------------
    def _write_snapshot(self, session: PageSession, carrier: str, html: str, debug_dir: Path) -> None:
        stem = snapshot_stem(carrier)
        try:
            debug_dir.mkdir(parents=True, exist_ok=True)
            session.screenshot(debug_dir / f"shot_{stem}.png")
            (debug_dir / f"page_{stem}.html").write_text(html, encoding="utf-8")
        except (OSError, RemoteUnavailableError) as exc:
            self._logger.warning(
                "Debug snapshot skipped",
                context={"carrier": carrier, "debug_dir": str(debug_dir), "error": str(exc)},
            )
            return
        self._logger.debug(
            "Debug snapshot written",
            context={"carrier": carrier, "debug_dir": str(debug_dir)},
        )

    def fetch_carrier_html(
        self,
        session: PageSession,
        carrier: str,
        *,
        debug_dir: Optional[Path] = None,
    ) -> str:
        """Submit ``carrier`` to the search form and return the rendered HTML.

        When the search input never shows up the term is requested through
        the ``?texto=`` query string instead, waiting for the network to go
        idle.
        """

        settings = self.settings
        session.navigate(settings.base_url, settings.navigation_timeout_ms)
        try:
            session.wait_for_element(settings.input_selector, settings.element_timeout_ms)
        except RemoteUnavailableError as exc:
            self._logger.warning(
                "Search input missing; falling back to query string",
                context={"carrier": carrier, "error": str(exc)},
            )
            session.navigate(
                query_string_url(settings.base_url, carrier),
                settings.navigation_timeout_ms,
                wait_until="networkidle",
            )
        else:
            session.fill(settings.input_selector, carrier)
            session.submit(settings.submit_selector, settings.input_selector, settings.submit_key)
        session.wait(settings.settle_delay_ms)

        html = session.content()
        if debug_dir is not None:
            self._write_snapshot(session, carrier, html, debug_dir)
        return html

    def query_suffix(
        self,
        session: PageSession,
        suffix: str,
        *,
        strategy: Optional[str] = None,
        debug_dir: Optional[Path] = None,
    ) -> SuffixOutcome:
        """Try each carrier term for ``suffix`` until one yields matches."""

        strategy = strategy or self.settings.strategy
        outcome = SuffixOutcome(suffix=suffix)
        for carrier in carrier_terms_for(suffix):
            self.telemetry.increment("queries")
            with self.telemetry.timer("carrier", {"suffix": suffix, "carrier": carrier}) as meta:
                html = self.fetch_carrier_html(session, carrier, debug_dir=debug_dir)
                matches = extract_candidates(html, suffix, carrier, strategy=strategy)
                meta["matches"] = len(matches)

            self._logger.debug(
                "Carrier term extracted",
                context={"suffix": suffix, "carrier": carrier, "matches": len(matches)},
            )
            if matches:
                outcome.carrier = carrier
                outcome.candidates = matches
                return outcome

        self._logger.info("No matches for suffix", context={"suffix": suffix})
        return outcome

    # Full run --------------------------------------------------------------
    def search(
        self,
        suffixes: Sequence[str],
        *,
        limit: Optional[int] = None,
        strategy: Optional[str] = None,
        debug: bool = False,
    ) -> SearchResult:
        """Query, rank and merge up to ``settings.max_suffixes`` suffixes.

        ``suffixes`` are normalized here; empty ones are dropped. An empty
        list after normalization returns an empty result without opening a
        browser session.
        """

        prepared = prepare_suffixes(suffixes, self.settings.max_suffixes)
        limit = max(1, int(limit if limit is not None else self.settings.default_limit))
        debug_dir = self.settings.debug_dir if debug else None
        result = SearchResult()
        if not prepared:
            return result

        self.telemetry.start_trace("suffix_search")
        self.telemetry.annotate("suffixes", list(prepared))
        self._logger.info(
            "Starting suffix search",
            context={"suffixes": prepared, "limit": limit, "frequency_words": len(self.frequency_map)},
        )

        with self._session_opener(self.settings) as session:
            for index, suffix in enumerate(prepared):
                if index:
                    self._sleep(self._delay_policy())
                result.outcomes.append(
                    self._search_one(session, suffix, limit=limit, strategy=strategy, debug_dir=debug_dir)
                )

        failures = result.failures
        if failures and len(failures) == len(result.outcomes):
            details = "; ".join(f"{item.suffix}: {item.error}" for item in failures)
            raise SearchFailedError(f"Every suffix query failed ({details})")

        result.union = merge_union(outcome.ranked for outcome in result.outcomes)
        self.telemetry.annotate("union_size", len(result.union))
        self._logger.info(
            "Suffix search finished",
            context={"union_size": len(result.union), "failed": [item.suffix for item in failures]},
        )
        return result

    def _search_one(
        self,
        session: PageSession,
        suffix: str,
        *,
        limit: int,
        strategy: Optional[str],
        debug_dir: Optional[Path],
    ) -> SuffixOutcome:
        with self.telemetry.timer("suffix", {"suffix": suffix}):
            try:
                outcome = self.query_suffix(
                    session, suffix, strategy=strategy, debug_dir=debug_dir
                )
            except RemoteUnavailableError as exc:
                self.telemetry.increment("failures")
                self._logger.warning(
                    "Suffix query failed; skipping",
                    context={"suffix": suffix, "error": str(exc)},
                )
                return SuffixOutcome(suffix=suffix, error=str(exc))

            outcome.ranked = rank_top(outcome.candidates, self.frequency_map, limit)
            self.telemetry.increment("matches", len(outcome.candidates))
            return outcome


__all__ = [
    "DelayPolicy",
    "SessionOpener",
    "SuffixOutcome",
    "SearchResult",
    "RhymeSearchService",
    "random_throttle",
    "no_delay",
    "snapshot_stem",
    "query_string_url",
    "prepare_suffixes",
]
