"""Runtime settings for the rhyme search, overridable through the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Mapping, Optional, Tuple

_ENV_PREFIX = "RHYME_SUFFIX_"

CORPUS_FILENAME = "es_50k.txt"

EXTRACTION_STRATEGIES: Tuple[str, ...] = ("structured", "flat")


def _default_corpus_path() -> Path:
    module_path = Path(__file__).resolve()
    candidates = [
        module_path.with_name(CORPUS_FILENAME),
        module_path.parents[1] / CORPUS_FILENAME,
        Path.cwd() / CORPUS_FILENAME,
    ]
    for candidate in candidates:
        try:
            if candidate.exists():
                return candidate
        except OSError:
            continue
    return candidates[0]


@dataclass(frozen=True)
class Settings:
    """Tunables for talking to the rhyme search page.

    Timeouts and delays are in milliseconds, matching the units the page
    automation layer expects.
    """

    base_url: str = "https://buscapalabras.com.ar/rimas.php"
    user_agent: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120 Safari/537.36"
    )
    navigation_timeout_ms: int = 45_000
    element_timeout_ms: int = 15_000
    settle_delay_ms: int = 800
    throttle_min_ms: int = 600
    throttle_max_ms: int = 1_000
    input_selector: str = "#palabra"
    submit_selector: str = 'input[type="submit"].botFoBu'
    submit_key: str = "Enter"
    max_suffixes: int = 5
    default_limit: int = 20
    corpus_path: Optional[Path] = None
    debug_dir: Path = Path("debug_snapshots")
    strategy: str = "structured"
    headless: bool = True

    def __post_init__(self) -> None:
        if self.strategy not in EXTRACTION_STRATEGIES:
            raise ValueError(
                f"Unknown extraction strategy {self.strategy!r}; "
                f"expected one of {', '.join(EXTRACTION_STRATEGIES)}"
            )
        if self.throttle_max_ms < self.throttle_min_ms:
            object.__setattr__(self, "throttle_max_ms", self.throttle_min_ms)

    @property
    def resolved_corpus_path(self) -> Path:
        return self.corpus_path if self.corpus_path is not None else _default_corpus_path()

    def with_overrides(self, **overrides) -> "Settings":
        cleaned = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **cleaned)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``RHYME_SUFFIX_*`` variables.

        Malformed numeric values are ignored so a typo in the environment
        falls back to the default instead of aborting the run.
        """

        env = os.environ if environ is None else environ
        overrides = {}
        for field_info in fields(cls):
            raw = env.get(_ENV_PREFIX + field_info.name.upper())
            if raw is None or raw.strip() == "":
                continue
            value = raw.strip()
            default = field_info.default
            if field_info.name in {"corpus_path", "debug_dir"}:
                overrides[field_info.name] = Path(value).expanduser()
            elif isinstance(default, bool):
                overrides[field_info.name] = value.lower() in {"1", "true", "yes", "on"}
            elif isinstance(default, int):
                try:
                    overrides[field_info.name] = int(value)
                except ValueError:
                    continue
            elif field_info.name == "strategy":
                if value.lower() in EXTRACTION_STRATEGIES:
                    overrides[field_info.name] = value.lower()
            else:
                overrides[field_info.name] = value
        return cls(**overrides)


__all__ = ["Settings", "CORPUS_FILENAME", "EXTRACTION_STRATEGIES"]
