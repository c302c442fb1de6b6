import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple
from urllib.parse import parse_qs, urlsplit

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rhyme_suffix.config import Settings
from rhyme_suffix.errors import RemoteUnavailableError


def results_page(carrier: str, words: Iterable[str], *, syllables: str = "tres") -> str:
    """Build HTML shaped like the rhyme site's results page."""

    listing = ", ".join(words)
    return f"""
    <html>
      <head>
        <title>Rimas</title>
        <script>var palabras = "{carrier}ando";</script>
        <style>.fz1 {{ font-size: 1em; }}</style>
      </head>
      <body>
        <div class="menu"><p>Inicio, Rimas, Sinónimos</p></div>
        <div class="fz1">
          <h3>Palabras que riman asonante con {carrier.upper()}</h3>
          <p>ignorado, tampoco</p>
          <h3>Palabras que riman consonante con {carrier.upper()} de {syllables} sílabas</h3>
          <p>{listing}</p>
        </div>
      </body>
    </html>
    """


EMPTY_PAGE = "<html><body><div class='fz1'><p>No se encontraron resultados.</p></div></body></html>"


class FakePageSession:
    """In-memory page session serving canned HTML per submitted term."""

    def __init__(
        self,
        pages: Optional[Dict[str, str]] = None,
        *,
        failures: Optional[Dict[str, Exception]] = None,
        has_input: bool = True,
        screenshot_error: Optional[Exception] = None,
    ) -> None:
        self.pages = dict(pages or {})
        self.failures = dict(failures or {})
        self.has_input = has_input
        self.screenshot_error = screenshot_error
        self.calls: List[Tuple[str, ...]] = []
        self.load_states: List[str] = []
        self.current: Optional[str] = None
        self.closed = False

    def navigate(self, url: str, timeout_ms: int, wait_until: str = "domcontentloaded") -> None:
        self.calls.append(("navigate", url, str(timeout_ms)))
        self.load_states.append(wait_until)
        terms = parse_qs(urlsplit(url).query).get("texto")
        if terms:
            self.current = terms[0]

    def wait_for_element(self, selector: str, timeout_ms: int) -> None:
        self.calls.append(("wait_for_element", selector, str(timeout_ms)))
        if not self.has_input:
            raise RemoteUnavailableError(f"Timed out during wait_for_element: {selector}")

    def fill(self, selector: str, text: str) -> None:
        self.calls.append(("fill", selector, text))
        self.current = text

    def submit(self, button_selector: str, input_selector: str, key: str) -> None:
        self.calls.append(("submit", button_selector))
        error = self.failures.get(self.current or "")
        if error is not None:
            raise error

    def content(self) -> str:
        return self.pages.get(self.current or "", EMPTY_PAGE)

    def wait(self, ms: int) -> None:
        self.calls.append(("wait", str(ms)))

    def screenshot(self, path: Path) -> None:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        Path(path).write_bytes(b"png")

    def close(self) -> None:
        self.closed = True

    @property
    def filled_terms(self) -> List[str]:
        return [call[2] for call in self.calls if call[0] == "fill"]


def session_opener_for(session: FakePageSession):
    @contextmanager
    def _opener(_settings: Settings):
        try:
            yield session
        finally:
            session.close()

    return _opener


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(corpus_path=tmp_path / "missing.txt", debug_dir=tmp_path / "debug")


@pytest.fixture
def sleeps() -> List[float]:
    return []
