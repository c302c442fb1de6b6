"""Page automation boundary between the search service and a real browser.

The search service only talks to :class:`PageSession`; everything that
touches Playwright lives in :class:`PlaywrightPageSession` and
:func:`open_playwright_session`, which keeps the parsing and ranking code
testable against captured HTML.
"""

from __future__ import annotations

from contextlib import contextmanager
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Iterator, List, Optional, Protocol, TypeVar

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from ..config import Settings
from ..errors import RemoteUnavailableError
from ..utils.observability import get_logger

_logger = get_logger(__name__).bind(component="page_automation")

_T = TypeVar("_T")


class PageSession(Protocol):
    """Minimal browser page capabilities used by the search service."""

    def navigate(
        self, url: str, timeout_ms: int, wait_until: str = "domcontentloaded"
    ) -> None: ...

    def wait_for_element(self, selector: str, timeout_ms: int) -> None: ...

    def fill(self, selector: str, text: str) -> None: ...

    def submit(self, button_selector: str, input_selector: str, key: str) -> None: ...

    def content(self) -> str: ...

    def wait(self, ms: int) -> None: ...

    def screenshot(self, path: Path) -> None: ...

    def close(self) -> None: ...


def _translate_errors(method: Callable[..., _T]) -> Callable[..., _T]:
    @wraps(method)
    def wrapper(self: "PlaywrightPageSession", *args: Any, **kwargs: Any) -> _T:
        try:
            return method(self, *args, **kwargs)
        except PlaywrightTimeoutError as exc:
            raise RemoteUnavailableError(
                f"Timed out during {method.__name__}: {exc.message}"
            ) from exc
        except PlaywrightError as exc:
            raise RemoteUnavailableError(
                f"Browser error during {method.__name__}: {exc.message}"
            ) from exc

    return wrapper


class PlaywrightPageSession:
    """:class:`PageSession` backed by a Playwright sync-API page."""

    def __init__(self, page: Any, *, on_close: Optional[List[Callable[[], None]]] = None) -> None:
        self._page = page
        self._on_close = list(on_close or [])
        self._closed = False

    @_translate_errors
    def navigate(
        self, url: str, timeout_ms: int, wait_until: str = "domcontentloaded"
    ) -> None:
        self._page.goto(url, wait_until=wait_until, timeout=timeout_ms)

    @_translate_errors
    def wait_for_element(self, selector: str, timeout_ms: int) -> None:
        self._page.wait_for_selector(selector, timeout=timeout_ms)

    @_translate_errors
    def fill(self, selector: str, text: str) -> None:
        self._page.fill(selector, text)

    @_translate_errors
    def submit(self, button_selector: str, input_selector: str, key: str) -> None:
        button = self._page.query_selector(button_selector)
        if button is not None:
            button.click()
        else:
            self._page.press(input_selector, key)

    @_translate_errors
    def content(self) -> str:
        return self._page.content()

    @_translate_errors
    def wait(self, ms: int) -> None:
        self._page.wait_for_timeout(ms)

    @_translate_errors
    def screenshot(self, path: Path) -> None:
        self._page.screenshot(path=str(path), full_page=True)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for closer in self._on_close:
            try:
                closer()
            except PlaywrightError as exc:
                _logger.warning("Browser shutdown failed", context={"error": exc.message})


@contextmanager
def open_playwright_session(settings: Settings) -> Iterator[PlaywrightPageSession]:
    """Launch headless Chromium and yield a session that is always closed."""

    with sync_playwright() as playwright:
        try:
            browser = playwright.chromium.launch(
                headless=settings.headless, args=["--no-sandbox"]
            )
        except PlaywrightError as exc:
            raise RemoteUnavailableError(f"Could not launch browser: {exc.message}") from exc

        session: Optional[PlaywrightPageSession] = None
        try:
            page = browser.new_page(user_agent=settings.user_agent)
            session = PlaywrightPageSession(page, on_close=[browser.close])
            _logger.debug("Browser session opened", context={"headless": settings.headless})
            yield session
        finally:
            if session is not None:
                session.close()
            else:
                browser.close()
            _logger.debug("Browser session closed")


__all__ = [
    "PageSession",
    "PlaywrightPageSession",
    "open_playwright_session",
]
