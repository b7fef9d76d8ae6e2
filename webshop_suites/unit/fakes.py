"""In-memory stand-ins for Playwright pages and browser sessions."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Dict, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from webshop_suites.ui_testing.framework.locator import ElementDescriptor


class FakeLocator:
    """Records calls; raises a Playwright timeout for elements the page lacks."""

    def __init__(self, page: "FakePage", query: tuple):
        self.page = page
        self.query = query

    @property
    def _state(self) -> dict:
        return self.page.elements.get(self.query[-1], {})

    def _check(self, op: str) -> None:
        self.page.calls.append((op, self.query))
        if not self._state:
            raise PlaywrightTimeoutError(f"Timeout exceeded waiting for {self.query[-1]}")

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self.page.timeouts.append(timeout)
        self._check("wait_for")

    async def fill(self, text: str, timeout: Optional[float] = None) -> None:
        self.page.timeouts.append(timeout)
        self._check("fill")
        self._state["value"] = text

    async def click(self, timeout: Optional[float] = None) -> None:
        self.page.timeouts.append(timeout)
        self._check("click")

    async def is_visible(self) -> bool:
        return bool(self._state.get("visible", False))

    async def count(self) -> int:
        return 1 if self._state else 0

    async def text_content(self) -> Optional[str]:
        return self._state.get("text")


class FakePage:
    """
    Minimal async Page.

    `elements` maps a CSS selector or a text query to the element's state
    (visible, text, value). Anything not in the map does not exist.
    """

    def __init__(self, url: str = "about:blank"):
        self.url = url
        self.elements: Dict[str, dict] = {}
        self.calls: List[tuple] = []
        self.timeouts: List[Optional[float]] = []
        self.goto_error: Optional[Exception] = None
        self.navigation_error: Optional[Exception] = None

    def locator(self, selector: str) -> FakeLocator:
        self.calls.append(("locator", selector))
        return FakeLocator(self, ("css", selector))

    def get_by_text(self, text: str, exact: bool = False) -> FakeLocator:
        self.calls.append(("get_by_text", text, exact))
        return FakeLocator(self, ("text", text))

    async def goto(self, url: str, wait_until: str = "load", timeout: Optional[float] = None):
        self.calls.append(("goto", url, wait_until, timeout))
        if self.goto_error is not None:
            raise self.goto_error
        self.url = url

    @asynccontextmanager
    async def expect_navigation(self, wait_until: str = "load", timeout: Optional[float] = None):
        self.calls.append(("expect_navigation", wait_until, timeout))
        yield
        if self.navigation_error is not None:
            raise self.navigation_error

    async def screenshot(self, full_page: bool = False) -> bytes:
        self.calls.append(("screenshot", full_page))
        return b"\x89PNG"


class FakeHandle:
    """ElementHandle stand-in whose visibility and text are set by the test."""

    def __init__(self, descriptor: ElementDescriptor, name: str = ""):
        self.descriptor = descriptor
        self.name = name
        self.visible = False
        self.text: Optional[str] = None
        # Becomes visible on this read (1-based) when set
        self.visible_after: Optional[int] = None
        self.reads = 0

    def describe(self) -> str:
        return self.descriptor.describe()

    async def is_visible(self) -> bool:
        self.reads += 1
        if self.visible_after is not None and self.reads >= self.visible_after:
            return True
        return self.visible

    async def text_content(self) -> Optional[str]:
        self.reads += 1
        return self.text


class FakeSession:
    """
    BrowserSession that records interactions instead of driving a browser.

    `failures` maps an element name (or "goto" / "navigation") to the
    exception raised when that element is touched.
    """

    def __init__(self, url: str = "https://shop.test/"):
        self.url = url
        self.calls: List[tuple] = []
        self.handles: Dict[str, FakeHandle] = {}
        self.failures: Dict[str, Exception] = {}
        self.screenshots = 0

    def locate(self, descriptor: ElementDescriptor, name: str = "") -> FakeHandle:
        handle = FakeHandle(descriptor, name=name)
        self.handles[name] = handle
        return handle

    async def goto(self, path: str) -> None:
        self.calls.append(("goto", path))
        if "goto" in self.failures:
            raise self.failures["goto"]
        self.url = f"https://shop.test{path}"

    @asynccontextmanager
    async def navigation(self):
        self.calls.append(("navigation_start",))
        yield
        self.calls.append(("navigation_end",))
        if "navigation" in self.failures:
            raise self.failures["navigation"]

    async def interact(self, handle: FakeHandle, action, text: Optional[str] = None) -> None:
        self.calls.append((action.value, handle.name, text))
        if handle.name in self.failures:
            raise self.failures[handle.name]

    async def screenshot(self) -> bytes:
        self.screenshots += 1
        return b"\x89PNG"


class SessionPool:
    """Session factory for CaseRunner that hands out a new FakeSession per case."""

    def __init__(self, failures: Optional[Dict[str, Exception]] = None):
        self.failures = dict(failures or {})
        self.sessions: List[FakeSession] = []
        self.open = 0
        self.max_open = 0

    def __call__(self):
        return self._session()

    @asynccontextmanager
    async def _session(self):
        session = FakeSession()
        session.failures.update(self.failures)
        self.sessions.append(session)
        self.open += 1
        self.max_open = max(self.max_open, self.open)
        try:
            yield session
        finally:
            self.open -= 1


def navigation_failure(message: str = "net::ERR_NAME_NOT_RESOLVED") -> PlaywrightError:
    return PlaywrightError(message)
