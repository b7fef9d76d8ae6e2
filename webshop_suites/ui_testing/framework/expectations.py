"""
================================================================================
Assertion Expectations
================================================================================

Polling assertions over element handles and the session URL.

Every expectation re-reads the UI state at a fixed interval and succeeds as
soon as its predicate holds. When the timeout elapses it raises
AssertionTimeoutError with the target selector and the last observed value.

Usage:
    await expect_visible(login_page.logout_link, timeout_ms=5000)
    await expect_text(register_page.password_mismatch_error,
                      "The password and confirmation password do not match.")

================================================================================
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Tuple

import allure
from loguru import logger

from .locator import ElementHandle
from .session import BrowserSession


DEFAULT_TIMEOUT_MS = 5000
DEFAULT_INTERVAL_MS = 100


class ExpectationKind(str, Enum):
    """Supported assertion kinds."""
    VISIBLE = "visible"
    HIDDEN = "hidden"
    TEXT_EQUALS = "text_equals"
    TEXT_CONTAINS = "text_contains"
    URL_EXCLUDES = "url_excludes"


# Kinds that target a page element rather than the session URL
ELEMENT_KINDS = (
    ExpectationKind.VISIBLE,
    ExpectationKind.HIDDEN,
    ExpectationKind.TEXT_EQUALS,
    ExpectationKind.TEXT_CONTAINS,
)

# Kinds that prove the post-action document has rendered
POSITIVE_KINDS = (
    ExpectationKind.VISIBLE,
    ExpectationKind.TEXT_EQUALS,
    ExpectationKind.TEXT_CONTAINS,
)


@dataclass(frozen=True)
class Expectation:
    """
    Declarative assertion used by YAML-driven cases.

    Attributes:
        kind: What to check
        element: Element name on the page object (element kinds)
        expected: Expected text, or the URL fragment that must not appear
        page: Page name when it differs from the case's page
    """
    kind: ExpectationKind
    element: str = ""
    expected: str = ""
    page: str = ""

    def describe(self) -> str:
        target = self.element or "url"
        suffix = f" {self.expected!r}" if self.expected else ""
        return f"{self.kind.value} {target}{suffix}"


class AssertionTimeoutError(AssertionError):
    """Raised when an expected UI state does not materialize in time."""

    kind = "AssertionTimeout"

    def __init__(
        self,
        expectation: str,
        selector: str,
        timeout_ms: int,
        expected: Any = None,
        observed: Any = None,
    ):
        self.expectation = expectation
        self.selector = selector
        self.timeout_ms = timeout_ms
        self.expected = expected
        self.observed = observed
        message = f"Expected {expectation} on {selector} within {timeout_ms}ms"
        if expected is not None:
            message += f"; expected={expected!r}"
        message += f"; last observed={observed!r}"
        super().__init__(message)


async def poll_until(
    check: Callable[[], Awaitable[Tuple[bool, Any]]],
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    interval_ms: int = DEFAULT_INTERVAL_MS,
) -> Tuple[bool, Any]:
    """
    Poll an async check until it passes or the timeout elapses.

    Args:
        check: Coroutine function returning (passed, observed_value)
        timeout_ms: Total wait window
        interval_ms: Pause between attempts

    Returns:
        (passed, last observed value). The check always runs at least once.
    """
    deadline = time.monotonic() + timeout_ms / 1000
    while True:
        passed, observed = await check()
        if passed:
            return True, observed
        if time.monotonic() >= deadline:
            return False, observed
        await asyncio.sleep(interval_ms / 1000)


async def _expect(
    name: str,
    selector: str,
    check: Callable[[], Awaitable[Tuple[bool, Any]]],
    timeout_ms: int,
    interval_ms: int,
    expected: Any = None,
) -> None:
    with allure.step(f"Expect {name}: {selector}"):
        passed, observed = await poll_until(check, timeout_ms, interval_ms)
        if not passed:
            error = AssertionTimeoutError(name, selector, timeout_ms, expected, observed)
            logger.error(str(error))
            raise error
        logger.debug(f"Expectation met: {name} on {selector}")


async def expect_visible(
    handle: ElementHandle,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    interval_ms: int = DEFAULT_INTERVAL_MS,
) -> None:
    async def check():
        visible = await handle.is_visible()
        return visible, "visible" if visible else "not visible"

    await _expect("visible", handle.describe(), check, timeout_ms, interval_ms)


async def expect_hidden(
    handle: ElementHandle,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    interval_ms: int = DEFAULT_INTERVAL_MS,
) -> None:
    """
    Expect the element to be absent or invisible.

    Passes on the first read when nothing matches yet, so run it after a
    positive expectation (or a completed navigation) on the same page.
    """
    async def check():
        visible = await handle.is_visible()
        return not visible, "visible" if visible else "not visible"

    await _expect("hidden", handle.describe(), check, timeout_ms, interval_ms)


async def expect_text(
    handle: ElementHandle,
    text: str,
    exact: bool = True,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    interval_ms: int = DEFAULT_INTERVAL_MS,
) -> None:
    """
    Expect the element's text to equal (exact) or contain `text`.

    Exact comparison ignores surrounding whitespace, like the browser's
    rendered text does.
    """
    async def check():
        actual = await handle.text_content()
        if actual is None:
            return False, None
        if exact:
            return actual.strip() == text, actual
        return text in actual, actual

    name = "text_equals" if exact else "text_contains"
    await _expect(name, handle.describe(), check, timeout_ms, interval_ms, expected=text)


async def expect_url_excludes(
    session: BrowserSession,
    fragment: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    interval_ms: int = DEFAULT_INTERVAL_MS,
) -> None:
    """Expect the current URL not to contain `fragment`."""
    async def check():
        current = session.url
        return fragment not in current, current

    await _expect("url_excludes", "url", check, timeout_ms, interval_ms, expected=fragment)


class Expect:
    """
    Expectation helpers bound to one timeout/interval pair.

    Usage:
        expect = Expect(timeout_ms=settings.timeouts.assertion_ms)
        await expect.visible(login_page.logout_link)
    """

    def __init__(self, timeout_ms: int = DEFAULT_TIMEOUT_MS, interval_ms: int = DEFAULT_INTERVAL_MS):
        self.timeout_ms = timeout_ms
        self.interval_ms = interval_ms

    async def visible(self, handle: ElementHandle) -> None:
        await expect_visible(handle, self.timeout_ms, self.interval_ms)

    async def hidden(self, handle: ElementHandle) -> None:
        await expect_hidden(handle, self.timeout_ms, self.interval_ms)

    async def text(self, handle: ElementHandle, text: str, exact: bool = True) -> None:
        await expect_text(handle, text, exact, self.timeout_ms, self.interval_ms)

    async def url_excludes(self, session: BrowserSession, fragment: str) -> None:
        await expect_url_excludes(session, fragment, self.timeout_ms, self.interval_ms)


async def verify(
    page: Any,
    expectation: Expectation,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    interval_ms: int = DEFAULT_INTERVAL_MS,
) -> None:
    """
    Evaluate a declarative expectation against a page object.

    Raises:
        AssertionTimeoutError: If the expected state never materializes.
    """
    kind = expectation.kind
    if kind == ExpectationKind.URL_EXCLUDES:
        await expect_url_excludes(page.session, expectation.expected, timeout_ms, interval_ms)
        return

    handle = page.element(expectation.element)
    if kind == ExpectationKind.VISIBLE:
        await expect_visible(handle, timeout_ms, interval_ms)
    elif kind == ExpectationKind.HIDDEN:
        await expect_hidden(handle, timeout_ms, interval_ms)
    elif kind == ExpectationKind.TEXT_EQUALS:
        await expect_text(handle, expectation.expected, True, timeout_ms, interval_ms)
    elif kind == ExpectationKind.TEXT_CONTAINS:
        await expect_text(handle, expectation.expected, False, timeout_ms, interval_ms)
    else:
        raise ValueError(f"Unknown expectation kind: {kind}")


__all__ = [
    "AssertionTimeoutError",
    "ELEMENT_KINDS",
    "Expect",
    "Expectation",
    "ExpectationKind",
    "POSITIVE_KINDS",
    "expect_hidden",
    "expect_text",
    "expect_url_excludes",
    "expect_visible",
    "poll_until",
    "verify",
]
