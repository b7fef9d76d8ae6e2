"""
================================================================================
Browser Session
================================================================================

The narrow interface page objects and the case runner depend on:

    goto(path)                        navigate relative to the base URL
    locate(descriptor) -> handle      lazy ElementHandle, never blocks
    interact(handle, action, text)    fill / click / wait-visible
    navigation()                      wait for the document an action loads

PlaywrightSession implements it over a Playwright Page. Any other backend
only has to provide the same operations.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from enum import Enum
from typing import AsyncContextManager, AsyncIterator, Optional, Protocol

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from .locator import ElementDescriptor, ElementHandle
from .settings import Timeouts


class NavigationError(Exception):
    """Raised when a page navigation does not complete."""

    kind = "NavigationError"

    def __init__(self, url: str, reason: str):
        self.url = url
        self.selector = url
        self.reason = reason
        super().__init__(f"Navigation to {url} failed: {reason}")


class Action(str, Enum):
    """Low-level interactions a session can perform on an element."""
    FILL = "fill"
    CLICK = "click"
    WAIT_VISIBLE = "wait_visible"


class BrowserSession(Protocol):
    """Interface between page objects and a browser backend."""

    @property
    def url(self) -> str: ...

    async def goto(self, path: str) -> None: ...

    def locate(self, descriptor: ElementDescriptor, name: str = "") -> ElementHandle: ...

    async def interact(
        self,
        handle: ElementHandle,
        action: Action,
        text: Optional[str] = None,
    ) -> None: ...

    def navigation(self) -> AsyncContextManager[None]: ...

    async def screenshot(self) -> bytes: ...


class PlaywrightSession:
    """
    BrowserSession backed by a Playwright page.

    Usage:
        session = PlaywrightSession(page, "https://demowebshop.tricentis.com", Timeouts())
        await session.goto("/login")
        email = session.locate(by_id("Email"), name="email_input")
        await session.interact(email, Action.FILL, "user@example.com")
    """

    def __init__(self, page: Page, base_url: str, timeouts: Timeouts):
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.timeouts = timeouts

    @property
    def url(self) -> str:
        return self.page.url

    async def goto(self, path: str) -> None:
        """
        Navigate to `path` under the base URL and wait for the load event.

        Raises:
            NavigationError: On network failure or navigation timeout.
        """
        target = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug(f"Navigating to: {target}")
        try:
            await self.page.goto(
                target,
                wait_until="load",
                timeout=self.timeouts.navigation_ms,
            )
        except PlaywrightError as e:
            raise NavigationError(target, e.message) from e

    def locate(self, descriptor: ElementDescriptor, name: str = "") -> ElementHandle:
        return ElementHandle(self.page, descriptor, name=name)

    async def interact(
        self,
        handle: ElementHandle,
        action: Action,
        text: Optional[str] = None,
    ) -> None:
        """
        Perform one interaction, bounded by the element timeout.

        Raises:
            ElementNotFoundError: If the element does not appear in time.
        """
        timeout = self.timeouts.element_ms
        if action == Action.FILL:
            if text is None:
                raise ValueError("fill requires text")
            await handle.fill(text, timeout)
        elif action == Action.CLICK:
            await handle.click(timeout)
        elif action == Action.WAIT_VISIBLE:
            await handle.wait_visible(timeout)
        else:
            raise ValueError(f"Unknown action: {action}")

    @asynccontextmanager
    async def navigation(self) -> AsyncIterator[None]:
        """
        Wait for the document loaded by the enclosed actions (e.g. a form post).

        Raises:
            NavigationError: If no new document loads within the navigation timeout.
        """
        try:
            async with self.page.expect_navigation(
                wait_until="load",
                timeout=self.timeouts.navigation_ms,
            ):
                yield
        except PlaywrightError as e:
            raise NavigationError(self.page.url, e.message) from e
        logger.debug(f"Navigation settled at: {self.page.url}")

    async def screenshot(self) -> bytes:
        return await self.page.screenshot(full_page=True)


__all__ = [
    "Action",
    "BrowserSession",
    "NavigationError",
    "PlaywrightSession",
]
