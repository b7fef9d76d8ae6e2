"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Declarative element table (name -> ElementDescriptor)
    - Lazy ElementHandles built at construction
    - fill / click / wait-visible helpers routed through the session
    - Declarative action dispatch for YAML-driven cases

Page objects drive the UI only. They never decide whether an outcome was
a success; tests and the case runner assert on the exposed handles.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import allure
from loguru import logger

from .locator import ElementDescriptor, ElementHandle
from .session import Action, BrowserSession


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/login"
            ELEMENTS = {"email_input": by_id("Email"), ...}
            ACTIONS = {"navigate": None, "login": None}

            async def login(self, email: str, password: str):
                await self.fill("email_input", email)
                ...
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""
    ELEMENTS: Dict[str, ElementDescriptor] = {}
    # action name -> parameter model (None: params are passed as keywords)
    ACTIONS: Dict[str, Optional[type]] = {"navigate": None}

    def __init__(self, session: BrowserSession):
        """
        Initialize page object.

        Args:
            session: Browser session shared with the enclosing test case
        """
        self.session = session
        self._handles: Dict[str, ElementHandle] = {
            name: session.locate(descriptor, name=name)
            for name, descriptor in self.ELEMENTS.items()
        }

    def element(self, name: str) -> ElementHandle:
        """Handle for a named element of this page."""
        try:
            return self._handles[name]
        except KeyError:
            raise KeyError(
                f"{type(self).__name__} has no element named '{name}'"
            ) from None

    @property
    def url(self) -> str:
        """Current browser URL."""
        return self.session.url

    async def navigate(self) -> None:
        """Navigate to this page's canonical path."""
        with allure.step(f"Navigate to {self.URL_PATH}"):
            await self.session.goto(self.URL_PATH)
            logger.debug(f"Navigated to: {self.URL_PATH}")

    # =========================================================================
    # Element Interactions
    # =========================================================================

    async def fill(self, name: str, value: str) -> None:
        """
        Fill an input element.

        Password values are masked in step titles and logs.
        """
        shown = "*" * len(value) if "password" in name.lower() else value
        with allure.step(f"Fill {name}: {shown}"):
            logger.debug(f"Fill {name}: {shown!r}")
            await self.session.interact(self.element(name), Action.FILL, value)

    async def click(self, name: str) -> None:
        with allure.step(f"Click: {name}"):
            logger.debug(f"Click: {name}")
            await self.session.interact(self.element(name), Action.CLICK)

    async def wait_visible(self, name: str) -> None:
        with allure.step(f"Wait visible: {name}"):
            await self.session.interact(self.element(name), Action.WAIT_VISIBLE)

    # =========================================================================
    # Declarative Dispatch
    # =========================================================================

    async def perform(self, action: str, params: Optional[Mapping[str, Any]] = None) -> None:
        """
        Run an action named in a declarative case.

        Args:
            action: Key of ACTIONS
            params: Keyword parameters, or fields of the action's model
        """
        if action not in self.ACTIONS:
            raise ValueError(
                f"{type(self).__name__} does not support action '{action}'"
            )
        params = dict(params or {})
        handler = getattr(self, action)
        model = self.ACTIONS[action]
        if model is None:
            await handler(**params)
        else:
            await handler(model(**params))


__all__ = [
    "BasePage",
]
