"""
================================================================================
Locator Resolver
================================================================================

Symbolic element descriptions and lazily resolved element handles.

Features:
    - Three descriptor kinds: by id, by attribute combination, by visible text
    - Pure resolution function (no caching, no page mutation)
    - ElementHandle re-resolves its descriptor on every action or query
    - Playwright timeouts surface as ElementNotFoundError with the selector

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple

from loguru import logger
from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError


class ElementNotFoundError(Exception):
    """Raised when no element matches a descriptor within the wait window."""

    kind = "ElementNotFound"

    def __init__(self, selector: str, timeout_ms: int, name: str = ""):
        self.selector = selector
        self.timeout_ms = timeout_ms
        self.name = name
        label = f"'{name}' " if name else ""
        super().__init__(
            f"Element {label}not found within {timeout_ms}ms: {selector}"
        )


class LocatorKind(str, Enum):
    """Supported descriptor kinds."""
    ID = "id"
    ATTRIBUTE = "attribute"
    TEXT = "text"


@dataclass(frozen=True)
class ElementDescriptor:
    """
    Symbolic description of how to find an element.

    Attributes:
        kind: How the element is matched
        value: Element id (ID) or visible text (TEXT); unused for ATTRIBUTE
        tag: Optional tag name (ATTRIBUTE)
        attributes: Attribute name/value pairs (ATTRIBUTE)
        classes: CSS classes the element must carry (ATTRIBUTE)
        descendant: Optional descendant selector appended to the match
        exact: Require a full text match (TEXT)
    """
    kind: LocatorKind
    value: str = ""
    tag: str = ""
    attributes: Tuple[Tuple[str, str], ...] = ()
    classes: Tuple[str, ...] = ()
    descendant: str = ""
    exact: bool = False

    def css_selector(self) -> str:
        """Render an ID or ATTRIBUTE descriptor as a CSS selector."""
        if self.kind == LocatorKind.TEXT:
            raise ValueError("Text descriptors have no CSS form")

        if self.kind == LocatorKind.ID:
            selector = f"{self.tag}#{self.value}"
        else:
            selector = self.tag
            selector += "".join(f".{cls}" for cls in self.classes)
            selector += "".join(
                f'[{name}="{value}"]' for name, value in self.attributes
            )

        if self.descendant:
            selector = f"{selector} {self.descendant}"
        return selector

    def describe(self) -> str:
        """Human-readable selector for logs and failure reports."""
        if self.kind == LocatorKind.TEXT:
            mode = "exact" if self.exact else "partial"
            return f"text({mode})='{self.value}'"
        return self.css_selector()


def by_id(element_id: str, descendant: str = "") -> ElementDescriptor:
    """Describe an element by its unique id."""
    return ElementDescriptor(LocatorKind.ID, value=element_id, descendant=descendant)


def by_attribute(
    tag: str = "",
    attributes: Optional[Dict[str, str]] = None,
    classes: Sequence[str] = (),
    descendant: str = "",
) -> ElementDescriptor:
    """
    Describe an element by tag, attributes and classes.

    Example:
        >>> by_attribute("input", {"type": "submit"}, classes=["login-button"])
        # input.login-button[type="submit"]
    """
    if not (tag or attributes or classes):
        raise ValueError("Attribute descriptor needs a tag, attribute or class")
    return ElementDescriptor(
        LocatorKind.ATTRIBUTE,
        tag=tag,
        attributes=tuple((attributes or {}).items()),
        classes=tuple(classes),
        descendant=descendant,
    )


def by_text(text: str, exact: bool = False) -> ElementDescriptor:
    """Describe an element by its visible text content."""
    if not text:
        raise ValueError("Text descriptor needs non-empty text")
    return ElementDescriptor(LocatorKind.TEXT, value=text, exact=exact)


def resolve(page: Page, descriptor: ElementDescriptor) -> Locator:
    """
    Resolve a descriptor against the page's current document.

    Playwright locators are themselves lazy, so this never blocks and never
    mutates the page. Call it at each use instead of storing the result.
    """
    if descriptor.kind == LocatorKind.TEXT:
        return page.get_by_text(descriptor.value, exact=descriptor.exact)
    return page.locator(descriptor.css_selector())


class ElementHandle:
    """
    Lazy reference to a UI element.

    Created when a page object is constructed; the underlying element does
    not need to exist yet. Every method re-resolves the descriptor, so the
    handle stays valid across navigations.
    """

    def __init__(self, page: Page, descriptor: ElementDescriptor, name: str = ""):
        self.page = page
        self.descriptor = descriptor
        self.name = name

    def __repr__(self) -> str:
        return f"ElementHandle({self.name or '?'}: {self.describe()})"

    @property
    def locator(self) -> Locator:
        return resolve(self.page, self.descriptor)

    def describe(self) -> str:
        return self.descriptor.describe()

    async def wait_visible(self, timeout_ms: int) -> None:
        try:
            await self.locator.wait_for(state="visible", timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise ElementNotFoundError(self.describe(), timeout_ms, self.name) from e

    async def fill(self, text: str, timeout_ms: int) -> None:
        try:
            await self.locator.fill(text, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise ElementNotFoundError(self.describe(), timeout_ms, self.name) from e

    async def click(self, timeout_ms: int) -> None:
        try:
            await self.locator.click(timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise ElementNotFoundError(self.describe(), timeout_ms, self.name) from e

    async def is_visible(self) -> bool:
        """Point-in-time visibility; False when nothing matches."""
        return await self.locator.is_visible()

    async def text_content(self) -> Optional[str]:
        """Point-in-time text content; None when nothing matches."""
        locator = self.locator
        if await locator.count() == 0:
            logger.debug(f"No match for {self.describe()} while reading text")
            return None
        return await locator.text_content()


__all__ = [
    "ElementDescriptor",
    "ElementHandle",
    "ElementNotFoundError",
    "LocatorKind",
    "by_attribute",
    "by_id",
    "by_text",
    "resolve",
]
