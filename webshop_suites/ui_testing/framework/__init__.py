"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for the web shop account flows.

Components:
    - locator: Element descriptors and lazily resolved handles
    - session: Narrow browser session interface (goto / locate / interact)
    - browser_manager: Browser lifecycle and per-case contexts
    - page_base: Base page object
    - expectations: Polling assertions with bounded timeouts
    - case_loader / case_runner: Declarative YAML cases and their runner
    - settings / config_loader / log_config: Ambient configuration

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager
from .case_loader import CaseDefinitionError, CaseLoader, UICase
from .case_runner import CaseResult, CaseRunner
from .expectations import (
    AssertionTimeoutError,
    Expect,
    expect_hidden,
    expect_text,
    expect_url_excludes,
    expect_visible,
)
from .locator import ElementDescriptor, ElementHandle, ElementNotFoundError, by_attribute, by_id, by_text
from .page_base import BasePage
from .session import Action, BrowserSession, NavigationError, PlaywrightSession
from .settings import FixtureMissingError, SuiteSettings, Timeouts, load_settings
from .user_data import RegistrationData, UserCredentials, unique_email

__all__ = [
    "Action",
    "AssertionTimeoutError",
    "BasePage",
    "BrowserManager",
    "BrowserSession",
    "CaseDefinitionError",
    "CaseLoader",
    "CaseResult",
    "CaseRunner",
    "Expect",
    "ElementDescriptor",
    "ElementHandle",
    "ElementNotFoundError",
    "FixtureMissingError",
    "NavigationError",
    "PlaywrightSession",
    "RegistrationData",
    "SuiteSettings",
    "Timeouts",
    "UICase",
    "UserCredentials",
    "by_attribute",
    "by_id",
    "by_text",
    "expect_hidden",
    "expect_text",
    "expect_url_excludes",
    "expect_visible",
    "load_settings",
    "unique_email",
]
