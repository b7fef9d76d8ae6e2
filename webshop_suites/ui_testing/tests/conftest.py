"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, page objects, and test setup/teardown.

Key Features:
- Settings resolved once per run; missing credentials stop the run
- One browser per run (per xdist worker), one fresh context per test
- Page Object fixtures bound to the test's own session
- Screenshot + URL attached to Allure on failure

================================================================================
"""

from typing import AsyncGenerator

import allure
import pytest
import pytest_asyncio
from loguru import logger

from webshop_suites.ui_testing.framework.browser_manager import BrowserManager
from webshop_suites.ui_testing.framework.expectations import Expect
from webshop_suites.ui_testing.framework.session import PlaywrightSession
from webshop_suites.ui_testing.framework.settings import (
    FixtureMissingError,
    SuiteSettings,
    load_settings,
)
from webshop_suites.ui_testing.framework.user_data import RegistrationData
from webshop_suites.ui_testing.pages.login_page import LoginPage
from webshop_suites.ui_testing.pages.register_page import RegisterPage


# ================================================================================
# Settings Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def settings() -> SuiteSettings:
    """
    Session-scoped suite settings.

    A missing environment value aborts the whole run: several cases need
    the provisioned account, so running any of them would be meaningless.
    """
    try:
        return load_settings()
    except FixtureMissingError as e:
        pytest.exit(str(e), returncode=pytest.ExitCode.USAGE_ERROR)


@pytest.fixture(scope="session")
def account(settings: SuiteSettings) -> RegistrationData:
    """The provisioned account from TEST_* environment variables."""
    return settings.account


@pytest.fixture
def expect(settings: SuiteSettings) -> Expect:
    """Polling expectations bound to the configured assertion timeout."""
    return Expect(
        timeout_ms=settings.timeouts.assertion_ms,
        interval_ms=settings.timeouts.poll_interval_ms,
    )


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser_manager(settings: SuiteSettings) -> AsyncGenerator[BrowserManager, None]:
    """
    Session-scoped browser manager fixture.

    Provides a single browser for all tests in the session (or xdist worker),
    reducing browser launch overhead.
    """
    async with BrowserManager(
        headless=settings.headless,
        browser_type=settings.browser_type,
    ) as manager:
        yield manager


@pytest_asyncio.fixture(loop_scope="session")
async def session(
    request: pytest.FixtureRequest,
    browser_manager: BrowserManager,
    settings: SuiteSettings,
) -> AsyncGenerator[PlaywrightSession, None]:
    """
    Function-scoped browser session on a fresh context.

    Nothing (cookies, storage, page state) leaks between tests.
    """
    async with browser_manager.session(settings.base_url, settings.timeouts) as ui_session:
        yield ui_session

        report = getattr(request.node, "rep_call", None)
        if report is not None and report.failed:
            await _attach_failure(ui_session, request.node.name)


async def _attach_failure(ui_session: PlaywrightSession, test_name: str) -> None:
    try:
        png = await ui_session.screenshot()
    except Exception as e:
        logger.warning(f"Failed to capture screenshot on failure: {e}")
        return
    allure.attach(
        png,
        name=f"failure_{test_name}",
        attachment_type=allure.attachment_type.PNG,
    )
    allure.attach(
        ui_session.url,
        name="Current URL",
        attachment_type=allure.attachment_type.TEXT,
    )


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(session: PlaywrightSession) -> LoginPage:
    """Provides a LoginPage bound to this test's session."""
    return LoginPage(session)


@pytest.fixture
def register_page(session: PlaywrightSession) -> RegisterPage:
    """Provides a RegisterPage bound to this test's session."""
    return RegisterPage(session)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Keep each phase's report on the item so fixtures can see failures."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
