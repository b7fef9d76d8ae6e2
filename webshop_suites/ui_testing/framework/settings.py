"""
================================================================================
Suite Settings
================================================================================

Read-only process-wide settings for the UI suite: the target base URL and
the provisioned account come from the environment, timeouts and browser
options from config/config.yaml.

Environment variables (all required, blank counts as missing):
    BASE_URL, TEST_EMAIL, TEST_PASSWORD, TEST_USER_NAME, TEST_USER_LASTNAME

================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

from loguru import logger

from .config_loader import ConfigLoader
from .user_data import RegistrationData


REQUIRED_ENV_VARS = (
    "BASE_URL",
    "TEST_EMAIL",
    "TEST_PASSWORD",
    "TEST_USER_NAME",
    "TEST_USER_LASTNAME",
)

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class FixtureMissingError(Exception):
    """Raised when required environment-sourced test data is absent."""

    kind = "FixtureMissing"

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(
            "Missing required environment variables: " + ", ".join(self.missing)
        )


@dataclass(frozen=True)
class Timeouts:
    """Wait windows in milliseconds."""
    element_ms: int = 5000
    navigation_ms: int = 30000
    assertion_ms: int = 5000
    poll_interval_ms: int = 100


@dataclass(frozen=True)
class SuiteSettings:
    """
    Settings shared by every case in a run.

    Attributes:
        base_url: Target site root, without trailing slash
        account: The provisioned account (registration form shape)
        timeouts: Element, navigation and assertion wait windows
        browser_type: chromium, firefox or webkit
        headless: Run the browser without a window
        workers: Concurrent cases for the case runner
    """
    base_url: str
    account: RegistrationData
    timeouts: Timeouts = Timeouts()
    browser_type: str = "chromium"
    headless: bool = True
    workers: int = 1


def load_settings(
    config: Optional[ConfigLoader] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SuiteSettings:
    """
    Build the suite settings.

    Args:
        config: Configuration source. Defaults to the ConfigLoader singleton.
        environ: Environment mapping. Defaults to os.environ.

    Raises:
        FixtureMissingError: If any required variable is absent or blank.
    """
    env = os.environ if environ is None else environ
    missing = [name for name in REQUIRED_ENV_VARS if not (env.get(name) or "").strip()]
    if missing:
        logger.error(f"Fixture resolution failed, missing: {missing}")
        raise FixtureMissingError(missing)

    config = config or ConfigLoader()

    timeouts = Timeouts(
        element_ms=config.get("ui.element_timeout_ms", 5000),
        navigation_ms=config.get("ui.navigation_timeout_ms", 30000),
        assertion_ms=config.get("ui.assertion_timeout_ms", 5000),
        poll_interval_ms=config.get("ui.poll_interval_ms", 100),
    )

    browser_type = config.get("browser.type", "chromium")
    if browser_type not in SUPPORTED_BROWSERS:
        raise ValueError(f"Unsupported browser type: {browser_type}")

    account = RegistrationData.for_account(
        first_name=env["TEST_USER_NAME"].strip(),
        last_name=env["TEST_USER_LASTNAME"].strip(),
        email=env["TEST_EMAIL"].strip(),
        password=env["TEST_PASSWORD"],
    )

    settings = SuiteSettings(
        base_url=env["BASE_URL"].strip().rstrip("/"),
        account=account,
        timeouts=timeouts,
        browser_type=browser_type,
        headless=config.get("browser.headless", True),
        workers=max(1, config.get("runner.workers", 1)),
    )
    logger.debug(
        f"Settings loaded: base_url={settings.base_url}, "
        f"browser={settings.browser_type}, headless={settings.headless}"
    )
    return settings


__all__ = [
    "FixtureMissingError",
    "REQUIRED_ENV_VARS",
    "SuiteSettings",
    "Timeouts",
    "load_settings",
]
