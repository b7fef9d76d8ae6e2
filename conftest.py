"""
Repository-level pytest configuration.

Why this exists:
  - Load a local `.env` (never overriding variables already set by the shell/CI)
  - Initialize loguru once for the whole run
  - Expose the repo root to fixtures

Important:
  Credentials are NOT defaulted here. A missing TEST_EMAIL / TEST_PASSWORD /
  BASE_URL must stop the UI suite instead of running with placeholder values.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from dotenv import load_dotenv

from webshop_suites.ui_testing.framework.log_config import init_logger


PROJECT_ROOT = Path(__file__).parent


def pytest_configure(config):
    load_dotenv(PROJECT_ROOT / ".env", override=False)
    init_logger()


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return PROJECT_ROOT
