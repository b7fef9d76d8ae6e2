"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the web shop's account pages.

Each page class encapsulates:
    - Element descriptors (resolved lazily)
    - Page-specific actions

PAGES maps the page names used in YAML cases to their classes.

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginPage
from .register_page import RegisterPage

PAGES = {
    "login": LoginPage,
    "register": RegisterPage,
}

__all__ = [
    "LoginPage",
    "PAGES",
    "RegisterPage",
]
