"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

Drives the web shop's /login form.

Design goals:
  - Element table built from id / attribute / text descriptors
  - submit() waits for the button before clicking (the form renders async)
  - login() is fill + submit; a failed fill aborts the submit

================================================================================
"""

from __future__ import annotations

import allure

from webshop_suites.ui_testing.framework.locator import (
    ElementHandle,
    by_attribute,
    by_id,
    by_text,
)
from webshop_suites.ui_testing.framework.page_base import BasePage
from webshop_suites.ui_testing.pages.messages import ErrorMessages, InfoMessages


class LoginPage(BasePage):
    """Login page object (async)."""

    URL_PATH = "/login"
    PAGE_TITLE = "Login"

    ELEMENTS = {
        "email_input": by_id("Email"),
        "password_input": by_id("Password"),
        "submit_button": by_attribute(
            "input", {"type": "submit"}, classes=["login-button"]
        ),
        "logout_link": by_text(InfoMessages.LOGGED_OUT_LINK),
        "unsuccessful_login_message": by_text(ErrorMessages.LOGIN_UNSUCCESSFUL),
        "no_customer_found_message": by_text(ErrorMessages.NO_CUSTOMER_FOUND),
        "email_error": by_attribute(attributes={"data-valmsg-for": "Email"}, descendant="span"),
    }

    ACTIONS = {
        "navigate": None,
        "fill_credentials": None,
        "submit": None,
        "login": None,
    }

    @property
    def email_input(self) -> ElementHandle:
        return self.element("email_input")

    @property
    def password_input(self) -> ElementHandle:
        return self.element("password_input")

    @property
    def submit_button(self) -> ElementHandle:
        return self.element("submit_button")

    @property
    def logout_link(self) -> ElementHandle:
        """Visible only once a session is established."""
        return self.element("logout_link")

    @property
    def unsuccessful_login_message(self) -> ElementHandle:
        return self.element("unsuccessful_login_message")

    @property
    def no_customer_found_message(self) -> ElementHandle:
        return self.element("no_customer_found_message")

    @property
    def email_error(self) -> ElementHandle:
        """Field validation message under the email input."""
        return self.element("email_error")

    async def fill_credentials(self, email: str, password: str) -> None:
        """Fill email, then password. Does not submit."""
        await self.fill("email_input", email)
        await self.fill("password_input", password)

    @allure.step("Submit login form")
    async def submit(self) -> None:
        await self.wait_visible("submit_button")
        await self.click("submit_button")

    async def login(self, email: str, password: str) -> None:
        """Fill the credentials and submit the form."""
        with allure.step(f"Login (email={email})"):
            await self.fill_credentials(email, password)
            await self.submit()
