"""
================================================================================
Register Page Object (Async / Playwright)
================================================================================

Drives the web shop's /register form.

register() selects the gender radio, fills the text fields in form order
and submits. register_and_wait() also waits for the document the
submit loads, for checks that only assert something is absent. Field-level validation messages are exposed as handles named
`<field>_error`.

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
from webshop_suites.ui_testing.framework.user_data import RegistrationData
from webshop_suites.ui_testing.pages.messages import InfoMessages


def _field_error(field: str):
    return by_attribute(attributes={"data-valmsg-for": field}, descendant="span")


class RegisterPage(BasePage):
    """Registration page object (async)."""

    URL_PATH = "/register"
    PAGE_TITLE = "Register"

    ELEMENTS = {
        "gender_male": by_id("gender-male"),
        "gender_female": by_id("gender-female"),
        "first_name_input": by_id("FirstName"),
        "last_name_input": by_id("LastName"),
        "email_input": by_id("Email"),
        "password_input": by_id("Password"),
        "confirm_password_input": by_id("ConfirmPassword"),
        "register_button": by_attribute(
            "input", {"id": "register-button", "type": "submit"}
        ),
        "success_message": by_text(InfoMessages.REGISTRATION_COMPLETED),
        "email_exists_error": by_attribute(classes=["message-error"]),
        "first_name_error": _field_error("FirstName"),
        "last_name_error": _field_error("LastName"),
        "email_error": _field_error("Email"),
        "password_error": _field_error("Password"),
        "confirm_password_error": _field_error("ConfirmPassword"),
        # Same region as confirm_password_error; named for the mismatch case
        "password_mismatch_error": _field_error("ConfirmPassword"),
    }

    ACTIONS = {
        "navigate": None,
        "register": RegistrationData,
        "register_and_wait": RegistrationData,
        "submit": None,
    }

    @property
    def success_message(self) -> ElementHandle:
        return self.element("success_message")

    @property
    def email_exists_error(self) -> ElementHandle:
        return self.element("email_exists_error")

    @property
    def password_mismatch_error(self) -> ElementHandle:
        return self.element("password_mismatch_error")

    @property
    def first_name_error(self) -> ElementHandle:
        return self.element("first_name_error")

    @property
    def last_name_error(self) -> ElementHandle:
        return self.element("last_name_error")

    @property
    def email_error(self) -> ElementHandle:
        return self.element("email_error")

    @property
    def password_error(self) -> ElementHandle:
        return self.element("password_error")

    @property
    def confirm_password_error(self) -> ElementHandle:
        return self.element("confirm_password_error")

    @property
    def register_button(self) -> ElementHandle:
        return self.element("register_button")

    @allure.step("Submit registration form")
    async def submit(self) -> None:
        await self.wait_visible("register_button")
        await self.click("register_button")

    async def fill_form(self, user: RegistrationData) -> None:
        """Select the gender radio and fill every field in form order."""
        await self.click(f"gender_{user.gender}")
        await self.fill("first_name_input", user.first_name)
        await self.fill("last_name_input", user.last_name)
        await self.fill("email_input", user.email)
        await self.fill("password_input", user.password)
        await self.fill("confirm_password_input", user.confirm_password)

    async def register(self, user: RegistrationData) -> None:
        """Fill the form, then submit."""
        with allure.step(f"Register (email={user.email})"):
            await self.fill_form(user)
            await self.submit()

    async def register_and_wait(self, user: RegistrationData) -> None:
        """
        Fill the form, submit and wait for the server's response document.

        Only for submissions that pass client-side validation; a blocked
        submit never navigates and ends in NavigationError.
        """
        with allure.step(f"Register and wait for result (email={user.email})"):
            await self.fill_form(user)
            async with self.session.navigation():
                await self.submit()
