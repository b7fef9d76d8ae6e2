import pytest

from webshop_suites.ui_testing.framework.locator import (
    ElementHandle,
    ElementNotFoundError,
    by_attribute,
    by_id,
    by_text,
    resolve,
)
from webshop_suites.unit.fakes import FakePage


def test_css_selectors_for_id_and_attribute_descriptors():
    assert by_id("Email").css_selector() == "#Email"
    assert by_id("Email", descendant="span").css_selector() == "#Email span"

    submit = by_attribute("input", {"type": "submit"}, classes=["login-button"])
    assert submit.css_selector() == 'input.login-button[type="submit"]'

    field_error = by_attribute(attributes={"data-valmsg-for": "Email"}, descendant="span")
    assert field_error.css_selector() == '[data-valmsg-for="Email"] span'


def test_text_descriptor_describes_match_mode():
    assert by_text("Log out").describe() == "text(partial)='Log out'"
    assert by_text("Log out", exact=True).describe() == "text(exact)='Log out'"
    with pytest.raises(ValueError):
        by_text("Log out").css_selector()


def test_empty_descriptors_are_rejected():
    with pytest.raises(ValueError):
        by_attribute()
    with pytest.raises(ValueError):
        by_text("")


def test_descriptors_are_hashable_values():
    assert by_id("Email") == by_id("Email")
    assert len({by_id("Email"), by_id("Email"), by_id("Password")}) == 2


def test_resolve_dispatches_by_kind_without_touching_page_state():
    page = FakePage()

    resolve(page, by_id("Email"))
    resolve(page, by_text("Log out", exact=True))

    assert page.calls == [("locator", "#Email"), ("get_by_text", "Log out", True)]
    assert page.url == "about:blank"


def test_handle_resolves_on_every_use():
    page = FakePage()
    handle = ElementHandle(page, by_id("Email"), name="email_input")
    assert page.calls == []

    handle.locator
    handle.locator
    assert page.calls.count(("locator", "#Email")) == 2


@pytest.mark.asyncio
async def test_handle_actions_pass_timeout_and_fill_text():
    page = FakePage()
    page.elements["#Email"] = {"visible": True}
    handle = ElementHandle(page, by_id("Email"), name="email_input")

    await handle.wait_visible(1200)
    await handle.fill("user@example.com", 1200)
    await handle.click(1200)

    assert page.timeouts == [1200, 1200, 1200]
    assert page.elements["#Email"]["value"] == "user@example.com"


@pytest.mark.asyncio
async def test_timeout_surfaces_as_element_not_found():
    page = FakePage()
    handle = ElementHandle(page, by_id("Missing"), name="missing_input")

    with pytest.raises(ElementNotFoundError) as exc_info:
        await handle.click(250)

    error = exc_info.value
    assert error.kind == "ElementNotFound"
    assert error.selector == "#Missing"
    assert error.timeout_ms == 250
    assert "missing_input" in str(error)


@pytest.mark.asyncio
async def test_point_in_time_queries_on_absent_element():
    page = FakePage()
    handle = ElementHandle(page, by_text("Log out"), name="logout_link")

    assert await handle.is_visible() is False
    assert await handle.text_content() is None

    page.elements["Log out"] = {"visible": True, "text": "Log out"}
    assert await handle.is_visible() is True
    assert await handle.text_content() == "Log out"
