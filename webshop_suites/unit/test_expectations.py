import pytest

from webshop_suites.ui_testing.framework.expectations import (
    AssertionTimeoutError,
    Expect,
    Expectation,
    ExpectationKind,
    expect_hidden,
    expect_text,
    expect_url_excludes,
    expect_visible,
    poll_until,
    verify,
)
from webshop_suites.ui_testing.framework.locator import by_id, by_text
from webshop_suites.ui_testing.pages import LoginPage
from webshop_suites.unit.fakes import FakeHandle, FakeSession


@pytest.mark.asyncio
async def test_poll_until_checks_at_least_once_with_zero_timeout():
    calls = []

    async def check():
        calls.append(1)
        return False, "nope"

    assert await poll_until(check, timeout_ms=0, interval_ms=1) == (False, "nope")
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_visible_passes_once_element_appears():
    handle = FakeHandle(by_text("Log out"), name="logout_link")
    handle.visible_after = 3

    await expect_visible(handle, timeout_ms=1000, interval_ms=1)

    assert handle.reads == 3


@pytest.mark.asyncio
async def test_visible_times_out_with_selector_and_observation():
    handle = FakeHandle(by_text("Log out"), name="logout_link")

    with pytest.raises(AssertionTimeoutError) as exc_info:
        await expect_visible(handle, timeout_ms=30, interval_ms=5)

    error = exc_info.value
    assert isinstance(error, AssertionError)
    assert error.kind == "AssertionTimeout"
    assert error.selector == "text(partial)='Log out'"
    assert error.observed == "not visible"
    assert error.timeout_ms == 30


@pytest.mark.asyncio
async def test_hidden_passes_for_absent_element_and_fails_for_visible_one():
    handle = FakeHandle(by_text("Log out"))
    await expect_hidden(handle, timeout_ms=0)

    handle.visible = True
    with pytest.raises(AssertionTimeoutError):
        await expect_hidden(handle, timeout_ms=20, interval_ms=5)


@pytest.mark.asyncio
async def test_hidden_passes_on_first_read_before_element_renders():
    # The element renders on the second read; the check already returned on the first
    handle = FakeHandle(by_text("Your registration completed"))
    handle.visible_after = 2

    await expect_hidden(handle, timeout_ms=1000, interval_ms=1)

    assert handle.reads == 1
    assert await handle.is_visible()


@pytest.mark.asyncio
async def test_text_exact_ignores_surrounding_whitespace():
    handle = FakeHandle(by_id("Email", descendant="span"))
    handle.text = "\n  Please enter a valid email address.  "

    await expect_text(handle, "Please enter a valid email address.", timeout_ms=0)

    with pytest.raises(AssertionTimeoutError) as exc_info:
        await expect_text(handle, "Please enter a valid email", timeout_ms=0)
    assert exc_info.value.expected == "Please enter a valid email"


@pytest.mark.asyncio
async def test_text_contains_and_missing_element():
    handle = FakeHandle(by_text("already exists"))
    handle.text = "The specified email already exists"
    await expect_text(handle, "already exists", exact=False, timeout_ms=0)

    handle.text = None
    with pytest.raises(AssertionTimeoutError) as exc_info:
        await expect_text(handle, "already exists", exact=False, timeout_ms=0)
    assert exc_info.value.observed is None


@pytest.mark.asyncio
async def test_url_excludes():
    session = FakeSession(url="https://shop.test/register?x=<script>alert(1)</script>")

    with pytest.raises(AssertionTimeoutError) as exc_info:
        await expect_url_excludes(session, "alert", timeout_ms=0)
    assert exc_info.value.selector == "url"

    session.url = "https://shop.test/register"
    await expect_url_excludes(session, "alert", timeout_ms=0)


@pytest.mark.asyncio
async def test_expect_helper_applies_bound_timeout():
    handle = FakeHandle(by_text("Log out"))
    expect = Expect(timeout_ms=0, interval_ms=1)

    with pytest.raises(AssertionTimeoutError) as exc_info:
        await expect.visible(handle)
    assert exc_info.value.timeout_ms == 0


@pytest.mark.asyncio
async def test_verify_routes_declarative_expectations():
    session = FakeSession(url="https://shop.test/login")
    page = LoginPage(session)
    page.email_error.text = "Please enter a valid email address."
    page.email_error.visible = True

    await verify(page, Expectation(ExpectationKind.VISIBLE, element="email_error"), timeout_ms=0)
    await verify(page, Expectation(ExpectationKind.HIDDEN, element="logout_link"), timeout_ms=0)
    await verify(
        page,
        Expectation(ExpectationKind.TEXT_EQUALS, element="email_error", expected="Please enter a valid email address."),
        timeout_ms=0,
    )
    await verify(page, Expectation(ExpectationKind.URL_EXCLUDES, expected="alert"), timeout_ms=0)

    with pytest.raises(AssertionTimeoutError):
        await verify(page, Expectation(ExpectationKind.VISIBLE, element="logout_link"), timeout_ms=0)
