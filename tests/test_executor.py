"""
Unit tests for the tool executor and its response envelopes.
"""

import base64

import pytest
from mcp import types
from playwright.async_api import Error as PlaywrightError

from mcp_servers.headless_browser.session import SessionState

from .conftest import PNG_BYTES, FakeElement


def only_text(content):
    assert len(content) == 1
    assert isinstance(content[0], types.TextContent)
    return content[0].text


@pytest.mark.parametrize(
    "name, arguments",
    [
        ("navigate", {"url": "https://example.com"}),
        ("screenshot", {}),
        ("get_text", {}),
        ("click", {"selector": "#go"}),
        ("type", {"selector": "#q", "text": "hi"}),
        ("evaluate", {"script": "1+1"}),
    ],
)
async def test_tools_before_launch_report_not_launched(executor, session, launcher, name, arguments):
    text = only_text(await executor.execute(name, arguments))
    assert text == "Error: Browser not launched. Use launch first."
    assert "not launched" in text
    assert session.state == SessionState.NO_BROWSER
    assert launcher.browsers == []


async def test_launch_envelope_uses_validated_headless(executor):
    assert only_text(await executor.execute("launch", {})) == (
        "Browser launched successfully in headless mode"
    )
    assert only_text(await executor.execute("launch", {"headless": False})) == (
        "Browser launched successfully in headed mode"
    )


async def test_launch_passes_viewport(executor, launcher):
    await executor.execute("launch", {"viewport": {"width": 800, "height": 600}})
    assert launcher.browsers[0].pages[0].options == {"viewport": {"width": 800, "height": 600}}


async def test_second_launch_starts_from_a_fresh_page(executor, session, launcher):
    await executor.execute("launch", {})
    await executor.execute("navigate", {"url": "https://example.com"})
    session.page.body_text = "first session"

    await executor.execute("launch", {})

    assert launcher.browsers[0].closed is True
    assert only_text(await executor.execute("get_text", {})) == "Page text: "


async def test_invalid_url_fails_before_engine(executor, session):
    await executor.execute("launch", {})
    text = only_text(await executor.execute("navigate", {"url": "not a url"}))
    assert text == "Error: Invalid argument 'url': Must be a valid URL"
    assert session.page.visits == []


async def test_invalid_arguments_before_launch_are_validation_errors(executor, launcher):
    text = only_text(await executor.execute("click", {}))
    assert text.startswith("Error: Invalid argument 'selector'")
    assert launcher.drivers == []


async def test_navigate_confirmation_contains_url(executor, session):
    await executor.execute("launch", {})
    text = only_text(await executor.execute("navigate", {"url": "https://example.com"}))
    assert text == "Navigated to: https://example.com"
    assert session.page.visits == [("https://example.com", "load")]


async def test_screenshot_envelope(executor):
    await executor.execute("launch", {})
    content = await executor.execute("screenshot", {"fullPage": True})

    assert len(content) == 2
    assert content[0].text == "Screenshot taken (png, fullPage: true)"
    assert content[1].type == "image"
    assert content[1].mimeType == "image/png"
    assert base64.b64decode(content[1].data) == PNG_BYTES


async def test_screenshot_quality_out_of_range(executor, session):
    await executor.execute("launch", {})
    text = only_text(await executor.execute("screenshot", {"format": "jpeg", "quality": 150}))
    assert text.startswith("Error: Invalid argument 'quality'")
    assert session.page.screenshot_calls == []


async def test_png_screenshot_ignores_quality(executor, session):
    await executor.execute("launch", {})
    await executor.execute("screenshot", {"format": "png", "quality": 50})
    assert session.page.screenshot_calls == [{"full_page": False, "type": "png"}]


@pytest.mark.parametrize("image_format", ["jpeg", "webp"])
async def test_screenshot_mime_type_follows_format(executor, image_format):
    await executor.execute("launch", {})
    content = await executor.execute("screenshot", {"format": image_format})
    assert content[0].text == f"Screenshot taken ({image_format}, fullPage: false)"
    assert content[1].mimeType == f"image/{image_format}"


async def test_empty_screenshot_reports_capture_error(executor, session):
    await executor.execute("launch", {})
    session.page.screenshot_bytes = None
    assert only_text(await executor.execute("screenshot", {})) == "Error: Failed to capture screenshot"


async def test_get_text_envelopes(executor, session):
    await executor.execute("launch", {})
    session.page.body_text = "Example Domain"
    session.page.elements["h1"] = FakeElement("Heading")

    assert only_text(await executor.execute("get_text", {})) == "Page text: Example Domain"
    assert only_text(await executor.execute("get_text", {"selector": "h1"})) == "Text from h1: Heading"
    assert only_text(await executor.execute("get_text", {"selector": ".none"})) == (
        "Error: Element not found: .none"
    )


async def test_click_and_type_envelopes(executor, session):
    await executor.execute("launch", {})
    session.page.elements["#q"] = FakeElement()

    assert only_text(await executor.execute("click", {"selector": "#q"})) == "Clicked element: #q"
    assert only_text(await executor.execute("type", {"selector": "#q", "text": "abc"})) == (
        'Typed "abc" into #q'
    )
    assert only_text(await executor.execute("click", {"selector": "#nope"})) == (
        "Error: Element not found: #nope"
    )


async def test_evaluate_envelopes(executor, session):
    await executor.execute("launch", {})
    session.page.scripts["1+1"] = 2
    session.page.scripts["throw new Error('x')"] = PlaywrightError("Error: x")

    assert only_text(await executor.execute("evaluate", {"script": "1+1"})) == "Script result: 2"
    assert only_text(await executor.execute("evaluate", {"script": "throw new Error('x')"})) == (
        "Error: Error: x"
    )


async def test_engine_failures_become_error_text(executor, launcher):
    launcher.launch_error = PlaywrightError("Failed to launch chromium")
    text = only_text(await executor.execute("launch", {}))
    assert text == "Error: Failed to launch chromium"


async def test_unexpected_exceptions_are_contained(executor, session):
    await executor.execute("launch", {})

    async def broken(*args, **kwargs):
        raise RuntimeError("driver disconnected")

    session.navigate = broken
    text = only_text(await executor.execute("navigate", {"url": "https://example.com"}))
    assert text == "Error: driver disconnected"


async def test_unknown_tool(executor):
    assert only_text(await executor.execute("scroll", {})) == "Error: Unknown tool: scroll"


async def test_close_is_idempotent(executor):
    assert only_text(await executor.execute("close", {})) == "Browser closed successfully"
    assert only_text(await executor.execute("close", None)) == "Browser closed successfully"


async def test_full_round_trip_releases_resources(executor, session, launcher):
    steps = [
        ("launch", {}),
        ("navigate", {"url": "https://example.com"}),
        ("screenshot", {}),
        ("close", {}),
        ("close", {}),
    ]
    for name, arguments in steps:
        content = await executor.execute(name, arguments)
        assert not content[0].text.startswith("Error:"), content[0].text

    assert launcher.browsers[0].closed is True
    assert launcher.drivers[0].stopped is True
    assert session.state == SessionState.NO_BROWSER
    text = only_text(await executor.execute("get_text", {}))
    assert "not launched" in text
