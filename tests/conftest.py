"""
Shared fixtures: in-memory stand-ins for the Playwright driver, browser and page.
"""

import base64

import pytest
from playwright.async_api import Error as PlaywrightError

from mcp_servers.headless_browser.executor import ToolExecutor
from mcp_servers.headless_browser.session import BODY_TEXT, EVAL_WRAPPER, BrowserSession
from mcp_servers.headless_browser.worker import SessionWorker

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


class FakeElement:
    def __init__(self, text=None):
        self.text = text
        self.clicks = 0
        self.typed = []

    async def text_content(self):
        return self.text

    async def click(self):
        self.clicks += 1

    async def type(self, text):
        self.typed.append(text)


class FakeCDPSession:
    def __init__(self, page):
        self.page = page
        self.calls = []
        self.detached = False

    async def send(self, method, params=None):
        self.calls.append((method, params))
        if method == "Page.getLayoutMetrics":
            return {"cssContentSize": {"width": 800, "height": 2400}}
        if method == "Page.captureScreenshot":
            return {"data": base64.b64encode(self.page.webp_bytes).decode("ascii")}
        raise PlaywrightError(f"Unexpected CDP method {method}")

    async def detach(self):
        self.detached = True


class FakeContext:
    def __init__(self):
        self.cdp_sessions = []

    async def new_cdp_session(self, page):
        session = FakeCDPSession(page)
        self.cdp_sessions.append(session)
        return session


class FakePage:
    def __init__(self, **options):
        self.options = options
        self.context = FakeContext()
        self.elements = {}
        self.body_text = ""
        self.scripts = {}
        self.visits = []
        self.screenshot_calls = []
        self.screenshot_bytes = PNG_BYTES
        self.webp_bytes = b"RIFF\x00\x00\x00\x00WEBPfake"
        self.goto_error = None

    async def goto(self, url, wait_until="load"):
        if self.goto_error:
            raise self.goto_error
        self.visits.append((url, wait_until))

    async def screenshot(self, **options):
        self.screenshot_calls.append(options)
        return self.screenshot_bytes

    async def query_selector(self, selector):
        return self.elements.get(selector)

    async def evaluate(self, expression, arg=None):
        if expression == BODY_TEXT:
            return self.body_text
        if expression == EVAL_WRAPPER:
            outcome = self.scripts.get(arg)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        raise AssertionError(f"unexpected expression {expression!r}")


class FakeBrowser:
    def __init__(self, headless):
        self.headless = headless
        self.pages = []
        self.closed = False

    async def new_page(self, **options):
        page = FakePage(**options)
        self.pages.append(page)
        return page

    async def close(self):
        self.closed = True


class FakeDriver:
    def __init__(self):
        self.stopped = False

    async def stop(self):
        self.stopped = True


class FakeLauncher:
    """Launcher double recording every driver and browser it hands out."""

    mode = "bundled"

    def __init__(self, default_viewport=None, launch_error=None):
        self.default_viewport = default_viewport
        self.launch_error = launch_error
        self.drivers = []
        self.browsers = []

    async def start_driver(self):
        driver = FakeDriver()
        self.drivers.append(driver)
        return driver

    async def launch(self, driver, headless):
        if self.launch_error:
            raise self.launch_error
        browser = FakeBrowser(headless)
        self.browsers.append(browser)
        return browser


@pytest.fixture
def launcher():
    return FakeLauncher()


@pytest.fixture
def session(launcher):
    return BrowserSession(launcher)


@pytest.fixture
async def worker(session):
    worker = SessionWorker(session)
    yield worker
    await worker.shutdown()


@pytest.fixture
def executor(worker):
    return ToolExecutor(worker)
