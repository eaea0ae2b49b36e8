"""
Browser session management

Holds the single browser and page of the process. The session moves
between three states:

- NO_BROWSER: nothing launched
- BROWSER_ONLY: browser open, no page yet
- READY: browser and page open

``launch`` always lands in BROWSER_ONLY (closing anything already open
first) and immediately opens a page. ``ensure_ready`` is the only move from
BROWSER_ONLY to READY, and ``close`` returns to NO_BROWSER from anywhere.
"""

import base64
import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Optional, Type

from playwright.async_api import Error as PlaywrightError

from .errors import (
    BrowserToolError,
    CaptureError,
    ElementNotFoundError,
    EngineError,
    EvaluationError,
    NotLaunchedError,
)
from .launcher import BrowserLauncher
from .utils import serialize_result

logger = logging.getLogger(__name__)

WAIT_UNTIL_EVENTS = {
    "load": "load",
    "domcontentloaded": "domcontentloaded",
    "networkidle0": "networkidle",
    "networkidle2": "networkidle",
}

# Run the caller's text through eval so statement lists behave as typed
EVAL_WRAPPER = "(script) => eval(script)"
BODY_TEXT = "() => (document.body && document.body.textContent) || ''"


class SessionState(str, Enum):
    NO_BROWSER = "no_browser"
    BROWSER_ONLY = "browser_only"
    READY = "ready"


@contextmanager
def engine_errors(error_class: Type[BrowserToolError] = EngineError):
    """Translate Playwright exceptions into the tool error taxonomy."""
    try:
        yield
    except PlaywrightError as exc:
        raise error_class(exc.message) from exc


class BrowserSession:
    """The process-wide browser and page pair."""

    def __init__(self, launcher: Optional[BrowserLauncher] = None):
        self.launcher = launcher or BrowserLauncher()
        self.browser = None
        self.page = None
        self._driver = None
        self._viewport: Optional[Dict[str, int]] = None

    @property
    def state(self) -> SessionState:
        if self.browser is None:
            return SessionState.NO_BROWSER
        if self.page is None:
            return SessionState.BROWSER_ONLY
        return SessionState.READY

    async def launch(self, headless: bool = True, viewport: Optional[Dict[str, int]] = None) -> str:
        if self.browser is not None or self._driver is not None:
            logger.info("Closing existing browser before relaunch")
            await self.close()

        self._viewport = viewport or self.launcher.default_viewport
        try:
            with engine_errors():
                self._driver = await self.launcher.start_driver()
                self.browser = await self.launcher.launch(self._driver, headless)
                self.page = await self._new_page()
        except Exception:
            await self._discard()
            raise

        mode = "headless" if headless else "headed"
        logger.info("Browser launched in %s mode", mode)
        return f"Browser launched successfully in {mode} mode"

    async def ensure_ready(self):
        """Return the current page, opening one if the browser has none."""
        if self.browser is None:
            raise NotLaunchedError()
        if self.page is None:
            logger.info("No page open, creating a new one")
            with engine_errors():
                self.page = await self._new_page()
        return self.page

    async def navigate(self, url: str, wait_until: str = "load") -> str:
        page = await self.ensure_ready()
        with engine_errors():
            await page.goto(url, wait_until=WAIT_UNTIL_EVENTS[wait_until])
        return f"Navigated to: {url}"

    async def screenshot(
        self, full_page: bool = False, image_format: str = "png", quality: Optional[float] = None
    ) -> bytes:
        page = await self.ensure_ready()
        with engine_errors():
            if image_format == "webp":
                data = await self._capture_webp(page, full_page)
            else:
                options: Dict[str, Any] = {"full_page": full_page, "type": image_format}
                if image_format == "jpeg" and quality is not None:
                    options["quality"] = round(quality)
                data = await page.screenshot(**options)

        if not data:
            raise CaptureError()
        return data

    async def get_text(self, selector: Optional[str] = None) -> str:
        page = await self.ensure_ready()
        with engine_errors():
            if selector:
                element = await self._query(page, selector)
                text = await element.text_content()
            else:
                text = await page.evaluate(BODY_TEXT)
        return text or ""

    async def click(self, selector: str) -> str:
        page = await self.ensure_ready()
        with engine_errors():
            element = await self._query(page, selector)
            await element.click()
        return f"Clicked element: {selector}"

    async def type_text(self, selector: str, text: str) -> str:
        page = await self.ensure_ready()
        with engine_errors():
            element = await self._query(page, selector)
            await element.type(text)
        return f'Typed "{text}" into {selector}'

    async def evaluate(self, script: str) -> str:
        """
        Run script text in the page and return its value as JSON text.

        The script executes with full privileges of the page context.
        """
        page = await self.ensure_ready()
        with engine_errors(EvaluationError):
            result = await page.evaluate(EVAL_WRAPPER, script)

        try:
            return serialize_result(result)
        except (TypeError, ValueError) as exc:
            raise EvaluationError(f"Script result is not serializable: {exc}") from exc

    async def close(self) -> str:
        browser, driver = self.browser, self._driver
        self.browser = None
        self.page = None
        self._driver = None
        self._viewport = None

        try:
            if browser is not None:
                with engine_errors():
                    await browser.close()
                logger.info("Browser closed")
        finally:
            if driver is not None:
                await driver.stop()
        return "Browser closed successfully"

    async def _new_page(self):
        if self._viewport:
            return await self.browser.new_page(viewport=self._viewport)
        return await self.browser.new_page()

    async def _query(self, page, selector: str):
        element = await page.query_selector(selector)
        if element is None:
            raise ElementNotFoundError(selector)
        return element

    async def _capture_webp(self, page, full_page: bool) -> bytes:
        cdp = await page.context.new_cdp_session(page)
        try:
            params: Dict[str, Any] = {"format": "webp"}
            if full_page:
                metrics = await cdp.send("Page.getLayoutMetrics")
                size = metrics.get("cssContentSize") or metrics.get("contentSize", {})
                params["captureBeyondViewport"] = True
                params["clip"] = {
                    "x": 0,
                    "y": 0,
                    "width": size.get("width", 0),
                    "height": size.get("height", 0),
                    "scale": 1,
                }
            result = await cdp.send("Page.captureScreenshot", params)
        finally:
            await cdp.detach()
        return base64.b64decode(result.get("data", ""))

    async def _discard(self) -> None:
        """Tear down whatever a failed launch left behind."""
        browser, driver = self.browser, self._driver
        self.browser = None
        self.page = None
        self._driver = None
        self._viewport = None
        if browser is not None:
            try:
                await browser.close()
            except PlaywrightError as exc:
                logger.warning("Failed to close browser after launch error: %s", exc.message)
        if driver is not None:
            try:
                await driver.stop()
            except PlaywrightError as exc:
                logger.warning("Failed to stop driver after launch error: %s", exc.message)
