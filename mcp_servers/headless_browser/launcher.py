"""
Browser executable discovery and launch options

Decides which Chromium executable and command-line flags a launch uses,
depending on the browser mode the server runs in.
"""

import logging
import os
from typing import Any, Callable, Dict, Optional, Sequence

from playwright.async_api import async_playwright

logger = logging.getLogger(__name__)

# Checked in order, first existing path wins
CHROME_PATHS = (
    "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
    "/usr/bin/google-chrome",
    "/usr/bin/chromium-browser",
    "C:\\Program Files\\Google\\Chrome\\Application\\chrome.exe",
    "C:\\Program Files (x86)\\Google\\Chrome\\Application\\chrome.exe",
)

SANDBOX_ARGS = ("--no-sandbox", "--disable-setuid-sandbox")

# Serverless Chromium flags plus scrollbar/web-security tweaks
HOSTED_ARGS = (
    "--allow-running-insecure-content",
    "--autoplay-policy=user-gesture-required",
    "--disable-component-update",
    "--disable-domain-reliability",
    "--disable-features=AudioServiceOutOfProcess,IsolateOrigins,site-per-process",
    "--disable-print-preview",
    "--disable-setuid-sandbox",
    "--disable-site-isolation-trials",
    "--disable-speech-api",
    "--disk-cache-size=33554432",
    "--enable-features=SharedArrayBuffer",
    "--ignore-gpu-blocklist",
    "--in-process-gpu",
    "--mute-audio",
    "--no-default-browser-check",
    "--no-pings",
    "--no-sandbox",
    "--no-zygote",
    "--single-process",
    "--window-size=1920,1080",
    "--hide-scrollbars",
    "--disable-web-security",
)

HOSTED_VIEWPORT = {"width": 1920, "height": 1080}


def find_chrome_executable(
    candidates: Sequence[str] = CHROME_PATHS,
    exists: Callable[[str], bool] = os.path.exists,
) -> Optional[str]:
    """Return the first candidate path that exists, or None."""
    for path in candidates:
        if exists(path):
            return path
    return None


class BrowserLauncher:
    """
    Starts the Playwright driver and launches Chromium.

    Modes:
    - bundled: engine default executable, no extra flags
    - local: first installed Chrome found in ``candidates``, otherwise the
      engine default; sandbox flags always passed
    - hosted: the managed Chromium build with serverless flags
    """

    def __init__(self, mode: str = "bundled", candidates: Sequence[str] = CHROME_PATHS):
        if mode not in ("bundled", "local", "hosted"):
            raise ValueError(f"Unknown browser mode: {mode}")
        self.mode = mode
        self.candidates = tuple(candidates)

    @property
    def default_viewport(self) -> Optional[Dict[str, int]]:
        if self.mode == "hosted":
            return dict(HOSTED_VIEWPORT)
        return None

    def launch_options(self, browser_type: Any, headless: bool) -> Dict[str, Any]:
        options: Dict[str, Any] = {"headless": headless}

        if self.mode == "hosted":
            options["executable_path"] = browser_type.executable_path
            options["args"] = list(HOSTED_ARGS)
        elif self.mode == "local":
            options["args"] = list(SANDBOX_ARGS)
            executable_path = find_chrome_executable(self.candidates)
            if executable_path:
                options["executable_path"] = executable_path
            else:
                logger.info("No local Chrome install found, using engine default executable")

        return options

    async def start_driver(self):
        return await async_playwright().start()

    async def launch(self, driver: Any, headless: bool):
        browser_type = driver.chromium
        options = self.launch_options(browser_type, headless)
        logger.info(
            "Launching Chromium (mode=%s, headless=%s, executable=%s)",
            self.mode,
            headless,
            options.get("executable_path", "default"),
        )
        return await browser_type.launch(**options)
