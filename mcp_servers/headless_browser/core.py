"""
Server core

Shared constants and environment-driven settings for the browser MCP
server. Values are read from the process environment after loading a
``.env`` file, if one exists.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

SERVER_NAME = "headless-browser-mcp"
SERVER_VERSION = "1.0.0"

# bundled: engine default executable, used by the stdio server
# local:   probe well-known install paths, sandbox disabled
# hosted:  managed headless Chromium with serverless flags
HTTP_BROWSER_MODES = ("local", "hosted")

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"


@dataclass(frozen=True)
class Settings:
    browser_mode: str = "local"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_to_file: bool = False


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def check_http_mode(browser_mode: str) -> str:
    """Return ``browser_mode`` if the HTTP server supports it, else raise ValueError."""
    if browser_mode not in HTTP_BROWSER_MODES:
        raise ValueError(
            f"BROWSER_MODE must be one of {', '.join(HTTP_BROWSER_MODES)}, got {browser_mode!r}"
        )
    return browser_mode


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from environment variables.

    ``BROWSER_MODE`` is only read here; the HTTP server checks it with
    ``check_http_mode``.

    Args:
        environ: mapping to read instead of ``os.environ``; when omitted the
            ``.env`` file is loaded first

    Returns:
        Settings instance
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    port_value = environ.get("PORT", str(DEFAULT_PORT))
    try:
        port = int(port_value)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got {port_value!r}")

    return Settings(
        browser_mode=environ.get("BROWSER_MODE", "local").strip().lower(),
        host=environ.get("HOST", DEFAULT_HOST),
        port=port,
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
        log_dir=environ.get("LOG_DIR", "logs"),
        log_to_file=_env_flag(environ.get("LOG_TO_FILE", "")),
    )
