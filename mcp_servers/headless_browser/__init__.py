"""
MCP Server for Headless Browser Operations

This package exposes a single Playwright browser session as eight callable
tools (launch, navigate, screenshot, get_text, click, type, evaluate,
close). It can be served over stdio for local agents or over HTTP with
server-sent events for remote callers.

The evaluate tool runs arbitrary JavaScript in the page context; only
expose this server to trusted callers.
"""

from .catalog import TOOL_NAMES, list_tools
from .errors import (
    BrowserToolError,
    CaptureError,
    ElementNotFoundError,
    EngineError,
    EvaluationError,
    NotLaunchedError,
    UnknownToolError,
    ValidationError,
)
from .executor import ToolExecutor
from .session import BrowserSession, SessionState
from .worker import SessionWorker

__all__ = [
    "TOOL_NAMES",
    "list_tools",
    "ToolExecutor",
    "BrowserSession",
    "SessionState",
    "SessionWorker",
    "BrowserToolError",
    "ValidationError",
    "NotLaunchedError",
    "ElementNotFoundError",
    "CaptureError",
    "EvaluationError",
    "EngineError",
    "UnknownToolError",
]
