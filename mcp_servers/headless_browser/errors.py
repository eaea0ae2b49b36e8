"""
Tool error taxonomy

Every failure a tool call can hit is one of these kinds. The executor
renders all of them through ``render_error`` so callers only ever see
``Error: <message>`` text.
"""

from typing import Optional


class BrowserToolError(Exception):
    """Base class for failures surfaced to tool callers."""

    kind = "engine"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(BrowserToolError):
    kind = "validation"


class NotLaunchedError(BrowserToolError):
    kind = "not_launched"

    def __init__(self, message: str = "Browser not launched. Use launch first."):
        super().__init__(message)


class ElementNotFoundError(BrowserToolError):
    kind = "element_not_found"

    def __init__(self, selector: str):
        super().__init__(f"Element not found: {selector}", field="selector")
        self.selector = selector


class CaptureError(BrowserToolError):
    kind = "capture"

    def __init__(self, message: str = "Failed to capture screenshot"):
        super().__init__(message)


class EvaluationError(BrowserToolError):
    kind = "evaluation"


class EngineError(BrowserToolError):
    kind = "engine"


class UnknownToolError(BrowserToolError):
    kind = "unknown_tool"

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


def render_error(exc: BaseException) -> str:
    """Format any exception as the text of an error envelope."""
    if isinstance(exc, BrowserToolError):
        message = exc.message
    else:
        message = str(exc) or type(exc).__name__
    return f"Error: {message}"
