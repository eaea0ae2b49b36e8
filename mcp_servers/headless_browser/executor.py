"""
Tool executor

Maps a tool call to exactly one session operation and packages the result
as MCP content. ``execute`` never raises: any failure becomes a single
``Error: <message>`` text item.
"""

import base64
import logging
from typing import Any, Callable, Dict, List, Optional, Union

from mcp import types

from .errors import BrowserToolError, UnknownToolError, render_error
from .schemas import (
    ClickArguments,
    EvaluateArguments,
    GetTextArguments,
    LaunchArguments,
    NavigateArguments,
    ScreenshotArguments,
    TypeArguments,
    validate_arguments,
)
from .worker import SessionWorker

logger = logging.getLogger(__name__)

Content = Union[types.TextContent, types.ImageContent]


def text_content(text: str) -> types.TextContent:
    return types.TextContent(type="text", text=text)


class ToolExecutor:
    def __init__(self, worker: Optional[SessionWorker] = None):
        self.worker = worker or SessionWorker()
        self._handlers: Dict[str, Callable] = {
            "launch": self._launch,
            "navigate": self._navigate,
            "screenshot": self._screenshot,
            "get_text": self._get_text,
            "click": self._click,
            "type": self._type,
            "evaluate": self._evaluate,
            "close": self._close,
        }

    async def execute(self, name: str, arguments: Any = None) -> List[Content]:
        """Run one tool call and return its response envelope."""
        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise UnknownToolError(name)
            validated = validate_arguments(name, arguments)
            logger.debug("Running tool %s with %s", name, validated)
            return await handler(validated)
        except BrowserToolError as exc:
            logger.warning("Tool %s failed (%s): %s", name, exc.kind, exc.message)
            return [text_content(render_error(exc))]
        except Exception as exc:
            logger.exception("Unexpected error in tool %s", name)
            return [text_content(render_error(exc))]

    async def _launch(self, args: LaunchArguments) -> List[Content]:
        viewport = args.viewport.as_size() if args.viewport else None
        message = await self.worker.submit("launch", headless=args.headless, viewport=viewport)
        return [text_content(message)]

    async def _navigate(self, args: NavigateArguments) -> List[Content]:
        message = await self.worker.submit("navigate", args.url, args.wait_until)
        return [text_content(message)]

    async def _screenshot(self, args: ScreenshotArguments) -> List[Content]:
        data = await self.worker.submit("screenshot", args.full_page, args.format, args.quality)
        caption = f"Screenshot taken ({args.format}, fullPage: {str(args.full_page).lower()})"
        return [
            text_content(caption),
            types.ImageContent(
                type="image",
                data=base64.b64encode(data).decode("ascii"),
                mimeType=f"image/{args.format}",
            ),
        ]

    async def _get_text(self, args: GetTextArguments) -> List[Content]:
        text = await self.worker.submit("get_text", args.selector)
        if args.selector:
            return [text_content(f"Text from {args.selector}: {text}")]
        return [text_content(f"Page text: {text}")]

    async def _click(self, args: ClickArguments) -> List[Content]:
        return [text_content(await self.worker.submit("click", args.selector))]

    async def _type(self, args: TypeArguments) -> List[Content]:
        return [text_content(await self.worker.submit("type_text", args.selector, args.text))]

    async def _evaluate(self, args: EvaluateArguments) -> List[Content]:
        result = await self.worker.submit("evaluate", args.script)
        return [text_content(f"Script result: {result}")]

    async def _close(self, args: Any) -> List[Content]:
        return [text_content(await self.worker.submit("close"))]
