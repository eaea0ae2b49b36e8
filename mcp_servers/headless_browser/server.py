"""
MCP Server for Browser Operations

Entry point of the stdio variant, and the protocol server shared with the
HTTP variant. Available tools:

- launch: start a browser (closing any open one first)
- navigate: load a URL in the current page
- screenshot: capture the page as png, jpeg or webp
- get_text: read text of an element or the whole document
- click: click an element
- type: type text into an element
- evaluate: run JavaScript in the page (full page privileges, callers must be trusted)
- close: close the browser
"""

import asyncio
import logging
import os
import signal
import sys
from typing import Any, Callable, Dict, List

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from .catalog import list_tools
from .core import SERVER_NAME, SERVER_VERSION, load_settings
from .executor import ToolExecutor
from .launcher import BrowserLauncher
from .logger_config import setup_logger
from .session import BrowserSession
from .worker import SessionWorker

logger = logging.getLogger(__name__)

SHUTDOWN_TIMEOUT = 10.0


def create_server(executor: ToolExecutor) -> Server:
    """Bind the tool catalog and executor to a protocol server."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return list_tools()

    # Arguments are checked by the executor so failures come back as text
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: Dict[str, Any]):
        return await executor.execute(name, arguments)

    return server


async def release_and_exit(
    worker: SessionWorker, exit_process: Callable[[int], Any] = os._exit
) -> None:
    """Release the browser, flush log handlers and end the process with status 0."""
    logger.info("Shutting down, releasing browser")
    try:
        await asyncio.wait_for(worker.shutdown(), SHUTDOWN_TIMEOUT)
    except asyncio.TimeoutError:
        logger.warning("Browser not released within %.0fs", SHUTDOWN_TIMEOUT)
    except Exception:
        logger.exception("Failed to release browser")
    finally:
        for handler in logging.getLogger().handlers:
            handler.flush()
        exit_process(0)


def _install_signal_handlers(
    worker: SessionWorker, exit_process: Callable[[int], Any] = os._exit
) -> None:
    loop = asyncio.get_running_loop()
    pending = []

    def on_signal(signame: str) -> None:
        logger.info("Received %s", signame)
        if not pending:
            pending.append(loop.create_task(release_and_exit(worker, exit_process)))

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, on_signal, sig.name)
        except (NotImplementedError, RuntimeError):
            # Windows event loops; KeyboardInterrupt still ends the run
            pass


async def serve_stdio(worker: SessionWorker = None) -> None:
    worker = worker or SessionWorker(BrowserSession(BrowserLauncher(mode="bundled")))
    server = create_server(ToolExecutor(worker))
    _install_signal_handlers(worker)

    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Browser MCP server running on stdio")
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        logger.info("Input closed, releasing browser")
        await worker.shutdown()


def main() -> None:
    settings = load_settings()
    setup_logger(
        level=settings.log_level,
        stream=sys.stderr,
        log_dir=settings.log_dir if settings.log_to_file else None,
    )
    try:
        asyncio.run(serve_stdio())
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    sys.exit(0)


if __name__ == "__main__":
    main()
