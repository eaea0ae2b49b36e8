"""
HTTP/SSE variant of the browser MCP server

Routes:
- GET /health: JSON status and current timestamp
- GET /mcp: server-sent events stream carrying the tool protocol
- POST /messages/: client-to-server messages for an open stream

Cross-origin calls are allowed from any origin. The module-level ``app``
(built on first access) can be served by any ASGI host; ``main`` builds
its own from the command line and runs it with uvicorn.
"""

import argparse
import logging
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import Optional

import uvicorn
from mcp.server.sse import SseServerTransport
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Mount, Route

from .core import HTTP_BROWSER_MODES, Settings, check_http_mode, load_settings
from .executor import ToolExecutor
from .launcher import BrowserLauncher
from .logger_config import setup_logger
from .server import create_server
from .session import BrowserSession
from .utils import iso_timestamp
from .worker import SessionWorker

logger = logging.getLogger(__name__)

SSE_PATH = "/mcp"
MESSAGE_PATH = "/messages/"


def create_app(
    settings: Optional[Settings] = None, worker: Optional[SessionWorker] = None
) -> Starlette:
    """Build the Starlette application around one shared browser session."""
    settings = settings or Settings()
    check_http_mode(settings.browser_mode)
    worker = worker or SessionWorker(BrowserSession(BrowserLauncher(mode=settings.browser_mode)))
    server = create_server(ToolExecutor(worker))
    sse = SseServerTransport(MESSAGE_PATH)

    async def health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "timestamp": iso_timestamp()})

    async def handle_mcp(request: Request) -> Response:
        logger.info("SSE connection opened from %s", request.client.host if request.client else "?")
        async with sse.connect_sse(request.scope, request.receive, request._send) as (
            read_stream,
            write_stream,
        ):
            await server.run(read_stream, write_stream, server.create_initialization_options())
        logger.info("SSE connection closed")
        return Response()

    @asynccontextmanager
    async def lifespan(app: Starlette):
        logger.info("Browser MCP HTTP server starting (browser mode: %s)", settings.browser_mode)
        try:
            yield
        finally:
            logger.info("Shutting down, releasing browser")
            await worker.shutdown()

    app = Starlette(
        routes=[
            Route("/health", endpoint=health, methods=["GET"]),
            Route(SSE_PATH, endpoint=handle_mcp, methods=["GET"]),
            Mount(MESSAGE_PATH, app=sse.handle_post_message),
        ],
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=["*"],
                allow_methods=["GET", "POST", "OPTIONS"],
                allow_headers=["Content-Type", "Authorization"],
            )
        ],
        lifespan=lifespan,
    )
    app.state.worker = worker
    app.state.settings = settings
    return app


def parse_args(argv=None, settings: Optional[Settings] = None) -> Settings:
    settings = settings or load_settings()
    parser = argparse.ArgumentParser(description="Browser MCP server (HTTP/SSE)")
    parser.add_argument(
        "--host", default=settings.host, help=f"Listen address (default: {settings.host})"
    )
    parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Listen port (default: {settings.port})"
    )
    parser.add_argument(
        "--mode",
        choices=HTTP_BROWSER_MODES,
        default=settings.browser_mode,
        help=f"Browser executable discovery mode (default: {settings.browser_mode})",
    )
    args = parser.parse_args(argv)
    try:
        check_http_mode(args.mode)
    except ValueError as exc:
        parser.error(str(exc))
    return replace(settings, browser_mode=args.mode, host=args.host, port=args.port)


def main(argv=None) -> None:
    settings = parse_args(argv)
    setup_logger(
        level=settings.log_level,
        log_dir=settings.log_dir if settings.log_to_file else None,
    )
    logger.info(f"Browser MCP HTTP server running on port {settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


_app: Optional[Starlette] = None


def __getattr__(name: str):
    # ``app`` is built from the environment on first access, not at import
    global _app
    if name == "app":
        if _app is None:
            _app = create_app(load_settings())
        return _app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


if __name__ == "__main__":
    main()
