"""
Logging configuration

Unified logging setup for the browser MCP server:
1. Console output on a chosen stream (stderr for stdio, where stdout is the protocol)
2. Optional timestamped log file, creating the directory if needed
3. Coloured level names when the console is a terminal
4. Library loggers (mcp, uvicorn) routed through the same handlers
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO, Union

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CAPTURED_LOGGERS = ("mcp", "uvicorn", "uvicorn.error", "uvicorn.access")


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
        "RESET": "\033[0m",
    }

    def format(self, record):
        original_levelname = record.levelname
        if original_levelname in self.COLORS:
            record.levelname = (
                f"{self.COLORS[original_levelname]}{original_levelname}{self.COLORS['RESET']}"
            )
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


def setup_logger(
    name: str = "mcp_servers.headless_browser",
    level: Union[int, str] = logging.INFO,
    stream: Optional[TextIO] = None,
    log_dir: Optional[str] = None,
    console_output: bool = True,
) -> logging.Logger:
    """
    Configure logging for the server process.

    Args:
        name: name of the logger returned
        level: console log level
        stream: console stream, defaults to stdout
        log_dir: directory for a timestamped log file; no file when None
        console_output: whether to log to the console at all

    Returns:
        configured logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    if root_logger.handlers:
        root_logger.handlers.clear()

    logger = logging.getLogger(name)
    logger.setLevel(level)

    plain_format = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if console_output:
        stream = stream or sys.stdout
        console_handler = logging.StreamHandler(stream)
        console_handler.setLevel(level)
        if hasattr(stream, "isatty") and stream.isatty():
            console_handler.setFormatter(ColoredFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        else:
            console_handler.setFormatter(plain_format)
        root_logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"headless_browser_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(plain_format)
        root_logger.addHandler(file_handler)
        logger.info(f"Log file created: {log_file}")

    for logger_name in CAPTURED_LOGGERS:
        library_logger = logging.getLogger(logger_name)
        library_logger.handlers.clear()
        library_logger.setLevel(level)
        library_logger.propagate = True

    return logger

