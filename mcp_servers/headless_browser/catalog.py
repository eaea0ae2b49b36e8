"""
Tool catalog

Static descriptors for the eight browser tools, identical for the stdio and
HTTP transports. The input schemas mirror the models in ``schemas``.
"""

from typing import List

from mcp import types

TOOL_DEFINITIONS = (
    {
        "name": "launch",
        "description": "Launch a new browser instance",
        "inputSchema": {
            "type": "object",
            "properties": {
                "headless": {
                    "type": "boolean",
                    "description": "Run browser in headless mode",
                    "default": True,
                },
                "viewport": {
                    "type": "object",
                    "description": "Default viewport for the new page",
                    "properties": {
                        "width": {"type": "number", "default": 1280},
                        "height": {"type": "number", "default": 720},
                    },
                },
            },
        },
    },
    {
        "name": "navigate",
        "description": "Navigate to a URL",
        "inputSchema": {
            "type": "object",
            "properties": {
                "url": {"type": "string", "description": "URL to navigate to"},
                "waitUntil": {
                    "type": "string",
                    "enum": ["load", "domcontentloaded", "networkidle0", "networkidle2"],
                    "default": "load",
                },
            },
            "required": ["url"],
        },
    },
    {
        "name": "screenshot",
        "description": "Take a screenshot of the current page",
        "inputSchema": {
            "type": "object",
            "properties": {
                "fullPage": {"type": "boolean", "default": False},
                "format": {
                    "type": "string",
                    "enum": ["png", "jpeg", "webp"],
                    "default": "png",
                },
                "quality": {
                    "type": "number",
                    "minimum": 0,
                    "maximum": 100,
                    "description": "Image quality, only used for jpeg",
                },
            },
        },
    },
    {
        "name": "get_text",
        "description": "Get text content from the page or a specific selector",
        "inputSchema": {
            "type": "object",
            "properties": {
                "selector": {
                    "type": "string",
                    "description": "CSS selector (optional, gets full page text if not provided)",
                },
            },
        },
    },
    {
        "name": "click",
        "description": "Click on an element",
        "inputSchema": {
            "type": "object",
            "properties": {
                "selector": {
                    "type": "string",
                    "description": "CSS selector of element to click",
                },
            },
            "required": ["selector"],
        },
    },
    {
        "name": "type",
        "description": "Type text into an input field",
        "inputSchema": {
            "type": "object",
            "properties": {
                "selector": {"type": "string", "description": "CSS selector of input field"},
                "text": {"type": "string", "description": "Text to type"},
            },
            "required": ["selector", "text"],
        },
    },
    {
        "name": "evaluate",
        "description": (
            "Execute JavaScript in the browser context. Grants full script "
            "execution in the page context; no sandboxing is applied."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "script": {"type": "string", "description": "JavaScript code to execute"},
            },
            "required": ["script"],
        },
    },
    {
        "name": "close",
        "description": "Close the browser instance",
        "inputSchema": {"type": "object", "properties": {}},
    },
)

TOOL_NAMES = tuple(definition["name"] for definition in TOOL_DEFINITIONS)


def list_tools() -> List[types.Tool]:
    """Return the tool descriptors advertised to callers."""
    return [types.Tool(**definition) for definition in TOOL_DEFINITIONS]
