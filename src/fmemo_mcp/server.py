"""MCP Server exposing memo trees of heading-structured notes."""

import asyncio
import json
import logging
import sys
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from .config import Settings
from .tools.parse_text import parse_text as do_parse_text
from .tools.get_tree import get_tree as do_get_tree
from .tools.get_file import get_file as do_get_file
from .tools.get_outline import get_outline as do_get_outline
from .tools.search_memos import search_memos as do_search_memos

logger = logging.getLogger(__name__)

# Create MCP server
server = Server("fmemo-mcp")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="get_tree",
            description="""List the memo files under the served root.

Returns a nested directory tree (directories without memo files are
omitted) plus a flat list of root-relative file paths. Use these paths
with get_file and get_outline.""",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
        Tool(
            name="get_file",
            description="""Get the full memo tree of one file.

Each memo has level, title, description, content, code_blocks and
children. Headings that skip levels are nested directly under the
nearest shallower heading.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "file_path": {
                        "type": "string",
                        "description": "Path of the file relative to the root (e.g. 'notes/design.fmemo')",
                    },
                },
                "required": ["file_path"],
            },
        ),
        Tool(
            name="get_outline",
            description="""Get the heading outline of one file.

Returns titles, levels and descriptions only, without bodies or code.
Cheaper than get_file when you only need the structure.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "file_path": {
                        "type": "string",
                        "description": "Path of the file relative to the root",
                    },
                    "max_level": {
                        "type": "integer",
                        "description": "Only list memos with level <= this value in the flat entries",
                    },
                },
                "required": ["file_path"],
            },
        ),
        Tool(
            name="search_memos",
            description="""Search memos in every file under the root.

Matches titles, descriptions and body text. Returns file, title, level
and the title path from the root memo for each hit.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Search query",
                    },
                    "max_results": {
                        "type": "integer",
                        "description": "Maximum number of results to return",
                        "default": 10,
                    },
                },
                "required": ["query"],
            },
        ),
        Tool(
            name="parse_text",
            description="""Parse memo text supplied directly.

Useful for previewing a document that is not saved under the root.
Never fails: malformed input still yields a (possibly empty) memo list.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "text": {
                        "type": "string",
                        "description": "Memo document text",
                    },
                },
                "required": ["text"],
            },
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "get_tree":
            result = do_get_tree()
        elif name == "get_file":
            result = do_get_file(file_path=arguments["file_path"])
        elif name == "get_outline":
            result = do_get_outline(
                file_path=arguments["file_path"],
                max_level=arguments.get("max_level"),
            )
        elif name == "search_memos":
            result = do_search_memos(
                query=arguments["query"],
                max_results=arguments.get("max_results", 10),
            )
        elif name == "parse_text":
            result = do_parse_text(text=arguments["text"])
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        logger.exception("Tool %s failed", name)
        error_result = {"error": str(e)}
        return [TextContent(type="text", text=json.dumps(error_result, indent=2))]


def setup_logging(level: str) -> None:
    """Send log records to stderr; stdout carries the MCP stream."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))

    has_console = any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr
        for h in root.handlers
    )
    if not has_console:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root.addHandler(handler)


async def run_server():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main():
    """Entry point for the MCP server."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    logger.info("Serving memo files from %s", settings.root)
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
