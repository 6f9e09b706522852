"""MCP server for docblockr-mcp."""

import asyncio
import json
import os

import structlog
from mcp.server import Server
from mcp.types import Tool, TextContent

from .config import CONFIG_ENV_VAR
from .parser import supported_languages
from .tools.list_languages import list_languages
from .tools.parse_declaration import parse_declaration
from .tools.render_docblock import render_docblock

logger = structlog.get_logger()

# Create server
server = Server("docblockr-mcp")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    code_and_language = {
        "code": {
            "type": "string",
            "description": "Single line of code declaring a function, class or variable (e.g., 'function foo($bar) {')"
        },
        "language": {
            "type": "string",
            "description": "Language identifier",
            "enum": supported_languages()
        }
    }
    return [
        Tool(
            name="render_docblock",
            description="Render a documentation comment template for a declaration line. Returns the comment with aligned @param/@return tags and ${N:text} snippet tab stops, ready to insert above the line.",
            inputSchema={
                "type": "object",
                "properties": code_and_language,
                "required": ["code", "language"]
            }
        ),
        Tool(
            name="parse_declaration",
            description="Parse a declaration line into its name, kind (class, function, variable), parameters (name, type, default value) and return type.",
            inputSchema={
                "type": "object",
                "properties": code_and_language,
                "required": ["code", "language"]
            }
        ),
        Tool(
            name="list_languages",
            description="List the language identifiers accepted by render_docblock and parse_declaration.",
            inputSchema={
                "type": "object",
                "properties": {}
            }
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    config_path = os.environ.get(CONFIG_ENV_VAR)

    try:
        if name == "render_docblock":
            result = render_docblock(
                code=arguments["code"],
                language=arguments["language"],
                config_path=config_path
            )
        elif name == "parse_declaration":
            result = parse_declaration(
                code=arguments["code"],
                language=arguments["language"],
                config_path=config_path
            )
        elif name == "list_languages":
            result = list_languages()
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        logger.warning("server.tool_failed", tool=name, error=str(e))
        return [TextContent(type="text", text=json.dumps({"error": str(e)}, indent=2))]


async def run_server():
    """Run the MCP server."""
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def main():
    """Main entry point."""
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
