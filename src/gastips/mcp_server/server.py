"""MCP stdio server with tool handlers proxying to the catalog HTTP API."""

from __future__ import annotations

import json

import anyio
import mcp.types as types
from mcp.server import NotificationOptions, Server
from mcp.server.stdio import stdio_server

from gastips import __version__
from gastips.mcp_server.client import CatalogClient

LIST_TIPS_SCHEMA = {
    "type": "object",
    "properties": {},
}

GET_TIP_SCHEMA = {
    "type": "object",
    "properties": {
        "id": {"type": "string", "description": "Tip id, e.g. 'pack-storage-variables'"},
    },
    "required": ["id"],
}

SEARCH_TIPS_SCHEMA = {
    "type": "object",
    "properties": {
        "query": {"type": "string", "description": "Substring matched against title and rationale"},
    },
    "required": ["query"],
}


def create_mcp_server() -> Server:
    """Create and configure the MCP server with 3 tool handlers."""
    server = Server("gastips", __version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name="list_tips",
                description="List every Solidity gas-optimization tip in catalog order.",
                inputSchema=LIST_TIPS_SCHEMA,
            ),
            types.Tool(
                name="get_tip",
                description="Fetch one tip by id with its inefficient and efficient snippets.",
                inputSchema=GET_TIP_SCHEMA,
            ),
            types.Tool(
                name="search_tips",
                description="Search tips by title or rationale text.",
                inputSchema=SEARCH_TIPS_SCHEMA,
            ),
        ]

    @server.call_tool()
    async def call_tool(
        name: str,
        arguments: dict | None,
    ) -> list[types.TextContent]:
        args = arguments or {}
        client = CatalogClient()
        try:
            if name == "list_tips":
                result = await client.list_tips()
            elif name == "get_tip":
                tip = await client.get_tip(args["id"])
                if tip is None:
                    return [types.TextContent(type="text", text=f"Tip not found: {args['id']}")]
                result = tip
            elif name == "search_tips":
                result = await client.list_tips(query=args["query"])
            else:
                return [types.TextContent(type="text", text=f"Unknown tool: {name}")]
        finally:
            await client.close()

        return [types.TextContent(type="text", text=json.dumps(result, indent=2))]

    return server


async def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    server = create_mcp_server()
    async with stdio_server() as (read_stream, write_stream):
        init_options = server.create_initialization_options(
            notification_options=NotificationOptions(),
        )
        await server.run(read_stream, write_stream, init_options)


def main() -> None:
    anyio.run(run_mcp_server)
