#!/usr/bin/env python3
"""
AppBot MCP Server - stdio transport

MCP protocol wrapper exposing the AppBot API as tools.
Business logic delegated to handlers.py.

Run with: python -m mcp_appbot.server  (or the appbot-mcp script)
"""

import asyncio
import sys

from dotenv import load_dotenv
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolRequest, CallToolResult, ServerResult, TextContent, Tool

from appbot_client.client import AppBotClient
from appbot_client.config import Settings, load_settings
from appbot_client.errors import ConfigurationError
from mcp_appbot.handlers import call_tool as handle_tool
from mcp_appbot.logging_config import get_logger, setup_async_logging, shutdown_async_logging
from mcp_appbot.tools import get_mcp_tools

logger = get_logger(__name__)


def create_server(settings: Settings, client: AppBotClient) -> Server:
    """
    Build the MCP server; every call shares the one client instance.

    tools/call is registered on request_handlers directly so McpError codes
    raised by handlers.py reach the caller as JSON-RPC errors.
    """
    app = Server(settings.server_name, version=settings.server_version)

    @app.list_tools()  # type: ignore[misc,no-untyped-call]
    async def list_tools() -> list[Tool]:
        """List available MCP tools - imported from tools.py (single source of truth)"""
        return get_mcp_tools()

    async def call_tool(request: CallToolRequest) -> ServerResult:
        """Handle tool execution - delegates to handlers.py"""
        name = request.params.name
        arguments = request.params.arguments or {}
        logger.debug(f"call_tool: name={name}, arguments={arguments}")
        result = await handle_tool(client, name, arguments)
        logger.debug(f"{name}() returning {len(result)} chars")
        return ServerResult(CallToolResult(content=[TextContent(type="text", text=result)]))

    app.request_handlers[CallToolRequest] = call_tool

    return app


async def main(settings: Settings) -> None:
    """Run the MCP server over stdio until the client disconnects"""
    async with AppBotClient(settings) as client:
        app = create_server(settings, client)
        async with stdio_server() as (read_stream, write_stream):
            logger.info(f"{settings.user_agent} running on stdio ({settings.api_url})")
            await app.run(
                read_stream,
                write_stream,
                app.create_initialization_options()
            )


def run() -> None:
    """Console-script entry point. Exits 1 if configuration is invalid."""
    load_dotenv()
    setup_async_logging()
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error(f"Failed to start server: {e}")
        shutdown_async_logging()
        sys.exit(1)

    setup_async_logging(settings.logging_level)
    try:
        asyncio.run(main(settings))
    except Exception:
        logger.exception("Server terminated with an error")
        sys.exit(1)
    finally:
        shutdown_async_logging()


if __name__ == "__main__":
    run()
