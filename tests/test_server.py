#!/usr/bin/env python3
"""
Test tool definitions, server wiring, health probe, and logging setup.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from mcp.shared.exceptions import McpError
from mcp.shared.memory import create_connected_server_and_client_session
from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    CallToolRequest,
    ListToolsRequest,
)

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from appbot_client.client import AppBotClient
from appbot_client.config import Settings
from appbot_client.errors import AppBotError
from mcp_appbot import health
from mcp_appbot.arguments import TOOL_NAMES
from mcp_appbot.logging_config import AsyncLoggingManager
from mcp_appbot.server import create_server
from mcp_appbot.tools import get_mcp_tools


def tools_by_name():
    return {tool.name: tool for tool in get_mcp_tools()}


def test_tool_list():
    """Exactly the five AppBot tools, each routable"""
    tools = tools_by_name()
    assert list(tools) == [
        "get_app_info",
        "search_apps",
        "get_app_reviews",
        "get_app_analytics",
        "create_app_report",
    ]
    assert set(tools) == TOOL_NAMES
    print("✓ Five tools advertised")


def test_required_arguments():
    tools = tools_by_name()
    assert tools["get_app_info"].inputSchema["required"] == ["appId"]
    assert tools["search_apps"].inputSchema["required"] == ["query"]
    assert tools["get_app_reviews"].inputSchema["required"] == ["appId"]
    assert tools["get_app_analytics"].inputSchema["required"] == ["appId"]
    assert tools["create_app_report"].inputSchema["required"] == ["appId", "reportType"]


def test_schema_constraints():
    tools = tools_by_name()
    report = tools["create_app_report"].inputSchema["properties"]
    assert report["reportType"]["enum"] == ["summary", "detailed", "competitive"]
    assert report["includeReviews"]["default"] is True
    assert report["includeAnalytics"]["default"] is True

    rating = tools["get_app_reviews"].inputSchema["properties"]["rating"]
    assert (rating["minimum"], rating["maximum"]) == (1, 5)
    assert tools["search_apps"].inputSchema["properties"]["limit"]["default"] == 10


def test_create_server():
    settings = Settings(api_key="test-key", server_name="test-server", server_version="9.9.9")
    server = create_server(settings, AsyncMock(spec=AppBotClient))

    assert server.name == "test-server"
    assert server.version == "9.9.9"
    assert ListToolsRequest in server.request_handlers
    assert CallToolRequest in server.request_handlers
    print("✓ Server registers list_tools and call_tool")


# --- tool calls through a connected client session ---------------------------


MOCK_APP_INFO = {"id": "test-app", "name": "Test App", "rating": 4.5, "platforms": ["iOS"]}

UPSTREAM_METHODS = (
    "get_app_info",
    "search_apps",
    "get_app_reviews",
    "get_app_analytics",
    "create_app_report",
)


def call_over_session(client, name, arguments):
    """Run one tools/call against create_server() over in-memory streams"""
    server = create_server(Settings(api_key="test-key"), client)

    async def go():
        async with create_connected_server_and_client_session(server) as session:
            return await session.call_tool(name, arguments)
    try:
        return asyncio.run(go())
    except BaseExceptionGroup as group:
        # anyio task groups wrap the session's exception; surface the single leaf
        exc: BaseException = group
        while isinstance(exc, BaseExceptionGroup) and len(exc.exceptions) == 1:
            exc = exc.exceptions[0]
        raise exc from group


def test_session_get_app_info():
    client = AsyncMock(spec=AppBotClient)
    client.get_app_info.return_value = MOCK_APP_INFO

    result = call_over_session(client, "get_app_info", {"appId": "test-app"})

    assert not result.isError
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    assert json.loads(result.content[0].text) == MOCK_APP_INFO
    client.get_app_info.assert_awaited_once_with("test-app")
    print("✓ get_app_info over a session returns one JSON text block")


def test_session_unknown_tool():
    client = AsyncMock(spec=AppBotClient)
    with pytest.raises(McpError) as exc_info:
        call_over_session(client, "nope", {})

    assert exc_info.value.error.code == METHOD_NOT_FOUND
    assert "Unknown tool: nope" in exc_info.value.error.message
    for method in UPSTREAM_METHODS:
        assert getattr(client, method).await_count == 0, f"{method} was called"
    print("✓ Unknown tool surfaces as method-not-found")


def test_session_upstream_failure():
    client = AsyncMock(spec=AppBotClient)
    client.get_app_info.side_effect = AppBotError("Failed to get app info: boom")

    with pytest.raises(McpError) as exc_info:
        call_over_session(client, "get_app_info", {"appId": "invalid-app"})

    assert exc_info.value.error.code == INTERNAL_ERROR
    assert exc_info.value.error.message == (
        "Failed to execute tool: Failed to get app info: boom"
    )


def test_session_invalid_report_type():
    client = AsyncMock(spec=AppBotClient)
    with pytest.raises(McpError) as exc_info:
        call_over_session(
            client, "create_app_report", {"appId": "test-app", "reportType": "everything"}
        )

    assert exc_info.value.error.code == INVALID_PARAMS
    assert "reportType" in exc_info.value.error.message
    assert client.create_app_report.await_count == 0


def test_health_exit_codes():
    with patch.dict("os.environ", {"APPBOT_API_KEY": "test-key"}), \
            patch.object(health, "setup_async_logging"), \
            patch.object(health, "check", AsyncMock(return_value=True)):
        assert health.main() == health.EXIT_HEALTHY

    with patch.dict("os.environ", {"APPBOT_API_KEY": "test-key"}), \
            patch.object(health, "setup_async_logging"), \
            patch.object(health, "check", AsyncMock(return_value=False)):
        assert health.main() == health.EXIT_UNHEALTHY
    print("✓ Health probe exit codes")


def test_health_applies_log_level():
    """LOG_LEVEL from settings reaches the probe's logging setup"""
    env = {"APPBOT_API_KEY": "test-key", "LOG_LEVEL": "debug"}
    with patch.dict("os.environ", env), \
            patch.object(health, "setup_async_logging") as setup_logging, \
            patch.object(health, "check", AsyncMock(return_value=True)):
        health.main()
    setup_logging.assert_called_once_with(logging.DEBUG)


def test_health_startup_failure():
    """Missing API key is a startup failure, reported as unhealthy"""
    with patch.dict("os.environ", {"APPBOT_API_KEY": ""}):
        assert health.main() == health.EXIT_UNHEALTHY


def test_logging_setup_and_shutdown():
    manager = AsyncLoggingManager()
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        manager.setup(logging.DEBUG)
        assert root.level == logging.DEBUG
        assert manager.queue_handler in root.handlers
        assert logging.getLogger("httpx").level == logging.INFO

        manager.shutdown()
        assert manager.listener is None
        assert manager.queue_handler is None
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


if __name__ == "__main__":
    print("Testing server wiring...\n")
    test_tool_list()
    test_required_arguments()
    test_schema_constraints()
    test_create_server()
    test_session_get_app_info()
    test_session_unknown_tool()
    test_session_upstream_failure()
    test_session_invalid_report_type()
    test_health_exit_codes()
    test_health_applies_log_level()
    test_health_startup_failure()
    test_logging_setup_and_shutdown()
    print("\nAll server tests passed! ✓")
