"""
Tool handlers - single source of truth for tool execution logic.

Architecture:
- Protocol layer (server.py) handles MCP transport
- This module validates arguments, routes to the AppBot client, and
  serializes the result
- appbot_client handles the actual HTTP calls

Every tool result is the client's return value as pretty-printed JSON.
Failures surface as McpError:
- METHOD_NOT_FOUND: unknown tool name (no upstream call)
- INVALID_PARAMS: arguments fail validation (no upstream call)
- INTERNAL_ERROR: anything raised while executing, as "Failed to execute tool: ..."
"""

import json
from typing import Any

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData
from pydantic import ValidationError

from appbot_client.client import AppBotClient
from appbot_client.models import (
    AnalyticsData,
    AnalyticsOptions,
    AppInfo,
    AppReport,
    ReportOptions,
    Review,
    ReviewOptions,
    SearchOptions,
    SearchResult,
)
from mcp_appbot.arguments import (
    TOOL_NAMES,
    CreateAppReportArguments,
    GetAppAnalyticsArguments,
    GetAppInfoArguments,
    GetAppReviewsArguments,
    SearchAppsArguments,
    ToolArguments,
    parse_arguments,
)
from mcp_appbot.logging_config import get_logger

logger = get_logger(__name__)


def format_result(result: Any) -> str:  # noqa: ANN401
    """Serialize a tool result as 2-space indented JSON"""
    return json.dumps(result, indent=2, ensure_ascii=False)


def describe_validation_error(error: ValidationError) -> str:
    """One-line summary of pydantic errors, e.g. "reportType: Input should be ..." """
    parts = []
    for err in error.errors(include_url=False):
        # First loc element is the union tag (tool name)
        field = ".".join(str(loc) for loc in err["loc"][1:]) or "arguments"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


async def handle_get_app_info(client: AppBotClient, args: GetAppInfoArguments) -> AppInfo:
    """Handle get_app_info() tool call"""
    return await client.get_app_info(args.app_id)


async def handle_search_apps(client: AppBotClient, args: SearchAppsArguments) -> SearchResult:
    """Handle search_apps() tool call - limit defaults to 10"""
    options = SearchOptions(category=args.category, limit=args.limit, offset=args.offset)
    return await client.search_apps(args.query, options)


async def handle_get_app_reviews(
    client: AppBotClient, args: GetAppReviewsArguments
) -> list[Review]:
    """Handle get_app_reviews() tool call - limit defaults to 10"""
    options = ReviewOptions(
        limit=args.limit,
        rating=args.rating,
        sort_by=args.sort_by,
        sort_order=args.sort_order,
    )
    return await client.get_app_reviews(args.app_id, options)


async def handle_get_app_analytics(
    client: AppBotClient, args: GetAppAnalyticsArguments
) -> AnalyticsData:
    """Handle get_app_analytics() tool call"""
    options = AnalyticsOptions(
        start_date=args.start_date,
        end_date=args.end_date,
        metrics=args.metrics,
    )
    return await client.get_app_analytics(args.app_id, options)


async def handle_create_app_report(
    client: AppBotClient, args: CreateAppReportArguments
) -> AppReport:
    """Handle create_app_report() tool call - reviews and analytics included by default"""
    options = ReportOptions(
        report_type=args.report_type,
        include_reviews=args.include_reviews,
        include_analytics=args.include_analytics,
    )
    return await client.create_app_report(args.app_id, options)


async def _dispatch(client: AppBotClient, args: ToolArguments) -> Any:  # noqa: ANN401
    if isinstance(args, GetAppInfoArguments):
        return await handle_get_app_info(client, args)

    if isinstance(args, SearchAppsArguments):
        return await handle_search_apps(client, args)

    if isinstance(args, GetAppReviewsArguments):
        return await handle_get_app_reviews(client, args)

    if isinstance(args, GetAppAnalyticsArguments):
        return await handle_get_app_analytics(client, args)

    return await handle_create_app_report(client, args)


async def call_tool(client: AppBotClient, name: str, arguments: dict[str, Any]) -> str:
    """
    Route tool call to appropriate handler.

    Returns the result as pretty-printed JSON.
    Raises McpError for unknown tools, invalid arguments, or failed calls.
    """
    if name not in TOOL_NAMES:
        msg = f"Unknown tool: {name}"
        raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=msg))

    try:
        args = parse_arguments(name, arguments)
    except ValidationError as e:
        msg = f"Invalid arguments for {name}: {describe_validation_error(e)}"
        logger.warning(msg)
        raise McpError(ErrorData(code=INVALID_PARAMS, message=msg)) from e

    try:
        result = await _dispatch(client, args)
        return format_result(result)
    except Exception as e:
        logger.error(f"Error executing tool {name}: {e!r}")
        msg = f"Failed to execute tool: {str(e) or 'Unknown error'}"
        raise McpError(ErrorData(code=INTERNAL_ERROR, message=msg)) from e
