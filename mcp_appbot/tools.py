#!/usr/bin/env python3
"""
MCP Tool Definitions - Single Source of Truth

Static tool list advertised by server.py. Argument validation for the same
shapes lives in arguments.py; keep the two in step.
"""

from mcp.types import Tool

DEFAULT_LIMIT = 10

APP_ID_PROPERTY = {
    "type": "string",
    "description": "The unique identifier of the app",
}


def get_mcp_tools() -> list[Tool]:
    """
    Return list of MCP tools.

    Single source of truth for tool definitions.
    """
    return [
        Tool(
            name="get_app_info",
            description="""Get information about a specific app from AppBot.

get_app_info("com.example.app") → name, developer, rating, review/download counts, price, platforms
""",
            inputSchema={
                "type": "object",
                "properties": {
                    "appId": APP_ID_PROPERTY,
                },
                "required": ["appId"]
            }
        ),
        Tool(
            name="search_apps",
            description="""Search for apps in AppBot.

search_apps("photo editor") → page of apps + total + hasMore
search_apps("chess", category="Games", limit=5)
""",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Search query for apps",
                    },
                    "category": {
                        "type": "string",
                        "description": "Optional category filter",
                    },
                    "limit": {
                        "type": "integer",
                        "description": f"Maximum number of results to return (default: {DEFAULT_LIMIT})",
                        "default": DEFAULT_LIMIT,
                        "minimum": 1,
                    },
                    "offset": {
                        "type": "integer",
                        "description": "Number of results to skip, for paging",
                        "minimum": 0,
                    },
                },
                "required": ["query"]
            }
        ),
        Tool(
            name="get_app_reviews",
            description="""Get reviews for a specific app.

get_app_reviews("com.example.app", rating=1) → recent one-star reviews
Ordering is applied by AppBot (sortBy/sortOrder).
""",
            inputSchema={
                "type": "object",
                "properties": {
                    "appId": APP_ID_PROPERTY,
                    "limit": {
                        "type": "integer",
                        "description": f"Maximum number of reviews to return (default: {DEFAULT_LIMIT})",
                        "default": DEFAULT_LIMIT,
                        "minimum": 1,
                    },
                    "rating": {
                        "type": "integer",
                        "description": "Filter by rating (1-5 stars)",
                        "minimum": 1,
                        "maximum": 5,
                    },
                    "sortBy": {
                        "type": "string",
                        "enum": ["date", "rating", "helpful"],
                        "description": "Sort key applied by AppBot",
                    },
                    "sortOrder": {
                        "type": "string",
                        "enum": ["asc", "desc"],
                        "description": "Sort direction",
                    },
                },
                "required": ["appId"]
            }
        ),
        Tool(
            name="get_app_analytics",
            description="""Get analytics data for a specific app.

Metrics bag is partial: any of downloads, revenue, ratings, users, crashes, sessions may be missing.
""",
            inputSchema={
                "type": "object",
                "properties": {
                    "appId": APP_ID_PROPERTY,
                    "startDate": {
                        "type": "string",
                        "description": "Start date for analytics (YYYY-MM-DD)",
                    },
                    "endDate": {
                        "type": "string",
                        "description": "End date for analytics (YYYY-MM-DD)",
                    },
                    "metrics": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": (
                            "Specific metrics to retrieve "
                            "(downloads, revenue, ratings, users, crashes, sessions)"
                        ),
                    },
                },
                "required": ["appId"]
            }
        ),
        Tool(
            name="create_app_report",
            description="""Create a comprehensive report for an app.

summary | detailed | competitive → SWOT summary, optional reviews/analytics/competitors, recommendations
""",
            inputSchema={
                "type": "object",
                "properties": {
                    "appId": APP_ID_PROPERTY,
                    "reportType": {
                        "type": "string",
                        "enum": ["summary", "detailed", "competitive"],
                        "description": "Type of report to generate",
                    },
                    "includeReviews": {
                        "type": "boolean",
                        "description": "Whether to include reviews in the report",
                        "default": True,
                    },
                    "includeAnalytics": {
                        "type": "boolean",
                        "description": "Whether to include analytics in the report",
                        "default": True,
                    },
                },
                "required": ["appId", "reportType"]
            }
        ),
    ]
