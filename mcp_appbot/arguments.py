"""
Tool argument validation.

One model per tool, tagged by tool name and combined into a discriminated
union, so each call is checked against its own shape before any upstream
request is made. Field aliases match the camelCase names in tools.py.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from appbot_client.models import ReportType, SortBy, SortOrder
from mcp_appbot.tools import DEFAULT_LIMIT

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class _Arguments(BaseModel):
    # Unknown keys from the caller are ignored rather than rejected
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class GetAppInfoArguments(_Arguments):
    tool: Literal["get_app_info"]
    app_id: str = Field(alias="appId", min_length=1)


class SearchAppsArguments(_Arguments):
    tool: Literal["search_apps"]
    query: str
    category: str | None = None
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)
    offset: int | None = Field(default=None, ge=0)


class GetAppReviewsArguments(_Arguments):
    tool: Literal["get_app_reviews"]
    app_id: str = Field(alias="appId", min_length=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)
    rating: int | None = Field(default=None, ge=1, le=5)
    sort_by: SortBy | None = Field(default=None, alias="sortBy")
    sort_order: SortOrder | None = Field(default=None, alias="sortOrder")


class GetAppAnalyticsArguments(_Arguments):
    tool: Literal["get_app_analytics"]
    app_id: str = Field(alias="appId", min_length=1)
    start_date: str | None = Field(default=None, alias="startDate", pattern=ISO_DATE_PATTERN)
    end_date: str | None = Field(default=None, alias="endDate", pattern=ISO_DATE_PATTERN)
    metrics: list[str] | None = None


class CreateAppReportArguments(_Arguments):
    tool: Literal["create_app_report"]
    app_id: str = Field(alias="appId", min_length=1)
    report_type: ReportType = Field(alias="reportType")
    include_reviews: bool = Field(default=True, alias="includeReviews")
    include_analytics: bool = Field(default=True, alias="includeAnalytics")


ToolArguments = Annotated[
    GetAppInfoArguments
    | SearchAppsArguments
    | GetAppReviewsArguments
    | GetAppAnalyticsArguments
    | CreateAppReportArguments,
    Field(discriminator="tool"),
]

TOOL_NAMES = frozenset(
    ["get_app_info", "search_apps", "get_app_reviews", "get_app_analytics", "create_app_report"]
)

_adapter = TypeAdapter(ToolArguments)


def parse_arguments(name: str, arguments: dict[str, Any]) -> ToolArguments:
    """
    Validate raw call arguments for tool `name`.

    Raises pydantic.ValidationError on malformed input. `name` must already
    be a known tool.
    """
    payload = {**arguments, "tool": name}
    return _adapter.validate_python(payload)
