"""
AppBot wire types and request option bags.

Wire types are TypedDicts: the client hands back the decoded JSON as-is, so
these describe shape only and are never validated locally. The upstream API
decides which optional sections are populated.

Option bags are pydantic models. Attribute names are snake_case, the
outbound names are the API's camelCase aliases, and unset fields never reach
the request.
"""

from typing import Any, Literal, NotRequired, TypedDict

from pydantic import BaseModel, ConfigDict, Field

SortBy = Literal["date", "rating", "helpful"]
SortOrder = Literal["asc", "desc"]
ReportType = Literal["summary", "detailed", "competitive"]


# ---------------------------------------------------------------------------
# Wire types
# ---------------------------------------------------------------------------


class AppInfo(TypedDict):
    id: str
    name: str
    description: str
    category: str
    developer: str
    version: str
    rating: float
    reviewCount: int
    downloadCount: int
    price: float
    currency: str
    screenshots: list[str]
    icon: str
    releaseDate: str
    lastUpdated: str
    size: int
    platforms: list[str]


class SearchResult(TypedDict):
    """One page of apps; total is not tied to len(apps)"""

    apps: list[AppInfo]
    total: int
    hasMore: bool


class Review(TypedDict):
    id: str
    appId: str
    userId: str
    userName: str
    rating: int  # 1-5
    title: str
    content: str
    date: str
    helpful: int
    verified: bool


class AnalyticsPeriod(TypedDict):
    startDate: str
    endDate: str


class RatingsMetrics(TypedDict):
    average: float
    total: int
    distribution: dict[str, int]


class UsersMetrics(TypedDict):
    active: int
    new: int
    retained: int


class SessionsMetrics(TypedDict):
    total: int
    average: float


class AnalyticsMetrics(TypedDict, total=False):
    """Partial metrics bag - any key may be absent"""

    downloads: int
    revenue: float
    ratings: RatingsMetrics
    users: UsersMetrics
    crashes: int
    sessions: SessionsMetrics


class AnalyticsData(TypedDict):
    appId: str
    period: AnalyticsPeriod
    metrics: AnalyticsMetrics


class SwotSummary(TypedDict):
    strengths: list[str]
    weaknesses: list[str]
    opportunities: list[str]
    threats: list[str]


class ReviewSentiment(TypedDict):
    positive: float
    neutral: float
    negative: float


class ReportReviews(TypedDict):
    recent: list[Review]
    sentiment: ReviewSentiment
    commonTopics: list[str]


class CompetitiveComparison(TypedDict):
    rating: float
    downloads: int
    price: float


class ReportCompetitive(TypedDict):
    competitors: list[AppInfo]
    comparison: CompetitiveComparison


class AppReport(TypedDict):
    appInfo: AppInfo
    summary: SwotSummary
    reviews: NotRequired[ReportReviews]
    analytics: NotRequired[AnalyticsData]
    competitive: NotRequired[ReportCompetitive]
    recommendations: list[str]


# ---------------------------------------------------------------------------
# Option bags
# ---------------------------------------------------------------------------


class _Options(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_params(self) -> dict[str, Any]:
        """Outbound form: aliased names, None and empty strings dropped"""
        dumped = self.model_dump(by_alias=True, exclude_none=True)
        return {key: value for key, value in dumped.items() if value != ""}


class SearchOptions(_Options):
    category: str | None = None
    limit: int | None = Field(default=None, ge=1)
    offset: int | None = Field(default=None, ge=0)


class ReviewOptions(_Options):
    limit: int | None = Field(default=None, ge=1)
    rating: int | None = Field(default=None, ge=1, le=5)
    sort_by: SortBy | None = Field(default=None, alias="sortBy")
    sort_order: SortOrder | None = Field(default=None, alias="sortOrder")


class AnalyticsOptions(_Options):
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    metrics: list[str] | None = None

    def to_params(self) -> dict[str, Any]:
        params = super().to_params()
        # Sent as one comma-separated value, and only when there is something to send
        metrics = [m for m in params.pop("metrics", None) or [] if m]
        if metrics:
            params["metrics"] = ",".join(metrics)
        return params


class ReportOptions(_Options):
    report_type: ReportType = Field(alias="reportType")
    include_reviews: bool | None = Field(default=None, alias="includeReviews")
    include_analytics: bool | None = Field(default=None, alias="includeAnalytics")

    def to_body(self) -> dict[str, Any]:
        """JSON body for POST /apps/{appId}/report"""
        return self.to_params()
