"""
AppBot API client.

Thin async facade over a single httpx.AsyncClient: composes the five request
shapes, logs every request/response, and rewraps any failure into AppBotError
with a message naming the operation. No caching, no retries, no pagination.

The client holds no per-call state, so one instance can serve overlapping
calls for the lifetime of the process.
"""

import logging
from types import TracebackType
from typing import Any, cast
from urllib.parse import quote

import httpx

from appbot_client.config import Settings
from appbot_client.errors import AppBotError
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

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 30.0

# Truncate logged error bodies
MAX_LOGGED_BODY = 500


def _app_path(app_id: str, suffix: str = "") -> str:
    return f"/apps/{quote(app_id, safe='')}{suffix}"


class AppBotClient:
    """
    Async client for the AppBot API.

    Usage:
        async with AppBotClient(settings) as client:
            info = await client.get_app_info("com.example.app")

    Every operation except health_check() raises AppBotError on transport
    failure, non-2xx status, or an undecodable body.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=settings.api_url,
            headers={
                "Authorization": f"Bearer {settings.api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": settings.user_agent,
            },
            timeout=REQUEST_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> "AppBotClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # -- transport ----------------------------------------------------------

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Issue one request, logging it and raising on non-2xx"""
        logger.debug(f"API request: {method} {path}")
        try:
            response = await self._client.request(method, path, params=params or None, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            body = e.response.text[:MAX_LOGGED_BODY]
            logger.error(
                f"API error: {e.response.status_code} {e.response.reason_phrase} "
                f"{method} {path}: {body}"
            )
            raise
        except httpx.HTTPError as e:
            logger.error(f"Network error: {method} {path}: {e!r}")
            raise
        logger.debug(f"API response: {response.status_code} {path}")
        return response

    async def _call(
        self,
        operation: str,
        subject: str,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:  # noqa: ANN401
        """Send and decode, rewrapping any failure as "Failed to <operation>: ..." """
        try:
            response = await self._send(method, path, params=params, json=json)
            return response.json()
        except Exception as e:
            logger.error(f"Failed to {operation} for {subject}: {e!r}")
            msg = f"Failed to {operation}: {str(e) or 'Unknown error'}"
            raise AppBotError(msg) from e

    # -- operations ---------------------------------------------------------

    async def get_app_info(self, app_id: str) -> AppInfo:
        """GET /apps/{appId}"""
        data = await self._call("get app info", f"app {app_id}", "GET", _app_path(app_id))
        return cast("AppInfo", data)

    async def search_apps(self, query: str, options: SearchOptions | None = None) -> SearchResult:
        """GET /apps/search?q=... with category/limit/offset only when set"""
        params: dict[str, Any] = {"q": query}
        if options is not None:
            params.update(options.to_params())
        data = await self._call(
            "search apps", f'query "{query}"', "GET", "/apps/search", params=params
        )
        return cast("SearchResult", data)

    async def get_app_reviews(
        self, app_id: str, options: ReviewOptions | None = None
    ) -> list[Review]:
        """
        GET /apps/{appId}/reviews

        Ordering is whatever the server applies for sortBy/sortOrder; the list
        is returned untouched.
        """
        params = options.to_params() if options is not None else None
        data = await self._call(
            "get app reviews", f"app {app_id}", "GET", _app_path(app_id, "/reviews"), params=params
        )
        return cast("list[Review]", data)

    async def get_app_analytics(
        self, app_id: str, options: AnalyticsOptions | None = None
    ) -> AnalyticsData:
        """GET /apps/{appId}/analytics - metrics may be a partial bag"""
        params = options.to_params() if options is not None else None
        data = await self._call(
            "get app analytics",
            f"app {app_id}",
            "GET",
            _app_path(app_id, "/analytics"),
            params=params,
        )
        return cast("AnalyticsData", data)

    async def create_app_report(self, app_id: str, options: ReportOptions) -> AppReport:
        """POST /apps/{appId}/report with {reportType, includeReviews?, includeAnalytics?}"""
        data = await self._call(
            "create app report",
            f"app {app_id}",
            "POST",
            _app_path(app_id, "/report"),
            json=options.to_body(),
        )
        return cast("AppReport", data)

    async def health_check(self) -> bool:
        """True on any 2xx from GET /health, False on anything else. Never raises."""
        try:
            await self._send("GET", "/health")
        except Exception as e:
            logger.error(f"Health check failed: {e!r}")
            return False
        return True
