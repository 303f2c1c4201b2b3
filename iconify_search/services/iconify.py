"""Iconify API access: icon search and SVG URL formatting."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Sequence, TypeVar

import httpx
from pydantic import ValidationError

from iconify_search.config import IconifyApiSettings
from iconify_search.domain.models import IconifySearchResponse
from iconify_search.logging import logger
from iconify_search.services.exceptions import IconifyServiceError, InvalidIconIdentifier
from iconify_search.utils.retry import retry_async

DEFAULT_API_BASE = "https://api.iconify.design"
DEFAULT_ICON_SIZE = 24
# Bounds accepted by the /search endpoint.
MIN_SEARCH_LIMIT = 32
MAX_SEARCH_LIMIT = 999

T = TypeVar("T")


def split_icon_id(icon_id: str) -> tuple[str, str]:
    """Split ``prefix:name`` on the first delimiter."""

    prefix, delimiter, name = (icon_id or "").partition(":")
    if not delimiter or not prefix or not name:
        raise InvalidIconIdentifier(f"Icon id must look like 'prefix:name', got {icon_id!r}.")
    return prefix, name


def get_icon_url(
    icon_id: str,
    size: int = DEFAULT_ICON_SIZE,
    *,
    base_url: str = DEFAULT_API_BASE,
) -> str:
    prefix, name = split_icon_id(icon_id)
    return f"{str(base_url).rstrip('/')}/{prefix}/{name}.svg?height={size}"


def _is_transient(exc: Exception) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500 or exc.response.status_code == 429
    return isinstance(exc, httpx.RequestError)


class IconifySearchService:
    """Search the Iconify catalog over HTTP."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: IconifyApiSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or IconifyApiSettings()

    @property
    def base_url(self) -> str:
        return str(self._settings.base_url).rstrip("/")

    def icon_url(self, icon_id: str, size: int = DEFAULT_ICON_SIZE) -> str:
        return get_icon_url(icon_id, size, base_url=self.base_url)

    async def search(
        self,
        query: str,
        *,
        limit: int | None = None,
        start: int = 0,
        prefixes: Sequence[str] | None = None,
    ) -> IconifySearchResponse:
        query = (query or "").strip()
        limit_value = self._normalize_limit(limit)
        if not query:
            return IconifySearchResponse.empty(limit=limit_value)

        params: dict[str, Any] = {
            "query": query,
            "limit": limit_value,
            "start": max(0, start),
        }
        cleaned_prefixes = [prefix.strip() for prefix in prefixes or () if prefix and prefix.strip()]
        if cleaned_prefixes:
            params["prefixes"] = ",".join(cleaned_prefixes)

        async def _request():
            response = await self._client.get(
                f"{self.base_url}/search",
                params=params,
                timeout=self._settings.request_timeout_seconds,
            )
            response.raise_for_status()
            return response

        logger.debug("iconify_search_request", query=query, limit=limit_value, start=params["start"])
        try:
            response = await self._retry_http("iconify_search", _request)
        except httpx.HTTPStatusError as exc:
            detail = exc.response.text[:500] if exc.response is not None else str(exc)
            status_code = exc.response.status_code if exc.response is not None else "unknown"
            raise IconifyServiceError(f"Iconify search failed ({status_code}): {detail}") from exc
        except httpx.RequestError as exc:
            raise IconifyServiceError(f"Failed to contact Iconify: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise IconifyServiceError("Iconify search response is not valid JSON.") from exc
        if not isinstance(data, dict):
            raise IconifyServiceError("Iconify search response format is invalid.")
        try:
            return IconifySearchResponse.model_validate(data)
        except ValidationError as exc:
            raise IconifyServiceError(f"Iconify search response format is invalid: {exc}") from exc

    async def search_all(
        self, query: str, *, prefixes: Sequence[str] | None = None
    ) -> IconifySearchResponse:
        """Fetch as many matches as the API returns in a single page."""

        return await self.search(query, limit=MAX_SEARCH_LIMIT, prefixes=prefixes)

    async def _retry_http(self, name: str, operation: Callable[[], Awaitable[T]]) -> T:
        return await retry_async(
            operation,
            max_attempts=self._settings.max_attempts,
            base_delay=self._settings.retry_base_delay,
            retry_if=_is_transient,
            logger=logger,
            operation_name=name,
        )

    def _normalize_limit(self, requested: int | None) -> int:
        if not requested:
            requested = self._settings.search_limit
        return max(MIN_SEARCH_LIMIT, min(requested, MAX_SEARCH_LIMIT))


__all__ = [
    "DEFAULT_API_BASE",
    "DEFAULT_ICON_SIZE",
    "IconifySearchService",
    "get_icon_url",
    "split_icon_id",
]
