"""Observable search state backed by asyncio tasks."""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass
from typing import Callable, Protocol

from iconify_search.domain.models import IconifySearchResponse
from iconify_search.logging import logger
from iconify_search.services.exceptions import IconifyServiceError
from iconify_search.services.iconify import IconifySearchService

Listener = Callable[[], None]


@dataclass(slots=True, frozen=True)
class SearchSnapshot:
    query: str = ""
    data: IconifySearchResponse | None = None
    is_loading: bool = False
    is_fetching: bool = False
    error: Exception | None = None


class SearchDataSource(Protocol):
    """What the search primitive needs from a data source."""

    def request(self, query: str) -> None: ...

    def snapshot(self) -> SearchSnapshot: ...

    def subscribe(self, listener: Listener) -> Callable[[], None]: ...


class IconifySearchSource:
    """Runs ``search_all`` for the latest requested query and reports progress.

    Only the most recent query is ever reflected: requesting a new query
    cancels the in-flight task for the previous one. Payloads are cached per
    query and served immediately while a refetch runs.
    """

    def __init__(self, service: IconifySearchService, *, cache_results: bool = True) -> None:
        self._service = service
        self._cache_results = cache_results
        self._cache: dict[str, IconifySearchResponse] = {}
        self._snapshot = SearchSnapshot()
        self._listeners: list[Listener] = []
        self._task: asyncio.Task[IconifySearchResponse] | None = None

    def snapshot(self) -> SearchSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    def request(self, query: str) -> None:
        query = (query or "").strip()
        if query == self._snapshot.query and (self._task is not None or self._snapshot.data is not None):
            return

        if not query:
            self._cancel_task()
            if self._snapshot != SearchSnapshot():
                self._publish(SearchSnapshot())
            return

        loop = asyncio.get_running_loop()
        self._cancel_task()
        cached = self._cache.get(query)
        task = loop.create_task(self._service.search_all(query))
        task.add_done_callback(lambda finished: self._on_done(query, finished))
        self._task = task
        self._publish(
            SearchSnapshot(
                query=query,
                data=cached,
                is_loading=cached is None,
                is_fetching=True,
            )
        )

    async def aclose(self) -> None:
        task = self._task
        self._cancel_task()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._listeners.clear()

    def _on_done(self, query: str, task: asyncio.Task[IconifySearchResponse]) -> None:
        if task.cancelled() or task is not self._task:
            return
        self._task = None

        error = task.exception()
        if error is None:
            data = task.result()
            if self._cache_results:
                self._cache[query] = data
            self._publish(SearchSnapshot(query=query, data=data))
            return

        if not isinstance(error, IconifyServiceError):
            logger.error("icon_search_crashed", query=query, exc_info=error)
        else:
            logger.warning("icon_search_failed", query=query, error=str(error))
        self._publish(SearchSnapshot(query=query, error=error))

    def _cancel_task(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _publish(self, snapshot: SearchSnapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener()


__all__ = ["IconifySearchSource", "SearchDataSource", "SearchSnapshot"]
