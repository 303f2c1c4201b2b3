"""Shared pytest fixtures: manual timer, static data source, settings."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable

import pytest

from iconify_search.config import IconifySettings
from iconify_search.domain.models import IconifySearchResponse
from iconify_search.services.search_source import SearchSnapshot


class _ManualHandle:
    def __init__(self, when: float, callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic stand-in for ``loop.call_later``."""

    def __init__(self) -> None:
        self.now = 0.0
        self._handles: list[_ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> _ManualHandle:
        handle = _ManualHandle(self.now + delay, callback, args)
        self._handles.append(handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for handle in self._handles if not handle.cancelled)

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted(
            (handle for handle in self._handles if handle.when <= self.now + 1e-9),
            key=lambda handle: handle.when,
        )
        for handle in due:
            self._handles.remove(handle)
            if not handle.cancelled:
                handle.callback(*handle.args)


class StaticSearchSource:
    """Data source that records requests and reports whatever it is told."""

    def __init__(
        self,
        data: IconifySearchResponse | None = None,
        *,
        is_loading: bool = False,
        is_fetching: bool = False,
    ) -> None:
        self.requests: list[str] = []
        self._snapshot = SearchSnapshot(data=data, is_loading=is_loading, is_fetching=is_fetching)
        self._listeners: list[Callable[[], None]] = []

    def request(self, query: str) -> None:
        self.requests.append(query)

    def snapshot(self) -> SearchSnapshot:
        return self._snapshot

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def publish(self, **changes: Any) -> None:
        self._snapshot = dataclasses.replace(self._snapshot, **changes)
        for listener in list(self._listeners):
            listener()


def mdi_response() -> IconifySearchResponse:
    return IconifySearchResponse.model_validate(
        {
            "icons": ["mdi:home", "mdi:search"],
            "total": 2,
            "limit": 64,
            "start": 0,
            "collections": {"mdi": {"name": "Material Design Icons"}},
            "request": {},
        }
    )


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def source() -> StaticSearchSource:
    return StaticSearchSource(mdi_response())


@pytest.fixture
def settings() -> IconifySettings:
    return IconifySettings(_env_file=None)
