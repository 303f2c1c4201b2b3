"""Renderless icon search and selection."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import Any, Callable, Sequence

import httpx

from iconify_search.config import IconifySettings, get_settings
from iconify_search.domain.models import IconGroup, IconifySearchResponse
from iconify_search.logging import logger
from iconify_search.primitive.grouping import group_icons
from iconify_search.primitive.selection import SelectionManager
from iconify_search.primitive.value import ValueResolver
from iconify_search.services.iconify import IconifySearchService, get_icon_url
from iconify_search.services.search_source import IconifySearchSource, SearchDataSource
from iconify_search.utils.debounce import DebouncedValue, Scheduler

_UNSET: Any = object()


@dataclass(slots=True, frozen=True)
class SearchState:
    multiple: bool
    query: str
    set_query: Callable[[str], None]
    debounced_query: str
    is_debouncing: bool
    data: IconifySearchResponse | None
    is_loading: bool
    is_fetching: bool
    is_pending: bool
    get_icon_url: Callable[..., str]
    selected_icons: list[str]
    set_selected_icons: Callable[[Sequence[str]], None]
    select_icon: Callable[[str], None]
    groups: list[IconGroup]


StateListener = Callable[[SearchState], None]


class IconifySearchPrimitive:
    """Search the Iconify catalog and manage a selection without rendering.

    Query and selection are each either owned by the caller (pass
    ``search_value`` / ``value`` and re-supply them through ``update``) or
    kept internally (seeded from ``default_search_value`` / ``default_value``).
    ``children`` and subscribers receive a fresh ``SearchState`` on every
    evaluation.

    Without a ``data_source`` the primitive creates its own HTTP client; call
    ``aclose`` to release it.
    """

    def __init__(
        self,
        *,
        multiple: bool = False,
        debounce_ms: int | None = None,
        value: list[str] | None = None,
        default_value: Sequence[str] | None = None,
        on_value_change: Callable[[list[str]], None] | None = None,
        search_value: str | None = None,
        default_search_value: str = "",
        on_search_change: Callable[[str], None] | None = None,
        children: Callable[[SearchState], Any] | None = None,
        data_source: SearchDataSource | None = None,
        scheduler: Scheduler | None = None,
        settings: IconifySettings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._children = children
        self._listeners: list[StateListener] = []
        self._suspended = False
        self.rendered: Any = None

        self._query: ValueResolver[str] = ValueResolver(
            search_value, default=default_search_value, on_change=on_search_change
        )
        seed = list(default_value or [])
        self._selection_value: ValueResolver[list[str]] = ValueResolver(
            value,
            default=seed if multiple else seed[:1],
            on_change=(lambda icon_ids: on_value_change(list(icon_ids))) if on_value_change else None,
        )
        self._selection = SelectionManager(self._selection_value, multiple=multiple)

        wait_ms = self._settings.search.debounce_ms if debounce_ms is None else debounce_ms
        self._debounced: DebouncedValue[str] = DebouncedValue(
            self._query.effective_value(),
            wait_ms=wait_ms,
            on_change=self._on_query_stage_change,
            scheduler=scheduler,
        )

        self._http_client: httpx.AsyncClient | None = None
        self._owned_source: IconifySearchSource | None = None
        if data_source is None:
            self._http_client = httpx.AsyncClient()
            service = IconifySearchService(self._http_client, settings=self._settings.api)
            data_source = self._owned_source = IconifySearchSource(service)
        self._source = data_source

        self._source.request(self._debounced.debounced_value)
        self._unsubscribe_source = self._source.subscribe(self._on_source_change)
        self._state = self._evaluate()

    @property
    def multiple(self) -> bool:
        return self._selection.multiple

    @property
    def state(self) -> SearchState:
        return self._state

    def render(self) -> Any:
        if self._children is None:
            return None
        return self._children(self._state)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    def set_query(self, value: str) -> None:
        self._query.set(value)
        if not self._query.is_controlled:
            self._debounced.update(self._query.effective_value())

    def set_selected_icons(self, icon_ids: Sequence[str]) -> None:
        self._selection.set_selected_icons(icon_ids)
        if not self._selection_value.is_controlled:
            self._evaluate()

    def select_icon(self, icon_id: str) -> None:
        self._selection.select_icon(icon_id)
        if not self._selection_value.is_controlled:
            self._evaluate()

    def get_icon_url(self, icon_id: str, size: int | None = None) -> str:
        return get_icon_url(
            icon_id,
            self._settings.search.icon_size if size is None else size,
            base_url=str(self._settings.api.base_url),
        )

    def update(self, *, value: list[str] | None = _UNSET, search_value: str | None = _UNSET) -> SearchState:
        """Re-supply controlled values; ``None`` hands ownership back."""

        self._suspended = True
        try:
            if value is not _UNSET:
                self._selection_value.supply(value)
            if search_value is not _UNSET:
                self._query.supply(search_value)
            self._debounced.update(self._query.effective_value())
        finally:
            self._suspended = False
        return self._evaluate()

    def close(self) -> None:
        self._debounced.cancel()
        self._unsubscribe_source()
        self._unsubscribe_source = lambda: None
        self._listeners.clear()

    async def aclose(self) -> None:
        self.close()
        if self._owned_source is not None:
            await self._owned_source.aclose()
        if self._http_client is not None:
            await self._http_client.aclose()

    def _on_query_stage_change(self) -> None:
        if not self._debounced.is_pending:
            logger.debug("search_query_settled", query=self._debounced.debounced_value)
            self._source.request(self._debounced.debounced_value)
        if not self._suspended:
            self._evaluate()

    def _on_source_change(self) -> None:
        self._evaluate()

    def _evaluate(self) -> SearchState:
        snapshot = self._source.snapshot()
        data = snapshot.data
        selected_icons = self._selection.selected_icons
        if not self._selection_value.is_controlled:
            selected_icons = list(selected_icons)
        is_debouncing = self._debounced.is_pending
        state = SearchState(
            multiple=self.multiple,
            query=self._query.effective_value(),
            set_query=self.set_query,
            debounced_query=self._debounced.debounced_value,
            is_debouncing=is_debouncing,
            data=data,
            is_loading=snapshot.is_loading,
            is_fetching=snapshot.is_fetching,
            is_pending=is_debouncing or snapshot.is_loading or snapshot.is_fetching,
            get_icon_url=self.get_icon_url,
            selected_icons=selected_icons,
            set_selected_icons=self.set_selected_icons,
            select_icon=self.select_icon,
            groups=group_icons(
                data.icons if data is not None else [],
                selected_icons,
                data.collections if data is not None else None,
            ),
        )
        self._state = state
        if self._children is not None:
            self.rendered = self._children(state)
        for listener in list(self._listeners):
            listener(state)
        return state


__all__ = ["IconifySearchPrimitive", "SearchState"]
