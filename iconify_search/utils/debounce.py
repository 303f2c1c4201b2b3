"""Trailing-edge debouncing on top of a cancellable timer."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Generic, Protocol, TypeVar

T = TypeVar("T")

DEFAULT_WAIT_MS = 300


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything with ``call_later``; ``asyncio`` event loops qualify."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class Debouncer(Generic[T]):
    """Single-slot timer: scheduling again always cancels the pending call."""

    def __init__(
        self,
        callback: Callable[[T], None],
        *,
        wait_ms: int = DEFAULT_WAIT_MS,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._callback = callback
        self._wait_seconds = max(0, wait_ms) / 1000
        self._scheduler = scheduler
        self._handle: TimerHandle | None = None

    @property
    def is_pending(self) -> bool:
        return self._handle is not None

    def maybe_execute(self, value: T) -> None:
        scheduler = self._scheduler or asyncio.get_running_loop()
        self.cancel()
        self._handle = scheduler.call_later(self._wait_seconds, self._fire, value)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, value: T) -> None:
        self._handle = None
        self._callback(value)


class DebouncedValue(Generic[T]):
    """Tracks a value and its settled copy.

    The initial value counts as settled. ``on_change`` fires when a delay
    starts and again when it settles.
    """

    def __init__(
        self,
        initial: T,
        *,
        wait_ms: int = DEFAULT_WAIT_MS,
        on_change: Callable[[], None] | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._value = initial
        self._debounced = initial
        self._on_change = on_change
        self._debouncer: Debouncer[T] = Debouncer(self._settle, wait_ms=wait_ms, scheduler=scheduler)

    @property
    def value(self) -> T:
        return self._value

    @property
    def debounced_value(self) -> T:
        return self._debounced

    @property
    def is_pending(self) -> bool:
        return self._debouncer.is_pending

    def update(self, value: T) -> None:
        if value == self._value:
            return
        self._debouncer.maybe_execute(value)
        self._value = value
        self._notify()

    def cancel(self) -> None:
        self._debouncer.cancel()

    def _settle(self, value: T) -> None:
        self._debounced = value
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()


__all__ = ["DebouncedValue", "Debouncer", "Scheduler", "TimerHandle"]
