"""Controlled-or-uncontrolled ownership of a single value."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class ValueResolver(Generic[T]):
    """Holds either a caller-supplied value or an internal fallback.

    ``None`` as the external value means the caller does not own it. While the
    caller owns the value, ``set`` only reports the requested change and the
    visible value moves when the caller supplies a new one.
    """

    def __init__(
        self,
        value: T | None = None,
        *,
        default: T,
        on_change: Callable[[T], None] | None = None,
    ) -> None:
        self._external = value
        self._internal = default
        self._on_change = on_change

    @property
    def is_controlled(self) -> bool:
        return self._external is not None

    def effective_value(self) -> T:
        if self._external is not None:
            return self._external
        return self._internal

    def set(self, next_value: T) -> None:
        if self._on_change is not None:
            self._on_change(next_value)
        if self._external is None:
            self._internal = next_value

    def supply(self, value: T | None) -> None:
        self._external = value


__all__ = ["ValueResolver"]
