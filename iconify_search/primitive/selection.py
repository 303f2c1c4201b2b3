"""Single and multiple icon selection."""

from __future__ import annotations

from typing import Sequence

from iconify_search.primitive.value import ValueResolver


class SelectionManager:
    def __init__(self, resolver: ValueResolver[list[str]], *, multiple: bool = False) -> None:
        self._resolver = resolver
        self.multiple = multiple

    @property
    def selected_icons(self) -> list[str]:
        return self._resolver.effective_value()

    def set_selected_icons(self, icon_ids: Sequence[str]) -> None:
        """Apply ``icon_ids``; at most the first one is kept in single mode."""

        next_value = list(icon_ids) if self.multiple else list(icon_ids[:1])
        self._resolver.set(next_value)

    def select_icon(self, icon_id: str) -> None:
        """Replace the selection in single mode, toggle membership otherwise."""

        if not self.multiple:
            self._resolver.set([icon_id])
            return

        current = self.selected_icons
        if icon_id in current:
            next_value = [selected for selected in current if selected != icon_id]
        else:
            next_value = [*current, icon_id]
        self._resolver.set(next_value)


__all__ = ["SelectionManager"]
