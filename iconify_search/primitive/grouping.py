"""Partition search results and the current selection by collection."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from iconify_search.domain.models import CollectionInfo, IconGroup

FALLBACK_PREFIX = "other"


def icon_prefix(icon_id: str) -> str:
    prefix, delimiter, _ = icon_id.partition(":")
    if not delimiter or not prefix:
        return FALLBACK_PREFIX
    return prefix


def group_icons(
    icon_ids: Iterable[str],
    selected_icons: Sequence[str],
    collections: Mapping[str, CollectionInfo] | None = None,
) -> list[IconGroup]:
    """Group ``icon_ids`` by prefix, keeping every selected icon visible.

    Selected icons missing from the results are pushed to the front one at a
    time, so several missing ones end up in reverse selection order.
    """

    combined = list(dict.fromkeys(icon_ids))
    seen = set(combined)

    names: dict[str, str] = {}
    for prefix, info in (collections or {}).items():
        name = info.name if info is not None else None
        names[prefix] = prefix if name is None else name

    for icon_id in selected_icons:
        if icon_id in seen:
            continue
        combined.insert(0, icon_id)
        seen.add(icon_id)
        names.setdefault(icon_prefix(icon_id), icon_prefix(icon_id))

    by_prefix: dict[str, list[str]] = {}
    for icon_id in combined:
        by_prefix.setdefault(icon_prefix(icon_id), []).append(icon_id)

    return [
        IconGroup(prefix=prefix, name=names.get(prefix, prefix), icons=icons)
        for prefix, icons in by_prefix.items()
    ]


__all__ = ["FALLBACK_PREFIX", "group_icons", "icon_prefix"]
