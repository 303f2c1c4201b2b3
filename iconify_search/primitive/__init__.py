from iconify_search.primitive.grouping import group_icons, icon_prefix
from iconify_search.primitive.search import IconifySearchPrimitive, SearchState
from iconify_search.primitive.selection import SelectionManager
from iconify_search.primitive.value import ValueResolver

__all__ = [
    "IconifySearchPrimitive",
    "SearchState",
    "SelectionManager",
    "ValueResolver",
    "group_icons",
    "icon_prefix",
]
