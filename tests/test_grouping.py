"""Grouping of search results and selection by collection prefix."""

from __future__ import annotations

from iconify_search.domain.models import CollectionInfo
from iconify_search.primitive.grouping import group_icons, icon_prefix


def _groups(icon_ids, selected=(), collections=None):
    return [group.model_dump() for group in group_icons(icon_ids, list(selected), collections)]


def test_groups_single_collection_with_metadata_name():
    groups = _groups(
        ["mdi:home", "mdi:search"],
        collections={"mdi": CollectionInfo(name="Material Design Icons")},
    )

    assert groups == [
        {"prefix": "mdi", "name": "Material Design Icons", "icons": ["mdi:home", "mdi:search"]}
    ]


def test_empty_results_and_selection_give_no_groups():
    assert group_icons([], [], None) == []


def test_prefix_order_follows_first_encounter():
    groups = _groups(["fa:star", "mdi:home", "fa:heart", "tabler:x", "mdi:search"])

    assert [group["prefix"] for group in groups] == ["fa", "mdi", "tabler"]
    assert groups[0]["icons"] == ["fa:star", "fa:heart"]
    assert groups[1]["icons"] == ["mdi:home", "mdi:search"]


def test_duplicate_results_are_collapsed():
    groups = _groups(["mdi:home", "mdi:home", "mdi:search", "mdi:home"])

    assert groups[0]["icons"] == ["mdi:home", "mdi:search"]


def test_missing_metadata_falls_back_to_prefix():
    groups = _groups(
        ["mdi:home", "fa:star"],
        collections={"mdi": CollectionInfo(name=None)},
    )

    assert [(group["prefix"], group["name"]) for group in groups] == [("mdi", "mdi"), ("fa", "fa")]


def test_selected_icon_already_in_results_is_not_repeated():
    groups = _groups(["mdi:home", "mdi:search"], selected=["mdi:search"])

    assert groups[0]["icons"] == ["mdi:home", "mdi:search"]


def test_selected_icons_missing_from_results_are_prepended_in_reverse():
    groups = _groups(["mdi:home"], selected=["fa:star", "fa:heart"])

    assert groups == [
        {"prefix": "fa", "name": "fa", "icons": ["fa:heart", "fa:star"]},
        {"prefix": "mdi", "name": "mdi", "icons": ["mdi:home"]},
    ]


def test_selected_icons_show_up_without_results():
    selected = ["mdi:home", "fa:star", "mdi:search"]

    groups = group_icons([], selected, None)

    flattened = [icon for group in groups for icon in group.icons]
    assert sorted(flattened) == sorted(selected)
    assert len(flattened) == len(set(flattened))


def test_selected_prefix_keeps_known_collection_name():
    groups = _groups(
        [],
        selected=["mdi:home"],
        collections={"mdi": CollectionInfo(name="Material Design Icons")},
    )

    assert groups == [{"prefix": "mdi", "name": "Material Design Icons", "icons": ["mdi:home"]}]


def test_duplicate_selection_appears_once():
    groups = _groups([], selected=["mdi:home", "mdi:home"])

    assert groups == [{"prefix": "mdi", "name": "mdi", "icons": ["mdi:home"]}]


def test_malformed_identifiers_go_to_other():
    groups = _groups(["home", ":blank", "mdi:home"])

    assert groups[0] == {"prefix": "other", "name": "other", "icons": ["home", ":blank"]}
    assert groups[1]["prefix"] == "mdi"


def test_icon_prefix_uses_first_delimiter():
    assert icon_prefix("mdi:home") == "mdi"
    assert icon_prefix("a:b:c") == "a"
    assert icon_prefix("plain") == "other"
    assert icon_prefix(":x") == "other"
