"""Command line entrypoint: run one search and print the grouped icons."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Sequence

import httpx

from iconify_search.config import get_settings
from iconify_search.logging import configure_logging, logger
from iconify_search.primitive.search import IconifySearchPrimitive, SearchState
from iconify_search.services.exceptions import InvalidIconIdentifier
from iconify_search.services.iconify import IconifySearchService
from iconify_search.services.search_source import IconifySearchSource


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search Iconify and print icons grouped by collection.")
    parser.add_argument("query", help="Search text.")
    parser.add_argument("--multiple", action="store_true", help="Allow selecting several icons.")
    parser.add_argument(
        "--select",
        action="append",
        default=[],
        metavar="ICON_ID",
        help="Icon id to preselect, e.g. mdi:home (repeatable).",
    )
    parser.add_argument("--size", type=int, default=None, help="Icon height used in printed URLs.")
    parser.add_argument("--timeout", type=float, default=30.0, help="Seconds to wait for results.")
    return parser


def _icon_url(state: SearchState, icon_id: str, size: int | None) -> str | None:
    try:
        return state.get_icon_url(icon_id, size)
    except InvalidIconIdentifier:
        return None


def _report(state: SearchState, size: int | None) -> dict:
    return {
        "query": state.debounced_query,
        "total": state.data.total if state.data is not None else 0,
        "selected": state.selected_icons,
        "groups": [
            {
                "prefix": group.prefix,
                "name": group.name,
                "icons": [
                    {"id": icon_id, "url": _icon_url(state, icon_id, size)}
                    for icon_id in group.icons
                ],
            }
            for group in state.groups
        ],
    }


async def run(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    settled = asyncio.Event()

    def _on_state(state: SearchState) -> None:
        if state.debounced_query == state.query and not state.is_pending:
            settled.set()

    async with httpx.AsyncClient() as client:
        source = IconifySearchSource(IconifySearchService(client, settings=settings.api))
        primitive = IconifySearchPrimitive(
            multiple=args.multiple,
            default_value=args.select,
            data_source=source,
            settings=settings,
        )
        primitive.subscribe(_on_state)
        logger.info("search_cli_starting", query=args.query, environment=settings.environment)
        primitive.set_query(args.query)
        _on_state(primitive.state)
        try:
            await asyncio.wait_for(settled.wait(), timeout=args.timeout)
        except asyncio.TimeoutError:
            logger.error("search_cli_timeout", query=args.query, timeout=args.timeout)
            return 1
        finally:
            primitive.close()
            await source.aclose()

        error = source.snapshot().error
        if error is not None:
            print(f"Search failed: {error}", file=sys.stderr)
            return 1
        print(json.dumps(_report(primitive.state, args.size), ensure_ascii=False, indent=2))
    return 0


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
