# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from feastcompare.app import compare_day, default_calendar_selection, list_calendars, search_feasts
from feastcompare.config import configure_logging
from feastcompare.domain.presentation import (
    calendar_display_name,
    color_value,
    rank_shift,
    status_icon,
    status_label,
)
from feastcompare.domain.reconciliation import display_status
from feastcompare.domain.types import ComparisonState, FoundElsewhereStatus, PresentStatus

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

    from feastcompare.domain.types import (
        CalendarId,
        CalendarSearchResult,
        ComparisonTable,
        ObservanceStatus,
    )

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare liturgical calendars")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compare = subparsers.add_parser("compare", help="Compare how calendars observe one day")
    compare.add_argument(
        "--date",
        type=str,
        help="ISO-8601 date (YYYY-MM-DD) to compare (defaults to today)",
    )
    compare.add_argument(
        "--calendars",
        type=str,
        help="Comma-separated calendar ids (defaults to the catalog's default selection)",
    )

    subparsers.add_parser("calendars", help="List available calendars")

    search = subparsers.add_parser("search", help="Search feasts across calendars")
    search.add_argument("query", type=str, help="Free-text feast name")
    search.add_argument(
        "--calendars",
        type=str,
        help="Comma-separated calendar ids (defaults to the catalog's default selection)",
    )

    return parser.parse_args(list(argv))


def _parse_iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid ISO date: {value}") from exc


def _parse_calendar_ids(value: str | None) -> tuple[CalendarId, ...] | None:
    if value is None:
        return None
    ids = tuple(dict.fromkeys(part.strip() for part in value.split(",") if part.strip()))
    if not ids:
        raise ValueError("--calendars must name at least one calendar")
    return ids


def _resolve_calendars(explicit: tuple[CalendarId, ...] | None) -> tuple[CalendarId, ...]:
    if explicit is not None:
        return explicit
    return default_calendar_selection(list_calendars())


def _describe_color(color: str) -> str:
    return f"{color} {color_value(color)}"


def _describe_status(status: ObservanceStatus, base_rank: str) -> str:
    category = display_status(status)
    label = f"{status_icon(category)} {status_label(category)}"
    if isinstance(status, PresentStatus):
        return f"{label} ({status.rank}, {_describe_color(status.color)})"
    if isinstance(status, FoundElsewhereStatus):
        shift = rank_shift(base_rank, status.rank)
        rank = f"{status.rank}, {shift}" if shift else status.rank
        when = f" on {status.date}" if status.date else ""
        return (
            f"{label} ({rank}{when}, score {status.score:.2f}, "
            f"{_describe_color(status.color)})"
        )
    return label


def render_table(table: ComparisonTable) -> list[str]:
    """Render a comparison table as text lines."""

    if table.state is ComparisonState.EMPTY_SELECTION:
        return ["No calendars selected."]
    lines = [f"Comparison for {table.date.isoformat()}"]
    if table.unavailable_calendars:
        missing = ", ".join(calendar_display_name(cid) for cid in table.unavailable_calendars)
        lines.append(f"No data from: {missing}")
    if table.state is ComparisonState.NOTHING_TO_COMPARE:
        lines.append("Nothing to compare.")
        return lines
    for feast in table.feasts:
        lines.append(f"{feast.canonical_name}")
        base_rank = feast.base_status.rank
        for calendar_id in table.calendar_ids:
            description = _describe_status(feast.status_for(calendar_id), base_rank)
            lines.append(f"  {calendar_display_name(calendar_id)}: {description}")
    return lines


def render_search_results(results: Sequence[CalendarSearchResult]) -> list[str]:
    if not results:
        return ["No matches."]
    return [
        f"{calendar_display_name(result.calendar_id)}: {result.match.name} "
        f"[{result.match.rank}] {result.match.date or '-'} ({result.match.score:.2f})"
        for result in results
    ]


def main(
    argv: Sequence[str] | None = None,
    *,
    today_provider: Callable[[], date] = date.today,
) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        target = (
            _parse_iso_date(parsed_args.date)
            if parsed_args.command == "compare" and parsed_args.date
            else today_provider()
        )
        explicit_calendars = _parse_calendar_ids(getattr(parsed_args, "calendars", None))
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "compare":
            table = compare_day(target, _resolve_calendars(explicit_calendars))
            print("\n".join(render_table(table)))
        elif parsed_args.command == "calendars":
            for calendar in list_calendars():
                print(
                    f"{calendar.id}\t{calendar.display_label}\t"
                    f"{calendar.commemoration_interpretation}"
                )
        elif parsed_args.command == "search":
            results = search_feasts(parsed_args.query, _resolve_calendars(explicit_calendars))
            print("\n".join(render_search_results(results)))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during comparison")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
