"""Display helpers for comparison tables."""

from __future__ import annotations

from typing import Final

from .reconciliation.policy import DisplayStatus

DEFAULT_COLOR_VALUE: Final[str] = "#6b7280"

COLOR_VALUES: Final[dict[str, str]] = {
    "white": "#ffffff",
    "red": "#dc2626",
    "green": "#16a34a",
    "violet": "#7c3aed",
    "purple": "#7c3aed",
    "rose": "#f43f5e",
    "gold": "#eab308",
    "yellow": "#eab308",
    "black": "#1f2937",
}

STATUS_ICONS: Final[dict[str, str]] = {
    DisplayStatus.PRESENT: "✓",
    DisplayStatus.ABSENT: "✗",
    DisplayStatus.TRANSFERRED: "↪",
    DisplayStatus.RANK_CHANGED: "△",
    DisplayStatus.FOUND_ELSEWHERE: "📍",
}

STATUS_LABELS: Final[dict[str, str]] = {
    DisplayStatus.PRESENT: "Present",
    DisplayStatus.ABSENT: "Not observed",
    DisplayStatus.TRANSFERRED: "Transferred",
    DisplayStatus.RANK_CHANGED: "Different rank",
    DisplayStatus.FOUND_ELSEWHERE: "Found on different date",
}

# keyed case-insensitively
RANK_PRIORITIES: Final[dict[str, int]] = {
    "solemnity": 100,
    "feast": 80,
    "memorial": 60,
    "optional memorial": 40,
    "commemoration": 20,
    "feria": 10,
}


def color_value(color: str | None) -> str:
    """Return the CSS colour for a liturgical colour name."""

    if not color:
        return DEFAULT_COLOR_VALUE
    return COLOR_VALUES.get(color.lower(), DEFAULT_COLOR_VALUE)


def status_icon(status: str) -> str:
    return STATUS_ICONS.get(status, "?")


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, "Unknown")


def rank_priority(rank: str | None) -> int:
    """Return a precedence weight for ``rank``; higher ranks weigh more."""

    if not rank:
        return 0
    return RANK_PRIORITIES.get(rank.lower(), 0)


def rank_shift(base_rank: str | None, rank: str | None) -> str | None:
    """Return ``"higher"`` or ``"lower"`` when both ranks are known and differ in weight."""

    base, other = rank_priority(base_rank), rank_priority(rank)
    if not base or not other or base == other:
        return None
    return "higher" if other > base else "lower"


def calendar_display_name(calendar_id: str) -> str:
    return calendar_id.upper()
