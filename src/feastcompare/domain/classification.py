"""Observance classification used to decide what is worth comparing.

Two separate rules live here:
- ``classify_observance`` flags ferias and optional Saturday Marian memorials
- ``is_suppressed_sunday`` flags Sunday-of-season observances

``is_comparison_worthy`` combines both with the blank-text check.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .types import Observance

_WEEKDAYS = "Monday|Tuesday|Wednesday|Thursday|Friday|Saturday"
_ORDINALS = "First|Second|Third|Fourth|Fifth|Sixth|Seventh"

FERIA_PATTERNS: Final[tuple[re.Pattern[str], ...]] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        rf"^({_WEEKDAYS}) of",
        rf"^({_WEEKDAYS}) in",
        r"^Weekday",
        r"^Feria",
        r"^Sabato",
        r"^Dominica",
        rf"^({_ORDINALS}) Day of",
        r"^Day \d+ of",
        r"^Ordinary Time",
    )
)

MARIAN_PATTERNS: Final[tuple[re.Pattern[str], ...]] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"^(Blessed Virgin Mary|BVM)",
        r"^Our Lady",
        r"^Mary",
        r"^The Blessed Virgin",
    )
)

SATURDAY_MARIAN_PATTERNS: Final[tuple[re.Pattern[str], ...]] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"Saturday",
        r"Memorial of.*Mary",
        r"of the Blessed Virgin Mary$",
    )
)

SUNDAY_RANK_MARKERS: Final[tuple[str, ...]] = ("sunday", "dominica", "ordinary")
SUNDAY_DESCRIPTION_MARKERS: Final[tuple[str, ...]] = ("ordinary time",)

_SUNDAY_WEEKDAY = 6


@dataclass(frozen=True, slots=True)
class ObservanceClassification:
    feria: bool


def is_feria(description: str) -> bool:
    """Return whether ``description`` names a feria or an optional Saturday Marian memorial."""

    text = description.strip()
    if any(pattern.search(text) for pattern in FERIA_PATTERNS):
        return True
    if any(pattern.search(text) for pattern in MARIAN_PATTERNS):
        return any(pattern.search(text) for pattern in SATURDAY_MARIAN_PATTERNS)
    return False


def classify_observance(
    description: str,
    rank: str,  # noqa: ARG001
    is_sunday: bool,  # noqa: ARG001, FBT001
) -> ObservanceClassification:
    """Classify an observance by its description alone.

    ``rank`` and ``is_sunday`` are part of the contract but do not influence the
    outcome; Sunday handling is ``is_suppressed_sunday``.
    """

    return ObservanceClassification(feria=is_feria(description))


def is_suppressed_sunday(observance: Observance) -> bool:
    if observance.date.weekday() != _SUNDAY_WEEKDAY:
        return False
    rank = observance.rank.lower()
    description = observance.description.lower()
    return any(marker in rank for marker in SUNDAY_RANK_MARKERS) or any(
        marker in description for marker in SUNDAY_DESCRIPTION_MARKERS
    )


def is_comparison_worthy(observance: Observance) -> bool:
    """Return whether ``observance`` should take part in a cross-calendar comparison."""

    is_sunday = observance.date.weekday() == _SUNDAY_WEEKDAY
    if classify_observance(observance.description, observance.rank, is_sunday).feria:
        return False
    if is_suppressed_sunday(observance):
        return False
    return bool(observance.description.strip()) and bool(observance.rank.strip())
