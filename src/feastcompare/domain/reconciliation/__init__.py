"""Cross-calendar reconciliation of liturgical observances.

Layered flow of one run:
1) retrieve each calendar's day in parallel
2) filter observances with the classifier
3) group observances into canonical feasts by exact description
4) search calendars missing a feast and apply the acceptance threshold
5) sort the feasts by name
"""

from __future__ import annotations

from .engine import ReconciliationEngine
from .grouping import group_observances, worthy_observances
from .policy import (
    DisplayStatus,
    best_match,
    display_status,
    found_elsewhere,
    is_acceptable,
    resolve_search_status,
)
from .runs import ComparisonRun, ComparisonSession, Reconciler

__all__ = [
    "ComparisonRun",
    "ComparisonSession",
    "DisplayStatus",
    "ReconciliationEngine",
    "Reconciler",
    "best_match",
    "display_status",
    "found_elsewhere",
    "group_observances",
    "is_acceptable",
    "resolve_search_status",
    "worthy_observances",
]
