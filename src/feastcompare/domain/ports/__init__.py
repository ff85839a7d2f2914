"""Domain port definitions for adapters."""

from __future__ import annotations

from .liturgy import CalendarCatalog, DayLookup, FeastSearch

__all__ = ["CalendarCatalog", "DayLookup", "FeastSearch"]
