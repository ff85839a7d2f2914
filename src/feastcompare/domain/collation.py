"""Locale-style ordering of display names."""

from __future__ import annotations

import unicodedata


def fold(text: str) -> str:
    """Strip combining marks and case so accented letters sort with their base letter."""

    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char)).casefold()


def collation_key(text: str) -> tuple[str, str]:
    """Sort key that compares folded text first and the raw text as a tie-break."""

    return fold(text), text
