"""Normalization helpers for user-entered codes."""

from typing import Optional


def normalize_symbol(s: Optional[str]) -> Optional[str]:
    """Normalize ticker: strip whitespace and uppercase; None or empty -> None."""
    if s is None:
        return None
    stripped = s.strip().upper()
    return stripped if stripped else None


def normalize_currency(value: Optional[str]) -> Optional[str]:
    """
    Normalize a currency code to upper-case ISO 4217 form.

    None or blank -> None. Raises ValueError for anything that is not three letters.
    """
    if value is None:
        return None
    normalized = value.strip().upper()
    if not normalized:
        return None
    if len(normalized) != 3 or not normalized.isalpha():
        raise ValueError(f"Currency must be a 3-letter ISO 4217 code: {value!r}")
    return normalized
