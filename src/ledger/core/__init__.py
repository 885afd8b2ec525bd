"""Core utilities and shared functionality."""

from ledger.core.clock import today_in, today_iso, parse_iso_date, is_iso_date
from ledger.core.normalize import normalize_symbol, normalize_currency
from ledger.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    StoreError,
    ConversionError,
)

__all__ = [
    "today_in",
    "today_iso",
    "parse_iso_date",
    "is_iso_date",
    "normalize_symbol",
    "normalize_currency",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "StoreError",
    "ConversionError",
]
