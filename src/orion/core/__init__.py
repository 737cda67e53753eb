"""Core utilities and shared functionality."""

from orion.core.dates import (
    UTC,
    now_utc,
    now_millis,
    today_utc,
    to_date_key,
    date_key_from_millis,
    purchase_date_key,
)
from orion.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    ProviderError,
)

__all__ = [
    "UTC",
    "now_utc",
    "now_millis",
    "today_utc",
    "to_date_key",
    "date_key_from_millis",
    "purchase_date_key",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ProviderError",
]
