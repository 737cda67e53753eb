"""Date-key utilities (UTC calendar dates as YYYY-MM-DD)."""

from datetime import date, datetime
from typing import Union

import pytz
from dateutil import parser as date_parser

UTC = pytz.UTC

DateLike = Union[str, date, datetime]


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def now_millis() -> int:
    """Return current time as epoch milliseconds."""
    return int(now_utc().timestamp() * 1000)


def today_utc() -> date:
    """Return today's UTC calendar date."""
    return now_utc().date()


def to_date_key(value: Union[date, datetime]) -> str:
    """
    Serialize a date or datetime as a UTC date-key.

    Aware datetimes are converted to UTC first; naive datetimes are assumed UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.date().isoformat()
    return value.isoformat()


def date_key_from_millis(timestamp_ms: float) -> str:
    """Convert an epoch-milliseconds timestamp to a UTC date-key."""
    return to_date_key(datetime.fromtimestamp(timestamp_ms / 1000.0, tz=UTC))


def purchase_date_key(value: DateLike) -> str:
    """
    Truncate a purchase date to its date-key.

    Strings keep the calendar date as written (no timezone shift), matching a
    plain truncation of an ISO timestamp to its first ten characters.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    dt = date_parser.isoparse(value.strip())
    return dt.date().isoformat()
