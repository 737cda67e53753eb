"""Calendar builder: the ordered date-keys a valuation series is evaluated on."""

from datetime import date, timedelta
from typing import Optional

from orion.core.dates import today_utc, to_date_key
from orion.domain.models import HistoricalRange, OutputSize, SeriesKind

RANGE_DAYS: dict[HistoricalRange, int] = {
    HistoricalRange.WEEK: 7,
    HistoricalRange.MONTH: 30,
    HistoricalRange.QUARTER: 90,
    HistoricalRange.YEAR: 365,
}

MONTHS_IN_YEAR_VIEW = 12


def build_date_range(days: int, today: Optional[date] = None) -> list[str]:
    """Return `days` consecutive UTC date-keys ending today (inclusive), oldest first."""
    end = today or today_utc()
    return [to_date_key(end - timedelta(days=offset)) for offset in range(days - 1, -1, -1)]


def _shift_months(first_of_month: date, months_back: int) -> date:
    month_index = first_of_month.year * 12 + (first_of_month.month - 1) - months_back
    return date(month_index // 12, month_index % 12 + 1, 1)


def build_monthly_date_range(today: Optional[date] = None) -> list[str]:
    """Return the first-of-month date-key for each of the trailing 12 months, oldest first."""
    start_of_month = (today or today_utc()).replace(day=1)
    return [
        to_date_key(_shift_months(start_of_month, offset))
        for offset in range(MONTHS_IN_YEAR_VIEW - 1, -1, -1)
    ]


def uses_monthly_grid(history_range: HistoricalRange, monthly_year_view: bool = True) -> bool:
    """Only the 1y view trades daily resolution for a monthly grid."""
    return monthly_year_view and HistoricalRange(history_range) == HistoricalRange.YEAR


def series_kind_for_range(
    history_range: HistoricalRange,
    monthly_year_view: bool = True,
) -> SeriesKind:
    if uses_monthly_grid(history_range, monthly_year_view):
        return SeriesKind.MONTHLY
    return SeriesKind.DAILY


def output_size_for_range(history_range: HistoricalRange) -> OutputSize:
    """1y needs the full payload; shorter ranges fit in the compact one."""
    if HistoricalRange(history_range) == HistoricalRange.YEAR:
        return OutputSize.FULL
    return OutputSize.COMPACT


def calendar_for_range(
    history_range: HistoricalRange,
    monthly_year_view: bool = True,
    today: Optional[date] = None,
) -> list[str]:
    """Date grid for a chart range."""
    if uses_monthly_grid(history_range, monthly_year_view):
        return build_monthly_date_range(today)
    return build_date_range(RANGE_DAYS[HistoricalRange(history_range)], today)
