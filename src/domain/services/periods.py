"""Period bucketing for the wealth chart and date-range presets."""

import calendar
from datetime import date, timedelta

from src.domain.constants import (
    DEFAULT_TRAILING_MONTHS,
    MONTH_ABBREVIATIONS,
    MONTHLY_GRANULARITY_MAX_DAYS,
    SEMESTER_MONTHS,
)
from src.domain.models import DateRange, PeriodBucket

DATE_PRESETS = (
    "7days",
    "30days",
    "90days",
    "6months",
    "1year",
    "thisMonth",
    "lastMonth",
    "thisYear",
)


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def _shift_months(year: int, month: int, offset: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def _short_year(year: int) -> str:
    return f"{year % 100:02d}"


def _month_buckets(start: date, end: date) -> list[PeriodBucket]:
    include_year = start.year != end.year
    buckets = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        label = MONTH_ABBREVIATIONS[month - 1]
        if include_year:
            label = f"{label}/{_short_year(year)}"
        buckets.append(
            PeriodBucket(
                label=label,
                start=max(date(year, month, 1), start),
                end=min(_month_end(year, month), end),
            )
        )
        year, month = _shift_months(year, month, 1)
    return buckets


def _semester_of(month: int) -> int:
    return (month - 1) // SEMESTER_MONTHS


def _semester_buckets(start: date, end: date) -> list[PeriodBucket]:
    buckets = []
    year, semester = start.year, _semester_of(start.month)
    last = (end.year, _semester_of(end.month))
    while (year, semester) <= last:
        first_month = semester * SEMESTER_MONTHS + 1
        last_month = first_month + SEMESTER_MONTHS - 1
        buckets.append(
            PeriodBucket(
                label=f"S{semester + 1}/{_short_year(year)}",
                start=max(date(year, first_month, 1), start),
                end=min(_month_end(year, last_month), end),
            )
        )
        if semester == 0:
            semester = 1
        else:
            year, semester = year + 1, 0
    return buckets


def build_period_buckets(start: date, end: date) -> list[PeriodBucket]:
    """Split a requested range into chart buckets.

    Ranges of up to 365 days produce one bucket per calendar month; longer
    ranges produce one bucket per semester. Buckets are clipped to the
    range, contiguous and ordered.

    Args:
        start: First day of the range.
        end: Last day of the range.

    Returns:
        list[PeriodBucket]: Ordered buckets, empty when ``start`` is after
        ``end``.
    """
    window = DateRange(start, end)
    if window.is_inverted:
        return []
    if window.days <= MONTHLY_GRANULARITY_MAX_DAYS:
        return _month_buckets(start, end)
    return _semester_buckets(start, end)


def default_buckets(
    today: date,
    months: int = DEFAULT_TRAILING_MONTHS,
) -> list[PeriodBucket]:
    """Return whole-month buckets for the trailing ``months`` ending this month."""
    buckets = []
    for offset in range(months - 1, -1, -1):
        year, month = _shift_months(today.year, today.month, -offset)
        buckets.append(
            PeriodBucket(
                label=MONTH_ABBREVIATIONS[month - 1],
                start=date(year, month, 1),
                end=_month_end(year, month),
            )
        )
    return buckets


def _months_before(day: date, months: int) -> date:
    year, month = _shift_months(day.year, day.month, -months)
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def resolve_preset_range(preset: str, today: date) -> DateRange:
    """Resolve a named preset to a concrete range.

    Args:
        preset: One of ``DATE_PRESETS``.
        today: Reference day; it closes every range except ``lastMonth``.

    Returns:
        DateRange: Inclusive range.

    Raises:
        ValueError: If the preset is unknown.
    """
    if preset == "7days":
        return DateRange(today - timedelta(days=7), today)
    if preset == "30days":
        return DateRange(today - timedelta(days=30), today)
    if preset == "90days":
        return DateRange(today - timedelta(days=90), today)
    if preset == "6months":
        return DateRange(_months_before(today, 6), today)
    if preset == "1year":
        return DateRange(_months_before(today, 12), today)
    if preset == "thisMonth":
        return DateRange(today.replace(day=1), today)
    if preset == "lastMonth":
        year, month = _shift_months(today.year, today.month, -1)
        return DateRange(date(year, month, 1), _month_end(year, month))
    if preset == "thisYear":
        return DateRange(date(today.year, 1, 1), today)
    raise ValueError(f"Unknown date preset: {preset}")


__all__ = [
    "DATE_PRESETS",
    "build_period_buckets",
    "default_buckets",
    "resolve_preset_range",
]
