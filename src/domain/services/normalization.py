"""Normalization of record amounts to monthly equivalents.

Aggregate views convert every amount to a monthly figure. Wealth buckets use
the time-aware helpers, which decide whether a record existed at the end of
a bucket and which valuation it contributes.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from logging import Logger

from src.domain.constants import MONTHS_PER_YEAR, WEEKS_PER_MONTH
from src.domain.errors import UnknownFrequencyError
from src.domain.models.finance import PeriodBucket
from src.utils.decimal_utils import coerce_decimal, first_nonzero


class Frequency(str, Enum):
    """Supported record frequencies."""

    MONTHLY = "monthly"
    WEEKLY = "weekly"
    YEARLY = "yearly"
    ONE_TIME = "one-time"


def parse_frequency(
    raw: str | None,
    logger: Logger | None = None,
    *,
    strict: bool = False,
) -> Frequency:
    """Parse a raw frequency value.

    Unknown values are an error in strict mode. Otherwise they are logged
    and treated as monthly, which is how the stored data has always been
    read.

    Args:
        raw: Frequency string from the data store.
        logger: Logger used to report unknown values.
        strict: Raise instead of falling back to monthly.

    Returns:
        Frequency: Parsed frequency.

    Raises:
        UnknownFrequencyError: If ``strict`` and the value is unknown.
    """
    cleaned = (raw or "").strip().lower().replace("_", "-")
    if cleaned == "onetime":
        cleaned = Frequency.ONE_TIME.value
    try:
        return Frequency(cleaned)
    except ValueError:
        if strict:
            raise UnknownFrequencyError(raw) from None
    if logger is not None:
        logger.warning(f"Unknown frequency {raw!r}, treating it as monthly")
    return Frequency.MONTHLY


def to_monthly_amount(
    amount,
    frequency: Frequency,
    *,
    include_one_time: bool = True,
) -> Decimal:
    """Convert an amount to its monthly equivalent.

    Args:
        amount: Raw amount; missing or malformed values count as zero.
        frequency: Parsed frequency of the amount.
        include_one_time: When False, one-time amounts contribute zero.
            When True they count at face value, as if monthly.

    Returns:
        Decimal: Monthly equivalent amount.
    """
    value = coerce_decimal(amount)
    if frequency is Frequency.WEEKLY:
        return value * WEEKS_PER_MONTH
    if frequency is Frequency.YEARLY:
        return value / MONTHS_PER_YEAR
    if frequency is Frequency.ONE_TIME:
        return value if include_one_time else Decimal("0")
    return value


def normalize_amount(
    amount,
    raw_frequency: str | None,
    logger: Logger | None = None,
    *,
    strict: bool = False,
    include_one_time: bool = True,
) -> Decimal:
    """Parse ``raw_frequency`` and return the monthly equivalent of ``amount``."""
    frequency = parse_frequency(raw_frequency, logger, strict=strict)
    return to_monthly_amount(
        amount,
        frequency,
        include_one_time=include_one_time,
    )


def existed_by(acquired_on: date | None, window_end: date) -> bool:
    """Return whether a record acquired on ``acquired_on`` exists at ``window_end``.

    Records without an acquisition date never qualify.
    """
    if acquired_on is None:
        return False
    return acquired_on <= window_end


def asset_value_at(
    current_value,
    entry_value,
    acquired_on: date | None,
    window_end: date,
    filter_start: date | None,
) -> Decimal | None:
    """Return the valuation an asset contributes to a bucket.

    Args:
        current_value: Current market valuation.
        entry_value: Valuation at acquisition time.
        acquired_on: Acquisition date.
        window_end: Last day of the bucket.
        filter_start: Start of the requested range, or None when the chart
            is unfiltered.

    Returns:
        Decimal | None: None when the asset did not exist by ``window_end``.
        Current valuation (falling back to entry valuation) when the asset
        predates ``filter_start`` or no range is applied. Entry valuation
        when the asset was acquired inside the requested range.
    """
    if not existed_by(acquired_on, window_end):
        return None
    if filter_start is None or acquired_on < filter_start:
        return first_nonzero(current_value, entry_value)
    return first_nonzero(entry_value)


def one_time_in_window(
    amount,
    occurred_on: date | None,
    bucket: PeriodBucket,
) -> Decimal:
    """Return the face value of a one-time amount dated inside ``bucket``."""
    if occurred_on is None:
        return Decimal("0")
    if bucket.start <= occurred_on <= bucket.end:
        return coerce_decimal(amount)
    return Decimal("0")


__all__ = [
    "Frequency",
    "parse_frequency",
    "to_monthly_amount",
    "normalize_amount",
    "existed_by",
    "asset_value_at",
    "one_time_in_window",
]
