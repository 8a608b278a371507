"""Domain validation helpers."""

from datetime import date
from decimal import Decimal
from logging import Logger


def validate_amount_sign(
    label: str,
    amount: Decimal,
    logger: Logger,
) -> None:
    """Warn when a stored amount is negative.

    Args:
        label: Human readable record reference used in the warning.
        amount: Coerced amount.
        logger: Logger used for warnings.
    """
    if amount < 0:
        logger.warning(f"Negative amount for {label}: {amount}")


def is_usable_range(start: date | None, end: date | None) -> bool:
    """Return whether both bounds are set and ``start`` is not after ``end``.

    An inverted range is not an error: callers answer it with empty results.
    """
    if start is None or end is None:
        return False
    return start <= end


__all__ = ["validate_amount_sign", "is_usable_range"]
