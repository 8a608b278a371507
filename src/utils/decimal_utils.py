"""Helpers for Decimal normalization."""

from decimal import Decimal, InvalidOperation


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Missing, non-numeric and non-finite values collapse to zero so a
    malformed record contributes nothing instead of breaking a sum.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    try:
        converted = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not converted.is_finite():
        return Decimal("0")
    return converted


def optional_decimal(value) -> Decimal | None:
    """Return a Decimal for present values and None for missing ones.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal | None: Normalized value, or None when absent.
    """
    if value is None or value == "":
        return None
    return coerce_decimal(value)


def first_nonzero(*values) -> Decimal:
    """Return the first value that is present and non-zero.

    Args:
        *values: Candidate values in priority order.

    Returns:
        Decimal: First non-zero candidate, or zero when none qualifies.
    """
    for value in values:
        converted = coerce_decimal(value)
        if converted != 0:
            return converted
    return Decimal("0")


__all__ = ["coerce_decimal", "optional_decimal", "first_nonzero"]
