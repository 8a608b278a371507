"""Domain constants for household finance aggregation."""

from decimal import Decimal

WEEKS_PER_MONTH = Decimal("4.33")
MONTHS_PER_YEAR = Decimal("12")
DAYS_PER_GOAL_MONTH = 30

MONTHLY_GRANULARITY_MAX_DAYS = 365
SEMESTER_MONTHS = 6
DEFAULT_TRAILING_MONTHS = 6

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

WEALTH_CHANNELS = (
    "investments",
    "real_estate",
    "bank_accounts",
    "other",
)

# Monthly income upper bound -> withholding rate (percent).
INCOME_TAX_BRACKETS = (
    (Decimal("2259.20"), Decimal("0")),
    (Decimal("2826.65"), Decimal("7.5")),
    (Decimal("3751.05"), Decimal("15")),
    (Decimal("4664.68"), Decimal("22.5")),
)
TOP_INCOME_TAX_RATE = Decimal("27.5")

DEFAULT_CATEGORY = "Other"


__all__ = [
    "WEEKS_PER_MONTH",
    "MONTHS_PER_YEAR",
    "DAYS_PER_GOAL_MONTH",
    "MONTHLY_GRANULARITY_MAX_DAYS",
    "SEMESTER_MONTHS",
    "DEFAULT_TRAILING_MONTHS",
    "MONTH_ABBREVIATIONS",
    "WEALTH_CHANNELS",
    "INCOME_TAX_BRACKETS",
    "TOP_INCOME_TAX_RATE",
    "DEFAULT_CATEGORY",
]
