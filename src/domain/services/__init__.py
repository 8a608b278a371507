"""Domain services package."""

from .finance import (
    build_dashboard_summary,
    compute_ratios,
    estimate_income_tax,
    goal_monthly_contribution,
    summarize_by_category,
    with_income_and_expenses,
)
from .insights import build_insights_report
from .normalization import (
    Frequency,
    asset_value_at,
    normalize_amount,
    one_time_in_window,
    parse_frequency,
    to_monthly_amount,
)
from .periods import build_period_buckets, default_buckets, resolve_preset_range
from .validation import is_usable_range, validate_amount_sign
from .wealth import compute_bucket_snapshot, compute_wealth_evolution

__all__ = [
    "build_dashboard_summary",
    "compute_ratios",
    "estimate_income_tax",
    "goal_monthly_contribution",
    "summarize_by_category",
    "with_income_and_expenses",
    "build_insights_report",
    "Frequency",
    "asset_value_at",
    "normalize_amount",
    "one_time_in_window",
    "parse_frequency",
    "to_monthly_amount",
    "build_period_buckets",
    "default_buckets",
    "resolve_preset_range",
    "is_usable_range",
    "validate_amount_sign",
    "compute_bucket_snapshot",
    "compute_wealth_evolution",
]
