"""Domain package for business rules and core models."""

from .errors import DataStoreUnavailableError, FinanceError, UnknownFrequencyError
from .models import (
    BucketSnapshot,
    CategoryBreakdown,
    CategoryTotal,
    DashboardSummary,
    DashboardView,
    DateRange,
    PeriodBucket,
)
from .services import (
    Frequency,
    build_dashboard_summary,
    build_period_buckets,
    compute_wealth_evolution,
    summarize_by_category,
)

__all__ = [
    "DataStoreUnavailableError",
    "FinanceError",
    "UnknownFrequencyError",
    "BucketSnapshot",
    "CategoryBreakdown",
    "CategoryTotal",
    "DashboardSummary",
    "DashboardView",
    "DateRange",
    "PeriodBucket",
    "Frequency",
    "build_dashboard_summary",
    "build_period_buckets",
    "compute_wealth_evolution",
    "summarize_by_category",
]
