"""Use case to compose the dashboard summary for an owner."""

from datetime import date

from src.application.use_cases.collections_loader import CollectionsLoader
from src.domain.errors import DataStoreUnavailableError
from src.domain.models import DashboardView, DateRange
from src.domain.services.finance import (
    build_dashboard_summary,
    compute_expense_total,
    compute_income_total,
    with_income_and_expenses,
)
from src.domain.services.validation import is_usable_range
from src.infrastructure.logging.logger import get_app_logger

DASHBOARD_COLLECTIONS = (
    "income_sources",
    "expenses",
    "investments",
    "real_estate",
    "vehicles",
    "exotic_assets",
    "loans",
    "bills",
    "retirement_plans",
    "goals",
)
PERIOD_COLLECTIONS = ("income_sources", "expenses")


class GetDashboardSummaryUseCase:
    """Compute dashboard figures with an optional period for income/expenses."""

    def __init__(
        self,
        collections_loader: CollectionsLoader,
        logger=None,
        strict_frequencies: bool = False,
    ) -> None:
        """Initialize the use case.

        Args:
            collections_loader: Loader fetching collections concurrently.
            logger: Optional logger compatible with logging.Logger-like API.
            strict_frequencies: Reject unknown frequencies instead of
                reading them as monthly.
        """
        self._collections_loader = collections_loader
        self._logger = logger or get_app_logger()
        self._strict_frequencies = strict_frequencies

    def execute(
        self,
        owner_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
        today: date | None = None,
    ) -> DashboardView:
        """Return the dashboard view for the owner.

        The unfiltered pass always runs and provides assets, debts and net
        worth. When a period is given, income and expense figures are
        recomputed from records created inside it. A period without any
        such record falls back to the general figures.

        Args:
            owner_id: Owner whose records are aggregated.
            start_date: Optional period start.
            end_date: Optional period end.
            today: Reference date for goal contributions.

        Returns:
            DashboardView: Summary, period indicator and warnings.

        Raises:
            DataStoreUnavailableError: If no collection could be read.
        """
        today = today or date.today()
        base = self._collections_loader.load(owner_id, DASHBOARD_COLLECTIONS)
        summary = build_dashboard_summary(
            income_sources=base.get("income_sources"),
            expenses=base.get("expenses"),
            investments=base.get("investments"),
            real_estate=base.get("real_estate"),
            vehicles=base.get("vehicles"),
            exotic_assets=base.get("exotic_assets"),
            loans=base.get("loans"),
            bills=base.get("bills"),
            retirement_plans=base.get("retirement_plans"),
            goals=base.get("goals"),
            today=today,
            logger=self._logger,
            strict_frequencies=self._strict_frequencies,
        )
        warnings = list(base.warnings)

        if start_date is None or end_date is None:
            return DashboardView(
                summary=summary,
                date_filter_applied=False,
                warnings=warnings,
            )

        view = DashboardView(
            summary=summary,
            date_filter_applied=False,
            start_date=start_date,
            end_date=end_date,
            warnings=warnings,
        )
        if not is_usable_range(start_date, end_date):
            self._logger.warning(
                f"Ignoring inverted period {start_date} > {end_date}"
            )
            return view

        try:
            period = self._collections_loader.load(
                owner_id,
                PERIOD_COLLECTIONS,
                created_between=DateRange(start_date, end_date),
            )
        except DataStoreUnavailableError as exc:
            self._logger.warning(
                f"Period data unavailable, using general data: {exc}"
            )
            return view

        income_sources = [
            source for source in period.get("income_sources") if source.is_active
        ]
        expenses = period.get("expenses")
        warnings.extend(period.warnings)
        if not income_sources and not expenses:
            self._logger.info(
                f"No income or expenses between {start_date} and {end_date}, "
                "using general data"
            )
            return view

        income = compute_income_total(
            income_sources,
            self._logger,
            strict=self._strict_frequencies,
        )
        expense_total = compute_expense_total(
            expenses,
            self._logger,
            strict=self._strict_frequencies,
        )
        self._logger.info(
            f"Period figures computed: income={income}, expenses={expense_total}"
        )
        return DashboardView(
            summary=with_income_and_expenses(summary, income, expense_total),
            date_filter_applied=True,
            start_date=start_date,
            end_date=end_date,
            warnings=warnings,
        )


__all__ = [
    "DASHBOARD_COLLECTIONS",
    "PERIOD_COLLECTIONS",
    "GetDashboardSummaryUseCase",
]
