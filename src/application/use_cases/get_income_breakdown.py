"""Use case to break income down by category."""

from datetime import date
from decimal import Decimal

from src.application.use_cases.collections_loader import CollectionsLoader
from src.domain.models import CategoryBreakdown, DateRange, IncomeOverview
from src.domain.services.finance import (
    compute_income_tax_total,
    monthly_income_items,
    summarize_by_category,
)
from src.domain.services.validation import is_usable_range
from src.infrastructure.logging.logger import get_app_logger


class GetIncomeBreakdownUseCase:
    """Compute the monthly income of active sources per category.

    One-time income does not recur, so it contributes nothing to the
    monthly breakdown nor to the estimated tax.
    """

    def __init__(
        self,
        collections_loader: CollectionsLoader,
        logger=None,
        strict_frequencies: bool = False,
    ) -> None:
        self._collections_loader = collections_loader
        self._logger = logger or get_app_logger()
        self._strict_frequencies = strict_frequencies

    def execute(
        self,
        owner_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> IncomeOverview:
        """Return income categories and the estimated monthly tax.

        Args:
            owner_id: Owner whose income sources are read.
            start_date: Optional lower bound on source creation.
            end_date: Optional upper bound on source creation.

        Returns:
            IncomeOverview: Categories sorted by descending monthly amount
            with their share of total income, plus the estimated tax.
        """
        created_between = None
        if start_date is not None and end_date is not None:
            if not is_usable_range(start_date, end_date):
                return IncomeOverview(
                    breakdown=CategoryBreakdown(total=Decimal("0"), categories=[]),
                    estimated_tax=Decimal("0"),
                )
            created_between = DateRange(start_date, end_date)

        loaded = self._collections_loader.load(
            owner_id,
            ("income_sources",),
            created_between=created_between,
        )
        sources = loaded.get("income_sources")
        breakdown = summarize_by_category(
            monthly_income_items(
                sources,
                self._logger,
                strict=self._strict_frequencies,
                include_one_time=False,
            )
        )
        estimated_tax = compute_income_tax_total(
            sources,
            self._logger,
            strict=self._strict_frequencies,
        )
        self._logger.info(
            f"Income breakdown computed: total={breakdown.total}, "
            f"categories={len(breakdown.categories)}, tax={estimated_tax}"
        )
        return IncomeOverview(breakdown=breakdown, estimated_tax=estimated_tax)


__all__ = ["GetIncomeBreakdownUseCase"]
