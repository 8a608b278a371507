"""Use case to generate rule-based insights for an owner."""

from datetime import date

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.application.use_cases.collections_loader import CollectionsLoader
from src.domain.models import InsightsReport
from src.domain.services.insights import (
    RECOMMENDATION_TRANSACTION_WINDOW,
    build_insights_report,
)
from src.infrastructure.logging.logger import get_app_logger

INSIGHT_COLLECTIONS = ("bills", "investments", "goals", "bank_accounts")


class GenerateInsightsUseCase:
    """Run the insight and recommendation rules over the owner's data."""

    def __init__(
        self,
        finance_repository: FinanceRepositoryPort,
        collections_loader: CollectionsLoader,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            finance_repository: Port used to read recent transactions.
            collections_loader: Loader fetching the other collections.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._finance_repository = finance_repository
        self._collections_loader = collections_loader
        self._logger = logger or get_app_logger()

    def execute(self, owner_id: str, today: date | None = None) -> InsightsReport:
        """Return insights, recommendations and score.

        A failed transaction read leaves the transaction rules without data
        instead of failing the report.
        """
        loaded = self._collections_loader.load(owner_id, INSIGHT_COLLECTIONS)
        try:
            transactions = self._finance_repository.fetch_transactions(
                owner_id,
                RECOMMENDATION_TRANSACTION_WINDOW,
            )
        except Exception as exc:
            self._logger.error(f"Failed to fetch transactions: {exc}")
            transactions = []

        report = build_insights_report(
            transactions=list(transactions),
            bills=loaded.get("bills"),
            investments=loaded.get("investments"),
            goals=loaded.get("goals"),
            bank_accounts=loaded.get("bank_accounts"),
            today=today or date.today(),
        )
        self._logger.info(
            f"Insights generated: insights={len(report.insights)}, "
            f"recommendations={len(report.recommendations)}, "
            f"score={report.score}"
        )
        return report


__all__ = ["INSIGHT_COLLECTIONS", "GenerateInsightsUseCase"]
