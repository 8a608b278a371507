"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.finance_repository import FinanceRepositoryPort
from src.application.use_cases.collections_loader import CollectionsLoader
from src.application.use_cases.generate_insights import GenerateInsightsUseCase
from src.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from src.application.use_cases.get_expense_breakdown import (
    GetExpenseBreakdownUseCase,
)
from src.application.use_cases.get_income_breakdown import (
    GetIncomeBreakdownUseCase,
)
from src.application.use_cases.get_wealth_evolution import (
    GetWealthEvolutionUseCase,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.finance_repository import SqlAlchemyFinanceRepository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import FinanceSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_finance_repository(
    db_port: DatabaseEnginePort | None = None,
) -> FinanceRepositoryPort:
    """Return the repository reading household collections."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyFinanceRepository(resolved_db)


def build_collections_loader(
    repository: FinanceRepositoryPort | None = None,
    settings: FinanceSettings | None = None,
) -> CollectionsLoader:
    """Return a loader fetching collections concurrently."""
    resolved_settings = settings or FinanceSettings.from_env()
    return CollectionsLoader(
        repository or build_finance_repository(),
        logger=get_app_logger(),
        max_workers=resolved_settings.max_workers,
    )


def build_dashboard_summary_use_case(
    repository: FinanceRepositoryPort | None = None,
    settings: FinanceSettings | None = None,
) -> GetDashboardSummaryUseCase:
    resolved_settings = settings or FinanceSettings.from_env()
    return GetDashboardSummaryUseCase(
        build_collections_loader(repository, resolved_settings),
        logger=get_app_logger(),
        strict_frequencies=resolved_settings.strict_frequencies,
    )


def build_wealth_evolution_use_case(
    repository: FinanceRepositoryPort | None = None,
    settings: FinanceSettings | None = None,
) -> GetWealthEvolutionUseCase:
    return GetWealthEvolutionUseCase(
        build_collections_loader(repository, settings),
        logger=get_app_logger(),
    )


def build_income_breakdown_use_case(
    repository: FinanceRepositoryPort | None = None,
    settings: FinanceSettings | None = None,
) -> GetIncomeBreakdownUseCase:
    resolved_settings = settings or FinanceSettings.from_env()
    return GetIncomeBreakdownUseCase(
        build_collections_loader(repository, resolved_settings),
        logger=get_app_logger(),
        strict_frequencies=resolved_settings.strict_frequencies,
    )


def build_expense_breakdown_use_case(
    repository: FinanceRepositoryPort | None = None,
    settings: FinanceSettings | None = None,
) -> GetExpenseBreakdownUseCase:
    resolved_settings = settings or FinanceSettings.from_env()
    return GetExpenseBreakdownUseCase(
        build_collections_loader(repository, resolved_settings),
        logger=get_app_logger(),
        strict_frequencies=resolved_settings.strict_frequencies,
    )


def build_insights_use_case(
    repository: FinanceRepositoryPort | None = None,
    settings: FinanceSettings | None = None,
) -> GenerateInsightsUseCase:
    resolved_repository = repository or build_finance_repository()
    return GenerateInsightsUseCase(
        resolved_repository,
        build_collections_loader(resolved_repository, settings),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_finance_repository",
    "build_collections_loader",
    "build_dashboard_summary_use_case",
    "build_wealth_evolution_use_case",
    "build_income_breakdown_use_case",
    "build_expense_breakdown_use_case",
    "build_insights_use_case",
]
