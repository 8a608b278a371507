"""Application use cases package."""

from .collections_loader import CollectionsLoader, LoadedCollections
from .generate_insights import GenerateInsightsUseCase
from .get_dashboard_summary import GetDashboardSummaryUseCase
from .get_expense_breakdown import GetExpenseBreakdownUseCase
from .get_income_breakdown import GetIncomeBreakdownUseCase
from .get_wealth_evolution import GetWealthEvolutionUseCase
from .latest_request import LatestRequestGate, RequestTicket

__all__ = [
    "CollectionsLoader",
    "LoadedCollections",
    "GenerateInsightsUseCase",
    "GetDashboardSummaryUseCase",
    "GetExpenseBreakdownUseCase",
    "GetIncomeBreakdownUseCase",
    "GetWealthEvolutionUseCase",
    "LatestRequestGate",
    "RequestTicket",
]
