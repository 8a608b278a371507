"""Domain models package."""

from .finance import (
    BucketSnapshot,
    CategoryBreakdown,
    CategoryTotal,
    DashboardSummary,
    DashboardView,
    DateRange,
    ExpenseItem,
    ExpenseOverview,
    FinancialRatios,
    IncomeOverview,
    PeriodBucket,
)
from .groups import (
    DebtTotals,
    GoalTotals,
    InvestmentTotals,
    RealEstateTotals,
    RetirementTotals,
    VehicleTotals,
)
from .insights import Insight, InsightsReport, Recommendation
from .records import (
    BankAccountRecord,
    BillRecord,
    ExoticAssetRecord,
    ExpenseRecord,
    FinancialGoalRecord,
    IncomeSourceRecord,
    InvestmentRecord,
    LoanRecord,
    RealEstateRecord,
    RetirementPlanRecord,
    TransactionRecord,
    VehicleRecord,
)

__all__ = [
    "BucketSnapshot",
    "CategoryBreakdown",
    "CategoryTotal",
    "DashboardSummary",
    "DashboardView",
    "DateRange",
    "ExpenseItem",
    "ExpenseOverview",
    "FinancialRatios",
    "IncomeOverview",
    "PeriodBucket",
    "DebtTotals",
    "GoalTotals",
    "InvestmentTotals",
    "RealEstateTotals",
    "RetirementTotals",
    "VehicleTotals",
    "Insight",
    "InsightsReport",
    "Recommendation",
    "BankAccountRecord",
    "BillRecord",
    "ExoticAssetRecord",
    "ExpenseRecord",
    "FinancialGoalRecord",
    "IncomeSourceRecord",
    "InvestmentRecord",
    "LoanRecord",
    "RealEstateRecord",
    "RetirementPlanRecord",
    "TransactionRecord",
    "VehicleRecord",
]
