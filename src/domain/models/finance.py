"""Domain models for financial aggregates."""

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal


def _money(value: Decimal) -> float:
    return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _whole(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar range."""

    start: date
    end: date

    @property
    def is_inverted(self) -> bool:
        return self.start > self.end

    @property
    def days(self) -> int:
        """Return the absolute day distance between both bounds."""
        return abs((self.end - self.start).days)

    def contains(self, value: date | None) -> bool:
        if value is None:
            return False
        return self.start <= value <= self.end


@dataclass(frozen=True)
class CategoryTotal:
    """Summed monthly amount for one category.

    Attributes:
        category: Category label.
        amount: Sum of normalized amounts.
        percentage: Share of the parent total, 0 when the total is 0.
    """

    category: str
    amount: Decimal
    percentage: Decimal

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "amount": _money(self.amount),
            "percentage": float(self.percentage),
        }


@dataclass(frozen=True)
class CategoryBreakdown:
    """Categories sorted by descending amount with their parent total."""

    total: Decimal
    categories: list[CategoryTotal]

    def to_dict(self) -> dict:
        return {
            "total": _money(self.total),
            "categories": [item.to_dict() for item in self.categories],
        }


@dataclass(frozen=True)
class IncomeOverview:
    """Income categories with the estimated monthly tax withheld.

    Attributes:
        breakdown: Monthly income per category.
        estimated_tax: Estimated monthly tax over the same sources.
    """

    breakdown: CategoryBreakdown
    estimated_tax: Decimal

    @property
    def total(self) -> Decimal:
        return self.breakdown.total

    @property
    def categories(self) -> list[CategoryTotal]:
        return self.breakdown.categories

    @property
    def net_total(self) -> Decimal:
        return self.total - self.estimated_tax

    def to_dict(self) -> dict:
        payload = self.breakdown.to_dict()
        payload["estimatedTax"] = _money(self.estimated_tax)
        payload["netTotal"] = _money(self.net_total)
        return payload


@dataclass(frozen=True)
class PeriodBucket:
    """Contiguous time slice of a wealth chart."""

    label: str
    start: date
    end: date


@dataclass(frozen=True)
class BucketSnapshot:
    """Wealth totals for one bucket.

    ``total`` is derived from the four channels so it always equals their sum.
    """

    bucket: PeriodBucket
    investments: Decimal
    real_estate: Decimal
    bank_accounts: Decimal
    other: Decimal

    @property
    def total(self) -> Decimal:
        return (
            self.investments
            + self.real_estate
            + self.bank_accounts
            + self.other
        )

    def to_dict(self) -> dict:
        """Return the chart payload with amounts rounded to whole units."""
        channels = {
            "investments": _whole(self.investments),
            "realEstate": _whole(self.real_estate),
            "bankAccounts": _whole(self.bank_accounts),
            "other": _whole(self.other),
        }
        return {
            "month": self.bucket.label,
            "start": self.bucket.start.isoformat(),
            "end": self.bucket.end.isoformat(),
            "total": sum(channels.values()),
            **channels,
        }


@dataclass(frozen=True)
class FinancialRatios:
    """Derived health indicators, always finite."""

    savings_rate: Decimal
    debt_to_income_ratio: Decimal
    emergency_fund_months: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Aggregated dashboard figures recomputed on every request."""

    total_monthly_income: Decimal
    total_monthly_expenses: Decimal
    net_monthly_income: Decimal
    total_investment_value: Decimal
    total_investment_income: Decimal
    total_real_estate_value: Decimal
    total_rental_income: Decimal
    total_vehicle_value: Decimal
    total_exotic_value: Decimal
    total_retirement_saved: Decimal
    total_debt: Decimal
    total_monthly_debt_payments: Decimal
    total_monthly_bills: Decimal
    total_goal_target: Decimal
    total_goal_saved: Decimal
    total_assets: Decimal
    net_worth: Decimal
    ratios: FinancialRatios

    def to_dict(self) -> dict:
        """Return the camelCase JSON shape consumed by the front end."""
        return {
            "totalMonthlyIncome": _money(self.total_monthly_income),
            "totalMonthlyExpenses": _money(self.total_monthly_expenses),
            "netMonthlyIncome": _money(self.net_monthly_income),
            "totalInvestmentValue": _money(self.total_investment_value),
            "totalInvestmentIncome": _money(self.total_investment_income),
            "totalRealEstateValue": _money(self.total_real_estate_value),
            "totalRentalIncome": _money(self.total_rental_income),
            "totalVehicleValue": _money(self.total_vehicle_value),
            "totalExoticValue": _money(self.total_exotic_value),
            "totalRetirementSaved": _money(self.total_retirement_saved),
            "totalDebt": _money(self.total_debt),
            "totalMonthlyDebtPayments": _money(
                self.total_monthly_debt_payments
            ),
            "totalMonthlyBills": _money(self.total_monthly_bills),
            "totalGoalTarget": _money(self.total_goal_target),
            "totalGoalSaved": _money(self.total_goal_saved),
            "totalAssets": _money(self.total_assets),
            "netWorth": _money(self.net_worth),
            "savingsRate": float(self.ratios.savings_rate),
            "debtToIncomeRatio": float(self.ratios.debt_to_income_ratio),
            "emergencyFundMonths": float(self.ratios.emergency_fund_months),
        }


@dataclass(frozen=True)
class DashboardView:
    """Dashboard summary plus the period indicator shown to the user.

    Attributes:
        summary: Figures to display.
        date_filter_applied: True when income/expense figures come from the
            requested period, False when they fall back to general data.
        start_date: Requested period start.
        end_date: Requested period end.
        warnings: Non-fatal messages about degraded collections.
    """

    summary: DashboardSummary
    date_filter_applied: bool
    start_date: date | None = None
    end_date: date | None = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            **self.summary.to_dict(),
            "dateFilterApplied": self.date_filter_applied,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class ExpenseItem:
    """Monthly outflow line gathered from any expense-like collection."""

    source: str
    description: str
    amount: Decimal
    category: str
    occurred_on: date | None = None
    recurring: bool = False


@dataclass(frozen=True)
class ExpenseOverview:
    """Unified expense listing with totals and breakdowns.

    Attributes:
        items: Expense lines in fetch order.
        total: Sum of ``items``.
        extras: Aggregated costs not listed as items (depreciation, taxes,
            retirement contributions).
        by_source: Breakdown of ``items`` by originating collection.
        by_category: Breakdown of ``items`` by category label.
    """

    items: list[ExpenseItem]
    total: Decimal
    extras: dict[str, Decimal]
    by_source: CategoryBreakdown
    by_category: CategoryBreakdown

    @property
    def total_with_extras(self) -> Decimal:
        return self.total + sum(self.extras.values(), Decimal("0"))


__all__ = [
    "DateRange",
    "CategoryTotal",
    "CategoryBreakdown",
    "IncomeOverview",
    "PeriodBucket",
    "BucketSnapshot",
    "FinancialRatios",
    "DashboardSummary",
    "DashboardView",
    "ExpenseItem",
    "ExpenseOverview",
]
