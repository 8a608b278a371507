"""Domain services for finance aggregates.

Every function here is pure: it reduces already-fetched records into totals,
category breakdowns and derived ratios. Ratios are zero-guarded so callers
never receive NaN or infinite values.
"""

from collections.abc import Iterable
from dataclasses import replace
from datetime import date
from decimal import Decimal
from logging import Logger

from src.domain.constants import (
    DAYS_PER_GOAL_MONTH,
    DEFAULT_CATEGORY,
    INCOME_TAX_BRACKETS,
    MONTHS_PER_YEAR,
    TOP_INCOME_TAX_RATE,
)
from src.domain.models import (
    BillRecord,
    CategoryBreakdown,
    CategoryTotal,
    DashboardSummary,
    DebtTotals,
    ExoticAssetRecord,
    ExpenseRecord,
    FinancialGoalRecord,
    FinancialRatios,
    GoalTotals,
    IncomeSourceRecord,
    InvestmentRecord,
    InvestmentTotals,
    LoanRecord,
    RealEstateRecord,
    RealEstateTotals,
    RetirementPlanRecord,
    RetirementTotals,
    VehicleRecord,
    VehicleTotals,
)
from src.domain.services.normalization import normalize_amount
from src.domain.services.validation import validate_amount_sign
from src.utils.decimal_utils import coerce_decimal, first_nonzero

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def summarize_by_category(
    items: Iterable[tuple[str | None, Decimal]],
) -> CategoryBreakdown:
    """Group amounts by category and compute each category's share.

    Args:
        items: ``(category, amount)`` pairs. Empty labels are grouped under
            the default category.

    Returns:
        CategoryBreakdown: Categories sorted by descending amount. Ties keep
        the order in which categories were first seen.
    """
    totals: dict[str, Decimal] = {}
    for category, amount in items:
        label = (category or "").strip() or DEFAULT_CATEGORY
        totals[label] = totals.get(label, ZERO) + coerce_decimal(amount)

    total = sum(totals.values(), ZERO)
    categories = [
        CategoryTotal(
            category=label,
            amount=amount,
            percentage=(amount / total * HUNDRED) if total else ZERO,
        )
        for label, amount in totals.items()
    ]
    categories.sort(key=lambda item: item.amount, reverse=True)
    return CategoryBreakdown(total=total, categories=categories)


def monthly_income_items(
    sources: Iterable[IncomeSourceRecord],
    logger: Logger,
    *,
    strict: bool = False,
    include_one_time: bool = True,
) -> list[tuple[str | None, Decimal]]:
    """Return ``(category, monthly amount)`` for every active income source."""
    items = []
    for source in sources:
        if not source.is_active:
            continue
        amount = coerce_decimal(source.amount)
        validate_amount_sign(f"income source {source.id}", amount, logger)
        items.append(
            (
                source.category,
                normalize_amount(
                    amount,
                    source.frequency,
                    logger,
                    strict=strict,
                    include_one_time=include_one_time,
                ),
            )
        )
    return items


def monthly_expense_items(
    expenses: Iterable[ExpenseRecord],
    logger: Logger,
    *,
    strict: bool = False,
    include_one_time: bool = True,
) -> list[tuple[str | None, Decimal]]:
    """Return ``(category, monthly amount)`` for every expense."""
    items = []
    for expense in expenses:
        amount = coerce_decimal(expense.amount)
        validate_amount_sign(f"expense {expense.id}", amount, logger)
        items.append(
            (
                expense.category,
                normalize_amount(
                    amount,
                    expense.frequency,
                    logger,
                    strict=strict,
                    include_one_time=include_one_time,
                ),
            )
        )
    return items


def compute_income_total(
    sources: Iterable[IncomeSourceRecord],
    logger: Logger,
    *,
    strict: bool = False,
    include_one_time: bool = True,
) -> Decimal:
    """Return the monthly income of the active sources."""
    items = monthly_income_items(
        sources,
        logger,
        strict=strict,
        include_one_time=include_one_time,
    )
    return sum((amount for _, amount in items), ZERO)


def compute_expense_total(
    expenses: Iterable[ExpenseRecord],
    logger: Logger,
    *,
    strict: bool = False,
    include_one_time: bool = True,
) -> Decimal:
    """Return the monthly equivalent of every expense."""
    items = monthly_expense_items(
        expenses,
        logger,
        strict=strict,
        include_one_time=include_one_time,
    )
    return sum((amount for _, amount in items), ZERO)


def investment_current_value(investment: InvestmentRecord) -> Decimal:
    """Return the market value of a position.

    ``quantity * current_price`` when both are known, otherwise the first
    non-zero of current value, current price, purchase price and amount.
    """
    quantity = coerce_decimal(investment.quantity)
    price = coerce_decimal(investment.current_price)
    if quantity and price:
        return quantity * price
    return first_nonzero(
        investment.current_value,
        investment.current_price,
        investment.purchase_price,
        investment.amount,
    )


def investment_entry_value(investment: InvestmentRecord) -> Decimal:
    """Return the valuation of a position at purchase time."""
    return first_nonzero(investment.purchase_price, investment.amount)


def investment_monthly_income(investment: InvestmentRecord) -> Decimal:
    """Return the stored monthly income, or the one implied by the dividend yield."""
    explicit = coerce_decimal(investment.monthly_income)
    if explicit:
        return explicit
    dividend_yield = coerce_decimal(investment.dividend_yield)
    return (
        investment_current_value(investment)
        * dividend_yield
        / HUNDRED
        / MONTHS_PER_YEAR
    )


def compute_investment_totals(
    investments: Iterable[InvestmentRecord],
) -> InvestmentTotals:
    value = ZERO
    monthly_income = ZERO
    count = 0
    for investment in investments:
        value += investment_current_value(investment)
        monthly_income += investment_monthly_income(investment)
        count += 1
    return InvestmentTotals(
        value=value,
        monthly_income=monthly_income,
        count=count,
    )


def real_estate_current_value(unit: RealEstateRecord) -> Decimal:
    return first_nonzero(unit.current_value, unit.purchase_price)


def compute_real_estate_totals(
    units: Iterable[RealEstateRecord],
) -> RealEstateTotals:
    value = ZERO
    rental_income = ZERO
    net_income = ZERO
    monthly_expenses = ZERO
    iptu = ZERO
    for unit in units:
        rent = coerce_decimal(unit.rental_income) if unit.is_rented else ZERO
        expenses = coerce_decimal(unit.monthly_expenses)
        value += real_estate_current_value(unit)
        rental_income += rent
        net_income += rent - expenses
        monthly_expenses += expenses
        if not unit.is_rented:
            iptu += coerce_decimal(unit.iptu)
    return RealEstateTotals(
        value=value,
        rental_income=rental_income,
        net_income=net_income,
        monthly_expenses=monthly_expenses,
        iptu=iptu,
    )


def vehicle_depreciation(vehicle: VehicleRecord) -> Decimal:
    """Return the stored depreciation, or purchase price minus current value."""
    if vehicle.depreciation is not None:
        return coerce_decimal(vehicle.depreciation)
    if vehicle.purchase_price is None or vehicle.current_value is None:
        return ZERO
    return coerce_decimal(vehicle.purchase_price) - coerce_decimal(
        vehicle.current_value
    )


def compute_vehicle_totals(vehicles: Iterable[VehicleRecord]) -> VehicleTotals:
    value = ZERO
    depreciation = ZERO
    ipva = ZERO
    monthly_expenses = ZERO
    for vehicle in vehicles:
        value += first_nonzero(vehicle.current_value, vehicle.purchase_price)
        depreciation += vehicle_depreciation(vehicle)
        ipva += coerce_decimal(vehicle.ipva)
        monthly_expenses += coerce_decimal(vehicle.monthly_expenses)
    return VehicleTotals(
        value=value,
        depreciation=depreciation,
        ipva=ipva,
        monthly_expenses=monthly_expenses,
    )


def compute_exotic_total(assets: Iterable[ExoticAssetRecord]) -> Decimal:
    return sum(
        (
            first_nonzero(asset.current_value, asset.purchase_price)
            for asset in assets
        ),
        ZERO,
    )


def compute_debt_totals(loans: Iterable[LoanRecord]) -> DebtTotals:
    remaining = ZERO
    monthly_payments = ZERO
    for loan in loans:
        remaining += first_nonzero(loan.remaining_amount, loan.amount)
        monthly_payments += coerce_decimal(loan.monthly_payment)
    return DebtTotals(remaining=remaining, monthly_payments=monthly_payments)


def compute_bill_total(bills: Iterable[BillRecord]) -> Decimal:
    """Return the monthly amount of the active bills."""
    return sum(
        (coerce_decimal(bill.amount) for bill in bills if bill.is_active),
        ZERO,
    )


def overdue_bills(bills: Iterable[BillRecord], today: date) -> list[BillRecord]:
    """Return active, unpaid bills whose due date is before ``today``."""
    return [
        bill
        for bill in bills
        if bill.is_active
        and not bill.is_paid
        and bill.next_due is not None
        and bill.next_due < today
    ]


def compute_retirement_totals(
    plans: Iterable[RetirementPlanRecord],
) -> RetirementTotals:
    saved = ZERO
    monthly_contributions = ZERO
    contributions = ZERO
    for plan in plans:
        saved += coerce_decimal(plan.current_balance)
        monthly_contributions += coerce_decimal(plan.monthly_contribution)
        contributions += coerce_decimal(plan.contribution)
    return RetirementTotals(
        saved=saved,
        monthly_contributions=monthly_contributions,
        contributions=contributions,
    )


def goal_monthly_contribution(
    goal: FinancialGoalRecord,
    today: date,
) -> Decimal:
    """Return the monthly saving needed to reach a goal by its target date.

    Months left are counted in 30-day blocks, never fewer than one. Goals
    without a target date spread the remaining amount over one month.
    """
    remaining = coerce_decimal(goal.target_amount) - coerce_decimal(
        goal.current_amount
    )
    months_left = 1
    if goal.target_date is not None:
        days_left = (goal.target_date - today).days
        months_left = max(1, -(-days_left // DAYS_PER_GOAL_MONTH))
    return max(ZERO, remaining / Decimal(months_left))


def compute_goal_totals(
    goals: Iterable[FinancialGoalRecord],
    today: date,
) -> GoalTotals:
    target = ZERO
    saved = ZERO
    monthly_contributions = ZERO
    for goal in goals:
        target += coerce_decimal(goal.target_amount)
        saved += coerce_decimal(goal.current_amount)
        monthly_contributions += goal_monthly_contribution(goal, today)
    return GoalTotals(
        target=target,
        saved=saved,
        monthly_contributions=monthly_contributions,
    )


def net_monthly_income(income: Decimal, expenses: Decimal) -> Decimal:
    return income - expenses


def total_assets(
    investments: Decimal,
    real_estate: Decimal,
    vehicles: Decimal,
    exotic_assets: Decimal,
    retirement_saved: Decimal,
) -> Decimal:
    return investments + real_estate + vehicles + exotic_assets + retirement_saved


def net_worth(assets: Decimal, debt: Decimal) -> Decimal:
    return assets - debt


def savings_rate(income: Decimal, expenses: Decimal) -> Decimal:
    """Return the share of income left after expenses, in percent."""
    if income == 0:
        return ZERO
    return (income - expenses) / income * HUNDRED


def debt_to_income_ratio(total_debt: Decimal, income: Decimal) -> Decimal:
    """Return total debt as a percentage of yearly income."""
    if income == 0:
        return ZERO
    return total_debt / (income * MONTHS_PER_YEAR) * HUNDRED


def emergency_fund_months(
    investment_value: Decimal,
    monthly_expenses: Decimal,
) -> Decimal:
    """Return how many months of expenses the investments cover."""
    if monthly_expenses == 0:
        return ZERO
    return investment_value / monthly_expenses


def compute_ratios(
    income: Decimal,
    expenses: Decimal,
    total_debt: Decimal,
    investment_value: Decimal,
) -> FinancialRatios:
    return FinancialRatios(
        savings_rate=savings_rate(income, expenses),
        debt_to_income_ratio=debt_to_income_ratio(total_debt, income),
        emergency_fund_months=emergency_fund_months(
            investment_value,
            expenses,
        ),
    )


def build_dashboard_summary(
    *,
    income_sources: Iterable[IncomeSourceRecord] = (),
    expenses: Iterable[ExpenseRecord] = (),
    investments: Iterable[InvestmentRecord] = (),
    real_estate: Iterable[RealEstateRecord] = (),
    vehicles: Iterable[VehicleRecord] = (),
    exotic_assets: Iterable[ExoticAssetRecord] = (),
    loans: Iterable[LoanRecord] = (),
    bills: Iterable[BillRecord] = (),
    retirement_plans: Iterable[RetirementPlanRecord] = (),
    goals: Iterable[FinancialGoalRecord] = (),
    today: date,
    logger: Logger,
    strict_frequencies: bool = False,
) -> DashboardSummary:
    """Compute every dashboard total from the fetched collections.

    Args:
        income_sources: Income sources; inactive ones are ignored.
        expenses: Expenses.
        investments: Investment positions.
        real_estate: Real-estate units.
        vehicles: Vehicles.
        exotic_assets: Other assets.
        loans: Debts.
        bills: Bill reminders; inactive ones are ignored.
        retirement_plans: Retirement plans.
        goals: Savings goals.
        today: Reference date for goal contributions.
        logger: Logger used for warnings.
        strict_frequencies: Reject unknown frequencies instead of reading
            them as monthly.

    Returns:
        DashboardSummary: Aggregated totals and ratios.
    """
    income = compute_income_total(
        income_sources,
        logger,
        strict=strict_frequencies,
    )
    expense_total = compute_expense_total(
        expenses,
        logger,
        strict=strict_frequencies,
    )
    investment_totals = compute_investment_totals(investments)
    real_estate_totals = compute_real_estate_totals(real_estate)
    vehicle_totals = compute_vehicle_totals(vehicles)
    exotic_total = compute_exotic_total(exotic_assets)
    debt_totals = compute_debt_totals(loans)
    retirement_totals = compute_retirement_totals(retirement_plans)
    goal_totals = compute_goal_totals(goals, today)

    assets = total_assets(
        investment_totals.value,
        real_estate_totals.value,
        vehicle_totals.value,
        exotic_total,
        retirement_totals.saved,
    )
    return DashboardSummary(
        total_monthly_income=income,
        total_monthly_expenses=expense_total,
        net_monthly_income=net_monthly_income(income, expense_total),
        total_investment_value=investment_totals.value,
        total_investment_income=investment_totals.monthly_income,
        total_real_estate_value=real_estate_totals.value,
        total_rental_income=real_estate_totals.rental_income,
        total_vehicle_value=vehicle_totals.value,
        total_exotic_value=exotic_total,
        total_retirement_saved=retirement_totals.saved,
        total_debt=debt_totals.remaining,
        total_monthly_debt_payments=debt_totals.monthly_payments,
        total_monthly_bills=compute_bill_total(bills),
        total_goal_target=goal_totals.target,
        total_goal_saved=goal_totals.saved,
        total_assets=assets,
        net_worth=net_worth(assets, debt_totals.remaining),
        ratios=compute_ratios(
            income,
            expense_total,
            debt_totals.remaining,
            investment_totals.value,
        ),
    )


def with_income_and_expenses(
    summary: DashboardSummary,
    income: Decimal,
    expenses: Decimal,
) -> DashboardSummary:
    """Return ``summary`` with income and expenses replaced and ratios redone."""
    return replace(
        summary,
        total_monthly_income=income,
        total_monthly_expenses=expenses,
        net_monthly_income=net_monthly_income(income, expenses),
        ratios=compute_ratios(
            income,
            expenses,
            summary.total_debt,
            summary.total_investment_value,
        ),
    )


def income_tax_rate(monthly_amount: Decimal) -> Decimal:
    """Return the withholding rate (percent) for a monthly income."""
    for upper_bound, rate in INCOME_TAX_BRACKETS:
        if monthly_amount <= upper_bound:
            return rate
    return TOP_INCOME_TAX_RATE


def estimate_income_tax(
    amount,
    raw_frequency: str | None,
    rate=None,
    logger: Logger | None = None,
) -> tuple[Decimal, Decimal]:
    """Estimate the tax withheld from an income amount.

    Args:
        amount: Income amount in its own frequency.
        raw_frequency: Frequency of ``amount``.
        rate: Explicit rate in percent; overrides the bracket table.
        logger: Logger used to report unknown frequencies.

    Returns:
        tuple[Decimal, Decimal]: Applied rate and tax on ``amount``.
    """
    value = coerce_decimal(amount)
    if value <= 0:
        return ZERO, ZERO
    explicit = coerce_decimal(rate)
    applied = explicit or income_tax_rate(
        normalize_amount(value, raw_frequency, logger)
    )
    return applied, value * applied / HUNDRED


def compute_income_tax_total(
    sources: Iterable[IncomeSourceRecord],
    logger: Logger,
    *,
    strict: bool = False,
) -> Decimal:
    """Sum the estimated monthly tax of active recurring income sources.

    Each source is taxed on its own monthly equivalent, at its stored
    ``tax_rate`` when set and at the bracket rate otherwise. One-time income
    is left out like in the monthly income breakdown.
    """
    total = ZERO
    for source in sources:
        if not source.is_active:
            continue
        monthly = normalize_amount(
            coerce_decimal(source.amount),
            source.frequency,
            logger,
            strict=strict,
            include_one_time=False,
        )
        _, tax = estimate_income_tax(
            monthly,
            "monthly",
            rate=source.tax_rate,
            logger=logger,
        )
        total += tax
    return total


__all__ = [
    "summarize_by_category",
    "monthly_income_items",
    "monthly_expense_items",
    "compute_income_total",
    "compute_expense_total",
    "investment_current_value",
    "investment_entry_value",
    "investment_monthly_income",
    "compute_investment_totals",
    "real_estate_current_value",
    "compute_real_estate_totals",
    "vehicle_depreciation",
    "compute_vehicle_totals",
    "compute_exotic_total",
    "compute_debt_totals",
    "compute_bill_total",
    "overdue_bills",
    "compute_retirement_totals",
    "goal_monthly_contribution",
    "compute_goal_totals",
    "net_monthly_income",
    "total_assets",
    "net_worth",
    "savings_rate",
    "debt_to_income_ratio",
    "emergency_fund_months",
    "compute_ratios",
    "build_dashboard_summary",
    "with_income_and_expenses",
    "income_tax_rate",
    "estimate_income_tax",
    "compute_income_tax_total",
]
