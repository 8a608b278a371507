"""Use case to list every monthly outflow of a household."""

from datetime import date
from decimal import Decimal

from src.application.use_cases.collections_loader import (
    CollectionsLoader,
    LoadedCollections,
)
from src.domain.models import DateRange, ExpenseItem, ExpenseOverview, PeriodBucket
from src.domain.services.finance import (
    compute_real_estate_totals,
    compute_retirement_totals,
    compute_vehicle_totals,
    goal_monthly_contribution,
    summarize_by_category,
)
from src.domain.services.normalization import (
    Frequency,
    one_time_in_window,
    parse_frequency,
    to_monthly_amount,
)
from src.domain.services.validation import is_usable_range
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal

ITEM_COLLECTIONS = (
    "expenses",
    "loans",
    "bills",
    "retirement_plans",
    "real_estate",
    "vehicles",
    "goals",
)
EXTRA_COLLECTIONS = ("vehicles", "real_estate", "retirement_plans")

SOURCE_LABELS = {
    "expenses": "Expense",
    "loans": "Loan",
    "bills": "Bill",
    "retirement_plans": "Retirement",
    "real_estate": "Real estate",
    "vehicles": "Vehicle",
    "goals": "Financial goal",
}


class GetExpenseBreakdownUseCase:
    """Gather expense-like records into one monthly expense listing."""

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
        today: date | None = None,
    ) -> ExpenseOverview:
        """Return the expense overview for the owner.

        Items come from records created inside the period when one is given.
        Extras (vehicle depreciation, IPVA, IPTU and retirement
        contributions) always cover every record.

        Args:
            owner_id: Owner whose records are read.
            start_date: Optional lower bound on record creation.
            end_date: Optional upper bound on record creation.
            today: Reference date for goal contributions.

        Returns:
            ExpenseOverview: Items, totals, extras and breakdowns.
        """
        today = today or date.today()
        period = None
        if start_date is not None and end_date is not None:
            if not is_usable_range(start_date, end_date):
                return self._overview([], self._extras(LoadedCollections({})))
            period = DateRange(start_date, end_date)

        loaded = self._collections_loader.load(
            owner_id,
            ITEM_COLLECTIONS,
            created_between=period,
        )
        unfiltered = loaded
        if period is not None:
            unfiltered = self._collections_loader.load(owner_id, EXTRA_COLLECTIONS)

        items = self._items(loaded, period, today)
        overview = self._overview(items, self._extras(unfiltered))
        self._logger.info(
            f"Expense overview computed: items={len(items)}, "
            f"total={overview.total}"
        )
        return overview

    def _items(
        self,
        loaded: LoadedCollections,
        period: DateRange | None,
        today: date,
    ) -> list[ExpenseItem]:
        items = []
        for expense in loaded.get("expenses"):
            frequency = parse_frequency(
                expense.frequency,
                self._logger,
                strict=self._strict_frequencies,
            )
            amount = abs(coerce_decimal(expense.amount))
            if frequency is Frequency.ONE_TIME and period is not None:
                amount = one_time_in_window(
                    amount,
                    expense.created_at,
                    PeriodBucket("period", period.start, period.end),
                )
            else:
                amount = to_monthly_amount(amount, frequency)
            items.append(
                ExpenseItem(
                    source="expenses",
                    description=expense.description,
                    amount=amount,
                    category=expense.category or SOURCE_LABELS["expenses"],
                    occurred_on=expense.created_at,
                    recurring=frequency is not Frequency.ONE_TIME,
                )
            )
        for loan in loaded.get("loans"):
            items.append(
                ExpenseItem(
                    source="loans",
                    description=f"{loan.type or 'Loan'} {loan.bank}".strip(),
                    amount=abs(coerce_decimal(loan.monthly_payment)),
                    category=SOURCE_LABELS["loans"],
                    occurred_on=loan.start_date or loan.created_at,
                    recurring=True,
                )
            )
        for bill in loaded.get("bills"):
            items.append(
                ExpenseItem(
                    source="bills",
                    description=bill.name,
                    amount=abs(coerce_decimal(bill.amount)),
                    category=bill.category or SOURCE_LABELS["bills"],
                    occurred_on=bill.next_due or bill.created_at,
                    recurring=bill.is_recurring,
                )
            )
        for plan in loaded.get("retirement_plans"):
            items.append(
                ExpenseItem(
                    source="retirement_plans",
                    description=plan.name,
                    amount=abs(coerce_decimal(plan.monthly_contribution)),
                    category=SOURCE_LABELS["retirement_plans"],
                    occurred_on=plan.created_at,
                    recurring=True,
                )
            )
        for unit in loaded.get("real_estate"):
            items.append(
                ExpenseItem(
                    source="real_estate",
                    description=unit.address or unit.property_type or "",
                    amount=abs(coerce_decimal(unit.monthly_expenses)),
                    category=SOURCE_LABELS["real_estate"],
                    occurred_on=unit.purchase_date or unit.created_at,
                    recurring=True,
                )
            )
        for vehicle in loaded.get("vehicles"):
            items.append(
                ExpenseItem(
                    source="vehicles",
                    description=f"{vehicle.brand} {vehicle.model}".strip(),
                    amount=abs(coerce_decimal(vehicle.monthly_expenses)),
                    category=SOURCE_LABELS["vehicles"],
                    occurred_on=vehicle.purchase_date or vehicle.created_at,
                    recurring=True,
                )
            )
        for goal in loaded.get("goals"):
            items.append(
                ExpenseItem(
                    source="goals",
                    description=goal.name,
                    amount=goal_monthly_contribution(goal, today),
                    category=goal.category or SOURCE_LABELS["goals"],
                    occurred_on=goal.target_date or goal.created_at,
                    recurring=True,
                )
            )
        return items

    @staticmethod
    def _extras(loaded: LoadedCollections) -> dict[str, Decimal]:
        vehicles = compute_vehicle_totals(loaded.get("vehicles"))
        real_estate = compute_real_estate_totals(loaded.get("real_estate"))
        retirement = compute_retirement_totals(loaded.get("retirement_plans"))
        return {
            "vehicle_depreciation": vehicles.depreciation,
            "ipva": vehicles.ipva,
            "iptu": real_estate.iptu,
            "retirement_contributions": retirement.contributions,
        }

    @staticmethod
    def _overview(
        items: list[ExpenseItem],
        extras: dict[str, Decimal],
    ) -> ExpenseOverview:
        return ExpenseOverview(
            items=items,
            total=sum((item.amount for item in items), Decimal("0")),
            extras=extras,
            by_source=summarize_by_category(
                (SOURCE_LABELS[item.source], item.amount) for item in items
            ),
            by_category=summarize_by_category(
                (item.category, item.amount) for item in items
            ),
        )


__all__ = ["ITEM_COLLECTIONS", "EXTRA_COLLECTIONS", "GetExpenseBreakdownUseCase"]
