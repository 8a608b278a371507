"""Tests for the GetDashboardSummaryUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.collections_loader import (
    COLLECTION_FETCHERS,
    CollectionsLoader,
)
from src.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from src.domain.errors import DataStoreUnavailableError
from src.domain.models import (
    ExpenseRecord,
    IncomeSourceRecord,
    InvestmentRecord,
    LoanRecord,
)

TODAY = date(2024, 6, 15)
START = date(2024, 5, 1)
END = date(2024, 5, 31)

BASE = {
    "income_sources": [
        IncomeSourceRecord(id="1", amount=Decimal("3000"), frequency="monthly")
    ],
    "expenses": [
        ExpenseRecord(id="1", amount=Decimal("1200"), frequency="weekly")
    ],
    "investments": [
        InvestmentRecord(id="1", current_value=Decimal("10392"))
    ],
    "loans": [LoanRecord(id="1", remaining_amount=Decimal("7200"))],
}


def _build_repository(
    base: dict,
    period: dict | None = None,
    failing: tuple[str, ...] = (),
    failing_in_period: tuple[str, ...] = (),
) -> MagicMock:
    repository = MagicMock()
    for name, method in COLLECTION_FETCHERS.items():

        def fetch(owner_id, created_between=None, _name=name):
            if created_between is None:
                if _name in failing:
                    raise RuntimeError(f"{_name} down")
                return base.get(_name, [])
            if _name in failing_in_period:
                raise RuntimeError(f"{_name} down")
            return (period or {}).get(_name, [])

        getattr(repository, method).side_effect = fetch
    return repository


def _build_use_case(repository: MagicMock) -> GetDashboardSummaryUseCase:
    logger = MagicMock()
    return GetDashboardSummaryUseCase(
        CollectionsLoader(repository, logger=logger),
        logger=logger,
    )


def test_execute_without_period_returns_general_figures() -> None:
    use_case = _build_use_case(_build_repository(BASE))

    view = use_case.execute("owner-1", today=TODAY)

    summary = view.summary
    assert view.date_filter_applied is False
    assert view.start_date is None
    assert summary.total_monthly_income == Decimal("3000")
    assert summary.total_monthly_expenses == Decimal("5196")
    assert summary.net_monthly_income == Decimal("-2196")
    assert summary.net_worth == Decimal("3192")
    assert summary.ratios.emergency_fund_months == Decimal("2")
    assert summary.ratios.debt_to_income_ratio == Decimal("20")


def test_execute_degrades_failing_collection_to_zero() -> None:
    use_case = _build_use_case(
        _build_repository(BASE, failing=("investments",))
    )

    view = use_case.execute("owner-1", today=TODAY)

    payload = view.to_dict()
    assert payload["totalInvestmentValue"] == 0.0
    assert payload["totalMonthlyIncome"] == 3000.0
    assert payload["warnings"] == ["investments unavailable: investments down"]


def test_execute_raises_when_data_store_is_unavailable() -> None:
    use_case = _build_use_case(
        _build_repository(BASE, failing=tuple(COLLECTION_FETCHERS))
    )

    with pytest.raises(DataStoreUnavailableError):
        use_case.execute("owner-1", today=TODAY)


def test_execute_with_period_recomputes_income_and_expenses() -> None:
    period = {
        "income_sources": [
            IncomeSourceRecord(id="2", amount=Decimal("2000"), frequency="monthly"),
            IncomeSourceRecord(
                id="3",
                amount=Decimal("9999"),
                frequency="monthly",
                is_active=False,
            ),
        ],
        "expenses": [
            ExpenseRecord(id="2", amount=Decimal("1500"), frequency="monthly")
        ],
    }
    use_case = _build_use_case(_build_repository(BASE, period))

    view = use_case.execute("owner-1", START, END, today=TODAY)

    summary = view.summary
    assert view.date_filter_applied is True
    assert view.start_date == START
    assert view.end_date == END
    assert summary.total_monthly_income == Decimal("2000")
    assert summary.total_monthly_expenses == Decimal("1500")
    assert summary.net_monthly_income == Decimal("500")
    assert summary.ratios.savings_rate == Decimal("25")
    assert summary.total_investment_value == Decimal("10392")
    assert summary.net_worth == Decimal("3192")


def test_execute_with_empty_period_falls_back_to_general_figures() -> None:
    use_case = _build_use_case(_build_repository(BASE, period={}))

    view = use_case.execute("owner-1", START, END, today=TODAY)

    assert view.date_filter_applied is False
    assert view.start_date == START
    assert view.summary.total_monthly_income == Decimal("3000")


def test_execute_with_inactive_only_period_falls_back() -> None:
    period = {
        "income_sources": [
            IncomeSourceRecord(id="9", amount=Decimal("10"), is_active=False)
        ]
    }
    use_case = _build_use_case(_build_repository(BASE, period))

    view = use_case.execute("owner-1", START, END, today=TODAY)

    assert view.date_filter_applied is False


def test_execute_with_inverted_period_skips_period_fetch() -> None:
    repository = _build_repository(BASE)
    use_case = _build_use_case(repository)

    view = use_case.execute("owner-1", END, START, today=TODAY)

    assert view.date_filter_applied is False
    assert repository.fetch_income_sources.call_count == 1


def test_execute_with_unavailable_period_falls_back() -> None:
    use_case = _build_use_case(
        _build_repository(
            BASE,
            period={"expenses": [ExpenseRecord(id="5", amount=Decimal("1"))]},
            failing_in_period=("income_sources", "expenses"),
        )
    )

    view = use_case.execute("owner-1", START, END, today=TODAY)

    assert view.date_filter_applied is False
    assert view.summary.total_monthly_expenses == Decimal("5196")
