"""Port for per-collection finance reads."""

from typing import Protocol

from src.domain.models import (
    BankAccountRecord,
    BillRecord,
    DateRange,
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


class FinanceRepositoryPort(Protocol):
    """Port exposing one read per household collection.

    Every fetch is scoped to one owner. ``created_between`` restricts rows to
    those created inside the range, both bounds inclusive.
    """

    def fetch_income_sources(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[IncomeSourceRecord]:
        """Return income sources."""

    def fetch_expenses(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[ExpenseRecord]:
        """Return expenses."""

    def fetch_investments(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[InvestmentRecord]:
        """Return investment positions."""

    def fetch_real_estate(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[RealEstateRecord]:
        """Return real-estate units."""

    def fetch_vehicles(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[VehicleRecord]:
        """Return vehicles."""

    def fetch_exotic_assets(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[ExoticAssetRecord]:
        """Return other assets."""

    def fetch_loans(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[LoanRecord]:
        """Return loans and debts."""

    def fetch_bills(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[BillRecord]:
        """Return bill reminders."""

    def fetch_retirement_plans(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[RetirementPlanRecord]:
        """Return retirement plans."""

    def fetch_goals(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[FinancialGoalRecord]:
        """Return savings goals."""

    def fetch_bank_accounts(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[BankAccountRecord]:
        """Return bank accounts."""

    def fetch_transactions(
        self,
        owner_id: str,
        limit: int,
    ) -> list[TransactionRecord]:
        """Return the most recent transactions, newest first."""


__all__ = ["FinanceRepositoryPort"]
