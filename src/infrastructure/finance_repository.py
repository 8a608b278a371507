"""SQLAlchemy-backed repository for household finance collections."""

from datetime import date, datetime, timedelta

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.finance_repository import FinanceRepositoryPort
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
from src.utils.decimal_utils import optional_decimal

TABLE_COLUMNS = {
    "income_sources": (
        "name",
        "amount",
        "frequency",
        "category",
        "is_active",
        "tax_rate",
    ),
    "expenses": (
        "description",
        "amount",
        "frequency",
        "category",
        "is_recurring",
    ),
    "investments": (
        "name",
        "type",
        "amount",
        "quantity",
        "current_price",
        "current_value",
        "purchase_price",
        "dividend_yield",
        "monthly_income",
        "purchase_date",
    ),
    "real_estate": (
        "property_type",
        "address",
        "current_value",
        "purchase_price",
        "rental_income",
        "monthly_expenses",
        "is_rented",
        "iptu",
        "purchase_date",
    ),
    "vehicles": (
        "type",
        "brand",
        "model",
        "year",
        "current_value",
        "purchase_price",
        "monthly_expenses",
        "depreciation",
        "ipva",
        "purchase_date",
    ),
    "exotic_assets": (
        "name",
        "type",
        "current_value",
        "purchase_price",
        "purchase_date",
    ),
    "loans": (
        "type",
        "bank",
        "amount",
        "remaining_amount",
        "monthly_payment",
        "start_date",
    ),
    "bills": (
        "name",
        "company",
        "category",
        "amount",
        "is_active",
        "is_paid",
        "is_recurring",
        "next_due",
    ),
    "retirement_plans": (
        "name",
        "type",
        "current_balance",
        "contribution",
        "monthly_contribution",
    ),
    "financial_goals": (
        "name",
        "description",
        "category",
        "status",
        "current_amount",
        "target_amount",
        "target_date",
    ),
    "bank_accounts": (
        "name",
        "balance",
    ),
}


def _as_date(value) -> date | None:
    """Return the calendar date of a SQL date, timestamp or ISO string."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _as_bool(value, default: bool = False) -> bool:
    if value is None:
        return default
    return bool(value)


class SqlAlchemyFinanceRepository(FinanceRepositoryPort):
    """Repository reading one table per household collection."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the finance engine.
        """
        self._db_port = db_port

    def fetch_income_sources(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[IncomeSourceRecord]:
        rows = self._fetch_rows("income_sources", owner_id, created_between)
        return [
            IncomeSourceRecord(
                id=str(row.id),
                owner_id=str(row.user_id),
                name=row.name or "",
                amount=optional_decimal(row.amount),
                frequency=row.frequency,
                category=row.category,
                is_active=_as_bool(row.is_active, default=True),
                tax_rate=optional_decimal(row.tax_rate),
                created_at=_as_date(row.created_at),
            )
            for row in rows
        ]

    def fetch_expenses(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[ExpenseRecord]:
        rows = self._fetch_rows("expenses", owner_id, created_between)
        return [
            ExpenseRecord(
                id=str(row.id),
                owner_id=str(row.user_id),
                description=row.description or "",
                amount=optional_decimal(row.amount),
                frequency=row.frequency,
                category=row.category,
                is_recurring=_as_bool(row.is_recurring),
                created_at=_as_date(row.created_at),
            )
            for row in rows
        ]

    def fetch_investments(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[InvestmentRecord]:
        rows = self._fetch_rows("investments", owner_id, created_between)
        return [
            InvestmentRecord(
                id=str(row.id),
                owner_id=str(row.user_id),
                name=row.name or "",
                type=row.type,
                amount=optional_decimal(row.amount),
                quantity=optional_decimal(row.quantity),
                current_price=optional_decimal(row.current_price),
                current_value=optional_decimal(row.current_value),
                purchase_price=optional_decimal(row.purchase_price),
                dividend_yield=optional_decimal(row.dividend_yield),
                monthly_income=optional_decimal(row.monthly_income),
                purchase_date=_as_date(row.purchase_date),
                created_at=_as_date(row.created_at),
            )
            for row in rows
        ]

    def fetch_real_estate(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[RealEstateRecord]:
        rows = self._fetch_rows("real_estate", owner_id, created_between)
        return [
            RealEstateRecord(
                id=str(row.id),
                owner_id=str(row.user_id),
                property_type=row.property_type,
                address=row.address or "",
                current_value=optional_decimal(row.current_value),
                purchase_price=optional_decimal(row.purchase_price),
                rental_income=optional_decimal(row.rental_income),
                monthly_expenses=optional_decimal(row.monthly_expenses),
                is_rented=_as_bool(row.is_rented),
                iptu=optional_decimal(row.iptu),
                purchase_date=_as_date(row.purchase_date),
                created_at=_as_date(row.created_at),
            )
            for row in rows
        ]

    def fetch_vehicles(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[VehicleRecord]:
        rows = self._fetch_rows("vehicles", owner_id, created_between)
        return [
            VehicleRecord(
                id=str(row.id),
                owner_id=str(row.user_id),
                type=row.type,
                brand=row.brand or "",
                model=row.model or "",
                year=row.year,
                current_value=optional_decimal(row.current_value),
                purchase_price=optional_decimal(row.purchase_price),
                monthly_expenses=optional_decimal(row.monthly_expenses),
                depreciation=optional_decimal(row.depreciation),
                ipva=optional_decimal(row.ipva),
                purchase_date=_as_date(row.purchase_date),
                created_at=_as_date(row.created_at),
            )
            for row in rows
        ]

    def fetch_exotic_assets(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[ExoticAssetRecord]:
        rows = self._fetch_rows("exotic_assets", owner_id, created_between)
        return [
            ExoticAssetRecord(
                id=str(row.id),
                owner_id=str(row.user_id),
                name=row.name or "",
                type=row.type,
                current_value=optional_decimal(row.current_value),
                purchase_price=optional_decimal(row.purchase_price),
                purchase_date=_as_date(row.purchase_date),
                created_at=_as_date(row.created_at),
            )
            for row in rows
        ]

    def fetch_loans(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[LoanRecord]:
        rows = self._fetch_rows("loans", owner_id, created_between)
        return [
            LoanRecord(
                id=str(row.id),
                owner_id=str(row.user_id),
                type=row.type,
                bank=row.bank or "",
                amount=optional_decimal(row.amount),
                remaining_amount=optional_decimal(row.remaining_amount),
                monthly_payment=optional_decimal(row.monthly_payment),
                start_date=_as_date(row.start_date),
                created_at=_as_date(row.created_at),
            )
            for row in rows
        ]

    def fetch_bills(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[BillRecord]:
        rows = self._fetch_rows("bills", owner_id, created_between)
        return [
            BillRecord(
                id=str(row.id),
                owner_id=str(row.user_id),
                name=row.name or "",
                company=row.company or "",
                category=row.category,
                amount=optional_decimal(row.amount),
                is_active=_as_bool(row.is_active, default=True),
                is_paid=_as_bool(row.is_paid),
                is_recurring=_as_bool(row.is_recurring),
                next_due=_as_date(row.next_due),
                created_at=_as_date(row.created_at),
            )
            for row in rows
        ]

    def fetch_retirement_plans(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[RetirementPlanRecord]:
        rows = self._fetch_rows("retirement_plans", owner_id, created_between)
        return [
            RetirementPlanRecord(
                id=str(row.id),
                owner_id=str(row.user_id),
                name=row.name or "",
                type=row.type,
                current_balance=optional_decimal(row.current_balance),
                contribution=optional_decimal(row.contribution),
                monthly_contribution=optional_decimal(row.monthly_contribution),
                created_at=_as_date(row.created_at),
            )
            for row in rows
        ]

    def fetch_goals(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[FinancialGoalRecord]:
        rows = self._fetch_rows("financial_goals", owner_id, created_between)
        return [
            FinancialGoalRecord(
                id=str(row.id),
                owner_id=str(row.user_id),
                name=row.name or "",
                description=row.description or "",
                category=row.category,
                status=row.status or "active",
                current_amount=optional_decimal(row.current_amount),
                target_amount=optional_decimal(row.target_amount),
                target_date=_as_date(row.target_date),
                created_at=_as_date(row.created_at),
            )
            for row in rows
        ]

    def fetch_bank_accounts(
        self,
        owner_id: str,
        created_between: DateRange | None = None,
    ) -> list[BankAccountRecord]:
        rows = self._fetch_rows("bank_accounts", owner_id, created_between)
        return [
            BankAccountRecord(
                id=str(row.id),
                owner_id=str(row.user_id),
                name=row.name or "",
                balance=optional_decimal(row.balance),
                created_at=_as_date(row.created_at),
            )
            for row in rows
        ]

    def fetch_transactions(
        self,
        owner_id: str,
        limit: int,
    ) -> list[TransactionRecord]:
        query = text(
            """
            SELECT id, user_id, type, amount, category, description, date
            FROM transactions
            WHERE user_id = :owner_id
            ORDER BY date DESC
            LIMIT :limit
            """
        )
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                query,
                {"owner_id": owner_id, "limit": limit},
            ).all()
        return [
            TransactionRecord(
                id=str(row.id),
                owner_id=str(row.user_id),
                type=row.type or "expense",
                amount=optional_decimal(row.amount),
                category=row.category,
                description=row.description or "",
                occurred_on=_as_date(row.date),
            )
            for row in rows
        ]

    def _fetch_rows(
        self,
        table: str,
        owner_id: str,
        created_between: DateRange | None,
    ) -> list:
        query = self._build_query(table, created_between)
        params = self._build_params(owner_id, created_between)
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            return conn.execute(query, params).all()

    @staticmethod
    def _build_query(table: str, created_between: DateRange | None):
        columns = ", ".join(("id", "user_id", *TABLE_COLUMNS[table], "created_at"))
        base_sql = f"""
        SELECT {columns}
        FROM {table}
        WHERE user_id = :owner_id
        """
        if created_between is not None:
            base_sql += (
                " AND created_at >= :start_date AND created_at < :end_before"
            )
        base_sql += " ORDER BY created_at DESC"
        return text(base_sql)

    @staticmethod
    def _build_params(
        owner_id: str,
        created_between: DateRange | None,
    ) -> dict[str, object]:
        params: dict[str, object] = {"owner_id": owner_id}
        if created_between is not None:
            params["start_date"] = created_between.start
            params["end_before"] = created_between.end + timedelta(days=1)
        return params


__all__ = ["TABLE_COLUMNS", "SqlAlchemyFinanceRepository"]
