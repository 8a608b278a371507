"""Tests for the SqlAlchemyFinanceRepository."""

from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from src.domain.models import DateRange
from src.infrastructure.finance_repository import SqlAlchemyFinanceRepository


class _FakeResult:
    def __init__(self, rows: list[SimpleNamespace]) -> None:
        self._rows = rows

    def all(self):
        return self._rows


def _build_db_port(rows: list[SimpleNamespace]) -> tuple[MagicMock, MagicMock]:
    engine = MagicMock()
    conn = MagicMock()
    context = MagicMock()
    context.__enter__.return_value = conn
    engine.connect.return_value = context
    conn.execute.return_value = _FakeResult(rows)

    db_port = MagicMock()
    db_port.get_finance_engine.return_value = engine
    return db_port, conn


def _executed_sql(conn: MagicMock) -> str:
    return str(conn.execute.call_args.args[0])


def test_fetch_investments_maps_rows() -> None:
    """Rows should become records with Decimal amounts and plain dates."""
    row = SimpleNamespace(
        id=7,
        user_id="owner-1",
        name="ACME",
        type="stocks",
        amount="1000.50",
        quantity=Decimal("10"),
        current_price=Decimal("50"),
        current_value=None,
        purchase_price=Decimal("40"),
        dividend_yield=None,
        monthly_income=None,
        purchase_date="2023-01-01",
        created_at=datetime(2023, 1, 2, 10, 30),
    )
    db_port, conn = _build_db_port([row])
    repository = SqlAlchemyFinanceRepository(db_port)

    records = repository.fetch_investments("owner-1")

    record = records[0]
    assert record.id == "7"
    assert record.amount == Decimal("1000.50")
    assert record.current_value is None
    assert record.purchase_date == date(2023, 1, 1)
    assert record.created_at == date(2023, 1, 2)
    sql = _executed_sql(conn)
    assert "FROM investments" in sql
    assert "created_at >=" not in sql
    assert conn.execute.call_args.args[1] == {"owner_id": "owner-1"}


def test_fetch_with_range_filters_on_creation_date() -> None:
    db_port, conn = _build_db_port([])
    repository = SqlAlchemyFinanceRepository(db_port)

    repository.fetch_expenses(
        "owner-1",
        DateRange(date(2024, 1, 1), date(2024, 1, 31)),
    )

    sql = _executed_sql(conn)
    assert "FROM expenses" in sql
    assert "created_at >= :start_date AND created_at < :end_before" in sql
    assert conn.execute.call_args.args[1] == {
        "owner_id": "owner-1",
        "start_date": date(2024, 1, 1),
        "end_before": date(2024, 2, 1),
    }


def test_fetch_income_sources_defaults_missing_flags() -> None:
    row = SimpleNamespace(
        id="a",
        user_id="owner-1",
        name=None,
        amount=None,
        frequency="monthly",
        category=None,
        is_active=None,
        tax_rate="",
        created_at=None,
    )
    db_port, _ = _build_db_port([row])

    record = SqlAlchemyFinanceRepository(db_port).fetch_income_sources("owner-1")[0]

    assert record.name == ""
    assert record.amount is None
    assert record.is_active is True
    assert record.tax_rate is None
    assert record.created_at is None


def test_fetch_goals_reads_financial_goals_table() -> None:
    row = SimpleNamespace(
        id=1,
        user_id="owner-1",
        name="Trip",
        description=None,
        category=None,
        status=None,
        current_amount=Decimal("100"),
        target_amount=Decimal("1000"),
        target_date=date(2024, 12, 31),
        created_at="not a date",
    )
    db_port, conn = _build_db_port([row])

    record = SqlAlchemyFinanceRepository(db_port).fetch_goals("owner-1")[0]

    assert "FROM financial_goals" in _executed_sql(conn)
    assert record.status == "active"
    assert record.target_date == date(2024, 12, 31)
    assert record.created_at is None


def test_fetch_transactions_limits_rows() -> None:
    row = SimpleNamespace(
        id=1,
        user_id="owner-1",
        type=None,
        amount=Decimal("25"),
        category="Food",
        description=None,
        date=date(2024, 3, 1),
    )
    db_port, conn = _build_db_port([row])

    records = SqlAlchemyFinanceRepository(db_port).fetch_transactions(
        "owner-1",
        100,
    )

    assert records[0].type == "expense"
    assert records[0].occurred_on == date(2024, 3, 1)
    assert "LIMIT :limit" in _executed_sql(conn)
    assert conn.execute.call_args.args[1] == {"owner_id": "owner-1", "limit": 100}
