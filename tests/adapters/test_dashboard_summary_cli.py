"""Tests for the dashboard summary CLI adapter."""

from datetime import date
from decimal import Decimal
import json
from unittest.mock import MagicMock

from src.adapters import dashboard_summary_cli
from src.application.use_cases.collections_loader import COLLECTION_FETCHERS
from src.domain.errors import DataStoreUnavailableError, UnknownFrequencyError
from src.domain.models import IncomeSourceRecord
from src.infrastructure.settings import FinanceSettings


def _build_repository() -> MagicMock:
    repository = MagicMock()
    for method in COLLECTION_FETCHERS.values():
        getattr(repository, method).return_value = []
    repository.fetch_income_sources.return_value = [
        IncomeSourceRecord(id="1", amount=Decimal("3000"), frequency="monthly")
    ]
    return repository


def test_parse_date_warns_on_invalid_value() -> None:
    logger = MagicMock()

    assert dashboard_summary_cli._parse_date("2024-02-30", logger) is None
    assert dashboard_summary_cli._parse_date("2024-02-29", logger) == date(
        2024, 2, 29
    )
    assert dashboard_summary_cli._parse_date(None, logger) is None
    logger.warning.assert_called_once()


def test_build_payload_combines_summary_and_wealth() -> None:
    payload = dashboard_summary_cli.build_payload(
        "owner-1",
        date(2024, 1, 1),
        date(2024, 3, 31),
        FinanceSettings(currency="USD"),
        repository=_build_repository(),
    )

    assert payload["currency"] == "USD"
    assert payload["summary"]["dateFilterApplied"] is True
    assert payload["summary"]["totalMonthlyIncome"] == 3000.0
    assert [item["month"] for item in payload["wealthEvolution"]] == [
        "Jan",
        "Feb",
        "Mar",
    ]


def test_main_prints_json(monkeypatch, capsys) -> None:
    monkeypatch.setattr(
        dashboard_summary_cli.FinanceSettings,
        "from_env",
        classmethod(lambda cls: cls(owner_id="owner-1")),
    )
    monkeypatch.setenv("SUMMARY_START_DATE", "2024-01-01")
    monkeypatch.setenv("SUMMARY_END_DATE", "2024-01-31")
    captured = {}

    def fake_build_payload(owner_id, start_date, end_date, settings):
        captured["args"] = (owner_id, start_date, end_date)
        return {"currency": settings.currency}

    monkeypatch.setattr(dashboard_summary_cli, "build_payload", fake_build_payload)

    dashboard_summary_cli.main()

    assert captured["args"] == ("owner-1", date(2024, 1, 1), date(2024, 1, 31))
    assert json.loads(capsys.readouterr().out) == {"currency": "BRL"}


def test_main_requires_owner(monkeypatch, capsys) -> None:
    logger = MagicMock()
    monkeypatch.setattr(dashboard_summary_cli, "get_app_logger", lambda: logger)
    monkeypatch.setattr(
        dashboard_summary_cli.FinanceSettings,
        "from_env",
        classmethod(lambda cls: cls()),
    )

    dashboard_summary_cli.main()

    assert capsys.readouterr().out == ""
    logger.warning.assert_called_once()


def test_main_logs_unavailable_data_store(monkeypatch, capsys) -> None:
    logger = MagicMock()
    monkeypatch.setattr(dashboard_summary_cli, "get_app_logger", lambda: logger)
    monkeypatch.setattr(
        dashboard_summary_cli.FinanceSettings,
        "from_env",
        classmethod(lambda cls: cls(owner_id="owner-1")),
    )
    monkeypatch.delenv("SUMMARY_START_DATE", raising=False)
    monkeypatch.delenv("SUMMARY_END_DATE", raising=False)

    def failing_build_payload(*args):
        raise DataStoreUnavailableError({"loans": "down"})

    monkeypatch.setattr(
        dashboard_summary_cli,
        "build_payload",
        failing_build_payload,
    )

    dashboard_summary_cli.main()

    assert capsys.readouterr().out == ""
    logger.error.assert_called_once()


def test_main_logs_malformed_frequency_in_strict_mode(monkeypatch, capsys) -> None:
    logger = MagicMock()
    repository = _build_repository()
    repository.fetch_income_sources.return_value = [
        IncomeSourceRecord(id="1", amount=Decimal("3000"), frequency="fortnightly")
    ]
    monkeypatch.setattr(dashboard_summary_cli, "get_app_logger", lambda: logger)
    monkeypatch.setattr(
        dashboard_summary_cli.FinanceSettings,
        "from_env",
        classmethod(lambda cls: cls(owner_id="owner-1", strict_frequencies=True)),
    )
    monkeypatch.setattr(
        dashboard_summary_cli,
        "build_finance_repository",
        lambda: repository,
    )
    monkeypatch.delenv("SUMMARY_START_DATE", raising=False)
    monkeypatch.delenv("SUMMARY_END_DATE", raising=False)

    dashboard_summary_cli.main()

    assert capsys.readouterr().out == ""
    logger.error.assert_called_once()
    assert "fortnightly" in logger.error.call_args.args[0]
