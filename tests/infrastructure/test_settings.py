"""Tests for infrastructure settings."""

import pytest

from src.infrastructure import settings as settings_module
from src.infrastructure.settings import FinanceSettings

_ENV_VARS = (
    "FINANCE_CURRENCY",
    "FINANCE_MAX_WORKERS",
    "FINANCE_STRICT_FREQUENCIES",
    "FINANCE_DEFAULT_RANGE",
    "FINANCE_OWNER_ID",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults() -> None:
    """Missing variables should produce the default settings."""
    settings = FinanceSettings.from_env()

    assert settings == FinanceSettings()
    assert settings.currency == "BRL"
    assert settings.max_workers == 8
    assert settings.strict_frequencies is False
    assert settings.default_range == "30days"
    assert settings.owner_id is None


def test_from_env_reads_values(monkeypatch) -> None:
    monkeypatch.setenv("FINANCE_CURRENCY", " usd ")
    monkeypatch.setenv("FINANCE_MAX_WORKERS", "3")
    monkeypatch.setenv("FINANCE_STRICT_FREQUENCIES", "Yes")
    monkeypatch.setenv("FINANCE_DEFAULT_RANGE", "thisYear")
    monkeypatch.setenv("FINANCE_OWNER_ID", " owner-1 ")

    settings = FinanceSettings.from_env()

    assert settings == FinanceSettings(
        currency="USD",
        max_workers=3,
        strict_frequencies=True,
        default_range="thisYear",
        owner_id="owner-1",
    )


@pytest.mark.parametrize("raw_value", ["many", "0", "-2"])
def test_from_env_rejects_invalid_worker_count(monkeypatch, raw_value) -> None:
    monkeypatch.setenv("FINANCE_MAX_WORKERS", raw_value)

    assert FinanceSettings.from_env().max_workers == 8


def test_from_env_rejects_unknown_range(monkeypatch) -> None:
    monkeypatch.setenv("FINANCE_DEFAULT_RANGE", "forever")

    assert FinanceSettings.from_env().default_range == "30days"
