"""Tests for the GetWealthEvolutionUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.collections_loader import CollectionsLoader
from src.application.use_cases.get_wealth_evolution import (
    GetWealthEvolutionUseCase,
)
from src.domain.models import (
    BankAccountRecord,
    InvestmentRecord,
    RealEstateRecord,
)


def _build_repository() -> MagicMock:
    repository = MagicMock()
    repository.fetch_investments.return_value = [
        InvestmentRecord(
            id="1",
            current_value=Decimal("1000"),
            purchase_price=Decimal("800"),
            purchase_date=date(2024, 2, 1),
        )
    ]
    repository.fetch_real_estate.return_value = [
        RealEstateRecord(
            id="1",
            current_value=Decimal("200000"),
            purchase_price=Decimal("150000"),
            purchase_date=date(2020, 1, 1),
        )
    ]
    repository.fetch_bank_accounts.return_value = [
        BankAccountRecord(id="1", balance=Decimal("2500"))
    ]
    repository.fetch_exotic_assets.return_value = []
    return repository


def _build_use_case(repository: MagicMock) -> GetWealthEvolutionUseCase:
    logger = MagicMock()
    return GetWealthEvolutionUseCase(
        CollectionsLoader(repository, logger=logger),
        logger=logger,
    )


def test_execute_without_period_covers_trailing_six_months() -> None:
    use_case = _build_use_case(_build_repository())

    snapshots = use_case.execute("owner-1", today=date(2024, 3, 15))

    payloads = [snapshot.to_dict() for snapshot in snapshots]
    assert [item["month"] for item in payloads] == [
        "Oct",
        "Nov",
        "Dec",
        "Jan",
        "Feb",
        "Mar",
    ]
    assert [item["investments"] for item in payloads] == [
        0,
        0,
        0,
        0,
        1000,
        1000,
    ]
    assert all(item["realEstate"] == 200000 for item in payloads)
    assert all(item["bankAccounts"] == 2500 for item in payloads)


def test_execute_with_period_values_new_assets_at_purchase_price() -> None:
    use_case = _build_use_case(_build_repository())

    snapshots = use_case.execute(
        "owner-1",
        date(2024, 1, 15),
        date(2024, 3, 10),
    )

    assert [snapshot.bucket.label for snapshot in snapshots] == [
        "Jan",
        "Feb",
        "Mar",
    ]
    assert snapshots[0].bucket.start == date(2024, 1, 15)
    assert [snapshot.investments for snapshot in snapshots] == [
        Decimal("0"),
        Decimal("800"),
        Decimal("800"),
    ]
    assert snapshots[-1].real_estate == Decimal("200000")
    assert snapshots[-1].total == Decimal("203300")


def test_execute_with_inverted_period_returns_empty_without_fetching() -> None:
    repository = _build_repository()
    use_case = _build_use_case(repository)

    snapshots = use_case.execute(
        "owner-1",
        date(2024, 3, 10),
        date(2024, 1, 15),
    )

    assert snapshots == []
    repository.fetch_investments.assert_not_called()


def test_execute_zeroes_failed_channel() -> None:
    repository = _build_repository()
    repository.fetch_investments.side_effect = RuntimeError("timeout")
    use_case = _build_use_case(repository)

    snapshots = use_case.execute("owner-1", today=date(2024, 3, 15))

    assert all(item.investments == Decimal("0") for item in snapshots)
    assert snapshots[-1].bank_accounts == Decimal("2500")


def test_execute_emits_zeroed_buckets_when_every_asset_collection_fails() -> None:
    repository = _build_repository()
    for fetcher in (
        repository.fetch_investments,
        repository.fetch_real_estate,
        repository.fetch_bank_accounts,
        repository.fetch_exotic_assets,
    ):
        fetcher.side_effect = RuntimeError("connection reset")
    logger = MagicMock()
    use_case = GetWealthEvolutionUseCase(
        CollectionsLoader(repository, logger=logger),
        logger=logger,
    )

    snapshots = use_case.execute("owner-1", today=date(2024, 3, 15))

    assert len(snapshots) == 6
    assert all(snapshot.total == Decimal("0") for snapshot in snapshots)
    assert any(
        "charting zeroed wealth" in call.args[0]
        for call in logger.warning.call_args_list
    )
