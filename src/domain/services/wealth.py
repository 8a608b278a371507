"""Wealth evolution over period buckets."""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from src.domain.models import (
    BankAccountRecord,
    BucketSnapshot,
    ExoticAssetRecord,
    InvestmentRecord,
    PeriodBucket,
    RealEstateRecord,
)
from src.domain.services.finance import (
    investment_current_value,
    investment_entry_value,
)
from src.domain.services.normalization import asset_value_at
from src.utils.decimal_utils import coerce_decimal, optional_decimal

ZERO = Decimal("0")


def _sum_present(values: Iterable[Decimal | None]) -> Decimal:
    return sum((value for value in values if value is not None), ZERO)


def _investments_value(
    investments: Iterable[InvestmentRecord],
    window_end: date,
    filter_start: date | None,
) -> Decimal:
    return _sum_present(
        asset_value_at(
            investment_current_value(item),
            investment_entry_value(item),
            item.purchase_date,
            window_end,
            filter_start,
        )
        for item in investments
    )


def _priced_assets_value(
    assets: Iterable[RealEstateRecord | ExoticAssetRecord],
    window_end: date,
    filter_start: date | None,
) -> Decimal:
    return _sum_present(
        asset_value_at(
            optional_decimal(item.current_value),
            optional_decimal(item.purchase_price),
            item.purchase_date,
            window_end,
            filter_start,
        )
        for item in assets
    )


def _bank_accounts_value(
    accounts: Iterable[BankAccountRecord],
    window_end: date,
) -> Decimal:
    return sum(
        (
            coerce_decimal(account.balance)
            for account in accounts
            if account.created_at is None or account.created_at <= window_end
        ),
        ZERO,
    )


def compute_bucket_snapshot(
    bucket: PeriodBucket,
    *,
    investments: Sequence[InvestmentRecord] = (),
    real_estate: Sequence[RealEstateRecord] = (),
    bank_accounts: Sequence[BankAccountRecord] = (),
    exotic_assets: Sequence[ExoticAssetRecord] = (),
    filter_start: date | None = None,
) -> BucketSnapshot:
    """Compute the wealth held at the end of one bucket.

    Args:
        bucket: Bucket to evaluate, already clipped to the requested range.
        investments: Investment positions.
        real_estate: Real-estate units.
        bank_accounts: Bank accounts, valued at their current balance.
        exotic_assets: Other assets, reported in the ``other`` channel.
        filter_start: Start of the requested range, or None for the
            unfiltered chart.

    Returns:
        BucketSnapshot: Per-channel totals for ``bucket``.
    """
    return BucketSnapshot(
        bucket=bucket,
        investments=_investments_value(investments, bucket.end, filter_start),
        real_estate=_priced_assets_value(real_estate, bucket.end, filter_start),
        bank_accounts=_bank_accounts_value(bank_accounts, bucket.end),
        other=_priced_assets_value(exotic_assets, bucket.end, filter_start),
    )


def compute_wealth_evolution(
    buckets: Iterable[PeriodBucket],
    *,
    investments: Sequence[InvestmentRecord] = (),
    real_estate: Sequence[RealEstateRecord] = (),
    bank_accounts: Sequence[BankAccountRecord] = (),
    exotic_assets: Sequence[ExoticAssetRecord] = (),
    filter_start: date | None = None,
) -> list[BucketSnapshot]:
    """Return one snapshot per bucket, in bucket order."""
    return [
        compute_bucket_snapshot(
            bucket,
            investments=investments,
            real_estate=real_estate,
            bank_accounts=bank_accounts,
            exotic_assets=exotic_assets,
            filter_start=filter_start,
        )
        for bucket in buckets
    ]


__all__ = ["compute_bucket_snapshot", "compute_wealth_evolution"]
