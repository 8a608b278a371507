"""Use case to compute the wealth evolution chart."""

from datetime import date

from src.application.use_cases.collections_loader import (
    CollectionsLoader,
    LoadedCollections,
)
from src.domain.errors import DataStoreUnavailableError
from src.domain.models import BucketSnapshot
from src.domain.services.periods import build_period_buckets, default_buckets
from src.domain.services.wealth import compute_wealth_evolution
from src.infrastructure.logging.logger import get_app_logger

WEALTH_COLLECTIONS = (
    "investments",
    "real_estate",
    "bank_accounts",
    "exotic_assets",
)


class GetWealthEvolutionUseCase:
    """Compute wealth snapshots for each bucket of a period."""

    def __init__(
        self,
        collections_loader: CollectionsLoader,
        logger=None,
    ) -> None:
        self._collections_loader = collections_loader
        self._logger = logger or get_app_logger()

    def execute(
        self,
        owner_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
        today: date | None = None,
    ) -> list[BucketSnapshot]:
        """Return one snapshot per bucket.

        Without a period the chart covers the trailing six months at current
        valuations. Asset collections are read once and shared by every
        bucket; a failed collection zeroes its channel in all of them. When
        every asset collection fails the buckets are still emitted, zeroed.

        Args:
            owner_id: Owner whose assets are charted.
            start_date: Optional period start.
            end_date: Optional period end.
            today: Reference date for the unfiltered chart.

        Returns:
            list[BucketSnapshot]: Snapshots in chronological order, empty for
            an inverted period.
        """
        filtered = start_date is not None and end_date is not None
        if filtered:
            buckets = build_period_buckets(start_date, end_date)
        else:
            buckets = default_buckets(today or date.today())
        if not buckets:
            self._logger.info(
                f"No wealth buckets for {start_date} - {end_date}"
            )
            return []

        try:
            loaded = self._collections_loader.load(owner_id, WEALTH_COLLECTIONS)
        except DataStoreUnavailableError as exc:
            self._logger.warning(
                f"Asset collections unavailable, charting zeroed wealth: {exc}"
            )
            loaded = LoadedCollections(records={}, failures=exc.failures)
        snapshots = compute_wealth_evolution(
            buckets,
            investments=loaded.get("investments"),
            real_estate=loaded.get("real_estate"),
            bank_accounts=loaded.get("bank_accounts"),
            exotic_assets=loaded.get("exotic_assets"),
            filter_start=start_date if filtered else None,
        )
        self._logger.info(
            f"Wealth evolution computed over {len(snapshots)} buckets"
        )
        return snapshots


__all__ = ["WEALTH_COLLECTIONS", "GetWealthEvolutionUseCase"]
