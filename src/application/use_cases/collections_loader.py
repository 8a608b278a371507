"""Concurrent loading of household collections.

Each collection is fetched on its own worker so one failing read degrades
only its own group. Results are gathered once every fetch has settled.
"""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from src.application.ports.finance_repository import FinanceRepositoryPort
from src.domain.errors import DataStoreUnavailableError
from src.domain.models import DateRange
from src.infrastructure.logging.logger import get_app_logger

COLLECTION_FETCHERS = {
    "income_sources": "fetch_income_sources",
    "expenses": "fetch_expenses",
    "investments": "fetch_investments",
    "real_estate": "fetch_real_estate",
    "vehicles": "fetch_vehicles",
    "exotic_assets": "fetch_exotic_assets",
    "loans": "fetch_loans",
    "bills": "fetch_bills",
    "retirement_plans": "fetch_retirement_plans",
    "goals": "fetch_goals",
    "bank_accounts": "fetch_bank_accounts",
}
DEFAULT_MAX_WORKERS = 8


@dataclass(frozen=True)
class LoadedCollections:
    """Fetched records keyed by collection name.

    Attributes:
        records: Records per collection; failed collections map to ``[]``.
        failures: Error message per failed collection.
    """

    records: dict[str, list]
    failures: dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> list:
        return self.records.get(name, [])

    @property
    def warnings(self) -> list[str]:
        return [
            f"{name} unavailable: {message}"
            for name, message in self.failures.items()
        ]


class CollectionsLoader:
    """Fetch several collections concurrently with per-collection isolation."""

    def __init__(
        self,
        finance_repository: FinanceRepositoryPort,
        logger=None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        """Initialize the loader.

        Args:
            finance_repository: Port providing per-collection reads.
            logger: Optional logger compatible with logging.Logger-like API.
            max_workers: Upper bound on concurrent fetches.
        """
        self._finance_repository = finance_repository
        self._logger = logger or get_app_logger()
        self._max_workers = max(1, max_workers)

    def load(
        self,
        owner_id: str,
        names: Iterable[str],
        created_between: DateRange | None = None,
    ) -> LoadedCollections:
        """Fetch the requested collections.

        Args:
            owner_id: Owner whose records are read.
            names: Collection names, keys of ``COLLECTION_FETCHERS``.
            created_between: Optional creation-date restriction.

        Returns:
            LoadedCollections: Records and warnings for failed collections.

        Raises:
            KeyError: If a collection name is unknown.
            DataStoreUnavailableError: If every requested collection failed.
        """
        requested = list(dict.fromkeys(names))
        fetchers = {
            name: getattr(self._finance_repository, COLLECTION_FETCHERS[name])
            for name in requested
        }
        if not fetchers:
            return LoadedCollections(records={})

        workers = min(self._max_workers, len(fetchers))
        with ThreadPoolExecutor(
            max_workers=workers,
            thread_name_prefix="finance-fetch",
        ) as executor:
            futures = {
                name: executor.submit(fetch, owner_id, created_between)
                for name, fetch in fetchers.items()
            }

        records: dict[str, list] = {}
        failures: dict[str, str] = {}
        for name, future in futures.items():
            try:
                records[name] = list(future.result())
            except Exception as exc:
                self._logger.error(f"Failed to fetch {name}: {exc}")
                failures[name] = str(exc)
                records[name] = []

        if failures and len(failures) == len(fetchers):
            raise DataStoreUnavailableError(failures)

        self._logger.info(
            f"Loaded {len(fetchers) - len(failures)}/{len(fetchers)} "
            f"collections for owner {owner_id}"
        )
        return LoadedCollections(
            records=records,
            failures=failures,
        )


__all__ = [
    "COLLECTION_FETCHERS",
    "LoadedCollections",
    "CollectionsLoader",
]
