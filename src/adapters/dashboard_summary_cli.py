"""CLI adapter printing the dashboard summary and wealth chart as JSON."""

from datetime import date
import json
import os

from src.domain.errors import FinanceError
from src.infrastructure.container import (
    build_dashboard_summary_use_case,
    build_finance_repository,
    build_wealth_evolution_use_case,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import FinanceSettings


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def build_payload(
    owner_id: str,
    start_date: date | None,
    end_date: date | None,
    settings: FinanceSettings,
    repository=None,
) -> dict:
    """Return the JSON payload for an owner and optional period."""
    resolved_repository = repository or build_finance_repository()
    dashboard = build_dashboard_summary_use_case(
        resolved_repository,
        settings,
    ).execute(owner_id, start_date=start_date, end_date=end_date)
    wealth = build_wealth_evolution_use_case(
        resolved_repository,
        settings,
    ).execute(owner_id, start_date=start_date, end_date=end_date)
    return {
        "currency": settings.currency,
        "summary": dashboard.to_dict(),
        "wealthEvolution": [snapshot.to_dict() for snapshot in wealth],
    }


def main() -> None:
    """Print the dashboard summary for FINANCE_OWNER_ID."""
    logger = get_app_logger()
    settings = FinanceSettings.from_env()
    if not settings.owner_id:
        logger.warning("FINANCE_OWNER_ID is required to build the summary.")
        return

    start_date = _parse_date(os.getenv("SUMMARY_START_DATE"), logger)
    end_date = _parse_date(os.getenv("SUMMARY_END_DATE"), logger)

    try:
        payload = build_payload(
            settings.owner_id,
            start_date,
            end_date,
            settings,
        )
    except FinanceError as exc:
        logger.error(str(exc))
        return

    print(json.dumps(payload, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
