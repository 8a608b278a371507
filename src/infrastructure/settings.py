"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from src.domain.services.periods import DATE_PRESETS
from src.infrastructure.logging.logger import get_app_logger

DEFAULT_CURRENCY = "BRL"
DEFAULT_MAX_WORKERS = 8
DEFAULT_RANGE_PRESET = "30days"
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class FinanceSettings:
    """Settings for the finance dashboard engine.

    Attributes:
        currency: ISO code used when formatting amounts.
        max_workers: Upper bound on concurrent collection fetches.
        strict_frequencies: Reject unknown record frequencies instead of
            reading them as monthly.
        default_range: Date preset selected when the dashboard opens.
        owner_id: Owner shown by the CLI and the dashboard.
    """

    currency: str = DEFAULT_CURRENCY
    max_workers: int = DEFAULT_MAX_WORKERS
    strict_frequencies: bool = False
    default_range: str = DEFAULT_RANGE_PRESET
    owner_id: str | None = None

    @classmethod
    def from_env(cls) -> "FinanceSettings":
        """Build settings from environment variables.

        Returns:
            FinanceSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        currency = os.getenv("FINANCE_CURRENCY", DEFAULT_CURRENCY).strip().upper()
        return cls(
            currency=currency or DEFAULT_CURRENCY,
            max_workers=cls._parse_workers(
                os.getenv("FINANCE_MAX_WORKERS"),
                logger=logger,
            ),
            strict_frequencies=cls._parse_flag(
                os.getenv("FINANCE_STRICT_FREQUENCIES")
            ),
            default_range=cls._parse_range(
                os.getenv("FINANCE_DEFAULT_RANGE"),
                logger=logger,
            ),
            owner_id=(os.getenv("FINANCE_OWNER_ID") or "").strip() or None,
        )

    @staticmethod
    def _parse_workers(raw_value: str | None, logger) -> int:
        """Parse the worker count, falling back to the default.

        Args:
            raw_value: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            int: Positive worker count.
        """
        if not raw_value:
            return DEFAULT_MAX_WORKERS
        try:
            workers = int(raw_value)
        except ValueError:
            logger.warning(
                f"Invalid FINANCE_MAX_WORKERS={raw_value!r}, "
                f"using {DEFAULT_MAX_WORKERS}"
            )
            return DEFAULT_MAX_WORKERS
        if workers < 1:
            logger.warning(
                f"FINANCE_MAX_WORKERS must be positive, "
                f"using {DEFAULT_MAX_WORKERS}"
            )
            return DEFAULT_MAX_WORKERS
        return workers

    @staticmethod
    def _parse_flag(raw_value: str | None) -> bool:
        return (raw_value or "").strip().lower() in _TRUE_VALUES

    @staticmethod
    def _parse_range(raw_value: str | None, logger) -> str:
        preset = (raw_value or "").strip()
        if not preset:
            return DEFAULT_RANGE_PRESET
        if preset not in DATE_PRESETS:
            logger.warning(
                f"Unknown FINANCE_DEFAULT_RANGE={preset!r}, "
                f"using {DEFAULT_RANGE_PRESET}"
            )
            return DEFAULT_RANGE_PRESET
        return preset


__all__ = ["FinanceSettings"]
