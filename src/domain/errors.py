"""Domain exceptions for finance computations."""


class FinanceError(Exception):
    """Base class for finance engine errors."""


class UnknownFrequencyError(FinanceError, ValueError):
    """Raised when a record frequency is not one of the supported values."""

    def __init__(self, raw_value) -> None:
        self.raw_value = raw_value
        super().__init__(f"Unknown frequency: {raw_value!r}")


class DataStoreUnavailableError(FinanceError, RuntimeError):
    """Raised when no collection at all could be read from the data store."""

    def __init__(self, failures: dict[str, str]) -> None:
        self.failures = failures
        names = ", ".join(sorted(failures))
        super().__init__(f"Data store unavailable for every collection: {names}")


__all__ = [
    "FinanceError",
    "UnknownFrequencyError",
    "DataStoreUnavailableError",
]
