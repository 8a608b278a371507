"""Per-collection totals produced by the aggregator."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class InvestmentTotals:
    """Investment value and the monthly income it yields."""

    value: Decimal
    monthly_income: Decimal
    count: int


@dataclass(frozen=True)
class RealEstateTotals:
    """Real-estate value, rents and carrying costs.

    Attributes:
        value: Current valuation of every unit.
        rental_income: Rent received from rented units.
        net_income: Sum of ``rental_income - monthly_expenses`` per unit.
        monthly_expenses: Carrying costs of every unit.
        iptu: Property tax of units that are not rented out.
    """

    value: Decimal
    rental_income: Decimal
    net_income: Decimal
    monthly_expenses: Decimal
    iptu: Decimal


@dataclass(frozen=True)
class VehicleTotals:
    """Vehicle value and ownership costs."""

    value: Decimal
    depreciation: Decimal
    ipva: Decimal
    monthly_expenses: Decimal


@dataclass(frozen=True)
class DebtTotals:
    """Outstanding debt and monthly repayments."""

    remaining: Decimal
    monthly_payments: Decimal


@dataclass(frozen=True)
class RetirementTotals:
    """Retirement balances and contributions."""

    saved: Decimal
    monthly_contributions: Decimal
    contributions: Decimal


@dataclass(frozen=True)
class GoalTotals:
    """Savings goals progress."""

    target: Decimal
    saved: Decimal
    monthly_contributions: Decimal


__all__ = [
    "InvestmentTotals",
    "RealEstateTotals",
    "VehicleTotals",
    "DebtTotals",
    "RetirementTotals",
    "GoalTotals",
]
