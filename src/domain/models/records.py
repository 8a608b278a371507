"""Domain records read from the finance data store.

Each record carries only the fields the aggregation engine consumes. Numeric
fields stay ``None`` when the store has no value; services coerce them.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class IncomeSourceRecord:
    """Recurring or one-off income source."""

    id: str
    owner_id: str = ""
    name: str = ""
    amount: Decimal | None = None
    frequency: str | None = None
    category: str | None = None
    is_active: bool = True
    tax_rate: Decimal | None = None
    created_at: date | None = None


@dataclass(frozen=True)
class ExpenseRecord:
    """Recurring or one-off expense."""

    id: str
    owner_id: str = ""
    description: str = ""
    amount: Decimal | None = None
    frequency: str | None = None
    category: str | None = None
    is_recurring: bool = False
    created_at: date | None = None


@dataclass(frozen=True)
class InvestmentRecord:
    """Investment position."""

    id: str
    owner_id: str = ""
    name: str = ""
    type: str | None = None
    amount: Decimal | None = None
    quantity: Decimal | None = None
    current_price: Decimal | None = None
    current_value: Decimal | None = None
    purchase_price: Decimal | None = None
    dividend_yield: Decimal | None = None
    monthly_income: Decimal | None = None
    purchase_date: date | None = None
    created_at: date | None = None


@dataclass(frozen=True)
class RealEstateRecord:
    """Real-estate unit."""

    id: str
    owner_id: str = ""
    property_type: str | None = None
    address: str = ""
    current_value: Decimal | None = None
    purchase_price: Decimal | None = None
    rental_income: Decimal | None = None
    monthly_expenses: Decimal | None = None
    is_rented: bool = False
    iptu: Decimal | None = None
    purchase_date: date | None = None
    created_at: date | None = None


@dataclass(frozen=True)
class VehicleRecord:
    """Vehicle owned by the household."""

    id: str
    owner_id: str = ""
    type: str | None = None
    brand: str = ""
    model: str = ""
    year: int | None = None
    current_value: Decimal | None = None
    purchase_price: Decimal | None = None
    monthly_expenses: Decimal | None = None
    depreciation: Decimal | None = None
    ipva: Decimal | None = None
    purchase_date: date | None = None
    created_at: date | None = None


@dataclass(frozen=True)
class ExoticAssetRecord:
    """Collectible or otherwise uncategorized asset."""

    id: str
    owner_id: str = ""
    name: str = ""
    type: str | None = None
    current_value: Decimal | None = None
    purchase_price: Decimal | None = None
    purchase_date: date | None = None
    created_at: date | None = None


@dataclass(frozen=True)
class LoanRecord:
    """Loan or other debt."""

    id: str
    owner_id: str = ""
    type: str | None = None
    bank: str = ""
    amount: Decimal | None = None
    remaining_amount: Decimal | None = None
    monthly_payment: Decimal | None = None
    start_date: date | None = None
    created_at: date | None = None


@dataclass(frozen=True)
class BillRecord:
    """Bill reminder."""

    id: str
    owner_id: str = ""
    name: str = ""
    company: str = ""
    category: str | None = None
    amount: Decimal | None = None
    is_active: bool = True
    is_paid: bool = False
    is_recurring: bool = False
    next_due: date | None = None
    created_at: date | None = None


@dataclass(frozen=True)
class RetirementPlanRecord:
    """Retirement or pension plan."""

    id: str
    owner_id: str = ""
    name: str = ""
    type: str | None = None
    current_balance: Decimal | None = None
    contribution: Decimal | None = None
    monthly_contribution: Decimal | None = None
    created_at: date | None = None


@dataclass(frozen=True)
class FinancialGoalRecord:
    """Savings goal."""

    id: str
    owner_id: str = ""
    name: str = ""
    description: str = ""
    category: str | None = None
    status: str = "active"
    current_amount: Decimal | None = None
    target_amount: Decimal | None = None
    target_date: date | None = None
    created_at: date | None = None


@dataclass(frozen=True)
class BankAccountRecord:
    """Bank account with its current balance."""

    id: str
    owner_id: str = ""
    name: str = ""
    balance: Decimal | None = None
    created_at: date | None = None


@dataclass(frozen=True)
class TransactionRecord:
    """Ledger transaction used by the insights rules."""

    id: str
    owner_id: str = ""
    type: str = "expense"
    amount: Decimal | None = None
    category: str | None = None
    description: str = ""
    occurred_on: date | None = None


__all__ = [
    "IncomeSourceRecord",
    "ExpenseRecord",
    "InvestmentRecord",
    "RealEstateRecord",
    "VehicleRecord",
    "ExoticAssetRecord",
    "LoanRecord",
    "BillRecord",
    "RetirementPlanRecord",
    "FinancialGoalRecord",
    "BankAccountRecord",
    "TransactionRecord",
]
