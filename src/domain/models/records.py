"""Domain models for financial records and clients."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import ClassVar

from src.domain.policies.record_contract import (
    normalize_instant,
    require_civil_date,
    require_identifier,
    require_non_negative_amount,
)


class RecordCategory(str, Enum):
    """Categories of records taking part in capital aggregates."""

    INVESTMENT = "investment"
    PAYMENT = "payment"
    SALE = "sale"
    EXPENSE = "expense"


@dataclass(frozen=True, kw_only=True)
class FinancialRecord:
    """Dated monetary record.

    Attributes:
        record_id: Unique identifier of the record.
        amount: Non-negative monetary amount.
        effective_date: Civil date the record applies to.
        ingested_at: Instant the record was written, in UTC. Orders
            same-day records in recent-activity listings.
    """

    category: ClassVar[RecordCategory]

    record_id: str
    amount: Decimal
    effective_date: date
    ingested_at: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "record_id",
            require_identifier(self.record_id, "record_id"),
        )
        object.__setattr__(
            self,
            "amount",
            require_non_negative_amount(self.amount, "amount"),
        )
        object.__setattr__(
            self,
            "effective_date",
            require_civil_date(self.effective_date, "effective_date"),
        )
        object.__setattr__(
            self,
            "ingested_at",
            normalize_instant(self.ingested_at),
        )


@dataclass(frozen=True, kw_only=True)
class Investment(FinancialRecord):
    """Capital injected into the business."""

    category: ClassVar[RecordCategory] = RecordCategory.INVESTMENT

    description: str = ""


@dataclass(frozen=True, kw_only=True)
class Payment(FinancialRecord):
    """Payment received from a client."""

    category: ClassVar[RecordCategory] = RecordCategory.PAYMENT

    client_id: str | None = None
    client_name: str | None = None


@dataclass(frozen=True, kw_only=True)
class Sale(FinancialRecord):
    """Sale made to a client on credit."""

    category: ClassVar[RecordCategory] = RecordCategory.SALE

    client_id: str | None = None
    client_name: str | None = None


@dataclass(frozen=True, kw_only=True)
class Expense(FinancialRecord):
    """Business expense. Only confirmed expenses count towards capital."""

    category: ClassVar[RecordCategory] = RecordCategory.EXPENSE

    description: str = ""
    confirmed: bool = False


@dataclass(frozen=True, kw_only=True)
class Client:
    """Client with an outstanding balance.

    Attributes:
        client_id: Unique identifier of the client.
        name: Display name.
        balance: Outstanding balance owed by the client.
        active: False once the client's source file disappeared.
        external_id: Identifier of the client's source file, if synced.
    """

    client_id: str
    name: str
    balance: Decimal = Decimal("0")
    active: bool = True
    external_id: str | None = None
    payment_count: int = 0
    sale_count: int = 0
    updated_at: datetime | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "client_id",
            require_identifier(self.client_id, "client_id"),
        )
        object.__setattr__(
            self,
            "balance",
            require_non_negative_amount(self.balance, "balance"),
        )
        object.__setattr__(
            self,
            "updated_at",
            normalize_instant(self.updated_at),
        )


RECORD_TYPES: dict[RecordCategory, type[FinancialRecord]] = {
    RecordCategory.INVESTMENT: Investment,
    RecordCategory.PAYMENT: Payment,
    RecordCategory.SALE: Sale,
    RecordCategory.EXPENSE: Expense,
}


__all__ = [
    "RecordCategory",
    "FinancialRecord",
    "Investment",
    "Payment",
    "Sale",
    "Expense",
    "Client",
    "RECORD_TYPES",
]
