"""Domain models for time windows and period aggregates."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Union

from src.domain.errors import InvalidRecordError
from src.domain.models.records import Client, Payment, RecordCategory, Sale
from src.domain.policies.record_contract import require_civil_date


@dataclass(frozen=True)
class CurrentIsoWeek:
    """Monday of the current ISO week, still in progress."""


@dataclass(frozen=True)
class LastCompleteIsoWeek:
    """Most recently completed Monday-to-Sunday week."""


@dataclass(frozen=True)
class CustomRange:
    """Caller supplied inclusive range of civil dates."""

    start: date
    end: date

    def __post_init__(self) -> None:
        start = require_civil_date(self.start, "start")
        end = require_civil_date(self.end, "end")
        if start > end:
            raise InvalidRecordError(
                f"Range start {start} is after range end {end}"
            )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)


@dataclass(frozen=True)
class AllTimeSince:
    """Unbounded window where each category starts at its own cutoff."""

    cutoffs: Mapping[RecordCategory, date] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized = {
            RecordCategory(category): require_civil_date(
                cutoff, f"cutoff[{category}]"
            )
            for category, cutoff in dict(self.cutoffs).items()
        }
        object.__setattr__(self, "cutoffs", MappingProxyType(normalized))

    def __hash__(self) -> int:
        return hash(tuple(sorted(
            (category.value, cutoff)
            for category, cutoff in self.cutoffs.items()
        )))


WindowSpec = Union[CurrentIsoWeek, LastCompleteIsoWeek, CustomRange, AllTimeSince]


@dataclass(frozen=True)
class TimeWindow:
    """Resolved window expressed as UTC instants.

    Attributes:
        start: Inclusive lower bound, or None when unbounded.
        end: Inclusive upper bound, or None while the window is open.
        honors_cutoffs: Whether per-category cutoffs apply to this window.
    """

    start: datetime | None
    end: datetime | None
    honors_cutoffs: bool = False

    def contains(self, instant: datetime) -> bool:
        """Return True when ``instant`` lies within the inclusive bounds."""
        if self.start is not None and instant < self.start:
            return False
        if self.end is not None and instant > self.end:
            return False
        return True


@dataclass(frozen=True)
class PeriodAggregate:
    """Per-category sums for one window.

    Attributes:
        investments: Sum of investment amounts.
        payments: Sum of client payments.
        sales: Sum of sales.
        expenses: Sum of confirmed expenses.
    """

    investments: Decimal = Decimal("0")
    payments: Decimal = Decimal("0")
    sales: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")

    @property
    def net_capital(self) -> Decimal:
        """Return investments + payments - sales - expenses."""
        return self.investments + self.payments - self.sales - self.expenses

    @classmethod
    def zero(cls) -> "PeriodAggregate":
        return cls()

    def amount_for(self, category: RecordCategory) -> Decimal:
        return {
            RecordCategory.INVESTMENT: self.investments,
            RecordCategory.PAYMENT: self.payments,
            RecordCategory.SALE: self.sales,
            RecordCategory.EXPENSE: self.expenses,
        }[category]


@dataclass(frozen=True)
class DashboardPayload:
    """Everything the dashboard shows for one reference instant.

    In custom range mode the week aggregates are None and ``capital``
    covers the requested range.
    """

    capital: PeriodAggregate
    current_week: PeriodAggregate | None
    last_complete_week: PeriodAggregate | None
    debtor_balance_total: Decimal
    recent_payments: list[Payment]
    recent_sales: list[Sale]
    top_debtors: list[Client]
    computed_at: datetime
    current_week_start: datetime | None = None
    last_week_start: datetime | None = None
    last_week_end: datetime | None = None
    range_start: date | None = None
    range_end: date | None = None

    @property
    def is_custom_range(self) -> bool:
        return self.range_start is not None


__all__ = [
    "CurrentIsoWeek",
    "LastCompleteIsoWeek",
    "CustomRange",
    "AllTimeSince",
    "WindowSpec",
    "TimeWindow",
    "PeriodAggregate",
    "DashboardPayload",
]
