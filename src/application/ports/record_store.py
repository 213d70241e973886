"""Port for reading the records behind capital aggregates."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from src.domain.models import Client, Expense, Investment, Payment, Sale


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of civil dates; None bounds are open."""

    start: date | None = None
    end: date | None = None


class RecordStorePort(Protocol):
    """Port exposing read access to records and clients.

    Implementations may filter by ``date_range`` server-side or return a
    superset; callers filter again either way.
    """

    def fetch_investments(
        self,
        date_range: DateRange | None = None,
    ) -> list[Investment]:
        """Return investments, optionally limited to a date range."""

    def fetch_payments(
        self,
        date_range: DateRange | None = None,
    ) -> list[Payment]:
        """Return client payments, optionally limited to a date range."""

    def fetch_sales(
        self,
        date_range: DateRange | None = None,
    ) -> list[Sale]:
        """Return sales, optionally limited to a date range."""

    def fetch_confirmed_expenses(
        self,
        date_range: DateRange | None = None,
    ) -> list[Expense]:
        """Return confirmed expenses, optionally limited to a date range."""

    def fetch_active_clients(self) -> list[Client]:
        """Return clients still present in the synced source."""


__all__ = ["DateRange", "RecordStorePort"]
