"""Use case to list every payment or sale with weekly totals."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from src.application.ports.record_store import RecordStorePort
from src.domain.models import Payment, RecordCategory, Sale, TimeWindow
from src.domain.services import (
    aggregate,
    compute_current_week_window,
    current_week_end,
    top_recent,
    utc_midnight,
)
from src.infrastructure.logging.logger import get_app_logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ClientRecordListing:
    """Full listing of one client-facing category.

    Attributes:
        records: Every record, most recent first.
        total: Sum of every listed amount.
        week_count: Records dated in the current Monday-to-Sunday week.
        week_total: Sum of those records.
        week_start: Monday 00:00 UTC of the current week.
        week_end: Sunday 23:59:59.999 UTC of the current week.
    """

    records: list[Payment | Sale]
    total: Decimal
    week_count: int
    week_total: Decimal
    week_start: datetime
    week_end: datetime


class ListClientRecordsUseCase:
    """List payments or sales with their all-time and weekly sums."""

    def __init__(
        self,
        record_store: RecordStorePort,
        logger=None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            record_store: Port providing records and clients.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Callable returning the reference instant.
        """
        self._record_store = record_store
        self._logger = logger or get_app_logger()
        self._clock = clock or _utc_now

    def payments(self, now: datetime | None = None) -> ClientRecordListing:
        return self._listing(
            self._record_store.fetch_payments(),
            RecordCategory.PAYMENT,
            now,
        )

    def sales(self, now: datetime | None = None) -> ClientRecordListing:
        return self._listing(
            self._record_store.fetch_sales(),
            RecordCategory.SALE,
            now,
        )

    def _listing(
        self,
        records: list[Payment | Sale],
        category: RecordCategory,
        now: datetime | None,
    ) -> ClientRecordListing:
        reference = now or self._clock()
        ordered = top_recent(records, category, len(records))
        current = compute_current_week_window(reference)
        week = TimeWindow(start=current.start, end=current_week_end(current))
        week_count = sum(
            1 for record in ordered
            if week.contains(utc_midnight(record.effective_date))
        )
        listing = ClientRecordListing(
            records=ordered,
            total=sum((record.amount for record in ordered), Decimal("0")),
            week_count=week_count,
            week_total=aggregate(ordered, week).amount_for(category),
            week_start=week.start,
            week_end=week.end,
        )
        self._logger.info(
            f"Listing {len(ordered)} {category.value} records "
            f"(week count={week_count}, week total={listing.week_total})"
        )
        return listing


__all__ = ["ClientRecordListing", "ListClientRecordsUseCase"]
