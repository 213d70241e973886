"""Use case to build the capital dashboard payload."""

from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timezone

from src.application.ports.record_store import DateRange, RecordStorePort
from src.domain.constants import DEFAULT_CAPITAL_CUTOFFS, DEFAULT_TOP_N
from src.domain.errors import InvalidRecordError
from src.domain.models import (
    AllTimeSince,
    CurrentIsoWeek,
    CustomRange,
    DashboardPayload,
    LastCompleteIsoWeek,
    RecordCategory,
)
from src.domain.services import (
    aggregate_for,
    compute_current_week_window,
    compute_last_complete_week_window,
    resolve_window,
    top_debtors,
    top_recent,
    total_debtor_balance,
    utc_midnight,
)
from src.infrastructure.logging.logger import get_app_logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GetDashboardUseCase:
    """Fetch every record category and aggregate it per window."""

    def __init__(
        self,
        record_store: RecordStorePort,
        logger=None,
        cutoffs: Mapping[RecordCategory, date] | None = None,
        top_n: int = DEFAULT_TOP_N,
        clock: Callable[[], datetime] | None = None,
        max_workers: int = 5,
    ) -> None:
        """Initialize the use case.

        Args:
            record_store: Port providing records and clients.
            logger: Optional logger compatible with logging.Logger-like API.
            cutoffs: Capital accounting start per category. Defaults to the
                payments/sales accounting start.
            top_n: Length of recent-activity and debtor listings.
            clock: Callable returning the reference instant.
            max_workers: Thread pool size for the parallel fetches.
        """
        self._record_store = record_store
        self._logger = logger or get_app_logger()
        self._cutoffs = dict(
            DEFAULT_CAPITAL_CUTOFFS if cutoffs is None else cutoffs
        )
        self._top_n = top_n
        self._clock = clock or _utc_now
        self._max_workers = max_workers

    def execute(
        self,
        now: datetime | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> DashboardPayload:
        """Return the dashboard payload.

        Args:
            now: Reference instant; defaults to the clock.
            start: Optional custom range start (requires ``end``).
            end: Optional custom range end (requires ``start``).

        Returns:
            DashboardPayload: Aggregates, listings and debtor snapshot.

        Raises:
            InvalidRecordError: If only one range bound is given or the
                range is inverted.
            RecordStoreUnavailableError: If any fetch fails.
        """
        if (start is None) != (end is None):
            raise InvalidRecordError(
                "Custom ranges need both start and end dates"
            )
        reference = now or self._clock()
        custom = CustomRange(start, end) if start is not None else None
        date_range = DateRange(custom.start, custom.end) if custom else None

        records, clients = self._fetch_all(date_range)
        if custom is not None:
            window = resolve_window(custom, reference)
            records = [
                record for record in records
                if window.contains(utc_midnight(record.effective_date))
            ]
        self._logger.info(
            f"Fetched {len(records)} records and {len(clients)} active "
            f"clients for dashboard (range={date_range})"
        )

        recent_payments = top_recent(
            records, RecordCategory.PAYMENT, self._top_n
        )
        recent_sales = top_recent(records, RecordCategory.SALE, self._top_n)
        debtors = top_debtors(clients, self._top_n)
        debtor_total = total_debtor_balance(clients)

        if custom is not None:
            capital = aggregate_for(records, custom, reference)
            self._logger.info(
                f"Custom range capital computed: {custom.start}..{custom.end} "
                f"net={capital.net_capital}"
            )
            return DashboardPayload(
                capital=capital,
                current_week=None,
                last_complete_week=None,
                debtor_balance_total=debtor_total,
                recent_payments=recent_payments,
                recent_sales=recent_sales,
                top_debtors=debtors,
                computed_at=reference,
                range_start=custom.start,
                range_end=custom.end,
            )

        current_window = compute_current_week_window(reference)
        last_window = compute_last_complete_week_window(reference)
        capital = aggregate_for(records, AllTimeSince(self._cutoffs), reference)
        current_week = aggregate_for(records, CurrentIsoWeek(), reference)
        last_week = aggregate_for(records, LastCompleteIsoWeek(), reference)
        self._logger.info(
            f"Dashboard computed: capital={capital.net_capital}, "
            f"week={current_week.net_capital}, "
            f"last_week={last_week.net_capital}, "
            f"week_start={current_window.start.isoformat()}"
        )
        return DashboardPayload(
            capital=capital,
            current_week=current_week,
            last_complete_week=last_week,
            debtor_balance_total=debtor_total,
            recent_payments=recent_payments,
            recent_sales=recent_sales,
            top_debtors=debtors,
            computed_at=reference,
            current_week_start=current_window.start,
            last_week_start=last_window.start,
            last_week_end=last_window.end,
        )

    def _fetch_all(self, date_range: DateRange | None):
        """Run the record store fetches in parallel and wait for all."""
        store = self._record_store
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            investments = executor.submit(store.fetch_investments, date_range)
            payments = executor.submit(store.fetch_payments, date_range)
            sales = executor.submit(store.fetch_sales, date_range)
            expenses = executor.submit(
                store.fetch_confirmed_expenses, date_range
            )
            clients = executor.submit(store.fetch_active_clients)
            records = [
                *investments.result(),
                *payments.result(),
                *sales.result(),
                *expenses.result(),
            ]
            return records, list(clients.result())


__all__ = ["GetDashboardUseCase"]
