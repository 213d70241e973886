"""Domain services for capital aggregates and rankings."""

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone
from decimal import Decimal

from src.domain.models.periods import (
    AllTimeSince,
    PeriodAggregate,
    TimeWindow,
    WindowSpec,
)
from src.domain.models.records import (
    Client,
    Expense,
    FinancialRecord,
    RecordCategory,
)
from src.domain.services.periods import resolve_window, utc_midnight

_FIELD_BY_CATEGORY = {
    RecordCategory.INVESTMENT: "investments",
    RecordCategory.PAYMENT: "payments",
    RecordCategory.SALE: "sales",
    RecordCategory.EXPENSE: "expenses",
}

_OLDEST_INSTANT = datetime.min.replace(tzinfo=timezone.utc)


def aggregate(
    records: Iterable[FinancialRecord] | None,
    window: TimeWindow,
    category_cutoffs: Mapping[RecordCategory, date] | None = None,
) -> PeriodAggregate:
    """Sum record amounts per category within a window.

    Args:
        records: Records of any category; None is treated as empty.
        window: Resolved window with inclusive bounds.
        category_cutoffs: Earliest date per category. Only applied when the
            window honors cutoffs.

    Returns:
        PeriodAggregate: Category sums, all zero when nothing matches.
    """
    cutoffs = category_cutoffs if window.honors_cutoffs else None
    totals = {name: Decimal("0") for name in _FIELD_BY_CATEGORY.values()}
    for record in records or ():
        if isinstance(record, Expense) and not record.confirmed:
            continue
        if not window.contains(utc_midnight(record.effective_date)):
            continue
        if cutoffs:
            cutoff = cutoffs.get(record.category)
            if cutoff is not None and record.effective_date < cutoff:
                continue
        totals[_FIELD_BY_CATEGORY[record.category]] += record.amount
    return PeriodAggregate(**totals)


def aggregate_for(
    records: Iterable[FinancialRecord] | None,
    spec: WindowSpec,
    now: date | datetime,
) -> PeriodAggregate:
    """Resolve ``spec`` against ``now`` and aggregate the records."""
    cutoffs = spec.cutoffs if isinstance(spec, AllTimeSince) else None
    return aggregate(records, resolve_window(spec, now), cutoffs)


def net_capital(period: PeriodAggregate) -> Decimal:
    """Return investments + payments - sales - expenses."""
    return period.net_capital


def top_recent(
    records: Iterable[FinancialRecord] | None,
    category: RecordCategory,
    n: int,
) -> list[FinancialRecord]:
    """Return the ``n`` most recent records of a category.

    Ordered by effective date, then ingestion instant, both descending.
    Records without an ingestion instant come after those with one on the
    same day; remaining ties keep their input order.
    """
    if n <= 0:
        return []
    matching = [
        record for record in records or () if record.category == category
    ]
    ranked = sorted(
        matching,
        key=lambda record: (
            record.effective_date,
            record.ingested_at is not None,
            record.ingested_at or _OLDEST_INSTANT,
        ),
        reverse=True,
    )
    return ranked[:n]


def top_debtors(clients: Iterable[Client] | None, n: int) -> list[Client]:
    """Return the ``n`` active clients owing the most.

    Clients with a zero balance or inactive clients are excluded. Equal
    balances keep their input order.
    """
    if n <= 0:
        return []
    debtors = [
        client for client in clients or ()
        if client.active and client.balance > 0
    ]
    return sorted(debtors, key=lambda client: client.balance, reverse=True)[:n]


def total_debtor_balance(clients: Iterable[Client] | None) -> Decimal:
    """Return the outstanding balance summed over active debtors."""
    return sum(
        (
            client.balance for client in clients or ()
            if client.active and client.balance > 0
        ),
        Decimal("0"),
    )


__all__ = [
    "aggregate",
    "aggregate_for",
    "net_capital",
    "top_recent",
    "top_debtors",
    "total_debtor_balance",
]
