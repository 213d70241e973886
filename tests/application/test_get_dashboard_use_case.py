"""Tests for the GetDashboardUseCase."""

from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.ports.record_store import DateRange
from src.application.use_cases.get_dashboard import GetDashboardUseCase
from src.domain.errors import InvalidRecordError, RecordStoreUnavailableError
from src.domain.models import (
    Client,
    Expense,
    Investment,
    Payment,
    RecordCategory,
    Sale,
)

NOW = datetime(2025, 11, 12, 10, 0, tzinfo=timezone.utc)


def _build_store() -> MagicMock:
    store = MagicMock()
    store.fetch_investments.return_value = [
        Investment(
            record_id="i1",
            amount=Decimal("1000"),
            effective_date=date(2025, 11, 10),
        ),
        Investment(
            record_id="i0",
            amount=Decimal("5000"),
            effective_date=date(2025, 10, 1),
        ),
    ]
    store.fetch_payments.return_value = [
        Payment(
            record_id="p1",
            amount=Decimal("200"),
            effective_date=date(2025, 11, 11),
            client_id="c1",
            client_name="Ana",
        ),
        Payment(
            record_id="p0",
            amount=Decimal("70"),
            effective_date=date(2025, 11, 5),
            client_id="c1",
            client_name="Ana",
        ),
        Payment(
            record_id="p-old",
            amount=Decimal("999"),
            effective_date=date(2025, 10, 30),
            client_id="c1",
        ),
    ]
    store.fetch_sales.return_value = [
        Sale(
            record_id="s1",
            amount=Decimal("500"),
            effective_date=date(2025, 11, 12),
            client_id="c2",
        ),
    ]
    store.fetch_confirmed_expenses.return_value = [
        Expense(
            record_id="e1",
            amount=Decimal("150"),
            effective_date=date(2025, 11, 10),
            confirmed=True,
        ),
    ]
    store.fetch_active_clients.return_value = [
        Client(client_id="c1", name="Ana", balance=Decimal("300")),
        Client(client_id="c2", name="Beto", balance=Decimal("0")),
        Client(client_id="c3", name="Caro", balance=Decimal("120")),
    ]
    return store


def test_execute_builds_weekly_payload() -> None:
    """Weekly mode should aggregate both weeks and the cutoff capital."""
    store = _build_store()
    use_case = GetDashboardUseCase(record_store=store, logger=MagicMock())

    payload = use_case.execute(now=NOW)

    assert payload.current_week.net_capital == Decimal("550")
    assert payload.last_complete_week.payments == Decimal("70")
    # Payments before 2025-11-04 fall outside the capital window.
    assert payload.capital.payments == Decimal("270")
    assert payload.capital.investments == Decimal("6000")
    assert payload.capital.net_capital == Decimal("5620")
    assert payload.debtor_balance_total == Decimal("420")
    assert [c.client_id for c in payload.top_debtors] == ["c1", "c3"]
    assert [p.record_id for p in payload.recent_payments] == [
        "p1",
        "p0",
        "p-old",
    ]
    assert payload.current_week_start == datetime(
        2025, 11, 10, tzinfo=timezone.utc
    )
    assert payload.last_week_end == datetime(
        2025, 11, 9, 23, 59, 59, 999000, tzinfo=timezone.utc
    )
    assert payload.computed_at == NOW
    assert payload.is_custom_range is False
    store.fetch_payments.assert_called_once_with(None)
    store.fetch_active_clients.assert_called_once_with()


def test_execute_uses_clock_and_configured_cutoffs() -> None:
    store = _build_store()
    use_case = GetDashboardUseCase(
        record_store=store,
        logger=MagicMock(),
        cutoffs={RecordCategory.INVESTMENT: date(2025, 11, 1)},
        top_n=1,
        clock=lambda: NOW,
    )

    payload = use_case.execute()

    assert payload.capital.investments == Decimal("1000")
    assert payload.capital.payments == Decimal("1269")
    assert len(payload.recent_payments) == 1
    assert len(payload.top_debtors) == 1
    assert payload.computed_at == NOW


def test_execute_custom_range_replaces_week_windows() -> None:
    store = _build_store()
    use_case = GetDashboardUseCase(record_store=store, logger=MagicMock())

    payload = use_case.execute(
        now=NOW,
        start=date(2025, 10, 1),
        end=date(2025, 10, 31),
    )

    assert payload.current_week is None
    assert payload.last_complete_week is None
    assert payload.is_custom_range is True
    assert payload.range_start == date(2025, 10, 1)
    # Cutoffs do not apply to custom ranges.
    assert payload.capital.payments == Decimal("999")
    assert payload.capital.investments == Decimal("5000")
    assert [p.record_id for p in payload.recent_payments] == ["p-old"]
    assert payload.recent_sales == []
    store.fetch_sales.assert_called_once_with(
        DateRange(date(2025, 10, 1), date(2025, 10, 31))
    )


def test_execute_rejects_single_range_bound() -> None:
    use_case = GetDashboardUseCase(
        record_store=_build_store(),
        logger=MagicMock(),
    )

    with pytest.raises(InvalidRecordError):
        use_case.execute(now=NOW, start=date(2025, 11, 1))


def test_execute_rejects_inverted_range() -> None:
    use_case = GetDashboardUseCase(
        record_store=_build_store(),
        logger=MagicMock(),
    )

    with pytest.raises(InvalidRecordError):
        use_case.execute(
            now=NOW,
            start=date(2025, 11, 10),
            end=date(2025, 11, 1),
        )


def test_execute_propagates_store_failures() -> None:
    """A failing fetch should fail the whole request."""
    store = _build_store()
    store.fetch_sales.side_effect = RecordStoreUnavailableError("down")
    use_case = GetDashboardUseCase(record_store=store, logger=MagicMock())

    with pytest.raises(RecordStoreUnavailableError):
        use_case.execute(now=NOW)


def test_execute_handles_empty_store() -> None:
    store = MagicMock()
    store.fetch_investments.return_value = []
    store.fetch_payments.return_value = []
    store.fetch_sales.return_value = []
    store.fetch_confirmed_expenses.return_value = []
    store.fetch_active_clients.return_value = []
    use_case = GetDashboardUseCase(record_store=store, logger=MagicMock())

    payload = use_case.execute(now=NOW)

    assert payload.capital.net_capital == Decimal("0")
    assert payload.current_week.net_capital == Decimal("0")
    assert payload.debtor_balance_total == Decimal("0")
    assert payload.recent_sales == []
    assert payload.top_debtors == []
