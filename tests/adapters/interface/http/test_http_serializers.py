"""Tests for the HTTP serializers."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.adapters.interface.http.serializers import (
    format_instant,
    format_money,
    parse_date_param,
    parse_sync_batch,
    serialize_client_record,
    serialize_dashboard,
)
from src.domain.errors import InvalidRecordError
from src.domain.models import DashboardPayload, PeriodAggregate, Sale


def test_format_money_avoids_exponents() -> None:
    assert format_money(Decimal("1E+3")) == "1000"
    assert format_money(Decimal("12.50")) == "12.50"


def test_format_instant_uses_utc_with_milliseconds() -> None:
    local = datetime(2025, 11, 12, 7, 0, tzinfo=timezone(timedelta(hours=-3)))

    assert format_instant(local) == "2025-11-12T10:00:00.000Z"
    assert format_instant(None) is None


def test_serialize_client_record_embeds_client() -> None:
    sale = Sale(
        record_id="s1",
        amount=Decimal("60"),
        effective_date=date(2025, 11, 12),
        client_id="c1",
        client_name="Ana",
    )

    assert serialize_client_record(sale) == {
        "id": "s1",
        "date": "2025-11-12",
        "amount": "60",
        "ingestedAt": None,
        "client": {"id": "c1", "name": "Ana"},
    }


def test_serialize_dashboard_custom_range() -> None:
    payload = DashboardPayload(
        capital=PeriodAggregate(sales=Decimal("5")),
        current_week=None,
        last_complete_week=None,
        debtor_balance_total=Decimal("0"),
        recent_payments=[],
        recent_sales=[],
        top_debtors=[],
        computed_at=datetime(2025, 11, 12, tzinfo=timezone.utc),
        range_start=date(2025, 11, 1),
        range_end=date(2025, 11, 5),
    )

    body = serialize_dashboard(payload)

    assert body["capital"]["total"] == "-5"
    assert body["currentWeek"] is None
    assert body["range"] == {"start": "2025-11-01", "end": "2025-11-05"}


def test_parse_date_param() -> None:
    assert parse_date_param(None, "start") is None
    assert parse_date_param(" ", "start") is None
    assert parse_date_param("2025-11-01", "start") == date(2025, 11, 1)
    with pytest.raises(InvalidRecordError):
        parse_date_param("2025-13-01", "end")


def test_parse_sync_batch_rejects_non_object_bodies() -> None:
    with pytest.raises(InvalidRecordError):
        parse_sync_batch(["not", "an", "object"])
    with pytest.raises(InvalidRecordError):
        parse_sync_batch({"clients": "c1"})
    with pytest.raises(InvalidRecordError):
        parse_sync_batch({"sales": ["s1"]})


def test_parse_sync_batch_reads_timestamps() -> None:
    batch = parse_sync_batch(
        {
            "sales": [
                {
                    "id": "s1",
                    "clientId": "c1",
                    "amount": 60,
                    "date": "2025-11-12",
                    "ingestedAt": "2025-11-12T10:00:00Z",
                }
            ]
        }
    )

    assert batch.clients == []
    assert batch.sales[0].ingested_at == datetime(
        2025, 11, 12, 10, 0, tzinfo=timezone.utc
    )


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, True),
        (True, True),
        (False, False),
        ("false", False),
        ("TRUE", True),
    ],
)
def test_parse_sync_batch_reads_active_flags(raw, expected) -> None:
    entry = {"id": "c1", "name": "Ana", "active": raw}

    batch = parse_sync_batch({"clients": [entry]})

    assert batch.clients[0].active is expected


@pytest.mark.parametrize("raw", ["no", 0, 1, []])
def test_parse_sync_batch_rejects_unreadable_active_flags(raw) -> None:
    with pytest.raises(InvalidRecordError):
        parse_sync_batch(
            {"clients": [{"id": "c1", "name": "Ana", "active": raw}]}
        )
