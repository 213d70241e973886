"""Tests for record construction rules."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.domain.errors import InvalidRecordError
from src.domain.models import Client, Expense, Investment, Payment, RecordCategory


def test_record_coerces_amount_and_date() -> None:
    payment = Payment(
        record_id=" p1 ",
        amount="120.50",
        effective_date="2025-11-11T15:00:00Z",
    )

    assert payment.record_id == "p1"
    assert payment.amount == Decimal("120.50")
    assert payment.effective_date == date(2025, 11, 11)
    assert payment.category is RecordCategory.PAYMENT


def test_ingested_at_is_normalized_to_utc() -> None:
    local = datetime(2025, 11, 11, 2, 0, tzinfo=timezone(timedelta(hours=-3)))

    investment = Investment(
        record_id="i1",
        amount=Decimal("1"),
        effective_date=date(2025, 11, 11),
        ingested_at=local,
    )

    assert investment.ingested_at == datetime(
        2025, 11, 11, 5, 0, tzinfo=timezone.utc
    )
    assert investment.ingested_at.tzinfo is timezone.utc


@pytest.mark.parametrize(
    "kwargs",
    [
        {"amount": Decimal("-1"), "effective_date": date(2025, 11, 1)},
        {"amount": None, "effective_date": date(2025, 11, 1)},
        {"amount": "abc", "effective_date": date(2025, 11, 1)},
        {"amount": Decimal("1"), "effective_date": None},
        {"amount": Decimal("1"), "effective_date": "11/01/2025"},
    ],
)
def test_invalid_records_are_rejected(kwargs) -> None:
    with pytest.raises(InvalidRecordError):
        Expense(record_id="e1", **kwargs)


def test_missing_identifier_is_rejected() -> None:
    with pytest.raises(InvalidRecordError):
        Investment(record_id="  ", amount=1, effective_date=date(2025, 11, 1))


def test_expense_defaults_to_unconfirmed() -> None:
    expense = Expense(record_id="e1", amount=1, effective_date=date(2025, 11, 1))

    assert expense.confirmed is False


def test_client_rejects_negative_balance() -> None:
    with pytest.raises(InvalidRecordError):
        Client(client_id="c1", name="Ana", balance=Decimal("-5"))


def test_invalid_record_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Client(client_id="", name="Ana")


def test_offset_timestamp_string_uses_utc_day() -> None:
    """A string timestamp lands on the same UTC day as the datetime."""
    local = datetime(2025, 11, 9, 23, 30, tzinfo=timezone(timedelta(hours=-5)))

    from_string = Payment(
        record_id="p1",
        amount=Decimal("1"),
        effective_date=local.isoformat(),
    )
    from_datetime = Payment(
        record_id="p2",
        amount=Decimal("1"),
        effective_date=local,
    )

    assert from_string.effective_date == date(2025, 11, 10)
    assert from_string.effective_date == from_datetime.effective_date


@pytest.mark.parametrize("raw", ["2025-11-12garbage", "12/11/2025", "not-a-date"])
def test_malformed_date_strings_are_rejected(raw) -> None:
    with pytest.raises(InvalidRecordError):
        Payment(record_id="p1", amount=1, effective_date=raw)


def test_plain_date_string_with_whitespace_is_accepted() -> None:
    payment = Payment(record_id="p1", amount=1, effective_date=" 2025-11-12 ")

    assert payment.effective_date == date(2025, 11, 12)
