"""Tests for the SQLAlchemy record store against SQLite."""

from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, insert
from sqlalchemy.exc import OperationalError

from src.application.ports.record_store import DateRange
from src.domain.errors import RecordStoreUnavailableError
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.record_store import SqlAlchemyRecordStore
from src.infrastructure.schema import (
    clients_table,
    expenses_table,
    investments_table,
    payments_table,
    prepare_schema,
    sales_table,
)


def _seeded_port(tmp_path: Path) -> SqlAlchemyDatabaseEngineAdapter:
    engine = create_engine(f"sqlite:///{tmp_path / 'dashboard.db'}")
    db_port = SqlAlchemyDatabaseEngineAdapter(engine)
    prepare_schema(db_port)
    with engine.begin() as conn:
        conn.execute(
            insert(clients_table),
            [
                {
                    "id": "c1",
                    "external_id": "file-1",
                    "name": "Ana",
                    "balance": Decimal("300.00"),
                    "active": True,
                },
                {
                    "id": "c2",
                    "external_id": "file-2",
                    "name": "Beto",
                    "balance": Decimal("80.00"),
                    "active": False,
                },
            ],
        )
        conn.execute(
            insert(payments_table),
            [
                {
                    "id": "p1",
                    "client_id": "c1",
                    "amount": Decimal("120.50"),
                    "effective_date": date(2025, 11, 11),
                    "ingested_at": datetime(2025, 11, 11, 12, 0),
                },
                {
                    "id": "p2",
                    "client_id": "c1",
                    "amount": Decimal("40.00"),
                    "effective_date": date(2025, 10, 2),
                    "ingested_at": None,
                },
            ],
        )
        conn.execute(
            insert(sales_table),
            [
                {
                    "id": "s1",
                    "client_id": "c1",
                    "amount": Decimal("500.00"),
                    "effective_date": date(2025, 11, 12),
                    "ingested_at": None,
                }
            ],
        )
        conn.execute(
            insert(investments_table),
            [
                {
                    "id": "i1",
                    "description": "Seed",
                    "amount": Decimal("1000.00"),
                    "effective_date": date(2025, 11, 10),
                    "created_at": datetime(2025, 11, 10, 9, 0),
                }
            ],
        )
        conn.execute(
            insert(expenses_table),
            [
                {
                    "id": "e1",
                    "description": "Rent",
                    "amount": Decimal("150.00"),
                    "effective_date": date(2025, 11, 10),
                    "confirmed": True,
                },
                {
                    "id": "e2",
                    "description": "Draft",
                    "amount": Decimal("999.00"),
                    "effective_date": date(2025, 11, 10),
                    "confirmed": False,
                },
            ],
        )
    return db_port


def test_fetch_payments_joins_client_names(tmp_path: Path) -> None:
    store = SqlAlchemyRecordStore(_seeded_port(tmp_path))

    payments = store.fetch_payments()

    assert [payment.record_id for payment in payments] == ["p1", "p2"]
    assert payments[0].client_name == "Ana"
    assert payments[0].amount == Decimal("120.50")
    assert payments[0].ingested_at == datetime(
        2025, 11, 11, 12, 0, tzinfo=timezone.utc
    )
    assert payments[1].ingested_at is None


def test_fetch_payments_applies_date_range(tmp_path: Path) -> None:
    store = SqlAlchemyRecordStore(_seeded_port(tmp_path))

    payments = store.fetch_payments(
        DateRange(date(2025, 11, 1), date(2025, 11, 30))
    )

    assert [payment.record_id for payment in payments] == ["p1"]


def test_fetch_confirmed_expenses_skips_unconfirmed(tmp_path: Path) -> None:
    store = SqlAlchemyRecordStore(_seeded_port(tmp_path))

    expenses = store.fetch_confirmed_expenses()

    assert [expense.record_id for expense in expenses] == ["e1"]
    assert expenses[0].confirmed is True


def test_fetch_investments_and_sales(tmp_path: Path) -> None:
    store = SqlAlchemyRecordStore(_seeded_port(tmp_path))

    investments = store.fetch_investments()
    sales = store.fetch_sales()

    assert investments[0].description == "Seed"
    assert investments[0].amount == Decimal("1000")
    assert sales[0].client_id == "c1"
    assert sales[0].amount == Decimal("500")


def test_fetch_active_clients_counts_activity(tmp_path: Path) -> None:
    store = SqlAlchemyRecordStore(_seeded_port(tmp_path))

    clients = store.fetch_active_clients()

    assert [client.client_id for client in clients] == ["c1"]
    assert clients[0].payment_count == 2
    assert clients[0].sale_count == 1
    assert clients[0].balance == Decimal("300")


def test_store_errors_are_translated() -> None:
    engine = MagicMock()
    engine.connect.side_effect = OperationalError("SELECT", {}, Exception("x"))
    db_port = MagicMock()
    db_port.get_engine.return_value = engine
    store = SqlAlchemyRecordStore(db_port)

    with pytest.raises(RecordStoreUnavailableError):
        store.fetch_sales()
