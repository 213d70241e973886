"""SQLAlchemy-backed record store for dashboard reads."""

from contextlib import contextmanager

from sqlalchemy import Table, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.record_store import DateRange, RecordStorePort
from src.domain.errors import InvalidRecordError, RecordStoreUnavailableError
from src.domain.models import Client, Expense, Investment, Payment, Sale
from src.infrastructure.schema import (
    clients_table,
    expenses_table,
    investments_table,
    payments_table,
    sales_table,
)
from src.utils.decimal_utils import coerce_decimal


@contextmanager
def store_errors(action: str):
    """Translate SQLAlchemy failures into domain errors.

    Constraint violations are rejected input; anything else means the store
    is unavailable.
    """
    try:
        yield
    except IntegrityError as exc:
        raise InvalidRecordError(
            f"Record store rejected data while {action}: {exc.orig}"
        ) from exc
    except SQLAlchemyError as exc:
        raise RecordStoreUnavailableError(
            f"Record store failed while {action}: {exc}"
        ) from exc


def _apply_range(stmt, table: Table, date_range: DateRange | None):
    if date_range is None:
        return stmt
    if date_range.start is not None:
        stmt = stmt.where(table.c.effective_date >= date_range.start)
    if date_range.end is not None:
        stmt = stmt.where(table.c.effective_date <= date_range.end)
    return stmt


class SqlAlchemyRecordStore(RecordStorePort):
    """Record store backed by the dashboard database."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the dashboard engine.
        """
        self._db_port = db_port

    def fetch_investments(
        self,
        date_range: DateRange | None = None,
    ) -> list[Investment]:
        table = investments_table
        stmt = _apply_range(select(table), table, date_range).order_by(
            table.c.effective_date.desc(),
            table.c.id,
        )
        rows = self._fetch(stmt, "fetching investments")
        return [
            Investment(
                record_id=row.id,
                description=row.description or "",
                amount=coerce_decimal(row.amount),
                effective_date=row.effective_date,
                ingested_at=row.created_at,
            )
            for row in rows
        ]

    def fetch_payments(
        self,
        date_range: DateRange | None = None,
    ) -> list[Payment]:
        rows = self._fetch_client_records(
            payments_table,
            date_range,
            "fetching payments",
        )
        return [
            Payment(
                record_id=row.id,
                client_id=row.client_id,
                client_name=row.client_name,
                amount=coerce_decimal(row.amount),
                effective_date=row.effective_date,
                ingested_at=row.ingested_at,
            )
            for row in rows
        ]

    def fetch_sales(
        self,
        date_range: DateRange | None = None,
    ) -> list[Sale]:
        rows = self._fetch_client_records(
            sales_table,
            date_range,
            "fetching sales",
        )
        return [
            Sale(
                record_id=row.id,
                client_id=row.client_id,
                client_name=row.client_name,
                amount=coerce_decimal(row.amount),
                effective_date=row.effective_date,
                ingested_at=row.ingested_at,
            )
            for row in rows
        ]

    def fetch_confirmed_expenses(
        self,
        date_range: DateRange | None = None,
    ) -> list[Expense]:
        table = expenses_table
        stmt = _apply_range(
            select(table).where(table.c.confirmed.is_(True)),
            table,
            date_range,
        ).order_by(table.c.effective_date.desc(), table.c.id)
        rows = self._fetch(stmt, "fetching expenses")
        return [
            Expense(
                record_id=row.id,
                description=row.description or "",
                amount=coerce_decimal(row.amount),
                effective_date=row.effective_date,
                confirmed=bool(row.confirmed),
                ingested_at=row.created_at,
            )
            for row in rows
        ]

    def fetch_active_clients(self) -> list[Client]:
        clients = clients_table
        payment_count = (
            select(func.count(payments_table.c.id))
            .where(payments_table.c.client_id == clients.c.id)
            .scalar_subquery()
            .label("payment_count")
        )
        sale_count = (
            select(func.count(sales_table.c.id))
            .where(sales_table.c.client_id == clients.c.id)
            .scalar_subquery()
            .label("sale_count")
        )
        stmt = (
            select(clients, payment_count, sale_count)
            .where(clients.c.active.is_(True))
            .order_by(clients.c.balance.desc(), clients.c.id)
        )
        rows = self._fetch(stmt, "fetching active clients")
        return [
            Client(
                client_id=row.id,
                name=row.name,
                balance=coerce_decimal(row.balance),
                active=bool(row.active),
                external_id=row.external_id,
                payment_count=int(row.payment_count or 0),
                sale_count=int(row.sale_count or 0),
                updated_at=row.updated_at,
            )
            for row in rows
        ]

    def _fetch_client_records(
        self,
        table: Table,
        date_range: DateRange | None,
        action: str,
    ):
        stmt = (
            select(table, clients_table.c.name.label("client_name"))
            .select_from(
                table.outerjoin(
                    clients_table,
                    clients_table.c.id == table.c.client_id,
                )
            )
        )
        stmt = _apply_range(stmt, table, date_range).order_by(
            table.c.effective_date.desc(),
            table.c.ingested_at.desc(),
            table.c.id,
        )
        return self._fetch(stmt, action)

    def _fetch(self, stmt, action: str):
        engine = self._db_port.get_engine()
        with store_errors(action):
            with engine.connect() as conn:
                return conn.execute(stmt).all()


__all__ = ["SqlAlchemyRecordStore", "store_errors"]
