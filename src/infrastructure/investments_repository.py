"""SQLAlchemy-backed repository for hand-entered investments."""

from sqlalchemy import delete, select

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.investments_repository import (
    InvestmentsRepositoryPort,
)
from src.domain.models import Investment
from src.infrastructure.record_store import store_errors
from src.infrastructure.schema import investments_table, upsert_row
from src.utils.decimal_utils import coerce_decimal


def _to_investment(row) -> Investment:
    return Investment(
        record_id=row.id,
        description=row.description or "",
        amount=coerce_decimal(row.amount),
        effective_date=row.effective_date,
        ingested_at=row.created_at,
    )


class SqlAlchemyInvestmentsRepository(InvestmentsRepositoryPort):
    """Repository backed by SQLAlchemy for investments."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the dashboard engine.
        """
        self._db_port = db_port

    def list_investments(self) -> list[Investment]:
        """Return investments, most recent first."""
        stmt = select(investments_table).order_by(
            investments_table.c.effective_date.desc(),
            investments_table.c.created_at.desc(),
        )
        engine = self._db_port.get_engine()
        with store_errors("listing investments"):
            with engine.connect() as conn:
                rows = conn.execute(stmt).all()
        return [_to_investment(row) for row in rows]

    def get_investment(self, record_id: str) -> Investment | None:
        stmt = select(investments_table).where(
            investments_table.c.id == record_id
        )
        engine = self._db_port.get_engine()
        with store_errors("reading investment"):
            with engine.connect() as conn:
                row = conn.execute(stmt).first()
        return _to_investment(row) if row is not None else None

    def save_investment(self, investment: Investment) -> Investment:
        engine = self._db_port.get_engine()
        with store_errors("saving investment"):
            with engine.begin() as conn:
                upsert_row(
                    conn,
                    investments_table,
                    {
                        "id": investment.record_id,
                        "description": investment.description,
                        "amount": investment.amount,
                        "effective_date": investment.effective_date,
                        "created_at": investment.ingested_at,
                    },
                )
        return investment

    def delete_investment(self, record_id: str) -> bool:
        stmt = delete(investments_table).where(
            investments_table.c.id == record_id
        )
        engine = self._db_port.get_engine()
        with store_errors("deleting investment"):
            with engine.begin() as conn:
                deleted = conn.execute(stmt).rowcount
        return deleted > 0


__all__ = ["SqlAlchemyInvestmentsRepository"]
