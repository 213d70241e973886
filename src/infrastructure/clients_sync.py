"""Infrastructure adapter applying spreadsheet synchronization via SQLAlchemy."""

from collections.abc import Iterable
from datetime import datetime, timezone

from sqlalchemy import select, update

from src.application.ports.clients_sync import (
    ClientsSyncPort,
    SyncBatch,
    SyncedClientRef,
)
from src.application.ports.database import DatabaseEnginePort
from src.infrastructure.record_store import store_errors
from src.infrastructure.schema import (
    clients_table,
    payments_table,
    sales_table,
    upsert_row,
)


class SqlAlchemyClientsSync(ClientsSyncPort):
    """Synchronization destination backed by the dashboard database."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the adapter.

        Args:
            db_port: Port providing access to the dashboard engine.
        """
        self._db_port = db_port

    def upsert_batch(self, batch: SyncBatch) -> tuple[int, int, int]:
        """Write the batch in a single transaction.

        Args:
            batch: Clients, payments and sales to insert or update.

        Returns:
            tuple[int, int, int]: Client, payment and sale counts written.
        """
        now = datetime.now(timezone.utc)
        engine = self._db_port.get_engine()
        with store_errors("upserting sync batch"):
            with engine.begin() as conn:
                for client in batch.clients:
                    upsert_row(
                        conn,
                        clients_table,
                        {
                            "id": client.client_id,
                            "external_id": client.external_id,
                            "name": client.name,
                            "balance": client.balance,
                            "active": client.active,
                            "updated_at": now,
                        },
                    )
                for table, records in (
                    (payments_table, batch.payments),
                    (sales_table, batch.sales),
                ):
                    for record in records:
                        upsert_row(
                            conn,
                            table,
                            {
                                "id": record.record_id,
                                "client_id": record.client_id,
                                "amount": record.amount,
                                "effective_date": record.effective_date,
                                "ingested_at": record.ingested_at or now,
                            },
                        )
        return len(batch.clients), len(batch.payments), len(batch.sales)

    def fetch_client_refs(self) -> list[SyncedClientRef]:
        """Return identifiers and active flags of every local client."""
        stmt = select(
            clients_table.c.id,
            clients_table.c.external_id,
            clients_table.c.active,
        ).order_by(clients_table.c.id)
        engine = self._db_port.get_engine()
        with store_errors("fetching client references"):
            with engine.connect() as conn:
                rows = conn.execute(stmt).all()
        return [
            SyncedClientRef(
                client_id=row.id,
                external_id=row.external_id,
                active=bool(row.active),
            )
            for row in rows
        ]

    def deactivate_clients(self, client_ids: Iterable[str]) -> int:
        """Mark clients inactive without deleting them.

        Args:
            client_ids: Identifiers of the clients to deactivate.

        Returns:
            int: Number of clients whose active flag changed.
        """
        ids = sorted(set(client_ids))
        if not ids:
            return 0
        stmt = (
            update(clients_table)
            .where(clients_table.c.id.in_(ids))
            .where(clients_table.c.active.is_(True))
            .values(active=False, updated_at=datetime.now(timezone.utc))
        )
        engine = self._db_port.get_engine()
        with store_errors("deactivating clients"):
            with engine.begin() as conn:
                deactivated = conn.execute(stmt).rowcount
        return deactivated


__all__ = ["SqlAlchemyClientsSync"]
