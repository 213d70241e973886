"""Use case for synchronizing spreadsheet clients into the dashboard store.

The spreadsheet automation pushes authoritative clients, payments and sales,
then reports the identifiers of the client files that still exist. Clients
whose file disappeared are marked inactive rather than deleted so their
payments and sales keep a valid client reference.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from src.application.ports.clients_sync import ClientsSyncPort, SyncBatch
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class SyncPushResult:
    """Result of a batch upsert.

    Attributes:
        clients_count: Number of clients written.
        payments_count: Number of payments written.
        sales_count: Number of sales written.
    """

    clients_count: int
    payments_count: int
    sales_count: int


@dataclass(frozen=True)
class SyncCleanupResult:
    """Result of a cleanup run.

    Attributes:
        deactivated_count: Clients marked inactive by this run.
        active_count: Size of the submitted active identifier set.
    """

    deactivated_count: int
    active_count: int


class SyncClientsUseCase:
    """Apply spreadsheet synchronization to the dashboard store."""

    def __init__(self, sync_port: ClientsSyncPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            sync_port: Port providing write access to clients and records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._sync_port = sync_port
        self._logger = logger or get_app_logger()

    def push(self, batch: SyncBatch) -> SyncPushResult:
        """Insert or update the pushed clients, payments and sales."""
        clients_count, payments_count, sales_count = (
            self._sync_port.upsert_batch(batch)
        )
        self._logger.info(
            f"Upserted clients={clients_count}, payments={payments_count}, "
            f"sales={sales_count}"
        )
        return SyncPushResult(
            clients_count=clients_count,
            payments_count=payments_count,
            sales_count=sales_count,
        )

    def cleanup(self, active_external_ids: Iterable[str]) -> SyncCleanupResult:
        """Deactivate clients whose external identifier is no longer active.

        Clients without an external identifier were not created by the sync
        and are left untouched. Running the same cleanup twice changes
        nothing the second time.

        Args:
            active_external_ids: Identifiers of the source files that exist.

        Returns:
            SyncCleanupResult: Number of clients deactivated by this run.
        """
        active_ids = {
            str(value).strip() for value in active_external_ids
            if value is not None and str(value).strip()
        }
        stale = sorted(
            ref.client_id
            for ref in self._sync_port.fetch_client_refs()
            if ref.active
            and ref.external_id is not None
            and ref.external_id not in active_ids
        )
        deactivated = self._sync_port.deactivate_clients(stale) if stale else 0
        self._logger.info(
            f"Marked {deactivated} clients inactive "
            f"(active files: {len(active_ids)})"
        )
        return SyncCleanupResult(
            deactivated_count=deactivated,
            active_count=len(active_ids),
        )


__all__ = ["SyncClientsUseCase", "SyncPushResult", "SyncCleanupResult"]
