"""Use case to list active clients."""

from src.application.ports.record_store import RecordStorePort
from src.domain.models import Client
from src.infrastructure.logging.logger import get_app_logger


class GetClientsUseCase:
    """Return active clients ordered by outstanding balance."""

    def __init__(self, record_store: RecordStorePort, logger=None) -> None:
        self._record_store = record_store
        self._logger = logger or get_app_logger()

    def execute(self, only_debtors: bool = False) -> list[Client]:
        """Return active clients, largest balance first.

        Args:
            only_debtors: Keep only clients with a positive balance.
        """
        clients = [
            client for client in self._record_store.fetch_active_clients()
            if client.active and (not only_debtors or client.balance > 0)
        ]
        self._logger.info(
            f"Listing {len(clients)} clients (only_debtors={only_debtors})"
        )
        return sorted(clients, key=lambda client: client.balance, reverse=True)


__all__ = ["GetClientsUseCase"]
