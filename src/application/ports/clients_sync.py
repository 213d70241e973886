"""Ports for synchronizing spreadsheet data into the dashboard store."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from src.domain.models import Client, Payment, Sale


@dataclass(frozen=True)
class SyncBatch:
    """Authoritative records pushed by the spreadsheet automation."""

    clients: list[Client] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)
    sales: list[Sale] = field(default_factory=list)


@dataclass(frozen=True)
class SyncedClientRef:
    """Identifiers of a client known locally."""

    client_id: str
    external_id: str | None
    active: bool


class ClientsSyncPort(Protocol):
    """Port exposing write access used by synchronization workflows."""

    def upsert_batch(self, batch: SyncBatch) -> tuple[int, int, int]:
        """Insert or update the batch; return client/payment/sale counts."""

    def fetch_client_refs(self) -> list[SyncedClientRef]:
        """Return identifiers and active flags of every local client."""

    def deactivate_clients(self, client_ids: Iterable[str]) -> int:
        """Mark the given clients inactive; return how many changed."""


__all__ = ["SyncBatch", "SyncedClientRef", "ClientsSyncPort"]
