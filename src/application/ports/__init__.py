"""Application ports package."""

from .clients_sync import ClientsSyncPort, SyncBatch, SyncedClientRef
from .database import DatabaseEnginePort
from .investments_repository import InvestmentsRepositoryPort
from .record_store import DateRange, RecordStorePort

__all__ = [
    "ClientsSyncPort",
    "SyncBatch",
    "SyncedClientRef",
    "DatabaseEnginePort",
    "InvestmentsRepositoryPort",
    "DateRange",
    "RecordStorePort",
]
