"""Application use cases package."""

from .get_clients import GetClientsUseCase
from .get_dashboard import GetDashboardUseCase
from .list_client_records import ClientRecordListing, ListClientRecordsUseCase
from .manage_investments import ManageInvestmentsUseCase
from .sync_clients import (
    SyncCleanupResult,
    SyncClientsUseCase,
    SyncPushResult,
)

__all__ = [
    "ClientRecordListing",
    "GetClientsUseCase",
    "GetDashboardUseCase",
    "ListClientRecordsUseCase",
    "ManageInvestmentsUseCase",
    "SyncCleanupResult",
    "SyncClientsUseCase",
    "SyncPushResult",
]
