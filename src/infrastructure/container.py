"""Composition root for wiring infrastructure adapters."""

from datetime import timedelta

from src.application.ports.clients_sync import ClientsSyncPort
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.investments_repository import (
    InvestmentsRepositoryPort,
)
from src.application.ports.record_store import RecordStorePort
from src.application.use_cases.get_clients import GetClientsUseCase
from src.application.use_cases.get_dashboard import GetDashboardUseCase
from src.application.use_cases.list_client_records import (
    ListClientRecordsUseCase,
)
from src.application.use_cases.manage_investments import (
    ManageInvestmentsUseCase,
)
from src.application.use_cases.sync_clients import SyncClientsUseCase
from src.infrastructure.auth import ApiKeyGate, SessionManager
from src.infrastructure.clients_sync import SqlAlchemyClientsSync
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.investments_repository import (
    SqlAlchemyInvestmentsRepository,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.record_store import SqlAlchemyRecordStore
from src.infrastructure.settings import DashboardSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_record_store(
    db_port: DatabaseEnginePort | None = None,
) -> RecordStorePort:
    """Return the record store used for dashboard reads."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyRecordStore(resolved_db)


def build_clients_sync(
    db_port: DatabaseEnginePort | None = None,
) -> ClientsSyncPort:
    """Return the synchronization destination adapter."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyClientsSync(resolved_db)


def build_investments_repository(
    db_port: DatabaseEnginePort | None = None,
) -> InvestmentsRepositoryPort:
    """Return the investments repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyInvestmentsRepository(resolved_db)


def build_dashboard_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: DashboardSettings | None = None,
) -> GetDashboardUseCase:
    """Return the dashboard use case configured from settings."""
    resolved_settings = settings or DashboardSettings.from_env()
    return GetDashboardUseCase(
        record_store=build_record_store(db_port),
        logger=get_app_logger(),
        cutoffs=resolved_settings.capital_cutoffs,
        top_n=resolved_settings.top_n,
    )


def build_clients_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetClientsUseCase:
    """Return the client listing use case."""
    return GetClientsUseCase(
        record_store=build_record_store(db_port),
        logger=get_app_logger(),
    )


def build_client_records_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> ListClientRecordsUseCase:
    """Return the payments and sales listing use case."""
    return ListClientRecordsUseCase(
        record_store=build_record_store(db_port),
        logger=get_app_logger(),
    )


def build_sync_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> SyncClientsUseCase:
    """Return the synchronization use case."""
    return SyncClientsUseCase(
        sync_port=build_clients_sync(db_port),
        logger=get_app_logger(),
    )


def build_investments_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> ManageInvestmentsUseCase:
    """Return the investments CRUD use case."""
    return ManageInvestmentsUseCase(
        repository=build_investments_repository(db_port),
        logger=get_app_logger(),
    )


def build_session_manager(
    settings: DashboardSettings | None = None,
) -> SessionManager:
    """Return the operator session manager."""
    resolved_settings = settings or DashboardSettings.from_env()
    if not resolved_settings.username or not resolved_settings.password:
        get_app_logger().warning(
            "APP_USERNAME/APP_PASSWORD are not set; operator login is disabled"
        )
    return SessionManager(
        username=resolved_settings.username,
        password=resolved_settings.password,
        ttl=timedelta(minutes=resolved_settings.session_ttl_minutes),
    )


def build_api_key_gate(
    settings: DashboardSettings | None = None,
) -> ApiKeyGate:
    """Return the sync API key gate."""
    resolved_settings = settings or DashboardSettings.from_env()
    return ApiKeyGate(resolved_settings.sync_api_key)


__all__ = [
    "build_database_adapter",
    "build_record_store",
    "build_clients_sync",
    "build_investments_repository",
    "build_dashboard_use_case",
    "build_clients_use_case",
    "build_client_records_use_case",
    "build_sync_use_case",
    "build_investments_use_case",
    "build_session_manager",
    "build_api_key_gate",
]
