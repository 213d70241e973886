"""Tests for the composition root."""

from datetime import date
from unittest.mock import MagicMock

from src.application.use_cases.get_dashboard import GetDashboardUseCase
from src.application.use_cases.list_client_records import (
    ListClientRecordsUseCase,
)
from src.domain.models import RecordCategory
from src.infrastructure import container
from src.infrastructure.auth import ApiKeyGate, SessionManager
from src.infrastructure.record_store import SqlAlchemyRecordStore
from src.infrastructure.settings import DashboardSettings


def test_build_dashboard_use_case_applies_settings(monkeypatch) -> None:
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())
    settings = DashboardSettings(
        top_n=3,
        capital_cutoffs={RecordCategory.SALE: date(2025, 1, 1)},
    )
    db_port = MagicMock()

    use_case = container.build_dashboard_use_case(db_port, settings)

    assert isinstance(use_case, GetDashboardUseCase)
    assert use_case._top_n == 3
    assert use_case._cutoffs == {RecordCategory.SALE: date(2025, 1, 1)}
    assert isinstance(use_case._record_store, SqlAlchemyRecordStore)


def test_build_session_manager_warns_without_credentials(monkeypatch) -> None:
    logger = MagicMock()
    monkeypatch.setattr(container, "get_app_logger", lambda: logger)

    manager = container.build_session_manager(DashboardSettings())

    assert isinstance(manager, SessionManager)
    logger.warning.assert_called_once()


def test_build_api_key_gate_uses_configured_key() -> None:
    gate = container.build_api_key_gate(DashboardSettings(sync_api_key="k"))

    assert isinstance(gate, ApiKeyGate)
    assert gate.is_valid("k") is True


def test_build_client_records_use_case(monkeypatch) -> None:
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())

    use_case = container.build_client_records_use_case(MagicMock())

    assert isinstance(use_case, ListClientRecordsUseCase)
    assert isinstance(use_case._record_store, SqlAlchemyRecordStore)
