"""Tests for the GetClientsUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.get_clients import GetClientsUseCase
from src.domain.models import Client


def _store() -> MagicMock:
    store = MagicMock()
    store.fetch_active_clients.return_value = [
        Client(client_id="c1", name="Ana", balance=Decimal("10")),
        Client(client_id="c2", name="Beto", balance=Decimal("0")),
        Client(client_id="c3", name="Caro", balance=Decimal("90")),
        Client(client_id="c4", name="Dani", balance=Decimal("50"), active=False),
    ]
    return store


def test_execute_returns_active_clients_by_balance() -> None:
    use_case = GetClientsUseCase(record_store=_store(), logger=MagicMock())

    clients = use_case.execute()

    assert [client.client_id for client in clients] == ["c3", "c1", "c2"]


def test_execute_can_limit_to_debtors() -> None:
    use_case = GetClientsUseCase(record_store=_store(), logger=MagicMock())

    clients = use_case.execute(only_debtors=True)

    assert [client.client_id for client in clients] == ["c3", "c1"]
