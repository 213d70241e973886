"""Port for hand-entered investments."""

from typing import Protocol

from src.domain.models import Investment


class InvestmentsRepositoryPort(Protocol):
    """Port exposing CRUD access to investments."""

    def list_investments(self) -> list[Investment]:
        """Return investments, most recent first."""

    def get_investment(self, record_id: str) -> Investment | None:
        """Return one investment or None when missing."""

    def save_investment(self, investment: Investment) -> Investment:
        """Insert or replace an investment."""

    def delete_investment(self, record_id: str) -> bool:
        """Delete an investment; return False when it did not exist."""


__all__ = ["InvestmentsRepositoryPort"]
