"""Use case for hand-entered investments."""

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
import uuid

from src.application.ports.investments_repository import (
    InvestmentsRepositoryPort,
)
from src.domain.errors import InvalidRecordError, RecordNotFoundError
from src.domain.models import Investment
from src.infrastructure.logging.logger import get_app_logger


def _clean_description(value) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidRecordError(
            f"description must be a string, got {type(value).__name__}"
        )
    return value.strip()


class ManageInvestmentsUseCase:
    """List, create, update and delete investments."""

    def __init__(
        self,
        repository: InvestmentsRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing CRUD access to investments.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def list_all(self) -> list[Investment]:
        return self._repository.list_investments()

    def create(self, description: str, amount, effective_date) -> Investment:
        """Create an investment.

        Raises:
            InvalidRecordError: If the description, amount or date is invalid.
        """
        investment = Investment(
            record_id=uuid.uuid4().hex,
            description=_clean_description(description),
            amount=amount,
            effective_date=effective_date,
            ingested_at=datetime.now(timezone.utc),
        )
        saved = self._repository.save_investment(investment)
        self._logger.info(
            f"Created investment {saved.record_id} amount={saved.amount}"
        )
        return saved

    def update(
        self,
        record_id: str,
        description: str | None = None,
        amount: Decimal | None = None,
        effective_date=None,
    ) -> Investment:
        """Update the given fields of an investment.

        Raises:
            RecordNotFoundError: If the investment does not exist.
            InvalidRecordError: If a new value is invalid.
        """
        current = self._repository.get_investment(record_id)
        if current is None:
            raise RecordNotFoundError(f"Investment not found: {record_id}")
        changes = {}
        if description is not None:
            changes["description"] = _clean_description(description)
        if amount is not None:
            changes["amount"] = amount
        if effective_date is not None:
            changes["effective_date"] = effective_date
        saved = self._repository.save_investment(replace(current, **changes))
        self._logger.info(f"Updated investment {record_id}")
        return saved

    def delete(self, record_id: str) -> None:
        """Delete an investment.

        Raises:
            RecordNotFoundError: If the investment does not exist.
        """
        if not self._repository.delete_investment(record_id):
            raise RecordNotFoundError(f"Investment not found: {record_id}")
        self._logger.info(f"Deleted investment {record_id}")


__all__ = ["ManageInvestmentsUseCase"]
