"""Construction contract shared by financial records and clients."""

from datetime import date, datetime, timezone
from decimal import Decimal

from src.domain.errors import InvalidRecordError
from src.utils.decimal_utils import coerce_decimal


def _parse_date_string(value: str, field_name: str) -> date | datetime:
    """Parse ``YYYY-MM-DD`` or a full ISO 8601 timestamp.

    Timestamps are returned as datetimes so their offset is honored when
    reducing them to a UTC civil date.
    """
    cleaned = value.strip()
    try:
        if len(cleaned) == 10:
            return date.fromisoformat(cleaned)
        return datetime.fromisoformat(cleaned.replace("Z", "+00:00"))
    except ValueError as exc:
        raise InvalidRecordError(
            f"{field_name} must be a YYYY-MM-DD date, got {value!r}"
        ) from exc


def require_civil_date(value, field_name: str) -> date:
    """Return ``value`` as a civil date or raise.

    Args:
        value: Raw date, datetime, or ISO ``YYYY-MM-DD`` string.
        field_name: Field name used in error messages.

    Returns:
        date: Calendar date without time-of-day.

    Raises:
        InvalidRecordError: If the value is missing or not a date.
    """
    if value is None:
        raise InvalidRecordError(f"{field_name} is required")
    if isinstance(value, str):
        value = _parse_date_string(value, field_name)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    raise InvalidRecordError(
        f"{field_name} must be a date, got {type(value).__name__}"
    )


def require_non_negative_amount(value, field_name: str) -> Decimal:
    """Return ``value`` as a non-negative Decimal or raise.

    Raises:
        InvalidRecordError: If the value is missing, unreadable or negative.
    """
    if value is None:
        raise InvalidRecordError(f"{field_name} is required")
    try:
        amount = coerce_decimal(value)
    except ValueError as exc:
        raise InvalidRecordError(str(exc)) from exc
    if amount < 0:
        raise InvalidRecordError(f"{field_name} must not be negative: {amount}")
    return amount


def normalize_instant(value) -> datetime | None:
    """Return an aware UTC datetime; naive values are read as UTC."""
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise InvalidRecordError(
                f"Invalid timestamp: {value!r}"
            ) from exc
    if not isinstance(value, datetime):
        raise InvalidRecordError(
            f"Timestamp must be a datetime, got {type(value).__name__}"
        )
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def require_identifier(value, field_name: str) -> str:
    """Return a stripped, non-empty identifier or raise."""
    if value is None or not str(value).strip():
        raise InvalidRecordError(f"{field_name} is required")
    return str(value).strip()


__all__ = [
    "require_civil_date",
    "require_non_negative_amount",
    "normalize_instant",
    "require_identifier",
]
