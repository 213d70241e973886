"""JSON serialization for the HTTP adapter."""

from datetime import date, datetime, timezone
from decimal import Decimal

from src.application.ports.clients_sync import SyncBatch
from src.application.use_cases.list_client_records import ClientRecordListing
from src.domain.errors import InvalidRecordError
from src.domain.models import (
    Client,
    DashboardPayload,
    Investment,
    Payment,
    PeriodAggregate,
    Sale,
)


def format_money(value: Decimal) -> str:
    """Return a plain decimal string without exponent notation."""
    return format(value, "f")


def format_instant(value: datetime | None) -> str | None:
    """Return an ISO 8601 UTC string with millisecond precision."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc_value = value.astimezone(timezone.utc)
    return utc_value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_date(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


def serialize_aggregate(period: PeriodAggregate | None) -> dict | None:
    if period is None:
        return None
    return {
        "total": format_money(period.net_capital),
        "investments": format_money(period.investments),
        "payments": format_money(period.payments),
        "sales": format_money(period.sales),
        "expenses": format_money(period.expenses),
    }


def serialize_client_record(record: Payment | Sale) -> dict:
    return {
        "id": record.record_id,
        "date": format_date(record.effective_date),
        "amount": format_money(record.amount),
        "ingestedAt": format_instant(record.ingested_at),
        "client": {"id": record.client_id, "name": record.client_name},
    }


def serialize_client(client: Client) -> dict:
    return {
        "id": client.client_id,
        "externalId": client.external_id,
        "name": client.name,
        "balance": format_money(client.balance),
        "active": client.active,
        "paymentCount": client.payment_count,
        "saleCount": client.sale_count,
    }


def serialize_investment(investment: Investment) -> dict:
    return {
        "id": investment.record_id,
        "description": investment.description,
        "amount": format_money(investment.amount),
        "date": format_date(investment.effective_date),
        "createdAt": format_instant(investment.ingested_at),
    }


def serialize_record_listing(listing: ClientRecordListing) -> dict:
    """Return the JSON body of the payments and sales listings."""
    return {
        "records": [
            serialize_client_record(record) for record in listing.records
        ],
        "count": len(listing.records),
        "total": format_money(listing.total),
        "weekCount": listing.week_count,
        "weekTotal": format_money(listing.week_total),
        "weekStart": format_instant(listing.week_start),
        "weekEnd": format_instant(listing.week_end),
    }


def serialize_dashboard(payload: DashboardPayload) -> dict:
    """Return the JSON body of the dashboard endpoint."""
    return {
        "capital": serialize_aggregate(payload.capital),
        "currentWeek": serialize_aggregate(payload.current_week),
        "lastCompleteWeek": serialize_aggregate(payload.last_complete_week),
        "debtorBalanceTotal": format_money(payload.debtor_balance_total),
        "recentPayments": [
            serialize_client_record(record)
            for record in payload.recent_payments
        ],
        "recentSales": [
            serialize_client_record(record) for record in payload.recent_sales
        ],
        "topDebtors": [serialize_client(client) for client in payload.top_debtors],
        "computedAt": format_instant(payload.computed_at),
        "currentWeekStart": format_instant(payload.current_week_start),
        "lastWeekStart": format_instant(payload.last_week_start),
        "lastWeekEnd": format_instant(payload.last_week_end),
        "range": (
            {
                "start": format_date(payload.range_start),
                "end": format_date(payload.range_end),
            }
            if payload.is_custom_range
            else None
        ),
    }


def parse_date_param(value: str | None, name: str) -> date | None:
    """Parse an optional YYYY-MM-DD query parameter.

    Raises:
        InvalidRecordError: If the value is not an ISO date.
    """
    if value is None or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise InvalidRecordError(
            f"Invalid {name} '{value}'. Expected format YYYY-MM-DD."
        ) from exc


def _require_list(payload: dict, key: str) -> list:
    items = payload.get(key) or []
    if not isinstance(items, list):
        raise InvalidRecordError(f"{key} must be a list")
    return items


def _require_mapping(item, key: str) -> dict:
    if not isinstance(item, dict):
        raise InvalidRecordError(f"Every entry of {key} must be an object")
    return item


def _parse_active(value) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise InvalidRecordError(f"active must be a boolean, got {value!r}")


def parse_sync_batch(payload) -> SyncBatch:
    """Build a SyncBatch from the spreadsheet automation's JSON body.

    Raises:
        InvalidRecordError: If any entry fails its construction contract.
    """
    if not isinstance(payload, dict):
        raise InvalidRecordError("Request body must be a JSON object")
    clients = [
        Client(
            client_id=item.get("id"),
            external_id=item.get("externalId"),
            name=item.get("name") or "",
            balance=item.get("balance", "0"),
            active=_parse_active(item.get("active")),
        )
        for item in (
            _require_mapping(entry, "clients")
            for entry in _require_list(payload, "clients")
        )
    ]
    payments = [
        Payment(
            record_id=item.get("id"),
            client_id=item.get("clientId"),
            amount=item.get("amount"),
            effective_date=item.get("date"),
            ingested_at=item.get("ingestedAt"),
        )
        for item in (
            _require_mapping(entry, "payments")
            for entry in _require_list(payload, "payments")
        )
    ]
    sales = [
        Sale(
            record_id=item.get("id"),
            client_id=item.get("clientId"),
            amount=item.get("amount"),
            effective_date=item.get("date"),
            ingested_at=item.get("ingestedAt"),
        )
        for item in (
            _require_mapping(entry, "sales")
            for entry in _require_list(payload, "sales")
        )
    ]
    return SyncBatch(clients=clients, payments=payments, sales=sales)


__all__ = [
    "format_money",
    "format_instant",
    "format_date",
    "serialize_aggregate",
    "serialize_client",
    "serialize_client_record",
    "serialize_investment",
    "serialize_dashboard",
    "serialize_record_listing",
    "parse_date_param",
    "parse_sync_batch",
]
