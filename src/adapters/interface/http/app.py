"""Flask JSON API for the dashboard, operator login and spreadsheet sync."""

from dataclasses import dataclass
from functools import wraps
import os

from flask import Blueprint, Flask, current_app, jsonify, request

from src.application.use_cases.get_clients import GetClientsUseCase
from src.application.use_cases.get_dashboard import GetDashboardUseCase
from src.application.use_cases.list_client_records import (
    ListClientRecordsUseCase,
)
from src.application.use_cases.manage_investments import (
    ManageInvestmentsUseCase,
)
from src.application.use_cases.sync_clients import SyncClientsUseCase
from src.adapters.interface.http.serializers import (
    parse_date_param,
    parse_sync_batch,
    serialize_client,
    serialize_dashboard,
    serialize_investment,
    serialize_record_listing,
)
from src.domain.errors import (
    InvalidRecordError,
    RecordNotFoundError,
    RecordStoreUnavailableError,
)
from src.infrastructure import container
from src.infrastructure.auth import ApiKeyGate, SessionManager
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.infrastructure.settings import DashboardSettings

EXTENSION_KEY = "capital_dashboard"

bp = Blueprint("api", __name__, url_prefix="/api")


@dataclass
class ApiServices:
    """Use cases and gates served by the API."""

    dashboard: GetDashboardUseCase
    clients: GetClientsUseCase
    sync: SyncClientsUseCase
    investments: ManageInvestmentsUseCase
    records: ListClientRecordsUseCase
    sessions: SessionManager
    api_keys: ApiKeyGate


def build_api_services() -> ApiServices:
    """Wire the API services from environment configuration."""
    settings = DashboardSettings.from_env()
    db_port = container.build_database_adapter()
    return ApiServices(
        dashboard=container.build_dashboard_use_case(db_port, settings),
        clients=container.build_clients_use_case(db_port),
        sync=container.build_sync_use_case(db_port),
        investments=container.build_investments_use_case(db_port),
        records=container.build_client_records_use_case(db_port),
        sessions=container.build_session_manager(settings),
        api_keys=container.build_api_key_gate(settings),
    )


def _services() -> ApiServices:
    return current_app.extensions[EXTENSION_KEY]


def _bearer_token() -> str | None:
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[len("Bearer "):].strip()
    return None


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def require_auth(allow_session: bool = True):
    """Reject requests lacking the API key or, optionally, a session token."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            services = _services()
            if services.api_keys.is_valid(_bearer_token()):
                return view(*args, **kwargs)
            session_token = request.headers.get("X-Session-Token")
            if allow_session and services.sessions.is_valid(session_token):
                return view(*args, **kwargs)
            get_usage_logger().warning(
                f"Unauthorized {request.method} {request.path}"
            )
            return _error("Unauthorized", 401)

        return wrapper

    return decorator


@bp.post("/auth")
def login():
    body = request.get_json(silent=True) or {}
    token = _services().sessions.login(
        body.get("username"),
        body.get("password"),
    )
    if token is None:
        return jsonify({"success": False, "error": "Invalid credentials"}), 401
    return jsonify({"success": True, "sessionToken": token})


@bp.get("/dashboard")
@require_auth()
def dashboard():
    start = parse_date_param(request.args.get("start"), "start")
    end = parse_date_param(request.args.get("end"), "end")
    payload = _services().dashboard.execute(start=start, end=end)
    get_usage_logger().info(f"Dashboard served (start={start}, end={end})")
    return jsonify(serialize_dashboard(payload))


@bp.get("/clients")
@require_auth()
def clients():
    only_debtors = request.args.get("debtors", "").lower() == "true"
    listing = _services().clients.execute(only_debtors=only_debtors)
    return jsonify([serialize_client(client) for client in listing])


@bp.get("/payments")
@require_auth()
def payments():
    listing = _services().records.payments()
    return jsonify(serialize_record_listing(listing))


@bp.get("/sales")
@require_auth()
def sales():
    listing = _services().records.sales()
    return jsonify(serialize_record_listing(listing))


@bp.get("/investments")
@require_auth()
def list_investments():
    investments = _services().investments.list_all()
    return jsonify([serialize_investment(item) for item in investments])


@bp.post("/investments")
@require_auth()
def create_investment():
    body = request.get_json(silent=True) or {}
    investment = _services().investments.create(
        description=body.get("description", ""),
        amount=body.get("amount"),
        effective_date=body.get("date"),
    )
    return jsonify(serialize_investment(investment)), 201


@bp.put("/investments/<record_id>")
@require_auth()
def update_investment(record_id: str):
    body = request.get_json(silent=True) or {}
    investment = _services().investments.update(
        record_id,
        description=body.get("description"),
        amount=body.get("amount"),
        effective_date=body.get("date"),
    )
    return jsonify(serialize_investment(investment))


@bp.delete("/investments/<record_id>")
@require_auth()
def delete_investment(record_id: str):
    _services().investments.delete(record_id)
    return jsonify({"success": True})


@bp.post("/sync/push")
@require_auth(allow_session=False)
def sync_push():
    batch = parse_sync_batch(request.get_json(silent=True))
    result = _services().sync.push(batch)
    return jsonify(
        {
            "success": True,
            "clients": result.clients_count,
            "payments": result.payments_count,
            "sales": result.sales_count,
        }
    )


@bp.post("/sync/cleanup")
@require_auth(allow_session=False)
def sync_cleanup():
    body = request.get_json(silent=True) or {}
    active_ids = body.get("activeExternalIds")
    if not isinstance(active_ids, list):
        return _error("activeExternalIds must be a list", 400)
    result = _services().sync.cleanup(active_ids)
    return jsonify(
        {
            "success": True,
            "deactivatedClients": result.deactivated_count,
            "activeExternalIds": result.active_count,
        }
    )


def _handle_invalid(exc: InvalidRecordError):
    return _error(str(exc), 400)


def _handle_not_found(exc: RecordNotFoundError):
    return _error(str(exc), 404)


def _handle_store_unavailable(exc: RecordStoreUnavailableError):
    get_app_logger().error(str(exc))
    return _error("Record store unavailable", 503)


def create_app(services: ApiServices | None = None) -> Flask:
    """Create the Flask application.

    Args:
        services: Pre-built services; wired from the environment when None.

    Returns:
        Flask: Application exposing the ``/api`` blueprint.
    """
    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = services or build_api_services()
    app.register_blueprint(bp)
    app.register_error_handler(InvalidRecordError, _handle_invalid)
    app.register_error_handler(RecordNotFoundError, _handle_not_found)
    app.register_error_handler(
        RecordStoreUnavailableError,
        _handle_store_unavailable,
    )
    return app


def main() -> None:
    """Serve the API with the Flask development server."""
    app = create_app()
    app.run(
        host=os.getenv("API_HOST", "127.0.0.1"),
        port=int(os.getenv("API_PORT", "5000")),
    )


__all__ = ["ApiServices", "build_api_services", "create_app", "main", "bp"]


if __name__ == "__main__":  # pragma: no cover
    main()
