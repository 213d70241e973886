"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from datetime import date, timedelta
from decimal import Decimal

import streamlit as st
import altair as alt

from src.application.use_cases.get_dashboard import GetDashboardUseCase
from src.domain.models import (
    Client,
    DashboardPayload,
    Payment,
    PeriodAggregate,
    Sale,
)
from src.infrastructure.auth import SessionManager
from src.infrastructure.container import (
    build_dashboard_use_case,
    build_session_manager,
)

CATEGORY_LABELS = (
    ("investments", "Investments"),
    ("payments", "Payments"),
    ("sales", "Sales"),
    ("expenses", "Expenses"),
)


def _fetch_dashboard(
    start_date: date | None,
    end_date: date | None,
) -> DashboardPayload:
    """Fetch the dashboard payload from the record store."""
    use_case: GetDashboardUseCase = build_dashboard_use_case()
    return use_case.execute(start=start_date, end=end_date)


@st.cache_data(ttl=60, show_spinner=False)
def _load_dashboard(
    start_date: date | None,
    end_date: date | None,
    schema_version: int = 1,
) -> DashboardPayload:
    """Cached wrapper around _fetch_dashboard."""
    _ = schema_version
    return _fetch_dashboard(start_date, end_date)


@st.cache_resource
def _session_manager() -> SessionManager:
    """Session manager shared by every Streamlit session."""
    return build_session_manager()


def _format_currency(value: Decimal) -> str:
    """Format amounts as whole pesos with dot thousands separators."""
    rounded = f"{value:,.0f}".replace(",", ".")
    return f"$ {rounded}"


def _format_date(value: date) -> str:
    """Format civil dates as dd/mm/yyyy."""
    return value.strftime("%d/%m/%Y")


def _format_delta(value: Decimal) -> str:
    """Format delta values for display."""
    sign = "+" if value >= 0 else "-"
    return f"{sign}{_format_currency(abs(value))}"


def _render_period_metrics(
    title: str,
    period: PeriodAggregate,
    baseline: PeriodAggregate | None = None,
) -> None:
    """Render net capital and category sums for one window."""
    st.subheader(title)
    delta = (
        _format_delta(period.net_capital - baseline.net_capital)
        if baseline is not None
        else None
    )
    columns = st.columns(5)
    columns[0].metric("Capital", _format_currency(period.net_capital), delta)
    for column, (field_name, label) in zip(columns[1:], CATEGORY_LABELS):
        column.metric(label, _format_currency(getattr(period, field_name)))


def _prepare_capital_chart_data(
    payload: DashboardPayload,
) -> list[dict[str, str | float]]:
    """Prepare Altair rows with one entry per window and category."""
    windows = [("Capital", payload.capital)]
    if payload.last_complete_week is not None:
        windows.append(("Last week", payload.last_complete_week))
    if payload.current_week is not None:
        windows.append(("This week", payload.current_week))
    data: list[dict[str, str | float]] = []
    for window_name, period in windows:
        for field_name, label in CATEGORY_LABELS:
            amount = getattr(period, field_name)
            data.append(
                {
                    "window": window_name,
                    "category": label,
                    "amount": float(amount),
                    "amount_label": _format_currency(amount),
                }
            )
    return data


def _render_capital_chart(payload: DashboardPayload) -> None:
    """Render grouped bars of category sums per window."""
    data = _prepare_capital_chart_data(payload)
    if not any(row["amount"] for row in data):
        st.info("No amounts recorded for these windows yet.")
        return
    chart = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusTopLeft=4,
        cornerRadiusTopRight=4,
    ).encode(
        x=alt.X("category:N", title=None),
        xOffset="window:N",
        y=alt.Y("amount:Q", title=None),
        color=alt.Color(
            "window:N",
            scale=alt.Scale(range=["#1b9aaa", "#f4a261", "#2e7d32"]),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("window:N"),
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
        ],
    ).properties(height=320)
    st.altair_chart(chart, width="stretch")


def _activity_rows(records: Sequence[Payment | Sale]) -> list[dict[str, str]]:
    return [
        {
            "Date": _format_date(record.effective_date),
            "Client": record.client_name or "-",
            "Amount": _format_currency(record.amount),
        }
        for record in records
    ]


def _debtor_rows(clients: Sequence[Client]) -> list[dict[str, str]]:
    return [
        {"Client": client.name, "Balance": _format_currency(client.balance)}
        for client in clients
    ]


def _render_listing(title: str, rows: list[dict[str, str]], empty: str) -> None:
    st.subheader(title)
    if not rows:
        st.caption(empty)
        return
    st.dataframe(rows, width="stretch", hide_index=True)


def _render_login() -> bool:
    """Show the login form until the operator holds a valid session."""
    manager = _session_manager()
    if manager.is_valid(st.session_state.get("session_token")):
        return True
    with st.form("login"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")
    if submitted:
        token = manager.login(username, password)
        if token is None:
            st.error("Invalid credentials")
            return False
        st.session_state["session_token"] = token
        return True
    return False


def _select_range(today: date) -> tuple[date | None, date | None]:
    """Return the custom range chosen in the sidebar, if any."""
    mode = st.sidebar.radio("Period", ["Weekly", "Custom range"])
    if mode != "Custom range":
        return None, None
    start_date = st.sidebar.date_input("From", today - timedelta(days=30))
    end_date = st.sidebar.date_input("To", today)
    if start_date > end_date:
        st.sidebar.warning("The start date must not be after the end date.")
        return None, None
    return start_date, end_date


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Capital Dashboard", layout="wide")
    st.title("Capital Dashboard")

    if not _render_login():
        return

    start_date, end_date = _select_range(date.today())
    payload = _load_dashboard(start_date, end_date, schema_version=1)
    st.caption(
        "Updated "
        f"{payload.computed_at.strftime('%d/%m/%Y %H:%M')} UTC"
    )

    if payload.is_custom_range:
        _render_period_metrics(
            f"{_format_date(payload.range_start)} – "
            f"{_format_date(payload.range_end)}",
            payload.capital,
        )
    else:
        _render_period_metrics(
            "This week",
            payload.current_week,
            baseline=payload.last_complete_week,
        )
        _render_period_metrics("Last complete week", payload.last_complete_week)
        _render_period_metrics("Capital", payload.capital)

    st.metric(
        "Outstanding client balances",
        _format_currency(payload.debtor_balance_total),
    )
    _render_capital_chart(payload)

    payments_col, sales_col, debtors_col = st.columns(3)
    with payments_col:
        _render_listing(
            "Recent payments",
            _activity_rows(payload.recent_payments),
            "No payments recorded.",
        )
    with sales_col:
        _render_listing(
            "Recent sales",
            _activity_rows(payload.recent_sales),
            "No sales recorded.",
        )
    with debtors_col:
        _render_listing(
            "Top debtors",
            _debtor_rows(payload.top_debtors),
            "No outstanding balances.",
        )


if __name__ == "__main__":  # pragma: no cover
    main()
