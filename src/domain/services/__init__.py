"""Domain services package."""

from .aggregation import (
    aggregate,
    aggregate_for,
    net_capital,
    top_debtors,
    top_recent,
    total_debtor_balance,
)
from .periods import (
    compute_current_week_window,
    compute_last_complete_week_window,
    current_week_end,
    resolve_window,
    to_civil_date,
    utc_end_of_day,
    utc_midnight,
)

__all__ = [
    "aggregate",
    "aggregate_for",
    "net_capital",
    "top_debtors",
    "top_recent",
    "total_debtor_balance",
    "compute_current_week_window",
    "compute_last_complete_week_window",
    "current_week_end",
    "resolve_window",
    "to_civil_date",
    "utc_end_of_day",
    "utc_midnight",
]
