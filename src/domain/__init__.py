"""Domain package for business rules and core models."""

from .constants import (
    CAPITAL_ACCOUNTING_START,
    DEFAULT_CAPITAL_CUTOFFS,
    DEFAULT_TOP_N,
)
from .errors import (
    DashboardError,
    InvalidRecordError,
    RecordNotFoundError,
    RecordStoreUnavailableError,
)
from .models import (
    AllTimeSince,
    Client,
    CurrentIsoWeek,
    CustomRange,
    DashboardPayload,
    Expense,
    FinancialRecord,
    Investment,
    LastCompleteIsoWeek,
    Payment,
    PeriodAggregate,
    RecordCategory,
    Sale,
    TimeWindow,
)
from .services import (
    aggregate,
    aggregate_for,
    compute_current_week_window,
    compute_last_complete_week_window,
    net_capital,
    resolve_window,
    top_debtors,
    top_recent,
    total_debtor_balance,
)

__all__ = [
    "CAPITAL_ACCOUNTING_START",
    "DEFAULT_CAPITAL_CUTOFFS",
    "DEFAULT_TOP_N",
    "DashboardError",
    "InvalidRecordError",
    "RecordNotFoundError",
    "RecordStoreUnavailableError",
    "AllTimeSince",
    "Client",
    "CurrentIsoWeek",
    "CustomRange",
    "DashboardPayload",
    "Expense",
    "FinancialRecord",
    "Investment",
    "LastCompleteIsoWeek",
    "Payment",
    "PeriodAggregate",
    "RecordCategory",
    "Sale",
    "TimeWindow",
    "aggregate",
    "aggregate_for",
    "compute_current_week_window",
    "compute_last_complete_week_window",
    "net_capital",
    "resolve_window",
    "top_debtors",
    "top_recent",
    "total_debtor_balance",
]
