"""Domain models package."""

from .periods import (
    AllTimeSince,
    CurrentIsoWeek,
    CustomRange,
    DashboardPayload,
    LastCompleteIsoWeek,
    PeriodAggregate,
    TimeWindow,
    WindowSpec,
)
from .records import (
    RECORD_TYPES,
    Client,
    Expense,
    FinancialRecord,
    Investment,
    Payment,
    RecordCategory,
    Sale,
)

__all__ = [
    "AllTimeSince",
    "CurrentIsoWeek",
    "CustomRange",
    "DashboardPayload",
    "LastCompleteIsoWeek",
    "PeriodAggregate",
    "TimeWindow",
    "WindowSpec",
    "RECORD_TYPES",
    "Client",
    "Expense",
    "FinancialRecord",
    "Investment",
    "Payment",
    "RecordCategory",
    "Sale",
]
