"""Domain constants for capital analytics."""

from datetime import date

from src.domain.models.records import RecordCategory

CAPITAL_ACCOUNTING_START = date(2025, 11, 4)

DEFAULT_CAPITAL_CUTOFFS = {
    RecordCategory.PAYMENT: CAPITAL_ACCOUNTING_START,
    RecordCategory.SALE: CAPITAL_ACCOUNTING_START,
}

DEFAULT_TOP_N = 10


__all__ = [
    "CAPITAL_ACCOUNTING_START",
    "DEFAULT_CAPITAL_CUTOFFS",
    "DEFAULT_TOP_N",
]
