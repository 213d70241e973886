"""Domain policies package."""

from .record_contract import (
    normalize_instant,
    require_civil_date,
    require_identifier,
    require_non_negative_amount,
)

__all__ = [
    "normalize_instant",
    "require_civil_date",
    "require_identifier",
    "require_non_negative_amount",
]
