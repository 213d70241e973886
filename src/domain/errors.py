"""Domain error taxonomy."""


class DashboardError(Exception):
    """Base class for errors raised by the dashboard core."""


class InvalidRecordError(DashboardError, ValueError):
    """Raised when a record or window fails its construction contract."""


class RecordNotFoundError(DashboardError, LookupError):
    """Raised when a record targeted by an update or delete is missing."""


class RecordStoreUnavailableError(DashboardError):
    """Raised when the persistence layer cannot be reached or queried."""


__all__ = [
    "DashboardError",
    "InvalidRecordError",
    "RecordNotFoundError",
    "RecordStoreUnavailableError",
]
