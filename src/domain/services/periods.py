"""ISO week window computations.

Every boundary is derived from the civil date of the reference instant and
expressed at UTC midnight, so the evaluator's local time zone never shifts
a window by a day.
"""

from datetime import date, datetime, time, timedelta, timezone

from src.domain.models.periods import (
    AllTimeSince,
    CurrentIsoWeek,
    CustomRange,
    LastCompleteIsoWeek,
    TimeWindow,
    WindowSpec,
)

END_OF_DAY = timedelta(days=1) - timedelta(milliseconds=1)


def to_civil_date(now: date | datetime) -> date:
    """Return the civil date of ``now``.

    Aware datetimes are converted to UTC first; naive datetimes are read as
    UTC; plain dates pass through.
    """
    if isinstance(now, datetime):
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        return now.date()
    return now


def utc_midnight(day: date) -> datetime:
    """Return 00:00:00.000 UTC of ``day``."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def utc_end_of_day(day: date) -> datetime:
    """Return 23:59:59.999 UTC of ``day``."""
    return utc_midnight(day) + END_OF_DAY


def compute_current_week_window(now: date | datetime) -> TimeWindow:
    """Return the in-progress ISO week containing ``now``.

    The window starts on Monday at UTC midnight and is open-ended.
    """
    today = to_civil_date(now)
    monday = today - timedelta(days=today.weekday())
    return TimeWindow(start=utc_midnight(monday), end=None)


def current_week_end(window: TimeWindow) -> datetime:
    """Return Sunday 23:59:59.999 UTC for a current week window."""
    return window.start + timedelta(days=6) + END_OF_DAY


def compute_last_complete_week_window(now: date | datetime) -> TimeWindow:
    """Return the Monday-to-Sunday week before the one containing ``now``.

    The end is 1 ms before the current week's start.
    """
    today = to_civil_date(now)
    monday = today - timedelta(days=today.weekday() + 7)
    start = utc_midnight(monday)
    return TimeWindow(start=start, end=start + timedelta(days=6) + END_OF_DAY)


def resolve_window(spec: WindowSpec, now: date | datetime) -> TimeWindow:
    """Resolve a window specification against a reference instant."""
    if isinstance(spec, CurrentIsoWeek):
        return compute_current_week_window(now)
    if isinstance(spec, LastCompleteIsoWeek):
        return compute_last_complete_week_window(now)
    if isinstance(spec, CustomRange):
        return TimeWindow(
            start=utc_midnight(spec.start),
            end=utc_end_of_day(spec.end),
        )
    if isinstance(spec, AllTimeSince):
        return TimeWindow(start=None, end=None, honors_cutoffs=True)
    raise TypeError(f"Unsupported window specification: {spec!r}")


__all__ = [
    "to_civil_date",
    "utc_midnight",
    "utc_end_of_day",
    "compute_current_week_window",
    "current_week_end",
    "compute_last_complete_week_window",
    "resolve_window",
]
