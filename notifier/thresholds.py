"""
Threshold classification for obligation deadlines.

Pure functions: given "now" and a deadline, work out how many (partial)
days are left and which notification threshold, if any, that falls into.
"""
from datetime import datetime, timedelta
from typing import Optional
import pytz

from .scheduler_config import THRESHOLD_BANDS, MILLISECONDS_PER_DAY


def _as_utc(value: datetime) -> datetime:
    """Naive datetimes are stored as UTC."""
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


def days_until(deadline_at: datetime, now: datetime) -> int:
    """
    Whole days until the deadline, rounded up.

    Calendar-agnostic: elapsed milliseconds divided by one day, so any
    partial day remaining counts as a full day. Negative when overdue.
    """
    elapsed_ms = (_as_utc(deadline_at) - _as_utc(now)) // timedelta(milliseconds=1)
    return -(-elapsed_ms // MILLISECONDS_PER_DAY)


def classify_threshold(days: int) -> Optional[int]:
    """Return the threshold (30, 7 or 1) whose band contains ``days``."""
    for threshold, (low, high) in THRESHOLD_BANDS.items():
        if low <= days <= high:
            return threshold
    return None


def threshold_for_deadline(deadline_at: datetime, now: datetime) -> Optional[int]:
    return classify_threshold(days_until(deadline_at, now))
