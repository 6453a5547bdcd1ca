from __future__ import annotations

import numpy as np
import pandas as pd


CALENDAR_BASE = 365
BUSINESS_BASE = 252


def to_date(value) -> pd.Timestamp:
    """
    Normalize a date-like value to a tz-naive midnight Timestamp.

    Accepts datetime.date, datetime.datetime, ISO strings and pd.Timestamp.
    """
    ts = pd.Timestamp(value)
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts.normalize()


def _day(ts: pd.Timestamp) -> np.datetime64:
    return ts.to_datetime64().astype("datetime64[D]")


def calendar_days_between(start, end) -> int:
    """Whole calendar days between two dates (absolute difference)."""
    return abs((to_date(end) - to_date(start)).days)


def business_days_between(start, end) -> int:
    """
    Mon-Fri days in [start, end], both ends inclusive.
    No holiday calendar; returns 0 when start > end.
    """
    start = to_date(start)
    end = to_date(end)

    if start > end:
        return 0

    return int(np.busday_count(_day(start), _day(end) + np.timedelta64(1, "D")))


def annual_base(accrue_on_weekends: bool) -> int:
    return CALENDAR_BASE if accrue_on_weekends else BUSINESS_BASE
