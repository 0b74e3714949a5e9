# engine/dates.py
from __future__ import annotations

from datetime import date, datetime
from typing import Any

import pandas as pd

from ..exceptions import InvalidDate


def coerce_day(value: Any, field: str = "date") -> date:
    """Normalize ``value`` to a plain calendar day or raise ``InvalidDate``.

    Accepts ``date``, ``datetime``/``pd.Timestamp`` (time of day dropped) and
    ISO strings such as ``2024-07-01`` or ``2024-07-01T09:30:00``.
    """
    if value is None or value is pd.NaT:
        raise InvalidDate(value, field)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError as exc:
            raise InvalidDate(value, field) from exc
    raise InvalidDate(value, field)


def year_month_index(day: date) -> int:
    return day.year * 12 + (day.month - 1)


def is_active(day: Any, start: Any, end: Any = None) -> bool:
    check = coerce_day(day)
    if check < coerce_day(start, "start_date"):
        return False
    if end is not None:
        return check <= coerce_day(end, "end_date")
    return True


def is_same_day(a: Any, b: Any) -> bool:
    left, right = coerce_day(a), coerce_day(b)
    return (left.year, left.month, left.day) == (right.year, right.month, right.day)
