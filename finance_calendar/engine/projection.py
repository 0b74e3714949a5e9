# engine/projection.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, List

import pandas as pd

from ..data_model import DailyEvent
from ..exceptions import InvalidDate
from .accrual import deductions_accrued, income_accrued, investment_accrued
from .daily import events_on
from .dates import coerce_day, year_month_index
from .repository import EventRepository, RepositorySnapshot

RANGE_FREQUENCIES = ("D", "M")


def projected_balance(snapshot: RepositorySnapshot, day: Any) -> float:
    day = coerce_day(day)
    return income_accrued(snapshot, day) - deductions_accrued(snapshot, day) + investment_accrued(snapshot, day)


@dataclass(frozen=True)
class DaySummary:
    day: date
    income: float
    deductions: float
    investments: float

    @property
    def balance(self) -> float:
        return self.income - self.deductions + self.investments

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.day.isoformat(),
            "income": self.income,
            "deductions": self.deductions,
            "investments": self.investments,
            "balance": self.balance,
        }


def summarize_day(snapshot: RepositorySnapshot, day: Any) -> DaySummary:
    day = coerce_day(day)
    return DaySummary(
        day=day,
        income=income_accrued(snapshot, day),
        deductions=deductions_accrued(snapshot, day),
        investments=investment_accrued(snapshot, day),
    )


def project_range(snapshot: RepositorySnapshot, start: Any, end: Any, freq: str = "D") -> pd.DataFrame:
    """Cumulative figures for every day (``D``) or month end (``M``) in [start, end].

    In monthly mode the last row of a partial final month is ``end`` itself.
    """
    start = coerce_day(start, "start")
    end = coerce_day(end, "end")
    if end < start:
        raise InvalidDate(end, "end")
    freq = (freq or "D").upper()
    if freq not in RANGE_FREQUENCIES:
        raise ValueError(f"Unsupported frequency: {freq!r}")

    days = [ts.date() for ts in pd.date_range(start, end, freq="D")]
    if freq == "M":
        days = [d for d in days if d == end or (d + timedelta(days=1)).day == 1]

    records = []
    for day in days:
        summary = summarize_day(snapshot, day)
        records.append(
            {
                "Date": day,
                "MonthIndex": year_month_index(day),
                "CalendarYear": day.year,
                "MonthInYear": day.month,
                "Income": summary.income,
                "Deductions": summary.deductions,
                "Investments": summary.investments,
                "Balance": summary.balance,
                "EventCount": len(events_on(snapshot, day)),
            }
        )
    return pd.DataFrame(records)


class ProjectionEngine:
    """Query surface bound to one repository.

    Each call reads the repository's current snapshot once, so a single
    answer never mixes two snapshots.
    """

    def __init__(self, repository: EventRepository):
        self.repository = repository

    def income_accrued(self, day: Any) -> float:
        return income_accrued(self.repository.snapshot, day)

    def deductions_accrued(self, day: Any) -> float:
        return deductions_accrued(self.repository.snapshot, day)

    def investment_accrued(self, day: Any) -> float:
        return investment_accrued(self.repository.snapshot, day)

    def projected_balance(self, day: Any) -> float:
        return projected_balance(self.repository.snapshot, day)

    def events_on(self, day: Any) -> List[DailyEvent]:
        return events_on(self.repository.snapshot, day)

    def summary(self, day: Any) -> DaySummary:
        return summarize_day(self.repository.snapshot, day)

    def project_range(self, start: Any, end: Any, freq: str = "D") -> pd.DataFrame:
        return project_range(self.repository.snapshot, start, end, freq=freq)
