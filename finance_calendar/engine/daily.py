# engine/daily.py
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, List

from ..data_model import DOUBLE_PAY_SUFFIX, DailyEvent, EventCategory
from .dates import coerce_day, is_active, is_same_day
from .repository import RepositorySnapshot


def events_on(snapshot: RepositorySnapshot, day: Any) -> List[DailyEvent]:
    """Itemized events observable on exactly ``day``.

    Incomes and deductions appear on every day of their active range.
    Investments appear only on their anchor date, with the base amount.
    """
    day = coerce_day(day)
    events: List[DailyEvent] = []

    for income in snapshot.incomes:
        if not is_active(day, income.start_date, income.end_date):
            continue
        net_amount = income.net_amount()
        double_pay = any(is_same_day(d, day) for d in income.double_pay_dates)
        events.append(
            DailyEvent(
                category=EventCategory.INCOME,
                name=income.name + (DOUBLE_PAY_SUFFIX if double_pay else ""),
                amount=net_amount * 2 if double_pay else net_amount,
            )
        )

    for deduction in snapshot.deductions:
        if is_active(day, deduction.start_date, deduction.end_date):
            events.append(DailyEvent(EventCategory.DEDUCTION, deduction.name, deduction.amount))

    for investment in snapshot.investments:
        if is_same_day(investment.anchor_date, day):
            events.append(DailyEvent(EventCategory.INVESTMENT, investment.name, investment.amount))

    return events


@dataclass(frozen=True)
class DayMarker:
    day: date
    in_month: bool
    has_income: bool = False
    has_deduction: bool = False
    has_investment: bool = False
    event_count: int = 0

    @property
    def tone(self) -> str:
        if not self.in_month:
            return "outside"
        if self.has_income and self.has_deduction:
            return "mixed"
        if self.has_income:
            return "income"
        if self.has_deduction:
            return "deduction"
        if self.has_investment:
            return "investment"
        return "none"

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.day.isoformat(),
            "inMonth": self.in_month,
            "hasIncome": self.has_income,
            "hasDeduction": self.has_deduction,
            "hasInvestment": self.has_investment,
            "eventCount": self.event_count,
            "tone": self.tone,
        }


def _sunday_offset(day: date) -> int:
    return (day.weekday() + 1) % 7


def month_markers(snapshot: RepositorySnapshot, month_day: Any) -> List[DayMarker]:
    """Markers for the Sunday-to-Saturday weeks covering ``month_day``'s month."""
    month_day = coerce_day(month_day, "month")
    first = month_day.replace(day=1)
    last = month_day.replace(day=calendar.monthrange(month_day.year, month_day.month)[1])
    # weeks are cut short at the edges of the representable calendar
    grid_start = first - timedelta(days=min(_sunday_offset(first), (first - date.min).days))
    grid_end = last + timedelta(days=min(6 - _sunday_offset(last), (date.max - last).days))

    markers: List[DayMarker] = []
    for ordinal in range(grid_start.toordinal(), grid_end.toordinal() + 1):
        current = date.fromordinal(ordinal)
        if first <= current <= last:
            kinds = [event.category for event in events_on(snapshot, current)]
            markers.append(
                DayMarker(
                    day=current,
                    in_month=True,
                    has_income=EventCategory.INCOME in kinds,
                    has_deduction=EventCategory.DEDUCTION in kinds,
                    has_investment=EventCategory.INVESTMENT in kinds,
                    event_count=len(kinds),
                )
            )
        else:
            markers.append(DayMarker(day=current, in_month=False))
    return markers
