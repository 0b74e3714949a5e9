from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Tuple

from ..exceptions import InvalidDate, InvalidEventDefinition
from ..engine.dates import coerce_day, is_active

DOUBLE_PAY_SUFFIX = " (Double Pay)"


class ReturnKind(str, Enum):
    ONCE = "once"
    MONTHLY = "monthly"


class EventCategory(str, Enum):
    INCOME = "income"
    DEDUCTION = "deduction"
    INVESTMENT = "investment"


def _check_name(name: Any) -> None:
    if not isinstance(name, str) or not name.strip():
        raise InvalidEventDefinition("name", "must be a non-empty string")


def _check_amount(value: Any, field_name: str = "amount") -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidEventDefinition(field_name, f"must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidEventDefinition(field_name, "must be finite")
    if value < 0:
        raise InvalidEventDefinition(field_name, "must not be negative")


def _check_percentage(value: Any, field_name: str) -> None:
    _check_amount(value, field_name)
    if value > 100:
        raise InvalidEventDefinition(field_name, "must be between 0 and 100")


def _check_day(value: Any, field_name: str) -> date:
    # Definitions must already hold real dates; strings are parsed by the table layer.
    if not isinstance(value, date):
        raise InvalidEventDefinition(field_name, f"must be a date, got {value!r}")
    try:
        return coerce_day(value, field_name)
    except InvalidDate as exc:
        raise InvalidEventDefinition(field_name, str(exc)) from exc


def _as_day(value: Any) -> Any:
    # stored dates are plain calendar days
    return value.date() if isinstance(value, datetime) else value


def _check_range(start: Any, end: Any) -> None:
    start_day = _check_day(start, "start_date")
    if end is not None and _check_day(end, "end_date") < start_day:
        raise InvalidEventDefinition("end_date", "must not be earlier than start_date")


@dataclass(frozen=True)
class RecurringIncome:
    name: str
    amount: float
    start_date: date
    end_date: Optional[date] = None
    tax_percentage: float = 0.0
    double_pay_dates: Tuple[date, ...] = field(default_factory=tuple)
    id: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_date", _as_day(self.start_date))
        object.__setattr__(self, "end_date", _as_day(self.end_date))
        object.__setattr__(self, "double_pay_dates", tuple(_as_day(d) for d in self.double_pay_dates or ()))

    def net_amount(self) -> float:
        return self.amount * (1 - self.tax_percentage / 100)

    def double_pay_outside_range(self) -> list[date]:
        return [d for d in self.double_pay_dates if not is_active(d, self.start_date, self.end_date)]

    def validate(self) -> None:
        _check_name(self.name)
        _check_amount(self.amount)
        _check_percentage(self.tax_percentage, "tax_percentage")
        _check_range(self.start_date, self.end_date)
        for day in self.double_pay_dates:
            _check_day(day, "double_pay_dates")


@dataclass(frozen=True)
class RecurringDeduction:
    name: str
    amount: float
    start_date: date
    end_date: Optional[date] = None
    category: str = "Other"
    notes: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_date", _as_day(self.start_date))
        object.__setattr__(self, "end_date", _as_day(self.end_date))

    def validate(self) -> None:
        _check_name(self.name)
        _check_amount(self.amount)
        _check_range(self.start_date, self.end_date)


@dataclass(frozen=True)
class InvestmentReturn:
    """A one-off credit on ``anchor_date`` or a monthly credit starting there."""

    name: str
    amount: float
    anchor_date: date
    return_kind: ReturnKind = ReturnKind.ONCE
    growth_percentage: Optional[float] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "anchor_date", _as_day(self.anchor_date))
        kind = self.return_kind
        if isinstance(kind, str) and not isinstance(kind, ReturnKind):
            try:
                object.__setattr__(self, "return_kind", ReturnKind(kind.strip().lower()))
            except ValueError:
                # left as-is so validate() can report it
                pass

    @property
    def is_monthly(self) -> bool:
        return self.return_kind == ReturnKind.MONTHLY

    def validate(self) -> None:
        _check_name(self.name)
        _check_amount(self.amount)
        _check_day(self.anchor_date, "anchor_date")
        if not isinstance(self.return_kind, ReturnKind):
            raise InvalidEventDefinition("return_kind", f"must be 'once' or 'monthly', got {self.return_kind!r}")
        if self.growth_percentage is not None:
            _check_percentage(self.growth_percentage, "growth_percentage")


@dataclass(frozen=True)
class DailyEvent:
    category: EventCategory
    name: str
    amount: float

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.category.value, "name": self.name, "amount": self.amount}
