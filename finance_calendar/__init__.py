"""Temporal accrual engine for recurring income, deductions and investment returns."""

from .data_model import (
    DailyEvent,
    EventCategory,
    InvestmentReturn,
    RecurringDeduction,
    RecurringIncome,
    ReturnKind,
)
from .engine.projection import ProjectionEngine
from .engine.repository import EventRepository, RepositorySnapshot
from .exceptions import FinanceCalendarError, InvalidDate, InvalidEventDefinition

__all__ = [
    "DailyEvent",
    "EventCategory",
    "EventRepository",
    "FinanceCalendarError",
    "InvalidDate",
    "InvalidEventDefinition",
    "InvestmentReturn",
    "ProjectionEngine",
    "RecurringDeduction",
    "RecurringIncome",
    "RepositorySnapshot",
    "ReturnKind",
]
