"""Typed errors raised by the accrual engine.

Every class carries a machine-readable ``code`` so HTTP callers and forms can
branch on the type instead of parsing messages.
"""
from __future__ import annotations

from typing import Any


class FinanceCalendarError(Exception):
    """Base exception for all finance calendar errors."""

    code: str = "FINANCE_CALENDAR_ERROR"


class InvalidDate(FinanceCalendarError):
    """A query or definition date is not a usable calendar date."""

    code: str = "INVALID_DATE"

    def __init__(self, value: Any, field: str = "date"):
        self.value = value
        self.field = field
        super().__init__(f"Invalid {field}: {value!r}")


class InvalidEventDefinition(FinanceCalendarError):
    """An income, deduction or investment definition failed validation."""

    code: str = "INVALID_EVENT_DEFINITION"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")
