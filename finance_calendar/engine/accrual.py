# engine/accrual.py
"""Cumulative amounts per event category, counted in whole calendar months.

A recurring event started in month S and queried in month Q contributes for
``Q - S + 1`` months (capped at its end month) regardless of day-of-month.
"""
from __future__ import annotations

import math
from datetime import date
from typing import Any, Optional

from .dates import coerce_day, is_active, year_month_index
from .repository import RepositorySnapshot


def _months_active(start: date, end: Optional[date], query_m: int) -> int:
    start_m = year_month_index(start)
    end_m = year_month_index(end) if end is not None else math.inf
    if query_m < start_m or query_m > end_m:
        return 0
    return int(min(query_m - start_m + 1, end_m - start_m + 1))


def income_accrued(snapshot: RepositorySnapshot, day: Any) -> float:
    day = coerce_day(day)
    query_m = year_month_index(day)
    total = 0.0
    for income in snapshot.incomes:
        months = _months_active(income.start_date, income.end_date, query_m)
        if not months:
            continue
        net_amount = income.net_amount()
        amount = net_amount * months
        for double_pay in income.double_pay_dates:
            if is_active(double_pay, income.start_date, income.end_date) and double_pay <= day:
                amount += net_amount
        total += amount
    return total


def deductions_accrued(snapshot: RepositorySnapshot, day: Any) -> float:
    query_m = year_month_index(coerce_day(day))
    total = 0.0
    for deduction in snapshot.deductions:
        total += deduction.amount * _months_active(deduction.start_date, deduction.end_date, query_m)
    return total


def investment_accrued(snapshot: RepositorySnapshot, day: Any) -> float:
    day = coerce_day(day)
    query_m = year_month_index(day)
    total = 0.0
    for investment in snapshot.investments:
        if not investment.is_monthly:
            if investment.anchor_date <= day:
                total += investment.amount
            continue
        anchor_m = year_month_index(investment.anchor_date)
        if query_m < anchor_m:
            continue
        months = query_m - anchor_m + 1
        amount = investment.amount * months
        # growth compounds the accumulated sum, not each monthly credit
        if investment.growth_percentage:
            amount *= (1 + investment.growth_percentage / 100) ** (months - 1)
        total += amount
    return total
