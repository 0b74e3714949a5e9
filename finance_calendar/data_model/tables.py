from __future__ import annotations

import math
from datetime import date
from typing import Any, Iterable, List, Optional

import pandas as pd

from ..engine.dates import coerce_day
from ..exceptions import InvalidDate, InvalidEventDefinition
from .base import ColumnDefinition, TableModel
from .defaults import default_deduction_rows, default_income_rows, default_investment_rows
from .events import InvestmentReturn, RecurringDeduction, RecurringIncome, ReturnKind

DEDUCTION_CATEGORIES = ["Housing", "Bills", "Food", "Transportation", "Health", "Insurance", "Debt", "Other"]
RETURN_KINDS = [kind.value for kind in ReturnKind]


class IncomeTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("Name", "Name", required=True),
            ColumnDefinition("Amount", "Gross Monthly Amount (USD)", kind="number", default=0.0, min_value=0.0, step=100.0, required=True),
            ColumnDefinition("Start Date", "Start Date", kind="date", required=True),
            ColumnDefinition("End Date", "End Date (empty=ongoing)", kind="date"),
            ColumnDefinition("Tax (%)", "Tax (%)", kind="number", default=0.0, min_value=0.0, max_value=100.0, step=0.5),
            ColumnDefinition(
                "Double Pay Dates",
                "Double Pay Dates",
                kind="dates",
                help="Dates that credit one extra net payment",
            ),
        ]
        super().__init__("incomes", columns, default_income_rows())


class DeductionTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("Name", "Name", required=True),
            ColumnDefinition("Amount", "Monthly Amount (USD)", kind="number", default=0.0, min_value=0.0, step=50.0, required=True),
            ColumnDefinition("Start Date", "Start Date", kind="date", required=True),
            ColumnDefinition("End Date", "End Date (empty=ongoing)", kind="date"),
            ColumnDefinition("Category", "Category", kind="select", default="Other", options=DEDUCTION_CATEGORIES),
            ColumnDefinition("Notes", "Notes"),
        ]
        super().__init__("deductions", columns, default_deduction_rows())


class InvestmentTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("Name", "Name", required=True),
            ColumnDefinition("Amount", "Return Amount (USD)", kind="number", default=0.0, min_value=0.0, step=50.0, required=True),
            ColumnDefinition("Date", "Return / Start Date", kind="date", required=True),
            ColumnDefinition("Return Type", "Return Type", kind="select", default="once", options=RETURN_KINDS),
            ColumnDefinition(
                "Growth (%)",
                "Monthly Growth (%)",
                kind="number",
                default=0.0,
                min_value=0.0,
                max_value=100.0,
                step=0.1,
                help="Only used by monthly returns",
            ),
        ]
        super().__init__("investments", columns, default_investment_rows())


def _is_blank(value: Any) -> bool:
    if value is None or value is pd.NaT or value is pd.NA:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _records(rows: Iterable[dict] | pd.DataFrame | None) -> List[dict]:
    if rows is None:
        return []
    if isinstance(rows, pd.DataFrame):
        return rows.to_dict("records")
    return list(rows)


def _text(row: dict, key: str, default: str = "") -> str:
    value = row.get(key)
    return default if _is_blank(value) else str(value).strip()


def _number(row: dict, key: str, default: Optional[float] = 0.0, required: bool = False) -> Optional[float]:
    value = row.get(key)
    if _is_blank(value):
        if required:
            raise InvalidEventDefinition(key, "is required")
        return default
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidEventDefinition(key, f"not a number: {value!r}") from exc


def _day(row: dict, key: str, required: bool = True) -> Optional[date]:
    value = row.get(key)
    if _is_blank(value):
        if required:
            raise InvalidEventDefinition(key, "is required")
        return None
    try:
        return coerce_day(value, key)
    except InvalidDate as exc:
        raise InvalidEventDefinition(key, str(exc)) from exc


def _days(row: dict, key: str) -> tuple[date, ...]:
    value = row.get(key)
    if _is_blank(value):
        return ()
    if isinstance(value, str):
        value = [part for part in value.split(",") if part.strip()]
    elif not isinstance(value, (list, tuple)):
        raise InvalidEventDefinition(key, f"must be a list of dates or a comma-separated string, got {value!r}")
    return tuple(_day({key: item}, key) for item in value)


def rows_to_incomes(rows: Iterable[dict] | pd.DataFrame | None) -> List[RecurringIncome]:
    incomes: List[RecurringIncome] = []
    for row in _records(rows):
        name = _text(row, "Name")
        if not name:
            continue
        incomes.append(
            RecurringIncome(
                name=name,
                amount=_number(row, "Amount", required=True),
                start_date=_day(row, "Start Date"),
                end_date=_day(row, "End Date", required=False),
                tax_percentage=_number(row, "Tax (%)"),
                double_pay_dates=_days(row, "Double Pay Dates"),
            )
        )
    return incomes


def rows_to_deductions(rows: Iterable[dict] | pd.DataFrame | None) -> List[RecurringDeduction]:
    deductions: List[RecurringDeduction] = []
    for row in _records(rows):
        name = _text(row, "Name")
        if not name:
            continue
        deductions.append(
            RecurringDeduction(
                name=name,
                amount=_number(row, "Amount", required=True),
                start_date=_day(row, "Start Date"),
                end_date=_day(row, "End Date", required=False),
                category=_text(row, "Category", "Other"),
                notes=_text(row, "Notes") or None,
            )
        )
    return deductions


def rows_to_investments(rows: Iterable[dict] | pd.DataFrame | None) -> List[InvestmentReturn]:
    investments: List[InvestmentReturn] = []
    for row in _records(rows):
        name = _text(row, "Name")
        if not name:
            continue
        kind = row.get("Return Type")
        investments.append(
            InvestmentReturn(
                name=name,
                amount=_number(row, "Amount", required=True),
                anchor_date=_day(row, "Date"),
                return_kind="once" if _is_blank(kind) else str(kind),
                growth_percentage=_number(row, "Growth (%)", default=None),
            )
        )
    return investments
