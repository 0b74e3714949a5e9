from .events import (
    DOUBLE_PAY_SUFFIX,
    DailyEvent,
    EventCategory,
    InvestmentReturn,
    RecurringDeduction,
    RecurringIncome,
    ReturnKind,
)
from .tables import (
    DeductionTableModel,
    IncomeTableModel,
    InvestmentTableModel,
    rows_to_deductions,
    rows_to_incomes,
    rows_to_investments,
)

__all__ = [
    "DOUBLE_PAY_SUFFIX",
    "DailyEvent",
    "DeductionTableModel",
    "EventCategory",
    "IncomeTableModel",
    "InvestmentReturn",
    "InvestmentTableModel",
    "RecurringDeduction",
    "RecurringIncome",
    "ReturnKind",
    "rows_to_deductions",
    "rows_to_incomes",
    "rows_to_investments",
]
