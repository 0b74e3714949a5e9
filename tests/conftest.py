from datetime import date

import pytest

from finance_calendar.data_model import InvestmentReturn, RecurringDeduction, RecurringIncome
from finance_calendar.engine.repository import EventRepository


@pytest.fixture
def salary():
    return RecurringIncome(
        name="Monthly Salary",
        amount=5000.0,
        start_date=date(2024, 1, 1),
        tax_percentage=25.0,
        double_pay_dates=(date(2024, 6, 15), date(2024, 12, 15)),
    )


@pytest.fixture
def repository(salary):
    repo = EventRepository()
    repo.add_income(salary)
    repo.add_deduction(RecurringDeduction(name="Rent", amount=1500.0, start_date=date(2024, 1, 1), category="Housing"))
    repo.add_deduction(RecurringDeduction(name="Utilities", amount=200.0, start_date=date(2024, 1, 1), category="Bills"))
    repo.add_investment(InvestmentReturn(name="Stock Portfolio Return", amount=500.0, anchor_date=date(2024, 7, 1)))
    return repo
