from datetime import date, timedelta

import pandas as pd
import pytest

from finance_calendar.data_model import InvestmentReturn, RecurringIncome
from finance_calendar.engine.accrual import deductions_accrued, income_accrued, investment_accrued
from finance_calendar.engine.aggregate import aggregate_period
from finance_calendar.engine.projection import ProjectionEngine, project_range, projected_balance
from finance_calendar.exceptions import InvalidDate


def test_projected_balance_scenario(repository):
    assert projected_balance(repository.snapshot, date(2024, 7, 1)) == 18600.0


def test_balance_is_sum_of_category_totals(repository):
    repository.add_investment(
        InvestmentReturn(name="Fund", amount=80.0, anchor_date=date(2024, 2, 20), return_kind="monthly", growth_percentage=1.5)
    )
    snapshot = repository.snapshot
    day = date(2023, 11, 20)
    while day <= date(2025, 3, 1):
        expected = income_accrued(snapshot, day) - deductions_accrued(snapshot, day) + investment_accrued(snapshot, day)
        assert projected_balance(snapshot, day) == pytest.approx(expected)
        day += timedelta(days=17)


def test_removed_event_behaves_as_if_never_added(repository):
    engine = ProjectionEngine(repository)
    days = [date(2024, 1, 1) + timedelta(days=n * 23) for n in range(20)]
    baseline = [(engine.projected_balance(d), engine.events_on(d)) for d in days]

    bonus = repository.add_income(
        RecurringIncome(name="Side Gig", amount=900.0, start_date=date(2024, 2, 1), double_pay_dates=(date(2024, 5, 1),))
    )
    assert engine.projected_balance(days[8]) != baseline[8][0]

    repository.remove_income(bonus.id)

    assert [(engine.projected_balance(d), engine.events_on(d)) for d in days] == baseline


def test_engine_reads_current_snapshot(repository):
    engine = ProjectionEngine(repository)
    summary = engine.summary("2024-07-01")

    assert summary.income == 30000.0
    assert summary.deductions == 11900.0
    assert summary.investments == 500.0
    assert summary.balance == 18600.0
    assert summary.to_dict()["date"] == "2024-07-01"


def test_project_range_daily_rows(repository):
    df = project_range(repository.snapshot, date(2024, 6, 29), date(2024, 7, 2))

    assert list(df["Date"]) == [date(2024, 6, 29), date(2024, 6, 30), date(2024, 7, 1), date(2024, 7, 2)]
    july_first = df[df["Date"] == date(2024, 7, 1)].iloc[0]
    assert july_first["Balance"] == 18600.0
    assert july_first["EventCount"] == 4


def test_project_range_monthly_keeps_month_ends_and_final_day(repository):
    df = project_range(repository.snapshot, date(2024, 1, 15), date(2024, 3, 10), freq="M")

    assert list(df["Date"]) == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 10)]
    assert list(df["MonthInYear"]) == [1, 2, 3]


def test_project_range_rejects_reversed_bounds(repository):
    with pytest.raises(InvalidDate):
        project_range(repository.snapshot, date(2024, 2, 1), date(2024, 1, 1))


def test_project_range_rejects_unknown_frequency(repository):
    with pytest.raises(ValueError):
        project_range(repository.snapshot, date(2024, 1, 1), date(2024, 2, 1), freq="W")


def test_aggregate_quarterly_keeps_last_cumulative_row(repository):
    df = project_range(repository.snapshot, date(2024, 1, 1), date(2024, 12, 31), freq="M")

    quarterly = aggregate_period(df, freq="Q")

    assert list(quarterly["Period"]) == ["2024 Q1", "2024 Q2", "2024 Q3", "2024 Q4"]
    assert quarterly.iloc[0]["Balance"] == 6150.0
    assert quarterly.iloc[2]["Balance"] == 22700.0


def test_aggregate_yearly_and_monthly_labels(repository):
    df = project_range(repository.snapshot, date(2024, 11, 1), date(2025, 1, 31), freq="M")

    assert list(aggregate_period(df, freq="Y")["Period"]) == ["2024", "2025"]
    assert list(aggregate_period(df, freq="M")["Period"]) == ["2024-11", "2024-12", "2025-01"]


def test_aggregate_requires_projection_columns():
    with pytest.raises(KeyError):
        aggregate_period(pd.DataFrame({"Balance": [1.0]}))
    assert aggregate_period(pd.DataFrame()).empty
