from __future__ import annotations

from typing import List


def default_income_rows() -> List[dict[str, float | str]]:
    return [
        {
            "Name": "Monthly Salary",
            "Amount": 5000.0,
            "Start Date": "2024-01-01",
            "End Date": "",
            "Tax (%)": 25.0,
            "Double Pay Dates": "2024-06-15, 2024-12-15",
        },
    ]


def default_deduction_rows() -> List[dict[str, float | str]]:
    return [
        {
            "Name": "Rent",
            "Amount": 1500.0,
            "Start Date": "2024-01-01",
            "End Date": "",
            "Category": "Housing",
            "Notes": "",
        },
        {
            "Name": "Utilities",
            "Amount": 200.0,
            "Start Date": "2024-01-01",
            "End Date": "",
            "Category": "Bills",
            "Notes": "",
        },
    ]


def default_investment_rows() -> List[dict[str, float | str]]:
    return [
        {
            "Name": "Stock Portfolio Return",
            "Amount": 500.0,
            "Date": "2024-07-01",
            "Return Type": "once",
            "Growth (%)": "",
        },
    ]
