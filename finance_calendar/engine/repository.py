# engine/repository.py
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from typing import Optional, Tuple, TypeVar

from ..data_model import (
    DeductionTableModel,
    IncomeTableModel,
    InvestmentReturn,
    InvestmentTableModel,
    RecurringDeduction,
    RecurringIncome,
    rows_to_deductions,
    rows_to_incomes,
    rows_to_investments,
)
from ..config import DOUBLE_PAY_POLICIES
from ..exceptions import InvalidEventDefinition

logger = logging.getLogger(__name__)

EventT = TypeVar("EventT", RecurringIncome, RecurringDeduction, InvestmentReturn)


@dataclass(frozen=True)
class RepositorySnapshot:
    """Point-in-time view of the three event collections."""

    incomes: Tuple[RecurringIncome, ...] = ()
    deductions: Tuple[RecurringDeduction, ...] = ()
    investments: Tuple[InvestmentReturn, ...] = ()


def _new_id() -> str:
    return uuid.uuid4().hex


class EventRepository:
    """Sole owner of the income, deduction and investment definitions.

    Every mutation publishes a fresh ``RepositorySnapshot``; readers holding
    an older snapshot keep seeing it unchanged. Writers must be serialized by
    the embedding application.
    """

    def __init__(self, snapshot: RepositorySnapshot | None = None, double_pay_policy: str = "ignore"):
        if double_pay_policy not in DOUBLE_PAY_POLICIES:
            raise ValueError(f"Unknown double pay policy: {double_pay_policy!r}")
        self.double_pay_policy = double_pay_policy
        self._snapshot = snapshot or RepositorySnapshot()
        self._check_snapshot(self._snapshot)

    @property
    def snapshot(self) -> RepositorySnapshot:
        return self._snapshot

    @property
    def incomes(self) -> Tuple[RecurringIncome, ...]:
        return self._snapshot.incomes

    @property
    def deductions(self) -> Tuple[RecurringDeduction, ...]:
        return self._snapshot.deductions

    @property
    def investments(self) -> Tuple[InvestmentReturn, ...]:
        return self._snapshot.investments

    def add_income(self, income: RecurringIncome) -> RecurringIncome:
        self._validate(income, "income")
        self._check_double_pay(income)
        return self._append("incomes", income, "income")

    def add_deduction(self, deduction: RecurringDeduction) -> RecurringDeduction:
        self._validate(deduction, "deduction")
        return self._append("deductions", deduction, "deduction")

    def add_investment(self, investment: InvestmentReturn) -> InvestmentReturn:
        self._validate(investment, "investment")
        return self._append("investments", investment, "investment")

    def remove_income(self, event_id: str) -> Optional[RecurringIncome]:
        return self._remove("incomes", event_id)

    def remove_deduction(self, event_id: str) -> Optional[RecurringDeduction]:
        return self._remove("deductions", event_id)

    def remove_investment(self, event_id: str) -> Optional[InvestmentReturn]:
        return self._remove("investments", event_id)

    def get_income(self, event_id: str) -> Optional[RecurringIncome]:
        return self._find("incomes", event_id)

    def get_deduction(self, event_id: str) -> Optional[RecurringDeduction]:
        return self._find("deductions", event_id)

    def get_investment(self, event_id: str) -> Optional[InvestmentReturn]:
        return self._find("investments", event_id)

    def clear(self) -> None:
        self._snapshot = RepositorySnapshot()
        logger.info("Cleared all events")

    def _validate(self, definition, kind: str) -> None:
        try:
            definition.validate()
        except InvalidEventDefinition as exc:
            logger.warning("Rejected %s %r: %s", kind, getattr(definition, "name", None), exc)
            raise

    def _check_double_pay(self, income: RecurringIncome) -> None:
        if self.double_pay_policy != "reject":
            return
        outside = income.double_pay_outside_range()
        if outside:
            logger.warning("Rejected income %r: double pay dates outside range %s", income.name, outside)
            raise InvalidEventDefinition(
                "double_pay_dates",
                "outside the active range: " + ", ".join(d.isoformat() for d in outside),
            )

    def _check_snapshot(self, snapshot: RepositorySnapshot) -> None:
        # seeded entries get the same checks as added ones, and must already carry unique ids
        for collection, kind in (("incomes", "income"), ("deductions", "deduction"), ("investments", "investment")):
            seen = set()
            for definition in getattr(snapshot, collection):
                self._validate(definition, kind)
                if kind == "income":
                    self._check_double_pay(definition)
                if not isinstance(definition.id, str) or not definition.id:
                    raise InvalidEventDefinition("id", f"{kind} {definition.name!r} has no identifier")
                if definition.id in seen:
                    raise InvalidEventDefinition("id", f"duplicate {kind} identifier {definition.id!r}")
                seen.add(definition.id)

    def _append(self, collection: str, definition: EventT, kind: str) -> EventT:
        existing = {item.id for item in getattr(self._snapshot, collection)}
        event_id = _new_id()
        while event_id in existing:
            event_id = _new_id()
        stored = replace(definition, id=event_id)
        items = getattr(self._snapshot, collection) + (stored,)
        self._snapshot = replace(self._snapshot, **{collection: items})
        logger.info("Added %s %s (%s)", kind, event_id, stored.name)
        return stored

    def _remove(self, collection: str, event_id: str):
        items = getattr(self._snapshot, collection)
        removed = next((item for item in items if item.id == event_id), None)
        if removed is None:
            logger.debug("No %s entry with id %s; nothing removed", collection, event_id)
            return None
        kept = tuple(item for item in items if item.id != event_id)
        self._snapshot = replace(self._snapshot, **{collection: kept})
        logger.info("Removed %s entry %s (%s)", collection, event_id, removed.name)
        return removed

    def _find(self, collection: str, event_id: str):
        return next((item for item in getattr(self._snapshot, collection) if item.id == event_id), None)


def seed_sample_events(repository: EventRepository) -> EventRepository:
    """Loads the sample salary, rent, utilities and stock return rows."""
    for income in rows_to_incomes(IncomeTableModel().default_rows):
        repository.add_income(income)
    for deduction in rows_to_deductions(DeductionTableModel().default_rows):
        repository.add_deduction(deduction)
    for investment in rows_to_investments(InvestmentTableModel().default_rows):
        repository.add_investment(investment)
    return repository
