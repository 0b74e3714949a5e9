from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

import pandas as pd


@dataclass
class ColumnDefinition:
    """Lightweight schema descriptor used by the entry forms."""

    field: str
    label: str
    kind: str = "text"  # text | number | select | date | dates
    default: Any = ""
    options: List[str] | None = None
    min_value: float | None = None
    max_value: float | None = None
    step: float | None = None
    required: bool = False
    help: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "label": self.label,
            "kind": self.kind,
            "default": self.default,
            "options": self.options or [],
            "min": self.min_value,
            "max": self.max_value,
            "step": self.step,
            "required": self.required,
            "help": self.help,
        }


@dataclass
class TableModel:
    """Form schema plus the sample rows shown to a new user."""

    name: str
    columns: List[ColumnDefinition]
    default_rows: List[dict[str, Any]] = field(default_factory=list)

    def create_default_df(self) -> pd.DataFrame:
        if self.default_rows:
            return pd.DataFrame(self.default_rows, columns=[col.field for col in self.columns])
        seed = {col.field: col.default for col in self.columns}
        return pd.DataFrame([seed])

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "columns": [col.to_payload() for col in self.columns],
            "defaults": self.default_rows,
        }
