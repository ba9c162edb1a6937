from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""RowData model: one normalized product row of an uploaded sheet."""

__all__ = [
    "RowData",
]


@dataclass(frozen=True)
class RowData:
    """Logical representation of a single row after normalization.

    The row_number refers to the 1-based data row in the uploaded file
    (header excluded). Blank rows are dropped but keep their number.
    """
    row_number: int  # 1-based data row (header excluded)
    values: dict[str, Any]  # Column name -> normalized value
    raw_values: dict[str, Any] | None = None  # Original parsed cells for debug/preview

    def get(self, column: str, default: Any = None) -> Any:
        return self.values.get(column, default)
