from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any

import pandas as pd

"""Dataset domain model.

A Dataset is the full set of normalized rows of one upload plus its metadata.
It is either empty or fully validated and normalized; there is no partially
loaded state. Rows are exposed as read-only mappings so readers cannot mutate
the shared Dataset in place.
"""

__all__ = [
    "Dataset",
    "freeze_row",
]


def freeze_row(values: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class Dataset:
    rows: tuple[Mapping[str, Any], ...] = ()
    columns: tuple[str, ...] = ()        # Header order of the uploaded sheet
    file_name: str | None = None         # Originating file name
    uploaded_at: datetime | None = None  # Ingestion timestamp (UTC)
    token: str | None = None             # Unique per load; guards product selections

    @classmethod
    def empty(cls) -> Dataset:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def __len__(self) -> int:
        return len(self.rows)

    def to_frame(self) -> pd.DataFrame:
        """Return a fresh DataFrame copy of the rows (header order preserved)."""
        return pd.DataFrame([dict(r) for r in self.rows], columns=list(dict.fromkeys(self.columns)))
