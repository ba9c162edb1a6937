from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

"""Product selection passed from the listing view to the detail view."""

__all__ = [
    "ProductSelection",
]


@dataclass(frozen=True)
class ProductSelection:
    """An index into a Dataset plus the row it points to.

    Only valid for the Dataset it was produced from (matched by token).
    """
    index: int  # 0-based position in Dataset.rows
    row: Mapping[str, Any]
    dataset_token: str | None
