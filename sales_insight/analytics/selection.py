from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..models.dataset import Dataset
from ..models.product_selection import ProductSelection

"""Product selection between the listing view and the detail view."""

__all__ = [
    "ProductSelectionError",
    "StaleSelectionError",
    "select_product",
    "resolve_selection",
]


class ProductSelectionError(LookupError):
    """Raised when an index does not point at a row of the Dataset."""


class StaleSelectionError(ProductSelectionError):
    """Raised when a selection is used against a different Dataset."""


def select_product(dataset: Dataset, index: int) -> ProductSelection:
    if not 0 <= index < len(dataset):
        raise ProductSelectionError(f"product index {index} out of range (rows={len(dataset)})")
    return ProductSelection(index=index, row=dataset.rows[index], dataset_token=dataset.token)


def resolve_selection(dataset: Dataset, selection: ProductSelection) -> Mapping[str, Any]:
    """Return the selected row, checking the selection belongs to ``dataset``."""
    if dataset.is_empty or selection.dataset_token != dataset.token:
        raise StaleSelectionError("product selection does not belong to the current dataset")
    if not 0 <= selection.index < len(dataset):
        raise ProductSelectionError(f"product index {selection.index} out of range (rows={len(dataset)})")
    return dataset.rows[selection.index]
