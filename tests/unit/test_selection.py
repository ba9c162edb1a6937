from __future__ import annotations

import pytest

from sales_insight.analytics.selection import (
    ProductSelectionError,
    StaleSelectionError,
    resolve_selection,
    select_product,
)
from sales_insight.models import Dataset, ProductSelection
from sales_insight.store import DatasetStore


@pytest.fixture()
def store() -> DatasetStore:
    s = DatasetStore()
    s.set_dataset([{"Product Name": "A"}, {"Product Name": "B"}], "ab.csv")
    return s


def test_select_product_carries_row_and_token(store: DatasetStore):
    ds = store.get_dataset()
    sel = select_product(ds, 1)
    assert sel.index == 1
    assert sel.row["Product Name"] == "B"
    assert sel.dataset_token == ds.token
    assert resolve_selection(ds, sel)["Product Name"] == "B"


@pytest.mark.parametrize("index", [-1, 2, 100])
def test_select_product_out_of_range(store: DatasetStore, index: int):
    with pytest.raises(ProductSelectionError):
        select_product(store.get_dataset(), index)


def test_select_product_on_empty_dataset():
    with pytest.raises(ProductSelectionError):
        select_product(Dataset.empty(), 0)


def test_selection_goes_stale_after_reload(store: DatasetStore):
    sel = select_product(store.get_dataset(), 0)
    store.set_dataset([{"Product Name": "C"}], "c.csv")
    with pytest.raises(StaleSelectionError):
        resolve_selection(store.get_dataset(), sel)


def test_selection_goes_stale_after_clear(store: DatasetStore):
    sel = select_product(store.get_dataset(), 0)
    store.clear_dataset()
    with pytest.raises(StaleSelectionError):
        resolve_selection(store.get_dataset(), sel)


def test_forged_index_is_rejected(store: DatasetStore):
    ds = store.get_dataset()
    forged = ProductSelection(index=5, row={}, dataset_token=ds.token)
    with pytest.raises(ProductSelectionError) as ei:
        resolve_selection(ds, forged)
    assert not isinstance(ei.value, StaleSelectionError)
