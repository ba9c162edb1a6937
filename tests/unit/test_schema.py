from __future__ import annotations

import pytest

from sales_insight.ingest.errors import MissingColumnsError
from sales_insight.ingest.schema import (
    REQUIRED_COLUMNS,
    find_missing_columns,
    header_key,
    validate_headers,
)


def test_header_key_normalizes_case_and_whitespace():
    assert header_key("  Amazon   Fee ") == "amazon fee"
    assert header_key("PROFIT PERCENTAGE") == "profit percentage"


def test_validate_headers_maps_declared_to_actual():
    headers = list(REQUIRED_COLUMNS)
    assert validate_headers(headers) == {c: c for c in REQUIRED_COLUMNS}


def test_validate_headers_any_casing():
    headers = ["product name", "SALES", "profit", "te", "Credit", "amazon fee", "Profit percentage"]
    mapping = validate_headers(headers)
    assert mapping["Sales"] == "SALES"
    assert mapping["Amazon Fee"] == "amazon fee"
    assert mapping["TE"] == "te"


def test_validate_headers_extra_columns_allowed():
    headers = ["Region", *REQUIRED_COLUMNS, "Notes"]
    mapping = validate_headers(headers)
    assert set(mapping) == set(REQUIRED_COLUMNS)


def test_missing_columns_lists_exactly_the_absent_ones():
    headers = ["Product Name", "Sales", "Profit", "TE", "Amazon Fee"]
    with pytest.raises(MissingColumnsError) as ei:
        validate_headers(headers)
    assert ei.value.missing == ["Credit", "Profit Percentage"]
    assert str(ei.value) == "Missing required columns: Credit, Profit Percentage"
    assert ei.value.error_type == "MISSING_COLUMNS"


def test_missing_columns_all_absent_in_declared_order():
    assert find_missing_columns(["foo", "bar"]) == list(REQUIRED_COLUMNS)


def test_first_matching_header_wins_on_repeat():
    headers = [*REQUIRED_COLUMNS, "sales"]
    assert validate_headers(headers)["Sales"] == "Sales"


def test_custom_required_columns():
    assert validate_headers(["Name", "Qty"], required=["qty"]) == {"qty": "Qty"}
