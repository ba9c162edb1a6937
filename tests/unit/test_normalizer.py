from __future__ import annotations

import math

import pytest

from sales_insight.ingest.errors import EmptyFileError, EmptyRequiredFieldError, InvalidNumericValueError
from sales_insight.ingest.normalizer import is_blank, normalize_row, normalize_rows, parse_number
from sales_insight.ingest.schema import NUMERIC_COLUMNS, REQUIRED_COLUMNS, validate_headers

COLUMN_MAP = validate_headers(list(REQUIRED_COLUMNS))


def _row(name="Widget", sales="100", profit="20", te="10", credit="5", fee="3", pct="20"):
    return dict(zip(REQUIRED_COLUMNS, [name, sales, profit, te, credit, fee, pct]))


def test_is_blank():
    assert is_blank(None)
    assert is_blank("")
    assert is_blank("   ")
    assert not is_blank(0)
    assert not is_blank("x")


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("100", 100.0),
        (" 12.5 ", 12.5),
        ("$1,200.50", 1200.5),
        ("12%", 12.0),
        ("(30)", -30.0),
        ("-4", -4.0),
        ("1e3", 1000.0),
        (7, 7.0),
        (2.5, 2.5),
    ],
)
def test_parse_number_accepts(raw, expected):
    assert parse_number(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "12abc", "nan", "inf", "-Infinity", True, float("nan"), float("inf")])
def test_parse_number_rejects(raw):
    assert parse_number(raw) is None


def test_normalize_row_converts_numeric_columns():
    nrow = normalize_row(1, _row(), COLUMN_MAP)
    assert nrow is not None
    assert nrow.row_number == 1
    for col in NUMERIC_COLUMNS:
        assert isinstance(nrow.values[col], float)
        assert math.isfinite(nrow.values[col])
    assert nrow.values["Sales"] == 100.0
    assert nrow.values["Product Name"] == "Widget"
    # raw_values keep what the reader produced
    assert nrow.raw_values["Sales"] == "100"


def test_normalize_row_trims_strings():
    nrow = normalize_row(1, _row(name="  Widget  ", sales=" 5 "), COLUMN_MAP)
    assert nrow.values["Product Name"] == "Widget"
    assert nrow.values["Sales"] == 5.0


def test_empty_numeric_cell_defaults_to_zero():
    nrow = normalize_row(1, _row(credit="", fee="   "), COLUMN_MAP)
    assert nrow.values["Credit"] == 0.0
    assert nrow.values["Amazon Fee"] == 0.0


def test_invalid_numeric_value_reports_row_and_column():
    rows = [_row(), _row(name="Gadget", profit="lots")]
    with pytest.raises(InvalidNumericValueError) as ei:
        normalize_rows(rows, COLUMN_MAP)
    err = ei.value
    assert err.row == 2
    assert err.column == "Profit"
    assert err.raw_value == "lots"
    assert str(err) == "Invalid numeric value in row 2, column 'Profit': lots"


def test_invalid_numeric_value_uses_declared_column_name():
    headers = ["product name", "sales", "profit", "te", "credit", "amazon fee", "profit percentage"]
    mapping = validate_headers(headers)
    row = dict(zip(headers, ["Widget", "x", "1", "1", "1", "1", "1"]))
    with pytest.raises(InvalidNumericValueError) as ei:
        normalize_rows([row], mapping)
    assert ei.value.column == "Sales"


def test_blank_rows_are_dropped_but_counted():
    blank = dict.fromkeys(REQUIRED_COLUMNS, "")
    rows = [_row(), blank, _row(name="Gadget", sales="oops")]
    with pytest.raises(InvalidNumericValueError) as ei:
        normalize_rows(rows, COLUMN_MAP)
    assert ei.value.row == 3


def test_blank_rows_excluded_from_result():
    blank = dict.fromkeys(REQUIRED_COLUMNS, "  ")
    rows = normalize_rows([_row(), blank, _row(name="Gadget")], COLUMN_MAP)
    assert [r.values["Product Name"] for r in rows] == ["Widget", "Gadget"]
    assert [r.row_number for r in rows] == [1, 3]


def test_blank_product_name_is_rejected():
    with pytest.raises(EmptyRequiredFieldError) as ei:
        normalize_rows([_row(name="  ")], COLUMN_MAP)
    assert str(ei.value) == "Product Name is required in row 1"
    assert ei.value.column == "Product Name"
    assert ei.value.error_type == "EMPTY_REQUIRED_FIELD"


def test_all_rows_blank_is_empty_file():
    blank = dict.fromkeys(REQUIRED_COLUMNS, "")
    with pytest.raises(EmptyFileError):
        normalize_rows([blank, blank], COLUMN_MAP)


def test_excel_numbers_pass_through():
    row = _row(sales=100, profit=20.5, te=None)
    nrow = normalize_row(4, row, COLUMN_MAP)
    assert nrow.values["Sales"] == 100.0
    assert nrow.values["Profit"] == 20.5
    assert nrow.values["TE"] == 0.0


def test_non_numeric_columns_untouched():
    headers = [*REQUIRED_COLUMNS, "Notes"]
    row = {**_row(), "Notes": " 123 "}
    nrow = normalize_row(1, row, validate_headers(headers))
    assert nrow.values["Notes"] == "123"
