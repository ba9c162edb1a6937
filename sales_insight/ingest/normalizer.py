from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ..models.row_data import RowData
from .errors import EmptyFileError, EmptyRequiredFieldError, InvalidNumericValueError
from .schema import IDENTIFIER_COLUMN, NUMERIC_COLUMNS

"""Row normalization for validated sheets.

Policy (single canonical policy for every upload):
- string cells are trimmed
- declared numeric columns become floats; an empty cell is 0.0
- a non-empty numeric cell that does not parse fails the whole ingestion
- rows that are entirely empty after trimming are dropped
- the identifier column (Product Name) must never be blank
"""

__all__ = [
    "parse_number",
    "is_blank",
    "normalize_row",
    "normalize_rows",
]

_CURRENCY_RE = re.compile(r"[$€£¥₹]")
_PARENS_RE = re.compile(r"^\((.+)\)$")


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value.strip() == ""


def parse_number(value: Any) -> float | None:
    """Parse a numeric cell. Returns None when the value is not a finite number.

    Accepts plain numbers plus the usual spreadsheet decorations: a currency
    symbol, thousands commas, a trailing percent sign and accounting
    parentheses for negatives, e.g. ``"$1,200.50"``, ``"12%"``, ``"(30)"``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    text = str(value).strip()
    text = _CURRENCY_RE.sub("", text).replace(",", "").replace(" ", "")
    if text.endswith("%"):
        text = text[:-1]
    m = _PARENS_RE.match(text)
    if m:
        text = "-" + m.group(1)
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def normalize_row(
    row_number: int,
    row: Mapping[str, Any],
    column_map: Mapping[str, str],
    numeric_columns: Sequence[str] = NUMERIC_COLUMNS,
    identifier_column: str = IDENTIFIER_COLUMN,
) -> RowData | None:
    """Normalize one parsed row. Returns None for a fully blank row.

    ``column_map`` maps the declared column names to the headers actually
    present in the file (see ``schema.validate_headers``).
    """
    values: dict[str, Any] = {}
    for col, raw in row.items():
        values[col] = raw.strip() if isinstance(raw, str) else ("" if raw is None else raw)

    if all(is_blank(v) for v in values.values()):
        return None

    for declared in numeric_columns:
        col = column_map.get(declared, declared)
        raw = values.get(col, "")
        if is_blank(raw):
            values[col] = 0.0
            continue
        number = parse_number(raw)
        if number is None:
            raise InvalidNumericValueError(row_number, declared, raw)
        values[col] = number

    id_col = column_map.get(identifier_column, identifier_column)
    if is_blank(values.get(id_col)):
        raise EmptyRequiredFieldError(row_number, identifier_column)
    return RowData(row_number=row_number, values=values, raw_values=dict(row))


def normalize_rows(
    rows: Iterable[Mapping[str, Any]],
    column_map: Mapping[str, str],
    numeric_columns: Sequence[str] = NUMERIC_COLUMNS,
    identifier_column: str = IDENTIFIER_COLUMN,
) -> list[RowData]:
    """Normalize every parsed row, numbering data rows from 1.

    Blank rows are dropped but still advance the row counter, so error
    messages point at the row the user sees in the file.

    Raises:
        EmptyFileError: if no row survives normalization
        InvalidNumericValueError / EmptyRequiredFieldError: on the first bad row
    """
    normalized: list[RowData] = []
    for row_number, row in enumerate(rows, start=1):
        nrow = normalize_row(row_number, row, column_map, numeric_columns, identifier_column)
        if nrow is not None:
            normalized.append(nrow)
    if not normalized:
        raise EmptyFileError()
    return normalized
