from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any

import pandas as pd

from .errors import EmptyFileError, InsufficientDataError, StructuralParseError, UnsupportedFormatError

"""Spreadsheet reader: CSV text or Excel workbook -> ordered row records.

- CSV: first non-empty line is the header, blank lines are skipped, every cell
  is read as text so the normalizer sees exactly what the user typed. A record
  with more or fewer fields than the header is a StructuralParseError.
- Excel: only the first sheet is read, fully blank rows are skipped, the first
  remaining row is the header.

The dispatch is driven by the declared file name extension only; content is
never sniffed.
"""

__all__ = [
    "ParsedTable",
    "Source",
    "SUPPORTED_EXTENSIONS",
    "detect_format",
    "parse_file",
    "read_csv_file",
    "read_excel_file",
]

Source = Path | str | IO[bytes]

# extension -> (format, pandas excel engine)
SUPPORTED_EXTENSIONS: dict[str, tuple[str, str | None]] = {
    ".csv": ("csv", None),
    ".xlsx": ("excel", "openpyxl"),
    ".xls": ("excel", "xlrd"),
}


@dataclass
class ParsedTable:
    source_name: str
    columns: list[str]
    rows: list[dict[str, Any]]  # 列名 -> 生セル値 (空セルは "")


def detect_format(file_name: str) -> tuple[str, str | None]:
    """Return ``(format, engine)`` for a declared file name.

    Raises UnsupportedFormatError for anything but .csv / .xlsx / .xls.
    """
    suffix = Path(file_name).suffix.lower()
    try:
        return SUPPORTED_EXTENSIONS[suffix]
    except KeyError:
        raise UnsupportedFormatError(file_name) from None


def _header_name(value: Any, index: int) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return f"Unnamed: {index}"
    name = str(value).strip()
    return name if name else f"Unnamed: {index}"


def _dedupe(columns: list[str]) -> list[str]:
    # same convention as pandas.read_csv: "Sales", "Sales.1", ...
    seen: dict[str, int] = {}
    result: list[str] = []
    for col in columns:
        if col in seen:
            seen[col] += 1
            result.append(f"{col}.{seen[col]}")
        else:
            seen[col] = 0
            result.append(col)
    return result


def _is_missing(value: Any) -> bool:
    # pd.isna on str is always False; only scalars reach here
    return value is None or (not isinstance(value, str) and bool(pd.isna(value)))


def _cell(value: Any) -> Any:
    return "" if _is_missing(value) else value


def read_csv_file(source: Source, source_name: str) -> ParsedTable:
    """Read a CSV upload; every record must have exactly as many fields as the header.

    The header line is read as an ordinary record so the tokenizer fixes the
    field count from it: longer records fail in pandas, shorter ones come back
    with missing (NaN) trailing cells and are rejected here.
    """
    try:
        df = pd.read_csv(
            source,
            header=None,
            index_col=False,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        raise EmptyFileError() from None
    except pd.errors.ParserError as e:
        raise StructuralParseError("CSV", str(e).strip()) from e
    except UnicodeDecodeError as e:
        raise StructuralParseError("CSV", str(e)) from e

    if df.empty:
        raise EmptyFileError()

    columns = _dedupe([_header_name(c, i) for i, c in enumerate(df.iloc[0].tolist())])
    rows: list[dict[str, Any]] = []
    # n: 1-based data record, header excluded
    for n, values in enumerate(df.iloc[1:].itertuples(index=False, name=None), start=1):
        present = sum(1 for v in values if not _is_missing(v))
        if present < len(columns):
            raise StructuralParseError(
                "CSV", f"Too few fields in data row {n}: expected {len(columns)}, saw {present}"
            )
        rows.append({col: _cell(val) for col, val in zip(columns, values, strict=True)})
    return ParsedTable(source_name=source_name, columns=columns, rows=rows)


def read_excel_file(source: Source, source_name: str, engine: str | None = None) -> ParsedTable:
    """Read the first sheet of a workbook, first non-blank row as header."""
    try:
        with pd.ExcelFile(source, engine=engine) as xls:
            if not xls.sheet_names:
                raise InsufficientDataError()
            # 先頭シートのみ対象。ヘッダなしで生読みし、後で1行目をヘッダとして適用
            df = xls.parse(xls.sheet_names[0], header=None, dtype=object)
    except InsufficientDataError:
        raise
    except Exception as e:
        raise StructuralParseError("Excel", str(e)) from e

    df = df.dropna(how="all")
    if df.shape[0] < 2:
        raise InsufficientDataError()

    columns = _dedupe([_header_name(c, i) for i, c in enumerate(df.iloc[0].tolist())])
    rows: list[dict[str, Any]] = []
    for _, raw in df.iloc[1:].iterrows():
        rows.append({col: _cell(val) for col, val in zip(columns, raw.tolist(), strict=False)})
    return ParsedTable(source_name=source_name, columns=columns, rows=rows)


def parse_file(source: Source, file_name: str | None = None) -> ParsedTable:
    """Parse a CSV or Excel upload into a ParsedTable.

    Parameters
    ----------
    source: path or binary file handle
    file_name: declared name used for format dispatch; defaults to the path name
    """
    if file_name is None:
        if isinstance(source, (str, Path)):
            file_name = Path(source).name
        else:
            file_name = str(getattr(source, "name", ""))
    fmt, engine = detect_format(file_name)
    if fmt == "csv":
        return read_csv_file(source, file_name)
    return read_excel_file(source, file_name, engine=engine)
