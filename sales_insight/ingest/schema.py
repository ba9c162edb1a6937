from __future__ import annotations

from collections.abc import Iterable, Sequence

from .errors import MissingColumnsError

"""Required-column validation for uploaded sales sheets."""

__all__ = [
    "REQUIRED_COLUMNS",
    "NUMERIC_COLUMNS",
    "IDENTIFIER_COLUMN",
    "header_key",
    "find_missing_columns",
    "validate_headers",
]

REQUIRED_COLUMNS: tuple[str, ...] = (
    "Product Name",
    "Sales",
    "Profit",
    "TE",
    "Credit",
    "Amazon Fee",
    "Profit Percentage",
)

NUMERIC_COLUMNS: tuple[str, ...] = (
    "Sales",
    "Profit",
    "TE",
    "Credit",
    "Amazon Fee",
    "Profit Percentage",
)

IDENTIFIER_COLUMN = "Product Name"


def header_key(name: str) -> str:
    """Comparison key: lower-cased, inner whitespace collapsed, ends trimmed."""
    return " ".join(str(name).split()).lower()


def find_missing_columns(headers: Iterable[str], required: Sequence[str] = REQUIRED_COLUMNS) -> list[str]:
    keys = {header_key(h) for h in headers}
    return [col for col in required if header_key(col) not in keys]


def validate_headers(headers: Sequence[str], required: Sequence[str] = REQUIRED_COLUMNS) -> dict[str, str]:
    """Check every required column is present and map it to the actual header.

    The first header matching a required name wins when a sheet repeats one.

    Raises:
        MissingColumnsError: listing exactly the required columns not found,
            in the order they are declared.
    """
    missing = find_missing_columns(headers, required)
    if missing:
        raise MissingColumnsError(missing)
    actual: dict[str, str] = {}
    for h in headers:
        actual.setdefault(header_key(h), h)
    return {col: actual[header_key(col)] for col in required}
