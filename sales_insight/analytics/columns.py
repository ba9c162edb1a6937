from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..ingest.schema import header_key

"""Column resolution: logical field -> actual header of an uploaded sheet.

Resolution order per field:
1. a header equal to one of the expected names (case/whitespace-insensitive)
2. the first header containing one of the field's substrings (case-insensitive)
3. the fallback name, or the first header when the field has no fallback

Resolution happens once per Dataset; aggregation code only ever sees the
resolved mapping.
"""

__all__ = [
    "ColumnIntent",
    "DEFAULT_INTENTS",
    "resolve_column",
    "resolve_columns",
]


@dataclass(frozen=True)
class ColumnIntent:
    field: str
    exact: tuple[str, ...]
    substrings: tuple[str, ...] = ()
    fallback: str | None = None  # None -> first header


DEFAULT_INTENTS: tuple[ColumnIntent, ...] = (
    ColumnIntent("product_name", ("Product Name",), ("product", "name")),
    ColumnIntent("sales", ("Sales",), ("sales",), "Sales"),
    ColumnIntent("profit", ("Profit",), ("profit",), "Profit"),
    ColumnIntent("expenses", ("TE", "Expenses"), ("te", "expense"), "TE"),
    ColumnIntent("credit", ("Credit",), (), "Credit"),
    ColumnIntent("amazon_fee", ("Amazon Fee",), (), "Amazon Fee"),
    ColumnIntent("profit_percentage", ("Profit Percentage",), (), "Profit Percentage"),
)


def resolve_column(headers: Sequence[str], intent: ColumnIntent) -> str:
    keyed = [(header_key(h), h) for h in headers]
    for name in intent.exact:
        wanted = header_key(name)
        for key, header in keyed:
            if key == wanted:
                return header
    for key, header in keyed:
        if any(sub in key for sub in intent.substrings):
            return header
    if intent.fallback is not None:
        return intent.fallback
    return headers[0] if headers else intent.exact[0]


def resolve_columns(
    headers: Sequence[str], intents: Sequence[ColumnIntent] = DEFAULT_INTENTS
) -> dict[str, str]:
    return {intent.field: resolve_column(headers, intent) for intent in intents}
