"""Analytics over the canonical Dataset: column resolution, totals, rankings."""

from .aggregate import (
    build_dashboard,
    compute_remainder,
    compute_totals,
    financial_breakdown,
    format_currency,
    product_detail,
    product_metrics,
    rank_by_profit,
    top_products,
)
from .columns import DEFAULT_INTENTS, ColumnIntent, resolve_columns
from .selection import ProductSelectionError, StaleSelectionError, resolve_selection, select_product

__all__ = [
    "ColumnIntent",
    "DEFAULT_INTENTS",
    "ProductSelectionError",
    "StaleSelectionError",
    "build_dashboard",
    "compute_remainder",
    "compute_totals",
    "financial_breakdown",
    "format_currency",
    "product_detail",
    "product_metrics",
    "rank_by_profit",
    "resolve_columns",
    "resolve_selection",
    "select_product",
    "top_products",
]
