from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

import numpy as np
import pandas as pd

from ..models.aggregates import BreakdownSlice, DashboardSummary, ProductDetail, ProductMetrics, Totals
from ..models.dataset import Dataset
from ..models.product_selection import ProductSelection
from .columns import resolve_columns
from .selection import resolve_selection

"""Aggregations over the canonical Dataset.

Everything here is recomputed on demand from the Dataset and never written
back. Numeric projections are lenient: a missing or unparsable cell counts
as zero.
"""

__all__ = [
    "numeric_series",
    "compute_totals",
    "compute_remainder",
    "financial_breakdown",
    "product_metrics",
    "rank_by_profit",
    "top_products",
    "truncate_name",
    "product_detail",
    "build_dashboard",
    "format_currency",
]

logger = logging.getLogger(__name__)

# logical field -> ProductMetrics attribute
_METRIC_FIELDS = {
    "sales": "sales",
    "profit": "profit",
    "expenses": "expenses",
    "credit": "credit",
    "amazon_fee": "amazon_fee",
    "profit_percentage": "profit_percentage",
}


def numeric_series(frame: pd.DataFrame, column: str) -> pd.Series:
    """Float projection of one column; absent, blank or unparsable cells are 0."""
    if column not in frame.columns:
        return pd.Series(0.0, index=frame.index, dtype=float)
    values = pd.to_numeric(frame[column], errors="coerce")
    return values.replace([np.inf, -np.inf], np.nan).fillna(0.0).astype(float)


def _resolved(dataset: Dataset, columns: Mapping[str, str] | None) -> Mapping[str, str]:
    return columns if columns is not None else resolve_columns(list(dataset.columns))


def compute_totals(dataset: Dataset, columns: Mapping[str, str] | None = None) -> Totals:
    columns = _resolved(dataset, columns)
    frame = dataset.to_frame()
    return Totals(
        sales=float(numeric_series(frame, columns["sales"]).sum()),
        profit=float(numeric_series(frame, columns["profit"]).sum()),
        expenses=float(numeric_series(frame, columns["expenses"]).sum()),
    )


def compute_remainder(totals: Totals) -> float:
    """Sales value not attributed to profit or expenses, floored at zero."""
    return max(totals.sales - (totals.profit + totals.expenses), 0.0)


def _slices(parts: Sequence[tuple[str, float]]) -> list[BreakdownSlice]:
    total = sum(value for _, value in parts)
    return [
        BreakdownSlice(name=name, value=value, share=(value / total * 100.0) if total > 0 else 0.0)
        for name, value in parts
    ]


def financial_breakdown(totals: Totals) -> list[BreakdownSlice]:
    """Profit / Expenses / Other Costs shares of total sales."""
    return _slices(
        [
            ("Profit", totals.profit),
            ("Expenses", totals.expenses),
            ("Other Costs", compute_remainder(totals)),
        ]
    )


def product_metrics(dataset: Dataset, columns: Mapping[str, str] | None = None) -> list[ProductMetrics]:
    """Per-row numeric projections in Dataset order."""
    if dataset.is_empty:
        return []
    columns = _resolved(dataset, columns)
    frame = dataset.to_frame()
    numbers = {attr: numeric_series(frame, columns[field]).tolist() for field, attr in _METRIC_FIELDS.items()}
    name_col = columns["product_name"]
    names = frame[name_col].tolist() if name_col in frame.columns else [""] * len(frame)

    metrics: list[ProductMetrics] = []
    for i, raw_name in enumerate(names):
        name = "" if raw_name is None or (not isinstance(raw_name, str) and pd.isna(raw_name)) else str(raw_name).strip()
        metrics.append(
            ProductMetrics(
                index=i,
                name=name or f"Product {i + 1}",
                **{attr: numbers[attr][i] for attr in _METRIC_FIELDS.values()},
            )
        )
    return metrics


def rank_by_profit(metrics: Sequence[ProductMetrics]) -> list[ProductMetrics]:
    """Descending by profit. sorted() is stable, so ties keep Dataset order."""
    return sorted(metrics, key=lambda m: m.profit, reverse=True)


def top_products(dataset: Dataset, n: int, columns: Mapping[str, str] | None = None) -> list[ProductMetrics]:
    if n < 0:
        raise ValueError(f"top-N size must be >= 0, got {n}")
    return rank_by_profit(product_metrics(dataset, columns))[:n]


def truncate_name(name: str, limit: int = 15, keep: int = 12) -> str:
    return name[:keep] + "..." if len(name) > limit else name


def product_detail(
    dataset: Dataset,
    selection: ProductSelection,
    comparison_size: int = 5,
) -> ProductDetail:
    """Detail view of one selected product.

    Raises:
        StaleSelectionError: selection was produced from another Dataset
        ProductSelectionError: index out of range
    """
    resolve_selection(dataset, selection)
    columns = resolve_columns(list(dataset.columns))
    metrics = product_metrics(dataset, columns)
    current = metrics[selection.index]

    parts = [
        ("Profit", current.profit),
        ("Expenses", current.expenses),
        ("Amazon Fee", current.amazon_fee),
        ("Credit", current.credit),
    ]
    breakdown = _slices([(name, value) for name, value in parts if value > 0])

    comparison = [
        ProductMetrics(
            index=m.index,
            name=truncate_name(m.name),
            sales=m.sales,
            profit=m.profit,
            expenses=m.expenses,
            credit=m.credit,
            amazon_fee=m.amazon_fee,
            profit_percentage=m.profit_percentage,
        )
        for m in rank_by_profit(metrics)[:comparison_size]
    ]
    return ProductDetail(
        metrics=current,
        total_expenses=current.expenses + current.amazon_fee,
        breakdown=breakdown,
        comparison=comparison,
    )


def build_dashboard(dataset: Dataset, top_n: int = 10) -> DashboardSummary:
    """Totals, breakdown, per-product rows and the top-N ranking in one pass."""
    columns = resolve_columns(list(dataset.columns))
    totals = compute_totals(dataset, columns)
    metrics = product_metrics(dataset, columns)
    logger.debug(
        "dashboard file=%s rows=%d columns=%s",
        dataset.file_name,
        len(dataset),
        columns,
    )
    return DashboardSummary(
        totals=totals,
        remainder=compute_remainder(totals),
        breakdown=financial_breakdown(totals),
        products=metrics,
        top_products=rank_by_profit(metrics)[:top_n],
        columns=dict(columns),
    )


def format_currency(value: float) -> str:
    """Card value, e.g. 1234.5 -> '$1,234.5' (up to 3 decimals, zeros dropped)."""
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return f"${text}"
