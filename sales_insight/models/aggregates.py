from __future__ import annotations

from dataclasses import dataclass, field

"""Derived aggregate structures. Ephemeral: recomputed on every read."""

__all__ = [
    "Totals",
    "BreakdownSlice",
    "ProductMetrics",
    "DashboardSummary",
    "ProductDetail",
]


@dataclass(frozen=True)
class Totals:
    sales: float
    profit: float
    expenses: float


@dataclass(frozen=True)
class BreakdownSlice:
    """One named share of a pie-style breakdown."""
    name: str
    value: float
    share: float  # percent of the breakdown total, 0 when the total is 0


@dataclass(frozen=True)
class ProductMetrics:
    """Numeric projection of one Dataset row."""
    index: int  # 0-based position in the Dataset
    name: str
    sales: float
    profit: float
    expenses: float
    credit: float
    amazon_fee: float
    profit_percentage: float


@dataclass(frozen=True)
class DashboardSummary:
    totals: Totals
    remainder: float
    breakdown: list[BreakdownSlice]
    products: list[ProductMetrics]
    top_products: list[ProductMetrics]
    columns: dict[str, str] = field(default_factory=dict)  # logical field -> header


@dataclass(frozen=True)
class ProductDetail:
    metrics: ProductMetrics
    total_expenses: float  # TE + Amazon Fee
    breakdown: list[BreakdownSlice]  # positive parts only
    comparison: list[ProductMetrics]  # top ranked rows, display names truncated
