from __future__ import annotations

from collections.abc import Sequence

from ..analytics.aggregate import format_currency
from ..models.aggregates import DashboardSummary, ProductDetail, ProductMetrics
from ..models.upload_state import UploadResult

"""Plain-text rendering of upload results and aggregates for the CLI.

SUMMARY line format:
SUMMARY file={name} rows={rows} sales={sales} profit={profit}
expenses={expenses} remainder={remainder} elapsed_sec={elapsed}
"""


def _number(value: float) -> str:
    # 整数値は小数点なし、それ以外は小数2桁
    if value == int(value):
        return str(int(value))
    return f"{value:.2f}"


def _elapsed(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds < 0.01:
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: UploadResult, summary: DashboardSummary) -> str:
    """Render the SUMMARY line for a successful upload.

    Examples:
        >>> from sales_insight.models import Totals, UploadStatus
        >>> result = UploadResult(file_name="q1.csv", status=UploadStatus.SUCCESS, row_count=1)
        >>> summary = DashboardSummary(Totals(100.0, 20.0, 10.0), 70.0, [], [], [])
        >>> render_summary_line(result, summary)
        'SUMMARY file=q1.csv rows=1 sales=100 profit=20 expenses=10 remainder=70 elapsed_sec=0'
    """
    t = summary.totals
    return (
        f"SUMMARY file={result.file_name} "
        f"rows={result.row_count} "
        f"sales={_number(t.sales)} "
        f"profit={_number(t.profit)} "
        f"expenses={_number(t.expenses)} "
        f"remainder={_number(summary.remainder)} "
        f"elapsed_sec={_elapsed(result.elapsed_seconds)}"
    )


def render_summary_cards(summary: DashboardSummary) -> list[str]:
    t = summary.totals
    return [
        f"Total Sales: {format_currency(t.sales)}",
        f"Total Profit: {format_currency(t.profit)}",
        f"Total Expenses: {format_currency(t.expenses)}",
    ]


def render_breakdown(summary: DashboardSummary) -> list[str]:
    # 5% 未満のスライスはラベルを省略 (値のみ表示)
    lines = []
    for s in summary.breakdown:
        label = f" ({s.share:.1f}%)" if s.share > 5 else ""
        lines.append(f"{s.name}: {format_currency(s.value)}{label}")
    return lines


def render_ranking(products: Sequence[ProductMetrics], title: str = "Top products by profit") -> list[str]:
    lines = [f"{title}:"]
    for rank, m in enumerate(products, start=1):
        lines.append(
            f"{rank:>3}. [{m.index}] {m.name} "
            f"sales={_number(m.sales)} profit={_number(m.profit)} expenses={_number(m.expenses)}"
        )
    return lines


def render_product_detail(detail: ProductDetail) -> list[str]:
    m = detail.metrics
    lines = [
        f"Product: {m.name}",
        f"Sales: {format_currency(m.sales)}",
        f"Profit: {format_currency(m.profit)}",
        f"Total Expenses: {format_currency(detail.total_expenses)}",
        f"Credit: {format_currency(m.credit)}",
        f"Amazon Fee: {format_currency(m.amazon_fee)}",
        f"Profit Percentage: {_number(m.profit_percentage)}%",
    ]
    lines.append("Breakdown:")
    lines.extend(f"  {s.name}: {format_currency(s.value)} ({s.share:.1f}%)" for s in detail.breakdown)
    lines.extend(render_ranking(detail.comparison, title=f"Comparison (Top {len(detail.comparison)})"))
    return lines
