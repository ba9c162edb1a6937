from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..analytics.aggregate import build_dashboard, product_detail, top_products
from ..analytics.selection import ProductSelectionError, select_product
from ..config.loader import ConfigError, InsightConfig, default_config, load_config, resolve_config_path
from ..ingest.errors import IngestionError
from ..ingest.reader import parse_file
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.upload_state import UploadStatus
from ..services.chatbot import respond
from ..services.report import (
    render_breakdown,
    render_product_detail,
    render_ranking,
    render_summary_cards,
    render_summary_line,
)
from ..services.upload import UploadSession
from ..store.dataset_store import DatasetStore

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config (or built-in defaults)
- Ingest one CSV / Excel file into a fresh DatasetStore
- Print summary cards, breakdown and the profit ranking, then a SUMMARY line
- Optionally print one product's detail view (--product INDEX)
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_INGEST_FAILED = 2


def _load_env_file(path: Path) -> None:
    """Load .env (does not override variables already set in the process)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="sales-insight", description="Product sales spreadsheet analytics")
    p.add_argument("file", nargs="?", help="CSV (.csv) or Excel (.xlsx/.xls) file to ingest")
    p.add_argument("--config", help="Path to YAML config (default: config/insight.yml)")
    p.add_argument("--top", type=int, help="Number of products in the ranking")
    p.add_argument("--profit", action="store_true", help="Show the profit view ranking")
    p.add_argument("--product", type=int, metavar="INDEX", help="Show details for the product at INDEX (0-based)")
    p.add_argument("--inspect-data", action="store_true", help="Print headers & first rows then exit")
    p.add_argument("--chat", metavar="MESSAGE", help="Ask the assistant a question and exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _load_config(explicit: str | None) -> InsightConfig:
    path = resolve_config_path(explicit)
    if path is None:
        return default_config()
    return load_config(path)


def _inspect_data(path: Path) -> int:
    try:
        table = parse_file(path)
    except IngestionError as e:
        print(f"inspect: {e}")
        return EXIT_INGEST_FAILED
    print(f"FILE: {path.name} cols={table.columns} rows={len(table.rows)}")
    # datetime を含む場合に備えて isoformat で文字列化
    for row in table.rows[:3]:
        print("  ", {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in row.items()})
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はそのまま空引数として扱う)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(logger)

    if args.chat is not None:
        print(respond(args.chat))
        return EXIT_SUCCESS

    if args.file is None:
        logger.error("no input file given")
        return EXIT_FATAL

    try:
        cfg = _load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    path = Path(args.file)
    if not path.is_file():
        logger.error(f"file not found: {path}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(path)

    store = DatasetStore()
    error_log = ErrorLogBuffer(Path(cfg.log_dir)) if cfg.error_log else None
    session = UploadSession(store, cfg, error_log)
    result = session.ingest(path)
    if result.status is UploadStatus.ERROR:
        return EXIT_INGEST_FAILED

    dataset = store.get_dataset()
    top_n = args.top if args.top is not None else cfg.top_n.dashboard
    if top_n < 0:
        logger.error(f"--top must be >= 0, got {top_n}")
        return EXIT_FATAL
    summary = build_dashboard(dataset, top_n=top_n)

    for line in render_summary_cards(summary) + render_breakdown(summary):
        logger.info(line)
    for line in render_ranking(summary.top_products):
        logger.info(line)

    if args.profit:
        ranked = top_products(dataset, cfg.top_n.profit)
        for line in render_ranking(ranked, title="Profit view"):
            logger.info(line)

    if args.product is not None:
        try:
            selection = select_product(dataset, args.product)
            detail = product_detail(dataset, selection, comparison_size=cfg.top_n.comparison)
        except ProductSelectionError as e:
            logger.error(f"product: {e}")
            return EXIT_FATAL
        for line in render_product_detail(detail):
            logger.info(line)

    summary_line = render_summary_line(result, summary)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
