"""
StorePulse CLI

Orders CSV -> monthly summaries -> root causes, alerts and seasonality,
written as report.json into a timestamped run folder.
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from storepulse.__version__ import __version__
from storepulse.aggregation import build_monthly_sales, build_monthly_summaries
from storepulse.automation.run_metadata import create_run_metadata
from storepulse.config import ColumnConfig, load_config
from storepulse.reporting.assembler import build_store_reports, report_to_dict
from storepulse.utils.logger import get_logger

logger = logging.getLogger("storepulse.cli")


# -------------------------------------------------
# LOADING
# -------------------------------------------------
def read_orders(path: Path) -> pd.DataFrame:
    last_error = None
    for enc in ("utf-8", "latin-1", "cp1252"):
        try:
            return pd.read_csv(path, encoding=enc)
        except UnicodeDecodeError as exc:
            last_error = exc
            continue
    raise ValueError(f"Unreadable orders file: {path}") from last_error


def read_extras(path: Optional[Path]) -> Optional[pd.DataFrame]:
    if path is None:
        return None
    if not path.exists():
        raise FileNotFoundError(path)
    return pd.read_csv(path)


# -------------------------------------------------
# PROGRAMMATIC ENTRY
# -------------------------------------------------
def run_reports(
    input_path: str,
    config: Dict[str, Any],
    extras_path: Optional[str] = None,
    export_chart: bool = False,
) -> Dict[str, Optional[str]]:
    """
    Returns:
        {
            "report": <path>,
            "chart": <path or None>,
            "run_dir": <path>,
            "reports": <count>
        }
    """
    input_path = Path(input_path)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    run_dir = Path(config.get("output_dir", "runs")) / datetime.now(timezone.utc).strftime(
        "%Y-%m-%d_%H-%M-%S"
    )
    run_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Run directory: %s", run_dir)

    orders = read_orders(input_path)
    extras = read_extras(Path(extras_path) if extras_path else None)
    columns = ColumnConfig.from_config(config)
    store_id = str(config.get("store", {}).get("id") or "default")

    summaries = build_monthly_summaries(orders, store_id, columns=columns, extras=extras)
    sales = build_monthly_sales(orders, columns=columns)
    reports = build_store_reports(summaries, sales)

    report_cfg = config.get("report", {})
    month, year = report_cfg.get("month"), report_cfg.get("year")
    if month and year:
        reports = [r for r in reports if (r.month, r.year) == (int(month), int(year))]

    payload = {
        "store_id": store_id,
        "generated_with": f"StorePulse v{__version__}",
        "reports": [report_to_dict(r) for r in reports],
    }

    report_path = run_dir / "report.json"
    with open(report_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)

    chart_path = None
    if export_chart and reports:
        try:
            from storepulse.visuals.seasonality import plot_seasonal_index

            chart_path = plot_seasonal_index(
                reports[-1].seasonal_pattern, run_dir / "seasonality.png"
            )
        except Exception:
            logger.exception("Seasonality chart failed")

    create_run_metadata(
        input_files=[str(input_path)] + ([extras_path] if extras_path else []),
        config=config,
        output_dir=run_dir,
        reports=len(reports),
    )

    return {
        "report": str(report_path),
        "chart": str(chart_path) if chart_path else None,
        "run_dir": str(run_dir),
        "reports": len(reports),
    }


# -------------------------------------------------
# CLI ENTRY
# -------------------------------------------------
def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description=f"StorePulse v{__version__} - monthly store performance reports"
    )

    parser.add_argument("input", nargs="?", help="Orders CSV file")
    parser.add_argument("--config", help="Path to config YAML")
    parser.add_argument("--extras", help="Month-level metrics CSV (year, month, ...)")
    parser.add_argument("--store-id", help="Store identifier")
    parser.add_argument("--month", type=int, help="Report month (1-12)")
    parser.add_argument("--year", type=int, help="Report year")
    parser.add_argument("--chart", action="store_true", help="Export seasonality chart")
    parser.add_argument("--version", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    # ---- VERSION ----
    if args.version:
        print(f"StorePulse v{__version__}")
        return 0

    config = load_config(args.config)

    # ---- LOGGING ----
    level_name = "DEBUG" if args.verbose else str(config.get("logging", {}).get("level", "INFO"))
    get_logger("storepulse", getattr(logging, level_name.upper(), logging.INFO))

    # ---- VALIDATION ----
    if not args.input:
        parser.error("Input file required")

    if (args.month is None) != (args.year is None):
        parser.error("--month and --year must be given together")

    if args.month is not None and not 1 <= args.month <= 12:
        parser.error("--month must be between 1 and 12")

    if args.store_id:
        config["store"]["id"] = args.store_id
    if args.month is not None:
        config["report"]["month"] = args.month
        config["report"]["year"] = args.year

    result = run_reports(
        input_path=args.input,
        config=config,
        extras_path=args.extras,
        export_chart=args.chart or bool(config.get("visuals", {}).get("enabled")),
    )

    if args.month is not None and result["reports"] == 0:
        logger.error("No orders found for %s-%02d", args.year, args.month)
        return 1

    print("\nReport generated")
    print(f"Report: {result['report']}")
    if result["chart"]:
        print(f"Chart: {result['chart']}")
    print(f"Run folder: {result['run_dir']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
