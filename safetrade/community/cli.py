"""CLI entry-point for the SafeTrade community insights.

Usage examples
--------------
# Trends for the last 7 days:
python -m safetrade.community --input data/reports.csv trends --period 7days

# Community analytics overview:
python -m safetrade.community --input data/reports.csv analytics

# Current alert, catalogs fetched from the backend:
python -m safetrade.community --input data/reports.csv --catalog-url http://localhost:3000 alert

# Everything, also written to out/:
python -m safetrade.community --input data/reports.jsonl --out-dir out report
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from safetrade.community.reporter import to_json, write_outputs
from safetrade.community.service import CommunityService
from safetrade.community.settings import CONFIG_FILE, CommunitySettings, load_settings
from safetrade.community.store import InMemoryReportStore
from safetrade.contracts.enums import TrendPeriod
from safetrade.shared.logger import setup_logging


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="community",
        description="SafeTrade community insights — trends, analytics and alert level",
    )
    p.add_argument(
        "--input",
        default="data/reports.csv",
        help="Report export (CSV or JSONL). Format auto-detected by extension. "
             "Default: data/reports.csv",
    )
    p.add_argument(
        "--config-dir",
        default="config",
        help=f"Directory with {CONFIG_FILE}. Built-in defaults are used if the file "
             "is absent. Default: config/",
    )
    p.add_argument(
        "--catalog-url",
        default=None,
        help="Backend base URL for live catalogs (overrides catalog.base_url). "
             "Without it the built-in catalogs are used.",
    )
    p.add_argument(
        "--out-dir",
        default=None,
        help="With the report command, also write JSON/CSV/TXT outputs here.",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level. Default: WARNING",
    )

    sub = p.add_subparsers(dest="command", required=True)
    trends = sub.add_parser("trends", help="Attack-type and impact distributions")
    trends.add_argument(
        "--period",
        default=None,
        choices=[tp.value for tp in TrendPeriod],
        help="Trailing window. Default: trends.default_period (30days)",
    )
    sub.add_parser("analytics", help="Community overview over all reports")
    sub.add_parser("alert", help="Traffic-light community alert")
    sub.add_parser("report", help="Trends, analytics and alert together")
    return p


def _settings(config_dir: str, catalog_url: str | None) -> CommunitySettings:
    path = Path(config_dir) / CONFIG_FILE
    settings = load_settings(config_dir) if path.exists() else CommunitySettings()
    if catalog_url:
        settings.catalog_url = catalog_url
    return settings


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    settings = _settings(args.config_dir, args.catalog_url)
    store = InMemoryReportStore.from_file(args.input)
    service = CommunityService.from_settings(store, settings)

    if args.command == "trends":
        payload = service.get_trends(args.period).to_dict()
    elif args.command == "analytics":
        payload = service.get_analytics().to_dict()
    elif args.command == "alert":
        payload = service.get_community_alert().to_dict()
    else:
        trends = service.get_trends()
        overview = service.get_analytics()
        alert = service.get_community_alert()
        payload = {
            "trends": trends.to_dict(),
            "analytics": overview.to_dict(),
            "alert": alert.to_dict(),
        }
        if args.out_dir:
            write_outputs(trends, overview, alert, args.out_dir)

    sys.stdout.write(to_json(payload) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
