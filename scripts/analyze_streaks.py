#!/usr/bin/env python3
"""
Streak Analysis Script

Loads a price CSV, derives pct_change from open/close, and reports:
- longest up and down runs with their recoveries
- the run with the slowest first recovery
- descriptive statistics for numeric columns

Usage:
    python analyze_streaks.py data/AAPL.csv
    python analyze_streaks.py data/AAPL.csv --stats close --stats volume
    python analyze_streaks.py data/AAPL.csv --all-stats --output reports/aapl.md
    python analyze_streaks.py data/AAPL.csv --json
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from config.settings_loader import get_log_level, get_pct_change_field, load_settings
from config.settings_schema import load_validated_settings
from core.exceptions import StreakSystemError
from core.structured_log import jlog
from streaks.analyzer import analyze_rows
from streaks.data_loader import load_csv
from streaks.models import SummaryStats
from streaks.report import format_analysis_report, write_report
from streaks.summary_stats import summarize_field, summarize_numeric_fields
from streaks.transform import add_derived_fields, find_field_ignore_case

logger = logging.getLogger("streaks.cli")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description='Consecutive up/down streak and recovery analysis')
    ap.add_argument('csv', type=str, help='Path to CSV file with a header row')
    ap.add_argument('--stats', action='append', default=[], metavar='COLUMN',
                    help='Column to summarize (repeatable)')
    ap.add_argument('--all-stats', action='store_true',
                    help='Summarize every numeric column')
    ap.add_argument('--json', action='store_true',
                    help='Output as JSON')
    ap.add_argument('--output', type=str, default=None,
                    help='Also write the output to this file')
    ap.add_argument('--config', type=str, default=None,
                    help='Path to settings YAML (overrides STREAKS_CONFIG_PATH)')
    ap.add_argument('--dotenv', type=str, default='.env',
                    help='Path to .env file')
    ap.add_argument('--verbose', action='store_true',
                    help='Enable debug logging')
    return ap


def _select_stats(
    rows: List[dict],
    columns: List[str],
    requested: List[str],
    all_stats: bool,
) -> Dict[str, Optional[SummaryStats]]:
    if all_stats:
        return summarize_numeric_fields(rows, columns)

    if not requested:
        pct_field = get_pct_change_field()
        requested = [pct_field] if pct_field in columns else []

    stats: Dict[str, Optional[SummaryStats]] = {}
    for name in requested:
        column = find_field_ignore_case(columns, name)
        if column is None:
            logger.warning("Column %r not found; skipping statistics", name)
            continue
        stats[column] = summarize_field(rows, column)
    return stats


def run(args: argparse.Namespace) -> str:
    """Execute the analysis and return the rendered output."""
    rows, columns = load_csv(args.csv)
    rows, columns = add_derived_fields(rows, columns)

    result = analyze_rows(rows, columns)
    stats = _select_stats(rows, columns, args.stats, args.all_stats)

    jlog(
        "streak_analysis_complete",
        csv=str(args.csv),
        rows=len(rows),
        streaks=len(result.streaks) if result else 0,
        stats_columns=list(stats.keys()),
    )

    if args.json:
        payload = {
            "source": str(args.csv),
            "analysis": result.to_dict() if result else None,
            "stats": {k: (v.to_dict() if v else None) for k, v in stats.items()},
        }
        return json.dumps(payload, indent=2, default=str)

    return format_analysis_report(result, stats)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    dotenv = Path(args.dotenv)
    if dotenv.exists():
        load_dotenv(dotenv)
    config_path = Path(args.config) if args.config else None

    jlog("streak_analysis_start", csv=str(args.csv))
    try:
        # Validate before anything reads the settings
        load_validated_settings(config_path)
        load_settings(force_reload=True, path=config_path)

        logging.basicConfig(
            level=logging.DEBUG if args.verbose else get_log_level(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        output = run(args)
    except StreakSystemError as e:
        logger.error(str(e))
        jlog("streak_analysis_failed", level="ERROR", **e.to_dict())
        return 1

    print(output)
    if args.output:
        path = write_report(output, Path(args.output))
        logger.info("Wrote %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
