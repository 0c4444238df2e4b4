#!/usr/bin/env python3
"""
Recompute every fighter's rating and replace the divisional rankings.

Normal usage (operator action after publishing an event):
    python scripts/recompute_rankings.py

Dry run (compute and print the summary, write nothing):
    python scripts/recompute_rankings.py --dry-run

Pin the reference date (inactivity decay and snapshot date):
    python scripts/recompute_rankings.py --as-of 2024-06-01
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from time import perf_counter

# Add src to path so this script can be run directly
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fightrank.config import settings
from fightrank.db import get_session
from fightrank.rating.pipeline import RankingPipeline

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Recompute ratings and replace the ranking snapshot.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute the new snapshot but do not write it.",
    )
    parser.add_argument(
        "--as-of",
        default=None,
        help="Reference date YYYY-MM-DD (default: now, UTC).",
    )
    parser.add_argument(
        "--metrics-json",
        default=None,
        help="Write a JSON summary to this path on completion.",
    )
    return parser


def main() -> int:
    args = _build_parser().parse_args()

    now = None
    if args.as_of:
        try:
            now = datetime.strptime(args.as_of, "%Y-%m-%d")
        except ValueError as exc:
            print(f"ERROR: --as-of must be YYYY-MM-DD: {exc}")
            return 1

    print(f"RANKINGS RECOMPUTE  dry_run={args.dry_run}")
    print("-" * 60)
    t_start = perf_counter()

    try:
        with get_session() as session:
            result = RankingPipeline().run(session, now=now, commit=not args.dry_run)
            if args.dry_run:
                session.rollback()
                print("(dry run - changes rolled back)")
    except TimeoutError:
        logger.error("Another rankings recompute is running; try again when it finishes")
        return 2

    elapsed = perf_counter() - t_start

    print("-" * 60)
    print(result.summary())
    print(f"Elapsed:                    {elapsed:.2f}s")

    if args.metrics_json:
        payload = {
            "status": "success",
            "dry_run": args.dry_run,
            "as_of_date": result.as_of_date.isoformat(),
            "elapsed_s": round(elapsed, 3),
            "bouts_rated": result.bouts_rated,
            "bouts_skipped": result.bouts_skipped,
            "fighters_rated": result.fighters_rated,
            "divisions_ranked": result.divisions_ranked,
            "entries_written": result.entries_written,
        }
        metrics_path = Path(args.metrics_json)
        metrics_path.parent.mkdir(parents=True, exist_ok=True)
        metrics_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
