#!/usr/bin/env python3
"""
Load the demo promotion, fighters, belt and events into the database.

Usage:
    python scripts/seed_demo.py
    python scripts/seed_demo.py --recompute   # also build the first rankings
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path so this script can be run directly
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fightrank.config import settings
from fightrank.db import get_session
from fightrank.rating.pipeline import RankingPipeline
from fightrank.services.seed import seed_demo

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed demo data.")
    parser.add_argument(
        "--recompute",
        action="store_true",
        help="Recompute rankings after seeding.",
    )
    args = parser.parse_args()

    with get_session() as session:
        result = seed_demo(session)
        print(f"Seeded promotion {result.promotion_id}: fighters={result.fighter_ids} belt={result.belt_id}")
        if args.recompute:
            ranking = RankingPipeline().run(session)
            print(ranking.summary())

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
