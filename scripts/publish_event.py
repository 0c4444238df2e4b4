#!/usr/bin/env python3
"""
Publish (or unpublish) a fight card.

Publishing marks the event and every bout on it as published and hands each
decided title bout's belt to the winner. Unpublishing hides the card again
so it can be edited; belt holders are left as they are.

Usage:
    python scripts/publish_event.py 12
    python scripts/publish_event.py 12 --unpublish
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path so this script can be run directly
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fightrank.config import settings
from fightrank.db import get_session
from fightrank.services.publishing import publish_event, unpublish_event

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Publish or unpublish an event.")
    parser.add_argument("event_id", type=int, help="Event ID")
    parser.add_argument(
        "--unpublish",
        action="store_true",
        help="Unpublish instead (title holders are not reverted).",
    )
    args = parser.parse_args()

    try:
        with get_session() as session:
            if args.unpublish:
                result = unpublish_event(session, args.event_id)
            else:
                result = publish_event(session, args.event_id)
    except LookupError as exc:
        logger.error("%s", exc)
        return 1

    print(result.summary())
    if not args.unpublish:
        print("Run scripts/recompute_rankings.py to refresh the rankings.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
