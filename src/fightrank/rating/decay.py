"""
Inactivity decay for ratings.

A fighter who hasn't competed in a while has a less trustworthy rating.
After the full history replay, each rated fighter loses a flat number of
points depending on how long ago their last rated bout was:

    > 365 days  -> -20
    > 270 days  -> -10
    > 180 days  -> -5

The penalty is applied exactly once per recompute; it does not compound
across the replay, and ratings are rebuilt from scratch every run.
"""

import math
from datetime import date, datetime, timezone
from typing import Optional

from fightrank.rating.constants import INACTIVITY_PENALTIES

SECONDS_PER_DAY = 24 * 60 * 60


def days_since(last_bout_date: date, now: datetime) -> int:
    """
    Whole days between a bout date and now, rounded up.

    The bout date is taken as midnight of that day, so any part of a day
    counts as a full day.
    """
    last = datetime.combine(last_bout_date, datetime.min.time())
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)
    elapsed = abs((now - last).total_seconds())
    return math.ceil(elapsed / SECONDS_PER_DAY)


def inactivity_penalty(days_inactive: int) -> float:
    """Points to subtract for this many days since the last rated bout."""
    for threshold, penalty in INACTIVITY_PENALTIES:
        if days_inactive > threshold:
            return penalty
    return 0.0


def apply_inactivity_decay(
    rating: float,
    last_bout_date: Optional[date],
    now: datetime,
) -> float:
    """
    Apply the inactivity penalty to a terminal rating.

    Fighters with no rated bouts (last_bout_date is None) are returned
    unchanged.

    Examples:
        # Last fought 30 days ago - no change
        apply_inactivity_decay(1600.0, date(2024, 5, 2), datetime(2024, 6, 1))  # -> 1600.0

        # Last fought 400 days ago
        apply_inactivity_decay(1600.0, date(2023, 4, 28), datetime(2024, 6, 1))  # -> 1580.0
    """
    if last_bout_date is None:
        return rating
    return rating - inactivity_penalty(days_since(last_bout_date, now))
