"""
Ranking snapshots: turn terminal ratings into divisional leaderboards.

Ratings are global per fighter, but rankings are per division. Every rated
fighter is sorted once by rating (highest first, fighter id breaking ties)
and then dealt into their own declared division, where a per-division
counter hands out dense ranks 1, 2, 3, ... Anything past the division cap
is computed but not emitted.

Movement is measured against the snapshot being replaced:
- no previous rank  -> new entrant
- previous - current > 0 -> moved up that many places
- previous - current < 0 -> moved down
- previous == current    -> unchanged
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping, NamedTuple, Optional

from fightrank.divisions import Division
from fightrank.rating.constants import MAX_RANKED_PER_DIVISION, MIN_RATED_BOUTS
from fightrank.rating.replay import FighterRow, FighterState

PreviousRankKey = tuple[int, Division]

MOVEMENT_NEW = "new"
MOVEMENT_UP = "up"
MOVEMENT_DOWN = "down"
MOVEMENT_SAME = "same"


class PreviousRank(NamedTuple):
    """One row of the snapshot being replaced."""
    fighter_id: int
    division: Division
    rank: int


@dataclass(frozen=True)
class SnapshotEntry:
    """One row of a new ranking snapshot."""
    as_of_date: date
    division: Division
    rank: int
    fighter_id: int
    score: Decimal
    previous_rank: Optional[int] = None

    @property
    def movement(self) -> Optional[int]:
        return rank_movement(self.previous_rank, self.rank)

    @property
    def movement_label(self) -> str:
        return movement_label(self.previous_rank, self.rank)


def rank_movement(previous_rank: Optional[int], current_rank: int) -> Optional[int]:
    """Places moved up (positive) or down (negative); None for a new entrant."""
    if previous_rank is None:
        return None
    return previous_rank - current_rank


def movement_label(previous_rank: Optional[int], current_rank: int) -> str:
    """'new', 'up', 'down' or 'same'."""
    delta = rank_movement(previous_rank, current_rank)
    if delta is None:
        return MOVEMENT_NEW
    if delta > 0:
        return MOVEMENT_UP
    if delta < 0:
        return MOVEMENT_DOWN
    return MOVEMENT_SAME


def round_score(rating: float) -> Decimal:
    """Terminal rating rounded half-up to one decimal place."""
    return Decimal(str(rating)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def previous_rank_lookup(previous: Iterable[PreviousRank]) -> dict[PreviousRankKey, int]:
    """Map (fighter, division) to the rank held in the previous snapshot."""
    return {(p.fighter_id, p.division): p.rank for p in previous}


def build_snapshot(
    fighters: Iterable[FighterRow],
    states: Mapping[int, FighterState],
    previous: Iterable[PreviousRank],
    as_of_date: date,
    min_rated_bouts: int = MIN_RATED_BOUTS,
    max_per_division: int = MAX_RANKED_PER_DIVISION,
) -> list[SnapshotEntry]:
    """
    Build the full replacement ranking set.

    Args:
        fighters: Fighter rows (supply each fighter's declared division)
        states: Terminal fighter states after inactivity decay
        previous: Rows of the snapshot being replaced
        as_of_date: Date stamped on every new entry
        min_rated_bouts: Fighters with fewer rated bouts are not ranked
        max_per_division: Entries past this rank are not emitted

    Returns:
        Entries ordered by the global rating sort (so each division's
        entries appear in rank order)
    """
    prev_lookup = previous_rank_lookup(previous)
    divisions = {f.id: f.division for f in fighters}

    eligible = [
        (fighter_id, state)
        for fighter_id, state in states.items()
        if fighter_id in divisions and state.rated_bouts >= min_rated_bouts
    ]
    eligible.sort(key=lambda item: (-item[1].rating, item[0]))

    counters: dict[Division, int] = defaultdict(int)
    entries: list[SnapshotEntry] = []

    for fighter_id, state in eligible:
        division = divisions[fighter_id]
        counters[division] += 1
        rank = counters[division]
        if rank > max_per_division:
            continue

        entries.append(SnapshotEntry(
            as_of_date=as_of_date,
            division=division,
            rank=rank,
            fighter_id=fighter_id,
            score=round_score(state.rating),
            previous_rank=prev_lookup.get((fighter_id, division)),
        ))

    return entries
