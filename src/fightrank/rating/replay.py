"""
History replay: fold the rating model over every rated bout in order.

Ratings are path-dependent (a fighter's K factor depends on how many rated
bouts they've had), so the replay order must be total and deterministic:

    (event date, order on the card, bout id)

Bouts whose event cannot be resolved sort as if held on 1970-01-01.

The fold itself is a pure function, ``apply_bout(states, bout) -> states``,
reduced over the sorted bout list. Nothing is mutated in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from functools import reduce
from typing import Iterable, Mapping, NamedTuple, Optional

from fightrank.divisions import Division
from fightrank.outcomes import Decisive, NoContest, Outcome, resolve_outcome
from fightrank.rating.calculator import calculate_new_ratings, method_multiplier
from fightrank.rating.constants import START_RATING_PRO, START_RATINGS
from fightrank.rating.experience import k_factor_for

logger = logging.getLogger(__name__)

EPOCH = date(1970, 1, 1)


# ---------------------------------------------------------------------------
# Read-snapshot rows - lightweight, no ORM objects in the hot path
# ---------------------------------------------------------------------------

class FighterRow(NamedTuple):
    """What the engine needs to know about a fighter."""
    id: int
    sport: str
    gender: str
    weight_class: str
    fighter_level: str

    @property
    def division(self) -> Division:
        return Division(self.sport, self.gender, self.weight_class)


class BoutRow(NamedTuple):
    """What the engine needs to know about a bout."""
    id: int
    event_id: Optional[int]
    bout_order: int
    red_fighter_id: int
    blue_fighter_id: int
    winner_id: Optional[int]
    method: Optional[str]
    is_title_bout: bool
    is_published: bool
    belt_id: Optional[int] = None


class RatedBout(NamedTuple):
    """An eligible bout with its resolved date and outcome."""
    id: int
    bout_date: date
    bout_order: int
    red_fighter_id: int
    blue_fighter_id: int
    outcome: Outcome
    method: Optional[str]
    is_title_bout: bool


@dataclass(frozen=True)
class FighterState:
    """A fighter's rating state during one recompute pass."""
    rating: float = START_RATING_PRO
    rated_bouts: int = 0
    last_bout_date: Optional[date] = None


@dataclass
class ReplayResult:
    """Terminal states plus counts for reporting."""
    states: dict[int, FighterState]
    bouts_rated: int = 0
    bouts_skipped: int = 0


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

def initial_states(fighters: Iterable[FighterRow]) -> dict[int, FighterState]:
    """Starting state for every fighter, keyed by fighter id."""
    return {
        f.id: FighterState(rating=START_RATINGS.get(f.fighter_level, START_RATING_PRO))
        for f in fighters
    }


def select_rated_bouts(
    bouts: Iterable[BoutRow],
    event_dates: Mapping[int, Optional[date]],
) -> list[RatedBout]:
    """
    Filter to published, non-no-contest bouts and sort them into replay order.

    A bout with no method is still rated (treated as a neutral decision).
    """
    rated: list[RatedBout] = []
    for b in bouts:
        if not b.is_published:
            continue
        outcome = resolve_outcome(b.red_fighter_id, b.blue_fighter_id, b.winner_id, b.method)
        if isinstance(outcome, NoContest):
            continue

        bout_date = event_dates.get(b.event_id) if b.event_id is not None else None
        rated.append(RatedBout(
            id=b.id,
            bout_date=bout_date or EPOCH,
            bout_order=b.bout_order or 0,
            red_fighter_id=b.red_fighter_id,
            blue_fighter_id=b.blue_fighter_id,
            outcome=outcome,
            method=b.method,
            is_title_bout=bool(b.is_title_bout),
        ))

    rated.sort(key=lambda r: (r.bout_date, r.bout_order, r.id))
    return rated


def score_for_red(bout: RatedBout) -> float:
    """Red corner's score: 1 for a win, 0 for a loss, 0.5 otherwise."""
    outcome = bout.outcome
    if isinstance(outcome, NoContest):
        raise ValueError(f"No-contest bout {bout.id} cannot be rated")
    if isinstance(outcome, Decisive):
        if outcome.winner_id == bout.red_fighter_id:
            return 1.0
        if outcome.winner_id == bout.blue_fighter_id:
            return 0.0
    return 0.5


def apply_bout(
    states: Mapping[int, FighterState],
    bout: RatedBout,
) -> dict[int, FighterState]:
    """
    Rate one bout and return the updated state map.

    If either corner is missing from ``states`` the bout is skipped and the
    states come back unchanged.
    """
    red = states.get(bout.red_fighter_id)
    blue = states.get(bout.blue_fighter_id)
    if red is None or blue is None:
        logger.debug(
            "Skipping bout %s: unknown fighter (red=%s, blue=%s)",
            bout.id, bout.red_fighter_id, bout.blue_fighter_id,
        )
        return dict(states)

    update = calculate_new_ratings(
        rating_a=red.rating,
        rating_b=blue.rating,
        score_a=score_for_red(bout),
        k_a=k_factor_for(red.rated_bouts),
        k_b=k_factor_for(blue.rated_bouts),
        multiplier=method_multiplier(bout.method),
        is_title_bout=bout.is_title_bout,
    )

    new_states = dict(states)
    new_states[bout.red_fighter_id] = replace(
        red,
        rating=update.rating_a_after,
        rated_bouts=red.rated_bouts + 1,
        last_bout_date=bout.bout_date,
    )
    new_states[bout.blue_fighter_id] = replace(
        blue,
        rating=update.rating_b_after,
        rated_bouts=blue.rated_bouts + 1,
        last_bout_date=bout.bout_date,
    )
    return new_states


def replay_history(
    fighters: Iterable[FighterRow],
    bouts: Iterable[BoutRow],
    event_dates: Mapping[int, Optional[date]],
) -> ReplayResult:
    """
    Replay every rated bout and return each fighter's terminal state.

    Args:
        fighters: Every fighter in the system
        bouts: Every bout in the system (unpublished and no-contest bouts
               are filtered out here)
        event_dates: Event id -> event date

    Returns:
        ReplayResult with terminal states (before inactivity decay)
    """
    fighters = list(fighters)
    rated = select_rated_bouts(bouts, event_dates)
    known = {f.id for f in fighters}

    states = reduce(apply_bout, rated, initial_states(fighters))

    skipped = sum(
        1 for r in rated
        if r.red_fighter_id not in known or r.blue_fighter_id not in known
    )
    return ReplayResult(
        states=states,
        bouts_rated=len(rated) - skipped,
        bouts_skipped=skipped,
    )
