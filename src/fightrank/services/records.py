"""Fight records (wins-losses-draws, no contests) from published bouts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from fightrank.db.models import Bout
from fightrank.outcomes import Decisive, NoContest, resolve_outcome


@dataclass(frozen=True)
class FightRecord:
    wins: int = 0
    losses: int = 0
    draws: int = 0
    no_contests: int = 0

    def __str__(self) -> str:
        record = f"{self.wins}-{self.losses}-{self.draws}"
        if self.no_contests:
            record += f" ({self.no_contests} NC)"
        return record


def calculate_fight_record(fighter_id: int, bouts: Iterable[Bout]) -> FightRecord:
    """
    Tally a fighter's record over the published bouts they appear in.

    Bouts the fighter isn't in, and unpublished bouts, are ignored.
    """
    wins = losses = draws = no_contests = 0

    for bout in bouts:
        if not bout.is_published:
            continue
        if fighter_id not in (bout.red_fighter_id, bout.blue_fighter_id):
            continue

        outcome = resolve_outcome(bout.red_fighter_id, bout.blue_fighter_id, bout.winner_id, bout.method)
        if isinstance(outcome, NoContest):
            no_contests += 1
        elif isinstance(outcome, Decisive):
            if outcome.winner_id == fighter_id:
                wins += 1
            else:
                losses += 1
        else:
            draws += 1

    return FightRecord(wins=wins, losses=losses, draws=draws, no_contests=no_contests)


def get_fight_record(session: Session, fighter_id: int) -> FightRecord:
    """Load a fighter's published bouts and tally their record."""
    stmt = select(Bout).where(
        Bout.is_published.is_(True),
        or_(Bout.red_fighter_id == fighter_id, Bout.blue_fighter_id == fighter_id),
    )
    return calculate_fight_record(fighter_id, session.scalars(stmt).all())
