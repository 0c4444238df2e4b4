"""
Ranking pipeline - orchestrates a full recompute of the rankings.

One pass, always from scratch:

1. Load a read snapshot: fighters, bouts, event dates, current rankings
2. Replay every rated bout in order (replay.py)
3. Apply the one-off inactivity penalty (decay.py)
4. Build the new divisional leaderboards (snapshot.py)
5. Replace the ranking_entries table with the new snapshot

Steps 2-4 are pure (``RankingPipeline.compute``). Step 5 runs inside the
caller's transaction under a single-writer lock, so readers either see the
old snapshot or the complete new one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from fightrank.config import settings
from fightrank.db.models import Bout, Event, Fighter, RankingEntry
from fightrank.divisions import Division
from fightrank.rating.decay import apply_inactivity_decay
from fightrank.rating.replay import BoutRow, FighterRow, FighterState, replay_history
from fightrank.rating.snapshot import PreviousRank, SnapshotEntry, build_snapshot
from fightrank.tasks.locks import single_writer_lock

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass
class RankingInput:
    """Everything a recompute reads, detached from the session."""
    fighters: list[FighterRow] = field(default_factory=list)
    bouts: list[BoutRow] = field(default_factory=list)
    event_dates: dict[int, Optional[date]] = field(default_factory=dict)
    previous: list[PreviousRank] = field(default_factory=list)


@dataclass
class RecomputeResult:
    """Summary returned by RankingPipeline.compute() and run()."""
    as_of_date: date
    entries: list[SnapshotEntry] = field(default_factory=list)
    states: dict[int, FighterState] = field(default_factory=dict)
    bouts_rated: int = 0
    bouts_skipped: int = 0

    @property
    def entries_written(self) -> int:
        return len(self.entries)

    @property
    def fighters_rated(self) -> int:
        return sum(1 for s in self.states.values() if s.rated_bouts > 0)

    @property
    def divisions_ranked(self) -> int:
        return len({e.division for e in self.entries})

    def summary(self) -> str:
        """Return a human-readable summary of the recompute."""
        return "\n".join([
            f"Rankings recompute complete (as of {self.as_of_date.isoformat()}):",
            f"  Bouts rated:              {self.bouts_rated}",
            f"  Bouts skipped:            {self.bouts_skipped}",
            f"  Fighters rated:           {self.fighters_rated}",
            f"  Divisions ranked:         {self.divisions_ranked}",
            f"  Ranking entries written:  {self.entries_written}",
        ])


class RankingPipeline:
    """
    Recomputes ratings and rankings from the full bout history.

    Usage (pure, e.g. tests or previews):
        pipeline = RankingPipeline()
        result = pipeline.compute(data, now=datetime(2024, 6, 1))

    Usage (write the new snapshot):
        with get_session() as session:
            result = RankingPipeline().run(session)
    """

    def compute(self, data: RankingInput, now: datetime) -> RecomputeResult:
        """
        Compute the new snapshot without touching the database.

        Args:
            data: Read snapshot from load_ranking_input()
            now: Reference time for inactivity decay; the snapshot is dated
                 now.date()

        Returns:
            RecomputeResult with the complete new snapshot
        """
        replayed = replay_history(data.fighters, data.bouts, data.event_dates)

        states = {
            fighter_id: replace(
                state,
                rating=apply_inactivity_decay(state.rating, state.last_bout_date, now),
            )
            for fighter_id, state in replayed.states.items()
        }

        as_of_date = now.date()
        entries = build_snapshot(data.fighters, states, data.previous, as_of_date)

        return RecomputeResult(
            as_of_date=as_of_date,
            entries=entries,
            states=states,
            bouts_rated=replayed.bouts_rated,
            bouts_skipped=replayed.bouts_skipped,
        )

    def run(
        self,
        session: Session,
        now: Optional[datetime] = None,
        commit: bool = True,
    ) -> RecomputeResult:
        """
        Recompute and replace the ranking table.

        The single-writer lock is held from the read through the commit so
        two concurrent runs can't both read the same previous snapshot.

        Args:
            session: Active SQLAlchemy session
            now: Reference time (defaults to the current UTC time)
            commit: Commit before releasing the lock. Pass False for dry runs
                    and roll back afterwards.

        Returns:
            RecomputeResult describing the snapshot written

        Raises:
            TimeoutError: If another recompute holds the lock
        """
        now = now or _utc_now()
        engine = session.get_bind().engine

        with single_writer_lock(
            engine,
            settings.recompute_lock_name,
            timeout_seconds=settings.recompute_lock_timeout_seconds,
        ):
            data = load_ranking_input(session)
            result = self.compute(data, now)
            replace_rankings(session, result.entries)
            if commit:
                session.commit()

        logger.info(result.summary())
        return result


def load_ranking_input(session: Session) -> RankingInput:
    """
    Load the read snapshot for a recompute.

    Returns lightweight rows rather than ORM objects so the engine never
    lazy-loads mid-computation.
    """
    fighters = [
        FighterRow(
            id=row.id,
            sport=row.sport,
            gender=row.gender,
            weight_class=row.weight_class,
            fighter_level=row.fighter_level,
        )
        for row in session.execute(
            select(
                Fighter.id,
                Fighter.sport,
                Fighter.gender,
                Fighter.weight_class,
                Fighter.fighter_level,
            )
        ).all()
    ]

    bouts = [
        BoutRow(
            id=row.id,
            event_id=row.event_id,
            bout_order=row.bout_order,
            red_fighter_id=row.red_fighter_id,
            blue_fighter_id=row.blue_fighter_id,
            winner_id=row.winner_id,
            method=row.method,
            is_title_bout=row.is_title_bout,
            is_published=row.is_published,
            belt_id=row.belt_id,
        )
        for row in session.execute(
            select(
                Bout.id,
                Bout.event_id,
                Bout.bout_order,
                Bout.red_fighter_id,
                Bout.blue_fighter_id,
                Bout.winner_id,
                Bout.method,
                Bout.is_title_bout,
                Bout.is_published,
                Bout.belt_id,
            )
        ).all()
    ]

    event_dates = {
        row.id: row.event_date
        for row in session.execute(select(Event.id, Event.event_date)).all()
    }

    previous = [
        PreviousRank(
            fighter_id=row.fighter_id,
            division=Division(row.sport, row.gender, row.weight_class),
            rank=row.rank,
        )
        for row in session.execute(
            select(
                RankingEntry.fighter_id,
                RankingEntry.sport,
                RankingEntry.gender,
                RankingEntry.weight_class,
                RankingEntry.rank,
            ).order_by(RankingEntry.as_of_date)
        ).all()
    ]

    return RankingInput(
        fighters=fighters,
        bouts=bouts,
        event_dates=event_dates,
        previous=previous,
    )


def replace_rankings(session: Session, entries: list[SnapshotEntry]) -> int:
    """
    Replace every ranking row with ``entries``.

    Runs in the caller's transaction; nothing is visible to other sessions
    until it commits.

    Returns:
        Number of rows written
    """
    session.execute(delete(RankingEntry))
    session.add_all([
        RankingEntry(
            as_of_date=e.as_of_date,
            sport=e.division.sport,
            gender=e.division.gender,
            weight_class=e.division.weight_class,
            rank=e.rank,
            fighter_id=e.fighter_id,
            score=e.score,
            previous_rank=e.previous_rank,
        )
        for e in entries
    ])
    session.flush()
    return len(entries)


def current_rankings(session: Session, division: Division) -> list[RankingEntry]:
    """Current snapshot rows for one division, best rank first. Empty if unranked."""
    stmt = (
        select(RankingEntry)
        .where(RankingEntry.sport == division.sport)
        .where(RankingEntry.gender == division.gender)
        .where(RankingEntry.weight_class == division.weight_class)
        .order_by(RankingEntry.rank)
    )
    return list(session.scalars(stmt).all())
