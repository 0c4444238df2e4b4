"""
Tests for the ranking recompute pipeline against a SQLite database.

Three lightweights, two events:

    2024-01-10  A def. B (KO/TKO)
    2024-02-10  A def. C (split decision), then B vs C draw

Hand-computed terminal ratings (no decay within 180 days):
    A 1540.2, C 1482.0, B 1477.8
"""

from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from fightrank.db.models import RankingEntry
from fightrank.divisions import Division
from fightrank.rating.pipeline import (
    RankingPipeline,
    current_rankings,
    load_ranking_input,
    replace_rankings,
)

LW = Division("mma", "men", "Lightweight (155)")


@pytest.fixture
def history(make_fighter, make_event):
    a = make_fighter("Alpha")
    b = make_fighter("Bravo")
    c = make_fighter("Charlie")
    make_event(
        event_date=date(2024, 1, 10),
        is_published=True,
        bouts=[{"red": a, "blue": b, "winner": a, "method": "ko_tko"}],
    )
    make_event(
        event_date=date(2024, 2, 10),
        is_published=True,
        bouts=[
            {"red": a, "blue": c, "winner": a, "method": "sd"},
            {"red": b, "blue": c, "winner": None, "method": "draw"},
        ],
    )
    return a, b, c


class TestLoadRankingInput:

    def test_reads_rows(self, db_session, history):
        data = load_ranking_input(db_session)

        assert len(data.fighters) == 3
        assert len(data.bouts) == 3
        assert sorted(data.event_dates.values()) == [date(2024, 1, 10), date(2024, 2, 10)]
        assert data.previous == []


class TestRankingPipeline:

    def test_run_writes_snapshot(self, db_session, history):
        a, b, c = history

        result = RankingPipeline().run(db_session, now=datetime(2024, 3, 1))

        assert result.bouts_rated == 3
        assert result.entries_written == 3
        assert result.divisions_ranked == 1

        rows = current_rankings(db_session, LW)
        assert [(r.rank, r.fighter_id) for r in rows] == [(1, a.id), (2, c.id), (3, b.id)]
        assert [r.score for r in rows] == [Decimal("1540.2"), Decimal("1482.0"), Decimal("1477.8")]
        assert all(r.previous_rank is None for r in rows)
        assert all(r.as_of_date == date(2024, 3, 1) for r in rows)

    def test_second_run_is_idempotent_and_tracks_previous_rank(self, db_session, history):
        pipeline = RankingPipeline()
        pipeline.run(db_session, now=datetime(2024, 3, 1))
        first = [(r.rank, r.fighter_id, r.score) for r in current_rankings(db_session, LW)]

        pipeline.run(db_session, now=datetime(2024, 3, 1))
        rows = current_rankings(db_session, LW)

        assert [(r.rank, r.fighter_id, r.score) for r in rows] == first
        assert [r.previous_rank for r in rows] == [1, 2, 3]
        assert db_session.scalar(select(func.count()).select_from(RankingEntry)) == 3

    def test_decay_applied_once(self, db_session, history):
        """385 days after the last bout everyone loses exactly 20."""
        RankingPipeline().run(db_session, now=datetime(2025, 3, 1))
        RankingPipeline().run(db_session, now=datetime(2025, 3, 1))

        scores = [r.score for r in current_rankings(db_session, LW)]
        assert scores == [Decimal("1520.2"), Decimal("1462.0"), Decimal("1457.8")]

    def test_unrated_bouts_do_not_reset_inactivity(self, db_session, history, make_event):
        """A later no-contest and an unpublished card leave the last rated bout date alone."""
        a, b, c = history
        make_event(
            event_date=date(2024, 12, 1),
            is_published=True,
            bouts=[{"red": a, "blue": b, "winner": a, "method": "nc"}],
        )
        make_event(
            event_date=date(2025, 1, 15),
            is_published=False,
            bouts=[{"red": a, "blue": c, "winner": a, "method": "ud"}],
        )

        result = RankingPipeline().run(db_session, now=datetime(2025, 3, 1))

        assert result.states[a.id].last_bout_date == date(2024, 2, 10)
        assert current_rankings(db_session, LW)[0].score == Decimal("1520.2")

    def test_unpublished_event_is_ignored(self, db_session, history, make_event):
        a, b, c = history
        make_event(
            event_date=date(2024, 2, 20),
            is_published=False,
            bouts=[{"red": b, "blue": a, "winner": b, "method": "ko_tko"}],
        )

        result = RankingPipeline().run(db_session, now=datetime(2024, 3, 1))

        assert result.bouts_rated == 3
        assert current_rankings(db_session, LW)[0].fighter_id == a.id

    def test_fighter_with_one_bout_not_ranked(self, db_session, make_fighter, make_event):
        a = make_fighter("Delta")
        b = make_fighter("Echo")
        make_event(is_published=True, bouts=[{"red": a, "blue": b, "winner": a, "method": "ud"}])

        result = RankingPipeline().run(db_session, now=datetime(2024, 3, 1))

        assert result.fighters_rated == 2
        assert result.entries_written == 0
        assert current_rankings(db_session, LW) == []

    def test_compute_does_not_write(self, db_session, history):
        data = load_ranking_input(db_session)

        result = RankingPipeline().compute(data, now=datetime(2024, 3, 1))

        assert result.entries_written == 3
        assert db_session.scalar(select(func.count()).select_from(RankingEntry)) == 0


class TestReplaceRankings:

    def test_empty_snapshot_clears_table(self, db_session, history):
        RankingPipeline().run(db_session, now=datetime(2024, 3, 1))

        written = replace_rankings(db_session, [])

        assert written == 0
        assert db_session.scalar(select(func.count()).select_from(RankingEntry)) == 0
