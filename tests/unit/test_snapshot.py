"""Unit tests for ranking snapshot construction."""

from datetime import date
from decimal import Decimal

import pytest

from fightrank.divisions import Division
from fightrank.rating.replay import FighterRow, FighterState
from fightrank.rating.snapshot import (
    PreviousRank,
    build_snapshot,
    movement_label,
    rank_movement,
    round_score,
)

LW = Division("mma", "men", "Lightweight (155)")
WW = Division("mma", "men", "Welterweight (170)")
AS_OF = date(2024, 6, 1)


def row(fighter_id, division=LW):
    return FighterRow(fighter_id, division.sport, division.gender, division.weight_class, "pro")


def state(rating, bouts=2):
    return FighterState(rating=rating, rated_bouts=bouts, last_bout_date=date(2024, 5, 1))


class TestRoundScore:

    @pytest.mark.parametrize("rating,expected", [
        (1522.42, Decimal("1522.4")),
        (1500.25, Decimal("1500.3")),
        (1499.95, Decimal("1500.0")),
        (1477.58, Decimal("1477.6")),
    ])
    def test_half_up_to_one_place(self, rating, expected):
        assert round_score(rating) == expected


class TestMovement:

    def test_new_entrant(self):
        assert rank_movement(None, 3) is None
        assert movement_label(None, 3) == "new"

    def test_up_down_same(self):
        assert rank_movement(5, 2) == 3
        assert movement_label(5, 2) == "up"
        assert movement_label(1, 4) == "down"
        assert movement_label(2, 2) == "same"


class TestBuildSnapshot:

    def test_dense_ranks_per_division(self):
        fighters = [row(1), row(2, WW), row(3), row(4, WW)]
        states = {1: state(1600), 2: state(1700), 3: state(1550), 4: state(1400)}

        entries = build_snapshot(fighters, states, [], AS_OF)

        by_division = {}
        for e in entries:
            by_division.setdefault(e.division, []).append((e.rank, e.fighter_id))
        assert by_division[LW] == [(1, 1), (2, 3)]
        assert by_division[WW] == [(1, 2), (2, 4)]
        assert all(e.as_of_date == AS_OF for e in entries)

    def test_fewer_than_two_rated_bouts_excluded(self):
        fighters = [row(1), row(2), row(3)]
        states = {1: state(1600, bouts=1), 2: state(1500, bouts=2), 3: state(1400, bouts=0)}

        entries = build_snapshot(fighters, states, [], AS_OF)

        assert [(e.fighter_id, e.rank) for e in entries] == [(2, 1)]

    def test_equal_ratings_lower_id_ranks_first(self):
        fighters = [row(9), row(4)]
        states = {9: state(1510.0), 4: state(1510.0)}

        entries = build_snapshot(fighters, states, [], AS_OF)

        assert [(e.fighter_id, e.rank) for e in entries] == [(4, 1), (9, 2)]

    def test_division_cap(self):
        fighters = [row(i) for i in range(1, 8)]
        states = {i: state(1500 + i) for i in range(1, 8)}

        entries = build_snapshot(fighters, states, [], AS_OF, max_per_division=5)

        assert [e.rank for e in entries] == [1, 2, 3, 4, 5]
        assert [e.fighter_id for e in entries] == [7, 6, 5, 4, 3]

    def test_previous_rank_matched_by_fighter_and_division(self):
        fighters = [row(1), row(2)]
        states = {1: state(1600), 2: state(1500)}
        previous = [
            PreviousRank(2, LW, 1),
            PreviousRank(1, WW, 1),  # moved divisions since; new in LW
        ]

        entries = build_snapshot(fighters, states, previous, AS_OF)

        assert entries[0].fighter_id == 1
        assert entries[0].previous_rank is None
        assert entries[0].movement_label == "new"
        assert entries[1].previous_rank == 1
        assert entries[1].movement == -1
        assert entries[1].movement_label == "down"

    def test_fighter_without_row_is_ignored(self):
        entries = build_snapshot([row(1)], {1: state(1500), 2: state(1900)}, [], AS_OF)

        assert [e.fighter_id for e in entries] == [1]

    def test_scores_are_rounded(self):
        entries = build_snapshot([row(1)], {1: state(1522.42)}, [], AS_OF)

        assert entries[0].score == Decimal("1522.4")
