"""Unit tests for outcome resolution, divisions and fight records."""

import pytest

from fightrank.db.models import Bout
from fightrank.divisions import Division, all_divisions, is_valid_division, weight_classes_for
from fightrank.outcomes import Decisive, Draw, NoContest, resolve_outcome
from fightrank.services.records import FightRecord, calculate_fight_record, get_fight_record


class TestResolveOutcome:

    def test_red_winner(self):
        assert resolve_outcome(1, 2, 1, "ud") == Decisive(winner_id=1)

    def test_blue_winner(self):
        assert resolve_outcome(1, 2, 2, "ko_tko") == Decisive(winner_id=2)

    def test_no_winner_is_draw(self):
        assert resolve_outcome(1, 2, None, "draw") == Draw()

    def test_draw_sentinel(self):
        assert resolve_outcome(1, 2, "draw", None) == Draw()

    def test_winner_not_in_bout_is_draw(self):
        assert resolve_outcome(1, 2, 3, "ud") == Draw()

    def test_no_contest_overrides_winner(self):
        assert resolve_outcome(1, 2, 1, "nc") == NoContest()


class TestDivisions:

    def test_known_division(self):
        assert is_valid_division(Division("mma", "women", "Strawweight (115)"))

    def test_label_must_match_exactly(self):
        assert not is_valid_division(Division("mma", "women", "strawweight (115)"))

    def test_unknown_sport(self):
        assert weight_classes_for("boxing", "men") == ()

    def test_all_divisions_unique(self):
        divisions = all_divisions()
        assert len(divisions) == len(set(divisions))
        assert Division("grappling", "men", "Heavy") in divisions


def _bout(red, blue, winner, method, published=True):
    return Bout(
        red_fighter_id=red,
        blue_fighter_id=blue,
        winner_id=winner,
        method=method,
        is_published=published,
    )


class TestFightRecord:

    def test_tally(self):
        bouts = [
            _bout(1, 2, 1, "ko_tko"),
            _bout(3, 1, 3, "ud"),
            _bout(1, 4, None, "draw"),
            _bout(5, 1, 5, "nc"),
            _bout(1, 6, 1, "sd", published=False),
            _bout(7, 8, 7, "ud"),
        ]

        record = calculate_fight_record(1, bouts)

        assert record == FightRecord(wins=1, losses=1, draws=1, no_contests=1)
        assert str(record) == "1-1-1 (1 NC)"

    def test_str_without_no_contests(self):
        assert str(FightRecord(wins=12, losses=3)) == "12-3-0"

    def test_from_database(self, db_session, make_fighter, make_event):
        a = make_fighter("Foxtrot")
        b = make_fighter("Golf")
        make_event(is_published=True, bouts=[
            {"red": a, "blue": b, "winner": a, "method": "submission"},
            {"red": b, "blue": a, "winner": b, "method": "ud"},
        ])
        make_event(is_published=False, bouts=[
            {"red": a, "blue": b, "winner": a, "method": "ud"},
        ])

        assert get_fight_record(db_session, a.id) == FightRecord(wins=1, losses=1)
        assert get_fight_record(db_session, b.id) == FightRecord(wins=1, losses=1)

    @pytest.mark.parametrize("method", ["ud", None])
    def test_unlisted_method_still_counts(self, method):
        assert calculate_fight_record(1, [_bout(1, 2, 2, method)]).losses == 1
