"""Unit tests for K-factor tiers and inactivity decay."""

from datetime import date, datetime, timedelta, timezone

import pytest

from fightrank.rating.decay import apply_inactivity_decay, days_since, inactivity_penalty
from fightrank.rating.experience import k_factor_for


class TestKFactor:

    @pytest.mark.parametrize("rated_bouts,k", [
        (0, 38.0),
        (1, 38.0),
        (2, 28.0),
        (4, 28.0),
        (5, 18.0),
        (9, 18.0),
        (10, 14.0),
        (42, 14.0),
    ])
    def test_tiers(self, rated_bouts, k):
        assert k_factor_for(rated_bouts) == k

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            k_factor_for(-1)


class TestDaysSince:

    def test_partial_day_rounds_up(self):
        assert days_since(date(2024, 1, 1), datetime(2024, 1, 1, 0, 0, 1)) == 1

    def test_whole_days(self):
        assert days_since(date(2024, 1, 1), datetime(2024, 1, 31)) == 30

    def test_aware_now_is_read_as_utc(self):
        now = datetime(2024, 1, 31, 2, 0, tzinfo=timezone(timedelta(hours=2)))
        assert days_since(date(2024, 1, 1), now) == 30


class TestInactivityPenalty:

    @pytest.mark.parametrize("days,penalty", [
        (0, 0.0),
        (180, 0.0),
        (181, 5.0),
        (270, 5.0),
        (271, 10.0),
        (365, 10.0),
        (366, 20.0),
        (2000, 20.0),
    ])
    def test_bands(self, days, penalty):
        assert inactivity_penalty(days) == penalty

    def test_recent_fighter_untouched(self):
        assert apply_inactivity_decay(1600.0, date(2024, 5, 2), datetime(2024, 6, 1)) == 1600.0

    def test_400_days_loses_20(self):
        assert apply_inactivity_decay(1600.0, date(2023, 4, 28), datetime(2024, 6, 1)) == 1580.0

    def test_never_fought_untouched(self):
        assert apply_inactivity_decay(1450.0, None, datetime(2024, 6, 1)) == 1450.0
