"""Unit tests for the single-writer lock helpers and settings validation."""

import pytest
from pydantic import ValidationError

from fightrank.config import Settings
from fightrank.tasks.locks import advisory_lock_key, single_writer_lock


def test_advisory_lock_key_is_stable_64bit_int():
    key_a = advisory_lock_key("fightrank_rankings_recompute")
    key_b = advisory_lock_key("fightrank_rankings_recompute")

    assert key_a == key_b
    assert isinstance(key_a, int)
    assert -(2 ** 63) <= key_a < 2 ** 63


def test_advisory_lock_key_differs_by_name():
    assert advisory_lock_key("a") != advisory_lock_key("b")


def test_single_writer_lock_unguarded_on_sqlite(test_engine):
    with single_writer_lock(test_engine, "fightrank_rankings_recompute") as acquired:
        assert acquired is False


def test_log_level_normalised():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_log_level_rejects_unknown():
    with pytest.raises(ValidationError):
        Settings(log_level="LOUD")
