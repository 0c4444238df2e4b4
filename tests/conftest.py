"""
Pytest configuration and fixtures.

This file is automatically loaded by pytest and provides
shared fixtures for all tests.
"""

import itertools
import os
from datetime import date

# Point settings at SQLite before anything imports fightrank.db, which
# builds its engine at import time.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fightrank.db.models import Base, Belt, Bout, Event, Fighter, Promotion

LIGHTWEIGHT = ("mma", "men", "Lightweight (155)")


@pytest.fixture(scope="session")
def test_engine():
    """
    Create a test database engine.

    Uses SQLite in-memory for fast tests that don't need
    PostgreSQL-specific features. StaticPool keeps one connection so the
    API tests (which run handlers on a worker thread) see the same data.
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return engine


@pytest.fixture(scope="session")
def tables(test_engine):
    """
    Create all tables for testing.

    This fixture runs once per test session.
    """
    Base.metadata.create_all(test_engine)
    yield
    Base.metadata.drop_all(test_engine)


@pytest.fixture
def db_session(test_engine, tables):
    """
    Create a database session for a test.

    Each test gets its own session with automatic rollback,
    ensuring tests don't affect each other.
    """
    connection = test_engine.connect()
    transaction = connection.begin()

    Session = sessionmaker(bind=connection)
    session = Session()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


# =============================================================================
# Factories
# =============================================================================

_counter = itertools.count(1)


@pytest.fixture
def promotion(db_session):
    n = next(_counter)
    promo = Promotion(name=f"Promotion {n}", slug=f"promotion-{n}")
    db_session.add(promo)
    db_session.flush()
    return promo


@pytest.fixture
def make_fighter(db_session):
    """Factory for fighters in the lightweight division unless told otherwise."""

    def _make(last_name: str, division=LIGHTWEIGHT, fighter_level: str = "pro") -> Fighter:
        sport, gender, weight_class = division
        fighter = Fighter(
            first_name="Test",
            last_name=last_name,
            slug=f"{last_name.lower()}-{next(_counter)}",
            sport=sport,
            gender=gender,
            weight_class=weight_class,
            fighter_level=fighter_level,
            is_active=True,
        )
        db_session.add(fighter)
        db_session.flush()
        return fighter

    return _make


@pytest.fixture
def make_belt(db_session, promotion):
    def _make(champion_id=None, division=LIGHTWEIGHT) -> Belt:
        sport, gender, weight_class = division
        belt = Belt(
            promotion_id=promotion.id,
            name=f"{weight_class} Championship {next(_counter)}",
            sport=sport,
            gender=gender,
            weight_class=weight_class,
            current_champion_id=champion_id,
            is_active=True,
        )
        db_session.add(belt)
        db_session.flush()
        return belt

    return _make


@pytest.fixture
def make_event(db_session, promotion):
    """
    Factory for an event with its card.

    ``bouts`` is a list of dicts with red/blue Fighter objects, an optional
    winner Fighter, method, and title/belt flags. Card order follows the list.
    """

    def _make(event_date=date(2024, 1, 10), bouts=(), is_published=False) -> Event:
        n = next(_counter)
        event = Event(
            promotion_id=promotion.id,
            name=f"Fight Night {n}",
            slug=f"fight-night-{n}",
            event_date=event_date,
            is_published=is_published,
        )
        for order, card_bout in enumerate(bouts, start=1):
            red, blue = card_bout["red"], card_bout["blue"]
            winner = card_bout.get("winner")
            belt = card_bout.get("belt")
            event.bouts.append(Bout(
                bout_order=card_bout.get("order", order),
                sport=red.sport,
                gender=red.gender,
                weight_class=red.weight_class,
                red_fighter_id=red.id,
                blue_fighter_id=blue.id,
                winner_id=winner.id if winner is not None else None,
                method=card_bout.get("method"),
                is_title_bout=card_bout.get("title", False),
                belt_id=belt.id if belt is not None else None,
                is_published=is_published,
            ))
        db_session.add(event)
        db_session.flush()
        return event

    return _make
