"""
Database module for Fightrank.

Provides SQLAlchemy ORM models and session management.

Usage:
    from fightrank.db import get_session, Fighter, Bout

    with get_session() as session:
        fighters = session.query(Fighter).all()
"""

from fightrank.db.models import (
    Base,
    Belt,
    Bout,
    Event,
    Fighter,
    Promotion,
    RankingEntry,
)
from fightrank.db.session import SessionLocal, get_engine, get_session

__all__ = [
    # Base
    "Base",
    # Models
    "Promotion",
    "Fighter",
    "Event",
    "Bout",
    "Belt",
    "RankingEntry",
    # Session
    "get_session",
    "get_engine",
    "SessionLocal",
]
