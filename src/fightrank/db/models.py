"""
SQLAlchemy ORM models for Fightrank.

This module defines all database tables and their relationships.

Key design decisions:
- Fighters carry their declared division (sport, gender, weight class);
  rankings are emitted against that division
- Bouts link to fighters via foreign keys for both corners and the winner
- A null winner on a bout means a draw (or an unresolved result)
- Belt holders are a cached value; the source of truth is the latest
  title bout result for that belt
- ranking_entries only ever holds the current snapshot; a recompute
  replaces the whole table

Tables:
- promotions: Promotion master data
- fighters: Fighter records
- events: Dated fight cards
- bouts: Individual contests on a card
- belts: Championship titles
- ranking_entries: Current divisional ranking snapshot
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from fightrank.divisions import Division


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


# =============================================================================
# Promotion Models
# =============================================================================

class Promotion(Base):
    """A fight promotion that runs events and sanctions belts."""

    __tablename__ = "promotions"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    region: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    events: Mapped[list["Event"]] = relationship(back_populates="promotion")
    belts: Mapped[list["Belt"]] = relationship(back_populates="promotion")

    def __repr__(self) -> str:
        return f"<Promotion(id={self.id}, name='{self.name}')>"


# =============================================================================
# Fighter Models
# =============================================================================

class Fighter(Base):
    """
    Fighter record.

    The rating engine only reads sport, gender, weight_class and
    fighter_level. Level decides the starting rating: professionals start
    higher than amateurs.
    """

    __tablename__ = "fighters"

    id: Mapped[int] = mapped_column(primary_key=True)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    hometown: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Declared division
    sport: Mapped[str] = mapped_column(String(30), nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    weight_class: Mapped[str] = mapped_column(String(50), nullable=False)

    fighter_level: Mapped[str] = mapped_column(String(5), nullable=False, default="pro")  # 'pro', 'am'
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    __table_args__ = (
        CheckConstraint("fighter_level IN ('pro', 'am')", name="ck_fighters_level"),
        Index("idx_fighters_division", "sport", "gender", "weight_class"),
    )

    @property
    def fighter_name(self) -> str:
        return f"{self.first_name.strip()} {self.last_name.strip()}"

    @property
    def division(self) -> Division:
        return Division(self.sport, self.gender, self.weight_class)

    def __repr__(self) -> str:
        return f"<Fighter(id={self.id}, name='{self.fighter_name}')>"


# =============================================================================
# Event Models
# =============================================================================

class Event(Base):
    """
    A dated fight card for one promotion.

    Events start unpublished. Publishing an event publishes every bout on it
    in the same transaction (see services/publishing.py).
    """

    __tablename__ = "events"

    id: Mapped[int] = mapped_column(primary_key=True)
    promotion_id: Mapped[int] = mapped_column(ForeignKey("promotions.id"), nullable=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    event_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    venue: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    promotion: Mapped["Promotion"] = relationship(back_populates="events")
    bouts: Mapped[list["Bout"]] = relationship(
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="Bout.bout_order",
    )

    __table_args__ = (
        Index("idx_events_date", "event_date"),
        Index("idx_events_published", "is_published"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name='{self.name}', published={self.is_published})>"


class Bout(Base):
    """
    A single contest between a red corner (A) and a blue corner (B).

    Result columns:
    - winner_id: null for draws and results not yet entered
    - method: one of outcomes.ALL_METHODS, or null (treated as a neutral
      decision by the rating engine)
    """

    __tablename__ = "bouts"

    id: Mapped[int] = mapped_column(primary_key=True)
    event_id: Mapped[int] = mapped_column(ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    bout_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    sport: Mapped[str] = mapped_column(String(30), nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    weight_class: Mapped[str] = mapped_column(String(50), nullable=False)

    red_fighter_id: Mapped[int] = mapped_column(ForeignKey("fighters.id"), nullable=False)
    blue_fighter_id: Mapped[int] = mapped_column(ForeignKey("fighters.id"), nullable=False)
    winner_id: Mapped[Optional[int]] = mapped_column(ForeignKey("fighters.id"), nullable=True)

    method: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    round: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    time: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)

    is_title_bout: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    belt_id: Mapped[Optional[int]] = mapped_column(ForeignKey("belts.id"), nullable=True)

    # Mirrors the parent event's flag
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )

    event: Mapped["Event"] = relationship(back_populates="bouts")
    belt: Mapped[Optional["Belt"]] = relationship()

    __table_args__ = (
        Index("idx_bouts_event", "event_id", "bout_order"),
        Index("idx_bouts_red", "red_fighter_id"),
        Index("idx_bouts_blue", "blue_fighter_id"),
        Index("idx_bouts_published", "is_published"),
    )

    def __repr__(self) -> str:
        return (
            f"<Bout(id={self.id}, red={self.red_fighter_id}, blue={self.blue_fighter_id}, "
            f"winner={self.winner_id}, method='{self.method}')>"
        )


# =============================================================================
# Belt Models
# =============================================================================

class Belt(Base):
    """Championship title scoped to a division within one promotion."""

    __tablename__ = "belts"

    id: Mapped[int] = mapped_column(primary_key=True)
    promotion_id: Mapped[int] = mapped_column(ForeignKey("promotions.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    sport: Mapped[str] = mapped_column(String(30), nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    weight_class: Mapped[str] = mapped_column(String(50), nullable=False)

    # Null means vacant
    current_champion_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("fighters.id"), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="true"
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    promotion: Mapped["Promotion"] = relationship(back_populates="belts")
    current_champion: Mapped[Optional["Fighter"]] = relationship()

    def __repr__(self) -> str:
        return f"<Belt(id={self.id}, name='{self.name}', champion={self.current_champion_id})>"


# =============================================================================
# Ranking Models
# =============================================================================

class RankingEntry(Base):
    """
    One fighter's position in one division for the current snapshot.

    previous_rank is null when the fighter was not ranked in this division
    in the snapshot this one replaced (a new entrant).
    """

    __tablename__ = "ranking_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    as_of_date: Mapped[date] = mapped_column(Date, nullable=False)

    sport: Mapped[str] = mapped_column(String(30), nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    weight_class: Mapped[str] = mapped_column(String(50), nullable=False)

    rank: Mapped[int] = mapped_column(Integer, nullable=False)
    fighter_id: Mapped[int] = mapped_column(ForeignKey("fighters.id"), nullable=False)
    score: Mapped[Decimal] = mapped_column(Numeric(8, 1), nullable=False)
    previous_rank: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    fighter: Mapped["Fighter"] = relationship()

    __table_args__ = (
        UniqueConstraint(
            "as_of_date", "sport", "gender", "weight_class", "fighter_id",
            name="uq_ranking_entries_snapshot_fighter",
        ),
        Index("idx_ranking_entries_division_rank", "sport", "gender", "weight_class", "rank"),
    )

    @property
    def division(self) -> Division:
        return Division(self.sport, self.gender, self.weight_class)

    def __repr__(self) -> str:
        return (
            f"<RankingEntry(division='{self.division}', rank={self.rank}, "
            f"fighter_id={self.fighter_id}, score={self.score})>"
        )
