"""Pydantic response models for the JSON API."""

from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field


class DivisionOut(BaseModel):
    sport: str
    gender: str
    weight_class: str


class RankingEntryOut(BaseModel):
    """Single ranked fighter within a division leaderboard."""

    rank: int = Field(description="Dense 1-based rank within the division")
    fighter_id: int
    fighter_name: str
    score: float = Field(description="Rating rounded to one decimal place")
    previous_rank: Optional[int] = Field(None, description="Rank in the replaced snapshot")
    movement: Optional[int] = Field(
        None, description="Places moved (positive=up, negative=down, null=new entrant)"
    )
    movement_label: Literal["new", "up", "down", "same"]


class DivisionRankingsOut(BaseModel):
    division: DivisionOut
    as_of_date: Optional[date] = Field(None, description="Snapshot date; null if unranked")
    rankings: list[RankingEntryOut] = Field(default_factory=list)


class FightRecordOut(BaseModel):
    fighter_id: int
    wins: int
    losses: int
    draws: int
    no_contests: int
    record: str


class BeltOut(BaseModel):
    id: int
    promotion_id: int
    name: str
    division: DivisionOut
    current_champion_id: Optional[int] = Field(None, description="Null when vacant")
    is_active: bool


class RecomputeOut(BaseModel):
    as_of_date: date
    bouts_rated: int
    bouts_skipped: int
    fighters_rated: int
    divisions_ranked: int
    entries_written: int


class TitleTransferOut(BaseModel):
    belt_id: int
    bout_id: int
    previous_champion_id: Optional[int]
    new_champion_id: int


class PublishOut(BaseModel):
    event_id: int
    is_published: bool
    bouts_updated: int
    title_transfers: list[TitleTransferOut] = Field(default_factory=list)
