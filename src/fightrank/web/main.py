"""
JSON API for rankings, belts and operator actions.

Read endpoints serve the current snapshot. The /admin endpoints trigger the
two operator actions (recompute rankings, publish/unpublish an event); each
runs in one transaction and either fully applies or fully rolls back.

Run locally:
    uvicorn fightrank.web.main:app --reload
    python -m fightrank.web.main     # host/port from settings
"""

import logging
from dataclasses import asdict

from fastapi import Depends, FastAPI, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from fightrank.db.models import Belt, Fighter
from fightrank.db.session import get_db
from fightrank.divisions import Division, all_divisions
from fightrank.rating.pipeline import RankingPipeline, current_rankings
from fightrank.rating.snapshot import movement_label, rank_movement
from fightrank.services.publishing import PublishResult, publish_event, unpublish_event
from fightrank.services.records import get_fight_record
from fightrank.web.schemas import (
    BeltOut,
    DivisionOut,
    DivisionRankingsOut,
    FightRecordOut,
    PublishOut,
    RankingEntryOut,
    RecomputeOut,
    TitleTransferOut,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Fightrank")


def _division_out(division: Division) -> DivisionOut:
    return DivisionOut(**division._asdict())


def _publish_out(result: PublishResult) -> PublishOut:
    return PublishOut(
        event_id=result.event_id,
        is_published=result.is_published,
        bouts_updated=result.bouts_updated,
        title_transfers=[TitleTransferOut(**asdict(t)) for t in result.title_transfers],
    )


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/divisions", response_model=list[DivisionOut])
def list_divisions() -> list[DivisionOut]:
    return [_division_out(d) for d in all_divisions()]


@app.get("/rankings", response_model=DivisionRankingsOut)
def get_rankings(
    sport: str = Query(...),
    gender: str = Query(...),
    weight_class: str = Query(...),
    db: Session = Depends(get_db),
) -> DivisionRankingsOut:
    """
    Current leaderboard for one division.

    A division with nobody ranked yet (fighters need two rated bouts)
    returns an empty list rather than an error.
    """
    division = Division(sport, gender, weight_class)
    entries = current_rankings(db, division)

    names: dict[int, str] = {}
    if entries:
        fighter_ids = [e.fighter_id for e in entries]
        names = {
            f.id: f.fighter_name
            for f in db.scalars(select(Fighter).where(Fighter.id.in_(fighter_ids))).all()
        }

    return DivisionRankingsOut(
        division=_division_out(division),
        as_of_date=entries[0].as_of_date if entries else None,
        rankings=[
            RankingEntryOut(
                rank=e.rank,
                fighter_id=e.fighter_id,
                fighter_name=names.get(e.fighter_id, ""),
                score=float(e.score),
                previous_rank=e.previous_rank,
                movement=rank_movement(e.previous_rank, e.rank),
                movement_label=movement_label(e.previous_rank, e.rank),
            )
            for e in entries
        ],
    )


@app.get("/fighters/{fighter_id}/record", response_model=FightRecordOut)
def fighter_record(fighter_id: int, db: Session = Depends(get_db)) -> FightRecordOut:
    if db.get(Fighter, fighter_id) is None:
        raise HTTPException(status_code=404, detail=f"Fighter {fighter_id} not found")

    record = get_fight_record(db, fighter_id)
    return FightRecordOut(
        fighter_id=fighter_id,
        wins=record.wins,
        losses=record.losses,
        draws=record.draws,
        no_contests=record.no_contests,
        record=str(record),
    )


@app.get("/belts", response_model=list[BeltOut])
def list_belts(db: Session = Depends(get_db)) -> list[BeltOut]:
    belts = db.scalars(select(Belt).order_by(Belt.id)).all()
    return [
        BeltOut(
            id=b.id,
            promotion_id=b.promotion_id,
            name=b.name,
            division=_division_out(Division(b.sport, b.gender, b.weight_class)),
            current_champion_id=b.current_champion_id,
            is_active=b.is_active,
        )
        for b in belts
    ]


@app.post("/admin/rankings/recompute", response_model=RecomputeOut)
def recompute_rankings(db: Session = Depends(get_db)) -> RecomputeOut:
    try:
        result = RankingPipeline().run(db)
    except TimeoutError as exc:
        logger.warning("Recompute requested while another run holds the lock")
        db.rollback()
        raise HTTPException(status_code=409, detail="A rankings recompute is already running") from exc

    return RecomputeOut(
        as_of_date=result.as_of_date,
        bouts_rated=result.bouts_rated,
        bouts_skipped=result.bouts_skipped,
        fighters_rated=result.fighters_rated,
        divisions_ranked=result.divisions_ranked,
        entries_written=result.entries_written,
    )


@app.post("/admin/events/{event_id}/publish", response_model=PublishOut)
def publish(event_id: int, db: Session = Depends(get_db)) -> PublishOut:
    try:
        result = publish_event(db, event_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    db.commit()
    return _publish_out(result)


@app.post("/admin/events/{event_id}/unpublish", response_model=PublishOut)
def unpublish(event_id: int, db: Session = Depends(get_db)) -> PublishOut:
    try:
        result = unpublish_event(db, event_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    db.commit()
    return _publish_out(result)


if __name__ == "__main__":
    import uvicorn

    from fightrank.config import settings

    logging.basicConfig(level=settings.log_level)
    uvicorn.run(
        "fightrank.web.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
