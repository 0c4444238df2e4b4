"""
Event publishing service - publishes fight cards and moves belts.

Publishing an event:
- sets the event's is_published flag
- sets is_published on every bout on the card
- for every title bout on the card that names a belt and has a declared
  winner, makes the winner that belt's current champion

Unpublishing reverses both publish flags but leaves belt holders alone.
There is no rule for handing a belt back to its previous holder, so the
asymmetry is kept deliberately.

All updates happen in the caller's session and become visible together on
commit:

    with get_session() as session:
        result = publish_event(session, event_id)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session

from fightrank.db.models import Belt, Bout, Event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TitleTransfer:
    """A belt changing (or keeping) hands as a result of a title bout."""
    belt_id: int
    bout_id: int
    previous_champion_id: int | None
    new_champion_id: int


@dataclass
class PublishResult:
    """Summary returned by publish_event() and unpublish_event()."""
    event_id: int
    is_published: bool
    bouts_updated: int = 0
    title_transfers: list[TitleTransfer] = field(default_factory=list)

    def summary(self) -> str:
        action = "published" if self.is_published else "unpublished"
        lines = [
            f"Event {self.event_id} {action}:",
            f"  Bouts updated:     {self.bouts_updated}",
            f"  Title transfers:   {len(self.title_transfers)}",
        ]
        for t in self.title_transfers:
            lines.append(
                f"    - belt {t.belt_id}: {t.previous_champion_id} -> {t.new_champion_id} (bout {t.bout_id})"
            )
        return "\n".join(lines)


def plan_title_transfers(
    bouts: Iterable[Bout],
    champions: Mapping[int, int | None],
) -> list[TitleTransfer]:
    """
    Work out belt holder changes for a card, without touching anything.

    Args:
        bouts: Bouts on the card, in card order
        champions: Belt id -> current champion id for every existing belt

    Returns:
        One TitleTransfer per qualifying bout, in card order. If two bouts on
        one card decide the same belt, the later bout wins.
    """
    holders = dict(champions)
    transfers: list[TitleTransfer] = []

    for bout in bouts:
        if not bout.is_title_bout or bout.belt_id is None or bout.winner_id is None:
            continue
        if bout.belt_id not in holders:
            logger.warning("Bout %s references unknown belt %s", bout.id, bout.belt_id)
            continue

        transfers.append(TitleTransfer(
            belt_id=bout.belt_id,
            bout_id=bout.id,
            previous_champion_id=holders[bout.belt_id],
            new_champion_id=bout.winner_id,
        ))
        holders[bout.belt_id] = bout.winner_id

    return transfers


def _load_event(session: Session, event_id: int) -> Event:
    event = session.get(Event, event_id)
    if event is None:
        raise LookupError(f"Event {event_id} not found")
    return event


def _card(session: Session, event_id: int) -> list[Bout]:
    stmt = select(Bout).where(Bout.event_id == event_id).order_by(Bout.bout_order, Bout.id)
    return list(session.scalars(stmt).all())


def publish_event(session: Session, event_id: int) -> PublishResult:
    """
    Publish an event, its bouts, and apply title custody changes.

    Args:
        session: Active SQLAlchemy session. Caller is responsible for commit.
        event_id: Event to publish

    Returns:
        PublishResult with the bouts touched and belts moved

    Raises:
        LookupError: If the event does not exist
    """
    event = _load_event(session, event_id)
    bouts = _card(session, event_id)

    belt_ids = {b.belt_id for b in bouts if b.belt_id is not None}
    belts: dict[int, Belt] = {}
    if belt_ids:
        belts = {
            belt.id: belt
            for belt in session.scalars(select(Belt).where(Belt.id.in_(belt_ids))).all()
        }

    transfers = plan_title_transfers(
        bouts, {belt_id: belt.current_champion_id for belt_id, belt in belts.items()}
    )

    event.is_published = True
    for bout in bouts:
        bout.is_published = True
    for transfer in transfers:
        belts[transfer.belt_id].current_champion_id = transfer.new_champion_id

    session.flush()

    result = PublishResult(
        event_id=event_id,
        is_published=True,
        bouts_updated=len(bouts),
        title_transfers=transfers,
    )
    logger.info(result.summary())
    return result


def unpublish_event(session: Session, event_id: int) -> PublishResult:
    """
    Unpublish an event and its bouts. Belt holders are not reverted.

    Raises:
        LookupError: If the event does not exist
    """
    event = _load_event(session, event_id)
    bouts = _card(session, event_id)

    event.is_published = False
    for bout in bouts:
        bout.is_published = False

    session.flush()

    result = PublishResult(event_id=event_id, is_published=False, bouts_updated=len(bouts))
    logger.info(result.summary())
    return result
