"""
Demo data for local development.

Creates one promotion, four lightweights, a vacant lightweight belt and two
events. The events are created unpublished and then published through
publishing.publish_event(), so the belt reaches its champion the same way it
would in production.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date

from sqlalchemy.orm import Session

from fightrank.db.models import Belt, Bout, Event, Fighter, Promotion
from fightrank.services.publishing import publish_event

logger = logging.getLogger(__name__)

DEMO_DIVISION = ("mma", "men", "Lightweight (155)")

DEMO_FIGHTERS = (
    ("Dustin", "Poirier"),
    ("Justin", "Gaethje"),
    ("Charles", "Oliveira"),
    ("Islam", "Makhachev"),
)


def slugify(text: str) -> str:
    """Lowercase, hyphen-separated, word characters only."""
    slug = text.strip().lower()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^\w\-]+", "", slug)
    return re.sub(r"-{2,}", "-", slug)


@dataclass
class SeedResult:
    promotion_id: int
    fighter_ids: dict[str, int]
    belt_id: int
    event_ids: list[int]


def seed_demo(session: Session) -> SeedResult:
    """Insert the demo promotion, fighters, belt and two published events."""
    sport, gender, weight_class = DEMO_DIVISION

    promotion = Promotion(name="Bayou Fight Night", slug="bayou-fight-night", region="Louisiana")
    session.add(promotion)

    fighters: dict[str, Fighter] = {}
    for first, last in DEMO_FIGHTERS:
        fighter = Fighter(
            first_name=first,
            last_name=last,
            slug=slugify(f"{first} {last}"),
            sport=sport,
            gender=gender,
            weight_class=weight_class,
            fighter_level="pro",
            is_active=True,
        )
        fighters[last] = fighter
        session.add(fighter)

    belt = Belt(
        promotion=promotion,
        name="BFN Lightweight World Championship",
        sport=sport,
        gender=gender,
        weight_class=weight_class,
        current_champion_id=None,
        is_active=True,
    )
    session.add(belt)
    session.flush()

    def bout(order: int, red: str, blue: str, winner: str, method: str, title: bool = False) -> Bout:
        return Bout(
            bout_order=order,
            sport=sport,
            gender=gender,
            weight_class=weight_class,
            red_fighter_id=fighters[red].id,
            blue_fighter_id=fighters[blue].id,
            winner_id=fighters[winner].id,
            method=method,
            is_title_bout=title,
            belt_id=belt.id if title else None,
        )

    origins = Event(
        promotion=promotion,
        name="BFN 1: Origins",
        slug="bfn-1",
        event_date=date(2023, 6, 1),
        venue="Cajundome",
        city="Lafayette",
        state="LA",
        bouts=[
            bout(1, "Poirier", "Gaethje", "Poirier", "ko_tko"),
            bout(2, "Oliveira", "Makhachev", "Makhachev", "submission"),
        ],
    )
    heat = Event(
        promotion=promotion,
        name="BFN 2: Heat",
        slug="bfn-2",
        event_date=date(2023, 9, 1),
        venue="UNO Lakefront",
        city="New Orleans",
        state="LA",
        bouts=[
            bout(1, "Poirier", "Makhachev", "Makhachev", "ud", title=True),
            bout(2, "Gaethje", "Oliveira", "Oliveira", "submission"),
        ],
    )
    session.add_all([origins, heat])
    session.flush()

    for event in (origins, heat):
        publish_event(session, event.id)

    logger.info("Seeded demo promotion %s with %d fighters", promotion.id, len(fighters))
    return SeedResult(
        promotion_id=promotion.id,
        fighter_ids={last: f.id for last, f in fighters.items()},
        belt_id=belt.id,
        event_ids=[origins.id, heat.id],
    )
