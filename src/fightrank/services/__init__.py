"""Services that change or summarise stored fight data."""

from fightrank.services.publishing import (
    PublishResult,
    TitleTransfer,
    plan_title_transfers,
    publish_event,
    unpublish_event,
)
from fightrank.services.records import FightRecord, calculate_fight_record, get_fight_record

__all__ = [
    "PublishResult",
    "TitleTransfer",
    "plan_title_transfers",
    "publish_event",
    "unpublish_event",
    "FightRecord",
    "calculate_fight_record",
    "get_fight_record",
]
