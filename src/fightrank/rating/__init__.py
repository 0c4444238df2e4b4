"""
Rating and ranking engine.

Implements combat-sports Elo ratings with:
- Experience-tiered K factors (new fighters move fastest)
- Method-of-victory multipliers (finishes count for more)
- Title bout and opponent-quality bonuses for winners
- A one-off inactivity penalty after the history replay
- Per-division leaderboards with movement against the previous snapshot
"""

from fightrank.rating.calculator import (
    RatingUpdate,
    calculate_new_ratings,
    expected_score,
    method_multiplier,
    opponent_quality_bonus,
)
from fightrank.rating.decay import apply_inactivity_decay, days_since, inactivity_penalty
from fightrank.rating.experience import k_factor_for
from fightrank.rating.pipeline import (
    RankingInput,
    RankingPipeline,
    RecomputeResult,
    current_rankings,
    load_ranking_input,
    replace_rankings,
)
from fightrank.rating.replay import BoutRow, FighterRow, FighterState, apply_bout, replay_history
from fightrank.rating.snapshot import (
    PreviousRank,
    SnapshotEntry,
    build_snapshot,
    movement_label,
    rank_movement,
)

__all__ = [
    "RatingUpdate",
    "calculate_new_ratings",
    "expected_score",
    "method_multiplier",
    "opponent_quality_bonus",
    "apply_inactivity_decay",
    "days_since",
    "inactivity_penalty",
    "k_factor_for",
    "RankingInput",
    "RankingPipeline",
    "RecomputeResult",
    "current_rankings",
    "load_ranking_input",
    "replace_rankings",
    "BoutRow",
    "FighterRow",
    "FighterState",
    "apply_bout",
    "replay_history",
    "PreviousRank",
    "SnapshotEntry",
    "build_snapshot",
    "movement_label",
    "rank_movement",
]
