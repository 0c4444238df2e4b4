"""
Rating calculator for a single bout.

Implements the standard Elo formula with combat-sports adjustments:
- Per-corner K factors (each fighter's experience tier)
- Method-of-victory multiplier (finishes move ratings more than decisions)
- Flat title bout bonus for the winner
- Flat opponent-quality bonus for beating a highly rated opponent

The Elo formula:
  Expected score: E_A = 1 / (1 + 10^((R_B - R_A) / 400))
  Change:         C_A = K_A * (S_A - E_A) * M

Where:
  S_A = 1 for a win, 0.5 for a draw, 0 for a loss
  M   = method multiplier

Changes are computed independently per corner, so the system is not
zero-sum: different K factors and the bonuses mean one corner can gain more
than the other loses. Ratings have no floor or ceiling.
"""

from dataclasses import dataclass
from typing import Optional

from fightrank.rating.constants import (
    DEFAULT_METHOD_MULTIPLIER,
    METHOD_MULTIPLIERS,
    OPPONENT_QUALITY_BONUSES,
    RATING_SPREAD,
    TITLE_BOUT_BONUS,
)

VALID_SCORES = (0.0, 0.5, 1.0)


@dataclass(frozen=True)
class RatingUpdate:
    """Result of rating one bout."""
    rating_a_before: float
    rating_b_before: float
    rating_a_after: float
    rating_b_after: float
    expected_a: float
    expected_b: float
    score_a: float

    @property
    def change_a(self) -> float:
        """Rating change for corner A."""
        return self.rating_a_after - self.rating_a_before

    @property
    def change_b(self) -> float:
        """Rating change for corner B."""
        return self.rating_b_after - self.rating_b_before

    @property
    def was_upset(self) -> bool:
        """Whether the lower-rated fighter won."""
        if self.score_a == 1.0:
            return self.rating_a_before < self.rating_b_before
        if self.score_a == 0.0:
            return self.rating_b_before < self.rating_a_before
        return False

    def __repr__(self) -> str:
        return (
            f"<RatingUpdate(A: {self.rating_a_before:.1f} -> {self.rating_a_after:.1f}, "
            f"B: {self.rating_b_before:.1f} -> {self.rating_b_after:.1f}, "
            f"score_a={self.score_a})>"
        )


def expected_score(rating: float, opponent_rating: float) -> float:
    """
    Expected score (win probability, draws counting half) against an opponent.

    Example:
        expected_score(1500, 1500)  # 0.5
        expected_score(1900, 1500)  # ~0.909
    """
    try:
        return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / RATING_SPREAD))
    except OverflowError:
        return 0.0


def method_multiplier(method: Optional[str]) -> float:
    """Multiplier for a method code; absent or unknown codes are neutral."""
    if method is None:
        return DEFAULT_METHOD_MULTIPLIER
    return METHOD_MULTIPLIERS.get(method, DEFAULT_METHOD_MULTIPLIER)


def opponent_quality_bonus(opponent_rating: float) -> float:
    """Bonus a winner earns for beating an opponent with this pre-bout rating."""
    for threshold, bonus in OPPONENT_QUALITY_BONUSES:
        if opponent_rating >= threshold:
            return bonus
    return 0.0


def calculate_new_ratings(
    rating_a: float,
    rating_b: float,
    score_a: float,
    k_a: float,
    k_b: float,
    multiplier: float,
    is_title_bout: bool,
) -> RatingUpdate:
    """
    Calculate both corners' ratings after a bout.

    Args:
        rating_a: Corner A's rating before the bout
        rating_b: Corner B's rating before the bout
        score_a: 1 if A won, 0.5 for a draw, 0 if B won
        k_a: Corner A's K factor (from its experience tier)
        k_b: Corner B's K factor
        multiplier: Method-of-victory multiplier (see method_multiplier())
        is_title_bout: Whether the bout was for a belt

    Returns:
        RatingUpdate with before/after ratings and expected scores

    Raises:
        ValueError: If score_a is not 0, 0.5 or 1

    Example:
        # Two debuting pros, A wins by submission
        result = calculate_new_ratings(1500, 1500, 1.0, 38, 38, 1.18, False)
        # result.rating_a_after ~ 1522.42, result.rating_b_after ~ 1477.58
    """
    if score_a not in VALID_SCORES:
        raise ValueError(f"score_a must be one of {VALID_SCORES}, got {score_a!r}")

    score_b = 1.0 - score_a
    expected_a = expected_score(rating_a, rating_b)
    expected_b = expected_score(rating_b, rating_a)

    change_a = k_a * (score_a - expected_a) * multiplier
    change_b = k_b * (score_b - expected_b) * multiplier

    # Bonuses go to a clear winner only; draws get neither.
    # Quality bonus reads the loser's pre-bout rating.
    if score_a == 1.0:
        if is_title_bout:
            change_a += TITLE_BOUT_BONUS
        change_a += opponent_quality_bonus(rating_b)
    elif score_a == 0.0:
        if is_title_bout:
            change_b += TITLE_BOUT_BONUS
        change_b += opponent_quality_bonus(rating_a)

    return RatingUpdate(
        rating_a_before=rating_a,
        rating_b_before=rating_b,
        rating_a_after=rating_a + change_a,
        rating_b_after=rating_b + change_b,
        expected_a=expected_a,
        expected_b=expected_b,
        score_a=score_a,
    )
