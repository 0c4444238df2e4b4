"""
Rating system constants.

These values are the engine's tuning table. Changing any of them changes
every fighter's rating on the next recompute, since ratings are always
rebuilt from the full bout history.

K factor: Controls rating volatility (how much one bout can move a rating)
  - Tiered by experience: fighters with few rated bouts move fastest

Spread: Fixed at 400, the classic Elo logistic spread

Bonuses are flat points added on top of the Elo change for the winner.
"""

# Starting ratings by fighter level
START_RATING_PRO = 1500.0
START_RATING_AM = 1450.0

START_RATINGS = {
    "pro": START_RATING_PRO,
    "am": START_RATING_AM,
}

# Logistic spread: a 400 point gap means ~91% expected score
RATING_SPREAD = 400.0

# K-factor by rated bouts so far, evaluated highest threshold first.
# Format: (minimum rated bouts, K)
K_FACTOR_TIERS: tuple[tuple[int, float], ...] = (
    (10, 14.0),  # 10+ bouts
    (5, 18.0),   # 5-9 bouts
    (2, 28.0),   # 2-4 bouts
    (0, 38.0),   # 0-1 bouts
)

# Method-of-victory multipliers on the Elo change.
# 'nc' never reaches the rating model; absent or unknown methods use 1.0.
METHOD_MULTIPLIERS: dict[str, float] = {
    "ko_tko": 1.18,
    "submission": 1.18,
    "ud": 1.08,
    "md_td": 1.03,
    "sd": 1.00,
    "dq_doctor": 1.00,
    "draw": 1.00,
}
DEFAULT_METHOD_MULTIPLIER = 1.0

# Flat bonus for the winner of a title bout
TITLE_BOUT_BONUS = 5.0

# Opponent-quality bonus for the winner, keyed by the loser's pre-bout
# rating. Format: (minimum opponent rating, bonus), highest first.
OPPONENT_QUALITY_BONUSES: tuple[tuple[float, float], ...] = (
    (1700.0, 8.0),
    (1650.0, 6.0),
    (1600.0, 3.0),
)

# Inactivity penalty, applied once after the replay.
# Format: (days elapsed must exceed, penalty), longest first.
INACTIVITY_PENALTIES: tuple[tuple[int, float], ...] = (
    (365, 20.0),
    (270, 10.0),
    (180, 5.0),
)

# Ranking eligibility
MIN_RATED_BOUTS = 2
MAX_RANKED_PER_DIVISION = 50
