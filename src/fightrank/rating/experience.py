"""
Experience tiering for K factors.

New fighters need their ratings to converge quickly: a fighter who is 2-0
shouldn't be stuck near their starting rating. Established fighters get a
smaller K so a single upset doesn't swing them wildly.

Each corner of a bout uses its own pre-bout count, so a veteran facing a
debutant uses two different K factors in the same bout.
"""

from fightrank.rating.constants import K_FACTOR_TIERS


def k_factor_for(rated_bouts: int) -> float:
    """
    Return the K factor for a fighter with this many rated bouts so far.

    Examples:
        k_factor_for(0)   # -> 38.0
        k_factor_for(3)   # -> 28.0
        k_factor_for(12)  # -> 14.0
    """
    if rated_bouts < 0:
        raise ValueError(f"rated_bouts cannot be negative, got {rated_bouts}")

    for minimum, k in K_FACTOR_TIERS:
        if rated_bouts >= minimum:
            return k

    # Unreachable while the last tier starts at 0
    return K_FACTOR_TIERS[-1][1]
