"""Bout method codes and the tagged bout outcome.

A bout's result is stored as a nullable winner reference plus a nullable
method code. Everything that needs to interpret a result goes through
``resolve_outcome`` so the rating engine and fight records agree on what a
result means.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

# Individual method codes used in the system.
ALL_METHODS: tuple[str, ...] = (
    "ko_tko",
    "submission",
    "ud",
    "md_td",
    "sd",
    "dq_doctor",
    "draw",
    "nc",
)

METHOD_LABELS: dict[str, str] = {
    "ko_tko": "KO/TKO",
    "submission": "Submission",
    "ud": "Unanimous Decision",
    "md_td": "Majority/Technical Decision",
    "sd": "Split Decision",
    "dq_doctor": "DQ/Doctor Stoppage",
    "draw": "Draw",
    "nc": "No Contest",
}

NO_CONTEST = "nc"

# Legacy sentinel some records carry in the winner column instead of a null.
DRAW_SENTINEL = "draw"


@dataclass(frozen=True)
class Decisive:
    """A bout with a winner who was one of the two corners."""
    winner_id: int


@dataclass(frozen=True)
class Draw:
    """A bout that produced no winner (draw, or no usable winner recorded)."""


@dataclass(frozen=True)
class NoContest:
    """A bout declared a no-contest. Never rated."""


Outcome = Union[Decisive, Draw, NoContest]


def resolve_outcome(
    corner_a_id: int,
    corner_b_id: int,
    winner_id: Optional[object],
    method: Optional[str],
) -> Outcome:
    """
    Interpret a stored result as a tagged outcome.

    - method ``nc`` is always a no-contest, whatever the winner column says
    - a winner matching either corner is decisive
    - anything else (no winner, the ``"draw"`` sentinel, a winner who was not
      in the bout) is a draw
    """
    if method == NO_CONTEST:
        return NoContest()
    if winner_id is not None and winner_id != DRAW_SENTINEL:
        if winner_id == corner_a_id or winner_id == corner_b_id:
            return Decisive(winner_id=winner_id)
    return Draw()
