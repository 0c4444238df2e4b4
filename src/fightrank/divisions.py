"""Shared sport, gender and weight-class definitions.

This module is the single source of truth for the division labels used by
the ranking engine, the API and the demo seed data. A division is the
(sport, gender, weight class) triple; labels are compared exactly.
"""

from __future__ import annotations

from typing import NamedTuple

SPORTS: tuple[str, ...] = ("mma", "kickboxing", "grappling", "bare_knuckle_boxing")
GENDERS: tuple[str, ...] = ("men", "women")
FIGHTER_LEVELS: tuple[str, ...] = ("pro", "am")

SPORT_LABELS: dict[str, str] = {
    "mma": "MMA",
    "kickboxing": "Kickboxing",
    "grappling": "Grappling",
    "bare_knuckle_boxing": "Bare Knuckle",
}

# Weight class labels per sport and gender, lightest first.
WEIGHT_CLASSES: dict[str, dict[str, tuple[str, ...]]] = {
    "mma": {
        "men": (
            "Flyweight (125)",
            "Bantamweight (135)",
            "Featherweight (145)",
            "Lightweight (155)",
            "Welterweight (170)",
            "Middleweight (185)",
            "Light Heavyweight (205)",
            "Heavyweight (265)",
        ),
        "women": (
            "Strawweight (115)",
            "Flyweight (125)",
            "Bantamweight (135)",
            "Featherweight (145)",
        ),
    },
    "kickboxing": {
        "men": (
            "125 lbs", "135 lbs", "145 lbs", "155 lbs",
            "170 lbs", "185 lbs", "205 lbs", "Heavyweight",
        ),
        "women": ("115 lbs", "125 lbs", "135 lbs", "145 lbs"),
    },
    "grappling": {
        "men": ("Light", "Middle", "Heavy"),
        "women": ("Light", "Middle", "Heavy"),
    },
    "bare_knuckle_boxing": {
        "men": ("135", "145", "155", "175", "205", "HVY"),
        "women": ("125", "135", "145"),
    },
}


class Division(NamedTuple):
    """Unit of rank isolation: (sport, gender, weight class)."""
    sport: str
    gender: str
    weight_class: str

    def __str__(self) -> str:
        label = SPORT_LABELS.get(self.sport, self.sport)
        return f"{label} {self.gender} {self.weight_class}"


def weight_classes_for(sport: str, gender: str) -> tuple[str, ...]:
    """Return the weight class labels for a sport/gender, or () if unknown."""
    return WEIGHT_CLASSES.get(sport, {}).get(gender, ())


def is_valid_division(division: Division) -> bool:
    """Whether the weight class label is one of the known labels for its sport/gender."""
    return division.weight_class in weight_classes_for(division.sport, division.gender)


def all_divisions() -> list[Division]:
    """Every known division, in sport / gender / weight order."""
    return [
        Division(sport, gender, weight_class)
        for sport, by_gender in WEIGHT_CLASSES.items()
        for gender, classes in by_gender.items()
        for weight_class in classes
    ]
