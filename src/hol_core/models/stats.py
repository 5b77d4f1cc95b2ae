"""Ability scores and the score-to-bonus table.

StatModifierTable maps a score between 1 and 42 onto a bonus from -5 to
+15. Stat combines a raw score with a permanent value adjustment (race
bonuses) and a temporary bonus adjustment (buffs, magic items); its derived
values are recomputed on every read so they can never go stale.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Mapping
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from hol_core.core.constants import (
    DEFAULT_ABILITY_SCORE,
    MAX_ABILITY_SCORE,
    MIN_ABILITY_SCORE,
)
from hol_core.core.exceptions import OutOfRangeError
from hol_core.models.enums import BodyStat


# =============================================================================
# Modifier Table
# =============================================================================


class StatModifierTable:
    """Step table from ability score to bonus.

    Steps are two points wide from score 2 upward, except the neutral band
    10-12 which is three points wide.

    Example:
        >>> StatModifierTable.modifier(12)
        0
        >>> StatModifierTable.modifier(17)
        3
    """

    # (highest score in band, bonus), ascending
    STEPS: tuple[tuple[int, int], ...] = (
        (1, -5),
        (3, -4),
        (5, -3),
        (7, -2),
        (9, -1),
        (12, 0),
        (14, 1),
        (16, 2),
        (18, 3),
        (20, 4),
        (22, 5),
        (24, 6),
        (26, 7),
        (28, 8),
        (30, 9),
        (32, 10),
        (34, 11),
        (36, 12),
        (38, 13),
        (40, 14),
        (42, 15),
    )

    _UPPER_BOUNDS: tuple[int, ...] = tuple(bound for bound, _ in STEPS)

    @classmethod
    def modifier(cls, score: int) -> int:
        """Look up the bonus for an ability score.

        Args:
            score: Ability score between 1 and 42 inclusive.

        Returns:
            The bonus for that score.

        Raises:
            OutOfRangeError: If the score is outside 1-42.
        """
        if not MIN_ABILITY_SCORE <= score <= MAX_ABILITY_SCORE:
            raise OutOfRangeError(
                f"Ability score must be between {MIN_ABILITY_SCORE} and "
                f"{MAX_ABILITY_SCORE}, got {score}",
                argument="score",
                value=score,
            )
        return cls.STEPS[bisect_left(cls._UPPER_BOUNDS, score)][1]


def get_modifier(score: int) -> int:
    """Module-level shortcut for ``StatModifierTable.modifier``."""
    return StatModifierTable.modifier(score)


# =============================================================================
# Stat
# =============================================================================


class Stat(BaseModel):
    """A scored attribute with permanent and temporary adjustments.

    No range validation happens here; scores outside the bonus table only
    fail when a bonus is read.

    Attributes:
        type: Which ability this is.
        raw_value: Score before adjustments.
        value_adjustment: Permanent change to the score (e.g., racial).
        bonus_adjustment: Temporary change to the bonus (e.g., a buff).

    Example:
        >>> stat = Stat(type=BodyStat.STRENGTH, raw_value=15,
        ...             value_adjustment=2, bonus_adjustment=1)
        >>> stat.final_value, stat.raw_bonus, stat.final_bonus
        (17, 2, 4)
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        json_schema_extra={"description": "Ability score with adjustments"},
    )

    type: BodyStat = Field(description="Ability this score belongs to")
    raw_value: int = Field(description="Score before adjustments")
    value_adjustment: int = Field(default=0, description="Permanent score adjustment")
    bonus_adjustment: int = Field(default=0, description="Temporary bonus adjustment")

    @property
    def final_value(self) -> int:
        """Score after the permanent adjustment."""
        return self.raw_value + self.value_adjustment

    @property
    def raw_bonus(self) -> int:
        """Bonus of the unadjusted score."""
        return StatModifierTable.modifier(self.raw_value)

    @property
    def final_bonus(self) -> int:
        """Bonus of the adjusted score plus the temporary bonus adjustment."""
        return StatModifierTable.modifier(self.final_value) + self.bonus_adjustment

    def set_raw_value(self, value: int) -> Self:
        """Set the unadjusted score."""
        self.raw_value = value
        return self

    def set_value_adjustment(self, adjustment: int) -> Self:
        """Set the permanent score adjustment."""
        self.value_adjustment = adjustment
        return self

    def set_bonus_adjustment(self, adjustment: int) -> Self:
        """Set the temporary bonus adjustment."""
        self.bonus_adjustment = adjustment
        return self


def build_stat_map(
    raw_values: Mapping[BodyStat, int] | None = None,
    *,
    default: int = DEFAULT_ABILITY_SCORE,
) -> dict[BodyStat, Stat]:
    """Build a stat map holding one Stat for every ability.

    Args:
        raw_values: Known raw scores by ability.
        default: Raw score for abilities missing from ``raw_values``.

    Returns:
        Mapping with every BodyStat present.
    """
    raw_values = raw_values or {}
    return {
        ability: Stat(type=ability, raw_value=raw_values.get(ability, default))
        for ability in BodyStat
    }


__all__ = [
    "StatModifierTable",
    "get_modifier",
    "Stat",
    "build_stat_map",
]
