"""Rule constants shared by the HoL value objects."""

from __future__ import annotations

# =============================================================================
# Ability Scores
# =============================================================================

MIN_ABILITY_SCORE = 1
"""Lowest score the bonus table is defined for."""

MAX_ABILITY_SCORE = 42
"""Highest score the bonus table is defined for."""

DEFAULT_ABILITY_SCORE = 10
"""Score used for abilities missing from a stat map (bonus 0)."""

# =============================================================================
# Dice
# =============================================================================

MIN_DICE_COUNT = 1
"""A roll always involves at least one die."""

# =============================================================================
# Currency
# =============================================================================

MIN_HIERARCHY_LEVEL = 1
"""Lowest hierarchy level a denomination may occupy."""

MIN_EXCHANGE_RATE = 1
"""Lowest exchange rate a denomination may carry."""

UNASSIGNED_ID = 0
"""Id carried by records that have not been persisted yet."""

EMPTY_TREASURE_LABEL = "Empty treasure"
"""Display text of a treasure with no coins to show."""


__all__ = [
    # Ability scores
    "MIN_ABILITY_SCORE",
    "MAX_ABILITY_SCORE",
    "DEFAULT_ABILITY_SCORE",
    # Dice
    "MIN_DICE_COUNT",
    # Currency
    "MIN_HIERARCHY_LEVEL",
    "MIN_EXCHANGE_RATE",
    "UNASSIGNED_ID",
    "EMPTY_TREASURE_LABEL",
]
