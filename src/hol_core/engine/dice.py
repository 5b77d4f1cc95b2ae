"""Dice rolling for dice specs, value ranges and stats.

Rolls are evaluated by the d20 library from the notation the value objects
produce, so a DiceSpec of 2d6+8 is rolled exactly as written.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import d20
from d20.errors import RollError

from hol_core.core.config import get_settings
from hol_core.core.exceptions import DiceRollError
from hol_core.core.logging import get_logger
from hol_core.models.dice import DiceSpec
from hol_core.models.enums import BodyStat
from hol_core.models.stats import Stat, build_stat_map
from hol_core.models.value_range import ValueRange


logger = get_logger(__name__)


@dataclass(frozen=True)
class RollResult:
    """Outcome of one roll.

    Attributes:
        expression: The dice expression rolled.
        total: The total result of the roll.
        dice: Individual kept dice results.
        modifier: Static modifier applied (total minus the dice).
    """

    expression: str
    total: int
    dice: list[int]
    modifier: int


class DiceRoller:
    """Rolls dice expressions with the d20 library.

    Example:
        >>> roller = DiceRoller(seed=42)
        >>> result = roller.roll_spec(DiceSpec(count=2, sides=DiceType.D6, bonus=8))
        >>> 10 <= result.total <= 20
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls. Falls back to
                the configured ``HOL_DICE_SEED``.
        """
        if seed is None:
            seed = get_settings().dice.seed
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.info("DiceRoller initialized", seed=seed)

    def roll(self, expression: str) -> RollResult:
        """Roll a dice expression.

        Args:
            expression: Dice expression (e.g., '2d6+8', '1d20-1').

        Returns:
            RollResult with the total and the individual dice.

        Raises:
            DiceRollError: If the expression is empty or invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        logger.debug("Rolling dice", expression=expression)

        try:
            result = d20.roll(expression)
        except RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        dice_values = self._extract_dice_values(result.expr)
        roll_result = RollResult(
            expression=expression,
            total=result.total,
            dice=dice_values,
            modifier=result.total - sum(dice_values),
        )

        logger.info("Dice rolled", expression=expression, total=result.total)
        return roll_result

    def roll_spec(self, spec: DiceSpec) -> RollResult:
        """Roll a DiceSpec."""
        return self.roll(spec.notation)

    def roll_value_range(self, value_range: ValueRange) -> RollResult:
        """Roll a value within ``value_range``.

        The total always lies between ``value_range.min`` and ``value_range.max``.
        """
        return self.roll_spec(value_range.to_dice_spec())

    def roll_stat(self, ability: BodyStat, value_range: ValueRange) -> Stat:
        """Roll a fresh Stat for ``ability`` within ``value_range``."""
        result = self.roll_value_range(value_range)
        return Stat(type=ability, raw_value=result.total)

    def roll_stats(self, ranges: Mapping[BodyStat, ValueRange]) -> dict[BodyStat, Stat]:
        """Roll a full stat map from a race's value ranges.

        Abilities without a range get the default score.
        """
        stats = build_stat_map()
        for ability, value_range in ranges.items():
            stats[ability] = self.roll_stat(ability, value_range)
        logger.debug(
            "Stats rolled",
            stats={ability.value: stat.raw_value for ability, stat in stats.items()},
        )
        return stats

    def _extract_dice_values(self, expr: Any) -> list[int]:
        """Extract individual kept dice values from a d20 expression tree."""
        values: list[int] = []

        def traverse(node: Any) -> None:
            if isinstance(node, d20.Dice):
                for die in node.values:
                    if die.kept:
                        values.append(die.number)
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return values


# Module-level convenience roller
_default_roller: DiceRoller | None = None


def roll(expression: str | DiceSpec) -> RollResult:
    """Convenience function to roll dice.

    Args:
        expression: Dice expression or DiceSpec.

    Returns:
        RollResult containing roll results.
    """
    global _default_roller  # noqa: PLW0603
    if _default_roller is None:
        _default_roller = DiceRoller()
    if isinstance(expression, DiceSpec):
        return _default_roller.roll_spec(expression)
    return _default_roller.roll(expression)


__all__ = [
    "RollResult",
    "DiceRoller",
    "roll",
]
