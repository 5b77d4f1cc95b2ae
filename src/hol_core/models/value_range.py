"""Bounded random quantities expressed as a minimum plus dice.

A ValueRange stores ``min``, ``dice_count`` and ``dice_type``; ``max`` is
always derived as ``min + dice_count * (sides - 1)``. Storing the dice
instead of the upper bound means every stored range is rollable and
``max`` can never fall below ``min``.

DEPRECATED: ``ValueRange.from_min_max`` converts an arbitrary (min, max)
pair by rounding the span to a whole number of dice. It is lossy and kept
only for reading old records.
"""

from __future__ import annotations

import warnings
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hol_core.core.constants import MIN_DICE_COUNT
from hol_core.core.exceptions import InvalidArgumentError
from hol_core.models.dice import DiceSpec
from hol_core.models.enums import DiceType


class ValueRange(BaseModel):
    """A guaranteed minimum plus ``dice_count`` dice.

    Attributes:
        min: Lowest achievable value.
        dice_count: Number of dice rolled on top of the minimum (at least 1).
        dice_type: Die rolled.

    Example:
        >>> strength = ValueRange(min=10, dice_count=2, dice_type=DiceType.D6)
        >>> strength.max
        20
        >>> strength.to_dice_spec().notation
        '2d6+8'
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        json_schema_extra={"description": "Minimum plus dice; max is derived"},
    )

    min: int = Field(description="Lowest achievable value")
    dice_count: int = Field(default=1, description="Number of dice (at least 1)")
    dice_type: DiceType = Field(default=DiceType.D6, description="Die rolled")

    @field_validator("dice_count")
    @classmethod
    def validate_dice_count(cls, value: int) -> int:
        """Reject dice counts below one."""
        if value < MIN_DICE_COUNT:
            raise InvalidArgumentError(
                f"Dice count must be at least {MIN_DICE_COUNT}, got {value}",
                argument="dice_count",
                value=value,
            )
        return value

    @property
    def max(self) -> int:
        """Highest achievable value."""
        return self.min + self.dice_count * (self.dice_type.sides - 1)

    @property
    def span(self) -> int:
        """Distance between the minimum and the maximum."""
        return self.max - self.min

    def contains(self, value: int) -> bool:
        """Check whether ``value`` lies within the range, bounds included."""
        return self.min <= value <= self.max

    def set_min(self, value: int) -> Self:
        """Set the minimum; the dice are kept, so ``max`` moves with it."""
        self.min = value
        return self

    def set_dice_count(self, count: int) -> Self:
        """Set the number of dice.

        Raises:
            InvalidArgumentError: If count is below 1.
        """
        self.dice_count = count
        return self

    def set_dice_type(self, dice_type: DiceType) -> Self:
        """Set the die rolled."""
        self.dice_type = dice_type
        return self

    def to_dice_spec(self) -> DiceSpec:
        """Express the range as a roll.

        ``dice_count`` dice sum to at least ``dice_count``, so the bonus that
        lifts that sum to ``min`` is ``min - dice_count``.
        """
        return DiceSpec(
            count=self.dice_count,
            sides=self.dice_type,
            bonus=self.min - self.dice_count,
        )

    @classmethod
    def from_min_max(
        cls,
        minimum: int,
        maximum: int,
        dice_type: DiceType = DiceType.D6,
    ) -> ValueRange:
        """Convert a legacy (min, max) pair into a range.

        The span is divided into whole dice; a remainder of at least half a
        die rounds up, a smaller one rounds down. The resulting ``max``
        therefore differs from ``maximum`` whenever the span is not a
        multiple of ``sides - 1``.

        Args:
            minimum: Lowest value of the legacy pair.
            maximum: Highest value of the legacy pair.
            dice_type: Die to express the span with.

        Returns:
            The nearest expressible range.

        Raises:
            InvalidArgumentError: If ``maximum < minimum`` or the span rounds
                to zero dice.
        """
        warnings.warn(
            "ValueRange.from_min_max is deprecated; construct ValueRange from "
            "min, dice_count and dice_type instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        if maximum < minimum:
            raise InvalidArgumentError(
                f"Invalid range: max ({maximum}) < min ({minimum})",
                argument="maximum",
                value=maximum,
            )
        unit = dice_type.sides - 1
        rolls, rest = divmod(maximum - minimum, unit)
        if rest * 2 >= unit:
            rolls += 1
        return cls(min=minimum, dice_count=rolls, dice_type=dice_type)


__all__ = ["ValueRange"]
