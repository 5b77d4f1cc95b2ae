"""Dice descriptor used by attacks, tests and value ranges.

A DiceSpec is pure data: how many dice, which die, and a flat bonus. It
does not roll; see ``hol_core.engine.dice`` for that.
"""

from __future__ import annotations

import re
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hol_core.core.constants import MIN_DICE_COUNT
from hol_core.core.exceptions import InvalidArgumentError
from hol_core.models.enums import DiceType


_NOTATION_PATTERN = re.compile(r"^\s*(\d+)\s*[dD]\s*(\d+)\s*(?:([+-])\s*(\d+))?\s*$")


class DiceSpec(BaseModel):
    """A roll of ``count`` dice of ``sides`` faces plus ``bonus``.

    Compared by value. The fluent setters validate the field they touch and
    leave the spec unchanged when they fail.

    Attributes:
        count: Number of dice (at least 1).
        sides: Die type.
        bonus: Flat value added to the sum of the dice.

    Example:
        >>> spec = DiceSpec(count=2, sides=DiceType.D6, bonus=8)
        >>> spec.notation
        '2d6+8'
        >>> spec.set_count(3).notation
        '3d6+8'
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        json_schema_extra={"description": "Dice count, die type and flat bonus"},
    )

    count: int = Field(default=1, description="Number of dice (at least 1)")
    sides: DiceType = Field(default=DiceType.D6, description="Die type")
    bonus: int = Field(default=0, description="Flat bonus added to the roll")

    @field_validator("count")
    @classmethod
    def validate_count(cls, value: int) -> int:
        """Reject dice counts below one."""
        if value < MIN_DICE_COUNT:
            raise InvalidArgumentError(
                f"Dice count must be at least {MIN_DICE_COUNT}, got {value}",
                argument="count",
                value=value,
            )
        return value

    def set_count(self, count: int) -> Self:
        """Set the number of dice.

        Raises:
            InvalidArgumentError: If count is below 1.
        """
        self.count = count
        return self

    def set_sides(self, sides: DiceType) -> Self:
        """Set the die type."""
        self.sides = sides
        return self

    def set_bonus(self, bonus: int) -> Self:
        """Set the flat bonus."""
        self.bonus = bonus
        return self

    @property
    def notation(self) -> str:
        """Dice notation understood by the d20 library (e.g., '2d6+8')."""
        base = f"{self.count}{self.sides.notation}"
        if self.bonus:
            return f"{base}{self.bonus:+d}"
        return base

    @property
    def minimum(self) -> int:
        """Lowest achievable total (every die shows 1)."""
        return self.count + self.bonus

    @property
    def maximum(self) -> int:
        """Highest achievable total (every die shows its top face)."""
        return self.count * self.sides.sides + self.bonus

    @classmethod
    def from_notation(cls, notation: str) -> DiceSpec:
        """Parse a single-term expression such as '3d8+2' or '1d20'.

        Args:
            notation: Dice notation with one dice term and an optional bonus.

        Returns:
            The equivalent DiceSpec.

        Raises:
            InvalidArgumentError: If the text is malformed or the die type
                is not supported.
        """
        match = _NOTATION_PATTERN.match(notation or "")
        if match is None:
            raise InvalidArgumentError(
                f"Unsupported dice notation: {notation!r}",
                argument="notation",
                value=notation,
            )
        count_str, sides_str, sign, bonus_str = match.groups()
        try:
            sides = DiceType(int(sides_str))
        except ValueError as exc:
            raise InvalidArgumentError(
                f"Unsupported die type: d{sides_str}",
                argument="notation",
                value=notation,
            ) from exc
        bonus = int(bonus_str) if bonus_str else 0
        if sign == "-":
            bonus = -bonus
        return cls(count=int(count_str), sides=sides, bonus=bonus)

    def __str__(self) -> str:
        return self.notation


__all__ = ["DiceSpec"]
