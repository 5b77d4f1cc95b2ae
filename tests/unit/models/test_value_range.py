"""Tests for ValueRange."""

from __future__ import annotations

import pytest

from hol_core.core.exceptions import InvalidArgumentError
from hol_core.models import DiceSpec, DiceType, ValueRange


class TestValueRange:
    """Tests for ValueRange construction and derived bounds."""

    def test_max_derived(self) -> None:
        """Test max is min plus the dice span."""
        value_range = ValueRange(min=10, dice_count=2, dice_type=DiceType.D6)

        assert value_range.max == 20
        assert value_range.span == 10

    def test_defaults(self) -> None:
        """Test one d6 by default."""
        value_range = ValueRange(min=3)

        assert value_range.dice_count == 1
        assert value_range.dice_type == DiceType.D6
        assert value_range.max == 8

    def test_zero_dice_rejected(self) -> None:
        """Test dice count below one is rejected."""
        with pytest.raises(InvalidArgumentError):
            ValueRange(min=5, dice_count=0)

    def test_setters_move_max(self) -> None:
        """Test max follows every setter."""
        value_range = ValueRange(min=10, dice_count=2)

        value_range.set_min(12)
        assert value_range.max == 22

        value_range.set_dice_count(3).set_dice_type(DiceType.D4)
        assert value_range.max == 21

    def test_failed_setter_leaves_range_unchanged(self) -> None:
        """Test a rejected dice count keeps the previous one."""
        value_range = ValueRange(min=1, dice_count=2)

        with pytest.raises(InvalidArgumentError):
            value_range.set_dice_count(-1)

        assert value_range.dice_count == 2

    def test_contains(self) -> None:
        """Test bounds are inclusive."""
        value_range = ValueRange(min=10, dice_count=2)

        assert value_range.contains(10)
        assert value_range.contains(20)
        assert not value_range.contains(9)
        assert not value_range.contains(21)

    def test_to_dice_spec(self) -> None:
        """Test conversion to a roll with the same bounds."""
        value_range = ValueRange(min=10, dice_count=2, dice_type=DiceType.D6)
        spec = value_range.to_dice_spec()

        assert spec == DiceSpec(count=2, sides=DiceType.D6, bonus=8)
        assert spec.minimum == value_range.min
        assert spec.maximum == value_range.max

    def test_max_not_serialized(self) -> None:
        """Test only min and the dice are stored."""
        dumped = ValueRange(min=4, dice_count=1).model_dump()

        assert dumped == {"min": 4, "dice_count": 1, "dice_type": DiceType.D6}


class TestFromMinMax:
    """Tests for the deprecated min/max conversion."""

    @pytest.mark.parametrize(
        ("minimum", "maximum", "dice_count", "expected_max"),
        [
            (10, 20, 2, 20),
            (1, 9, 2, 11),
            (1, 8, 1, 6),
            (3, 18, 3, 18),
        ],
    )
    def test_rounding(
        self,
        minimum: int,
        maximum: int,
        dice_count: int,
        expected_max: int,
    ) -> None:
        """Test span rounding to whole dice."""
        with pytest.warns(DeprecationWarning):
            value_range = ValueRange.from_min_max(minimum, maximum)

        assert value_range.min == minimum
        assert value_range.dice_count == dice_count
        assert value_range.max == expected_max

    def test_other_die(self) -> None:
        """Test conversion with a d20."""
        with pytest.warns(DeprecationWarning):
            value_range = ValueRange.from_min_max(1, 20, DiceType.D20)

        assert value_range.dice_count == 1
        assert value_range.max == 20

    def test_inverted_bounds(self) -> None:
        """Test max below min is rejected."""
        with pytest.warns(DeprecationWarning), pytest.raises(InvalidArgumentError):
            ValueRange.from_min_max(10, 5)

    def test_span_too_small(self) -> None:
        """Test a span rounding to zero dice is rejected."""
        with pytest.warns(DeprecationWarning), pytest.raises(InvalidArgumentError):
            ValueRange.from_min_max(5, 6)
