"""Tests for the DiceSpec value object."""

from __future__ import annotations

import pytest

from hol_core.core.exceptions import InvalidArgumentError
from hol_core.models import DiceSpec, DiceType


class TestDiceType:
    """Tests for the DiceType enum."""

    def test_value_is_sides(self) -> None:
        """Test that the enum value is the number of faces."""
        assert int(DiceType.D6) == 6
        assert DiceType.D100.sides == 100

    def test_notation(self) -> None:
        """Test notation suffix."""
        assert DiceType.D20.notation == "d20"

    def test_unsupported_die(self) -> None:
        """Test that odd dice are not members."""
        with pytest.raises(ValueError):
            DiceType(7)


class TestDiceSpec:
    """Tests for DiceSpec construction and fluent setters."""

    def test_defaults(self) -> None:
        """Test default spec is one plain d6."""
        spec = DiceSpec()

        assert spec.count == 1
        assert spec.sides == DiceType.D6
        assert spec.bonus == 0

    def test_fluent_setters(self) -> None:
        """Test chained setters."""
        spec = DiceSpec().set_count(2).set_sides(DiceType.D6).set_bonus(3)

        assert spec == DiceSpec(count=2, sides=DiceType.D6, bonus=3)

    def test_count_below_one_rejected(self) -> None:
        """Test that a dice count of zero is rejected at construction."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            DiceSpec(count=0)

        assert exc_info.value.argument == "count"

    def test_failed_setter_leaves_spec_unchanged(self) -> None:
        """Test that a rejected count does not modify the spec."""
        spec = DiceSpec(count=3)

        with pytest.raises(InvalidArgumentError):
            spec.set_count(0)

        assert spec.count == 3

    def test_negative_bonus_allowed(self) -> None:
        """Test that bonus may be negative."""
        spec = DiceSpec(count=1, sides=DiceType.D20, bonus=-1)

        assert spec.minimum == 0
        assert spec.maximum == 19

    def test_value_equality(self) -> None:
        """Test specs compare by value."""
        assert DiceSpec(count=2, bonus=1) == DiceSpec(count=2, bonus=1)
        assert DiceSpec(count=2, bonus=1) != DiceSpec(count=2, bonus=2)


class TestDiceNotation:
    """Tests for notation rendering and parsing."""

    @pytest.mark.parametrize(
        ("spec", "expected"),
        [
            (DiceSpec(count=2, sides=DiceType.D6, bonus=8), "2d6+8"),
            (DiceSpec(count=1, sides=DiceType.D20), "1d20"),
            (DiceSpec(count=3, sides=DiceType.D4, bonus=-2), "3d4-2"),
        ],
    )
    def test_notation(self, spec: DiceSpec, expected: str) -> None:
        """Test notation output."""
        assert spec.notation == expected
        assert str(spec) == expected

    def test_from_notation(self) -> None:
        """Test parsing a single dice term with a bonus."""
        spec = DiceSpec.from_notation("3d8+2")

        assert spec == DiceSpec(count=3, sides=DiceType.D8, bonus=2)

    def test_from_notation_negative_bonus(self) -> None:
        """Test parsing a negative bonus."""
        assert DiceSpec.from_notation("1D20 - 1").bonus == -1

    def test_from_notation_unsupported_die(self) -> None:
        """Test that unsupported dice are rejected."""
        with pytest.raises(InvalidArgumentError, match="d7"):
            DiceSpec.from_notation("2d7")

    @pytest.mark.parametrize("notation", ["", "d6", "2d6+", "2d6+1d4", "abc"])
    def test_from_notation_malformed(self, notation: str) -> None:
        """Test that malformed notation is rejected."""
        with pytest.raises(InvalidArgumentError):
            DiceSpec.from_notation(notation)

    def test_from_notation_zero_dice(self) -> None:
        """Test that zero dice fail count validation."""
        with pytest.raises(InvalidArgumentError):
            DiceSpec.from_notation("0d6")
