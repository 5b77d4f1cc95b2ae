"""Dice engine for the HoL core.

Submodules:
    dice: Rolling DiceSpec, ValueRange and Stat values (d20 library)
"""

from __future__ import annotations

from hol_core.engine.dice import DiceRoller, RollResult, roll


__all__ = [
    "DiceRoller",
    "RollResult",
    "roll",
]
