"""Enumeration types for the HoL race records.

These are the closed key sets of the race record's dictionaries (stats,
mobility, vulnerabilities) plus the die faces a roll may use. Persisted
mappings are decoded against them, so an unknown key is a data error
rather than a silently accepted string.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


class DiceType(IntEnum):
    """Die faces supported by dice specs and value ranges.

    The value is the number of sides, so ``int(DiceType.D6) == 6``.
    """

    D4 = 4
    D6 = 6
    D8 = 8
    D10 = 10
    D12 = 12
    D20 = 20
    D100 = 100

    @property
    def sides(self) -> int:
        """Number of faces on the die."""
        return int(self.value)

    @property
    def notation(self) -> str:
        """Dice notation suffix (e.g., 'd6')."""
        return f"d{self.value}"


class BodyStat(StrEnum):
    """Ability scores tracked for a race.

    Each race carries one ValueRange per ability (the rollable span for new
    characters) and each character one Stat.
    """

    STRENGTH = "strength"
    AGILITY = "agility"
    CONSTITUTION = "constitution"
    INTELLIGENCE = "intelligence"
    CHARISMA = "charisma"
    VISAGE = "visage"
    LUCK = "luck"

    @property
    def display_name(self) -> str:
        """Human-readable ability name (e.g., 'Strength')."""
        return self.value.capitalize()


class MobilityType(StrEnum):
    """Ways a race can move; mapped to a speed value."""

    RUNNING = "running"
    SWIM = "swim"
    FLY = "fly"


class VulnerabilityType(StrEnum):
    """Damage sources a race may resist or suffer extra from.

    Mapped to a damage multiplier (1.0 = normal, below 1.0 = resistant).
    """

    ACID_OR_POTION = "acid_or_potion"
    BLESSED_ARROW = "blessed_arrow"
    BLUNT_FORCE = "blunt_force"
    PHYSICAL_SPELLS = "physical_spells"
    MENTAL_SPELLS = "mental_spells"
    ELEMENTAL_SPELLS = "elemental_spells"
    MAGIC_WEAPON = "magic_weapon"
    SHARP_FORCE = "sharp_force"
    DOMINATION = "domination"
    HOLY_WATER = "holy_water"
    PSYCHIC_ATTACK = "psychic_attack"
    RANGER_SPELLS_I = "ranger_spells_i"
    SPECIFIC_WEAPON = "specific_weapon"

    @property
    def display_name(self) -> str:
        """Human-readable vulnerability name (e.g., 'Blunt Force')."""
        return self.value.replace("_", " ").title()


__all__ = [
    "DiceType",
    "BodyStat",
    "MobilityType",
    "VulnerabilityType",
]
