"""Value objects of the HoL race records.

This package exports:
- Enums: DiceType, BodyStat, MobilityType, VulnerabilityType
- Dice: DiceSpec
- Stats: StatModifierTable, Stat, get_modifier, build_stat_map
- Ranges: ValueRange
- Currency: CurrencyDenomination, CurrencyGroup, Treasure
"""

from __future__ import annotations

from hol_core.models.currency import CurrencyDenomination, CurrencyGroup
from hol_core.models.dice import DiceSpec
from hol_core.models.enums import BodyStat, DiceType, MobilityType, VulnerabilityType
from hol_core.models.stats import Stat, StatModifierTable, build_stat_map, get_modifier
from hol_core.models.treasure import Treasure
from hol_core.models.value_range import ValueRange


__all__ = [
    # Enums
    "DiceType",
    "BodyStat",
    "MobilityType",
    "VulnerabilityType",
    # Dice
    "DiceSpec",
    # Stats
    "StatModifierTable",
    "Stat",
    "get_modifier",
    "build_stat_map",
    # Ranges
    "ValueRange",
    # Currency
    "CurrencyDenomination",
    "CurrencyGroup",
    "Treasure",
]
