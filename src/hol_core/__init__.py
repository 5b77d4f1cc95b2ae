"""HoL Core - value objects of the HoL race records.

Dice specs, ability stats, value ranges and the currency ledger that a race
record is assembled from, together with the dice engine that rolls them and
the storage layer that persists them.

Example:
    >>> from hol_core import CurrencyDenomination, CurrencyGroup, Treasure
    >>>
    >>> coinage = CurrencyGroup(name="Common Coinage")
    >>> coinage.add(CurrencyDenomination(
    ...     name="Gold", short_name="gp", hierarchy_level=1, exchange_rate=1))
    >>> coinage.add(CurrencyDenomination(
    ...     name="Silver", short_name="sp", hierarchy_level=2, exchange_rate=10))
    >>>
    >>> purse = Treasure(currency_group=coinage).add_coins(1, 2).add_coins(2, 5)
    >>> purse.get_total_value_in_base_units()
    52

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 value objects.
    engine: Dice rolling via d20.
    storage: JSON column codecs and SQLite persistence.
"""

from __future__ import annotations

# Core
from hol_core.core.config import Settings, get_settings
from hol_core.core.exceptions import DomainError, HolError
from hol_core.core.logging import configure_logging, get_logger

# Engine
from hol_core.engine.dice import DiceRoller, RollResult, roll

# Value objects
from hol_core.models import (
    BodyStat,
    CurrencyDenomination,
    CurrencyGroup,
    DiceSpec,
    DiceType,
    MobilityType,
    Stat,
    StatModifierTable,
    Treasure,
    ValueRange,
    VulnerabilityType,
    build_stat_map,
    get_modifier,
)


__version__ = "0.1.0"
__author__ = "HoL Team"
__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Core
    "HolError",
    "DomainError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Engine
    "DiceRoller",
    "RollResult",
    "roll",
    # Value objects
    "DiceType",
    "BodyStat",
    "MobilityType",
    "VulnerabilityType",
    "DiceSpec",
    "StatModifierTable",
    "Stat",
    "get_modifier",
    "build_stat_map",
    "ValueRange",
    "CurrencyDenomination",
    "CurrencyGroup",
    "Treasure",
]
