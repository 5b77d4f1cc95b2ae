"""Storage module for HoL persistence.

Provides:
- JSON codecs for the dictionary-valued record columns
- SQLite storage for currency groups and treasures
"""

from hol_core.storage.codec import (
    TreasureRecord,
    decode_coin_quantities,
    decode_currency_group,
    decode_mobility,
    decode_stat_map,
    decode_stat_ranges,
    decode_treasure,
    decode_vulnerabilities,
    encode_coin_quantities,
    encode_currency_group,
    encode_mobility,
    encode_stat_map,
    encode_stat_ranges,
    encode_treasure,
    encode_vulnerabilities,
)
from hol_core.storage.database import (
    CurrencyRepository,
    DenominationRow,
    TreasureRow,
    get_repository,
)

__all__ = [
    "CurrencyRepository",
    "DenominationRow",
    "TreasureRow",
    "get_repository",
    "TreasureRecord",
    "encode_coin_quantities",
    "decode_coin_quantities",
    "encode_stat_map",
    "decode_stat_map",
    "encode_stat_ranges",
    "decode_stat_ranges",
    "encode_mobility",
    "decode_mobility",
    "encode_vulnerabilities",
    "decode_vulnerabilities",
    "encode_currency_group",
    "decode_currency_group",
    "encode_treasure",
    "decode_treasure",
]
