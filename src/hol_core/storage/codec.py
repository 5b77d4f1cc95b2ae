"""JSON encoding of the value objects for storage columns.

Dictionary-valued fields of a race record (coin quantities, stats, stat
ranges, mobility, vulnerabilities) are stored as JSON blobs. Keys of the
enum-keyed mappings are closed: decoding a key outside its enumeration
fails with CodecError instead of producing a stray string key. Derived
values (``ValueRange.max``, ``Stat.final_bonus``, ...) are never written.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from hol_core.core.exceptions import CodecError, DomainError
from hol_core.models.currency import CurrencyGroup
from hol_core.models.enums import BodyStat, MobilityType, VulnerabilityType
from hol_core.models.stats import Stat
from hol_core.models.treasure import Treasure
from hol_core.models.value_range import ValueRange


T = TypeVar("T")

COIN_QUANTITIES: TypeAdapter[dict[int, int]] = TypeAdapter(dict[int, int])
STAT_MAP: TypeAdapter[dict[BodyStat, Stat]] = TypeAdapter(dict[BodyStat, Stat])
STAT_RANGE_MAP: TypeAdapter[dict[BodyStat, ValueRange]] = TypeAdapter(dict[BodyStat, ValueRange])
MOBILITY_MAP: TypeAdapter[dict[MobilityType, int]] = TypeAdapter(dict[MobilityType, int])
VULNERABILITY_MAP: TypeAdapter[dict[VulnerabilityType, float]] = TypeAdapter(
    dict[VulnerabilityType, float]
)


class TreasureRecord(BaseModel):
    """Storage shape of a Treasure: the group is referenced by id only."""

    id: int = 0
    currency_group_id: int
    coin_quantities: dict[int, int] = Field(default_factory=dict)


def _encode(adapter: TypeAdapter[T], value: T) -> str:
    return adapter.dump_json(value).decode("utf-8")


def _decode(adapter: TypeAdapter[T], payload: str | bytes, payload_type: str) -> T:
    try:
        return adapter.validate_json(payload)
    except PydanticValidationError as exc:
        raise CodecError(
            f"Cannot decode {payload_type}: {exc.error_count()} error(s)",
            payload_type=payload_type,
            details={"errors": exc.errors(include_url=False)},
        ) from exc
    except DomainError as exc:
        raise CodecError(
            f"Cannot decode {payload_type}: {exc.message}",
            payload_type=payload_type,
            details=dict(exc.details),
        ) from exc


# =============================================================================
# Enum-keyed mappings
# =============================================================================


def encode_coin_quantities(quantities: Mapping[int, int]) -> str:
    """Encode hierarchy level → coin count."""
    return _encode(COIN_QUANTITIES, dict(quantities))


def decode_coin_quantities(payload: str | bytes) -> dict[int, int]:
    """Decode hierarchy level → coin count.

    Raises:
        CodecError: If the payload is not a mapping of integers.
    """
    return _decode(COIN_QUANTITIES, payload, "coin_quantities")


def encode_stat_map(stats: Mapping[BodyStat, Stat]) -> str:
    """Encode ability → Stat (raw inputs only)."""
    return _encode(STAT_MAP, dict(stats))


def decode_stat_map(payload: str | bytes) -> dict[BodyStat, Stat]:
    """Decode ability → Stat.

    Raises:
        CodecError: On unknown abilities or malformed stats.
    """
    return _decode(STAT_MAP, payload, "stat_map")


def encode_stat_ranges(ranges: Mapping[BodyStat, ValueRange]) -> str:
    """Encode ability → ValueRange (min, dice_count, dice_type)."""
    return _encode(STAT_RANGE_MAP, dict(ranges))


def decode_stat_ranges(payload: str | bytes) -> dict[BodyStat, ValueRange]:
    """Decode ability → ValueRange.

    Raises:
        CodecError: On unknown abilities, unsupported dice or dice counts below 1.
    """
    return _decode(STAT_RANGE_MAP, payload, "stat_ranges")


def encode_mobility(mobility: Mapping[MobilityType, int]) -> str:
    """Encode movement type → speed."""
    return _encode(MOBILITY_MAP, dict(mobility))


def decode_mobility(payload: str | bytes) -> dict[MobilityType, int]:
    """Decode movement type → speed."""
    return _decode(MOBILITY_MAP, payload, "mobility")


def encode_vulnerabilities(vulnerabilities: Mapping[VulnerabilityType, float]) -> str:
    """Encode vulnerability → damage multiplier."""
    return _encode(VULNERABILITY_MAP, dict(vulnerabilities))


def decode_vulnerabilities(payload: str | bytes) -> dict[VulnerabilityType, float]:
    """Decode vulnerability → damage multiplier."""
    return _decode(VULNERABILITY_MAP, payload, "vulnerabilities")


# =============================================================================
# Aggregates
# =============================================================================


def encode_currency_group(group: CurrencyGroup) -> str:
    """Encode a group together with its denominations."""
    return group.model_dump_json()


def decode_currency_group(payload: str | bytes) -> CurrencyGroup:
    """Decode a group.

    Raises:
        CodecError: On malformed payloads or duplicate hierarchy levels.
    """
    return _decode(TypeAdapter(CurrencyGroup), payload, "currency_group")


def encode_treasure(treasure: Treasure) -> str:
    """Encode a treasure, referencing its group by id."""
    record = TreasureRecord(
        id=treasure.id,
        currency_group_id=treasure.currency_group_id,
        coin_quantities=treasure.coin_quantities,
    )
    return record.model_dump_json()


def decode_treasure(payload: str | bytes, currency_group: CurrencyGroup) -> Treasure:
    """Decode a treasure against the group it references.

    Args:
        payload: JSON written by ``encode_treasure``.
        currency_group: The shared group instance for the stored group id.

    Raises:
        CodecError: On malformed payloads, negative counts, or a group whose
            id does not match the stored reference.
    """
    record = _decode(TypeAdapter(TreasureRecord), payload, "treasure")
    if record.currency_group_id != currency_group.id:
        raise CodecError(
            "Treasure references a different currency group",
            payload_type="treasure",
            details={
                "stored_group_id": record.currency_group_id,
                "given_group_id": currency_group.id,
            },
        )
    return _build_treasure(record, currency_group)


def _build_treasure(record: TreasureRecord, currency_group: CurrencyGroup) -> Treasure:
    try:
        return Treasure(
            id=record.id,
            currency_group=currency_group,
            coin_quantities=record.coin_quantities,
        )
    except DomainError as exc:
        raise CodecError(
            f"Cannot decode treasure: {exc.message}",
            payload_type="treasure",
            details=dict(exc.details),
        ) from exc


__all__ = [
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
