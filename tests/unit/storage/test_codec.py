"""Tests for the JSON column codecs."""

from __future__ import annotations

import json

import pytest

from hol_core.core.exceptions import CodecError
from hol_core.models import (
    BodyStat,
    CurrencyGroup,
    DiceType,
    MobilityType,
    Stat,
    Treasure,
    ValueRange,
    VulnerabilityType,
    build_stat_map,
)
from hol_core.storage.codec import (
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


class TestCoinQuantities:
    """Tests for the coin quantity column."""

    def test_round_trip(self) -> None:
        """Test integer keys survive JSON's string keys."""
        payload = encode_coin_quantities({1: 2, 2: 5, 3: 7})

        assert json.loads(payload) == {"1": 2, "2": 5, "3": 7}
        assert decode_coin_quantities(payload) == {1: 2, 2: 5, 3: 7}

    def test_malformed(self) -> None:
        """Test non-integer values are rejected."""
        with pytest.raises(CodecError) as exc_info:
            decode_coin_quantities('{"1": "many"}')

        assert exc_info.value.details["payload_type"] == "coin_quantities"

    def test_not_json(self) -> None:
        """Test invalid JSON is rejected."""
        with pytest.raises(CodecError):
            decode_coin_quantities("{not json")


class TestStatColumns:
    """Tests for the stat and stat range columns."""

    def test_stat_map_stores_raw_inputs(self) -> None:
        """Test derived bonuses are not written."""
        stats = build_stat_map({BodyStat.STRENGTH: 15})
        stats[BodyStat.STRENGTH].set_value_adjustment(2)

        payload = encode_stat_map(stats)
        decoded = decode_stat_map(payload)

        assert "final_bonus" not in payload
        assert decoded == stats
        assert decoded[BodyStat.STRENGTH].final_value == 17

    def test_stat_map_unknown_ability(self) -> None:
        """Test keys outside BodyStat are rejected."""
        payload = json.dumps(
            {"wisdom": {"type": "strength", "raw_value": 10}}
        )

        with pytest.raises(CodecError):
            decode_stat_map(payload)

    def test_stat_ranges_store_dice(self) -> None:
        """Test ranges are stored as min and dice, not max."""
        ranges = {BodyStat.AGILITY: ValueRange(min=10, dice_count=2, dice_type=DiceType.D6)}

        payload = encode_stat_ranges(ranges)

        assert json.loads(payload) == {
            "agility": {"min": 10, "dice_count": 2, "dice_type": 6}
        }
        assert decode_stat_ranges(payload)[BodyStat.AGILITY].max == 20

    def test_stat_ranges_zero_dice(self) -> None:
        """Test stored ranges are validated on read."""
        with pytest.raises(CodecError):
            decode_stat_ranges('{"luck": {"min": 3, "dice_count": 0, "dice_type": 6}}')

    def test_stat_ranges_unsupported_die(self) -> None:
        """Test dice outside DiceType are rejected."""
        with pytest.raises(CodecError):
            decode_stat_ranges('{"luck": {"min": 3, "dice_count": 1, "dice_type": 7}}')

    def test_stat_out_of_table_still_decodes(self) -> None:
        """Test scores are not range-checked until a bonus is read."""
        payload = encode_stat_map({BodyStat.LUCK: Stat(type=BodyStat.LUCK, raw_value=50)})

        assert decode_stat_map(payload)[BodyStat.LUCK].raw_value == 50


class TestRaceMappings:
    """Tests for mobility and vulnerability columns."""

    def test_mobility(self) -> None:
        """Test movement speeds keyed by type."""
        mobility = {MobilityType.RUNNING: 30, MobilityType.SWIM: 10}

        assert decode_mobility(encode_mobility(mobility)) == mobility

    def test_mobility_unknown_key(self) -> None:
        """Test unknown movement types are rejected."""
        with pytest.raises(CodecError):
            decode_mobility('{"teleport": 5}')

    def test_mobility_types(self) -> None:
        """Test races move by running, swimming or flying."""
        assert set(MobilityType) == {MobilityType.RUNNING, MobilityType.SWIM, MobilityType.FLY}

    def test_vulnerabilities(self) -> None:
        """Test damage multipliers keyed by every source."""
        vulnerabilities = {source: 1.0 for source in VulnerabilityType}
        vulnerabilities[VulnerabilityType.HOLY_WATER] = 2.0
        vulnerabilities[VulnerabilityType.BLUNT_FORCE] = 0.5
        vulnerabilities[VulnerabilityType.RANGER_SPELLS_I] = 1.5

        decoded = decode_vulnerabilities(encode_vulnerabilities(vulnerabilities))

        assert len(decoded) == 13
        assert decoded == vulnerabilities

    def test_vulnerability_display_name(self) -> None:
        """Test stored keys read as words."""
        assert VulnerabilityType.RANGER_SPELLS_I.display_name == "Ranger Spells I"
        assert VulnerabilityType.ACID_OR_POTION.display_name == "Acid Or Potion"

    def test_vulnerabilities_unknown_key(self) -> None:
        """Test unknown damage sources are rejected."""
        with pytest.raises(CodecError):
            decode_vulnerabilities('{"fire": 1.5}')


class TestAggregates:
    """Tests for currency groups and treasures."""

    def test_currency_group(self, coinage: CurrencyGroup) -> None:
        """Test a group with its denominations."""
        decoded = decode_currency_group(encode_currency_group(coinage))

        assert decoded == coinage
        assert decoded is not coinage

    def test_currency_group_duplicate_level(self) -> None:
        """Test stored groups must keep levels unique."""
        payload = json.dumps({
            "name": "Broken",
            "denominations": [
                {"name": "Gold", "short_name": "gp", "hierarchy_level": 1},
                {"name": "Crown", "short_name": "cr", "hierarchy_level": 1},
            ],
        })

        with pytest.raises(CodecError):
            decode_currency_group(payload)

    def test_treasure_references_group(self, purse: Treasure, coinage: CurrencyGroup) -> None:
        """Test the group is stored by id and rebound on decode."""
        coinage.assign_id(4)

        payload = encode_treasure(purse)
        decoded = decode_treasure(payload, coinage)

        assert json.loads(payload)["currency_group_id"] == 4
        assert "denominations" not in payload
        assert decoded.currency_group is coinage
        assert decoded.get_total_value_in_base_units() == 752

    def test_treasure_group_mismatch(self, purse: Treasure, coinage: CurrencyGroup) -> None:
        """Test decoding against the wrong group."""
        payload = encode_treasure(purse)
        other = CurrencyGroup(id=9, name="Other")

        with pytest.raises(CodecError):
            decode_treasure(payload, other)

    def test_treasure_negative_count(self, coinage: CurrencyGroup) -> None:
        """Test stored negative counts are rejected."""
        payload = json.dumps({"currency_group_id": 0, "coin_quantities": {"1": -4}})

        with pytest.raises(CodecError):
            decode_treasure(payload, coinage)
