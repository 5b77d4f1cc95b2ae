"""Coin ledger of a race or character, kept per currency group.

A Treasure maps hierarchy levels to coin counts. It references its
CurrencyGroup rather than copying it, so exchange-rate and name changes made
on the group show up in every treasure that uses it. Levels added to the
group after the treasure was created are only tracked after
``sync_levels()``; levels removed from the group stay in the ledger but are
worth nothing.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from hol_core.core.constants import EMPTY_TREASURE_LABEL, UNASSIGNED_ID
from hol_core.core.exceptions import (
    InsufficientFundsError,
    InvalidArgumentError,
    OutOfRangeError,
)
from hol_core.models.currency import CurrencyGroup, require_at_least, validate_id


def _require_non_negative(amount: int, argument: str = "amount") -> int:
    if amount < 0:
        raise OutOfRangeError(
            f"Coin {argument} must be 0 or more, got {amount}",
            argument=argument,
            value=amount,
        )
    return amount


class Treasure(BaseModel):
    """Coin quantities by hierarchy level for one currency group.

    Attributes:
        id: Storage identity, 0 until persisted.
        currency_group: Shared group the levels refer to.
        coin_quantities: Coins held per hierarchy level, never negative.

    Example:
        >>> treasure = (
        ...     Treasure(currency_group=coinage)
        ...     .add_coins(1, 2)
        ...     .add_coins(2, 5)
        ...     .add_coins(3, 7)
        ... )
        >>> treasure.get_total_value_in_base_units()
        752
        >>> str(treasure)
        '7 Copper, 5 Silver, 2 Gold'
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"description": "Coin ledger keyed by hierarchy level"},
    )

    id: int = Field(default=UNASSIGNED_ID, description="Storage id, 0 until persisted")
    currency_group: CurrencyGroup = Field(description="Currency group of the coins")
    coin_quantities: dict[int, int] = Field(
        default_factory=dict,
        description="Coins held per hierarchy level",
    )

    @field_validator("currency_group", mode="before")
    @classmethod
    def require_group(cls, value: Any) -> Any:
        """Reject a missing currency group before type validation."""
        if value is None:
            raise InvalidArgumentError(
                "currency_group must not be None",
                argument="currency_group",
            )
        return value

    @field_validator("coin_quantities")
    @classmethod
    def validate_quantities(cls, value: dict[int, int]) -> dict[int, int]:
        """Reject negative coin counts."""
        for quantity in value.values():
            _require_non_negative(quantity, "quantity")
        return value

    @field_validator("id")
    @classmethod
    def validate_id_value(cls, value: int) -> int:
        """Reject negative ids."""
        return require_at_least(value, UNASSIGNED_ID, "id")

    @model_validator(mode="after")
    def initialize_levels(self) -> Treasure:
        """Give every level of the group an entry, defaulting to zero."""
        self.coin_quantities = {
            **dict.fromkeys(self.currency_group.levels, 0),
            **self.coin_quantities,
        }
        return self

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def currency_group_id(self) -> int:
        """Id of the referenced currency group."""
        return self.currency_group.id

    @property
    def is_empty(self) -> bool:
        """Whether the ledger holds no coins at all."""
        return not any(self.coin_quantities.values())

    def get_amount(self, level: int) -> int:
        """Coins held at ``level``; 0 for levels this ledger does not track."""
        return self.coin_quantities.get(level, 0)

    def get_total_value_in_base_units(self) -> int:
        """Sum of coin counts weighted by the group's current exchange rates.

        Levels no longer present in the group contribute nothing.
        """
        total = 0
        for level, quantity in self.coin_quantities.items():
            denomination = self.currency_group.get_by_level(level)
            if denomination is not None:
                total += quantity * denomination.exchange_rate
        return total

    def to_display_string(self) -> str:
        """Render held coins, highest level first (e.g., '7 Copper, 5 Silver').

        Returns the empty-treasure label when the group has no denominations
        or no coins are held.
        """
        if self.currency_group.is_empty or self.is_empty:
            return EMPTY_TREASURE_LABEL

        parts = []
        for level in sorted(self.coin_quantities, reverse=True):
            quantity = self.coin_quantities[level]
            if quantity == 0:
                continue
            denomination = self.currency_group.get_by_level(level)
            coin_name = denomination.name if denomination is not None else f"level {level}"
            parts.append(f"{quantity} {coin_name}")
        return ", ".join(parts)

    def __str__(self) -> str:
        return self.to_display_string()

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_coins(self, level: int, amount: int) -> Self:
        """Add ``amount`` coins at ``level``.

        Raises:
            InvalidArgumentError: If the ledger does not track ``level``.
            OutOfRangeError: If ``amount`` is negative.
        """
        self._require_level(level)
        _require_non_negative(amount)
        self.coin_quantities[level] += amount
        return self

    def remove_coins(self, level: int, amount: int) -> Self:
        """Take ``amount`` coins from ``level``.

        Raises:
            InvalidArgumentError: If the ledger does not track ``level``.
            OutOfRangeError: If ``amount`` is negative.
            InsufficientFundsError: If fewer than ``amount`` coins are held.
        """
        self._require_level(level)
        _require_non_negative(amount)
        available = self.coin_quantities[level]
        if available < amount:
            raise InsufficientFundsError(
                f"Cannot remove {amount} coins from level {level}, only {available} held",
                hierarchy_level=level,
                available=available,
                requested=amount,
            )
        self.coin_quantities[level] = available - amount
        return self

    def reset_coins(self) -> Self:
        """Set every tracked level to zero."""
        for level in self.coin_quantities:
            self.coin_quantities[level] = 0
        return self

    def set_coin_quantities(self, quantities: Mapping[int, int]) -> Self:
        """Overwrite counts for tracked levels; untracked levels are ignored.

        Raises:
            OutOfRangeError: If any given count is negative. Nothing is
                applied in that case.
        """
        for quantity in quantities.values():
            _require_non_negative(quantity, "quantity")
        for level, quantity in quantities.items():
            if level in self.coin_quantities:
                self.coin_quantities[level] = quantity
        return self

    def set_currency_group(self, currency_group: CurrencyGroup) -> Self:
        """Switch to another currency group and start an empty ledger for it.

        Raises:
            InvalidArgumentError: If ``currency_group`` is None.
        """
        if currency_group is None:
            raise InvalidArgumentError(
                "currency_group must not be None",
                argument="currency_group",
            )
        self.currency_group = currency_group
        self.coin_quantities = dict.fromkeys(currency_group.levels, 0)
        return self

    def sync_levels(self) -> list[int]:
        """Start tracking levels added to the group since creation.

        Returns:
            The newly tracked levels, ascending.
        """
        added = [level for level in self.currency_group.levels if level not in self.coin_quantities]
        for level in added:
            self.coin_quantities[level] = 0
        return added

    def assign_id(self, record_id: int) -> Self:
        """Set the storage id. Called by the storage layer on insert.

        Raises:
            OutOfRangeError: If the id is negative.
            ConflictError: If a different id was already assigned.
        """
        self.id = validate_id(record_id, self.id)
        return self

    def _require_level(self, level: int) -> None:
        if level not in self.coin_quantities:
            raise InvalidArgumentError(
                f"Hierarchy level {level} does not exist in currency group "
                f"{self.currency_group.name!r}",
                argument="level",
                value=level,
            )


__all__ = ["Treasure"]
