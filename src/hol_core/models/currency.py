"""Currency denominations and the groups that rank them.

A CurrencyGroup is a named set of denominations ("Gold", "Silver",
"Copper", ...) in which every hierarchy level is taken at most once. Each
denomination carries an exchange rate; a treasure's value in base units is
the sum of its coin counts weighted by those rates.

Ids are 0 until the storage layer assigns them on insert.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from hol_core.core.constants import MIN_EXCHANGE_RATE, MIN_HIERARCHY_LEVEL, UNASSIGNED_ID
from hol_core.core.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    OutOfRangeError,
)


# =============================================================================
# Validators
# =============================================================================


def require_text(value: str, argument: str) -> str:
    """Validate that a required string is not empty or whitespace.

    Args:
        value: The string to check.
        argument: Field name reported in the error.

    Returns:
        The unchanged value.

    Raises:
        InvalidArgumentError: If the string is empty or whitespace only.
    """
    if value is None or not value.strip():
        raise InvalidArgumentError(
            f"{argument} must not be empty",
            argument=argument,
            value=value,
        )
    return value


def require_at_least(value: int, minimum: int, argument: str) -> int:
    """Validate that an integer is at least ``minimum``.

    Raises:
        OutOfRangeError: If the value is below ``minimum``.
    """
    if value < minimum:
        raise OutOfRangeError(
            f"{argument} must be at least {minimum}, got {value}",
            argument=argument,
            value=value,
        )
    return value


def validate_id(record_id: int, current: int) -> int:
    """Validate an id about to be assigned to a record holding ``current``.

    Raises:
        OutOfRangeError: If the id is negative.
        ConflictError: If the record already holds a different id.
    """
    require_at_least(record_id, UNASSIGNED_ID, "id")
    if current not in (UNASSIGNED_ID, record_id):
        raise ConflictError(
            f"Record already has id {current}",
            argument="id",
            value=record_id,
        )
    return record_id


# =============================================================================
# Currency Denomination
# =============================================================================


class CurrencyDenomination(BaseModel):
    """One coin of a currency group.

    Attributes:
        id: Storage identity, 0 until persisted.
        name: Full coin name (e.g., 'Gold').
        short_name: Abbreviation (e.g., 'gp').
        hierarchy_level: Rank within the group, unique per group.
        exchange_rate: Multiplier converting this coin to base units.

    Example:
        >>> silver = CurrencyDenomination(
        ...     name="Silver", short_name="sp", hierarchy_level=2, exchange_rate=10
        ... )
        >>> silver.assign_id(7).id
        7
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        json_schema_extra={"description": "Single denomination of a currency group"},
    )

    id: int = Field(default=UNASSIGNED_ID, description="Storage id, 0 until persisted")
    name: str = Field(description="Full coin name")
    short_name: str = Field(description="Coin abbreviation")
    hierarchy_level: int = Field(description="Rank within the group (1 or more)")
    exchange_rate: int = Field(default=1, description="Value in base units (1 or more)")

    @field_validator("name", "short_name")
    @classmethod
    def validate_text(cls, value: str, info: ValidationInfo) -> str:
        """Reject empty or whitespace-only names."""
        return require_text(value, info.field_name)

    @field_validator("hierarchy_level")
    @classmethod
    def validate_hierarchy_level(cls, value: int) -> int:
        """Reject hierarchy levels below one."""
        return require_at_least(value, MIN_HIERARCHY_LEVEL, "hierarchy_level")

    @field_validator("exchange_rate")
    @classmethod
    def validate_exchange_rate(cls, value: int) -> int:
        """Reject exchange rates below one."""
        return require_at_least(value, MIN_EXCHANGE_RATE, "exchange_rate")

    @field_validator("id")
    @classmethod
    def validate_id_value(cls, value: int) -> int:
        """Reject negative ids."""
        return require_at_least(value, UNASSIGNED_ID, "id")

    @property
    def is_persisted(self) -> bool:
        """Whether the storage layer has assigned an id."""
        return self.id != UNASSIGNED_ID

    def assign_id(self, record_id: int) -> Self:
        """Set the storage id. Called by the storage layer on insert.

        Raises:
            OutOfRangeError: If the id is negative.
            ConflictError: If a different id was already assigned.
        """
        self.id = validate_id(record_id, self.id)
        return self

    def rename(self, name: str, short_name: str | None = None) -> Self:
        """Change the coin name and, optionally, its abbreviation.

        Both values are checked before either is applied.

        Raises:
            InvalidArgumentError: If a given name is empty.
        """
        require_text(name, "name")
        if short_name is not None:
            require_text(short_name, "short_name")
            self.short_name = short_name
        self.name = name
        return self

    def set_exchange_rate(self, exchange_rate: int) -> Self:
        """Change the exchange rate.

        Raises:
            OutOfRangeError: If the rate is below 1.
        """
        self.exchange_rate = exchange_rate
        return self

    def __str__(self) -> str:
        return f"{self.id}, {self.hierarchy_level}, {self.short_name}, {self.name}, {self.exchange_rate}"


# =============================================================================
# Currency Group
# =============================================================================


class CurrencyGroup(BaseModel):
    """A named set of denominations, unique by hierarchy level.

    Many treasures may reference one group. Denominations are kept in
    insertion order; ``ordered()`` gives the ascending-level display order.

    Attributes:
        id: Storage identity, 0 until persisted.
        name: Group name (e.g., 'Common Coinage').
        denominations: Member denominations; mutate through the methods.

    Example:
        >>> group = CurrencyGroup(name="Common Coinage")
        >>> group.add(CurrencyDenomination(
        ...     name="Gold", short_name="gp", hierarchy_level=1, exchange_rate=1))
        >>> group.get_by_level(1).name
        'Gold'
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"description": "Level-unique set of currency denominations"},
    )

    id: int = Field(default=UNASSIGNED_ID, description="Storage id, 0 until persisted")
    name: str = Field(description="Group name")
    denominations: list[CurrencyDenomination] = Field(
        default_factory=list,
        description="Member denominations, unique by hierarchy level",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Reject empty or whitespace-only group names."""
        return require_text(value, "name")

    @field_validator("id")
    @classmethod
    def validate_id_value(cls, value: int) -> int:
        """Reject negative ids."""
        return require_at_least(value, UNASSIGNED_ID, "id")

    @model_validator(mode="after")
    def validate_unique_levels(self) -> CurrencyGroup:
        """Ensure no two initial denominations share a hierarchy level.

        Raises:
            ConflictError: If a hierarchy level appears twice.
        """
        seen: set[int] = set()
        for denomination in self.denominations:
            if denomination.hierarchy_level in seen:
                raise ConflictError(
                    f"Denomination with level {denomination.hierarchy_level} already exists",
                    argument="hierarchy_level",
                    value=denomination.hierarchy_level,
                )
            seen.add(denomination.hierarchy_level)
        return self

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def levels(self) -> list[int]:
        """Hierarchy levels present in the group, ascending."""
        return sorted(d.hierarchy_level for d in self.denominations)

    @property
    def is_empty(self) -> bool:
        """Whether the group has no denominations."""
        return not self.denominations

    @property
    def is_persisted(self) -> bool:
        """Whether the storage layer has assigned an id."""
        return self.id != UNASSIGNED_ID

    def ordered(self) -> list[CurrencyDenomination]:
        """Denominations sorted by ascending hierarchy level."""
        return sorted(self.denominations, key=lambda d: d.hierarchy_level)

    def get_by_level(self, level: int) -> CurrencyDenomination | None:
        """Return the denomination at ``level``, or None."""
        return next((d for d in self.denominations if d.hierarchy_level == level), None)

    def get_by_name(self, name: str) -> CurrencyDenomination | None:
        """Return the denomination called ``name``, or None."""
        return next((d for d in self.denominations if d.name == name), None)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(self, denomination: CurrencyDenomination) -> None:
        """Add a denomination.

        Raises:
            InvalidArgumentError: If ``denomination`` is None.
            ConflictError: If its hierarchy level is already taken.
        """
        self._require_denomination(denomination)
        if self.get_by_level(denomination.hierarchy_level) is not None:
            raise ConflictError(
                f"Denomination with level {denomination.hierarchy_level} already exists",
                argument="hierarchy_level",
                value=denomination.hierarchy_level,
                details={"group": self.name},
            )
        self.denominations.append(denomination)

    def remove(self, denomination: CurrencyDenomination) -> bool:
        """Remove a denomination.

        Returns:
            True if it was in the group, False otherwise.

        Raises:
            InvalidArgumentError: If ``denomination`` is None.
        """
        self._require_denomination(denomination)
        for index, existing in enumerate(self.denominations):
            if existing is denomination or existing == denomination:
                del self.denominations[index]
                return True
        return False

    def remove_by_name(self, name: str) -> None:
        """Remove the denomination called ``name``.

        Raises:
            InvalidArgumentError: If ``name`` is empty.
            NotFoundError: If no denomination has that name.
        """
        require_text(name, "name")
        existing = self.get_by_name(name)
        if existing is None:
            raise NotFoundError(
                f"Denomination {name!r} does not exist",
                argument="name",
                value=name,
                details={"group": self.name},
            )
        self.denominations.remove(existing)

    def remove_by_id(self, record_id: int) -> bool:
        """Remove the first denomination with id ``record_id``.

        Returns:
            True if one was removed, False otherwise.
        """
        for index, existing in enumerate(self.denominations):
            if existing.id == record_id:
                del self.denominations[index]
                return True
        return False

    def update(self, denomination: CurrencyDenomination) -> CurrencyDenomination:
        """Replace the denomination with the same name by ``denomination``.

        The stored replacement keeps the original id.

        Returns:
            The stored replacement.

        Raises:
            InvalidArgumentError: If ``denomination`` is None.
            NotFoundError: If no denomination has that name.
            ConflictError: If the new level belongs to another denomination.
        """
        self._require_denomination(denomination)
        for index, existing in enumerate(self.denominations):
            if existing.name == denomination.name:
                break
        else:
            raise NotFoundError(
                f"Denomination {denomination.name!r} does not exist",
                argument="name",
                value=denomination.name,
                details={"group": self.name},
            )

        holder = self.get_by_level(denomination.hierarchy_level)
        if holder is not None and holder is not existing:
            raise ConflictError(
                f"Denomination with level {denomination.hierarchy_level} already exists",
                argument="hierarchy_level",
                value=denomination.hierarchy_level,
                details={"group": self.name},
            )

        replacement = denomination.model_copy(update={"id": existing.id})
        self.denominations[index] = replacement
        return replacement

    def clear(self) -> None:
        """Remove every denomination."""
        self.denominations.clear()

    def rename(self, new_name: str) -> None:
        """Change the group name.

        Raises:
            InvalidArgumentError: If ``new_name`` is empty.
        """
        self.name = require_text(new_name, "name")

    def assign_id(self, record_id: int) -> Self:
        """Set the storage id. Called by the storage layer on insert.

        Raises:
            OutOfRangeError: If the id is negative.
            ConflictError: If a different id was already assigned.
        """
        self.id = validate_id(record_id, self.id)
        return self

    @staticmethod
    def _require_denomination(denomination: CurrencyDenomination | None) -> None:
        if not isinstance(denomination, CurrencyDenomination):
            raise InvalidArgumentError(
                "denomination must be a CurrencyDenomination",
                argument="denomination",
                value=denomination,
            )


__all__ = [
    "require_text",
    "require_at_least",
    "CurrencyDenomination",
    "CurrencyGroup",
]
