"""SQLite persistence for currency groups and treasures.

This is the storage boundary of the currency ledger:
- Currency groups and their denominations are stored as rows; ids are
  assigned to the domain objects on insert.
- Treasures store their coin quantities as a JSON column and reference
  their group by id.

Groups are cached per repository, so every treasure loaded through one
repository shares the same CurrencyGroup instance for a given group id.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from hol_core.core.config import get_settings
from hol_core.core.exceptions import PersistenceError
from hol_core.core.logging import get_logger
from hol_core.models.currency import CurrencyDenomination, CurrencyGroup
from hol_core.models.treasure import Treasure
from hol_core.storage.codec import decode_coin_quantities, encode_coin_quantities


logger = get_logger(__name__)


# =============================================================================
# Row Records
# =============================================================================


@dataclass
class DenominationRow:
    """Stored denomination.

    Attributes:
        id: Primary key.
        group_id: Owning currency group.
        name: Full coin name.
        short_name: Coin abbreviation.
        hierarchy_level: Rank within the group.
        exchange_rate: Value in base units.
    """

    id: int
    group_id: int
    name: str
    short_name: str
    hierarchy_level: int
    exchange_rate: int

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> DenominationRow:
        """Create from database row."""
        return cls(
            id=row[0],
            group_id=row[1],
            name=row[2],
            short_name=row[3],
            hierarchy_level=row[4],
            exchange_rate=row[5],
        )

    def to_domain(self) -> CurrencyDenomination:
        """Rebuild the domain denomination."""
        return CurrencyDenomination(
            id=self.id,
            name=self.name,
            short_name=self.short_name,
            hierarchy_level=self.hierarchy_level,
            exchange_rate=self.exchange_rate,
        )


@dataclass
class TreasureRow:
    """Stored treasure.

    Attributes:
        id: Primary key.
        currency_group_id: Referenced currency group.
        coin_quantities_json: Encoded coin quantities.
    """

    id: int
    currency_group_id: int
    coin_quantities_json: str

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> TreasureRow:
        """Create from database row."""
        return cls(id=row[0], currency_group_id=row[1], coin_quantities_json=row[2])


# =============================================================================
# Repository
# =============================================================================


class CurrencyRepository:
    """SQLite repository for currency groups and treasures.

    Database location defaults to ``HOL_DATABASE_PATH``.
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize the repository.

        Args:
            db_path: Path to database file. If None, uses the configured path.
        """
        if db_path is None:
            self.db_path = get_settings().storage.database_path
        else:
            self.db_path = Path(db_path)

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._groups: dict[int, CurrencyGroup] = {}

        self._init_schema()

        logger.info("Currency repository initialized", db_path=str(self.db_path))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup."""
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS currency_groups (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS denominations (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    group_id INTEGER NOT NULL
                        REFERENCES currency_groups(id) ON DELETE CASCADE,
                    name TEXT NOT NULL,
                    short_name TEXT NOT NULL,
                    hierarchy_level INTEGER NOT NULL,
                    exchange_rate INTEGER NOT NULL,
                    UNIQUE (group_id, hierarchy_level)
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS treasures (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    currency_group_id INTEGER NOT NULL
                        REFERENCES currency_groups(id) ON DELETE RESTRICT,
                    coin_quantities_json TEXT NOT NULL
                )
            """)

            cursor.execute("""
                INSERT OR REPLACE INTO schema_version (version) VALUES (?)
            """, (self.SCHEMA_VERSION,))

    # =========================================================================
    # Currency Group Operations
    # =========================================================================

    def save_currency_group(self, group: CurrencyGroup) -> CurrencyGroup:
        """Insert or update a group and its denominations.

        New records receive their ids through ``assign_id``. Denominations
        removed from the group since the last save are deleted.

        Args:
            group: The group to store.

        Returns:
            The same group, with ids assigned.

        Raises:
            PersistenceError: If the group no longer exists or a row
                violates a table constraint.
        """
        try:
            with self._get_connection() as conn:
                new_ids = self._write_currency_group(conn.cursor(), group)
        except sqlite3.IntegrityError as exc:
            raise PersistenceError(
                f"Cannot store currency group: {exc}",
                table="denominations",
                record_id=group.id,
            ) from exc

        for record, record_id in new_ids:
            record.assign_id(record_id)

        self._groups[group.id] = group
        logger.info(
            "Currency group saved",
            group_id=group.id,
            name=group.name,
            denominations=len(group.denominations),
        )
        return group

    def _write_currency_group(
        self,
        cursor: sqlite3.Cursor,
        group: CurrencyGroup,
    ) -> list[tuple[CurrencyGroup | CurrencyDenomination, int]]:
        """Write the group row and sync its denomination rows.

        Ids of inserted rows are returned rather than assigned, so a rolled
        back save leaves the domain objects untouched.

        Returns:
            Pairs of (new record, id it was stored under).
        """
        new_ids: list[tuple[CurrencyGroup | CurrencyDenomination, int]] = []
        group_id = group.id
        if group.is_persisted:
            cursor.execute(
                "UPDATE currency_groups SET name = ? WHERE id = ?",
                (group.name, group_id),
            )
            if cursor.rowcount == 0:
                raise PersistenceError(
                    "Currency group does not exist",
                    table="currency_groups",
                    record_id=group_id,
                )
        else:
            cursor.execute("INSERT INTO currency_groups (name) VALUES (?)", (group.name,))
            group_id = cursor.lastrowid
            new_ids.append((group, group_id))

        kept = [d for d in group.denominations if d.is_persisted]
        if kept:
            placeholders = ", ".join("?" for _ in kept)
            cursor.execute(
                f"DELETE FROM denominations WHERE group_id = ? AND id NOT IN ({placeholders})",
                (group_id, *(d.id for d in kept)),
            )
        else:
            cursor.execute("DELETE FROM denominations WHERE group_id = ?", (group_id,))
        # Park kept rows on unique negative levels so permuted levels can be written
        cursor.execute(
            "UPDATE denominations SET hierarchy_level = -id WHERE group_id = ?",
            (group_id,),
        )
        for denomination in kept:
            cursor.execute("""
                UPDATE denominations
                SET name = ?, short_name = ?, hierarchy_level = ?, exchange_rate = ?
                WHERE id = ? AND group_id = ?
            """, (denomination.name, denomination.short_name,
                  denomination.hierarchy_level, denomination.exchange_rate,
                  denomination.id, group_id))

        for denomination in group.denominations:
            if not denomination.is_persisted:
                cursor.execute("""
                    INSERT INTO denominations
                    (group_id, name, short_name, hierarchy_level, exchange_rate)
                    VALUES (?, ?, ?, ?, ?)
                """, (group_id, denomination.name, denomination.short_name,
                      denomination.hierarchy_level, denomination.exchange_rate))
                new_ids.append((denomination, cursor.lastrowid))

        return new_ids

    def get_currency_group(self, group_id: int) -> CurrencyGroup | None:
        """Get a group by id.

        Repeated lookups return the same instance.

        Args:
            group_id: Group id.

        Returns:
            The group if found, None otherwise.
        """
        cached = self._groups.get(group_id)
        if cached is not None:
            return cached

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id, name FROM currency_groups WHERE id = ?", (group_id,))
            row = cursor.fetchone()
            if row is None:
                return None

            cursor.execute("""
                SELECT id, group_id, name, short_name, hierarchy_level, exchange_rate
                FROM denominations WHERE group_id = ? ORDER BY hierarchy_level
            """, (group_id,))
            denominations = [
                DenominationRow.from_row(tuple(r)).to_domain() for r in cursor.fetchall()
            ]

        group = CurrencyGroup(id=row[0], name=row[1], denominations=denominations)
        self._groups[group.id] = group
        return group

    def get_all_currency_groups(self) -> list[CurrencyGroup]:
        """Get every stored group, ordered by id."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id FROM currency_groups ORDER BY id")
            group_ids = [row[0] for row in cursor.fetchall()]

        return [group for gid in group_ids if (group := self.get_currency_group(gid)) is not None]

    def delete_currency_group(self, group_id: int) -> bool:
        """Delete a group and its denominations.

        Args:
            group_id: Id of the group to delete.

        Returns:
            True if deleted, False if not found.

        Raises:
            PersistenceError: If treasures still reference the group.
        """
        try:
            with self._get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("DELETE FROM currency_groups WHERE id = ?", (group_id,))
                deleted = cursor.rowcount > 0
        except sqlite3.IntegrityError as exc:
            raise PersistenceError(
                "Currency group is still referenced by treasures",
                table="currency_groups",
                record_id=group_id,
            ) from exc

        self._groups.pop(group_id, None)
        if deleted:
            logger.info("Currency group deleted", group_id=group_id)
        return deleted

    # =========================================================================
    # Treasure Operations
    # =========================================================================

    def save_treasure(self, treasure: Treasure) -> Treasure:
        """Insert or update a treasure.

        Args:
            treasure: The treasure to store. Its group must be saved first.

        Returns:
            The same treasure, with its id assigned.

        Raises:
            PersistenceError: If the group has not been saved.
        """
        if not treasure.currency_group.is_persisted:
            raise PersistenceError(
                "Save the currency group before its treasures",
                table="treasures",
                details={"group": treasure.currency_group.name},
            )

        payload = encode_coin_quantities(treasure.coin_quantities)
        with self._get_connection() as conn:
            cursor = conn.cursor()
            if treasure.id:
                cursor.execute("""
                    UPDATE treasures SET currency_group_id = ?, coin_quantities_json = ?
                    WHERE id = ?
                """, (treasure.currency_group_id, payload, treasure.id))
                if cursor.rowcount == 0:
                    raise PersistenceError(
                        "Treasure does not exist",
                        table="treasures",
                        record_id=treasure.id,
                    )
            else:
                cursor.execute("""
                    INSERT INTO treasures (currency_group_id, coin_quantities_json)
                    VALUES (?, ?)
                """, (treasure.currency_group_id, payload))
                treasure.assign_id(cursor.lastrowid)

        logger.info(
            "Treasure saved",
            treasure_id=treasure.id,
            currency_group_id=treasure.currency_group_id,
            total_base_units=treasure.get_total_value_in_base_units(),
        )
        return treasure

    def get_treasure(self, treasure_id: int) -> Treasure | None:
        """Get a treasure by id, bound to the shared group instance.

        Args:
            treasure_id: Treasure id.

        Returns:
            The treasure if found, None otherwise.

        Raises:
            PersistenceError: If the referenced group is missing.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT id, currency_group_id, coin_quantities_json
                FROM treasures WHERE id = ?
            """, (treasure_id,))
            row = cursor.fetchone()

        if row is None:
            return None

        record = TreasureRow.from_row(tuple(row))
        group = self.get_currency_group(record.currency_group_id)
        if group is None:
            raise PersistenceError(
                "Treasure references a missing currency group",
                table="treasures",
                record_id=record.id,
                details={"currency_group_id": record.currency_group_id},
            )
        return Treasure(
            id=record.id,
            currency_group=group,
            coin_quantities=decode_coin_quantities(record.coin_quantities_json),
        )

    def delete_treasure(self, treasure_id: int) -> bool:
        """Delete a treasure.

        Returns:
            True if deleted, False if not found.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM treasures WHERE id = ?", (treasure_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Treasure deleted", treasure_id=treasure_id)
        return deleted


# =============================================================================
# Singleton Instance
# =============================================================================


_repository_instance: CurrencyRepository | None = None


def get_repository() -> CurrencyRepository:
    """Get the global repository instance."""
    global _repository_instance  # noqa: PLW0603

    if _repository_instance is None:
        _repository_instance = CurrencyRepository()

    return _repository_instance


__all__ = [
    "DenominationRow",
    "TreasureRow",
    "CurrencyRepository",
    "get_repository",
]
