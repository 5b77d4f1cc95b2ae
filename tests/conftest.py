"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the HoL core test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from hol_core.engine.dice import DiceRoller
from hol_core.models import CurrencyDenomination, CurrencyGroup, Treasure
from hol_core.storage.database import CurrencyRepository


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from hol_core.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "HOL_DEBUG": "true",
        "HOL_LOG_LEVEL": "DEBUG",
        "HOL_DICE_SEED": "1234",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Currency Fixtures
# =============================================================================


@pytest.fixture
def gold() -> CurrencyDenomination:
    """Provide the level-1 base coin."""
    return CurrencyDenomination(name="Gold", short_name="gp", hierarchy_level=1, exchange_rate=1)


@pytest.fixture
def silver() -> CurrencyDenomination:
    """Provide the level-2 coin."""
    return CurrencyDenomination(name="Silver", short_name="sp", hierarchy_level=2, exchange_rate=10)


@pytest.fixture
def copper() -> CurrencyDenomination:
    """Provide the level-3 coin."""
    return CurrencyDenomination(
        name="Copper", short_name="cp", hierarchy_level=3, exchange_rate=100
    )


@pytest.fixture
def coinage(
    gold: CurrencyDenomination,
    silver: CurrencyDenomination,
    copper: CurrencyDenomination,
) -> CurrencyGroup:
    """Provide a three-coin currency group (Gold, Silver, Copper).

    Returns:
        Unsaved group with levels 1, 2 and 3.
    """
    group = CurrencyGroup(name="Common Coinage")
    group.add(gold)
    group.add(silver)
    group.add(copper)
    return group


@pytest.fixture
def purse(coinage: CurrencyGroup) -> Treasure:
    """Provide a treasure holding 2 Gold, 5 Silver and 7 Copper."""
    return Treasure(currency_group=coinage).add_coins(1, 2).add_coins(2, 5).add_coins(3, 7)


# =============================================================================
# Engine and Storage Fixtures
# =============================================================================


@pytest.fixture
def dice_roller() -> DiceRoller:
    """Provide a seeded dice roller."""
    return DiceRoller(seed=42)


@pytest.fixture
def repository(tmp_path: Path) -> CurrencyRepository:
    """Provide a repository backed by a temporary SQLite file."""
    return CurrencyRepository(tmp_path / "test.db")
