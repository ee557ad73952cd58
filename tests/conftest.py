"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the LifeQuest test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from lifequest.core.config import EngineSettings
from lifequest.models import (
    AbilitySnapshot,
    EffectSources,
    ItemRecord,
    RollRequest,
    TraitRecord,
)


if TYPE_CHECKING:
    from collections.abc import Callable, Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from lifequest.core.config import clear_settings_cache

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
        "LIFEQUEST_DEBUG": "true",
        "LIFEQUEST_LOG_LEVEL": "DEBUG",
        "LIFEQUEST_ENGINE_XP_STRATEGY": "high_risk",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def engine_settings() -> EngineSettings:
    """Provide engine settings with every default."""
    return EngineSettings()


# =============================================================================
# Ability Fixtures
# =============================================================================


@pytest.fixture
def sample_ability_values() -> dict[str, tuple[int, int, str]]:
    """Provide ``name -> (base, current, core_stat)`` tuples.

    Returns:
        A small character spread across all four core stats.
    """
    return {
        "creation": (3, 3, "mind"),
        "research": (2, 2, "mind"),
        "endurance": (1, 1, "body"),
        "empathy": (2, 2, "heart"),
        "drive": (1, 1, "soul"),
    }


@pytest.fixture
def snapshot(sample_ability_values: dict[str, tuple[int, int, str]]) -> AbilitySnapshot:
    """Provide an ability snapshot where ``drive`` is 1."""
    return AbilitySnapshot.from_values(sample_ability_values)


@pytest.fixture
def make_snapshot(
    sample_ability_values: dict[str, tuple[int, int, str]],
) -> Callable[..., AbilitySnapshot]:
    """Factory for snapshots with some current values overridden.

    Returns:
        A callable taking ``name=current`` keyword overrides.
    """

    def _make(**current: int) -> AbilitySnapshot:
        values = {
            name: (base, current.get(name, value), core)
            for name, (base, value, core) in sample_ability_values.items()
        }
        return AbilitySnapshot.from_values(values)

    return _make


# =============================================================================
# Source Fixtures
# =============================================================================


@pytest.fixture
def artist_trait_data() -> dict[str, Any]:
    """Provide a stored trait row granting +2 creation while drive > 0."""
    return {
        "id": "trait-artist",
        "trait_name": "ARTIST",
        "trait_type": "feature",
        "mechanical_effect": [
            {
                "type": "stat_modifier",
                "stat_modifiers": [{"stat": "creation", "modifier": 2}],
                "condition": "drive > 0",
            }
        ],
        "is_active": True,
    }


@pytest.fixture
def artist_trait(artist_trait_data: dict[str, Any]) -> TraitRecord:
    """Provide the ARTIST trait."""
    return TraitRecord.model_validate(artist_trait_data)


@pytest.fixture
def library_card() -> ItemRecord:
    """Provide an item granting advantage +1 on research, ability checks only."""
    return ItemRecord.model_validate(
        {
            "id": "item-library-card",
            "item_name": "Library Card",
            "item_type": "tool",
            "passive_effect": [
                {
                    "type": "advantage",
                    "applies_to": ["ability_checks"],
                    "affected_stats": ["research"],
                    "modifier": 1,
                }
            ],
            "is_equipped": True,
        }
    )


@pytest.fixture
def noisy_headphones() -> ItemRecord:
    """Provide an item imposing disadvantage on research in every context."""
    return ItemRecord.model_validate(
        {
            "id": "item-headphones",
            "item_name": "Broken Headphones",
            "item_type": "debuff",
            "passive_effect": [
                {"type": "disadvantage", "affected_stats": ["research"]},
            ],
        }
    )


@pytest.fixture
def artist_sources(artist_trait: TraitRecord) -> EffectSources:
    """Provide sources holding only the ARTIST trait."""
    return EffectSources(traits=[artist_trait])


@pytest.fixture
def creation_check() -> RollRequest:
    """Provide an ability check on creation with a die of 12 and no DC."""
    return RollRequest(character_id="char-1", die_value=12, ability_name="creation", base_xp=10)
