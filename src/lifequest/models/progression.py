"""Character progression rules.

This module contains the static rules for leveling, core stat values and
the daily day-state roll. Abilities are grouped under four core stats whose
value drifts with the abilities' movement away from their initial values.
"""

from __future__ import annotations

import math

from lifequest.core.constants import (
    CRITICAL_DAY_ROLL,
    DIFFICULT_DAY_MAX_ROLL,
    FIRST_LEVEL_XP,
    INSPIRATION_DAY_MIN_ROLL,
    XP_PER_LEVEL_STEP,
)
from lifequest.models.abilities import AbilitySnapshot, AbilityValue
from lifequest.models.enums import CoreStat, DayState

# =============================================================================
# XP Thresholds
# =============================================================================


def xp_to_next_level(current_level: int) -> int:
    """Get the total XP needed to leave the given level.

    Level 1 needs 10 XP; each later level adds five times its own number:
    level 2 needs 20, level 3 needs 35, level 4 needs 55.

    Args:
        current_level: The character's current level (1 or higher).

    Returns:
        XP threshold for the next level.
    """
    if current_level <= 1:
        return FIRST_LEVEL_XP
    total = FIRST_LEVEL_XP
    for level in range(2, current_level + 1):
        total += XP_PER_LEVEL_STEP * level
    return total


# =============================================================================
# Core Stats
# =============================================================================


def calculate_modifier(value: int) -> int:
    """Calculate a d20-style modifier: floor((value - 10) / 2).

    Example:
        >>> calculate_modifier(7)
        -2
    """
    return math.floor((value - 10) / 2)


def group_abilities_by_core_stat(
    snapshot: AbilitySnapshot,
) -> dict[CoreStat, dict[str, AbilityValue]]:
    """Group a snapshot's abilities under their core stats."""
    grouped: dict[CoreStat, dict[str, AbilityValue]] = {}
    for name, value in snapshot.abilities.items():
        grouped.setdefault(value.core_stat, {})[name] = value
    return grouped


def core_stat_value(base_value: int, abilities: list[AbilityValue]) -> int:
    """Core stat value = base + sum of each ability's delta from its initial value."""
    return base_value + sum(ability.delta_from_initial for ability in abilities)


def recalculate_core_stats(
    base_values: dict[CoreStat, int],
    snapshot: AbilitySnapshot,
) -> dict[CoreStat, tuple[int, int]]:
    """Recalculate every core stat.

    Args:
        base_values: Base value of each core stat.
        snapshot: Current ability snapshot.

    Returns:
        Mapping of core stat to ``(current_value, modifier)``.
    """
    grouped = group_abilities_by_core_stat(snapshot)
    result: dict[CoreStat, tuple[int, int]] = {}
    for stat, base in base_values.items():
        value = core_stat_value(base, list(grouped.get(stat, {}).values()))
        result[stat] = (value, calculate_modifier(value))
    return result


def calculate_max_hit_dice(body_value: int) -> int:
    """Maximum hit dice: ceil(body / 2.5)."""
    return math.ceil(body_value / 2.5)


# =============================================================================
# Day State
# =============================================================================


def determine_day_state(roll_value: int) -> DayState:
    """Map the daily d20 roll onto a day state.

    A natural 20 is a critical day, 16 or more is inspiration, 5 or less is
    difficult and everything else is normal.
    """
    if roll_value == CRITICAL_DAY_ROLL:
        return DayState.CRITICAL
    if roll_value >= INSPIRATION_DAY_MIN_ROLL:
        return DayState.INSPIRATION
    if roll_value <= DIFFICULT_DAY_MAX_ROLL:
        return DayState.DIFFICULT
    return DayState.NORMAL
