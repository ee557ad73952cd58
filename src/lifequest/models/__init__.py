"""Pydantic V2 schemas for the LifeQuest progression engine.

Submodules:
    enums: Closed vocabularies (CoreStat, EffectType, EffectContext, DayState, ...)
    abilities: Ability values and the immutable ability snapshot.
    context: Context expression trees and the tags of a roll.
    sources: Effect source records (trait, item, temporary, day state, unified).
    effects: The normalized Effect and breakdown rows.
    rolls: Roll request and result records.
    progression: Leveling, core stat and day-state rules.

Example:
    >>> from lifequest.models import AbilitySnapshot, RollRequest, RollType
    >>> snapshot = AbilitySnapshot.from_values({"creation": (3, 3, "mind")})
    >>> request = RollRequest(character_id="c-1", die_value=12, ability_name="creation")
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from lifequest.models.enums import (
    ActiveModifierType,
    CoreStat,
    DayState,
    EffectContext,
    EffectSourceType,
    EffectType,
    ItemType,
    LogicalOperator,
    ModifierTag,
    RollOutcome,
    RollType,
    TagCategory,
    TraitType,
)

# =============================================================================
# Abilities & Context
# =============================================================================
from lifequest.models.abilities import AbilitySnapshot, AbilityValue
from lifequest.models.context import (
    ContextExpression,
    CurrentTags,
    OrganizationalTag,
    TagReference,
)

# =============================================================================
# Sources & Effects
# =============================================================================
from lifequest.models.sources import (
    ActiveModifier,
    DayStateRecord,
    EffectEntry,
    EffectSources,
    ItemRecord,
    PassiveModifier,
    StatModifier,
    TemporaryEffectRecord,
    TraitRecord,
    UnifiedEffectRecord,
)
from lifequest.models.effects import BreakdownEntry, Effect, ParsedCondition

# =============================================================================
# Rolls & Progression
# =============================================================================
from lifequest.models.rolls import AppliedEffects, RollRequest, RollResult
from lifequest.models.progression import (
    calculate_max_hit_dice,
    calculate_modifier,
    core_stat_value,
    determine_day_state,
    group_abilities_by_core_stat,
    recalculate_core_stats,
    xp_to_next_level,
)


__all__ = [
    # === Enumerations ===
    "ActiveModifierType",
    "CoreStat",
    "DayState",
    "EffectContext",
    "EffectSourceType",
    "EffectType",
    "ItemType",
    "LogicalOperator",
    "ModifierTag",
    "RollOutcome",
    "RollType",
    "TagCategory",
    "TraitType",
    # === Abilities & Context ===
    "AbilitySnapshot",
    "AbilityValue",
    "ContextExpression",
    "CurrentTags",
    "OrganizationalTag",
    "TagReference",
    # === Sources & Effects ===
    "ActiveModifier",
    "DayStateRecord",
    "EffectEntry",
    "EffectSources",
    "ItemRecord",
    "PassiveModifier",
    "StatModifier",
    "TemporaryEffectRecord",
    "TraitRecord",
    "UnifiedEffectRecord",
    "BreakdownEntry",
    "Effect",
    "ParsedCondition",
    # === Rolls & Progression ===
    "AppliedEffects",
    "RollRequest",
    "RollResult",
    "calculate_max_hit_dice",
    "calculate_modifier",
    "core_stat_value",
    "determine_day_state",
    "group_abilities_by_core_stat",
    "recalculate_core_stats",
    "xp_to_next_level",
]
