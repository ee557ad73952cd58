"""Enumeration types for the LifeQuest progression engine.

This module defines the closed vocabularies used throughout the effect
engine: core stats, effect kinds and contexts, source types, roll types,
outcomes, day states and context-expression operators.
"""

from __future__ import annotations

from enum import StrEnum


class CoreStat(StrEnum):
    """The four top-level categories that group abilities."""

    BODY = "body"
    MIND = "mind"
    HEART = "heart"
    SOUL = "soul"

    @property
    def display_name(self) -> str:
        """Get the capitalised stat name (e.g., 'Body')."""
        return self.value.capitalize()


class EffectType(StrEnum):
    """Kind of a normalized effect."""

    STAT_MODIFIER = "stat_modifier"
    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"
    CUSTOM = "custom"

    @classmethod
    def coerce(cls, value: str | None) -> EffectType:
        """Map a stored type string onto an effect type.

        Unknown or missing types fall back to CUSTOM, matching how stored
        records with free-form types are treated.

        Args:
            value: Raw type string from storage.

        Returns:
            The matching EffectType, or CUSTOM.
        """
        if value is None:
            return cls.CUSTOM
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.CUSTOM

    @property
    def is_flag(self) -> bool:
        """Whether this kind sets advantage or disadvantage."""
        return self in (EffectType.ADVANTAGE, EffectType.DISADVANTAGE)


class EffectContext(StrEnum):
    """Resolution contexts an effect can be restricted to.

    Values are the storage spellings. The short spellings
    (``ability_check``, ``passive`` ...) are accepted as aliases.
    """

    PASSIVE = "passive_modifier"
    ABILITY_CHECK = "ability_checks"
    SAVING_THROW = "saving_throws"
    ATTACK = "attack_rolls"
    DAMAGE = "damage_rolls"

    @classmethod
    def _missing_(cls, value: object) -> EffectContext | None:
        if not isinstance(value, str):
            return None
        aliases = {
            "passive": cls.PASSIVE,
            "ability_check": cls.ABILITY_CHECK,
            "saving_throw": cls.SAVING_THROW,
            "attack": cls.ATTACK,
            "attack_roll": cls.ATTACK,
            "damage": cls.DAMAGE,
            "damage_roll": cls.DAMAGE,
        }
        return aliases.get(value.strip().lower())


class EffectSourceType(StrEnum):
    """Where a normalized effect came from (for UI attribution only)."""

    TRAIT = "trait"
    ITEM = "item"
    CUSTOM = "custom"
    DAY_STATE = "day_state"
    BLESSING = "blessing"
    CURSE = "curse"


class TraitType(StrEnum):
    """Category of a character trait."""

    FEATURE = "feature"
    FLAW = "flaw"
    PASSIVE = "passive"


class ItemType(StrEnum):
    """Category of an inventory item."""

    TOOL = "tool"
    COMFORT = "comfort"
    CONSUMABLE = "consumable"
    DEBUFF = "debuff"


class DayState(StrEnum):
    """Daily environmental condition.

    Levels:
        DIFFICULT: Disadvantage on the affected core stats' abilities.
        NORMAL: No effect.
        INSPIRATION: Advantage on the selected core stat's abilities.
        CRITICAL: Doubles XP rewards; no modifier effect.
    """

    DIFFICULT = "difficult"
    NORMAL = "normal"
    INSPIRATION = "inspiration"
    CRITICAL = "critical"


class RollType(StrEnum):
    """Category of a roll request."""

    ABILITY_CHECK = "ability_check"
    SAVING_THROW = "saving_throw"
    ATTACK = "attack"
    DAMAGE = "damage"
    INITIATIVE = "initiative"

    @property
    def action_type(self) -> str:
        """Get the audit-log action type this roll is recorded under."""
        action_types = {
            RollType.ABILITY_CHECK: "skill_check",
            RollType.SAVING_THROW: "saving_throw",
            RollType.ATTACK: "attack",
            RollType.DAMAGE: "damage",
            RollType.INITIATIVE: "skill_check",
        }
        return action_types[self]


class RollOutcome(StrEnum):
    """Outcome of a resolved roll."""

    CRITICAL_SUCCESS = "critical_success"
    SUCCESS = "success"
    FAILURE = "failure"
    CRITICAL_FAILURE = "critical_failure"

    @property
    def is_success(self) -> bool:
        """Whether the outcome counts as a success."""
        return self in (RollOutcome.CRITICAL_SUCCESS, RollOutcome.SUCCESS)


class LogicalOperator(StrEnum):
    """Operators of a context expression node."""

    AND = "AND"
    OR = "OR"
    NOT = "NOT"


class TagCategory(StrEnum):
    """Tag categories a context expression leaf can reference."""

    ROLL_TYPE = "roll_type"
    ABILITY = "ability"
    CORE_STAT = "core_stat"
    ORGANIZATIONAL = "organizational"


class ModifierTag(StrEnum):
    """Presentation tags describing how a roll was modified."""

    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"
    FLAT = "flat"
    CRITICAL_SUCCESS = "critical_success"
    CRITICAL_FAILURE = "critical_failure"


class ActiveModifierType(StrEnum):
    """Roll-time modifier kinds carried by unified effect records."""

    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"
    BONUS = "bonus"


__all__ = [
    "CoreStat",
    "EffectType",
    "EffectContext",
    "EffectSourceType",
    "TraitType",
    "ItemType",
    "DayState",
    "RollType",
    "RollOutcome",
    "LogicalOperator",
    "TagCategory",
    "ModifierTag",
    "ActiveModifierType",
]
