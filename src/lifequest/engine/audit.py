"""Audit-log records and presentation tags for resolved rolls.

These helpers sit on the consumer side of the engine: they turn a RollResult
into the row a persistence collaborator writes, and into the tag set a UI
shows next to it. Nothing here feeds back into resolution.

The tag builder is the one place where simultaneous advantage and
disadvantage collapse into a flat roll. RollResult itself always reports
both flags as they are.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from lifequest.core.constants import NATURAL_CRITICAL_FAILURE, NATURAL_CRITICAL_SUCCESS
from lifequest.models.context import OrganizationalTag
from lifequest.models.effects import Effect
from lifequest.models.enums import EffectSourceType, ModifierTag
from lifequest.models.rolls import RollResult


# =============================================================================
# Roll Tags
# =============================================================================


class SourceTag(BaseModel):
    """A trait, item or effect attached to a logged roll."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    is_user_added: bool = True


class RollTags(BaseModel):
    """Structured tags stored alongside an audit-log row."""

    model_config = ConfigDict(frozen=True)

    modifiers: tuple[ModifierTag, ...] = Field(default_factory=tuple)
    traits: tuple[SourceTag, ...] = Field(default_factory=tuple)
    items: tuple[SourceTag, ...] = Field(default_factory=tuple)
    effects: tuple[SourceTag, ...] = Field(default_factory=tuple)
    organizational: tuple[OrganizationalTag, ...] = Field(default_factory=tuple)
    roll_type: str | None = None
    ability: str | None = None
    core_stat: str | None = None
    dc: int | None = None


def _auto_tags(
    user_tags: tuple[SourceTag, ...],
    effects: tuple[Effect, ...],
    source_type: EffectSourceType,
) -> tuple[SourceTag, ...]:
    known = {tag.id for tag in user_tags}
    detected: list[SourceTag] = []
    for effect in effects:
        if effect.source_type is not source_type or effect.id in known:
            continue
        known.add(effect.id)
        detected.append(SourceTag(id=effect.id, name=effect.source_label, is_user_added=False))
    return (*user_tags, *detected)


def _modifier_tags(
    result: RollResult, user_modifiers: tuple[ModifierTag, ...]
) -> tuple[ModifierTag, ...]:
    modifiers = list(dict.fromkeys(user_modifiers))

    def add(tag: ModifierTag) -> None:
        if tag not in modifiers:
            modifiers.append(tag)

    if result.has_advantage:
        add(ModifierTag.ADVANTAGE)
    if result.has_disadvantage:
        add(ModifierTag.DISADVANTAGE)
    if result.die_value == NATURAL_CRITICAL_SUCCESS:
        add(ModifierTag.CRITICAL_SUCCESS)
    if result.die_value == NATURAL_CRITICAL_FAILURE:
        add(ModifierTag.CRITICAL_FAILURE)

    if ModifierTag.ADVANTAGE in modifiers and ModifierTag.DISADVANTAGE in modifiers:
        cancelled = (ModifierTag.ADVANTAGE, ModifierTag.DISADVANTAGE)
        modifiers = [m for m in modifiers if m not in cancelled]
        add(ModifierTag.FLAT)
    return tuple(modifiers)


def build_roll_tags(result: RollResult, user_tags: RollTags | None = None) -> RollTags:
    """Build presentation tags for a resolved roll.

    Traits, items and custom effects among the result's relevant effects are
    added as auto-detected tags unless the user already tagged them. The die
    adds critical tags, and simultaneous advantage and disadvantage collapse
    to ``flat``.

    Args:
        result: The resolved roll.
        user_tags: Tags the user chose; may be None.

    Returns:
        The completed tag set.
    """
    user_tags = user_tags or RollTags()
    effects = result.relevant_effects
    return RollTags(
        modifiers=_modifier_tags(result, user_tags.modifiers),
        traits=_auto_tags(user_tags.traits, effects, EffectSourceType.TRAIT),
        items=_auto_tags(user_tags.items, effects, EffectSourceType.ITEM),
        effects=_auto_tags(user_tags.effects, effects, EffectSourceType.CUSTOM),
        organizational=user_tags.organizational,
        roll_type=result.roll_type.value,
        ability=result.ability_used,
        core_stat=user_tags.core_stat,
        dc=result.dc,
    )


# =============================================================================
# Action Log
# =============================================================================


class ModifierRow(BaseModel):
    """A breakdown row as stored in the audit log."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: int


class ActionLogEntry(BaseModel):
    """One audit-log row for a resolved roll."""

    model_config = ConfigDict(frozen=True)

    character_id: str
    action_date: date
    action_time: datetime
    action_type: str
    roll_type: str
    ability_used: str | None = None
    roll_value: int
    modifier_value: int
    modifier_breakdown: tuple[ModifierRow, ...] = Field(default_factory=tuple)
    total_value: int
    difficulty_class: int | None = None
    had_advantage: bool = False
    had_disadvantage: bool = False
    success: bool
    xp_awarded: int = 0
    notes: str | None = None
    tags: RollTags | None = None


def to_action_log_entry(
    result: RollResult,
    *,
    at: datetime,
    notes: str | None = None,
    tags: RollTags | None = None,
) -> ActionLogEntry:
    """Map a resolved roll onto an audit-log row.

    Args:
        result: The resolved roll.
        at: When the roll was logged; the engine itself never reads a clock.
        notes: Optional free text.
        tags: Optional tags, usually from ``build_roll_tags``.

    Returns:
        The row to persist.
    """
    action_type = result.roll_type.action_type
    return ActionLogEntry(
        character_id=result.character_id,
        action_date=at.date(),
        action_time=at,
        action_type=action_type,
        roll_type=action_type,
        ability_used=result.ability_used,
        roll_value=result.die_value,
        modifier_value=result.total_modifier,
        modifier_breakdown=tuple(
            ModifierRow(label=row.source, value=row.value) for row in result.breakdown
        ),
        total_value=result.total_value,
        difficulty_class=result.dc,
        had_advantage=result.has_advantage,
        had_disadvantage=result.has_disadvantage,
        success=result.success,
        xp_awarded=result.xp_awarded,
        notes=notes,
        tags=tags,
    )


__all__ = [
    "SourceTag",
    "RollTags",
    "build_roll_tags",
    "ModifierRow",
    "ActionLogEntry",
    "to_action_log_entry",
]
