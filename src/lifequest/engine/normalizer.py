"""Effect normalization.

Converts every enabled source record into the uniform Effect shape, in a
fixed order: traits, items, temporary effects, day state, then unified
effects. Downstream stages depend on this order for breakdown ordering.

Source-level gates are applied here (trait ``is_active``, item
``is_equipped``, unified ``is_active``). Per-effect conditions are parsed
here but evaluated by the filter against the current snapshot, so both gates
must pass independently.
"""

from __future__ import annotations

from collections.abc import Iterable

from lifequest.core.constants import DIFFICULT_DAY_SOURCE, INSPIRATION_DAY_SOURCE
from lifequest.core.logging import get_logger
from lifequest.engine.conditions import ALWAYS, evaluate_parsed, parse_condition
from lifequest.models.abilities import AbilitySnapshot
from lifequest.models.effects import Effect, ParsedCondition
from lifequest.models.enums import (
    ActiveModifierType,
    DayState,
    EffectContext,
    EffectSourceType,
    EffectType,
)
from lifequest.models.sources import (
    DayStateRecord,
    EffectEntry,
    EffectSources,
    ItemRecord,
    TemporaryEffectRecord,
    TraitRecord,
    UnifiedEffectRecord,
)


logger = get_logger(__name__)

DAY_STATE_CONTEXTS = frozenset(
    {EffectContext.ABILITY_CHECK.value, EffectContext.SAVING_THROW.value}
)


def normalize_contexts(applies_to: Iterable[str]) -> frozenset[str]:
    """Map stored context spellings onto canonical values.

    Unknown spellings are kept verbatim so a restricted effect never widens
    into the all-contexts wildcard; they simply never match.
    """
    normalized: set[str] = set()
    for ctx in applies_to:
        try:
            normalized.add(EffectContext(ctx).value)
        except ValueError:
            normalized.add(ctx)
    return frozenset(normalized)


def _from_entry(
    entry: EffectEntry,
    *,
    effect_id: str,
    label: str,
    source_type: EffectSourceType,
    condition: ParsedCondition,
) -> Effect:
    return Effect(
        id=effect_id,
        type=EffectType.coerce(entry.type),
        source_label=label,
        source_type=source_type,
        applies_to=normalize_contexts(entry.applies_to),
        condition=condition,
        stat_modifiers=tuple(entry.stat_modifiers),
        affected_stats=tuple(entry.affected_stats),
        flat_modifier=entry.modifier or 0,
    )


def trait_effects(trait: TraitRecord) -> list[Effect]:
    """Convert an active trait's effect list; an inactive trait yields nothing."""
    if not trait.is_active:
        return []
    return [
        _from_entry(
            entry,
            effect_id=f"{trait.id}-{index}",
            label=trait.source_label,
            source_type=EffectSourceType.TRAIT,
            condition=parse_condition(entry.condition),
        )
        for index, entry in enumerate(trait.mechanical_effect)
    ]


def item_effects(item: ItemRecord) -> list[Effect]:
    """Convert an equipped item's effect list.

    An entry without its own condition inherits the item-level condition.
    """
    if not item.is_equipped:
        return []
    return [
        _from_entry(
            entry,
            effect_id=f"{item.id}-{index}",
            label=item.source_label,
            source_type=EffectSourceType.ITEM,
            condition=parse_condition(entry.condition or item.condition),
        )
        for index, entry in enumerate(item.passive_effect)
    ]


def temporary_effects(record: TemporaryEffectRecord) -> list[Effect]:
    """Convert a temporary effect; it has no condition and is live until expiry."""
    if record.effect_type == EffectType.CUSTOM and record.effects:
        return [
            _from_entry(
                entry,
                effect_id=f"{record.id}-{index}",
                label=record.source_label,
                source_type=EffectSourceType.CUSTOM,
                condition=ALWAYS,
            )
            for index, entry in enumerate(record.effects)
        ]

    return [
        Effect(
            id=record.id,
            type=EffectType.coerce(record.effect_type),
            source_label=record.source_label,
            source_type=EffectSourceType.CUSTOM,
            applies_to=normalize_contexts(record.applies_to),
            condition=ALWAYS,
            stat_modifiers=tuple(record.stat_modifiers),
            affected_stats=tuple(record.affected_stats),
            flat_modifier=record.modifier or 0,
        )
    ]


def day_state_effect(day_state: DayStateRecord, abilities: AbilitySnapshot) -> Effect | None:
    """Convert the day state into at most one synthetic effect.

    A difficult day gives disadvantage on the abilities of every affected
    core stat; an inspiration day gives advantage on the abilities of the
    selected core stat. Normal and critical days add no modifier effect.
    """
    if day_state.state is DayState.DIFFICULT and day_state.affected_core_stats:
        core_stats = frozenset(day_state.affected_core_stats)
        effect_type = EffectType.DISADVANTAGE
        effect_id = "day-state-difficult"
        label = DIFFICULT_DAY_SOURCE
    elif day_state.state is DayState.INSPIRATION and day_state.selected_core_stat is not None:
        core_stats = frozenset({day_state.selected_core_stat})
        effect_type = EffectType.ADVANTAGE
        effect_id = "day-state-inspiration"
        label = INSPIRATION_DAY_SOURCE
    else:
        return None

    return Effect(
        id=effect_id,
        type=effect_type,
        source_label=label,
        source_type=EffectSourceType.DAY_STATE,
        applies_to=DAY_STATE_CONTEXTS,
        condition=ALWAYS,
        affected_stats=tuple(abilities.names_in(core_stats)),
        affected_core_stats=core_stats,
    )


_ACTIVE_MODIFIER_TYPES: dict[ActiveModifierType, EffectType] = {
    ActiveModifierType.ADVANTAGE: EffectType.ADVANTAGE,
    ActiveModifierType.DISADVANTAGE: EffectType.DISADVANTAGE,
    ActiveModifierType.BONUS: EffectType.STAT_MODIFIER,
}


def unified_effects(record: UnifiedEffectRecord) -> list[Effect]:
    """Convert a unified effect's roll-time modifiers.

    The resulting effects have no target list; they apply to any ability
    whose roll matches the record's context expression. Passive modifiers
    are not roll-time effects and are handled by the recalculation pass.
    """
    if not record.is_active:
        return []
    condition = parse_condition(record.condition)
    return [
        Effect(
            id=f"{record.id}-active-{modifier.type.value}-{index}",
            type=_ACTIVE_MODIFIER_TYPES[modifier.type],
            source_label=record.name,
            source_type=record.effect_type,
            condition=condition,
            flat_modifier=modifier.value or 0,
            context_expression=record.context_expression,
            any_ability=True,
        )
        for index, modifier in enumerate(record.active_modifiers)
    ]


def normalize(sources: EffectSources, abilities: AbilitySnapshot) -> list[Effect]:
    """Collect every effect from every enabled source, in encounter order.

    Args:
        sources: Enabled source records gathered as one snapshot.
        abilities: Ability snapshot, used to expand day-state core stats.

    Returns:
        Effects ordered traits, items, temporary, day state, unified.
    """
    effects: list[Effect] = []
    for trait in sources.traits:
        effects.extend(trait_effects(trait))
    for item in sources.items:
        effects.extend(item_effects(item))
    for record in sources.temporary_effects:
        effects.extend(temporary_effects(record))
    day_effect = day_state_effect(sources.day_state, abilities)
    if day_effect is not None:
        effects.append(day_effect)
    for record in sources.unified_effects:
        effects.extend(unified_effects(record))

    logger.debug(
        "Effects normalized",
        traits=len(sources.traits),
        items=len(sources.items),
        temporary=len(sources.temporary_effects),
        day_state=sources.day_state.state.value,
        unified=len(sources.unified_effects),
        effects=len(effects),
    )
    return effects


def is_effect_active(effect: Effect, abilities: AbilitySnapshot) -> bool:
    """Derive an effect's activation from its condition and the current snapshot."""
    return evaluate_parsed(effect.condition, abilities)


__all__ = [
    "normalize",
    "normalize_contexts",
    "trait_effects",
    "item_effects",
    "temporary_effects",
    "day_state_effect",
    "unified_effects",
    "is_effect_active",
]
