"""Effect filtering.

Selects, from the normalized effect list, the effects that are live for one
roll: the condition holds, the context is allowed and the effect targets the
rolled ability. Input order is preserved.
"""

from __future__ import annotations

from collections.abc import Iterable

from lifequest.core.logging import get_logger
from lifequest.engine.conditions import evaluate_parsed
from lifequest.engine.context import matches
from lifequest.models.abilities import AbilitySnapshot
from lifequest.models.context import CurrentTags
from lifequest.models.effects import Effect
from lifequest.models.enums import EffectContext, EffectType


logger = get_logger(__name__)


def context_allows(effect: Effect, context: EffectContext | str) -> bool:
    """Check an effect's ``applies_to`` list; empty means every context."""
    return not effect.applies_to or str(context) in effect.applies_to


def targets_ability(
    effect: Effect,
    ability_name: str,
    abilities: AbilitySnapshot,
    tags: CurrentTags | None = None,
) -> bool:
    """Check whether an effect is aimed at the given ability.

    Stat modifiers target by their ``(ability, delta)`` pairs, flags by
    their affected list (or, for day state, by core stat membership) and
    custom effects by either. A unified effect has no target list: it
    targets the roll only when its context expression matches ``tags``,
    which default to tags carrying just the ability name.
    """
    if effect.any_ability:
        return matches(effect.context_expression, tags or CurrentTags(ability=ability_name))

    if effect.type is EffectType.STAT_MODIFIER:
        return any(sm.stat == ability_name for sm in effect.stat_modifiers)

    if effect.type.is_flag:
        if ability_name in effect.affected_stats:
            return True
        if effect.affected_core_stats:
            return abilities.core_stat_of(ability_name) in effect.affected_core_stats
        return False

    return ability_name in effect.affected_stats or any(
        sm.stat == ability_name for sm in effect.stat_modifiers
    )


def filter_effects(
    effects: Iterable[Effect],
    target_ability: str,
    context: EffectContext | str,
    abilities: AbilitySnapshot,
    tags: CurrentTags | None = None,
) -> list[Effect]:
    """Keep the effects relevant to one roll.

    Args:
        effects: Normalized effects, in source order.
        target_ability: Ability being rolled.
        context: Resolution context of the roll.
        abilities: Snapshot used to evaluate conditions.
        tags: Tags of the roll, used to scope unified effects.

    Returns:
        Matching effects in their original order.
    """
    if tags is None:
        tags = CurrentTags(ability=target_ability)
    relevant = [
        effect
        for effect in effects
        if evaluate_parsed(effect.condition, abilities)
        and context_allows(effect, context)
        and targets_ability(effect, target_ability, abilities, tags)
    ]
    logger.debug(
        "Effects filtered",
        ability=target_ability,
        context=str(context),
        relevant=[effect.id for effect in relevant],
    )
    return relevant


__all__ = [
    "filter_effects",
    "context_allows",
    "targets_ability",
]
