"""Effect application.

Folds a filtered effect list into a total modifier, a labelled breakdown and
the advantage/disadvantage flags with their sources. This is the single
place where roll-time modifiers are summed.

Advantage and disadvantage are never cancelled against each other here;
both flags and both source lists are reported as they are.
"""

from __future__ import annotations

from collections.abc import Iterable

from lifequest.core.constants import ADDITIONAL_MODIFIER_SOURCE, MANUAL_OVERRIDE_SOURCE
from lifequest.core.logging import get_logger
from lifequest.engine.context import matches
from lifequest.models.context import CurrentTags
from lifequest.models.effects import BreakdownEntry, Effect
from lifequest.models.enums import EffectType
from lifequest.models.rolls import AppliedEffects


logger = get_logger(__name__)


def base_row(ability_name: str, base_modifier: int) -> BreakdownEntry:
    """Breakdown row for the ability's own modifier."""
    return BreakdownEntry(source=f"{ability_name} (base)", value=base_modifier)


class _Accumulator:
    """Mutable fold state, local to one ``apply_effects`` call."""

    def __init__(self, ability_name: str, base_modifier: int) -> None:
        self.total = base_modifier
        self.breakdown: list[BreakdownEntry] = [base_row(ability_name, base_modifier)]
        self.has_advantage = False
        self.has_disadvantage = False
        self.advantage_sources: list[str] = []
        self.disadvantage_sources: list[str] = []

    def add(self, source: str, value: int) -> None:
        self.total += value
        self.breakdown.append(BreakdownEntry(source=source, value=value))

    def flag(self, effect_type: EffectType, source: str) -> None:
        if effect_type is EffectType.ADVANTAGE:
            self.has_advantage = True
            self.advantage_sources.append(source)
        else:
            self.has_disadvantage = True
            self.disadvantage_sources.append(source)

    def freeze(self) -> AppliedEffects:
        return AppliedEffects(
            total=self.total,
            breakdown=tuple(self.breakdown),
            has_advantage=self.has_advantage,
            has_disadvantage=self.has_disadvantage,
            advantage_sources=tuple(self.advantage_sources),
            disadvantage_sources=tuple(self.disadvantage_sources),
        )


def _apply_flag(
    acc: _Accumulator, effect: Effect, ability_name: str, context_matches: bool
) -> None:
    if not (effect.any_ability or ability_name in effect.affected_stats):
        return
    # A targeted flag is always attributed; its flat modifier counts only
    # when the context expression matches.
    acc.flag(effect.type, effect.source_label)
    label = f"{effect.source_label} ({effect.type.value})"
    if effect.flat_modifier and context_matches:
        acc.add(label, effect.flat_modifier)
    else:
        acc.add(label, 0)


def _apply_stat_modifier(acc: _Accumulator, effect: Effect, ability_name: str) -> None:
    if effect.any_ability:
        # Unified bonus: one flat value for any ability matching the expression
        acc.add(effect.source_label, effect.flat_modifier)
        return
    for delta in effect.deltas_for(ability_name):
        acc.add(effect.source_label, delta)


def _apply_custom(acc: _Accumulator, effect: Effect, ability_name: str) -> None:
    if ability_name in effect.affected_stats:
        acc.flag(EffectType.ADVANTAGE, effect.source_label)
    if effect.flat_modifier:
        acc.add(effect.source_label, effect.flat_modifier)


def apply_effects(
    filtered: Iterable[Effect],
    base_modifier: int,
    target_ability: str,
    *,
    tags: CurrentTags | None = None,
    manual_advantage: bool = False,
    manual_disadvantage: bool = False,
    additional_modifier: int = 0,
) -> AppliedEffects:
    """Compute the total modifier and flags for one ability.

    Args:
        filtered: Effects returned by the filter, in source order.
        base_modifier: The ability's base modifier.
        target_ability: Ability being rolled.
        tags: Tags of the roll, matched against context expressions.
            Defaults to tags carrying only the ability name.
        manual_advantage: Caller forces advantage.
        manual_disadvantage: Caller forces disadvantage.
        additional_modifier: Caller-supplied modifier, added last.

    Returns:
        The folded result. The breakdown always starts with the base row.

    Example:
        >>> applied = apply_effects([], 3, "creation")
        >>> applied.total, [row.source for row in applied.breakdown]
        (3, ['creation (base)'])
    """
    if tags is None:
        tags = CurrentTags(ability=target_ability)

    acc = _Accumulator(target_ability, base_modifier)
    for effect in filtered:
        context_matches = matches(effect.context_expression, tags)
        if effect.any_ability and not context_matches:
            # Unified effects have no target list; the expression is their scope
            continue
        if effect.type is EffectType.STAT_MODIFIER:
            _apply_stat_modifier(acc, effect, target_ability)
        elif effect.type.is_flag:
            _apply_flag(acc, effect, target_ability, context_matches)
        else:
            _apply_custom(acc, effect, target_ability)

    _apply_manual_overrides(acc, manual_advantage, manual_disadvantage)
    if additional_modifier:
        acc.add(ADDITIONAL_MODIFIER_SOURCE, additional_modifier)

    applied = acc.freeze()
    logger.debug(
        "Effects applied",
        ability=target_ability,
        total=applied.total,
        rows=len(applied.breakdown),
        advantage=applied.has_advantage,
        disadvantage=applied.has_disadvantage,
    )
    return applied


def _apply_manual_overrides(
    acc: _Accumulator, manual_advantage: bool, manual_disadvantage: bool
) -> None:
    """OR the caller's forced flags into the accumulated result.

    ``Manual override`` is attributed only when the caller adds a flag that
    no effect had set.
    """
    if manual_advantage and not acc.has_advantage:
        acc.flag(EffectType.ADVANTAGE, MANUAL_OVERRIDE_SOURCE)
    if manual_disadvantage and not acc.has_disadvantage:
        acc.flag(EffectType.DISADVANTAGE, MANUAL_OVERRIDE_SOURCE)


def apply_without_ability(
    *,
    manual_advantage: bool = False,
    manual_disadvantage: bool = False,
    additional_modifier: int = 0,
) -> AppliedEffects:
    """Zero-modifier result for a roll that names no ability.

    No effects apply and there is no base row; only the caller's overrides
    and additional modifier contribute.
    """
    acc = _Accumulator("", 0)
    acc.breakdown.clear()
    _apply_manual_overrides(acc, manual_advantage, manual_disadvantage)
    if additional_modifier:
        acc.add(ADDITIONAL_MODIFIER_SOURCE, additional_modifier)
    return acc.freeze()


__all__ = [
    "apply_effects",
    "apply_without_ability",
    "base_row",
]
