"""Explicit recomputation of stored derived state.

Traits store an ``is_active`` flag and abilities store a ``current_value``;
both are derived from conditions over ability values. Rather than patching
them incrementally on every mutation, the caller runs ``recalculate`` once
per mutation batch and persists whatever changed.

Day state never contributes here; it only influences roll resolution.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from lifequest.core.logging import get_logger
from lifequest.engine.conditions import evaluate
from lifequest.engine.normalizer import normalize_contexts
from lifequest.models.abilities import AbilitySnapshot
from lifequest.models.effects import BreakdownEntry
from lifequest.models.enums import EffectContext, EffectType
from lifequest.models.sources import (
    EffectEntry,
    ItemRecord,
    TraitRecord,
    UnifiedEffectRecord,
)


logger = get_logger(__name__)


class RecalculationResult(BaseModel):
    """Outcome of one recomputation pass.

    Attributes:
        abilities: Snapshot with refreshed current values.
        traits: Traits with refreshed ``is_active`` flags, in input order.
        changed_abilities: Names whose current value changed.
        changed_traits: Ids of traits whose flag changed.
    """

    model_config = ConfigDict(frozen=True)

    abilities: AbilitySnapshot
    traits: tuple[TraitRecord, ...] = Field(default_factory=tuple)
    changed_abilities: tuple[str, ...] = Field(default_factory=tuple)
    changed_traits: tuple[str, ...] = Field(default_factory=tuple)


def evaluate_trait_is_active(trait: TraitRecord, abilities: AbilitySnapshot) -> bool:
    """A trait is active when at least one of its effects' conditions holds.

    A trait without effects is inactive.
    """
    return any(evaluate(entry.condition, abilities) for entry in trait.mechanical_effect)


def _is_passive(entry: EffectEntry) -> bool:
    if EffectType.coerce(entry.type) is not EffectType.STAT_MODIFIER:
        return False
    contexts = normalize_contexts(entry.applies_to)
    return not contexts or EffectContext.PASSIVE.value in contexts


def _entry_rows(
    label: str,
    entries: Iterable[EffectEntry],
    ability_name: str,
    abilities: AbilitySnapshot,
    fallback_condition: str | None = None,
) -> list[BreakdownEntry]:
    rows: list[BreakdownEntry] = []
    for entry in entries:
        if not _is_passive(entry):
            continue
        if not evaluate(entry.condition or fallback_condition, abilities):
            continue
        rows.extend(
            BreakdownEntry(source=label, value=sm.modifier)
            for sm in entry.stat_modifiers
            if sm.stat == ability_name
        )
    return rows


def passive_breakdown(
    ability_name: str,
    abilities: AbilitySnapshot,
    traits: Sequence[TraitRecord] = (),
    items: Sequence[ItemRecord] = (),
    unified_effects: Sequence[UnifiedEffectRecord] = (),
) -> list[BreakdownEntry]:
    """List the standing modifiers behind an ability's current value.

    Trait and item conditions are checked against the given snapshot.
    Unified passive modifiers are checked against base values so that they
    cannot feed back into their own conditions.

    Args:
        ability_name: Ability to explain.
        abilities: Current ability snapshot.
        traits: Traits; only active ones contribute.
        items: Items; only equipped ones contribute.
        unified_effects: Unified effects; only active ones contribute.

    Returns:
        One row per contributing modifier, traits first, then items, then
        unified effects.
    """
    rows: list[BreakdownEntry] = []
    for trait in traits:
        if trait.is_active:
            rows.extend(
                _entry_rows(trait.source_label, trait.mechanical_effect, ability_name, abilities)
            )
    for item in items:
        if item.is_equipped:
            rows.extend(
                _entry_rows(
                    item.source_label,
                    item.passive_effect,
                    ability_name,
                    abilities,
                    fallback_condition=item.condition,
                )
            )

    base_values = abilities.base_view()
    for record in unified_effects:
        if not record.is_active or not evaluate(record.condition, base_values):
            continue
        rows.extend(
            BreakdownEntry(source=record.name, value=modifier.value)
            for modifier in record.passive_modifiers
            if modifier.ability == ability_name and modifier.value != 0
        )
    return rows


def recalculate(
    abilities: AbilitySnapshot,
    traits: Sequence[TraitRecord] = (),
    items: Sequence[ItemRecord] = (),
    unified_effects: Sequence[UnifiedEffectRecord] = (),
) -> RecalculationResult:
    """Recompute trait flags and ability current values in one pass.

    Args:
        abilities: Snapshot taken after the mutation batch.
        traits: Every trait of the character.
        items: Every inventory item of the character.
        unified_effects: Every unified effect of the character.

    Returns:
        Refreshed traits and snapshot, plus what changed.
    """
    refreshed: list[TraitRecord] = []
    changed_traits: list[str] = []
    for trait in traits:
        is_active = evaluate_trait_is_active(trait, abilities)
        if is_active != trait.is_active:
            changed_traits.append(trait.id)
        refreshed.append(trait.model_copy(update={"is_active": is_active}))

    current: dict[str, int] = {}
    for name in abilities.names():
        ability = abilities.abilities[name]
        rows = passive_breakdown(name, abilities, refreshed, items, unified_effects)
        current[name] = ability.base_value + sum(row.value for row in rows)

    changed_abilities = [
        name for name, value in current.items() if abilities.abilities[name].current_value != value
    ]

    logger.debug(
        "Recalculated derived state",
        changed_abilities=changed_abilities,
        changed_traits=changed_traits,
    )

    return RecalculationResult(
        abilities=abilities.with_current_values(current),
        traits=tuple(refreshed),
        changed_abilities=tuple(changed_abilities),
        changed_traits=tuple(changed_traits),
    )


__all__ = [
    "RecalculationResult",
    "evaluate_trait_is_active",
    "passive_breakdown",
    "recalculate",
]
