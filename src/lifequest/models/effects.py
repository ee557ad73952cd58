"""The normalized, source-agnostic Effect.

Every source record is converted into this one shape by the normalizer, so
the filter and applicator never branch on where an effect came from.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from lifequest.models.context import ContextExpression
from lifequest.models.enums import CoreStat, EffectSourceType, EffectType
from lifequest.models.sources import StatModifier


class ParsedCondition(BaseModel):
    """A condition string parsed once into a comparison.

    Attributes:
        raw: The original condition text.
        always: True for the ``"always"`` condition.
        ability: Ability name referenced by a comparison.
        operator: Comparison operator, normalised (``=`` becomes ``==``).
        threshold: Integer right-hand side.
        valid: False when the text did not match the comparison grammar;
            an invalid condition always evaluates to false.
    """

    model_config = ConfigDict(frozen=True)

    raw: str
    always: bool = False
    ability: str | None = None
    operator: str | None = None
    threshold: int | None = None
    valid: bool = True


class BreakdownEntry(BaseModel):
    """One labelled contribution to a roll's total modifier."""

    model_config = ConfigDict(frozen=True)

    source: str
    value: int


class Effect(BaseModel):
    """A normalized rule that can modify a roll.

    Attributes:
        id: Stable id derived from the source record.
        type: Effect kind.
        source_label: Human-readable provenance, e.g. ``ARTIST (feature)``.
        source_type: Source kind, used for UI attribution only.
        applies_to: Resolution contexts; empty means all contexts.
        condition: Parsed activation condition.
        stat_modifiers: ``(ability, delta)`` pairs for stat_modifier effects.
        affected_stats: Target ability names for advantage/disadvantage.
        affected_core_stats: Core stats targeted by day-state effects.
        flat_modifier: Flat modifier that accompanies a flag or bonus.
        context_expression: Optional tag expression from unified effects.
        any_ability: Targets every ability; set for unified effects, which
            are scoped by their context expression instead of a target list.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    type: EffectType
    source_label: str
    source_type: EffectSourceType
    applies_to: frozenset[str] = Field(default_factory=frozenset)
    condition: ParsedCondition
    stat_modifiers: tuple[StatModifier, ...] = Field(default_factory=tuple)
    affected_stats: tuple[str, ...] = Field(default_factory=tuple)
    affected_core_stats: frozenset[CoreStat] = Field(default_factory=frozenset)
    flat_modifier: int = 0
    context_expression: ContextExpression | None = None
    any_ability: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def applies_to_all_contexts(self) -> bool:
        """Whether ``applies_to`` is the empty wildcard."""
        return not self.applies_to

    def deltas_for(self, ability_name: str) -> list[int]:
        """Get every stat modifier delta aimed at the given ability."""
        return [sm.modifier for sm in self.stat_modifiers if sm.stat == ability_name]


__all__ = [
    "ParsedCondition",
    "BreakdownEntry",
    "Effect",
]
