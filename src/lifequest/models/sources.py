"""Effect source records as they arrive from storage.

Four legacy source variants (trait, item, temporary effect, day state) plus
the newer unified effect record. These are the inputs to the normalizer,
which converts them into the single Effect shape at the boundary.

Records tolerate the loose shape of stored rows: ``null`` lists become empty
lists and unknown effect type strings are kept for the normalizer to coerce.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lifequest.models.context import ContextExpression
from lifequest.models.enums import (
    ActiveModifierType,
    CoreStat,
    DayState,
    EffectSourceType,
)


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


class StatModifier(BaseModel):
    """A signed delta applied to one ability."""

    model_config = ConfigDict(frozen=True)

    stat: str = Field(min_length=1)
    modifier: int


class EffectEntry(BaseModel):
    """One mechanical effect carried by a trait, item or temporary effect.

    Attributes:
        type: Stored effect type string (stat_modifier, advantage, ...).
        applies_to: Resolution contexts; empty means all contexts.
        stat_modifiers: Per-ability deltas for stat_modifier effects.
        affected_stats: Target abilities for advantage/disadvantage.
        modifier: Flat modifier that accompanies an advantage/disadvantage.
        condition: Comparison expression, ``"always"`` when absent.
        description: Free text for display.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str | None = None
    applies_to: list[str] = Field(default_factory=list)
    stat_modifiers: list[StatModifier] = Field(default_factory=list)
    affected_stats: list[str] = Field(default_factory=list)
    modifier: int | None = None
    condition: str | None = None
    description: str | None = None

    coerce_null_lists = field_validator(
        "applies_to", "stat_modifiers", "affected_stats", mode="before"
    )(_none_to_list)


class TraitRecord(BaseModel):
    """A character trait with its stored ``is_active`` flag."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    trait_name: str
    trait_type: str | None = None
    description: str | None = None
    mechanical_effect: list[EffectEntry] = Field(default_factory=list)
    is_active: bool = True

    coerce_null_lists = field_validator("mechanical_effect", mode="before")(_none_to_list)

    @property
    def source_label(self) -> str:
        """Provenance label, e.g. ``ARTIST (feature)``."""
        if self.trait_type:
            return f"{self.trait_name} ({self.trait_type})"
        return self.trait_name


class ItemRecord(BaseModel):
    """An inventory item; only equipped items contribute effects."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    item_name: str
    item_type: str | None = None
    description: str | None = None
    passive_effect: list[EffectEntry] = Field(default_factory=list)
    condition: str | None = None
    is_equipped: bool = True

    coerce_null_lists = field_validator("passive_effect", mode="before")(_none_to_list)

    @property
    def source_label(self) -> str:
        """Provenance label, e.g. ``MacBook Pro (tool)``."""
        if self.item_type:
            return f"{self.item_name} ({self.item_type})"
        return self.item_name


class TemporaryEffectRecord(BaseModel):
    """A temporary custom effect, active until it expires.

    A record of type ``custom`` may carry a list of sub-effects; any other
    record describes a single effect through its top-level fields.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    effect_name: str
    effect_type: str = "custom"
    applies_to: list[str] = Field(default_factory=list)
    affected_stats: list[str] = Field(default_factory=list)
    stat_modifiers: list[StatModifier] = Field(default_factory=list)
    modifier: int | None = None
    effects: list[EffectEntry] | None = None
    description: str | None = None
    expires_at: datetime | None = None

    coerce_null_lists = field_validator(
        "applies_to", "affected_stats", "stat_modifiers", mode="before"
    )(_none_to_list)

    @property
    def source_label(self) -> str:
        return f"{self.effect_name} (custom)"

    def is_expired(self, at: datetime) -> bool:
        """Whether the effect has expired at the given instant.

        Expiry filtering belongs to the caller; the normalizer assumes
        every record it receives is live.
        """
        return self.expires_at is not None and self.expires_at <= at


class DayStateRecord(BaseModel):
    """Today's day state.

    Attributes:
        state: The day state.
        affected_core_stats: Core stats that suffer disadvantage on a
            difficult day.
        selected_core_stat: Core stat that gains advantage on an
            inspiration day.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    state: DayState = DayState.NORMAL
    affected_core_stats: list[CoreStat] = Field(default_factory=list)
    selected_core_stat: CoreStat | None = None

    coerce_null_lists = field_validator("affected_core_stats", mode="before")(_none_to_list)


class ActiveModifier(BaseModel):
    """A roll-time modifier on a unified effect."""

    model_config = ConfigDict(frozen=True)

    type: ActiveModifierType
    value: int | None = None


class PassiveModifier(BaseModel):
    """A standing ability delta on a unified effect."""

    model_config = ConfigDict(frozen=True)

    ability: str
    value: int


class UnifiedEffectRecord(BaseModel):
    """An effect from the unified effects model.

    Roll-time modifiers are scoped by a context expression instead of an
    ``applies_to`` list and a target list.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    effect_type: EffectSourceType = EffectSourceType.CUSTOM
    is_active: bool = True
    condition: str | None = None
    context_expression: ContextExpression | None = None
    active_modifiers: list[ActiveModifier] = Field(default_factory=list)
    passive_modifiers: list[PassiveModifier] = Field(default_factory=list)

    coerce_null_lists = field_validator(
        "active_modifiers", "passive_modifiers", mode="before"
    )(_none_to_list)

    @field_validator("context_expression", mode="before")
    @classmethod
    def parse_context_expression(cls, value: Any) -> Any:
        """Parse JSON text into an expression tree once, at the boundary."""
        if value is None or isinstance(value, str):
            return ContextExpression.parse(value)
        return value


class EffectSources(BaseModel):
    """Every enabled source for one character, gathered as one snapshot."""

    model_config = ConfigDict(frozen=True)

    traits: list[TraitRecord] = Field(default_factory=list)
    items: list[ItemRecord] = Field(default_factory=list)
    temporary_effects: list[TemporaryEffectRecord] = Field(default_factory=list)
    day_state: DayStateRecord = Field(default_factory=DayStateRecord)
    unified_effects: list[UnifiedEffectRecord] = Field(default_factory=list)


__all__ = [
    "StatModifier",
    "EffectEntry",
    "TraitRecord",
    "ItemRecord",
    "TemporaryEffectRecord",
    "DayStateRecord",
    "ActiveModifier",
    "PassiveModifier",
    "UnifiedEffectRecord",
    "EffectSources",
]
