"""Roll request and result records.

The request carries a die value the caller has already produced; the
engine never generates randomness. The result is what the persistence
collaborator writes as an audit-log row.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from lifequest.core.constants import DC_MAX, DC_MIN, DIE_MAX, DIE_MIN
from lifequest.models.context import OrganizationalTag
from lifequest.models.effects import BreakdownEntry, Effect
from lifequest.models.enums import DayState, RollOutcome, RollType


class RollRequest(BaseModel):
    """A request to resolve one roll.

    Attributes:
        character_id: Character the roll belongs to.
        roll_type: Roll category.
        die_value: Raw d20 value supplied by the caller.
        ability_name: Target ability; a roll without one carries no
            effect modifiers.
        dc: Optional difficulty target.
        additional_modifier: Caller-supplied modifier added last.
        manual_advantage: Caller forces advantage.
        manual_disadvantage: Caller forces disadvantage.
        base_xp: Base XP for a successful roll.
        description: Free-text note.
        organizational_tags: User tags matched by context expressions.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    character_id: str
    roll_type: RollType = RollType.ABILITY_CHECK
    die_value: int = Field(ge=DIE_MIN, le=DIE_MAX)
    ability_name: str | None = None
    dc: int | None = Field(default=None, ge=DC_MIN, le=DC_MAX)
    additional_modifier: int = 0
    manual_advantage: bool = False
    manual_disadvantage: bool = False
    base_xp: int = Field(default=0, ge=0)
    description: str | None = None
    organizational_tags: tuple[OrganizationalTag, ...] = Field(default_factory=tuple)


class AppliedEffects(BaseModel):
    """The applicator's fold of a filtered effect set."""

    model_config = ConfigDict(frozen=True)

    total: int
    breakdown: tuple[BreakdownEntry, ...]
    has_advantage: bool = False
    has_disadvantage: bool = False
    advantage_sources: tuple[str, ...] = Field(default_factory=tuple)
    disadvantage_sources: tuple[str, ...] = Field(default_factory=tuple)


class RollResult(BaseModel):
    """Complete result of a resolved roll.

    Both advantage and disadvantage may be true at once; the engine never
    cancels them.
    """

    model_config = ConfigDict(frozen=True)

    character_id: str
    roll_type: RollType
    die_value: int
    ability_used: str | None = None

    base_modifier: int
    additional_modifier: int
    total_modifier: int
    breakdown: tuple[BreakdownEntry, ...]
    total_value: int

    has_advantage: bool
    has_disadvantage: bool
    advantage_sources: tuple[str, ...]
    disadvantage_sources: tuple[str, ...]

    dc: int | None = None
    outcome: RollOutcome

    base_xp: int
    xp_multiplier: int
    xp_awarded: int

    day_state: DayState
    relevant_effects: tuple[Effect, ...] = Field(default_factory=tuple)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success(self) -> bool:
        """Whether the outcome counts as a success."""
        return self.outcome.is_success


__all__ = [
    "RollRequest",
    "AppliedEffects",
    "RollResult",
]
