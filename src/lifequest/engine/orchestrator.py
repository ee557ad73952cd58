"""Roll orchestration.

Composes the engine stages for one request:

    normalize -> filter -> apply -> outcome -> XP -> RollResult

The orchestrator performs no I/O. The caller gathers the ability snapshot and
the enabled sources as one consistent snapshot beforehand, and persists the
returned RollResult (and bumps ability usage counters) afterwards.

Example:
    >>> engine = RollEngine()
    >>> result = engine.resolve(request, snapshot, sources)
    >>> result.total_value, result.outcome
    (17, <RollOutcome.SUCCESS: 'success'>)
"""

from __future__ import annotations

from lifequest.core.config import EngineSettings, get_settings
from lifequest.core.logging import get_logger
from lifequest.engine.applicator import apply_effects, apply_without_ability
from lifequest.engine.filtering import filter_effects
from lifequest.engine.normalizer import normalize
from lifequest.engine.outcome import (
    calculate_xp,
    get_outcome_strategy,
    get_xp_strategy,
    xp_multiplier,
)
from lifequest.models.abilities import AbilitySnapshot
from lifequest.models.context import CurrentTags
from lifequest.models.effects import Effect
from lifequest.models.enums import EffectContext, RollType
from lifequest.models.rolls import RollRequest, RollResult
from lifequest.models.sources import EffectSources


logger = get_logger(__name__)

_ROLL_CONTEXTS: dict[RollType, EffectContext] = {
    RollType.ABILITY_CHECK: EffectContext.ABILITY_CHECK,
    RollType.SAVING_THROW: EffectContext.SAVING_THROW,
    RollType.ATTACK: EffectContext.ATTACK,
    RollType.DAMAGE: EffectContext.DAMAGE,
}


class RollEngine:
    """Resolves roll requests against a character snapshot.

    The engine holds only its immutable settings, so a single instance can
    serve any number of characters and threads.

    Attributes:
        settings: Strategy names and multipliers used for resolution.
    """

    def __init__(self, settings: EngineSettings | None = None) -> None:
        """Initialize the engine.

        Args:
            settings: Engine settings. Defaults to the application settings.

        Raises:
            UnknownStrategyError: If a configured strategy is not registered.
        """
        self.settings = settings if settings is not None else get_settings().engine
        self._outcome_strategy = get_outcome_strategy(self.settings.outcome_strategy)
        self._xp_strategy = get_xp_strategy(self.settings.xp_strategy)

    def context_for(self, roll_type: RollType) -> EffectContext:
        """Map a roll type onto the effect context it resolves in."""
        if roll_type is RollType.INITIATIVE:
            return EffectContext(self.settings.initiative_context)
        return _ROLL_CONTEXTS[roll_type]

    @staticmethod
    def tags_for(request: RollRequest, abilities: AbilitySnapshot) -> CurrentTags:
        """Build the tag set that context expressions are matched against."""
        core_stat = None
        if request.ability_name is not None:
            stat = abilities.core_stat_of(request.ability_name)
            core_stat = stat.value if stat is not None else None
        return CurrentTags(
            roll_type=request.roll_type.value,
            ability=request.ability_name,
            core_stat=core_stat,
            organizational=request.organizational_tags,
        )

    def resolve(
        self,
        request: RollRequest,
        abilities: AbilitySnapshot,
        sources: EffectSources,
    ) -> RollResult:
        """Resolve one roll.

        Args:
            request: The roll request with the caller's die value.
            abilities: Ability snapshot for the character.
            sources: Enabled effect sources for the character.

        Returns:
            The complete roll result.
        """
        context = self.context_for(request.roll_type)
        ability_name = request.ability_name

        relevant: list[Effect] = []
        if ability_name is not None:
            ability = abilities.get(ability_name)
            base_modifier = ability.base_value if ability is not None else 0
            tags = self.tags_for(request, abilities)
            relevant = filter_effects(
                normalize(sources, abilities), ability_name, context, abilities, tags
            )
            applied = apply_effects(
                relevant,
                base_modifier,
                ability_name,
                tags=tags,
                manual_advantage=request.manual_advantage,
                manual_disadvantage=request.manual_disadvantage,
                additional_modifier=request.additional_modifier,
            )
        else:
            base_modifier = 0
            applied = apply_without_ability(
                manual_advantage=request.manual_advantage,
                manual_disadvantage=request.manual_disadvantage,
                additional_modifier=request.additional_modifier,
            )

        total_value = request.die_value + applied.total
        outcome = self._outcome_strategy(request.die_value, total_value, request.dc)
        day_state = sources.day_state.state
        multiplier = xp_multiplier(day_state, self.settings.critical_day_xp_multiplier)
        xp_awarded = calculate_xp(request.base_xp, outcome, multiplier, self._xp_strategy)

        logger.debug(
            "Roll resolved",
            character_id=request.character_id,
            roll_type=request.roll_type.value,
            ability=ability_name,
            die_value=request.die_value,
            total_value=total_value,
            outcome=outcome.value,
            xp_awarded=xp_awarded,
        )

        return RollResult(
            character_id=request.character_id,
            roll_type=request.roll_type,
            die_value=request.die_value,
            ability_used=ability_name,
            base_modifier=base_modifier,
            additional_modifier=request.additional_modifier,
            total_modifier=applied.total,
            breakdown=applied.breakdown,
            total_value=total_value,
            has_advantage=applied.has_advantage,
            has_disadvantage=applied.has_disadvantage,
            advantage_sources=applied.advantage_sources,
            disadvantage_sources=applied.disadvantage_sources,
            dc=request.dc,
            outcome=outcome,
            base_xp=request.base_xp,
            xp_multiplier=multiplier,
            xp_awarded=xp_awarded,
            day_state=day_state,
            relevant_effects=tuple(relevant),
        )


def resolve_roll(
    request: RollRequest,
    abilities: AbilitySnapshot,
    sources: EffectSources | None = None,
    settings: EngineSettings | None = None,
) -> RollResult:
    """Resolve one roll with a throwaway engine.

    Args:
        request: The roll request.
        abilities: Ability snapshot for the character.
        sources: Enabled effect sources; none when omitted.
        settings: Engine settings; application settings when omitted.

    Returns:
        The complete roll result.
    """
    return RollEngine(settings).resolve(request, abilities, sources or EffectSources())


__all__ = [
    "RollEngine",
    "resolve_roll",
]
