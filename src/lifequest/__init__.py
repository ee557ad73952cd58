"""LifeQuest - d20 Effect & Roll Resolution Engine.

Turns personal growth into a tabletop-style character sheet: abilities grouped
under four core stats, traits and items that modify them, and d20 rolls that
award XP.

DETERMINISTIC ARCHITECTURE:
- The caller owns I/O (storage, clock, the physical or virtual die)
- The engine owns RULES (effects, modifiers, outcomes, XP)
- The engine NEVER generates random numbers or mutates its inputs

Example:
    >>> from lifequest import AbilitySnapshot, EffectSources, RollRequest, resolve_roll
    >>>
    >>> snapshot = AbilitySnapshot.from_values({
    ...     "creation": (3, 3, "mind"),
    ...     "drive": (1, 1, "soul"),
    ... })
    >>> request = RollRequest(character_id="c-1", die_value=12, ability_name="creation")
    >>> result = resolve_roll(request, snapshot, EffectSources())
    >>> result.outcome
    <RollOutcome.SUCCESS: 'success'>

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for abilities, effect sources and rolls.
    engine: Condition evaluation, effect pipeline, outcome and XP rules.
"""

from __future__ import annotations

# Core
from lifequest.core.config import EngineSettings, Settings, get_settings
from lifequest.core.exceptions import LifeQuestError
from lifequest.core.logging import configure_logging, get_logger

# Models
from lifequest.models import (
    AbilitySnapshot,
    AbilityValue,
    ContextExpression,
    DayState,
    EffectSources,
    RollOutcome,
    RollRequest,
    RollResult,
    RollType,
)

# Engine
from lifequest.engine import (
    RollEngine,
    build_roll_tags,
    recalculate,
    resolve_roll,
    to_action_log_entry,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "LifeQuestError",
    "Settings",
    "EngineSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "AbilitySnapshot",
    "AbilityValue",
    "ContextExpression",
    "DayState",
    "EffectSources",
    "RollOutcome",
    "RollRequest",
    "RollResult",
    "RollType",
    # Engine
    "RollEngine",
    "build_roll_tags",
    "recalculate",
    "resolve_roll",
    "to_action_log_entry",
]
