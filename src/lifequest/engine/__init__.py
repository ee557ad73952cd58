"""Effect engine for the LifeQuest progression engine.

Resolves a d20 roll for one ability by collecting every active effect that
applies to it, folding them into a labelled modifier breakdown and judging
the outcome and XP reward. The engine is pure: it never reads a clock,
generates randomness or touches storage.

Submodules:
    conditions: Parse and evaluate ``"<ability> <op> <int>"`` conditions
    context: Match context expressions against a roll's tags
    normalizer: Convert source records into one Effect shape
    filtering: Select the effects live for one roll
    applicator: Fold effects into a total, breakdown and flags
    outcome: Outcome and XP strategies
    orchestrator: Compose the stages per roll request
    recalculation: Recompute trait flags and ability current values
    audit: Audit-log rows and presentation tags

Example:
    >>> from lifequest.engine import RollEngine
    >>> from lifequest.models import AbilitySnapshot, EffectSources, RollRequest
    >>>
    >>> snapshot = AbilitySnapshot.from_values({"creation": (3, 3, "mind")})
    >>> request = RollRequest(character_id="c-1", die_value=12, ability_name="creation")
    >>> result = RollEngine().resolve(request, snapshot, EffectSources())
    >>> result.total_value
    15
"""

from __future__ import annotations

# =============================================================================
# Conditions & Context
# =============================================================================
from lifequest.engine.conditions import (
    ALWAYS,
    evaluate,
    evaluate_parsed,
    parse_condition,
)
from lifequest.engine.context import (
    CONTEXT_PRESETS,
    expression_to_string,
    extract_tag_references,
    matches,
)

# =============================================================================
# Effect Pipeline
# =============================================================================
from lifequest.engine.normalizer import (
    is_effect_active,
    normalize,
    normalize_contexts,
)
from lifequest.engine.filtering import filter_effects
from lifequest.engine.applicator import apply_effects, apply_without_ability

# =============================================================================
# Outcome & Reward
# =============================================================================
from lifequest.engine.outcome import (
    OUTCOME_STRATEGIES,
    XP_STRATEGIES,
    calculate_xp,
    determine_outcome,
    get_outcome_strategy,
    get_xp_strategy,
    xp_multiplier,
)

# =============================================================================
# Orchestration
# =============================================================================
from lifequest.engine.orchestrator import RollEngine, resolve_roll

# =============================================================================
# Recalculation & Audit
# =============================================================================
from lifequest.engine.recalculation import (
    RecalculationResult,
    evaluate_trait_is_active,
    passive_breakdown,
    recalculate,
)
from lifequest.engine.audit import (
    ActionLogEntry,
    ModifierRow,
    RollTags,
    SourceTag,
    build_roll_tags,
    to_action_log_entry,
)


__all__ = [
    # === Conditions & Context ===
    "ALWAYS",
    "evaluate",
    "evaluate_parsed",
    "parse_condition",
    "CONTEXT_PRESETS",
    "expression_to_string",
    "extract_tag_references",
    "matches",
    # === Effect Pipeline ===
    "is_effect_active",
    "normalize",
    "normalize_contexts",
    "filter_effects",
    "apply_effects",
    "apply_without_ability",
    # === Outcome & Reward ===
    "OUTCOME_STRATEGIES",
    "XP_STRATEGIES",
    "calculate_xp",
    "determine_outcome",
    "get_outcome_strategy",
    "get_xp_strategy",
    "xp_multiplier",
    # === Orchestration ===
    "RollEngine",
    "resolve_roll",
    # === Recalculation & Audit ===
    "RecalculationResult",
    "evaluate_trait_is_active",
    "passive_breakdown",
    "recalculate",
    "ActionLogEntry",
    "ModifierRow",
    "RollTags",
    "SourceTag",
    "build_roll_tags",
    "to_action_log_entry",
]
