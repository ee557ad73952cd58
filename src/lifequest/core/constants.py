"""Application-wide constants for the LifeQuest progression engine.

This module defines the rules constants shared by the effect engine,
the outcome engine and the progression helpers.
"""

from __future__ import annotations

# =============================================================================
# Die Constants
# =============================================================================

DIE_MIN = 1
"""Lowest face of the d20 supplied by the caller."""

DIE_MAX = 20
"""Highest face of the d20 supplied by the caller."""

NATURAL_CRITICAL_SUCCESS = 20
"""Die face that always yields a critical success."""

NATURAL_CRITICAL_FAILURE = 1
"""Die face that always yields a critical failure."""

DC_MIN = 1
DC_MAX = 30

# =============================================================================
# Effect Engine Constants
# =============================================================================

ALWAYS_CONDITION = "always"
"""Condition string that is unconditionally true."""

MAX_CONTEXT_DEPTH = 3
"""Deepest node index allowed in a context expression (root is depth 0)."""

MANUAL_OVERRIDE_SOURCE = "Manual override"
"""Source label appended when the caller forces advantage or disadvantage."""

ADDITIONAL_MODIFIER_SOURCE = "Additional modifier"
"""Breakdown label for the caller-supplied additional modifier."""

DIFFICULT_DAY_SOURCE = "Difficult Terrain (day state)"
INSPIRATION_DAY_SOURCE = "Inspiration (day state)"

# =============================================================================
# Progression Constants
# =============================================================================

FIRST_LEVEL_XP = 10
"""XP required to go from level 1 to level 2."""

XP_PER_LEVEL_STEP = 5
"""Extra XP per level added to each subsequent threshold."""

CRITICAL_DAY_ROLL = 20
INSPIRATION_DAY_MIN_ROLL = 16
DIFFICULT_DAY_MAX_ROLL = 5

DEFAULT_CRITICAL_DAY_MULTIPLIER = 2
"""XP multiplier applied on a critical day."""
