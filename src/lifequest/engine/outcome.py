"""Outcome and XP reward rules.

Pure functions that judge a die result and turn an outcome into an XP
reward. Alternative rules are registered by name so a deployment can pick
one through configuration.

Example:
    >>> determine_outcome(20, 3, dc=25)
    <RollOutcome.CRITICAL_SUCCESS: 'critical_success'>
    >>> calculate_xp(10, RollOutcome.SUCCESS, xp_multiplier(DayState.CRITICAL))
    20
"""

from __future__ import annotations

import math
from collections.abc import Callable

from lifequest.core.constants import (
    DEFAULT_CRITICAL_DAY_MULTIPLIER,
    NATURAL_CRITICAL_FAILURE,
    NATURAL_CRITICAL_SUCCESS,
)
from lifequest.core.exceptions import UnknownStrategyError
from lifequest.models.enums import DayState, RollOutcome


OutcomeStrategy = Callable[[int, int, int | None], RollOutcome]
XPStrategy = Callable[[int, RollOutcome, int], int]


# =============================================================================
# Outcome
# =============================================================================


def default_outcome(die_value: int, total: int, dc: int | None) -> RollOutcome:
    """Judge a roll with natural-20/natural-1 overrides.

    A natural 20 or 1 decides the outcome regardless of the DC. Without a
    DC the roll is unopposed and always succeeds.
    """
    if die_value == NATURAL_CRITICAL_SUCCESS:
        return RollOutcome.CRITICAL_SUCCESS
    if die_value == NATURAL_CRITICAL_FAILURE:
        return RollOutcome.CRITICAL_FAILURE
    if dc is None:
        return RollOutcome.SUCCESS
    return RollOutcome.SUCCESS if total >= dc else RollOutcome.FAILURE


OUTCOME_STRATEGIES: dict[str, OutcomeStrategy] = {
    "default": default_outcome,
}


def determine_outcome(
    die_value: int,
    total: int,
    dc: int | None = None,
    strategy: OutcomeStrategy = default_outcome,
) -> RollOutcome:
    """Determine a roll's outcome.

    Args:
        die_value: Raw d20 value.
        total: Die value plus total modifier.
        dc: Optional difficulty target.
        strategy: Outcome rule to apply.

    Returns:
        The outcome.
    """
    return strategy(die_value, total, dc)


# =============================================================================
# XP
# =============================================================================


def xp_multiplier(
    day_state: DayState, critical_multiplier: int = DEFAULT_CRITICAL_DAY_MULTIPLIER
) -> int:
    """Day XP multiplier: the critical multiplier on a critical day, else 1."""
    return critical_multiplier if day_state is DayState.CRITICAL else 1


def default_xp(base_xp: int, outcome: RollOutcome, day_multiplier: int) -> int:
    """Double XP on a critical success, base XP on a success, nothing on a failure."""
    if not outcome.is_success:
        return 0
    xp = base_xp * 2 if outcome is RollOutcome.CRITICAL_SUCCESS else base_xp
    return math.floor(xp * day_multiplier)


_ALWAYS_AWARD_FACTORS = {
    RollOutcome.CRITICAL_SUCCESS: 2.0,
    RollOutcome.SUCCESS: 1.0,
    RollOutcome.FAILURE: 0.5,
    RollOutcome.CRITICAL_FAILURE: 0.25,
}


def always_award_xp(base_xp: int, outcome: RollOutcome, day_multiplier: int) -> int:
    """Award a share of XP even on failures, to reward attempts."""
    return math.floor(base_xp * _ALWAYS_AWARD_FACTORS[outcome] * day_multiplier)


def high_risk_xp(base_xp: int, outcome: RollOutcome, day_multiplier: int) -> int:
    """Triple XP on a critical success, one and a half on a success, nothing otherwise."""
    if outcome is RollOutcome.CRITICAL_SUCCESS:
        return math.floor(base_xp * 3 * day_multiplier)
    if outcome is RollOutcome.SUCCESS:
        return math.floor(base_xp * 1.5 * day_multiplier)
    return 0


XP_STRATEGIES: dict[str, XPStrategy] = {
    "default": default_xp,
    "always_award": always_award_xp,
    "high_risk": high_risk_xp,
}


def calculate_xp(
    base_xp: int,
    outcome: RollOutcome,
    day_multiplier: int,
    strategy: XPStrategy = default_xp,
) -> int:
    """Calculate the XP reward for an outcome.

    Args:
        base_xp: Caller-chosen base XP.
        outcome: The roll's outcome.
        day_multiplier: Multiplier from ``xp_multiplier``.
        strategy: XP rule to apply.

    Returns:
        XP awarded, floored to an integer.
    """
    return strategy(base_xp, outcome, day_multiplier)


# =============================================================================
# Registry lookup
# =============================================================================


def get_outcome_strategy(name: str) -> OutcomeStrategy:
    """Look up a registered outcome strategy.

    Raises:
        UnknownStrategyError: If no strategy has that name.
    """
    try:
        return OUTCOME_STRATEGIES[name]
    except KeyError:
        raise UnknownStrategyError(
            f"Unknown outcome strategy: {name}",
            strategy=name,
            available=sorted(OUTCOME_STRATEGIES),
        ) from None


def get_xp_strategy(name: str) -> XPStrategy:
    """Look up a registered XP strategy.

    Raises:
        UnknownStrategyError: If no strategy has that name.
    """
    try:
        return XP_STRATEGIES[name]
    except KeyError:
        raise UnknownStrategyError(
            f"Unknown XP strategy: {name}",
            strategy=name,
            available=sorted(XP_STRATEGIES),
        ) from None


__all__ = [
    "OutcomeStrategy",
    "XPStrategy",
    "OUTCOME_STRATEGIES",
    "XP_STRATEGIES",
    "default_outcome",
    "determine_outcome",
    "xp_multiplier",
    "default_xp",
    "always_award_xp",
    "high_risk_xp",
    "calculate_xp",
    "get_outcome_strategy",
    "get_xp_strategy",
]
