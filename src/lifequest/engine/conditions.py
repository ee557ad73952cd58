"""Condition evaluation for effect activation.

A condition is either ``"always"`` or a single comparison of an ability's
current value against an integer, such as ``"drive > 0"``. Evaluation is
fail-closed: text that does not match the grammar, or that names an ability
missing from the snapshot, evaluates to False instead of raising.

Compound logic (AND/OR) is not supported here; it belongs to context
expressions.
"""

from __future__ import annotations

import operator
import re
from collections.abc import Callable

from lifequest.core.constants import ALWAYS_CONDITION
from lifequest.core.logging import get_logger
from lifequest.models.abilities import AbilitySnapshot
from lifequest.models.effects import ParsedCondition


logger = get_logger(__name__)

_COMPARISON_PATTERN = re.compile(r"^\s*(\w+)\s*(>=|<=|==|!=|>|<|=)\s*(-?\d+)\s*$")

_OPERATORS: dict[str, Callable[[int, int], bool]] = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
    "==": operator.eq,
    "!=": operator.ne,
}

ALWAYS = ParsedCondition(raw=ALWAYS_CONDITION, always=True)


def parse_condition(expr: str | None) -> ParsedCondition:
    """Parse a condition string once into a value object.

    Args:
        expr: Condition text. None means ``"always"``.

    Returns:
        The parsed condition. Text outside the grammar yields a condition
        with ``valid=False`` rather than an error.

    Example:
        >>> parse_condition("drive > 0").operator
        '>'
        >>> parse_condition("not a condition").valid
        False
    """
    if expr is None:
        return ALWAYS
    if expr.strip().lower() == ALWAYS_CONDITION:
        return ParsedCondition(raw=expr, always=True)

    match = _COMPARISON_PATTERN.match(expr)
    if match is None:
        logger.debug("Condition does not match grammar", condition=expr)
        return ParsedCondition(raw=expr, valid=False)

    ability, op, threshold = match.groups()
    if op == "=":
        op = "=="
    return ParsedCondition(raw=expr, ability=ability, operator=op, threshold=int(threshold))


def evaluate_parsed(condition: ParsedCondition, abilities: AbilitySnapshot) -> bool:
    """Evaluate a parsed condition against the current ability values.

    Args:
        condition: A condition from ``parse_condition``.
        abilities: The snapshot to read current values from.

    Returns:
        True if the condition holds. Invalid conditions and unknown
        abilities evaluate to False.
    """
    if condition.always:
        return True
    if not condition.valid or condition.ability is None or condition.operator is None:
        return False

    ability = abilities.find(condition.ability)
    if ability is None:
        logger.debug("Condition references unknown ability", condition=condition.raw)
        return False

    compare = _OPERATORS[condition.operator]
    return compare(ability.current_value, condition.threshold)


def evaluate(expr: str | None, abilities: AbilitySnapshot) -> bool:
    """Parse and evaluate a condition string in one step.

    Example:
        >>> snapshot = AbilitySnapshot.from_values({"drive": (1, 1, "soul")})
        >>> evaluate("drive > 0", snapshot)
        True
        >>> evaluate("always", AbilitySnapshot())
        True
    """
    return evaluate_parsed(parse_condition(expr), abilities)


__all__ = [
    "ALWAYS",
    "parse_condition",
    "evaluate_parsed",
    "evaluate",
]
