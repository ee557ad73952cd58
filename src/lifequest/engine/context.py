"""Context matching for tag-based effect scoping.

Evaluates a validated ContextExpression against the tags of an in-flight
roll. Structural rules are enforced when the expression is constructed, so
evaluation here never fails.
"""

from __future__ import annotations

from lifequest.models.context import ContextExpression, CurrentTags, TagReference
from lifequest.models.enums import LogicalOperator, TagCategory


def _leaf_matches(tag: TagReference, tags: CurrentTags) -> bool:
    if tag.category == TagCategory.ROLL_TYPE:
        return tags.roll_type == tag.value
    if tag.category == TagCategory.ABILITY:
        return tags.ability == tag.value
    if tag.category == TagCategory.CORE_STAT:
        return tags.core_stat == tag.value
    if tag.category == TagCategory.ORGANIZATIONAL:
        return any(org.value == tag.value for org in tags.organizational)
    return False


def matches(expr: ContextExpression | None, tags: CurrentTags) -> bool:
    """Check whether a roll's tags satisfy a context expression.

    Args:
        expr: The expression, or None for the wildcard.
        tags: Tags of the roll being resolved.

    Returns:
        True if the expression matches. None matches every roll; a leaf with
        an unknown category never matches.

    Example:
        >>> expr = ContextExpression.leaf("roll_type", "ability_check")
        >>> matches(expr, CurrentTags(roll_type="ability_check"))
        True
    """
    if expr is None:
        return True
    if expr.tag is not None:
        return _leaf_matches(expr.tag, tags)

    if expr.operator is LogicalOperator.AND:
        return all(matches(child, tags) for child in expr.children)
    if expr.operator is LogicalOperator.OR:
        return any(matches(child, tags) for child in expr.children)
    # NOT has exactly one child, guaranteed at construction
    return not matches(expr.children[0], tags)


def expression_to_string(expr: ContextExpression) -> str:
    """Render an expression for display.

    Example:
        >>> expression_to_string(CONTEXT_PRESETS["RESEARCH_OR_INVESTIGATION"][1])
        '(research OR investigation)'
    """
    if expr.tag is not None:
        return expr.tag.value
    parts = [expression_to_string(child) for child in expr.children]
    if expr.operator is LogicalOperator.NOT:
        return f"NOT ({parts[0]})"
    return "(" + f" {expr.operator.value} ".join(parts) + ")"


def extract_tag_references(expr: ContextExpression) -> list[TagReference]:
    """Collect every leaf tag, depth-first."""
    if expr.tag is not None:
        return [expr.tag]
    refs: list[TagReference] = []
    for child in expr.children:
        refs.extend(extract_tag_references(child))
    return refs


def _checks_for(core_stat: str) -> ContextExpression:
    return ContextExpression.all_of(
        ContextExpression.leaf(TagCategory.CORE_STAT, core_stat),
        ContextExpression.leaf(TagCategory.ROLL_TYPE, "ability_check"),
    )


CONTEXT_PRESETS: dict[str, tuple[str, ContextExpression]] = {
    "ANY_ABILITY_CHECK": (
        "Any Ability Check",
        ContextExpression.leaf(TagCategory.ROLL_TYPE, "ability_check"),
    ),
    "ANY_SAVING_THROW": (
        "Any Saving Throw",
        ContextExpression.leaf(TagCategory.ROLL_TYPE, "saving_throw"),
    ),
    "BODY_CHECKS": ("Body-based Checks", _checks_for("body")),
    "MIND_CHECKS": ("Mind-based Checks", _checks_for("mind")),
    "RESEARCH_OR_INVESTIGATION": (
        "Research or Investigation",
        ContextExpression.any_of(
            ContextExpression.leaf(TagCategory.ABILITY, "research"),
            ContextExpression.leaf(TagCategory.ABILITY, "investigation"),
        ),
    ),
}
"""Common expressions for quick effect creation: key -> (label, expression)."""


__all__ = [
    "matches",
    "expression_to_string",
    "extract_tag_references",
    "CONTEXT_PRESETS",
]
