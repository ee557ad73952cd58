"""Context expression trees and the tags of an in-flight roll.

A context expression is a small tree of AND/OR/NOT operator nodes over tag
leaves. It arrives from storage as JSON and is parsed and validated once,
at construction time. Arity and depth violations raise
ContextExpressionError so a malformed tree can never reach evaluation.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from lifequest.core.constants import MAX_CONTEXT_DEPTH
from lifequest.core.exceptions import ContextExpressionError
from lifequest.models.enums import LogicalOperator


_CATEGORY_ALIASES = {
    "rollType": "roll_type",
    "coreStat": "core_stat",
}


class TagReference(BaseModel):
    """A leaf reference to one tag category and value.

    The category is kept as a plain string so that an unknown category
    survives parsing and simply never matches.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    category: str
    value: str

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, value: Any) -> Any:
        """Accept the camelCase spellings used by stored expressions."""
        if isinstance(value, str):
            return _CATEGORY_ALIASES.get(value, value)
        return value


class ContextExpression(BaseModel):
    """A node of a context expression tree.

    A node is either a leaf (``tag`` set, no operator) or an operator node
    (``operator`` set with children). NOT takes exactly one child; AND and
    OR take at least one. The deepest node may sit at depth 3.

    Example:
        >>> expr = ContextExpression.model_validate({
        ...     "operator": "AND",
        ...     "children": [
        ...         {"tag": {"category": "coreStat", "value": "mind"}},
        ...         {"tag": {"category": "rollType", "value": "ability_check"}},
        ...     ],
        ... })
        >>> expr.height
        1
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    operator: LogicalOperator | None = None
    tag: TagReference | None = None
    children: tuple[ContextExpression, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def validate_structure(self) -> "ContextExpression":
        """Enforce arity and depth rules.

        Children are validated before their parent, so checking this node's
        height also covers every subtree below it.

        Raises:
            ContextExpressionError: On any structural violation.
        """
        if self.operator is None:
            if self.tag is None:
                raise ContextExpressionError("Leaf node must have a tag reference")
            if self.children:
                raise ContextExpressionError("Leaf node cannot have children")
            return self

        if self.tag is not None:
            raise ContextExpressionError(
                "Operator node cannot also carry a tag",
                operator=self.operator.value,
            )
        if not self.children:
            raise ContextExpressionError(
                f"Operator {self.operator.value} must have at least one child",
                operator=self.operator.value,
            )
        if self.operator is LogicalOperator.NOT and len(self.children) != 1:
            raise ContextExpressionError(
                "NOT operator must have exactly one child",
                operator=self.operator.value,
                details={"child_count": len(self.children)},
            )
        if self.height > MAX_CONTEXT_DEPTH:
            raise ContextExpressionError(
                f"Context expression exceeds maximum nesting depth of {MAX_CONTEXT_DEPTH}",
                operator=self.operator.value,
                depth=self.height,
            )
        return self

    @property
    def height(self) -> int:
        """Depth of the deepest node below this one (a leaf has height 0)."""
        if not self.children:
            return 0
        return 1 + max(child.height for child in self.children)

    @property
    def is_leaf(self) -> bool:
        return self.tag is not None

    @classmethod
    def leaf(cls, category: str, value: str) -> ContextExpression:
        """Build a leaf node."""
        return cls(tag=TagReference(category=category, value=value))

    @classmethod
    def all_of(cls, *children: ContextExpression) -> ContextExpression:
        """Build an AND node."""
        return cls(operator=LogicalOperator.AND, children=children)

    @classmethod
    def any_of(cls, *children: ContextExpression) -> ContextExpression:
        """Build an OR node."""
        return cls(operator=LogicalOperator.OR, children=children)

    @classmethod
    def negate(cls, child: ContextExpression) -> ContextExpression:
        """Build a NOT node."""
        return cls(operator=LogicalOperator.NOT, children=(child,))

    @classmethod
    def parse(cls, raw: str | dict[str, Any] | ContextExpression | None) -> ContextExpression | None:
        """Parse a stored expression.

        Args:
            raw: JSON text, a decoded dict, an existing expression or None.

        Returns:
            The validated expression, or None for the wildcard.

        Raises:
            ContextExpressionError: If the structure is invalid.
        """
        if raw is None or isinstance(raw, ContextExpression):
            return raw
        if isinstance(raw, str):
            if not raw.strip():
                return None
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as exc:
                raise ContextExpressionError(
                    f"Context expression is not valid JSON: {exc}"
                ) from exc
            if raw is None:
                return None
        return cls.model_validate(raw)


ContextExpression.model_rebuild()


class OrganizationalTag(BaseModel):
    """A user-defined organizational tag such as ``Quest: Novel``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    category: str
    value: str


class CurrentTags(BaseModel):
    """Tags describing the roll being resolved.

    Attributes:
        roll_type: Roll type tag (ability_check, saving_throw, ...).
        ability: Name of the ability being rolled.
        core_stat: Core stat of that ability.
        organizational: User-defined organizational tags.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    roll_type: str | None = None
    ability: str | None = None
    core_stat: str | None = None
    organizational: tuple[OrganizationalTag, ...] = Field(default_factory=tuple)


__all__ = [
    "TagReference",
    "ContextExpression",
    "OrganizationalTag",
    "CurrentTags",
]
