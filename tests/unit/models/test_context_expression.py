"""Tests for context expression construction and validation."""

from __future__ import annotations

import json

import pytest

from lifequest.core.exceptions import ContextExpressionError
from lifequest.models import ContextExpression, LogicalOperator, TagReference


def _nest(depth: int) -> dict:
    """Build a chain of NOT nodes whose leaf sits at the given depth."""
    node: dict = {"tag": {"category": "ability", "value": "research"}}
    for _ in range(depth):
        node = {"operator": "NOT", "children": [node]}
    return node


class TestTagReference:
    """Tests for TagReference."""

    def test_camel_case_categories(self) -> None:
        """Test stored camelCase category spellings are normalized."""
        assert TagReference(category="rollType", value="x").category == "roll_type"
        assert TagReference(category="coreStat", value="x").category == "core_stat"

    def test_unknown_category_kept(self) -> None:
        """Test an unknown category survives parsing."""
        assert TagReference(category="weather", value="rain").category == "weather"


class TestContextExpressionStructure:
    """Tests for construction-time structural rules."""

    def test_leaf(self) -> None:
        """Test a simple leaf."""
        expr = ContextExpression.leaf("ability", "research")
        assert expr.is_leaf
        assert expr.height == 0

    def test_nested_from_dict(self) -> None:
        """Test parsing a nested expression."""
        expr = ContextExpression.model_validate(
            {
                "operator": "AND",
                "children": [
                    {"tag": {"category": "coreStat", "value": "mind"}},
                    {"tag": {"category": "rollType", "value": "ability_check"}},
                ],
            }
        )
        assert expr.operator is LogicalOperator.AND
        assert len(expr.children) == 2
        assert expr.height == 1

    def test_not_requires_exactly_one_child(self) -> None:
        """Test NOT with two children is rejected at construction."""
        leaf = ContextExpression.leaf("ability", "research")
        with pytest.raises(ContextExpressionError) as exc_info:
            ContextExpression(operator=LogicalOperator.NOT, children=(leaf, leaf))

        assert exc_info.value.details["operator"] == "NOT"

    def test_empty_and_rejected(self) -> None:
        """Test AND without children is rejected."""
        with pytest.raises(ContextExpressionError):
            ContextExpression(operator=LogicalOperator.AND)

    def test_empty_or_rejected(self) -> None:
        """Test OR without children is rejected."""
        with pytest.raises(ContextExpressionError):
            ContextExpression.model_validate({"operator": "OR", "children": []})

    def test_leaf_without_tag_rejected(self) -> None:
        """Test a node with neither operator nor tag is rejected."""
        with pytest.raises(ContextExpressionError):
            ContextExpression()

    def test_operator_with_tag_rejected(self) -> None:
        """Test a node cannot be both leaf and operator."""
        with pytest.raises(ContextExpressionError):
            ContextExpression.model_validate(
                {
                    "operator": "OR",
                    "tag": {"category": "ability", "value": "research"},
                    "children": [{"tag": {"category": "ability", "value": "research"}}],
                }
            )

    def test_depth_three_allowed(self) -> None:
        """Test the deepest node may sit at depth 3."""
        expr = ContextExpression.model_validate(_nest(3))
        assert expr.height == 3

    def test_depth_four_rejected(self) -> None:
        """Test a leaf at depth 4 is rejected."""
        with pytest.raises(ContextExpressionError) as exc_info:
            ContextExpression.model_validate(_nest(4))

        assert exc_info.value.details["depth"] == 4


class TestContextExpressionParse:
    """Tests for ContextExpression.parse."""

    def test_none_and_blank(self) -> None:
        """Test the wildcard spellings."""
        assert ContextExpression.parse(None) is None
        assert ContextExpression.parse("  ") is None
        assert ContextExpression.parse("null") is None

    def test_json_text(self) -> None:
        """Test parsing stored JSON text."""
        raw = json.dumps({"tag": {"category": "rollType", "value": "saving_throw"}})
        expr = ContextExpression.parse(raw)
        assert expr is not None
        assert expr.tag == TagReference(category="roll_type", value="saving_throw")

    def test_invalid_json(self) -> None:
        """Test malformed JSON surfaces as a domain error."""
        with pytest.raises(ContextExpressionError):
            ContextExpression.parse("{not json")

    def test_existing_instance_passthrough(self) -> None:
        """Test an already-built expression is returned unchanged."""
        expr = ContextExpression.leaf("ability", "research")
        assert ContextExpression.parse(expr) is expr
