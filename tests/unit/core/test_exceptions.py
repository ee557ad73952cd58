"""Tests for the exception hierarchy."""

from __future__ import annotations

from lifequest.core.exceptions import (
    ConfigurationError,
    ContextExpressionError,
    EngineError,
    LifeQuestError,
    UnknownStrategyError,
    ValidationError,
)


class TestLifeQuestError:
    """Tests for the base LifeQuestError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = LifeQuestError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = LifeQuestError(
            "Test error",
            details={"key": "value", "count": 42},
        )
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        exc = LifeQuestError("Test", details={"x": 1})
        repr_str = repr(exc)
        assert "LifeQuestError" in repr_str
        assert "Test" in repr_str
        assert "x" in repr_str


class TestValidationExceptions:
    """Tests for configuration and validation exceptions."""

    def test_configuration_error_with_key(self) -> None:
        """Test ConfigurationError records the config key."""
        exc = ConfigurationError("Bad value", config_key="log_level")
        assert exc.details["config_key"] == "log_level"

    def test_validation_error_with_field(self) -> None:
        """Test ValidationError records field and value."""
        exc = ValidationError("Invalid", field_name="die_value", invalid_value=21)
        assert exc.details["field_name"] == "die_value"
        assert exc.details["invalid_value"] == 21

    def test_context_expression_error(self) -> None:
        """Test ContextExpressionError carries operator and depth."""
        exc = ContextExpressionError("Too deep", operator="AND", depth=4)
        assert exc.details["field_name"] == "context_expression"
        assert exc.details["operator"] == "AND"
        assert exc.details["depth"] == 4

    def test_inheritance(self) -> None:
        """Test exception inheritance chain."""
        exc = ContextExpressionError("Error")
        assert isinstance(exc, ValidationError)
        assert isinstance(exc, LifeQuestError)
        assert not isinstance(exc, ValueError)


class TestEngineExceptions:
    """Tests for engine exceptions."""

    def test_unknown_strategy_error(self) -> None:
        """Test UnknownStrategyError lists the registered names."""
        exc = UnknownStrategyError(
            "Unknown XP strategy: generous",
            strategy="generous",
            available=["always_award", "default"],
        )
        assert exc.details["strategy"] == "generous"
        assert exc.details["available"] == ["always_award", "default"]
        assert isinstance(exc, EngineError)
        assert isinstance(exc, LifeQuestError)
