"""Exception hierarchy for the LifeQuest engine.

Every exception derives from LifeQuestError and carries a ``details`` dict,
so callers at the application boundary can log one structured payload
regardless of where the error came from.

The effect engine itself fails closed: malformed conditions and unknown
ability names never raise. Exceptions are reserved for construction-time
validation (context expressions, settings) and engine misconfiguration.

Example:
    >>> from lifequest.core.exceptions import ContextExpressionError
    >>> raise ContextExpressionError("NOT operator must have exactly one child")
"""

from __future__ import annotations

from typing import Any


def _with_context(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
    merged = dict(details or {})
    merged.update({key: value for key, value in context.items() if value is not None})
    return merged


class LifeQuestError(Exception):
    """Base exception for all LifeQuest errors.

    Attributes:
        message: Human-readable error description.
        details: Structured context for logging; empty when none was given.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = dict(details or {})
        super().__init__(str(self))

    def __str__(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} [{rendered}]"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation
# =============================================================================


class ConfigurationError(LifeQuestError):
    """Settings could not be loaded or hold an incompatible combination."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=_with_context(details, config_key=config_key))


class ValidationError(LifeQuestError):
    """A stored record violates a structural constraint.

    Not to be confused with ``pydantic.ValidationError``, which is what field
    constraints on request models raise.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            details=_with_context(details, field_name=field_name, invalid_value=invalid_value),
        )


class ContextExpressionError(ValidationError):
    """A context expression tree violates arity or depth rules.

    Raised while the tree is being constructed, so a malformed expression
    never reaches evaluation.

    Args:
        message: Human-readable error description.
        operator: Logical operator of the offending node, if any.
        depth: Depth of the offending subtree, if relevant.
        details: Additional context.
    """

    def __init__(
        self,
        message: str,
        *,
        operator: str | None = None,
        depth: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            field_name="context_expression",
            details=_with_context(details, operator=operator, depth=depth),
        )


# =============================================================================
# Engine
# =============================================================================


class EngineError(LifeQuestError):
    """The engine itself is misconfigured.

    Bad effect data never lands here; it simply does not apply.
    """


class UnknownStrategyError(EngineError):
    """An outcome or XP strategy name is not registered."""

    def __init__(
        self,
        message: str,
        *,
        strategy: str | None = None,
        available: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            details=_with_context(details, strategy=strategy, available=available),
        )


__all__ = [
    "LifeQuestError",
    "ConfigurationError",
    "ValidationError",
    "ContextExpressionError",
    "EngineError",
    "UnknownStrategyError",
]
