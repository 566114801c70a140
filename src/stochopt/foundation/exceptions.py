"""
stochopt exception hierarchy.

Provides user-friendly exceptions with helpful error messages and suggestions.
All stochopt-specific exceptions inherit from StochOptError for easy catching.

Example:
    try:
        element.modification(0, 2.5)
    except StochOptError as e:
        print(f"Search failed: {e}")
        print(f"Suggestion: {e.suggestion}")

Errors raised by a problem's evaluation function are never wrapped: they
propagate out of the engine unchanged.
"""

from __future__ import annotations

from typing import Any


class StochOptError(Exception):
    """
    Base exception for all stochopt errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(StochOptError):
    """Raised when configuration is invalid or incomplete."""

    pass


class InvalidMetaheuristicError(ConfigurationError):
    """Raised when an unknown metaheuristic is specified."""

    def __init__(
        self,
        name: str,
        available: list[str] | None = None,
        close_matches: list[str] | None = None,
    ) -> None:
        available = available or []
        message = f"Unknown metaheuristic '{name}'."
        if close_matches:
            suggestion = "Did you mean " + " or ".join(f"'{m}'" for m in close_matches) + "?"
        else:
            suggestion = f"Available metaheuristics: {', '.join(available)}" if available else None
        super().__init__(message, suggestion, {"name": name, "available": available})


class InvalidOperatorError(ConfigurationError):
    """Raised when an unknown operator (selection, crossover, ...) is specified."""

    def __init__(
        self,
        operator_type: str,
        operator_name: str,
        available: list[str] | None = None,
    ) -> None:
        message = f"Unknown {operator_type} operator '{operator_name}'."
        suggestion = f"Available {operator_type} operators: {', '.join(available)}" if available else None
        super().__init__(
            message,
            suggestion,
            {"operator_type": operator_type, "operator_name": operator_name},
        )


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str, config_class: str | None = None) -> None:
        message = f"Missing required configuration: '{field}'."
        suggestion = f"Add '{field}' to your configuration"
        if config_class:
            suggestion += f" (see {config_class})"
        super().__init__(message, suggestion, {"field": field})


# =============================================================================
# Problem Errors
# =============================================================================


class ProblemError(StochOptError):
    """Base class for problem-related errors."""

    pass


class InvalidProblemError(ProblemError):
    """Raised when an unknown problem is specified."""

    def __init__(self, problem: str, available: list[str] | None = None) -> None:
        message = f"Unknown problem '{problem}'."
        if available:
            examples = available[:5]
            suggestion = f"Examples: {', '.join(examples)}. Use available_problems() for full list."
        else:
            suggestion = "Use available_problems() to see registered problems."
        super().__init__(message, suggestion, {"problem": problem})


class ProblemDimensionError(ProblemError):
    """Raised when the element length of a problem is invalid."""

    def __init__(self, message: str, length: int | None = None) -> None:
        suggestion = "Element specs need a positive integer length"
        super().__init__(message, suggestion, {"length": length})


class BoundsError(ProblemError):
    """Raised when bounds are invalid or inconsistent."""

    def __init__(self, message: str) -> None:
        suggestion = "Ensure minimum_value <= maximum_value and both are finite"
        super().__init__(message, suggestion)


class InvalidValueError(ProblemError):
    """Raised when an element is given a NaN or out of bounds value."""

    def __init__(
        self,
        value: float,
        index: int | None = None,
        minimum_value: float | None = None,
        maximum_value: float | None = None,
    ) -> None:
        where = f" at index {index}" if index is not None else ""
        message = f"Invalid value {value!r}{where} for element."
        suggestion = None
        if minimum_value is not None and maximum_value is not None:
            suggestion = f"Values must lie within [{minimum_value}, {maximum_value}]"
        super().__init__(
            message,
            suggestion,
            {
                "value": value,
                "index": index,
                "minimum_value": minimum_value,
                "maximum_value": maximum_value,
            },
        )
        self.value = value
        self.index = index


__all__ = [
    "StochOptError",
    "ConfigurationError",
    "InvalidMetaheuristicError",
    "InvalidOperatorError",
    "MissingConfigError",
    "ProblemError",
    "InvalidProblemError",
    "ProblemDimensionError",
    "BoundsError",
    "InvalidValueError",
]
