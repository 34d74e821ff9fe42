"""Custom exception hierarchy for case-combinator.

Every error raised by the library itself inherits from CombinatorError and
carries:
- error_code: an ErrorCode enum for programmatic handling
- context: ErrorContext describing where the error happened
- suggestions: actionable steps to resolve the issue

Errors raised by caller-supplied axis functions or predicates are never
wrapped; they reach the caller unchanged.

Example:
    try:
        TestCaseCombinator([], [([[1], [2]], lambda r, v: v)])
    except CombinatorError as e:
        print(f"Error [{e.error_code.value}]: {e.message}")
        for suggestion in e.suggestions:
            print(f"  - {suggestion}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes.

    - E1xx: Combination generation errors
    - E2xx: Configuration errors
    - E3xx: CLI target loading errors
    - E9xx: Unknown/internal errors
    """

    UNHASHABLE_VALUE = "E101"

    INVALID_CONFIG = "E201"
    CONFIG_LOAD_FAILED = "E202"

    TARGET_NOT_FOUND = "E301"
    TARGET_INVALID = "E302"

    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if code_num < 200:
            return "generation"
        elif code_num < 300:
            return "config"
        elif code_num < 400:
            return "cli"
        else:
            return "unknown"


@dataclass
class ErrorContext:
    """Structured context for error logging and debugging.

    Attributes:
        value: repr() of the offending value, if any.
        target: CLI target or file path involved, if any.
        extra: Additional context-specific information.
        timestamp: When the error occurred.
    """

    value: str | None = None
    target: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for serialization."""
        result = {
            "value": self.value,
            "target": self.target,
            "extra": self.extra,
            "timestamp": self.timestamp.isoformat(),
        }
        return {k: v for k, v in result.items() if v is not None}

    def format_location(self) -> str:
        """Format the error location as a readable string."""
        parts = []
        if self.target:
            parts.append(f"target={self.target}")
        if self.value is not None:
            parts.append(f"value={self.value}")
        return " > ".join(parts) if parts else "unknown location"


class CombinatorError(Exception):
    """Base exception for all case-combinator errors.

    Attributes:
        error_code: Unique ErrorCode for this error type
        message: Human-readable error description
        context: ErrorContext with location details
        suggestions: List of actionable steps to resolve the issue
        cause: The underlying exception (if any)
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"
    default_suggestions: list[str] = []

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
        suggestions: list[str] | None = None,
        **extra_context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self._suggestions = suggestions

        if extra_context:
            self.context.extra.update(extra_context)

        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        """Get actionable suggestions for resolving this error."""
        if self._suggestions is not None:
            return self._suggestions
        return self.default_suggestions.copy()

    def __str__(self) -> str:
        parts = [f"[{self.error_code.value}] {self.message}"]

        location = self.context.format_location()
        if location != "unknown location":
            parts.append(f"at {location}")

        return " | ".join(parts)

    def format_verbose(self) -> str:
        """Format error with full details including suggestions."""
        lines = [
            f"Error [{self.error_code.value}]: {self.message}",
        ]

        location = self.context.format_location()
        if location != "unknown location":
            lines.append(f"Location: {location}")

        if self.cause is not None:
            lines.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        if self.suggestions:
            lines.append("")
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  - {suggestion}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "suggestions": self.suggestions,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


class UnhashableValueError(CombinatorError):
    """A generated or marked input value cannot be hashed.

    Both the combination set and the success set use value-based
    membership, so every input must be hashable unless a ``key`` function
    supplies a hashable identity for it.
    """

    error_code = ErrorCode.UNHASHABLE_VALUE
    default_message = "Input value is not hashable"
    default_suggestions = [
        "Use immutable input types (tuple, frozenset, frozen dataclass, NamedTuple)",
        "Pass key=... to TestCaseCombinator to map each input to a hashable identity",
    ]


class ConfigValidationError(CombinatorError, ValueError):
    """A configuration field holds an invalid value.

    Also a ValueError so that pydantic validators surface it as a regular
    validation failure.
    """

    error_code = ErrorCode.INVALID_CONFIG
    default_message = "Invalid configuration"

    def __init__(
        self,
        message: str | None = None,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        self.value = value
        super().__init__(message, **kwargs)
        if field is not None:
            self.context.extra.setdefault("field", field)


class ConfigLoadError(CombinatorError):
    """The configuration file could not be read or parsed."""

    error_code = ErrorCode.CONFIG_LOAD_FAILED
    default_message = "Failed to load configuration"
    default_suggestions = [
        "Check that the file exists and is readable",
        "Make sure the file contains a YAML mapping at the top level",
    ]


class TargetLoadError(CombinatorError):
    """A ``module:attribute`` CLI target could not be resolved."""

    error_code = ErrorCode.TARGET_NOT_FOUND
    default_message = "Could not load combinator target"
    default_suggestions = [
        "Use the form 'package.module:attribute'",
        "Make sure the module is importable from the current directory",
        "The attribute must be a TestCaseCombinator or a zero-argument callable returning one",
    ]
