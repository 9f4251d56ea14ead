"""
Exception hierarchy for cbac.

All errors raised by the engine itself inherit from CBACError, so callers
can tell them apart from failures raised by their own decision providers.
Provider errors are never wrapped: they reach the caller unchanged.

Exception Categories:
    - UnknownAccessError: An access kind is not in the registry
    - UnknownContentError: A resolved matrix is missing a content row

Design Principles:
    - All errors have error codes for programmatic handling
    - All errors carry the offending identifier in their context
    - Errors are both human-readable and machine-parseable (to_dict)
"""

from dataclasses import dataclass, field
from typing import Any


# =============================================================================
# Error Codes
# =============================================================================

# Access errors: 1xxx
ERROR_UNKNOWN_ACCESS = 1001

# Content errors: 2xxx
ERROR_UNKNOWN_CONTENT = 2001


# =============================================================================
# Base Exception
# =============================================================================


@dataclass
class CBACError(Exception):
    """
    Base exception for all cbac errors.

    Attributes:
        message: Human-readable error description
        code: Numeric error code for programmatic handling
        suggestion: Optional hint for how to resolve the error
        context: Optional dict with additional debugging info
    """

    message: str = ""
    code: int = 0
    suggestion: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Format error for display."""
        parts = [f"[E{self.code}] {self.message}"]
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def __repr__(self) -> str:
        """Format error for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "suggestion": self.suggestion,
            "context": {key: _printable(value) for key, value in self.context.items()},
        }


def _printable(value: Any) -> Any:
    """Identifiers are opaque, so only JSON scalars are passed through as-is."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return repr(value)


# =============================================================================
# Access Errors
# =============================================================================


@dataclass
class AccessError(CBACError):
    """
    Base class for errors about access kinds.

    Attributes:
        access: The access identifier that caused the error
    """

    access: Any = None

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        self.context["access"] = self.access


@dataclass
class UnknownAccessError(AccessError):
    """
    Raised when a requested access kind is not registered.

    Unknown accesses are a programming error on the caller's side, not a
    denial, so they are reported instead of defaulting to False.
    """

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"No such access: {self.access}"
        if self.code == 0:
            self.code = ERROR_UNKNOWN_ACCESS
        if not self.suggestion:
            self.suggestion = "Register the access when building the engine"
        super().__post_init__()


# =============================================================================
# Content Errors
# =============================================================================


@dataclass
class ContentError(CBACError):
    """
    Base class for errors about content items.

    Attributes:
        content: The content identifier that caused the error
    """

    content: Any = None

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        self.context["content"] = self.content


@dataclass
class UnknownContentError(ContentError):
    """Raised when a resolved matrix has no row for the requested content."""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"No such content: {self.content}"
        if self.code == 0:
            self.code = ERROR_UNKNOWN_CONTENT
        super().__post_init__()
