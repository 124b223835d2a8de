"""
Error handling for cofi.

Structured error codes so callers (GUI layer, diagnostic CLI) can tell a
capacity problem from a persistence problem without string matching.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for cofi.

    Ranges:
    - 1000-1099: Capacity errors
    - 1100-1199: Registry errors
    - 1200-1299: File system errors
    - 1300-1399: Window system errors
    """

    # Capacity errors (1000-1099)
    CAPACITY_EXCEEDED = 1000
    TOO_MANY_WINDOWS = 1001
    TOO_MANY_NAMED_WINDOWS = 1002

    # Registry errors (1100-1199)
    INVALID_SLOT = 1100
    INVALID_NAME_INDEX = 1101
    EMPTY_CUSTOM_NAME = 1102

    # File system errors (1200-1299)
    FILE_READ_ERROR = 1200
    PARSE_ERROR = 1202

    # Window system errors (1300-1399)
    WINDOW_SYSTEM_UNAVAILABLE = 1301


class CofiError(Exception):
    """Base exception for cofi errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize cofi error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for JSON output.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result

    def __str__(self) -> str:
        """Format error for display."""
        parts = [f"[{self.code.name}] {self.message}"]

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        return "\n".join(parts)


class CapacityExceededError(CofiError):
    """A fixed-capacity collection would grow past its limit."""

    def __init__(self, what: str, limit: int, attempted: int,
                 code: ErrorCode = ErrorCode.CAPACITY_EXCEEDED):
        super().__init__(
            code=code,
            message=f"Too many {what}: {attempted} exceeds limit of {limit}",
            suggestion=f"Close some {what} or remove unused entries",
            context={"limit": limit, "attempted": attempted},
        )
        self.limit = limit
        self.attempted = attempted


class InvalidSlotError(CofiError):
    """Harpoon slot key is not one of 0-9 or a-z."""

    def __init__(self, key: Any):
        super().__init__(
            code=ErrorCode.INVALID_SLOT,
            message=f"Invalid harpoon slot: {key!r}",
            suggestion="Use a single character 0-9 or a-z, or an index 0-35",
            context={"key": str(key)},
        )


class RegistryError(CofiError):
    """Invalid mutation of a named window registry."""
    pass



class SnapshotError(CofiError):
    """The window system could not produce a snapshot."""
    pass
