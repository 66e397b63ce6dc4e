"""LexRipple exception hierarchy.

The propagation engine degrades silently on data conditions (unknown
objects, weak signals, traversal ceilings). Exceptions are reserved for
construction boundaries, such as sizing a history buffer outside its
allowed range.
"""

from __future__ import annotations


class LexRippleError(Exception):
    """Base exception for all LexRipple errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code.
    """

    code: str = "lexripple_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }


class ValidationError(LexRippleError):
    """Invalid input provided at a construction boundary.

    Attributes:
        field: The field that failed validation.
    """

    code: str = "validation_error"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")

    def to_dict(self) -> dict[str, object]:
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code,
                "field": self.field,
                "message": self.message,
            }
        }


__all__ = [
    "LexRippleError",
    "ValidationError",
]
