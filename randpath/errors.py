"""Exception types raised by path generation."""

from __future__ import annotations


class RandPathError(Exception):
    """Base class for all randpath errors."""


class InvalidParameterError(RandPathError, ValueError):
    """Raised before any allocation when generation parameters are unusable."""


class StarvationError(RandPathError, RuntimeError):
    """Raised when a value draw cannot find an admissible candidate.

    Rejection sampling is bounded by ``max_draw_attempts``; exhausting the
    budget, or emptying an availability set before its margin is full, means
    the margin length leaves too little slack in the segment.
    """

    def __init__(self, message: str, attempts: int | None = None) -> None:
        super().__init__(message)
        self.attempts = attempts
