"""Exception hierarchy for cursor navigation.

Stream errors mean the document itself is broken and the cursor cannot be
trusted afterwards. Invalid moves are programming errors on the caller side.
"""

from typing import Optional


class NavigationError(Exception):
    """Base exception for all cursor navigation failures."""


class StreamReadError(NavigationError):
    """Raised when the underlying document is malformed, truncated or unreadable."""

    def __init__(self, message: str, line: Optional[int] = None,
                 column: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.column = column


class InvalidMoveError(NavigationError, ValueError):
    """Raised when a cursor operation is called with arguments it cannot honour."""
