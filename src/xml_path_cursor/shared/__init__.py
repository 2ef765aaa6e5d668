"""Shared utilities for cursor navigation.

This module provides configuration, metrics, the exception hierarchy and
logging helpers used by the event source, the cursor and the tools.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    CursorConfig,
)
from .errors import (
    InvalidMoveError,
    NavigationError,
    StreamReadError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import TraversalMetrics

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "CursorConfig",
    "InvalidMoveError",
    "NavigationError",
    "StreamReadError",
    "CorrelationLogger",
    "get_logger",
    "TraversalMetrics",
]
