"""XML Path Cursor.

A stateful navigation layer over a forward-only XML pull-parsing stream:
descend into named children, skip whole sibling subtrees, read leaf text,
enumerate repeated elements and jump back up several levels without ever
building a document tree.

Progressive API Disclosure:
- Level 1: Simple function - open_cursor()
- Level 2: Configured cursor - PathCursor with CursorConfig / EventSourceFactory
- Level 3: Path helpers and tools - iter_path(), iter_scan(), dump()
"""

from typing import Optional

__version__ = "0.1.0"
__author__ = "XML Path Cursor Team"

from .events import EventSourceFactory, EventType, InputType, XMLEvent, XMLEventSource
from .navigation import (
    LastMove,
    MoveKind,
    PathCursor,
    iter_path,
    iter_scan,
    split_path,
)
from .shared import (
    CursorConfig,
    InvalidMoveError,
    NavigationError,
    StreamReadError,
)
from .tools import StructureEntry, dump, dump_to_string, parse_dump


def open_cursor(
    input_data: InputType,
    config: Optional[CursorConfig] = None,
    correlation_id: Optional[str] = None
) -> PathCursor:
    """Open a path cursor over XML content, bytes, a Path or a file-like object.

    Examples:
        >>> with open_cursor("<r><a>1</a></r>") as cursor:
        ...     cursor.path(["r", "a"]), cursor.back()
        (2, '1')
    """
    return PathCursor.open(input_data, config, correlation_id=correlation_id)


__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple entry point
    "open_cursor",

    # Level 2: Cursor, configuration and event source
    "PathCursor",
    "CursorConfig",
    "EventSourceFactory",
    "XMLEventSource",
    "XMLEvent",
    "EventType",
    "LastMove",
    "MoveKind",

    # Level 3: Helpers and tools
    "iter_path",
    "iter_scan",
    "split_path",
    "dump",
    "dump_to_string",
    "parse_dump",
    "StructureEntry",

    # Errors
    "NavigationError",
    "StreamReadError",
    "InvalidMoveError",
]
