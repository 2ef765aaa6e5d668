"""Navigation layer: the path cursor and path-matching helpers."""

from .cursor import PathCursor
from .paths import iter_path, iter_scan, match_path, resume_path, split_path
from .state import LastMove, MoveKind

__all__ = [
    "LastMove",
    "MoveKind",
    "PathCursor",
    "iter_path",
    "iter_scan",
    "match_path",
    "resume_path",
    "split_path",
]
