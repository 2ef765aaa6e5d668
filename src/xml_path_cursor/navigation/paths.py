"""Path matching helpers layered on the cursor's primitive moves.

A path is a sequence of element names, one per nesting level, where the
cursor's wildcard token (``"*"`` by default) accepts any element. Matching
walks forward with backtracking: when a level runs out of candidates the
search falls back to the parent level and tries its next sibling, always
retrying the most recently abandoned level first.
"""

from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence

from xml_path_cursor.shared import InvalidMoveError

if TYPE_CHECKING:
    from .cursor import PathCursor


def split_path(expression: str) -> List[str]:
    """Split a slash-separated path such as ``"/catalog/*/title"``."""
    names = [part for part in expression.strip().split("/") if part]
    if not names:
        raise InvalidMoveError(f"Path expression has no element names: {expression!r}")
    return names


def _validate(names: Sequence[str]) -> None:
    if isinstance(names, str):
        raise InvalidMoveError("Path must be a sequence of names, not a string")
    if not names:
        raise InvalidMoveError("Path must contain at least one name")
    for name in names:
        if not name:
            raise InvalidMoveError("Path entries must be non-empty strings")


def _search(cursor: "PathCursor", names: Sequence[str], index: int) -> int:
    wildcard = cursor.config.wildcard
    while True:
        name = names[index]
        entered = cursor.step() if name == wildcard else cursor.step(name)
        if entered is not None:
            index += 1
            if index == len(names):
                return cursor.depth
        else:
            index -= 1
            if index < 0:
                return -1


def match_path(cursor: "PathCursor", names: Sequence[str]) -> int:
    """Find the next chain of nested elements matching ``names``.

    ``names[0]`` is looked for among the children of the current position
    (the root element itself when the cursor has not moved yet).

    Returns:
        Depth of the last matched element, or -1 when no match remains
    """
    _validate(names)
    return _search(cursor, names, 0)


def resume_path(cursor: "PathCursor", names: Sequence[str], from_depth: int) -> int:
    """Continue after a match of ``names`` that ended at ``from_depth``.

    The cursor first rises to the parent of the last matched element, then
    searches for the next element matching the tail of ``names``, falling
    back to earlier levels as they run out.

    Returns:
        Depth of the last matched element, or -1 when no further match exists
        or the cursor is already above the matched region

    Raises:
        InvalidMoveError: If ``from_depth`` is below 1
    """
    _validate(names)
    if from_depth < 1:
        raise InvalidMoveError(f"from_depth must be >= 1, got {from_depth}")

    parent_depth = from_depth - 1
    if cursor.depth < parent_depth:
        return -1
    if cursor.depth > parent_depth:
        cursor.back_to(parent_depth)
    return _search(cursor, names, len(names) - 1)


def iter_scan(
    cursor: "PathCursor",
    name: str,
    from_depth: Optional[int] = None
) -> Iterator[int]:
    """Yield the cursor depth at every element named ``name``.

    The cursor is positioned just inside each match when it is yielded, so
    the caller may read its text or step into it before asking for the next.
    """
    floor = cursor.scan(name, from_depth)
    while floor >= 0:
        yield cursor.depth
        floor = cursor.scan(name, floor)


def iter_path(cursor: "PathCursor", names: Sequence[str]) -> Iterator[int]:
    """Yield the depth of every successive match of ``names``."""
    depth = match_path(cursor, names)
    while depth >= 0:
        yield depth
        depth = resume_path(cursor, names, depth)
