"""Stateful path cursor over a forward-only XML event stream.

The cursor keeps a virtual path stack of open element names, the current
depth and a record of its last move. Every navigation primitive is realised
purely by consuming more events: skipping a sibling means reading through its
balanced subtree, going up ``n`` levels means reading until ``n`` more end
events than start events have been seen.
"""

from typing import List, Optional, Sequence, Tuple

from xml_path_cursor.events import (
    EventSourceFactory,
    EventType,
    InputType,
    XMLEvent,
    XMLEventSource,
)
from xml_path_cursor.shared import (
    CursorConfig,
    InvalidMoveError,
    StreamReadError,
    TraversalMetrics,
    get_logger,
)

from .paths import match_path, resume_path
from .state import LastMove, MoveKind


class PathCursor:
    """Navigate an XML document by name and depth without building a tree.

    ``path_stack[0:depth]`` always holds the names of the open elements, root
    first. Entries past ``depth`` are stale and get overwritten by the next
    descent to that level.

    Attributes:
        config: Cursor configuration (name matching, wildcard token)
        correlation_id: Correlation ID for request tracking
        metrics: Counters for the current pass

    Examples:
        Descend by name and read leaf text:
        >>> with PathCursor.open("<a><b>1</b><c>2</c></a>") as cursor:
        ...     cursor.step()
        ...     cursor.step("c")
        ...     cursor.back()
        'a'
        'c'
        '2'

        Enumerate repeated elements:
        >>> with PathCursor.open("<r><x/><x/></r>") as cursor:
        ...     cursor.step()
        ...     [cursor.scan("x"), cursor.scan("x"), cursor.scan("x")]
        'r'
        [1, 1, -1]
    """

    def __init__(
        self,
        source: XMLEventSource,
        config: Optional[CursorConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Bind a cursor to an event source it will own exclusively.

        Args:
            source: Fresh event source; the cursor closes it on release
            config: Cursor configuration (defaults to the source's)
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or source.config
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "path_cursor")
        self.metrics = TraversalMetrics()

        self._source = source
        self._path: List[str] = []
        self._depth = 0
        self._last_move = LastMove.start()
        self._event: Optional[XMLEvent] = None
        self._scan_resume: Optional[Tuple[int, int]] = None

    @classmethod
    def open(
        cls,
        input_data: InputType,
        config: Optional[CursorConfig] = None,
        factory: Optional[EventSourceFactory] = None,
        correlation_id: Optional[str] = None
    ) -> "PathCursor":
        """Create a cursor over XML content, bytes, a path or a file-like object.

        Args:
            input_data: Document to navigate
            config: Cursor configuration; used to build a factory if none is given
            factory: Event source factory
            correlation_id: Optional correlation ID for request tracking
        """
        factory = factory or EventSourceFactory(config)
        source = factory.create(input_data, correlation_id)
        cursor = cls(source, config or factory.config, correlation_id)
        cursor.logger.info(
            "Cursor opened",
            extra={"input_type": type(input_data).__name__}
        )
        return cursor

    def __enter__(self) -> "PathCursor":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(depth={self._depth}, "
            f"path={'/'.join(self.current_path)!r}, last_move={self._last_move.kind.name})"
        )

    def close(self) -> None:
        """Release the underlying event source. Idempotent, never raises."""
        if self._source.closed:
            return
        self._source.close()
        self.logger.info("Cursor closed", extra=self.metrics.to_dict())

    # Accessors

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return self._depth

    @property
    def current_path(self) -> Tuple[str, ...]:
        """Names of the open elements, root first."""
        return tuple(self._path[:self._depth])

    @property
    def name(self) -> Optional[str]:
        """Name of the deepest open element, or None outside the root."""
        if self._depth <= 0:
            return None
        return self._path[self._depth - 1]

    @property
    def last_move(self) -> LastMove:
        return self._last_move

    @property
    def event(self) -> Optional[XMLEvent]:
        """Last event consumed from the source."""
        return self._event

    @property
    def is_exhausted(self) -> bool:
        return self._last_move.kind is MoveKind.EXHAUSTED

    @property
    def has_more(self) -> bool:
        """False once the document has nothing left to read.

        Before the first move this looks one event ahead, so an empty
        document reports False straight away.
        """
        if self.is_exhausted or self._source.closed:
            return False
        if self._last_move.kind is MoveKind.START:
            return not self._source.peek().is_end_document
        return True

    # Primitive moves

    def step(self, name: Optional[str] = None) -> Optional[str]:
        """Move to the next child element, or out of the current one.

        Without ``name`` the cursor enters the next element that starts, or
        ascends one level if the current element ends first. With ``name`` the
        cursor skips the whole subtree of every sibling whose name does not
        match. At the document root there is a single element to try: if it
        does not match, the cursor is exhausted.

        Args:
            name: Element name to look for (case-insensitive by default)

        Returns:
            The entered element's name, or None after ascending or at the end
        """
        if name is not None:
            self._require_name(name)
        if self.is_exhausted:
            return None

        at_root = self._depth == 0
        while True:
            event = self._next()
            if event.type is EventType.START_ELEMENT:
                if name is None or self.config.names_match(event.name, name):
                    return self._descend(event.name)
                self._skip(1)
                if at_root:
                    self.logger.debug(
                        "Root element does not match",
                        extra={"root": event.name, "wanted": name}
                    )
                    self._exhaust()
                    return None
            elif event.type is EventType.END_ELEMENT:
                self._ascend(1)
                return None
            elif event.type is EventType.END_DOCUMENT:
                self._exhaust()
                return None

    def back(self, levels: Optional[int] = None) -> Optional[str]:
        """Read the current element's text, or ascend ``-levels`` levels.

        Without ``levels`` character data is collected until either the
        current element closes (its text is returned and the cursor ascends
        one level) or a child starts (the cursor enters the child and None is
        returned, discarding any mixed-content text).

        With a negative ``levels`` the cursor rises that many levels,
        discarding everything in between. A request past the root is clamped
        to the root.

        Raises:
            InvalidMoveError: If ``levels`` is zero or positive
        """
        if levels is not None:
            self._rise(levels)
            return None
        if self.is_exhausted:
            return None

        parts: List[str] = []
        while True:
            event = self._next()
            if event.type is EventType.CHARACTERS:
                parts.append(event.text)
            elif event.type is EventType.END_ELEMENT:
                self._ascend(1)
                text = "".join(parts)
                self.metrics.characters_read += len(text)
                return text
            elif event.type is EventType.START_ELEMENT:
                self._descend(event.name)
                return None
            else:
                self._exhaust()
                return None

    def back_to(self, target_depth: int) -> None:
        """Ascend until ``depth == target_depth``.

        Raises:
            InvalidMoveError: If ``target_depth`` is deeper than the current depth
        """
        if target_depth > self._depth:
            raise InvalidMoveError(
                f"Cannot go back to depth {target_depth} from depth {self._depth}"
            )
        if target_depth == self._depth:
            return
        self.back(target_depth - self._depth)

    # Search

    def scan(self, name: str, from_depth: Optional[int] = None) -> int:
        """Search forward for the next element named ``name``.

        The search walks into descendants and stops when the depth drops
        below its floor. The floor is ``from_depth`` when given (0 means the
        rest of the document). Otherwise it is the current depth, except
        right after a successful scan, when the previous floor is reused so
        that repeated calls enumerate same-named siblings.

        Returns:
            The floor depth on a match (pass it back as ``from_depth`` to
            continue), or -1 if the floor was left first
        """
        self._require_name(name)
        if from_depth is None:
            floor = self._scan_floor()
            while not self.is_exhausted:
                if self.config.names_match(self.step(), name):
                    return self._scan_hit(floor)
                if self._depth < floor:
                    return -1
            return -1

        if from_depth < 0:
            raise InvalidMoveError(f"from_depth must be >= 0, got {from_depth}")
        while self._depth >= from_depth and not self.is_exhausted:
            if self.config.names_match(self.step(), name):
                return self._scan_hit(from_depth)
        return -1

    def path(self, names: Sequence[str], from_depth: Optional[int] = None) -> int:
        """Match a chain of nested element names, ``"*"`` matching any element.

        Without ``from_depth`` the search starts at the current position.
        With it, the cursor resumes after a previous match that ended at
        ``from_depth`` and looks for the next occurrence.

        Returns:
            Depth reached on a full match, or -1
        """
        if from_depth is None:
            return match_path(self, names)
        return resume_path(self, names, from_depth)

    # Internals

    def _next(self) -> XMLEvent:
        event = self._source.next()
        self._event = event
        self.metrics.events_consumed += 1
        return event

    def _descend(self, name: str) -> str:
        if len(self._path) == self._depth:
            self._path.append(name)
        else:
            self._path[self._depth] = name
        self._depth += 1
        self._last_move = LastMove.descended(name)
        self.metrics.elements_entered += 1
        self.metrics.record_depth(self._depth)
        return name

    def _ascend(self, levels: int) -> None:
        self._depth -= levels
        if self._depth == 0:
            self._exhaust(levels)
        else:
            self._last_move = LastMove.ascended(levels)

    def _exhaust(self, levels: int = 1) -> None:
        self._depth = 0
        self._last_move = LastMove.exhausted(levels)
        self.logger.debug(
            "Cursor exhausted",
            extra={"events_consumed": self.metrics.events_consumed}
        )

    def _skip(self, levels: int) -> None:
        # Consume until `levels` more end events than start events were seen.
        balance = levels
        while True:
            event = self._next()
            if event.type is EventType.START_ELEMENT:
                balance += 1
            elif event.type is EventType.END_ELEMENT:
                balance -= 1
                if balance == 0:
                    self.metrics.subtrees_skipped += 1
                    return
            elif event.type is EventType.END_DOCUMENT:
                raise StreamReadError("Document ended inside an open element")

    def _rise(self, levels: int) -> None:
        if levels >= 0:
            raise InvalidMoveError(
                f"back() only ascends; levels must be negative, got {levels}"
            )
        if self.is_exhausted:
            return
        rise = -levels
        if rise > self._depth:
            self.logger.debug(
                "Ascent clamped to document root",
                extra={"requested": rise, "depth": self._depth}
            )
            rise = self._depth
        if rise == 0:
            return
        self._skip(rise)
        self._ascend(rise)

    def _scan_floor(self) -> int:
        if self._scan_resume is not None:
            floor, mark = self._scan_resume
            if mark == self.metrics.events_consumed:
                return floor
        return self._depth

    def _scan_hit(self, floor: int) -> int:
        self._scan_resume = (floor, self.metrics.events_consumed)
        return floor

    @staticmethod
    def _require_name(name: str) -> None:
        if not name:
            raise InvalidMoveError("Element name must be a non-empty string")
