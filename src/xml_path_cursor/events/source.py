"""Forward-only XML event source built on lxml's pull parser.

The source reads its input in fixed-size chunks, feeds them to
``lxml.etree.XMLPullParser`` and turns the resulting start/end events into a
flat stream of :class:`XMLEvent` values. Character data is recovered from the
``text`` and ``tail`` slots of the partially built tree, and every element is
cleared and detached once it has been reported, so memory stays bounded by the
chain of open ancestors rather than by document size.
"""

import io
from collections import deque
from pathlib import Path
from typing import IO, Any, Deque, Iterator, Optional, Tuple, Union

from lxml import etree

from xml_path_cursor.shared import CursorConfig, StreamReadError, get_logger

from .types import END_OF_DOCUMENT, XMLEvent

# Type definitions for input data
InputType = Union[str, bytes, Path, IO[bytes], IO[str]]


def _local_name(tag: str) -> str:
    # "{namespace}Tag" -> "Tag"
    return etree.QName(tag).localname


def _syntax_error(error: etree.XMLSyntaxError) -> StreamReadError:
    line, column = getattr(error, "position", (None, None))
    return StreamReadError(f"Malformed XML: {error}", line=line, column=column)


class XMLEventSource:
    """Pull-style supplier of :class:`XMLEvent` values over one XML input.

    The source is single-pass: events can be peeked one at a time and then
    consumed, never pushed back. After the document ends every further call to
    :meth:`next` returns the ``END_DOCUMENT`` event.

    Examples:
        >>> with XMLEventSource.from_input("<a>hi</a>") as source:
        ...     [event.type.name for event in source]
        ['START_ELEMENT', 'CHARACTERS', 'END_ELEMENT']
    """

    def __init__(
        self,
        stream: IO[Any],
        config: Optional[CursorConfig] = None,
        owns_stream: bool = False,
        encoding: Optional[str] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the event source.

        Args:
            stream: Binary or text stream positioned at the start of the document
            config: Cursor configuration (buffer size, lxml flags)
            owns_stream: Close ``stream`` when the source is closed
            encoding: Encoding override, taking precedence over ``config.encoding``
            correlation_id: Optional correlation ID for log records
        """
        self.config = config or CursorConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "event_source")

        self._stream = stream
        self._owns_stream = owns_stream
        self._encoding = encoding or self.config.encoding
        self._parser: Optional[etree.XMLPullParser] = None
        self._queue: Deque[XMLEvent] = deque()
        self._last: Optional[Tuple[str, Any]] = None
        self._saw_content = False
        self._finished = False
        self._closed = False
        self._error: Optional[StreamReadError] = None

        self.events_read = 0
        self.bytes_read = 0

    @classmethod
    def from_input(
        cls,
        input_data: InputType,
        config: Optional[CursorConfig] = None,
        correlation_id: Optional[str] = None
    ) -> "XMLEventSource":
        """Create a source for XML content, bytes, a path or a file-like object.

        Strings are treated as XML content, not as file names; pass a
        :class:`pathlib.Path` to read a file. Files opened here are closed with
        the source, file-like objects supplied by the caller are left open.

        Raises:
            TypeError: If the input type is not supported
            OSError: If a path cannot be opened
        """
        if isinstance(input_data, str):
            return cls(io.StringIO(input_data), config, correlation_id=correlation_id)
        if isinstance(input_data, (bytes, bytearray)):
            return cls(io.BytesIO(bytes(input_data)), config, correlation_id=correlation_id)
        if isinstance(input_data, Path):
            return cls(input_data.open("rb"), config, owns_stream=True,
                       correlation_id=correlation_id)
        if hasattr(input_data, "read"):
            return cls(input_data, config, correlation_id=correlation_id)
        raise TypeError(f"Unsupported XML input type: {type(input_data).__name__}")

    def __enter__(self) -> "XMLEventSource":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[XMLEvent]:
        while True:
            event = self.next()
            if event.is_end_document:
                return
            yield event

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def finished(self) -> bool:
        """True once the end of the document has been handed out."""
        return self._finished and not self._queue

    def peek(self) -> XMLEvent:
        """Return the next event without consuming it."""
        self._fill()
        if self._queue:
            return self._queue[0]
        return END_OF_DOCUMENT

    def next(self) -> XMLEvent:
        """Consume and return the next event.

        Raises:
            StreamReadError: If the document is malformed, truncated or unreadable
        """
        event = self.peek()
        if self._queue:
            self._queue.popleft()
            self.events_read += 1
        return event

    def close(self) -> None:
        """Release the parser and any stream opened by this source.

        Safe to call repeatedly and after errors; release problems are logged
        instead of raised.
        """
        if self._closed:
            return
        self._closed = True
        self._queue.clear()
        self._parser = None
        self._last = None

        if self._owns_stream:
            try:
                self._stream.close()
            except OSError:
                self.logger.warning("Failed to close input stream", exc_info=True)

        self.logger.debug(
            "Event source closed",
            extra={"events_read": self.events_read, "bytes_read": self.bytes_read}
        )

    def _fill(self) -> None:
        if self._closed:
            raise StreamReadError("Event source has been closed")
        if self._error is not None:
            raise self._error

        while not self._queue and not self._finished:
            chunk = self._read_chunk()
            parser = self._ensure_parser()
            try:
                if chunk:
                    parser.feed(chunk)
                else:
                    self._finished = True
                    parser.close()
            except etree.XMLSyntaxError as e:
                if not self._saw_content:
                    # Empty or whitespace-only input is an empty document
                    self._finished = True
                    self.logger.debug("Input holds no document content")
                    return
                self._finished = True
                self._error = _syntax_error(e)
                raise self._error from e

            for action, elem in parser.read_events():
                self._translate(action, elem)

    def _read_chunk(self) -> bytes:
        try:
            chunk = self._stream.read(self.config.buffer_size)
        except (OSError, UnicodeError) as e:
            self._finished = True
            self._error = StreamReadError(f"Failed to read XML input: {e}")
            raise self._error from e

        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
            # Text input has already been decoded; ignore declared encodings
            self._encoding = "utf-8"
        if chunk:
            self.bytes_read += len(chunk)
            if not self._saw_content and chunk.strip():
                self._saw_content = True
        return chunk or b""

    def _ensure_parser(self) -> etree.XMLPullParser:
        if self._parser is None:
            self._parser = etree.XMLPullParser(
                events=("start", "end"),
                remove_comments=True,
                remove_pis=True,
                huge_tree=self.config.huge_tree,
                encoding=self._encoding,
            )
        return self._parser

    def _translate(self, action: str, elem: Any) -> None:
        # Text preceding this event lives in the previous element's text
        # (previous event was a start) or tail (previous event was an end).
        if self._last is not None:
            last_action, last_elem = self._last
            text = last_elem.text if last_action == "start" else last_elem.tail
            if text:
                self._queue.append(XMLEvent.characters(text))

        if action == "start":
            self._queue.append(XMLEvent.start(_local_name(elem.tag), dict(elem.attrib)))
        else:
            self._queue.append(XMLEvent.end(_local_name(elem.tag)))
            self._release(elem)
        self._last = (action, elem)

    @staticmethod
    def _release(elem: Any) -> None:
        # Tail is still unread; earlier siblings are fully reported.
        elem.clear(keep_tail=True)
        parent = elem.getparent()
        if parent is not None:
            while elem.getprevious() is not None:
                del parent[0]


class EventSourceFactory:
    """Explicit factory for event sources, configured once and passed around.

    Examples:
        >>> factory = EventSourceFactory(CursorConfig(buffer_size=4096))
        >>> source = factory.create(b"<root/>")
        >>> source.next().name
        'root'
    """

    def __init__(self, config: Optional[CursorConfig] = None) -> None:
        self.config = config or CursorConfig()

    def create(
        self,
        input_data: InputType,
        correlation_id: Optional[str] = None
    ) -> XMLEventSource:
        """Create a new single-pass event source for ``input_data``."""
        return XMLEventSource.from_input(input_data, self.config, correlation_id)
