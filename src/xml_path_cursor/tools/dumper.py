"""Structural dump of a document, built only on the public cursor operations.

The dump is a depth-indented trace of element names, attribute counts and
text lengths. Because it depends on nothing but ``step``/``back`` and the
cursor accessors, it doubles as a golden-output oracle for cursor behaviour:

    <catalog a="1">
     <book>
      <title>5</title>
      <note/>
     </book>
    </catalog>
"""

import io
import re
import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO

from xml_path_cursor.events import InputType, XMLEvent
from xml_path_cursor.navigation import PathCursor
from xml_path_cursor.shared import CursorConfig, get_logger

DEFAULT_MARGIN = " "

_ELEMENT_LINE = (
    r'<(?P<name>[^\s/>]+)(?: a="(?P<attrs>\d+)")?'
    r'(?P<end>/>|>(?P<length>\d+)</[^>]+>|>)$'
)


@dataclass(frozen=True)
class StructureEntry:
    """One element in a structural fingerprint.

    ``text_length`` is None for elements that have child elements.
    """

    depth: int
    name: str
    attribute_count: int = 0
    text_length: Optional[int] = 0


def _attributes(event: Optional[XMLEvent]) -> str:
    count = event.attribute_count if event is not None else 0
    return f' a="{count}"' if count > 0 else ""


def dump(
    cursor: PathCursor,
    out: Optional[TextIO] = None,
    margin: str = DEFAULT_MARGIN
) -> int:
    """Write the structural trace of the rest of the document.

    Args:
        cursor: Cursor positioned at the start of the document
        out: Text stream to write to (defaults to stdout)
        margin: Indentation unit per depth level

    Returns:
        Number of elements written
    """
    out = out or sys.stdout
    elements = 0

    while cursor.has_more:
        name = cursor.step()
        if name is None:
            event = cursor.event
            if event is None or not event.is_end:
                break
            out.write(f"{margin * cursor.depth}</{event.name}>\n")
            continue

        elements += 1
        out.write(f"{margin * (cursor.depth - 1)}<{name}{_attributes(cursor.event)}")
        text = cursor.back()
        while text is None and not cursor.is_exhausted:
            # back() entered a child element instead of closing this one
            out.write(">\n")
            elements += 1
            out.write(
                f"{margin * (cursor.depth - 1)}<{cursor.name}{_attributes(cursor.event)}"
            )
            text = cursor.back()

        if text:
            out.write(f">{len(text)}</{cursor.event.name}>\n")
        else:
            out.write("/>\n")

    get_logger(__name__, cursor.correlation_id, "dumper").debug(
        "Structural dump written",
        extra={"elements": elements, "max_depth": cursor.metrics.max_depth}
    )
    return elements


def dump_to_string(
    input_data: InputType,
    config: Optional[CursorConfig] = None,
    margin: str = DEFAULT_MARGIN
) -> str:
    """Open ``input_data`` and return its structural trace as a string."""
    buffer = io.StringIO()
    with PathCursor.open(input_data, config) as cursor:
        dump(cursor, buffer, margin)
    return buffer.getvalue()


def parse_dump(text: str, margin: str = DEFAULT_MARGIN) -> List[StructureEntry]:
    """Re-derive the structural fingerprint from dump output.

    Raises:
        ValueError: If a line is not in dump format
    """
    if not margin:
        raise ValueError("margin must be a non-empty string")

    indent = f"(?P<indent>(?:{re.escape(margin)})*)"
    open_line = re.compile(indent + _ELEMENT_LINE)
    close_line = re.compile(indent + r"</[^>]+>$")

    entries: List[StructureEntry] = []
    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip() or close_line.match(line):
            continue
        match = open_line.match(line)
        if match is None:
            raise ValueError(f"Line {number} is not in dump format: {line!r}")

        if match.group("end") == ">":
            text_length: Optional[int] = None
        elif match.group("end") == "/>":
            text_length = 0
        else:
            text_length = int(match.group("length"))

        entries.append(StructureEntry(
            depth=len(match.group("indent")) // len(margin) + 1,
            name=match.group("name"),
            attribute_count=int(match.group("attrs") or 0),
            text_length=text_length,
        ))
    return entries
