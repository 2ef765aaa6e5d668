"""Event value types produced by the forward-only event source."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional


class EventType(Enum):
    """Pull-parsing event kinds seen by the cursor."""

    START_ELEMENT = auto()   # An element opened
    END_ELEMENT = auto()     # The innermost open element closed
    CHARACTERS = auto()      # Character data between two structural events
    END_DOCUMENT = auto()    # No further events will ever be produced


@dataclass(frozen=True)
class XMLEvent:
    """Single pull-parsing event.

    Attributes:
        type: Event kind
        name: Local element name for start and end events
        text: Character data for character events
        attributes: Declared attributes of a started element, keyed by
            lxml's ``{namespace}name`` notation
    """

    type: EventType
    name: Optional[str] = None
    text: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        """Validate event fields against the event kind."""
        if self.type in (EventType.START_ELEMENT, EventType.END_ELEMENT) and not self.name:
            raise ValueError(f"{self.type.name} event requires an element name")
        if self.type is EventType.CHARACTERS and self.text is None:
            raise ValueError("CHARACTERS event requires text")

    @classmethod
    def start(cls, name: str, attributes: Optional[Dict[str, str]] = None) -> "XMLEvent":
        return cls(EventType.START_ELEMENT, name=name, attributes=attributes or {})

    @classmethod
    def end(cls, name: str) -> "XMLEvent":
        return cls(EventType.END_ELEMENT, name=name)

    @classmethod
    def characters(cls, text: str) -> "XMLEvent":
        return cls(EventType.CHARACTERS, text=text)

    @property
    def attribute_count(self) -> int:
        """Number of declared attributes (namespace declarations excluded)."""
        return len(self.attributes)

    @property
    def is_start(self) -> bool:
        return self.type is EventType.START_ELEMENT

    @property
    def is_end(self) -> bool:
        return self.type is EventType.END_ELEMENT

    @property
    def is_end_document(self) -> bool:
        return self.type is EventType.END_DOCUMENT


END_OF_DOCUMENT = XMLEvent(EventType.END_DOCUMENT)
