"""Event source layer: forward-only XML pull events over lxml."""

from .source import EventSourceFactory, InputType, XMLEventSource
from .types import END_OF_DOCUMENT, EventType, XMLEvent

__all__ = [
    "END_OF_DOCUMENT",
    "EventSourceFactory",
    "EventType",
    "InputType",
    "XMLEvent",
    "XMLEventSource",
]
