"""Traversal metrics for cursor navigation.

The cursor updates one of these per pass; nothing here influences navigation.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict

import psutil


@dataclass
class TraversalMetrics:
    """Counters collected while a cursor consumes its event stream."""

    events_consumed: int = 0
    elements_entered: int = 0
    subtrees_skipped: int = 0
    characters_read: int = 0
    max_depth: int = 0
    started_at: float = field(default_factory=time.perf_counter)

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since the cursor was created."""
        return (time.perf_counter() - self.started_at) * 1000.0

    @property
    def events_per_second(self) -> float:
        """Calculate events consumed per second."""
        elapsed = self.elapsed_ms
        if elapsed <= 0:
            return 0.0
        return (self.events_consumed * 1000.0) / elapsed

    @property
    def memory_rss_bytes(self) -> int:
        """Resident set size of the current process."""
        return psutil.Process().memory_info().rss

    def record_depth(self, depth: int) -> None:
        if depth > self.max_depth:
            self.max_depth = depth

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to a JSON-friendly dictionary."""
        return {
            "events_consumed": self.events_consumed,
            "elements_entered": self.elements_entered,
            "subtrees_skipped": self.subtrees_skipped,
            "characters_read": self.characters_read,
            "max_depth": self.max_depth,
            "elapsed_ms": round(self.elapsed_ms, 3),
        }
