"""Tagged record of the cursor's most recent transition."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class MoveKind(Enum):
    """Kinds of cursor transitions."""

    START = auto()       # Nothing consumed yet
    DESCENDED = auto()   # Entered a newly opened element
    ASCENDED = auto()    # Left one or more elements, still inside the root
    EXHAUSTED = auto()   # Root closed or document ended; terminal


@dataclass(frozen=True)
class LastMove:
    """Most recent cursor transition.

    Attributes:
        kind: Transition kind
        levels: Levels moved (1 for a descent, >= 1 for ascents)
        name: Element entered, for descents
    """

    kind: MoveKind
    levels: int = 0
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate move values."""
        if self.levels < 0:
            raise ValueError("levels must be >= 0")
        if self.kind is MoveKind.DESCENDED and not self.name:
            raise ValueError("A descent must record the element name")

    @classmethod
    def start(cls) -> "LastMove":
        return cls(MoveKind.START)

    @classmethod
    def descended(cls, name: str) -> "LastMove":
        return cls(MoveKind.DESCENDED, levels=1, name=name)

    @classmethod
    def ascended(cls, levels: int) -> "LastMove":
        return cls(MoveKind.ASCENDED, levels=levels)

    @classmethod
    def exhausted(cls, levels: int = 1) -> "LastMove":
        return cls(MoveKind.EXHAUSTED, levels=levels)

    @property
    def delta(self) -> int:
        """Signed depth change: +1 for a descent, -levels for ascents, 0 at start."""
        if self.kind is MoveKind.DESCENDED:
            return self.levels
        if self.kind is MoveKind.START:
            return 0
        return -self.levels

    @property
    def is_exhausted(self) -> bool:
        return self.kind is MoveKind.EXHAUSTED
