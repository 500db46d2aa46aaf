from dataclasses import dataclass
from typing import Optional

# Lists and definitions nested deeper than this are rejected by the parser.
DEFAULT_MAX_DEPTH = 200
# Identifier-to-identifier hops allowed while resolving one lookup.
DEFAULT_MAX_INDIRECTION = 64


@dataclass(frozen=True)
class Position:
    """A source span: zero-based line plus byte offsets, end exclusive."""

    line: int = 0
    start: int = 0
    end: int = 0

    def span(self, other: "Position") -> "Position":
        """Position running from the start of self to the end of other."""
        return Position(self.line, self.start, other.end)

    def __str__(self) -> str:
        return f"{self.line}:{self.start}-{self.end}"


@dataclass
class Limits:
    # Node visits allowed per top-level evaluation; None means unmetered.
    max_gas: Optional[int] = None
    max_depth: int = DEFAULT_MAX_DEPTH
    max_indirection: int = DEFAULT_MAX_INDIRECTION
