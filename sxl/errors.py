"""Positioned errors shared by the lexer, parser and evaluator."""

from typing import Optional

from .types import Position


class SXLError(Exception):
    """An error tied to the exact source span it concerns.

    ``origin`` is set when the error was first detected somewhere other than
    ``position``, e.g. inside a bound expression reached through a variable.
    """

    def __init__(self, position: Position, message: str, origin: Optional[Position] = None):
        super().__init__(message)
        self.position = position
        self.message = message
        self.origin = origin

    def __str__(self) -> str:
        return f"{self.position}: {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.position!r}, {self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SXLError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.position == other.position
            and self.message == other.message
        )

    def __hash__(self) -> int:
        return hash((type(self), self.position, self.message))

    def relocated(self, position: Position) -> "SXLError":
        """Copy of this error cited at ``position``, keeping the first site in ``origin``."""
        if position == self.position:
            return self
        origin = self.origin if self.origin is not None else self.position
        return type(self)(position, self.message, origin)


class LexError(SXLError):
    pass


class ParseError(SXLError):
    pass


class EvalError(SXLError):
    pass


class GasExhausted(EvalError):
    pass


class DepthExceeded(EvalError):
    pass
