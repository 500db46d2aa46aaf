"""Lexical tokens produced by the SXL lexer."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .types import Position


class TokenKind(Enum):
    NUMBER = "number"
    STRING = "string"
    IDENTIFIER = "identifier"
    HASHTAG = "#"
    LPAREN = "("
    RPAREN = ")"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    position: Position
    # float for NUMBER, str for STRING and IDENTIFIER, None otherwise
    value: Union[float, str, None] = None

    def describe(self) -> str:
        """Short human-readable form used in error messages."""
        if self.kind is TokenKind.NUMBER:
            return f"number {self.value!r}"
        if self.kind is TokenKind.STRING:
            return f'string "{self.value}"'
        if self.kind is TokenKind.IDENTIFIER:
            return f"identifier '{self.value}'"
        if self.kind is TokenKind.EOF:
            return "end of input"
        return f"'{self.kind.value}'"

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.kind.name}, {self.position})"
        return f"Token({self.kind.name}, {self.value!r}, {self.position})"
