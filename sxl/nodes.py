"""AST node types. Nodes are immutable once built."""

from dataclasses import dataclass
from typing import Optional

from .types import Position


class Node:
    position: Optional[Position]


@dataclass(frozen=True)
class NumberLiteral(Node):
    position: Position
    value: float


@dataclass(frozen=True)
class StringLiteral(Node):
    position: Position
    value: str


@dataclass(frozen=True)
class Identifier(Node):
    position: Position
    name: str


@dataclass(frozen=True)
class List(Node):
    # spans the delimiters
    position: Position
    children: tuple[Node, ...] = ()


@dataclass(frozen=True)
class VariableDefinition(Node):
    position: Position
    name: str
    value: Node


@dataclass(frozen=True)
class Null(Node):
    position: Optional[Position] = None
