"""Recursive-descent parser for SXL forms.

Grammar:
    form                := atom | list | variable-definition
    atom                := NUMBER | STRING | IDENTIFIER
    list                := '(' form* ')'
    variable-definition := '#' '(' IDENTIFIER form ')'
"""

import logging
from typing import Iterator, Sequence, Union

from .errors import ParseError
from .lexer import tokenize
from .nodes import Identifier, List, Node, Null, NumberLiteral, StringLiteral, VariableDefinition
from .token import Token, TokenKind
from .types import DEFAULT_MAX_DEPTH, Position

logger = logging.getLogger(__name__)


class Parser:
    """Produces one top-level form per ``next_form()`` call.

    ``next_form()`` returns ``Null`` once the end of input is reached.
    Iterating the parser yields nodes and ``ParseError`` values and stops
    at that point. After an error the cursor sits past the offending token.

    Lists and definitions nested more than ``max_depth`` deep are rejected;
    the rest of the enclosing top-level form is skipped.
    """

    def __init__(self, tokens: Sequence[Token], max_depth: int = DEFAULT_MAX_DEPTH):
        self.tokens = tokens
        self.pos = 0
        self.depth = 0
        self.max_depth = max_depth
        self._done = False

    def __iter__(self) -> Iterator[Union[Node, ParseError]]:
        while not self._done:
            try:
                node = self.next_form()
            except ParseError as err:
                logger.debug("parse error %s", err)
                yield err
                continue
            if isinstance(node, Null):
                return
            logger.debug("parsed %r", node)
            yield node

    def next_form(self) -> Node:
        tok = self._cur()
        if tok.kind is TokenKind.EOF:
            self._advance()
            self._done = True
            return Null()
        self.depth = 0
        return self._form()

    def _form(self) -> Node:
        tok = self._cur()
        kind = tok.kind
        if kind is TokenKind.NUMBER:
            self._advance()
            return NumberLiteral(tok.position, tok.value)
        if kind is TokenKind.STRING:
            self._advance()
            return StringLiteral(tok.position, tok.value)
        if kind is TokenKind.IDENTIFIER:
            self._advance()
            return Identifier(tok.position, tok.value)
        if kind is TokenKind.LPAREN:
            return self._list()
        if kind is TokenKind.HASHTAG:
            return self._variable_definition()
        raise self._unexpected(tok, "a number, string, identifier, '(' or '#'")

    def _list(self) -> List:
        self._enter()
        try:
            open_tok = self._expect(TokenKind.LPAREN)
            children: list[Node] = []
            while True:
                tok = self._cur()
                if tok.kind is TokenKind.RPAREN:
                    self._advance()
                    return List(open_tok.position.span(tok.position), tuple(children))
                if tok.kind is TokenKind.EOF:
                    raise self._unexpected(tok, "')'")
                children.append(self._form())
        finally:
            self.depth -= 1

    def _variable_definition(self) -> VariableDefinition:
        self._enter()
        try:
            hash_tok = self._expect(TokenKind.HASHTAG)
            self._expect(TokenKind.LPAREN)
            name_tok = self._expect(TokenKind.IDENTIFIER)
            if self._cur().kind is TokenKind.EOF:
                raise self._unexpected(self._cur(), f"a value for '{name_tok.value}'")
            value = self._form()
            close_tok = self._expect(TokenKind.RPAREN)
        finally:
            self.depth -= 1
        return VariableDefinition(hash_tok.position.span(close_tok.position), name_tok.value, value)

    def _enter(self) -> None:
        tok = self._cur()
        if self.depth >= self.max_depth:
            err = ParseError(tok.position, f"max nesting depth exceeded ({self.max_depth})")
            self._skip_enclosing()
            raise err
        self.depth += 1

    def _skip_enclosing(self) -> None:
        # drop tokens until every paren open around the cursor, and the
        # form starting at it, is closed
        if self._cur().kind is TokenKind.HASHTAG:
            self._advance()
        count = self.depth
        while True:
            tok = self._cur()
            if tok.kind is TokenKind.EOF:
                return
            if tok.kind is TokenKind.LPAREN:
                count += 1
            elif tok.kind is TokenKind.RPAREN:
                count -= 1
            self._advance()
            if count <= 0:
                return

    def _expect(self, kind: TokenKind) -> Token:
        tok = self._cur()
        if tok.kind is not kind:
            wanted = "an identifier" if kind is TokenKind.IDENTIFIER else f"'{kind.value}'"
            raise self._unexpected(tok, wanted)
        self._advance()
        return tok

    def _unexpected(self, tok: Token, wanted: str) -> ParseError:
        # EOF is left in place so the next pull ends the stream cleanly
        if tok.kind is TokenKind.EOF:
            return ParseError(tok.position, f"Unexpected end of input, wanted {wanted}")
        self._advance()
        return ParseError(tok.position, f"Unexpected {tok.describe()}, wanted {wanted}")

    def _cur(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        # ran past the sequence: behave as if an EOF token followed the last one
        if self.tokens:
            end = self.tokens[-1].position
            return Token(TokenKind.EOF, Position(end.line, end.end, end.end))
        return Token(TokenKind.EOF, Position())

    def _advance(self) -> None:
        self.pos += 1


def parse(source: Union[bytes, str]) -> list[Node]:
    """Parse a whole SXL source, raising the first lexical or syntax error."""
    tokens, errors = tokenize(source)
    if errors:
        raise errors[0]
    nodes: list[Node] = []
    for item in Parser(tokens):
        if isinstance(item, ParseError):
            raise item
        nodes.append(item)
    return nodes
