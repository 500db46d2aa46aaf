"""Byte-level lexer for SXL source."""

import logging
import math
from typing import Iterator, Optional, Union

from .errors import LexError
from .token import Token, TokenKind
from .types import Position

logger = logging.getLogger(__name__)

_WHITESPACE = b" \t\r\n"
_SINGLE = {
    ord("("): TokenKind.LPAREN,
    ord(")"): TokenKind.RPAREN,
    ord("#"): TokenKind.HASHTAG,
}


def _is_digit(b: int) -> bool:
    return 0x30 <= b <= 0x39


def _is_letter(b: int) -> bool:
    return 0x41 <= b <= 0x5A or 0x61 <= b <= 0x7A


def _utf8_width(lead: int) -> int:
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 1


class Lexer:
    """Pull-based tokenizer over a fully materialized source buffer.

    ``next_token()`` returns one token or raises one ``LexError``. Iterating
    the lexer yields tokens and errors alike and stops after the EOF token.
    """

    def __init__(self, source: Union[bytes, str]):
        if isinstance(source, str):
            source = source.encode("utf-8")
        self.input = source
        self.pos = 0
        self.line = 0
        self._done = False

    def __iter__(self) -> Iterator[Union[Token, LexError]]:
        while not self._done:
            try:
                tok = self.next_token()
            except LexError as err:
                logger.debug("lex error %s", err)
                yield err
                continue
            yield tok

    def next_token(self) -> Token:
        self._skip_trivia()

        ch = self._cur()
        if ch is None:
            self._done = True
            return Token(TokenKind.EOF, Position(self.line, self.pos, self.pos))

        if ch in _SINGLE:
            tok = Token(_SINGLE[ch], Position(self.line, self.pos, self.pos + 1))
            self.pos += 1
            return tok
        if _is_digit(ch):
            return self._number()
        if ch == ord('"'):
            return self._string()
        if _is_letter(ch):
            return self._identifier()

        start = self.pos
        self.pos += 1
        if ch < 0x80:
            raise LexError(Position(self.line, start, self.pos), f"Unknown character {chr(ch)!r}")
        # a well-formed UTF-8 sequence is reported once, as its character
        width = _utf8_width(ch)
        try:
            char = self.input[start:start + width].decode("utf-8")
        except UnicodeDecodeError:
            raise LexError(Position(self.line, start, self.pos), f"Unknown byte 0x{ch:02x}") from None
        self.pos = start + width
        raise LexError(Position(self.line, start, self.pos), f"Unknown character {char!r}")

    def _skip_trivia(self) -> None:
        while True:
            ch = self._cur()
            if ch is None:
                return
            if ch in _WHITESPACE:
                if ch == ord("\n"):
                    self.line += 1
                self.pos += 1
                continue
            if ch == ord(";"):
                # comment runs to the newline, which the whitespace branch consumes
                while self._cur() is not None and self._cur() != ord("\n"):
                    self.pos += 1
                continue
            return

    def _number(self) -> Token:
        start = self.pos
        while self._cur() is not None and (_is_digit(self._cur()) or self._cur() == ord(".")):
            self.pos += 1
        pos = Position(self.line, start, self.pos)
        text = self.input[start:self.pos].decode("ascii")
        try:
            value = float(text)
        except ValueError:
            raise LexError(pos, f"Failed to parse number: {text!r}") from None
        if not math.isfinite(value):
            raise LexError(pos, f"Number out of range: {text!r}")
        return Token(TokenKind.NUMBER, pos, value)

    def _string(self) -> Token:
        start = self.pos
        line = self.line
        self.pos += 1
        while self._cur() is not None and self._cur() != ord('"'):
            if self._cur() == ord("\n"):
                self.line += 1
            self.pos += 1
        if self._cur() is None:
            raise LexError(Position(line, start, self.pos), "Unterminated string")
        self.pos += 1
        pos = Position(line, start, self.pos)
        try:
            value = self.input[start + 1:self.pos - 1].decode("utf-8")
        except UnicodeDecodeError as err:
            raise LexError(pos, f"Failed to create string: {err.reason}") from None
        return Token(TokenKind.STRING, pos, value)

    def _identifier(self) -> Token:
        start = self.pos
        while self._cur() is not None and (
            _is_letter(self._cur()) or _is_digit(self._cur()) or self._cur() == ord("_")
        ):
            self.pos += 1
        name = self.input[start:self.pos].decode("ascii")
        return Token(TokenKind.IDENTIFIER, Position(self.line, start, self.pos), name)

    def _cur(self) -> Optional[int]:
        if self.pos < len(self.input):
            return self.input[self.pos]
        return None


def tokenize(source: Union[bytes, str]) -> tuple[list[Token], list[LexError]]:
    """Lex a whole source, separating tokens from errors."""
    tokens: list[Token] = []
    errors: list[LexError] = []
    for item in Lexer(source):
        if isinstance(item, LexError):
            errors.append(item)
        else:
            tokens.append(item)
    logger.debug("lexed %d tokens, %d errors", len(tokens), len(errors))
    return tokens, errors
