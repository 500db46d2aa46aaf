from .types import Position, Limits
from .errors import SXLError, LexError, ParseError, EvalError, GasExhausted, DepthExceeded
from .token import Token, TokenKind
from .lexer import Lexer, tokenize
from .parser import Parser, parse
from .evaluator import Context, eval_node
from .runner import run, RunResult
from .report import format_error, to_diagnostic

__all__ = [
    "Position", "Limits",
    "SXLError", "LexError", "ParseError", "EvalError", "GasExhausted", "DepthExceeded",
    "Token", "TokenKind", "Lexer", "tokenize",
    "Parser", "parse",
    "Context", "eval_node",
    "run", "RunResult",
    "format_error", "to_diagnostic",
]
