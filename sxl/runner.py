"""Top-level pipeline API: source bytes in, rendered results and errors out."""

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from .errors import EvalError, ParseError, SXLError
from .evaluator import Context
from .lexer import tokenize
from .nodes import Node
from .parser import Parser
from .types import Limits

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    results: list[str] = field(default_factory=list)
    errors: list[SXLError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def run(
    source: Union[bytes, str],
    ctx: Optional[Context] = None,
    limits: Optional[Limits] = None,
) -> RunResult:
    """Lex, parse and evaluate a whole source.

    Every stage keeps going past faults: lexical errors drop the bad span,
    syntax errors drop the malformed form, and each top-level form is
    evaluated independently.

    Args:
        source: Full source contents
        ctx: Context to evaluate in (a fresh one if omitted)
        limits: Parse and evaluation limits for a fresh context; ignored when
            ctx is given (its own limits apply)

    Returns:
        RunResult with rendered values in source order and errors in
        detection order (lexical, then syntactic, then evaluation)
    """
    if ctx is None:
        ctx = Context(limits)
    out = RunResult()

    tokens, lex_errors = tokenize(source)
    out.errors.extend(lex_errors)

    forms: list[Node] = []
    for item in Parser(tokens, max_depth=ctx.limits.max_depth):
        if isinstance(item, ParseError):
            out.errors.append(item)
        else:
            forms.append(item)

    for form in forms:
        try:
            text = ctx.eval(form)
        except EvalError as err:
            out.errors.append(err)
            continue
        if text is not None:
            out.results.append(text)

    logger.info(
        "ran %d forms: %d results, %d errors",
        len(forms), len(out.results), len(out.errors),
    )
    return out
