"""Tree-walk evaluator for SXL ASTs, with gas and indirection metering."""

import logging
from decimal import Decimal
from typing import Optional

from .errors import DepthExceeded, EvalError, GasExhausted
from .nodes import Identifier, List, Node, Null, NumberLiteral, StringLiteral, VariableDefinition
from .types import Limits, Position

logger = logging.getLogger(__name__)

NULL_TEXT = "null"


class _EvalState:
    __slots__ = ("gas", "hops", "max_hops")

    def __init__(self, limits: Limits):
        self.gas = limits.max_gas
        self.hops = 0
        self.max_hops = limits.max_indirection


class Context:
    """Variable environment for one evaluation session.

    Bindings hold unevaluated nodes; a lookup evaluates the bound node each
    time, so rebinding a name is visible through every binding that refers
    to it.
    """

    def __init__(self, limits: Optional[Limits] = None):
        self.variables: dict[str, Node] = {}
        self.limits = limits or Limits()

    def eval(self, node: Node) -> Optional[str]:
        return eval_node(node, self)

    def __contains__(self, name: str) -> bool:
        return name in self.variables


def eval_node(node: Node, ctx: Context) -> Optional[str]:
    """Evaluate one node against ctx.

    Returns the rendered text, or None for forms that only bind.
    Raises EvalError (including GasExhausted/DepthExceeded).

    Structural nesting is bounded by the parser. Identifier lookups are
    bounded by ``max_indirection``, which turns cyclic bindings into
    DepthExceeded. Nesting that only builds up through chains of bindings
    can still outgrow the interpreter stack; that is also reported as
    DepthExceeded, cited at node.
    """
    state = _EvalState(ctx.limits)
    try:
        return _eval(node, ctx, state)
    except RecursionError:
        raise DepthExceeded(_position_of(node), "max nesting depth exceeded") from None


def _eval(node: Node, ctx: Context, st: _EvalState) -> Optional[str]:
    if st.gas is not None:
        st.gas -= 1
        if st.gas < 0:
            raise GasExhausted(_position_of(node), "gas budget exceeded")
    return _eval_inner(node, ctx, st)


def _eval_inner(node: Node, ctx: Context, st: _EvalState) -> Optional[str]:
    if isinstance(node, NumberLiteral):
        return format_number(node.value)

    if isinstance(node, StringLiteral):
        return node.value

    if isinstance(node, Identifier):
        bound = ctx.variables.get(node.name)
        if bound is None:
            raise EvalError(node.position, f"undefined identifier: {node.name}")
        st.hops += 1
        try:
            if st.hops > st.max_hops:
                raise DepthExceeded(
                    node.position,
                    f"too many identifier indirections (limit {st.max_hops})",
                )
            return _eval(bound, ctx, st)
        except EvalError as err:
            # cite the reference site; the first site is kept as err.origin
            raise err.relocated(node.position) from None
        finally:
            st.hops -= 1

    if isinstance(node, List):
        parts = []
        for child in node.children:
            text = _eval(child, ctx, st)
            if text is not None:
                parts.append(text)
        return "(" + ", ".join(parts) + ")"

    if isinstance(node, VariableDefinition):
        ctx.variables[node.name] = node.value
        logger.debug("bound %s at %s", node.name, node.position)
        return None

    if isinstance(node, Null):
        return NULL_TEXT

    raise EvalError(_position_of(node), f"Unknown node: {type(node).__name__}")


def format_number(value: float) -> str:
    """Plain decimal text: no exponent, no trailing '.0' for integral values."""
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _position_of(node: Node) -> Position:
    return getattr(node, "position", None) or Position()
