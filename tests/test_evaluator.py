import pytest
from sxl.errors import EvalError
from sxl.evaluator import Context, eval_node, format_number
from sxl.nodes import Identifier, List, Null, NumberLiteral, StringLiteral, VariableDefinition
from sxl.parser import parse
from sxl.runner import run
from sxl.types import Position


def eval_src(src):
    result = run(src)
    assert result.errors == []
    return result.results


# --- Literals ---

def test_number():
    assert eval_src("42") == ["42"]


def test_fractional_number():
    assert eval_src("1.5 0.25") == ["1.5", "0.25"]


def test_number_round_trips():
    for text in ["0", "7", "12.5", "3.14159", "100000", "0.001"]:
        [out] = eval_src(text)
        assert float(out) == float(text)


def test_format_number_has_no_exponent():
    assert format_number(1e-7) == "0.0000001"
    assert format_number(1e20) == "100000000000000000000"
    assert format_number(2.0) == "2"


def test_string():
    assert eval_src('"hi"') == ["hi"]
    assert eval_src('"hello world"') == ["hello world"]


def test_null_placeholder():
    assert Context().eval(Null()) == "null"


# --- Lists ---

def test_list():
    assert eval_src("(1 2 3)") == ["(1, 2, 3)"]


def test_empty_list():
    assert eval_src("()") == ["()"]


def test_nested_list():
    assert eval_src('(1 ("a" ()) 2)') == ["(1, (a, ()), 2)"]


def test_definition_inside_list_adds_nothing():
    assert eval_src("(#(a 1) a)") == ["(1)"]


def test_list_evaluation_is_idempotent():
    ctx = Context()
    nodes = parse('#(x "v") (x 1 (x))')
    ctx.eval(nodes[0])
    first = ctx.eval(nodes[1])
    assert ctx.eval(nodes[1]) == first == "(v, 1, (v))"


# --- Variables ---

def test_definition_then_lookup():
    assert eval_src("#(x 5) x") == ["5"]


def test_definition_returns_none():
    ctx = Context()
    node = VariableDefinition(Position(0, 0, 6), "x", NumberLiteral(Position(0, 4, 5), 5.0))
    assert eval_node(node, ctx) is None
    assert "x" in ctx


def test_chain_resolves_transitively():
    assert eval_src("#(a b) #(b c) #(c 3) a") == ["3"]


def test_binding_is_lazy():
    assert eval_src("#(a b) #(b 1) a #(b 2) a") == ["1", "2"]


def test_rebinding_overwrites():
    assert eval_src('#(x 1) #(x "two") x') == ["two"]


def test_bound_list_is_rendered_on_lookup():
    assert eval_src("#(l (1 2)) (l l)") == ["((1, 2), (1, 2))"]


def test_bound_node_is_not_the_parsed_tree():
    ctx = Context()
    [definition] = parse("#(x (1))")
    ctx.eval(definition)
    assert ctx.variables["x"] == definition.value
    with pytest.raises(AttributeError):
        ctx.variables["x"].children = ()


# --- Errors ---

def test_undefined_identifier():
    result = run("y")
    assert result.results == []
    assert result.errors == [EvalError(Position(0, 0, 1), "undefined identifier: y")]


def test_undefined_identifier_on_direct_eval():
    with pytest.raises(EvalError, match="undefined identifier: q") as exc:
        Context().eval(Identifier(Position(3, 10, 11), "q"))
    assert exc.value.position == Position(3, 10, 11)
    assert exc.value.origin is None


def test_undefined_in_chain_cites_reference_site():
    result = run("#(a b) a")
    [err] = result.errors
    assert err.message == "undefined identifier: b"
    assert err.position == Position(0, 7, 8)
    assert err.origin == Position(0, 4, 5)


def test_undefined_inside_list():
    result = run("(1 z 2)")
    [err] = result.errors
    assert err.position == Position(0, 3, 4)
    assert result.results == []


def test_failing_form_does_not_stop_next():
    result = run("y 1 (z) #(z 2) (z)")
    assert result.results == ["1", "(2)"]
    assert [e.message for e in result.errors] == [
        "undefined identifier: y",
        "undefined identifier: z",
    ]


def test_string_literal_node():
    assert Context().eval(StringLiteral(Position(0, 0, 3), "a")) == "a"


def test_list_node_built_by_hand():
    node = List(Position(0, 0, 0), (NumberLiteral(Position(0, 0, 0), 1.0), Null()))
    assert Context().eval(node) == "(1, null)"
