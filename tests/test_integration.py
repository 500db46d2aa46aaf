from pathlib import Path

import pytest
from sxl.errors import EvalError, LexError, ParseError
from sxl.evaluator import Context
from sxl.runner import run

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


@pytest.fixture
def bindings_source():
    path = EXAMPLES_DIR / "programs" / "bindings.sxl"
    assert path.exists(), f"missing sample program {path}"
    return path.read_bytes()


def test_bindings_program(bindings_source):
    result = run(bindings_source)
    assert result.ok
    assert result.results == ["hello", "(42, 42, 1.5)", "(x)", "7"]


def test_errors_from_every_stage_are_collected():
    src = '@ (1 2 ) ) missing "ok" (1 "open'
    result = run(src)
    assert [type(e) for e in result.errors] == [LexError, LexError, ParseError, ParseError, EvalError]
    assert result.results == ["(1, 2)", "ok"]


def test_syntax_error_does_not_halt_processing():
    result = run("#(5 x) ) (1 2) #(y 3) y")
    assert result.results == ["(1, 2)", "3"]
    assert all(isinstance(e, ParseError) for e in result.errors[:2])


def test_context_persists_across_runs():
    ctx = Context()
    assert run("#(x 1)", ctx).results == []
    assert run("x", ctx).results == ["1"]


def test_fresh_context_per_run():
    run("#(x 1)")
    assert run("x").errors[0].message == "undefined identifier: x"


def test_scenarios():
    assert run("42").results == ["42"]
    assert run('"hi"').results == ["hi"]
    assert run("(1 2 3)").results == ["(1, 2, 3)"]
    assert run("#(x 5) x").results == ["5"]
    assert run("y").errors[0].message == "undefined identifier: y"
    assert run('(1 "unterminated').errors[0].message == "Unterminated string"
