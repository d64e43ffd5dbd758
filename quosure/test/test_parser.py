# -*- coding: utf-8 -*-
"""Test building expression trees from Python source code."""

from ..evaluator import evaluate
from ..expander import expand
from ..markers import unquote, splice, definition_arg
from ..nodes import literal, symbol, call
from ..parser import from_source
from ..quotes import capture, quo
from ..scope import Scope, BASE_SCOPE


def test_atoms_and_calls():
    assert from_source("x") == symbol("x")
    assert from_source("42") == literal(42)
    assert from_source("  'hello'  ") == literal("hello")
    assert from_source("f(x, y=1)") == call(symbol("f"), [symbol("x"), ("y", literal(1))])
    assert from_source("f()") == call(symbol("f"), [])
    assert from_source("f(x)(y)") == call(call(symbol("f"), [symbol("x")]), [symbol("y")])


def test_operators():
    a, b, c = symbol("a"), symbol("b"), symbol("c")
    assert from_source("a + b * 2") == call(symbol("+"), [a, call(symbol("*"), [b, literal(2)])])
    assert from_source("-a") == call(symbol("neg"), [a])
    assert from_source("not a") == call(symbol("not"), [a])
    assert from_source("a and b or c") == call(symbol("or"), [call(symbol("and"), [a, b]), c])
    assert from_source("a < b") == call(symbol("<"), [a, b])
    assert from_source("a < b < c") == call(symbol("and"), [call(symbol("<"), [a, b]),
                                                            call(symbol("<"), [b, c])])
    assert from_source("a not in b") == call(symbol("not in"), [a, b])
    assert from_source("a if b else c") == call(symbol("if"), [b, a, c])


def test_access_and_displays():
    assert from_source("obj.attr") == call(symbol("getattr"), [symbol("obj"), literal("attr")])
    assert from_source("xs[0]") == call(symbol("getitem"), [symbol("xs"), literal(0)])
    assert from_source("xs[1:2]") == call(symbol("getitem"),
                                          [symbol("xs"), call(symbol("slice"), [literal(1), literal(2), literal(None)])])
    assert from_source("[1, x]") == call(symbol("[]"), [literal(1), symbol("x")])
    assert from_source("(1,)") == call(symbol("(,)"), [literal(1)])
    assert from_source("{1}") == call(symbol("{,}"), [literal(1)])
    assert from_source("{'k': v}") == call(symbol("{:}"), [literal("k"), symbol("v")])


def test_markers():
    assert from_source("f(UQ(x))") == call(symbol("f"), [unquote(symbol("x"))])
    assert from_source("f(UQS(xs))") == call(symbol("f"), [splice(symbol("xs"))])
    assert from_source("f(nm := 1)") == call(symbol("f"), [definition_arg(symbol("nm"), literal(1))])
    assert from_source("UQ(x) + 1") == call(symbol("+"), [unquote(symbol("x")), literal(1)])


def test_unsupported():
    for source in ("lambda: 1", "f(*xs)", "f(**kw)", "[x for x in y]", "x +", "[*xs]",
                   "UQ(x, y)", "{**d}"):
        try:
            from_source(source)
        except SyntaxError:
            pass
        else:
            assert False, source
    try:
        from_source(42)
    except TypeError:
        pass
    else:
        assert False


def test_parsed_trees_evaluate():
    s = Scope({"a": 1, "b": 5, "xs": [1, 2], "flag": True}, parent=BASE_SCOPE)
    assert evaluate(capture(from_source("max(a, b) + len(xs) if flag else 0"), s)) == 7
    assert evaluate(capture(from_source("{'a': a, 'xs': xs[1:]}"), s)) == {"a": 1, "xs": [2]}
    assert evaluate(capture(from_source("(a, b)"), s)) == (1, 5)
    assert evaluate(capture(from_source("a < b <= 5"), s)) is True
    assert evaluate(capture(from_source("'abc'.upper()"), s)) == "ABC"


def test_parsed_quasiquote():
    nm = "total"  # noqa: F841, captured through the frame.
    x = 3  # noqa: F841
    extra = [("a", 1), ("b", 2)]  # noqa: F841
    q = quo("dict(nm := x, UQS(extra))")
    assert evaluate(expand(q)) == {"total": 3, "a": 1, "b": 2}


def runtests():
    test_atoms_and_calls()
    test_operators()
    test_access_and_displays()
    test_markers()
    test_unsupported()
    test_parsed_trees_evaluate()
    test_parsed_quasiquote()
