# -*- coding: utf-8 -*-
"""Test final evaluation, and symbol resolution under data masks."""

import operator

from ..core import StructuralError, UnboundSymbol
from ..evaluator import evaluate, resolve
from ..expander import expand
from ..markers import unquote, splice
from ..nodes import literal, symbol, call
from ..quotes import capture, quo
from ..scope import Scope, BASE_SCOPE, new_data_mask

# Captured at module level, where the frame locals are the module globals.
price = 1
module_level_quote = quo("price * 2")


def test_basic():
    s = Scope({"x": 4, "add": operator.add})
    assert evaluate(capture(literal("hello"), s)) == "hello"
    assert evaluate(capture(symbol("x"), s)) == 4
    assert evaluate(capture(call(symbol("add"), [symbol("x"), literal(1)]), s)) == 5
    # A function can also be embedded directly.
    assert evaluate(capture(call(max, [symbol("x"), literal(10)]), s)) == 10


def test_named_arguments():
    def f(a, b=0, *, c=0):
        return (a, b, c)
    s = Scope({"f": f})
    assert evaluate(capture(call(symbol("f"), [literal(1), ("c", literal(3)), ("b", literal(2))]), s)) == (1, 2, 3)

    # On duplicate names, the later one wins also without expansion.
    q = capture(call(symbol("f"), [literal(1), ("c", literal(3)), ("c", literal(4))]), s)
    assert evaluate(q) == (1, 0, 4)


def test_scope_privacy():
    s1 = Scope({"v": 10, "mul": operator.mul})
    q1 = capture(call(symbol("mul"), [(None, symbol("v")), (None, literal(2))]), s1)
    assert evaluate(expand(q1), {"v": 999}) == 20

    # Also when evaluated as a nested argument of another quote.
    s2 = Scope({"q1": q1, "add": operator.add})
    q2 = capture(call(symbol("add"), [unquote(symbol("q1")), symbol("w")]), s2)
    assert evaluate(expand(q2), {"v": 999, "w": 1}) == 21


def test_cross_scope_embedding_raw_expression():
    # A raw expression unquoted into a quote resolves in that quote's scope.
    s2 = Scope({"v": 1, "e": symbol("v"), "identity": lambda x: x})
    q = capture(call(symbol("identity"), [unquote(symbol("e"))]), s2)
    assert evaluate(expand(q)) == 1


def test_cross_scope_embedding_scoped_quote():
    # A scoped quote unquoted into another quote keeps resolving in its own scope.
    s1 = Scope({"v": 10, "mul": operator.mul})
    q1 = capture(call(symbol("mul"), [symbol("v"), literal(2)]), s1)
    s2 = Scope({"v": 1, "q1": q1, "identity": lambda x: x})
    q = capture(call(symbol("identity"), [unquote(symbol("q1"))]), s2)
    assert evaluate(expand(q)) == 20


def test_mask_supplies_unbound_names():
    q = expand(capture(call(symbol("+"), [symbol("x"), literal(1)]), Scope(parent=BASE_SCOPE)))
    assert evaluate(q, {"x": 41}) == 42
    assert evaluate(q, {"x": 1}) == 2  # same quote, another mask
    assert evaluate(q, new_data_mask(x=2)) == 3
    try:
        evaluate(q)
    except UnboundSymbol as err:
        assert err.name == "x"
    else:
        assert False


def test_mask_shadows_inherited_names():
    parent = Scope({"x": 1}).freeze()
    q = capture(symbol("x"), Scope(parent=parent))
    assert evaluate(q) == 1
    assert evaluate(q, {"x": 2}) == 2


def test_mask_shadows_module_globals():
    assert evaluate(expand(module_level_quote)) == 2
    assert evaluate(expand(module_level_quote), {"price": 50}) == 100

    # The same expression captured in a function sees the global the same way.
    assert evaluate(expand(quo("price * 2")), {"price": 50}) == 100

    # A local variable where the quote was captured still wins over the mask.
    def capture_with_local():
        price = 3  # noqa: F841, captured through the frame.
        return quo("price * 2")
    assert evaluate(expand(capture_with_local()), {"price": 50}) == 6


def test_mask_applies_to_nested_quotes():
    inherited = Scope({"y": 1}).freeze()
    s1 = Scope({"f": lambda a: 10 * a}, parent=inherited)
    inner = capture(call(symbol("f"), [symbol("y")]), s1)
    s2 = Scope({"inner": inner, "identity": lambda x: x})
    outer = expand(capture(call(symbol("identity"), [unquote(symbol("inner"))]), s2))
    assert evaluate(outer) == 10
    assert evaluate(outer, {"y": 5}) == 50


def test_resolve_order():
    parent = Scope({"a": "parent", "b": "parent"}).freeze()
    s = Scope({"a": "local"}, parent=parent).freeze()
    mask = new_data_mask(a="mask", b="mask", c="mask")
    assert resolve("a", s, mask) == "local"
    assert resolve("b", s, mask) == "mask"
    assert resolve("b", s) == "parent"
    assert resolve("c", s, mask) == "mask"


def test_unbound():
    try:
        evaluate(capture(symbol("z"), Scope()), {})
    except UnboundSymbol as err:
        assert err.name == "z"
    else:
        assert False


def test_unexpanded():
    s = Scope({"f": abs})
    for tree in (call(symbol("f"), [unquote(literal(1))]),
                 call(symbol("f"), [splice(literal([1]))]),
                 unquote(literal(1))):
        try:
            evaluate(capture(tree, s))
        except StructuralError:
            pass
        else:
            assert False


def test_errors():
    try:
        evaluate(capture(call(literal(5), []), Scope()))
    except TypeError:
        pass
    else:
        assert False

    # Errors raised by the called functions propagate as-is.
    try:
        evaluate(capture(call(operator.truediv, [literal(1), literal(0)]), Scope()))
    except ZeroDivisionError:
        pass
    else:
        assert False

    try:
        evaluate(capture(symbol("x"), Scope()), data_mask=[("x", 1)])
    except TypeError:
        pass
    else:
        assert False

    # A scope given as the mask must be parentless.
    assert evaluate(capture(symbol("x"), Scope()), Scope({"x": 1})) == 1
    try:
        evaluate(capture(symbol("x"), Scope()), Scope({"x": 1}, parent=BASE_SCOPE))
    except ValueError:
        pass
    else:
        assert False


def test_bare_node():
    assert evaluate(call(symbol("f"), [symbol("x")]), {"f": abs, "x": -3}) == 3


def test_per_row_evaluation():
    rows = [{"a": 1, "b": 2}, {"a": 3, "b": 4}]
    offset = 10  # noqa: F841, captured through the frame.
    q = expand(quo("a * b + offset"))
    assert [evaluate(q, row) for row in rows] == [12, 22]


def runtests():
    test_basic()
    test_named_arguments()
    test_scope_privacy()
    test_cross_scope_embedding_raw_expression()
    test_cross_scope_embedding_scoped_quote()
    test_mask_supplies_unbound_names()
    test_mask_shadows_inherited_names()
    test_mask_shadows_module_globals()
    test_mask_applies_to_nested_quotes()
    test_resolve_order()
    test_unbound()
    test_unexpanded()
    test_errors()
    test_bare_node()
    test_per_row_evaluation()
