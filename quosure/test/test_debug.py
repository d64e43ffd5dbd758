# -*- coding: utf-8 -*-
"""Test the expansion debugging utilities."""

import io

from ..debug import step_expansion, show_scope
from ..expander import expand
from ..markers import unquote, splice
from ..nodes import symbol, call
from ..quotes import capture
from ..scope import Scope


def test_step_expansion():
    s = Scope({"n": 5, "xs": [1, 2]})
    q = capture(call(symbol("f"), [unquote(symbol("n")), splice(symbol("xs"))]), s)
    stream = io.StringIO()
    e = step_expansion(q, color=False, stream=stream)
    assert e == expand(q)
    out = stream.getvalue()
    assert "**Expanding f(UQ(n), UQS(xs))" in out
    assert "step 1: Unquote UQ(n) --> 5" in out
    assert "step 2: Splice UQS(xs) --> 1, 2" in out
    assert "after 2 steps: f(5, 1, 2)" in out


def test_step_expansion_nothing_to_do():
    q = capture(symbol("x"), Scope())
    stream = io.StringIO()
    assert step_expansion(q, color=False, stream=stream) is q
    assert "after 0 steps" in stream.getvalue()


def test_show_scope():
    outer = Scope({"b": 2, "a": 1}).freeze()
    inner = Scope(parent=outer)
    stream = io.StringIO()
    show_scope(inner, color=False, stream=stream)
    lines = stream.getvalue().splitlines()
    assert lines == ["scope 0: <no bindings>", "scope 1: a, b"]


def runtests():
    test_step_expansion()
    test_step_expansion_nothing_to_do()
    test_show_scope()
