# -*- coding: utf-8 -*-
"""Test scope chains and data masks."""

import sys

from ..core import UnboundSymbol, ScopeFrozenError
from ..scope import (Scope, create, bind, lookup, freeze,
                     new_data_mask, frame_scope, BASE_SCOPE)

module_scope = frame_scope(sys._getframe())


def test_lookup_chain():
    outer = create()
    bind(outer, "x", 1)
    bind(outer, "y", 2)
    freeze(outer)
    inner = create(outer)
    bind(inner, "y", 20)

    assert lookup(inner, "x") == 1
    assert lookup(inner, "y") == 20  # nearest binding wins
    assert lookup(outer, "y") == 2   # parents don't see children

    try:
        lookup(inner, "z")
    except UnboundSymbol as err:
        assert err.name == "z"
    else:
        assert False
    assert isinstance(UnboundSymbol("z"), NameError)


def test_frozen():
    s = Scope({"a": 1})
    assert not s.frozen
    s.freeze()
    assert s.frozen
    try:
        bind(s, "b", 2)
    except ScopeFrozenError:
        pass
    else:
        assert False
    assert "b" not in s


def test_mapping_api():
    outer = Scope({"x": 1, "y": 2}).freeze()
    inner = Scope({"y": 20, "z": 3}, parent=outer)

    assert inner["y"] == 20
    assert "x" in inner
    assert "w" not in inner
    assert list(inner) == ["y", "z", "x"]  # nearest first, each name once
    assert len(inner) == 3
    assert dict(inner) == {"x": 1, "y": 20, "z": 3}
    try:
        inner["w"]
    except KeyError:
        pass
    else:
        assert False

    assert inner.has_local("z")
    assert not inner.has_local("x")
    assert inner.local_names() == ("y", "z")
    assert list(inner.chain()) == [inner, outer]

    # Scopes have identity semantics.
    assert Scope() != Scope()
    assert outer == outer


def test_bad_arguments():
    try:
        Scope(parent={"x": 1})
    except TypeError:
        pass
    else:
        assert False
    try:
        Scope().bind(42, "answer")
    except TypeError:
        pass
    else:
        assert False


def test_data_mask():
    mask = new_data_mask({"a": 1}, b=2)
    assert mask.parent is None
    assert mask.frozen
    assert mask["a"] == 1
    assert mask["b"] == 2

    # A scope with a parent becomes a flat, parentless mask.
    s = Scope({"c": 3}, parent=Scope({"d": 4}))
    flat = new_data_mask(s)
    assert flat.parent is None
    assert dict(flat) == {"c": 3, "d": 4}


def test_frame_scope():
    def f():
        local_var = 42  # noqa: F841, read through the frame.
        return frame_scope(sys._getframe())
    s = f()
    assert s.frozen
    assert s.lookup("local_var") == 42
    assert s.lookup("sys") is sys  # module global
    assert s.lookup("+")(1, 2) == 3  # base scope
    assert s.lookup("len") is len  # builtins

    # At module level, the globals are inherited, not bound locally.
    assert module_scope.local_names() == ()
    assert module_scope.lookup("sys") is sys
    assert module_scope.parent.has_local("sys")


def test_base_scope():
    assert BASE_SCOPE.lookup("and")(1, 0, 2) == 0
    assert BASE_SCOPE.lookup("and")(1, 2) == 2
    assert BASE_SCOPE.lookup("or")(0, "", 3) == 3
    assert BASE_SCOPE.lookup("or")(0, "") == ""
    assert BASE_SCOPE.lookup("{:}")("a", 1, "b", 2) == {"a": 1, "b": 2}
    assert BASE_SCOPE.lookup("in")(1, [1, 2])
    assert BASE_SCOPE.lookup("not in")(3, [1, 2])
    assert BASE_SCOPE.lookup("if")(False, "yes", "no") == "no"
    assert BASE_SCOPE.lookup("(,)")(1, 2) == (1, 2)
    assert BASE_SCOPE.frozen


def runtests():
    test_lookup_chain()
    test_frozen()
    test_mapping_api()
    test_bad_arguments()
    test_data_mask()
    test_frame_scope()
    test_base_scope()
