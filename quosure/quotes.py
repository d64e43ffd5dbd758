# -*- coding: utf-8; -*-
"""Scoped quotes, and the quoting capturer.

A scoped quote pairs an expression tree with the lexical scope that was
active where the expression was written. This is the single entry point
through which "the caller's code, not its value" enters the system:

    q = capture(call(symbol("mul"), [symbol("v"), literal(2)]), scope)

Python evaluates call arguments eagerly, so the capture is explicit; the
caller builds the tree (with the node constructors, or from source code
with `quosure.parser.from_source`) and hands it over together with its
scope. `quo` does the scope part automatically, by taking a snapshot of
the calling stack frame.

The functions `capture`, `capture_all` and `quo` are the primary API.
"""

__all__ = ["ScopedQuote", "capture", "capture_all", "quo",
           "is_quote", "get_expr", "get_scope", "with_scope", "squash"]

import sys

from .nodes import Node, lift
from .scope import Scope, frame_scope
from .walkers import NodeTransformer


class ScopedQuote(Node):
    """An expression tree bundled with the lexical scope active when it was captured.

    Immutable. The scope is frozen when the quote is created, and stays alive
    for as long as the quote does.

    A scoped quote is also a legal node inside another tree; that is how a
    quote that was unquoted into another quote keeps resolving its free
    variables in its own scope.
    """
    __slots__ = ("expr", "scope")
    _fields = ("expr", "scope")

    def __init__(self, expr, scope):
        if not isinstance(scope, Scope):
            raise TypeError(f"expected scope to be a Scope, got {type(scope)} with value {repr(scope)}")
        self._init_fields(expr=lift(expr), scope=scope.freeze())

    def __repr__(self):
        return f"ScopedQuote({repr(self.expr)}, <Scope at 0x{id(self.scope):x}>)"


def capture(expr, caller_scope):
    """Capture `expr`, unevaluated, together with `caller_scope`.

    `expr`: a node tree. Anything that is not a node is lifted into a `Literal`
            (an already computed argument is still a valid thing to defer).
            An existing `ScopedQuote` is returned as-is, so that an argument
            forwarded through several functions keeps its original scope.

    `caller_scope`: the scope active at the site where `expr` was written.
                    It is frozen by this operation.

    Never evaluates anything.
    """
    if isinstance(expr, ScopedQuote):
        return expr
    return ScopedQuote(expr, caller_scope)


def capture_all(*exprs, scope, **named):
    """Capture several arguments at once, in the same scope.

    Positional `exprs` come first (with name `None`), then `named` in the
    order given.

    Return value is a `list` of `(name, ScopedQuote)` pairs.
    """
    out = [(None, capture(expr, scope)) for expr in exprs]
    out.extend((name, capture(expr, scope)) for name, expr in named.items())
    return out


def quo(expr, *, depth=1):
    """Capture `expr` in the scope of the calling stack frame.

    `expr`: a node tree, or an `str` of Python source code for a single
            expression (parsed by `quosure.parser.from_source`).
            To quote a string literal, use `quo(literal("text"))`.

    `depth`: how many frames up to look for the scope; `1` means the direct
             caller of `quo`.

    The scope is a snapshot of the frame's locals and module globals, with
    `quosure.scope.BASE_SCOPE` (operators, builtins) behind them.

    Example::

        x = 7
        q = quo("x + 3")
        assert evaluate(expand(q)) == 10
    """
    from .parser import from_source  # avoid import cycle
    if isinstance(expr, str):
        expr = from_source(expr)
    frame = sys._getframe(depth)
    try:
        return capture(expr, frame_scope(frame))
    finally:
        del frame

# --------------------------------------------------------------------------------

def is_quote(x):
    """Return whether `x` is a `ScopedQuote`."""
    return isinstance(x, ScopedQuote)


def _typecheck_quote(q, funcname):
    if not isinstance(q, ScopedQuote):
        raise TypeError(f"`{funcname}`: expected a ScopedQuote, got {type(q)} with value {repr(q)}")

def get_expr(q):
    """Return the expression tree of scoped quote `q`."""
    _typecheck_quote(q, "get_expr")
    return q.expr

def get_scope(q):
    """Return the bundled scope of scoped quote `q`."""
    _typecheck_quote(q, "get_scope")
    return q.scope

def with_scope(q, scope):
    """Return a new scoped quote with the expression of `q`, and `scope`."""
    _typecheck_quote(q, "with_scope")
    return ScopedQuote(q.expr, scope)


def squash(tree):
    """Strip all scoped quotes from `tree`, leaving a bare expression.

    This is lossy: the free variables of nested quotes lose their own scopes.
    Useful when the tree is to be printed, or translated into something that
    has no notion of scope.

    If `tree` itself is a `ScopedQuote`, its bare (squashed) expression is returned.
    """
    class Squasher(NodeTransformer):
        def transform(self, tree):
            if type(tree) is ScopedQuote:
                return self.visit(tree.expr)
            return self.generic_visit(tree)
    return Squasher().visit(lift(tree))
