# -*- coding: utf-8; -*-
"""Final evaluation of expanded scoped quotes, against an optional data mask.

Symbol resolution order, for a symbol inside a quote with scope `S`:

  1. the bindings made directly in `S` (the scope the quote was captured in),
  2. the data mask, if one was given,
  3. the ancestors of `S`.

So a data mask (for example, the values of the current row of a table)
shadows anything the quote merely inherits from enclosing scopes, such as
module globals and builtins, but never a variable that was explicitly bound
where the quote was captured.

The data mask applies uniformly to every nested scoped quote reached during
one `evaluate` call; each nested quote still falls back to its own scope.
"""

__all__ = ["evaluate", "evaluate_in", "resolve"]

from collections.abc import Mapping

from .core import StructuralError, UnboundSymbol
from .markers import QuasiquoteMarker, check_no_markers_remaining
from .nodes import Node, Literal, Symbol, Call
from .quotes import ScopedQuote
from .scope import Scope, new_data_mask


def _to_data_mask(data_mask):
    if data_mask is None:
        return None
    if isinstance(data_mask, Scope):
        if data_mask.parent is not None:
            raise ValueError("a data mask must be a parentless scope; to flatten a scope chain into one, use `new_data_mask`")
        return data_mask
    if isinstance(data_mask, Mapping):
        return new_data_mask(data_mask)
    raise TypeError(f"expected data mask to be a Scope, a mapping, or None, got {type(data_mask)} with value {repr(data_mask)}")


def resolve(name, scope, data_mask=None):
    """Resolve the symbol `name` for a quote with bundled `scope`, under `data_mask`.

    Raise `UnboundSymbol` if `name` is not bound anywhere.
    """
    if scope.has_local(name):
        return scope.local(name)
    if data_mask is not None and name in data_mask:
        return data_mask.lookup(name)
    if scope.parent is not None:
        return scope.parent.lookup(name)
    raise UnboundSymbol(name)


class Evaluator:
    """Tree-walking evaluator for marker-free trees. One instance per scope."""
    def __init__(self, scope, data_mask=None):
        self.scope = scope
        self.data_mask = data_mask

    def visit(self, tree):
        T = type(tree)
        if T is Literal:
            return tree.value
        elif T is Symbol:
            return resolve(tree.name, self.scope, self.data_mask)
        elif T is Call:
            function = self.visit(tree.callee)
            if not callable(function):
                raise TypeError(f"callee of {tree.callee} is not callable; got {type(function)} with value {repr(function)}")
            args = []
            kwargs = {}
            for name, node in tree.args:
                value = self.visit(node)
                if name is None:
                    args.append(value)
                else:  # on duplicate names, the later occurrence wins
                    kwargs.pop(name, None)
                    kwargs[name] = value
            return function(*args, **kwargs)
        elif T is ScopedQuote:
            return Evaluator(tree.scope, self.data_mask).visit(tree.expr)
        elif isinstance(tree, QuasiquoteMarker):
            raise StructuralError(f"cannot evaluate a {T.__name__} marker; `expand` the quote first")
        raise TypeError(f"expected an expression node, got {T} with value {repr(tree)}")


def evaluate_in(tree, scope, data_mask=None):
    """Evaluate a bare expression `tree` in `scope`, under `data_mask`.

    `data_mask` can be a `Scope`, any mapping, or `None`.
    """
    if not isinstance(tree, Node):
        raise TypeError(f"expected an expression node, got {type(tree)} with value {repr(tree)}")
    check_no_markers_remaining(tree, context="evaluate")
    return Evaluator(scope, _to_data_mask(data_mask)).visit(tree)


def evaluate(quote, data_mask=None):
    """Evaluate an expanded scoped quote, and return the resulting value.

    `data_mask`: optional evaluation-time bindings, as a `Scope` or any mapping
                 (e.g. a `dict` of the values of the current row). It is used
                 for this call only; it is never stored in the quote.
                 A `Scope` given as the mask must not have a parent.

    A bare expression node is also accepted; it is then evaluated in an empty
    scope, so that only the data mask provides bindings.

    Raise `StructuralError` if the tree still contains quasiquote markers,
    and `UnboundSymbol` if a symbol cannot be resolved. Exceptions raised by
    the functions being called propagate as-is.
    """
    if isinstance(quote, ScopedQuote):
        return evaluate_in(quote.expr, quote.scope, data_mask)
    return evaluate_in(quote, Scope().freeze(), data_mask)
