# -*- coding: utf-8; -*-
"""The quasiquote expander.

Rewrites a scoped quote into an equivalent, marker-free one, by evaluating
the marked fragments now, in the quote's own scope:

  - `Unquote(body)`: evaluate `body`, and interpolate the result. An expression
    node is inserted as-is, so that programmatically built syntax becomes
    indistinguishable from syntax written by hand; its free variables will
    resolve in the scope of the quote it was inserted into. A `ScopedQuote`
    is inserted as a nested quote, so it keeps its own scope. Any other
    value is inserted as a `Literal`.

  - `Splice(body)`: valid only directly in a call argument position. Evaluate
    `body`, which must produce a sequence, and replace the argument by zero
    or more arguments, one per element. A mapping gives named arguments;
    a sequence of `(name, value)` pairs (`name` an `str` or `None`) gives
    arguments with those names; any other sequence gives unnamed arguments.
    Each element is interpolated like the result of an `Unquote`.

  - `DefinitionArg(name, body)`: valid only directly in a call argument position.
    Evaluate `name`, which must produce an `str` or a `Symbol`, and expand
    `body`; the result is an argument with the computed name.

If splicing or a computed name makes a call end up with several arguments of
the same name, only the last one is kept (in its own position). Calls without
`Splice` or `DefinitionArg` arguments are left as written; the evaluator
applies the same later-wins rule to them.

The walk is depth-first, left to right, and stops at the first error.
Expanding an already expanded tree changes nothing.
"""

__all__ = ["expand", "QuasiquoteExpander", "splice_arguments"]

from collections.abc import Mapping

from .core import InvalidName, InvalidSpliceTarget, NotASequence, StructuralError
from .markers import Unquote, Splice, DefinitionArg, check_no_markers_remaining
from .nodes import Node, Literal, Symbol, Call, lift, _is_pair
from .quotes import ScopedQuote
from .scope import Scope
from .walkers import NodeTransformer


def splice_arguments(value):
    """Convert the value of a `Splice` body into a `list` of `(name, value)` pairs.

    Raise `NotASequence` if `value` is not a sequence. An `str` or `bytes` is
    not considered a sequence of arguments.
    """
    if isinstance(value, Mapping):
        pairs = list(value.items())
        for name, _ in pairs:
            if not isinstance(name, str):
                raise InvalidName(name)
        return pairs
    if isinstance(value, (str, bytes, bytearray)) or isinstance(value, Node):
        raise NotASequence(value)
    try:
        items = list(value)
    except TypeError:
        raise NotASequence(value) from None
    if items and all(_is_pair(item) for item in items):
        return items
    return [(None, item) for item in items]


def _remove_duplicate_names(args):
    last = {name: k for k, (name, _) in enumerate(args) if name is not None}
    return tuple(arg for k, arg in enumerate(args)
                 if arg[0] is None or last[arg[0]] == k)


class QuasiquoteExpander(NodeTransformer):
    """Expand the quasiquote markers in a tree, evaluating them in `scope`.

    The walker state has one flag, `argposition`, which is true exactly when
    the node being transformed is directly in a call argument position (the
    only place where `Splice` and `DefinitionArg` are valid).

    `debughook`: if given, called as `debughook(marker, result)` each time
                 a marker has been resolved. See `quosure.debug.step_expansion`.
    """
    def __init__(self, scope, debughook=None):
        super().__init__(argposition=False)
        self.scope = scope
        self._debughook = debughook

    def _evaluate(self, tree):
        from .evaluator import evaluate_in  # avoid import cycle
        return evaluate_in(tree, self.scope)

    def _report(self, marker, result):
        if self._debughook:
            self._debughook(marker, result)
        return result

    def interpolate(self, value):
        """Turn a value computed at expansion time into a marker-free node."""
        if isinstance(value, ScopedQuote):
            return expand(value, debughook=self._debughook)
        if isinstance(value, Node):
            with self.changed_state(argposition=False):
                return self.visit(value)
        return Literal(value)

    def compute_name(self, tree):
        """Evaluate the name part of a `DefinitionArg`. Return the name as an `str`."""
        if type(tree) is Unquote:
            name = self._evaluate(tree.body)
        else:
            name = self._evaluate(tree)
        if isinstance(name, Symbol):
            name = name.name
        if not isinstance(name, str) or not name:
            raise InvalidName(name)
        return name

    def transform(self, tree):
        T = type(tree)
        if T in (Literal, Symbol):
            return tree

        elif T is Unquote:
            value = self._evaluate(tree.body)
            return self._report(tree, self.interpolate(value))

        elif T is Splice:
            if not self.state.argposition:
                raise InvalidSpliceTarget(f"splice is only valid directly in a call argument position, got {repr(tree)}")
            value = self._evaluate(tree.body)
            args = [(name, self.interpolate(x)) for name, x in splice_arguments(value)]
            return self._report(tree, args)

        elif T is DefinitionArg:
            if not self.state.argposition:
                raise StructuralError(f"a definition argument is only valid directly in a call argument position, got {repr(tree)}")
            name = self.compute_name(tree.name)
            with self.changed_state(argposition=False):
                body = self.visit(tree.body)
            return self._report(tree, [(name, body)])

        elif T is Call:
            with self.changed_state(argposition=False):
                callee = self.visit(tree.callee)
            with self.changed_state(argposition=True):
                args = self.visit_args(tree.args)
            if any(type(node) in (Splice, DefinitionArg) for _, node in tree.args):
                args = _remove_duplicate_names(args)
            if callee is tree.callee and args == tree.args:
                return tree
            return Call(callee, args)

        elif T is ScopedQuote:  # a nested quote is expanded in its own scope
            return expand(tree, debughook=self._debughook)

        raise TypeError(f"expected an expression node, got {T} with value {repr(tree)}")


def expand(quote, scope=None, *, debughook=None):
    """Expand all quasiquote markers in `quote`. Return a marker-free `ScopedQuote`.

    If `quote` needs no changes, it is returned as-is.

    A bare expression node is also accepted; then the markers are evaluated in
    `scope` (by default, an empty scope), and the expanded bare node is returned.

    Raise `InvalidSpliceTarget` or `StructuralError` for misplaced markers,
    `InvalidName` for a computed argument name that is not a name, and
    `NotASequence` for a splice of something that is not a sequence.
    Errors from evaluating the marked fragments (e.g. `UnboundSymbol`)
    propagate as-is.
    """
    if isinstance(quote, ScopedQuote):
        expander = QuasiquoteExpander(quote.scope, debughook)
        tree = expander.visit(quote.expr)
        if tree is quote.expr:
            return quote
        _check_postcondition(tree)
        return ScopedQuote(tree, quote.scope)

    if not isinstance(quote, Node):
        raise TypeError(f"expected a ScopedQuote or an expression node, got {type(quote)} with value {repr(quote)}")
    if scope is None:
        scope = Scope().freeze()
    tree = QuasiquoteExpander(scope, debughook).visit(lift(quote))
    _check_postcondition(tree)
    return tree


def _check_postcondition(tree):
    try:
        check_no_markers_remaining(tree, context="expand")
    except StructuralError as err:
        raise RuntimeError("`expand`: internal error in quasiquote expander") from err
