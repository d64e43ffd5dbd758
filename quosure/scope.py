# -*- coding: utf-8; -*-
"""Scope chains: parent-linked, read-only-after-construction variable environments.

A scope is a mapping from name to value, plus an optional parent. A scope only
ever refers to scopes that existed before it, so the chain is acyclic; Python's
reference counting keeps a scope alive for as long as any quote or child scope
refers to it.

A scope may be modified only while it is being built. Once it has been handed
to a scoped quote (see `quosure.quotes.capture`), it is frozen, and `bind`
raises `ScopeFrozenError`.

In terms of `collections.abc`, a `Scope` is a read-only `Mapping` over all
names visible through the chain (nearest binding wins).
"""

__all__ = ["Scope", "create", "bind", "lookup", "freeze",
           "new_data_mask", "frame_scope", "BUILTINS_SCOPE", "BASE_SCOPE"]

import builtins
import operator
from collections.abc import Mapping

from .core import ScopeFrozenError, UnboundSymbol


class Scope(Mapping):
    """A variable environment with an optional parent.

    Example::

        outer = Scope({"x": 1}).freeze()
        inner = Scope({"y": 2}, parent=outer)
        assert inner.lookup("x") == 1
        assert inner.lookup("y") == 2
    """
    def __init__(self, bindings=None, *, parent=None):
        if parent is not None and not isinstance(parent, Scope):
            raise TypeError(f"expected parent to be a Scope or None, got {type(parent)} with value {repr(parent)}")
        self._parent = parent
        self._bindings = {}
        self._frozen = False
        if bindings is not None:
            for name, value in dict(bindings).items():
                self.bind(name, value)

    parent = property(fget=lambda self: self._parent, doc="The parent scope, or `None`. Read-only.")
    frozen = property(fget=lambda self: self._frozen, doc="Whether this scope still accepts new bindings. Read-only.")

    def bind(self, name, value):
        """Add a binding. Legal only while the scope is being built. Returns `self`."""
        if self._frozen:
            raise ScopeFrozenError(f"cannot bind '{name}': scope has already been handed out and is read-only")
        if not isinstance(name, str):
            raise TypeError(f"expected name to be str, got {type(name)} with value {repr(name)}")
        self._bindings[name] = value
        return self

    def freeze(self):
        """Make this scope read-only. Idempotent. Returns `self`."""
        self._frozen = True
        return self

    def has_local(self, name):
        """Whether `name` is bound directly in this scope (not via a parent)."""
        return name in self._bindings

    def local_names(self):
        """Return the names bound directly in this scope, in binding order."""
        return tuple(self._bindings)

    def local(self, name):
        """Look up `name` in this scope only. Raise `UnboundSymbol` if not bound here."""
        try:
            return self._bindings[name]
        except KeyError:
            raise UnboundSymbol(name) from None

    def lookup(self, name):
        """Look up `name`, here first, then along the parent chain.

        Raise `UnboundSymbol` if the chain is exhausted without a binding.
        """
        scope = self
        while scope is not None:
            if name in scope._bindings:
                return scope._bindings[name]
            scope = scope._parent
        raise UnboundSymbol(name)

    def chain(self):
        """Yield this scope and its ancestors, nearest first."""
        scope = self
        while scope is not None:
            yield scope
            scope = scope._parent

    # Mapping
    def __getitem__(self, name):
        try:
            return self.lookup(name)
        except UnboundSymbol:
            raise KeyError(name) from None
    def __contains__(self, name):
        return any(name in scope._bindings for scope in self.chain())
    def __iter__(self):
        seen = set()
        for scope in self.chain():
            for name in scope._bindings:
                if name not in seen:
                    seen.add(name)
                    yield name
    def __len__(self):
        return sum(1 for _ in self)

    # Scopes have identity semantics; two scopes with the same bindings are still different scopes.
    __eq__ = object.__eq__
    __ne__ = object.__ne__
    __hash__ = object.__hash__

    def __repr__(self):  # pragma: no cover
        names = ", ".join(self._bindings) if len(self._bindings) <= 8 else f"{len(self._bindings)} names"
        depth = sum(1 for _ in self.chain()) - 1
        return f"<Scope [{names}] depth={depth} at 0x{id(self):x}>"


def create(parent=None):
    """Create a new, empty scope bound to `parent`."""
    return Scope(parent=parent)

def bind(scope, name, value):
    """Add a binding to `scope`, which must not be frozen yet. Returns `scope`."""
    return scope.bind(name, value)

def lookup(scope, name):
    """Look up `name` in `scope` and its ancestors. Raise `UnboundSymbol` on failure."""
    return scope.lookup(name)

def freeze(scope):
    """Make `scope` read-only. Returns `scope`."""
    return scope.freeze()


def new_data_mask(bindings=None, **kwargs):
    """Create a data mask: a parentless, frozen scope of evaluation-time bindings.

    `bindings`: a mapping (e.g. the values of the current row), or `None`.
    `kwargs` are added after `bindings`.

    If `bindings` is already a `Scope`, a new parentless scope with the same
    visible bindings is returned.
    """
    mask = Scope(bindings)
    for name, value in kwargs.items():
        mask.bind(name, value)
    return mask.freeze()

# --------------------------------------------------------------------------------

def _and(*values):
    value = True
    for value in values:
        if not value:
            return value
    return value

def _or(*values):
    value = False
    for value in values:
        if value:
            return value
    return value

def _dict(*keys_and_values):
    if len(keys_and_values) % 2:
        raise TypeError("dict display: expected an even number of arguments (alternating keys and values)")
    it = iter(keys_and_values)
    return dict(zip(it, it))

BUILTINS_SCOPE = Scope(vars(builtins)).freeze()

# Functions for the operator symbols produced by `quosure.parser`.
# Note `and`/`or` evaluate all of their arguments; the evaluator has no special forms.
BASE_SCOPE = Scope({"+": operator.add,
                    "-": operator.sub,
                    "*": operator.mul,
                    "/": operator.truediv,
                    "//": operator.floordiv,
                    "%": operator.mod,
                    "**": operator.pow,
                    "@": operator.matmul,
                    "<<": operator.lshift,
                    ">>": operator.rshift,
                    "&": operator.and_,
                    "|": operator.or_,
                    "^": operator.xor,
                    "==": operator.eq,
                    "!=": operator.ne,
                    "<": operator.lt,
                    "<=": operator.le,
                    ">": operator.gt,
                    ">=": operator.ge,
                    "is": operator.is_,
                    "is not": operator.is_not,
                    "in": lambda x, container: x in container,
                    "not in": lambda x, container: x not in container,
                    "neg": operator.neg,
                    "pos": operator.pos,
                    "~": operator.invert,
                    "not": operator.not_,
                    "and": _and,
                    "or": _or,
                    "if": lambda test, then, otherwise: then if test else otherwise,
                    "getitem": operator.getitem,
                    "slice": slice,
                    "[]": lambda *elts: list(elts),
                    "(,)": lambda *elts: elts,
                    "{,}": lambda *elts: set(elts),
                    "{:}": _dict},
                   parent=BUILTINS_SCOPE).freeze()


def frame_scope(frame):
    """Build a frozen scope snapshot of the variables visible in a Python stack frame.

    The chain is: frame locals -> module globals -> `BASE_SCOPE` -> builtins.

    Only the frame locals count as bound where the quote was captured; module
    globals are always inherited, so a data mask shadows them. At module level,
    where locals and globals are the same, the local layer is empty.
    """
    globals_scope = Scope(frame.f_globals, parent=BASE_SCOPE).freeze()
    if frame.f_locals is frame.f_globals:
        return Scope(parent=globals_scope).freeze()
    return Scope(frame.f_locals, parent=globals_scope).freeze()
