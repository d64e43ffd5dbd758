# -*- coding: utf-8; -*-
"""Error types raised by the quoting, expansion and evaluation machinery."""

__all__ = ["QuoteError", "StructuralError", "InvalidSpliceTarget", "ScopeFrozenError",
           "UnboundSymbol", "InvalidName", "NotASequence"]


class QuoteError(Exception):
    """Base class for errors specific to `quosure`.

    The concrete error types also inherit from the closest builtin exception
    (`NameError`, `TypeError`), so client code that doesn't care about
    `quosure` specifically can catch them the usual way.

    Both the expander and the evaluator fail fast, on the first error found
    in their left-to-right, depth-first traversal. Since all trees, scopes and
    quotes are immutable, a failure never leaves anything half-modified.

    Errors raised by user functions called during evaluation are not wrapped;
    they propagate as-is.
    """


class StructuralError(QuoteError):
    """Malformed marker placement, or evaluation of a tree that still has markers."""


class InvalidSpliceTarget(StructuralError):
    """A `Splice` marker appeared somewhere other than directly in a call argument position."""


class ScopeFrozenError(StructuralError):
    """Attempted to add a binding to a scope that has already been handed out."""


class UnboundSymbol(QuoteError, NameError):
    """A symbol was not found in the data mask, nor anywhere in the scope chain."""
    def __init__(self, name):
        super().__init__(f"unbound symbol '{name}'")
        self.name = name


class InvalidName(QuoteError, NameError):
    """The name part of a `DefinitionArg` did not evaluate to a `str` or a `Symbol`."""
    def __init__(self, got):
        super().__init__(f"expected argument name to evaluate to str or Symbol, got {type(got)} with value {repr(got)}")
        self.got = got


class NotASequence(QuoteError, TypeError):
    """The body of a `Splice` marker did not evaluate to a sequence."""
    def __init__(self, got):
        super().__init__(f"splice: expected a sequence of arguments, got {type(got)} with value {repr(got)}")
        self.got = got
