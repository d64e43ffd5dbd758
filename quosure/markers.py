# -*- coding: utf-8; -*-
"""Quasiquote markers.

Markers are node-like objects that tell the expander what to do with a part
of a quoted tree. They are compiled away by `quosure.expander.expand`.

It is a postcondition of a completed expansion that no markers remain in the
tree. The evaluator refuses to evaluate a tree that still has markers.
"""

__all__ = ["QuasiquoteMarker", "Unquote", "Splice", "DefinitionArg",
           "unquote", "splice", "definition_arg", "definitionArg",
           "get_markers", "check_no_markers_remaining"]

from .core import StructuralError
from .nodes import Node, Literal, Symbol, lift
from . import walkers


class QuasiquoteMarker(Node):
    """Base class for quasiquote markers.

    `body`: the subtree annotated by this marker.
    """
    __slots__ = ("body",)
    _fields = ("body",)

    def __init__(self, body):
        self._init_fields(body=lift(body))


class Unquote(QuasiquoteMarker):
    """Evaluate `body` at expansion time, and interpolate the result into the tree."""
    __slots__ = ()


class Splice(QuasiquoteMarker):
    """Evaluate `body` at expansion time, and splice the resulting sequence into the surrounding argument list.

    Legal only directly in a call argument position.
    """
    __slots__ = ()


class DefinitionArg(QuasiquoteMarker):
    """A call argument whose name is computed at expansion time.

    `name`: `Literal`, `Symbol` or `Unquote`; evaluated at expansion time,
            must produce an `str` or a `Symbol`.
    `body`: the argument value. May itself contain markers.
    """
    __slots__ = ("name",)
    _fields = ("name", "body")

    def __init__(self, name, body):
        name = lift(name)
        if not isinstance(name, (Literal, Symbol, Unquote)):
            raise TypeError(f"DefinitionArg name must be a Literal, Symbol or Unquote node, got {type(name)} with value {repr(name)}")
        self._init_fields(name=name, body=lift(body))


def unquote(inner):
    """Construct an `Unquote` marker."""
    return Unquote(inner)

def splice(inner):
    """Construct a `Splice` marker."""
    return Splice(inner)

def definition_arg(name_node, value_node):
    """Construct a `DefinitionArg` marker. A bare `str` name becomes a `Literal`."""
    return DefinitionArg(name_node, value_node)
definitionArg = definition_arg

# --------------------------------------------------------------------------------

def get_markers(tree, cls=QuasiquoteMarker):
    """Return a `list` of any `cls` instances found in `tree`. For output validation.

    Looks also inside any nested scoped quotes.
    """
    class MarkerCollector(walkers.NodeVisitor):
        def examine(self, tree):
            if isinstance(tree, cls):
                self.collect(tree)
            self.generic_visit(tree)
    w = MarkerCollector()
    w.visit(tree)
    return w.collected


def check_no_markers_remaining(tree, *, cls=None, context="evaluate"):
    """Check that `tree` has no markers remaining.

    If a class `cls` is provided, only check for markers that `isinstance(cls)`.

    If there are any, raise `StructuralError`. No return value.

    `context`: a short description of the operation, for the error message.
    """
    from .utils import format_context  # avoid import cycle
    cls = cls or QuasiquoteMarker
    remaining_markers = get_markers(tree, cls)
    if remaining_markers:
        report = "\n".join(f"  {format_context(node)}" for node in remaining_markers)
        raise StructuralError(f"{context}: markers remaining in tree, did you forget to `expand` it?\n{report}")
