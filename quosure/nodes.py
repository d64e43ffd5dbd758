# -*- coding: utf-8; -*-
"""The expression model. Immutable syntax tree nodes.

The node kinds form a closed set:

  - `Literal(value)`: an already computed value, embedded in syntax.
  - `Symbol(name)`: a free variable reference.
  - `Call(callee, args)`: function application. `args` is a tuple of
    `(name, node)` pairs, where `name` is an `str`, or `None` for an
    unnamed (positional) argument.

plus the quasiquote markers defined in `quosure.markers` (`Unquote`,
`Splice`, `DefinitionArg`), and the scoped quote itself
(`quosure.quotes.ScopedQuote`), which may appear inside a tree when a quote
has been unquoted into another one.

Nodes compare structurally. No evaluation logic lives here.
"""

__all__ = ["Node", "Literal", "Symbol", "Call",
           "literal", "symbol", "call", "lift", "normalize_args",
           "iter_fields", "iter_child_nodes"]

from collections.abc import Mapping


def _same_value(a, b):
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    try:
        return bool(a == b)
    except (TypeError, ValueError):  # e.g. elementwise comparison of array-like values
        return False


def _hash_value(x):
    try:
        return hash(x)
    except TypeError:  # unhashable literal; equal values must still hash equal
        return hash(type(x).__name__)


class Node:
    """Base class for expression tree nodes.

    Each subclass lists its fields in `_fields`, like `ast.AST` does.
    Instances are immutable; use `replace` to get a modified copy.
    """
    __slots__ = ()
    _fields = ()

    def _init_fields(self, **fields):
        for name, value in fields.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable; use `replace` to make a modified copy")
    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def replace(self, **changes):
        """Return a copy of this node, with the given fields replaced."""
        fields = dict(iter_fields(self))
        unknown = set(changes) - set(fields)
        if unknown:
            raise TypeError(f"{type(self).__name__} has no field(s) {', '.join(sorted(unknown))}")
        fields.update(changes)
        return type(self)(**fields)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return all(_same_value(getattr(self, name), getattr(other, name))
                   for name in self._fields)
    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result
    def __hash__(self):
        return hash((type(self).__name__,) + tuple(_hash_value(getattr(self, name))
                                                   for name in self._fields))

    def __reduce__(self):  # pickle and `copy` support, since `__setattr__` is blocked
        return (type(self), tuple(getattr(self, name) for name in self._fields))

    def __repr__(self):
        fields = ", ".join(repr(getattr(self, name)) for name in self._fields)
        return f"{type(self).__name__}({fields})"


class Literal(Node):
    """An already computed value, embedded in syntax."""
    __slots__ = ("value",)
    _fields = ("value",)

    def __init__(self, value):
        self._init_fields(value=value)


class Symbol(Node):
    """A free variable reference, resolved at evaluation time."""
    __slots__ = ("name",)
    _fields = ("name",)

    def __init__(self, name):
        if not isinstance(name, str):
            raise TypeError(f"Symbol name must be str, got {type(name)} with value {repr(name)}")
        if not name:
            raise ValueError("Symbol name must be non-empty")
        self._init_fields(name=name)


class Call(Node):
    """Function application with possibly named arguments, order-preserving."""
    __slots__ = ("callee", "args")
    _fields = ("callee", "args")

    def __init__(self, callee, args=()):
        self._init_fields(callee=lift(callee), args=normalize_args(args))

    @property
    def positional(self):
        """The unnamed argument nodes, in order."""
        return tuple(node for name, node in self.args if name is None)

    @property
    def named(self):
        """The named arguments, as a `dict` of name/node pairs (later occurrence wins)."""
        return {name: node for name, node in self.args if name is not None}

# --------------------------------------------------------------------------------

def lift(x):
    """Lift `x` into a node. Nodes (and scoped quotes) pass through; anything else becomes a `Literal`."""
    if isinstance(x, Node):
        return x
    return Literal(x)


def _is_pair(x):
    return type(x) is tuple and len(x) == 2 and (x[0] is None or isinstance(x[0], str))


def normalize_args(args):
    """Normalize call arguments into a tuple of `(name, node)` pairs.

    `args` can be a mapping of name/value pairs, or an iterable whose items
    are either `(name, value)` pairs (`name` an `str` or `None`) or bare
    values (unnamed). Values are lifted with `lift`.

    To pass a literal 2-tuple as a bare value, wrap it with `literal` first.
    """
    if isinstance(args, Mapping):
        args = list(args.items())
    try:
        items = list(args)
    except TypeError:
        raise TypeError(f"expected an iterable of call arguments, got {type(args)} with value {repr(args)}")
    out = []
    for item in items:
        if _is_pair(item):
            name, value = item
            if name == "":
                raise ValueError("argument name must be non-empty")
            out.append((name, lift(value)))
        else:
            out.append((None, lift(item)))
    return tuple(out)


def literal(value):
    """Construct a `Literal` node."""
    return Literal(value)

def symbol(name):
    """Construct a `Symbol` node."""
    return Symbol(name)

def call(callee, args=()):
    """Construct a `Call` node.

    `callee` is lifted with `lift`, so it can be a node, or directly a
    function (which then becomes a `Literal`). For `args`, see `normalize_args`.
    """
    return Call(callee, args)

# --------------------------------------------------------------------------------

def iter_fields(node):
    """Yield `(fieldname, value)` for each field of `node`, like `ast.iter_fields`."""
    for name in node._fields:
        yield name, getattr(node, name)


def iter_child_nodes(node):
    """Yield the direct child nodes of `node`, in evaluation order.

    For `Call` arguments, only the argument nodes are yielded, not their names.
    """
    for name, value in iter_fields(node):
        if isinstance(value, Node):
            yield value
        elif name == "args" and isinstance(value, tuple):
            for _, child in value:
                yield child
