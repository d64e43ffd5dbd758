# -*- coding: utf-8; -*-
"""Tree walkers.

These have a state stack and a value collector. Otherwise they work like
`ast.NodeVisitor` and `ast.NodeTransformer`, but for `quosure` expression
trees. Since the trees are immutable, a transformer builds new nodes
wherever something below them changed, and shares the rest.

Basic usage summary::

    def rename_symbols(mytree, old, new):
        class Renamer(NodeTransformer):
            def transform(self, tree):
                if type(tree) is Symbol and tree.name == old:
                    self.collect(tree)
                    return Symbol(new)
                return self.generic_visit(tree)  # recurse
        w = Renamer()
        mytree = w.visit(mytree)
        print(w.collected)  # the replaced symbols, in the order visited
        return mytree

    def getsymbols(mytree):
        class SymbolCollector(NodeVisitor):
            def examine(self, tree):
                if type(tree) is Symbol:
                    self.collect(tree.name)
                self.generic_visit(tree)
        w = SymbolCollector()
        w.visit(mytree)
        return w.collected
"""

__all__ = ["NodeVisitor", "NodeTransformer"]

from abc import ABCMeta, abstractmethod
from contextlib import contextmanager
from types import SimpleNamespace

from .nodes import Node, iter_child_nodes, iter_fields


class BaseNodeWalker:
    """Tree walker base class, providing a state stack and a value collector."""
    def __init__(self, **bindings):
        """Bindings are loaded into the initial `self.state` as attributes."""
        self.reset(**bindings)

    def reset(self, **bindings):
        """Clear everything. Load new bindings into a blank `self.state`."""
        self._stack = [SimpleNamespace(**bindings)]
        self.collected = []

    def _getstate(self):
        return self._stack[-1]
    state = property(fget=_getstate, doc="The current state. Read-only; use `changed_state` to change.")

    @contextmanager
    def changed_state(self, **bindings):
        """Context manager. Run a section of the walk with an updated copy of `self.state`.

        Example::

            with self.changed_state(argposition=True):
                args = self.visit_args(tree.args)
        """
        newstate = SimpleNamespace(**vars(self.state))
        vars(newstate).update(bindings)
        self._stack.append(newstate)
        try:
            yield newstate
        finally:
            self._stack.pop()
            assert self._stack  # postcondition

    def collect(self, value):
        """Collect a value. The values are placed in the list `self.collected`."""
        self.collected.append(value)
        return value


class NodeVisitor(BaseNodeWalker, metaclass=ABCMeta):
    """Tree visitor, like `ast.NodeVisitor`, but with the features of `BaseNodeWalker`.

    If you want to edit the tree, use `NodeTransformer` instead.
    """

    def visit(self, tree):
        """Start visiting `tree`. **Do not override this method; see `examine` instead.**"""
        return self.examine(tree)

    def generic_visit(self, tree):
        """Visit all children of `tree`. Always returns `None`."""
        for child in iter_child_nodes(tree):
            self.visit(child)

    @abstractmethod
    def examine(self, tree):
        """Examine one node. **Abstract method, override this.**

        To detect node type, use `type(tree)`. To recurse, call
        `self.generic_visit(tree)`, or `self.visit(tree.something)`
        to visit only some children.
        """


class NodeTransformer(BaseNodeWalker, metaclass=ABCMeta):
    """Tree transformer, like `ast.NodeTransformer`, but with the features of `BaseNodeWalker`.

    If you only want to examine the tree, not edit it, consider `NodeVisitor` instead.
    """

    def visit(self, tree):
        """Start transforming `tree`. **Do not override this method; see `transform` instead.**"""
        return self.transform(tree)

    def visit_args(self, args):
        """Transform the argument nodes of a `Call`, given its `args` tuple.

        A `transform` may return a `list` of `(name, node)` pairs for a node
        in an argument position; these are spliced into the argument list
        in place of the original argument.

        Return value is the new `args` tuple.
        """
        out = []
        for name, node in args:
            newnode = self.visit(node)
            if isinstance(newnode, list):
                out.extend(newnode)
            else:
                out.append((name, newnode))
        return tuple(out)

    def generic_visit(self, tree):
        """Transform all children of `tree`. Return `tree` itself if nothing changed, else a new node."""
        changes = {}
        for name, value in iter_fields(tree):
            if isinstance(value, Node):
                newvalue = self.visit(value)
                if isinstance(newvalue, list):
                    raise TypeError(f"{type(tree).__name__}.{name}: a list of nodes can only be spliced into call arguments")
            elif name == "args" and isinstance(value, tuple):
                newvalue = self.visit_args(value)
            else:
                continue
            if newvalue is not value and newvalue != value:
                changes[name] = newvalue
        if not changes:
            return tree
        return tree.replace(**changes)

    @abstractmethod
    def transform(self, tree):
        """Transform one node. **Abstract method, override this.**

        To detect node type, use `type(tree)`. Recurse explicitly where needed:

          - `tree = self.generic_visit(tree)` to transform all children of `tree`.
          - `self.visit(tree.something)` to selectively transform only some children.

        Return the new node. If you don't want to make changes, `return tree`.
        """
