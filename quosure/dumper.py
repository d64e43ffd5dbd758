# -*- coding: utf-8; -*-
"""Dump an expression tree into a string, with pythonic indentation.

Based on the layout of Alex Leone's `astpp.py`.
    http://alexleone.blogspot.co.uk/2010/01/python-ast-pretty-printer.html
"""

__all__ = ["dump"]

from .colorizer import colorize, ColorScheme
from .nodes import Node, iter_fields
from .scope import Scope

NoneType = type(None)

def dump(tree, *, multiline=True, color=False):
    """Return a formatted dump of `tree`, as a string.

    Unlike `repr`, this shows field names, and indents nested nodes the way the
    code to construct the tree would appear as Python source code. To put
    everything on one line, use `multiline=False`.

    Call arguments are shown as a list of `(name, node)` pairs. A scope is
    shown only by its identity.

    If you're printing the result into a terminal, consider `color=True`.
    """
    def maybe_colorize(text, *colors):
        if not color:
            return text
        return colorize(text, *colors)

    def maybe_colorize_value(value):
        if type(value) in (str, bytes, NoneType, bool, int, float, complex):
            return maybe_colorize(repr(value), ColorScheme.BAREVALUE)
        return repr(value)

    def recurse(tree, previndent=0):
        def separator():
            if multiline:
                return f",\n{(previndent + moreindent) * ' '}"
            return ", "

        if isinstance(tree, Node):
            moreindent = len(f"{tree.__class__.__name__}(")
            fields = []
            for k, v in iter_fields(tree):
                fieldindent = previndent + moreindent + len(f"{k}=")
                if k == "args" and isinstance(v, tuple):
                    text = recurse_args(v, fieldindent)
                elif isinstance(v, (Node, Scope)):
                    text = recurse(v, fieldindent)
                else:
                    text = maybe_colorize_value(v)
                fields.append((maybe_colorize(k, ColorScheme.FIELDNAME), text))
            return "".join([
                maybe_colorize(tree.__class__.__name__, ColorScheme.NODETYPE),
                "(",
                separator().join(f"{k}={v}" for k, v in fields),
                ")"])

        elif isinstance(tree, Scope):
            return f"<Scope at 0x{id(tree):x}>"

        return maybe_colorize_value(tree)

    def recurse_args(args, previndent):
        if not args:
            return "[]"
        moreindent = len("[(")
        sep = f",\n{(previndent + 1) * ' '}" if multiline else ", "
        items = []
        for name, node in args:
            nametext = maybe_colorize_value(name)
            items.append(f"({nametext}, {recurse(node, previndent + moreindent + len(repr(name)) + 1)})")
        return "[" + sep.join(items) + "]"

    if not isinstance(tree, Node):
        raise TypeError(f"expected an expression node, got {tree.__class__.__name__!r}")
    return recurse(tree)
