# -*- coding: utf-8; -*-
"""General utilities, mainly for error messages and debug output."""

__all__ = ["format_context", "format_arguments"]

from .colorizer import colorize, ColorScheme
from .nodes import Node


def format_context(tree, *, width=72, color=False):
    """Format `tree` as one line of source code, for error messages.

    The source code is produced by unparsing. At most `width` characters are
    kept; if anything was cut, a greyed-out "..." is appended.
    """
    from .unparser import unparse  # avoid import cycle
    code = unparse(tree)
    if len(code) <= width:
        return unparse(tree, color=color) if color else code
    code = code[:width]
    dots = colorize("...", ColorScheme.GREYEDOUT) if color else "..."
    return code + dots


def format_arguments(args, *, color=False):
    """Format a `list` of `(name, node)` argument pairs, e.g. the result of a splice.

    Return value is an `str` that looks like the inside of a call's argument list.
    """
    out = []
    for name, node in args:
        code = format_context(node, color=color) if isinstance(node, Node) else repr(node)
        out.append(code if name is None else f"{name}={code}")
    return ", ".join(out)
