# -*- coding: utf-8; -*-
"""Expansion debugging utilities."""

__all__ = ["step_expansion", "show_scope"]

import sys

from .colorizer import colorize, ColorScheme
from .expander import expand
from .quotes import ScopedQuote
from .unparser import unparse
from .utils import format_arguments, format_context


def step_expansion(quote, scope=None, *, color=True, stream=None):
    """Expand `quote`, showing each marker resolution.

    Each time the expander resolves an `Unquote`, `Splice` or `DefinitionArg`,
    the marker and what it was replaced with are printed, as source code,
    into `stream` (default `sys.stderr`). Markers inside nested scoped quotes
    are reported too, in the order the expander reaches them.

    `quote` and `scope` are as for `quosure.expander.expand`. Returns the
    expanded tree, just like `expand` does, so this can be dropped in place
    of an `expand` call while debugging.
    """
    stream = stream or sys.stderr

    def maybe_colorize(text, *colors):
        if not color:
            return text
        return colorize(text, *colors)

    tree = quote.expr if isinstance(quote, ScopedQuote) else quote
    print(f"{maybe_colorize('**Expanding', ColorScheme.HEADING1)} {unparse(tree, color=color)}",
          file=stream)

    steps = 0
    def debughook(marker, result):
        nonlocal steps
        steps += 1
        if isinstance(result, list):
            after = f"{format_arguments(result, color=color)}" if result else maybe_colorize("<nothing>", ColorScheme.GREYEDOUT)
        else:
            after = format_context(result, color=color)
        kind = maybe_colorize(type(marker).__name__, ColorScheme.ATTENTION)
        print(f"{maybe_colorize(f'  step {steps}:', ColorScheme.HEADING2)} {kind} {format_context(marker, color=color)} --> {after}",
              file=stream)

    expanded = expand(quote, scope, debughook=debughook)

    tree = expanded.expr if isinstance(expanded, ScopedQuote) else expanded
    plural = "s" if steps != 1 else ""
    print(f"{maybe_colorize(f'**Expansion complete after {steps} step{plural}:', ColorScheme.HEADING1)} {unparse(tree, color=color)}",
          file=stream)
    return expanded


def show_scope(scope, *, color=True, stream=None):
    """Print the bindings of `scope` and its ancestors, nearest first, into `stream` (default `sys.stderr`).

    For each scope, only the names are shown; values are not.
    """
    stream = stream or sys.stderr

    def maybe_colorize(text, *colors):
        if not color:
            return text
        return colorize(text, *colors)

    for depth, s in enumerate(scope.chain()):
        names = sorted(s.local_names())
        if len(names) > 20:
            shown = ", ".join(names[:20]) + maybe_colorize(f", ... ({len(names) - 20} more)", ColorScheme.GREYEDOUT)
        elif names:
            shown = ", ".join(names)
        else:
            shown = maybe_colorize("<no bindings>", ColorScheme.GREYEDOUT)
        print(f"{maybe_colorize(f'scope {depth}:', ColorScheme.HEADING2)} {shown}", file=stream)
