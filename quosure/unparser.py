# -*- coding: utf-8; -*-
"""Render an expression tree as one line of Python-like source code.

The output uses the surface syntax of `quosure.parser`, so for trees built
from source, `from_source(unparse(tree)) == tree` for most practical purposes.
Nested scoped quotes are shown with a `^` prefix, and cannot be parsed back.
"""

__all__ = ["unparse", "as_label"]

from .colorizer import colorize, ColorScheme
from .markers import Unquote, Splice, DefinitionArg
from .nodes import Literal, Symbol, Call
from .parser import (BINARY_OPERATORS, COMPARISON_OPERATORS, UNQUOTE_NAME, SPLICE_NAME)
from .quotes import ScopedQuote, squash

_infix = set(BINARY_OPERATORS.values()) | set(COMPARISON_OPERATORS.values())
_prefix = {"neg": "-", "pos": "+", "~": "~", "not": "not "}
_displays = {"[]": ("[", "]"), "(,)": ("(", ")"), "{,}": ("{", "}")}


def unparse(tree, *, color=False):
    """Convert the expression tree `tree` into a one-line `str` of source code.

    If `color=True`, add terminal color codes for syntax highlighting.
    """
    def maybe_colorize(text, *colors):
        if not color:
            return text
        return colorize(text, *colors)

    def operator_name(callee):
        if type(callee) is Symbol:
            return callee.name
        return None

    def unnamed(args):
        return all(name is None for name, _ in args)

    def operand(tree):
        # Parenthesize operator calls when they appear as an operand.
        if type(tree) is Call and operator_name(tree.callee) in (_infix | set(_prefix) | {"and", "or", "if"}):
            return f"({recurse(tree)})"
        return recurse(tree)

    def format_args(args):
        out = []
        for name, node in args:
            if name is None:
                out.append(recurse(node))
            else:
                out.append(f"{maybe_colorize(name, ColorScheme.ARGNAME)}={recurse(node)}")
        return ", ".join(out)

    def recurse(tree):
        T = type(tree)
        if T is Literal:
            return maybe_colorize(repr(tree.value), ColorScheme.LITERAL)
        elif T is Symbol:
            return maybe_colorize(tree.name if tree.name.isidentifier() else f"`{tree.name}`",
                                  ColorScheme.SYMBOL)

        elif T is Call:
            op = operator_name(tree.callee)
            args = tree.args
            values = [node for _, node in args]
            if op is not None and unnamed(args):
                if op in _infix and len(values) == 2:
                    return f"{operand(values[0])} {maybe_colorize(op, ColorScheme.OPERATOR)} {operand(values[1])}"
                elif op in _prefix and len(values) == 1:
                    return f"{maybe_colorize(_prefix[op], ColorScheme.OPERATOR)}{operand(values[0])}"
                elif op in ("and", "or") and len(values) >= 2:
                    sep = f" {maybe_colorize(op, ColorScheme.OPERATOR)} "
                    return sep.join(operand(x) for x in values)
                elif op == "if" and len(values) == 3:
                    test, then, otherwise = [operand(x) for x in values]
                    return f"{then} {maybe_colorize('if', ColorScheme.OPERATOR)} {test} {maybe_colorize('else', ColorScheme.OPERATOR)} {otherwise}"
                elif (op == "getattr" and len(values) == 2 and type(values[1]) is Literal and
                      isinstance(values[1].value, str) and values[1].value.isidentifier()):
                    return f"{operand(values[0])}.{values[1].value}"
                elif op == "getitem" and len(values) == 2:
                    return f"{operand(values[0])}[{recurse(values[1])}]"
                elif op in _displays:
                    start, end = _displays[op]
                    body = format_args(args)
                    if op == "(,)" and len(values) == 1:
                        body += ","
                    if op == "{,}" and not values:
                        return "set()"
                    return f"{start}{body}{end}"
                elif op == "{:}" and len(values) % 2 == 0:
                    it = iter(values)
                    items = ", ".join(f"{recurse(k)}: {recurse(v)}" for k, v in zip(it, it))
                    return f"{{{items}}}"
            if type(tree.callee) is Symbol:
                callee = maybe_colorize(recurse(tree.callee), ColorScheme.CALLEE)
            else:
                callee = operand(tree.callee)
            return f"{callee}({format_args(args)})"

        elif T is Unquote:
            return f"{maybe_colorize(UNQUOTE_NAME, ColorScheme.MARKER)}({recurse(tree.body)})"
        elif T is Splice:
            return f"{maybe_colorize(SPLICE_NAME, ColorScheme.MARKER)}({recurse(tree.body)})"
        elif T is DefinitionArg:
            return f"{recurse(tree.name)} {maybe_colorize(':=', ColorScheme.MARKER)} {recurse(tree.body)}"

        elif T is ScopedQuote:
            return f"{maybe_colorize('^', ColorScheme.QUOTE)}{operand(tree.expr)}"

        raise TypeError(f"expected an expression node, got {T} with value {repr(tree)}")
    return recurse(tree)


def as_label(tree, *, width=60):
    """Make a short `str` label for an expression, e.g. to auto-name a computed column.

    A symbol is labeled by its name, a string literal by its content. Anything
    else is unparsed, with nested scoped quotes squashed, and shortened to at
    most `width` characters.
    """
    tree = squash(tree)
    if type(tree) is Symbol:
        return tree.name
    if type(tree) is Literal and isinstance(tree.value, str):
        return tree.value
    label = unparse(tree)
    if len(label) > width:
        label = label[:width - 3] + "..."
    return label
