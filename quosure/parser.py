# -*- coding: utf-8; -*-
"""Build expression trees from Python source code.

Python evaluates function arguments eagerly, so there is no way to receive a
caller's argument as syntax. Instead, the caller can write the expression as
source code, and `from_source` turns it into a `quosure` tree, using the
stdlib `ast` module for the parsing.

Operators become calls to symbols named after them (`a + b` is
`Call(Symbol("+"), [a, b])`); `quosure.scope.BASE_SCOPE` binds those names.
The quasiquote markers are written as::

    UQ(x)               # Unquote
    f(UQS(xs))          # Splice (only as a call argument)
    f(name := value)    # DefinitionArg; the argument name is the *value* of `name`

Note the evaluator has no special forms; `and`, `or`, and `x if c else y`
evaluate all of their operands.
"""

__all__ = ["from_source", "from_ast",
           "BINARY_OPERATORS", "UNARY_OPERATORS", "COMPARISON_OPERATORS", "BOOLEAN_OPERATORS",
           "DISPLAYS"]

import ast

from .markers import Unquote, Splice, DefinitionArg
from .nodes import Literal, Symbol, Call

BINARY_OPERATORS = {ast.Add: "+", ast.Sub: "-", ast.Mult: "*", ast.Div: "/",
                    ast.FloorDiv: "//", ast.Mod: "%", ast.Pow: "**", ast.MatMult: "@",
                    ast.LShift: "<<", ast.RShift: ">>",
                    ast.BitAnd: "&", ast.BitOr: "|", ast.BitXor: "^"}
UNARY_OPERATORS = {ast.USub: "neg", ast.UAdd: "pos", ast.Not: "not", ast.Invert: "~"}
COMPARISON_OPERATORS = {ast.Eq: "==", ast.NotEq: "!=", ast.Lt: "<", ast.LtE: "<=",
                        ast.Gt: ">", ast.GtE: ">=", ast.Is: "is", ast.IsNot: "is not",
                        ast.In: "in", ast.NotIn: "not in"}
BOOLEAN_OPERATORS = {ast.And: "and", ast.Or: "or"}
DISPLAYS = {ast.List: "[]", ast.Tuple: "(,)", ast.Set: "{,}", ast.Dict: "{:}"}

UNQUOTE_NAME = "UQ"
SPLICE_NAME = "UQS"


def from_source(source, filename="<quosure>"):
    """Parse a string of Python source code, containing one expression, into an expression tree.

    Raise `SyntaxError` if the source is not a valid Python expression, or uses
    syntax that has no counterpart in the expression model.
    """
    if not isinstance(source, str):
        raise TypeError(f"expected source code as str, got {type(source)} with value {repr(source)}")
    return from_ast(ast.parse(source.strip(), filename=filename, mode="eval").body)


def _call(name, *args):
    return Call(Symbol(name), [(None, arg) for arg in args])


def _marker_call(tree, name):
    if len(tree.args) != 1 or tree.keywords or type(tree.args[0]) is ast.Starred:
        raise SyntaxError(f"`{name}` takes exactly one positional argument")
    return from_ast(tree.args[0])


def from_ast(tree):
    """Convert a Python expression AST into an expression tree."""
    T = type(tree)

    if T is ast.Constant:
        return Literal(tree.value)

    elif T is ast.Name:
        return Symbol(tree.id)

    elif T is ast.Call:
        if type(tree.func) is ast.Name and tree.func.id == UNQUOTE_NAME:
            return Unquote(_marker_call(tree, UNQUOTE_NAME))
        if type(tree.func) is ast.Name and tree.func.id == SPLICE_NAME:
            # Only valid as an argument; the expander reports it if it's anywhere else.
            return Splice(_marker_call(tree, SPLICE_NAME))
        args = []
        for arg in tree.args:
            if type(arg) is ast.Starred:
                raise SyntaxError(f"`*` unpacking is not supported in call arguments; use `{SPLICE_NAME}(...)` to splice arguments")
            elif type(arg) is ast.NamedExpr:
                args.append((None, DefinitionArg(Symbol(arg.target.id), from_ast(arg.value))))
            else:
                args.append((None, from_ast(arg)))
        for kw in tree.keywords:
            if kw.arg is None:
                raise SyntaxError(f"`**` unpacking is not supported in call arguments; use `{SPLICE_NAME}(...)` to splice named arguments")
            args.append((kw.arg, from_ast(kw.value)))
        return Call(from_ast(tree.func), args)

    elif T is ast.Attribute:
        return _call("getattr", from_ast(tree.value), Literal(tree.attr))

    elif T is ast.Subscript:
        return _call("getitem", from_ast(tree.value), from_ast(tree.slice))
    elif T is ast.Slice:
        parts = [from_ast(x) if x is not None else Literal(None)
                 for x in (tree.lower, tree.upper, tree.step)]
        return _call("slice", *parts)

    elif T is ast.BinOp:
        return _call(BINARY_OPERATORS[type(tree.op)], from_ast(tree.left), from_ast(tree.right))
    elif T is ast.UnaryOp:
        return _call(UNARY_OPERATORS[type(tree.op)], from_ast(tree.operand))
    elif T is ast.BoolOp:
        return _call(BOOLEAN_OPERATORS[type(tree.op)], *[from_ast(x) for x in tree.values])
    elif T is ast.Compare:
        # Chained comparison `a < b < c` becomes `(a < b) and (b < c)`.
        operands = [from_ast(tree.left)] + [from_ast(x) for x in tree.comparators]
        comparisons = [_call(COMPARISON_OPERATORS[type(op)], left, right)
                       for op, left, right in zip(tree.ops, operands, operands[1:])]
        if len(comparisons) == 1:
            return comparisons[0]
        return _call("and", *comparisons)
    elif T is ast.IfExp:
        return _call("if", from_ast(tree.test), from_ast(tree.body), from_ast(tree.orelse))

    elif T in (ast.List, ast.Tuple, ast.Set):
        if any(type(elt) is ast.Starred for elt in tree.elts):
            raise SyntaxError("`*` unpacking is not supported in displays")
        return _call(DISPLAYS[T], *[from_ast(elt) for elt in tree.elts])
    elif T is ast.Dict:
        if any(k is None for k in tree.keys):
            raise SyntaxError("`**` unpacking is not supported in dict displays")
        items = []
        for k, v in zip(tree.keys, tree.values):
            items.extend([from_ast(k), from_ast(v)])
        return _call(DISPLAYS[T], *items)

    raise SyntaxError(f"unsupported syntax: {ast.dump(tree)}")
