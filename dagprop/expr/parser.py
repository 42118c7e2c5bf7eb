# dagprop/expr/parser.py
"""
Text -> syntax tree, using Python's own expression grammar (`ast`).

Redundant parentheses are kept as `Group` nodes: ast drops them, so they are
recovered by counting the "(" tokens between a node's start and the start of
each child.
"""
from __future__ import annotations

import ast
import bisect
import io
import tokenize

from ..errors import UnsupportedExpression
from .syntax import BinaryOp, FunctionCall, Group, Literal, SymbolRef, SyntaxNode, UnaryOp

_BINARY = {
    ast.Add: "+",
    ast.Sub: "-",
    ast.Mult: "*",
    ast.Div: "/",
    ast.Pow: "**",
    ast.FloorDiv: "//",
    ast.Mod: "%",
    ast.BitXor: "^",
}

_UNARY = {
    ast.USub: "-",
    ast.UAdd: "+",
}


class _Source:
    """
    Character offsets for ast positions, and where the "(" tokens sit.

    ast columns count UTF-8 bytes while tokenize columns count characters, so
    both are mapped to character offsets into the whole text. Only real
    tokens are counted, never a "(" inside a comment.
    """

    def __init__(self, text: str):
        self.lines = io.StringIO(text).readlines()
        self.line_starts = [0]
        for line in self.lines:
            self.line_starts.append(self.line_starts[-1] + len(line))
        self.opens = [
            self.line_starts[tok.start[0] - 1] + tok.start[1]
            for tok in tokenize.generate_tokens(io.StringIO(text).readline)
            if tok.type == tokenize.OP and tok.string == "("
        ]

    def _offset(self, lineno: int, col: int) -> int:
        line = self.lines[lineno - 1].encode("utf-8")
        return self.line_starts[lineno - 1] + len(line[:col].decode("utf-8"))

    def start(self, node: ast.AST) -> int:
        return self._offset(node.lineno, node.col_offset)

    def end(self, node: ast.AST) -> int:
        return self._offset(node.end_lineno, node.end_col_offset)

    def parens(self, lo: int, hi: int) -> int:
        return bisect.bisect_left(self.opens, hi) - bisect.bisect_left(self.opens, lo)


def _group(node: SyntaxNode, depth: int) -> SyntaxNode:
    for _ in range(depth):
        node = Group(node)
    return node


def parse(text: str) -> SyntaxNode:
    """
    Parse an arithmetic expression such as ``"1 + 2 * exp(sigma(x))"``.

    Raises UnsupportedExpression for syntax errors and for Python constructs
    that are not literals, names, arithmetic operators or plain function calls.
    """
    text = text.strip()
    try:
        tree = ast.parse(text, mode="eval")
    except SyntaxError as err:
        raise UnsupportedExpression(f"cannot parse {text!r}: {err.msg}") from err

    src = _Source(text)
    return _group(_convert(tree.body, src), src.parens(0, src.start(tree.body)))


def _convert(node: ast.AST, src: _Source) -> SyntaxNode:
    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise UnsupportedExpression(f"unsupported literal {node.value!r}")
        return Literal(node.value)

    if isinstance(node, ast.Name):
        return SymbolRef(node.id)

    if isinstance(node, ast.BinOp):
        operator = _BINARY.get(type(node.op))
        if operator is None:
            raise UnsupportedExpression(f"unsupported operator {type(node.op).__name__}")
        left = _group(_convert(node.left, src),
                      src.parens(src.start(node), src.start(node.left)))
        right = _group(_convert(node.right, src),
                       src.parens(src.end(node.left), src.start(node.right)))
        return BinaryOp(operator, left, right)

    if isinstance(node, ast.UnaryOp):
        operator = _UNARY.get(type(node.op))
        if operator is None:
            raise UnsupportedExpression(f"unsupported operator {type(node.op).__name__}")
        operand = _group(_convert(node.operand, src),
                         src.parens(src.start(node), src.start(node.operand)))
        return UnaryOp(operator, operand)

    if isinstance(node, ast.Call):
        if not isinstance(node.func, ast.Name):
            raise UnsupportedExpression("only plain function names can be called")
        if node.keywords or any(isinstance(a, ast.Starred) for a in node.args):
            raise UnsupportedExpression(f"{node.func.id}() takes positional arguments only")
        args = []
        prev_end = src.end(node.func)
        for i, arg in enumerate(node.args):
            depth = src.parens(prev_end, src.start(arg))
            if i == 0:
                depth -= 1  # the call's own parenthesis
            args.append(_group(_convert(arg, src), depth))
            prev_end = src.end(arg)
        return FunctionCall(node.func.id, tuple(args))

    raise UnsupportedExpression(f"unsupported syntax: {type(node).__name__}")
