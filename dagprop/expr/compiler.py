# dagprop/expr/compiler.py
from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional, Union

from ..core.context import EMPTY_CONTEXT, EvaluationContext
from ..core.node import Node
from ..errors import UnsupportedExpression
from ..ops import arithmetic, transcendental
from .parser import parse
from .syntax import BinaryOp, FunctionCall, Group, Literal, SymbolRef, SyntaxNode

logger = logging.getLogger(__name__)

BINARY_BUILDERS = {
    "+": arithmetic.add,
    "-": arithmetic.sub,
    "*": arithmetic.mul,
    "/": arithmetic.div,
}

FUNCTION_BUILDERS = {
    "exp": transcendental.exp,
    "sigma": transcendental.sigmoid,
    "sigmoid": transcendental.sigmoid,
}


class SymbolTable:
    """
    Compile-scoped interning table: one Symbol node per variable name.

    Repeated uses of a name resolve to the same node, which is what gives a
    shared variable its consumer count > 1. Pass a fresh table to `compile`
    to get the symbol nodes back afterward; never share one across graphs.
    """

    def __init__(self, context: EvaluationContext):
        self.context = context
        self._nodes: Dict[str, Node] = {}

    def intern(self, name: str) -> Node:
        if name not in self._nodes:
            self._nodes[name] = arithmetic.symbol(name, self.context)
        return self._nodes[name]

    def __getitem__(self, name: str) -> Node:
        return self._nodes[name]

    def __contains__(self, name: str) -> bool:
        return name in self._nodes

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def items(self):
        return self._nodes.items()


def compile(expression: Union[str, SyntaxNode],
            context: Optional[EvaluationContext] = None,
            symbols: Optional[SymbolTable] = None) -> Node:
    """
    Build the Node DAG for an expression and return its root.

    Args:
        expression: text, or a tree from `dagprop.expr.syntax`.
        context:    evaluation context shared by every node. Defaults to an
                    empty numeric context, so symbols only fail once a value
                    is requested.
        symbols:    empty interning table to fill; created per call when
                    omitted. Its context must be `context`, and a table
                    can serve only one compile call.

    Raises:
        UnsupportedExpression: unknown operator or function, wrong arity, or
            any other shape. Raised before any node is built.
    """
    tree = parse(expression) if isinstance(expression, str) else expression
    _check(tree)

    if symbols is None:
        symbols = SymbolTable(context if context is not None else EMPTY_CONTEXT)
    elif context is not None and symbols.context is not context:
        raise ValueError("symbol table belongs to a different evaluation context")
    elif len(symbols):
        # Reusing interned nodes would add consumers to another graph's symbols
        raise ValueError("symbol table already holds another graph's symbols; pass a fresh one")

    root = _build(tree, symbols)
    logger.debug("compiled %r: root %r, %d symbol(s)", expression, root, len(symbols))
    return root


def _check(node: SyntaxNode) -> None:
    if isinstance(node, (Literal, SymbolRef)):
        return
    if isinstance(node, Group):
        _check(node.content)
    elif isinstance(node, BinaryOp):
        if node.operator not in BINARY_BUILDERS:
            raise UnsupportedExpression(f"unsupported operator {node.operator!r}")
        _check(node.left)
        _check(node.right)
    elif isinstance(node, FunctionCall):
        if node.name not in FUNCTION_BUILDERS:
            raise UnsupportedExpression(f"unsupported function {node.name!r}")
        if len(node.args) != 1:
            raise UnsupportedExpression(
                f"{node.name}() takes exactly one argument, got {len(node.args)}"
            )
        _check(node.args[0])
    else:
        raise UnsupportedExpression(f"unsupported expression {node!r}")


def _build(node: SyntaxNode, symbols: SymbolTable) -> Node:
    if isinstance(node, Literal):
        return arithmetic.constant(node.value, symbols.context)
    if isinstance(node, SymbolRef):
        return symbols.intern(node.name)
    if isinstance(node, Group):
        return _build(node.content, symbols)
    if isinstance(node, BinaryOp):
        left = _build(node.left, symbols)
        right = _build(node.right, symbols)
        return BINARY_BUILDERS[node.operator](left, right)
    return FUNCTION_BUILDERS[node.name](_build(node.args[0], symbols))
