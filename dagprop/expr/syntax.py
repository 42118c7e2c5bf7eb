# dagprop/expr/syntax.py
"""
Parsed-expression tree.

This is the only shape the graph compiler reads. `parse` produces it from
text; callers with their own parser can build it directly.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Literal:
    value: Union[int, float]


@dataclass(frozen=True)
class SymbolRef:
    name: str


@dataclass(frozen=True)
class Group:
    """Parenthesized sub-expression."""
    content: "SyntaxNode"


@dataclass(frozen=True)
class BinaryOp:
    operator: str            # "+", "-", "*", "/", "**", ...
    left: "SyntaxNode"
    right: "SyntaxNode"


@dataclass(frozen=True)
class UnaryOp:
    operator: str            # "-", "+"
    operand: "SyntaxNode"


@dataclass(frozen=True)
class FunctionCall:
    name: str
    args: Tuple["SyntaxNode", ...]


SyntaxNode = Union[Literal, SymbolRef, Group, BinaryOp, UnaryOp, FunctionCall]
