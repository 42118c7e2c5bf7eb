# dagprop/core/__init__.py

"""
Core public API of the dagprop package.

Exports:
    Node              : One leaf or operation of the expression DAG.
    EvaluationContext : Immutable symbol -> number bindings (numeric mode).
    SymbolicContext   : Context whose symbols are sympy symbols (symbolic mode).
    evaluate          : Forward evaluation, optionally with an explicit stack.
    reverse           : Run one reverse pass from a root.
"""

from .context import EvaluationContext, SymbolicContext
from .node import Node
from .engine import evaluate, reverse

__all__ = [
    "Node",
    "EvaluationContext", "SymbolicContext",
    "evaluate", "reverse",
]
