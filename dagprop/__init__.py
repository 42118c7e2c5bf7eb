# dagprop/__init__.py
# Reverse-mode differentiation over expression DAGs

__version__ = "0.1.0"

from .errors import (
    DagpropError,
    UnboundSymbol,
    UnsupportedExpression,
    AbstractMethodInvoked,
    GraphStateError,
    DerivativeNotFinalized,
)
from .config import EngineConfig
from .core.context import EvaluationContext, SymbolicContext
from .core.node import Node
from .core.engine import evaluate, reverse
from .core import graph_utils

# Operation rules register on import
from . import ops
from .expr import parse, compile, SymbolTable
from .seeds import grads, symbolic_grads, value

__all__ = [
    # Core
    'Node',
    'EvaluationContext',
    'SymbolicContext',
    'EngineConfig',
    # Engine
    'evaluate',
    'reverse',
    # Expressions
    'parse',
    'compile',
    'SymbolTable',
    # Seeds
    'grads',
    'symbolic_grads',
    'value',
    # Utilities
    'ops',
    'graph_utils',
    # Errors
    'DagpropError',
    'UnboundSymbol',
    'UnsupportedExpression',
    'AbstractMethodInvoked',
    'GraphStateError',
    'DerivativeNotFinalized',
]
