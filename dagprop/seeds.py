# dagprop/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the root of a freshly compiled graph and
# let derivatives grow backwards to every symbol.
#-----------------------------------------------------------------------------
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

import sympy

from .config import EngineConfig
from .core.context import EvaluationContext, SymbolicContext
from .core.engine import reverse
from .core.node import Node
from .expr.compiler import SymbolTable, compile
from .expr.syntax import SyntaxNode


def value(x: Any) -> Any:
    """Return the forward value of a Node; pass through plain numbers unchanged."""
    return x.get_value() if isinstance(x, Node) else x


def _gradients(expression, context, config) -> Dict[str, Any]:
    symbols = SymbolTable(context)
    root = compile(expression, context, symbols)
    reverse(root, config)
    # A symbol that is the whole expression is the root itself
    return {name: node.derivative for name, node in symbols.items()}


def grads(expression: Union[str, SyntaxNode],
          bindings: Mapping[str, float],
          config: Optional[EngineConfig] = None) -> Dict[str, Any]:
    """
    Numeric gradient of an expression w.r.t. ALL its symbols.
    Performs ONE reverse pass on a fresh graph.

    Example
    -------
    grads("x*y + y*z", {"x": 5, "y": 7, "z": 13}) -> {"x": 7.0, "y": 18.0, "z": 7.0}
    """
    return _gradients(expression, EvaluationContext(bindings), config)


def symbolic_grads(expression: Union[str, SyntaxNode],
                   simplify: Optional[bool] = None,
                   config: Optional[EngineConfig] = None) -> Dict[str, sympy.Expr]:
    """
    Symbolic gradient: one sympy expression per symbol, as a function of the
    original symbols. `simplify` defaults to `config.simplify`.

    Example
    -------
    symbolic_grads("x / y") -> {"x": 1/y, "y": -x/y**2}
    """
    config = config or EngineConfig()
    if simplify is None:
        simplify = config.simplify
    return _gradients(expression, SymbolicContext(simplify=simplify), config)
