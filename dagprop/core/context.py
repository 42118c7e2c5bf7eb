# dagprop/core/context.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterator, Optional

import numpy as np
import sympy

from ..errors import UnboundSymbol
from .algebra import NUMERIC, SymbolicAlgebra


class EvaluationContext(Mapping):
    """
    Immutable symbol -> value binding consulted by Symbol nodes.

    One context is shared by reference by every node of a graph; it also
    carries the algebra those nodes compute with.

    Example
    -------
    ctx = EvaluationContext({"x": 5}, y=7)
    ctx.get_symbol_value("x")  # -> 5.0
    """

    algebra = NUMERIC

    def __init__(self, values: Optional[Mapping[str, Any]] = None, **bindings: Any):
        merged = dict(values or {})
        merged.update(bindings)
        self._values = {}
        for name, val in merged.items():
            # bool is an int subclass but never a meaningful binding
            if isinstance(val, bool) or not isinstance(val, (int, float, np.number)):
                raise TypeError(
                    f"EvaluationContext only accepts numeric values, "
                    f"but {name!r} is bound to {type(val)}"
                )
            self._values[name] = np.float64(val)

    def get_symbol_value(self, name: str):
        try:
            return self._values[name]
        except KeyError:
            raise UnboundSymbol(name) from None

    def bind(self, **bindings: Any) -> "EvaluationContext":
        """Return a new context with extra or replaced bindings."""
        return EvaluationContext(self._values, **bindings)

    def __getitem__(self, name: str):
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self):
        inner = ", ".join(f"{k}={float(v)!r}" for k, v in self._values.items())
        return f"EvaluationContext({inner})"


class SymbolicContext(EvaluationContext):
    """
    Context for symbolic differentiation: every symbol evaluates to
    ``sympy.Symbol(name)`` and derivatives come out as expressions.

    Parameters
    ----------
    simplify : bool
        Simplify each node's derivative when it is finalized.
    simplifier : callable, optional
        Replacement for ``sympy.simplify``; ignored when ``simplify`` is False.
    """

    def __init__(self, simplify: bool = True,
                 simplifier: Optional[Callable[[sympy.Expr], sympy.Expr]] = None):
        super().__init__()
        if simplify:
            self.algebra = SymbolicAlgebra(simplifier or sympy.simplify)
        else:
            self.algebra = SymbolicAlgebra(None)
        self._symbols = {}

    def get_symbol_value(self, name: str):
        if name not in self._symbols:
            self._symbols[name] = sympy.Symbol(name)
        return self._symbols[name]

    def bind(self, **bindings: Any):
        raise TypeError("SymbolicContext does not take numeric bindings")

    def __repr__(self):
        return f"SymbolicContext({self.algebra!r})"


# Shared by every node built without an explicit context
EMPTY_CONTEXT = EvaluationContext()
