# dagprop/core/algebra.py
"""
Arithmetic back-ends for the node rules.

The rules in `dagprop.ops` are written once against this small interface.
`NumericAlgebra` performs the arithmetic on float64 scalars; `SymbolicAlgebra`
builds unevaluated sympy expressions instead and defers all reduction to a
simplifier that runs once per node, when its derivative is finalized.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

import numpy as np
import sympy
from scipy.special import expit


class NumericAlgebra:
    """float64 arithmetic with numpy's IEEE semantics (x/0 -> inf, with a warning)."""

    symbolic = False

    def zero(self):
        return np.float64(0.0)

    def one(self):
        return np.float64(1.0)

    def constant(self, value: Any):
        return np.float64(value)

    def add(self, a, b):
        return a + b

    def sub(self, a, b):
        return a - b

    def mul(self, a, b):
        return a * b

    def div(self, a, b):
        return a / b

    def neg(self, a):
        return -a

    def square(self, a):
        return np.square(a)

    def exp(self, a):
        return np.exp(a)

    def sigmoid(self, a):
        # expit is stable for large |a|
        return expit(a)

    def finalize(self, derivative):
        return derivative

    def __repr__(self):
        return "NumericAlgebra()"


class SymbolicAlgebra:
    """
    Expression-building arithmetic on sympy trees.

    Every operation constructs a new node with ``evaluate=False`` so the
    derivative keeps the shape of the chain rule until `finalize` hands it to
    the simplifier.

    Parameters
    ----------
    simplifier : callable or None
        Pure function ``expr -> expr`` applied when a node's derivative is
        finalized. ``None`` keeps the raw, unreduced expression.
    """

    symbolic = True

    def __init__(self, simplifier: Optional[Callable[[sympy.Expr], sympy.Expr]] = sympy.simplify):
        self.simplifier = simplifier

    def zero(self):
        return sympy.Integer(0)

    def one(self):
        return sympy.Integer(1)

    def constant(self, value: Any):
        return sympy.sympify(value)

    def add(self, a, b):
        return sympy.Add(a, b, evaluate=False)

    def sub(self, a, b):
        return sympy.Add(a, sympy.Mul(sympy.Integer(-1), b, evaluate=False), evaluate=False)

    def mul(self, a, b):
        return sympy.Mul(a, b, evaluate=False)

    def div(self, a, b):
        return sympy.Mul(a, sympy.Pow(b, sympy.Integer(-1), evaluate=False), evaluate=False)

    def neg(self, a):
        return sympy.Mul(sympy.Integer(-1), a, evaluate=False)

    def square(self, a):
        return sympy.Pow(a, sympy.Integer(2), evaluate=False)

    def exp(self, a):
        return sympy.exp(a, evaluate=False)

    def sigmoid(self, a):
        return self.div(self.one(), self.add(self.one(), self.exp(self.neg(a))))

    def finalize(self, derivative):
        if self.simplifier is None:
            return derivative
        return self.simplifier(derivative)

    def __repr__(self):
        name = getattr(self.simplifier, "__name__", repr(self.simplifier))
        return f"SymbolicAlgebra(simplifier={name})"


NUMERIC = NumericAlgebra()
