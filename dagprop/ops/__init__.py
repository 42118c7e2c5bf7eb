# dagprop/ops/__init__.py

# Ensure the operation rules are registered
from . import arithmetic
from . import transcendental

# Convenience re-exports so users can do: from dagprop.ops import mul, exp, ...
from .arithmetic import add, sub, mul, div, constant, symbol
from .transcendental import exp, sigmoid

__all__ = [
    "add", "sub", "mul", "div",
    "exp", "sigmoid",
    "constant", "symbol",
]
