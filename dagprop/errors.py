# dagprop/errors.py
"""
Error hierarchy for dagprop.

Every failure surfaces as a typed exception; nothing in the package falls
back to a default value. Each class also derives from the closest builtin so
callers can catch either.
"""


class DagpropError(Exception):
    """Base class for all dagprop errors."""


class UnboundSymbol(DagpropError, LookupError):
    """Forward evaluation reached a symbol missing from the evaluation context."""

    def __init__(self, name: str):
        super().__init__(f"symbol {name!r} is not bound in the evaluation context")
        self.name = name


class UnsupportedExpression(DagpropError, ValueError):
    """The expression uses an operator, function or syntax the compiler does not know."""


class AbstractMethodInvoked(DagpropError, NotImplementedError):
    """No forward/derivative rule is registered for a node's op tag."""


class GraphStateError(DagpropError, RuntimeError):
    """The graph is used out of protocol order (e.g. back-propagated twice)."""


class DerivativeNotFinalized(GraphStateError):
    """A node's derivative was read before all its consumers contributed."""
