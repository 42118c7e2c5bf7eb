# dagprop/ops/transcendental.py
from ..core.node import Node
from ..core.rules import Rule, register
from .arithmetic import _as_node

register(Rule(op_tag="exp", label="exp",
              forward=lambda A, a: A.exp(a),
              partials=(lambda A, a: A.exp(a),)))


def _sigmoid_partial(A, a):
    s = A.sigmoid(a)
    return A.mul(s, A.sub(A.one(), s))


register(Rule(op_tag="sigmoid", label="sigma",
              forward=lambda A, a: A.sigmoid(a),
              partials=(_sigmoid_partial,)))


def exp(x):
    return Node("exp", (_as_node(x),))


def sigmoid(x):
    """sigma(x) = 1 / (1 + e^-x)."""
    return Node("sigmoid", (_as_node(x),))
