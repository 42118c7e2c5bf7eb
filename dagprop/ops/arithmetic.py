# dagprop/ops/arithmetic.py
from ..core.node import Node
from ..core.rules import Rule, register


def _as_node(x, context=None):
    """Ensure x is a Node; otherwise wrap it as a constant Node in `context`."""
    return x if isinstance(x, Node) else Node("const", payload=x, context=context)


def _operands(x, y):
    ctx = x.context if isinstance(x, Node) else getattr(y, "context", None)
    return _as_node(x, ctx), _as_node(y, ctx)


def _binary(tag, label, f, dfdx, dfdy):
    """
    Generic binary primitive:
      - registers forward f(A, a, b) and the local partials (d/da, d/db)
      - returns a builder making the Node from two operands (or plain numbers)
    """
    register(Rule(op_tag=tag, label=label, forward=f, partials=(dfdx, dfdy)))

    def build(x, y):
        x, y = _operands(x, y)
        return Node(tag, (x, y))
    build.__name__ = tag
    return build


add = _binary("add", "+", lambda A, a, b: A.add(a, b), lambda A, a, b: A.one(),       lambda A, a, b: A.one())
sub = _binary("sub", "-", lambda A, a, b: A.sub(a, b), lambda A, a, b: A.one(),       lambda A, a, b: A.neg(A.one()))
mul = _binary("mul", "*", lambda A, a, b: A.mul(a, b), lambda A, a, b: b,             lambda A, a, b: a)
div = _binary("div", "/", lambda A, a, b: A.div(a, b), lambda A, a, b: A.div(A.one(), b),
              lambda A, a, b: A.neg(A.div(a, A.square(b))))


def constant(value, context=None):
    return Node("const", payload=value, context=context)


def symbol(name, context=None):
    return Node("symbol", payload=name, context=context)
