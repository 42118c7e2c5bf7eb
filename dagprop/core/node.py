# dagprop/core/node.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from ..errors import DerivativeNotFinalized, GraphStateError
from .context import EMPTY_CONTEXT, EvaluationContext
from .rules import rule_for

LEAF_TAGS = ("const", "symbol")

_UNSET = object()


@dataclass(eq=False)
class Node:
    """
    One node of the expression DAG: a leaf value or an elementary operation.

    Attributes
    ----------
    op_tag : str
        "const", "symbol", or a tag registered in `dagprop.core.rules`
        ("add", "sub", "mul", "div", "exp", "sigmoid").
    operands : Tuple[Node, ...]
        Input nodes, in argument order. Leaves have none.
    payload : Any
        Literal value for "const", symbol name for "symbol", else None.
    context : EvaluationContext
        Shared by every node of one graph; supplies symbol values and the
        algebra (numeric or symbolic).
    consumer_count : int
        Number of nodes using this node as an operand. Incremented by each
        consumer's constructor; it is the exact number of
        `accumulate_derivative` calls this node waits for before it fires.
    accumulated : int
        Contributions received so far.

    Nodes compare by identity, so a shared sub-expression is one object with
    several consumers.
    """
    op_tag: str
    operands: Tuple["Node", ...] = ()
    payload: Any = None
    context: Optional[EvaluationContext] = None
    consumer_count: int = field(default=0, init=False)
    accumulated: int = field(default=0, init=False)
    _derivative: Any = field(default=None, init=False, repr=False)
    _value: Any = field(default=_UNSET, init=False, repr=False)
    _finalized: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        self.operands = tuple(self.operands)
        if self.context is None:
            self.context = self.operands[0].context if self.operands else EMPTY_CONTEXT

        expected = 0 if self.op_tag in LEAF_TAGS else rule_for(self.op_tag).arity
        if len(self.operands) != expected:
            raise ValueError(
                f"{self.op_tag!r} takes {expected} operand(s), got {len(self.operands)}"
            )

        for operand in self.operands:
            if operand.context is not self.context:
                raise ValueError("all nodes of a graph must share one evaluation context")
            if operand.accumulated or operand._finalized:
                raise GraphStateError(
                    f"cannot add a consumer to {operand} after back-propagation started"
                )
        for operand in self.operands:
            operand.consumer_count += 1

        self._derivative = self.algebra.zero()

    # ------------------------------------------------------------------ #
    # forward
    # ------------------------------------------------------------------ #
    @property
    def algebra(self):
        return self.context.algebra

    @property
    def is_leaf(self) -> bool:
        return not self.operands

    @property
    def has_value(self) -> bool:
        return self._value is not _UNSET

    def get_value(self):
        """Forward value, computed on first call and cached afterward."""
        if self._value is _UNSET:
            if self.op_tag == "const":
                value = self.algebra.constant(self.payload)
            elif self.op_tag == "symbol":
                value = self.context.get_symbol_value(self.payload)
            else:
                args = [operand.get_value() for operand in self.operands]
                value = rule_for(self.op_tag).forward(self.algebra, *args)
            self._value = value
        return self._value

    def local_partials(self) -> List[Tuple["Node", Any]]:
        """(operand, d self / d operand) pairs at the current forward values."""
        if self.is_leaf:
            return []
        rule = rule_for(self.op_tag)
        args = [operand.get_value() for operand in self.operands]
        return [(operand, partial(self.algebra, *args))
                for operand, partial in zip(self.operands, rule.partials)]

    # ------------------------------------------------------------------ #
    # reverse
    # ------------------------------------------------------------------ #
    @property
    def is_finalized(self) -> bool:
        return self._finalized

    @property
    def derivative(self):
        """d root / d self. Only available once every consumer has contributed."""
        if not self._finalized:
            raise DerivativeNotFinalized(
                f"derivative of {self} is partial: {self.accumulated} of "
                f"{self.consumer_count} contributions received"
            )
        return self._derivative

    @property
    def partial_derivative(self):
        """Running accumulator; equals `derivative` once finalized."""
        return self._derivative

    def back_propagate(self):
        """Seed this root with d root/d root = 1 and propagate through the DAG."""
        # Forward values first: an unbound symbol must fail before any state changes
        self.get_value()
        self._seed()
        self._back_propagate_impl()

    def accumulate_derivative(self, contribution):
        """
        Receive one consumer's contribution (local partial x consumer derivative).
        Fires this node once the last expected contribution arrives.
        """
        if self._receive(contribution):
            self._back_propagate_impl()

    def _seed(self):
        if self.consumer_count:
            raise GraphStateError(
                f"{self} has {self.consumer_count} consumer(s); only a root can be back-propagated"
            )
        if self._finalized:
            raise GraphStateError(
                "graph was already back-propagated; compile a fresh graph for another pass"
            )
        self._derivative = self.algebra.one()
        self._finalized = True

    def _receive(self, contribution) -> bool:
        # True when this call completed the node
        if self._finalized:
            raise GraphStateError(f"{self} received a contribution after it was finalized")
        self._derivative = self.algebra.add(self._derivative, contribution)
        self.accumulated += 1
        if self.accumulated == self.consumer_count:
            self._derivative = self.algebra.finalize(self._derivative)
            self._finalized = True
            return True
        return False

    def _contributions(self) -> List[Tuple["Node", Any]]:
        return [(operand, self.algebra.mul(partial, self._derivative))
                for operand, partial in self.local_partials()]

    def _back_propagate_impl(self):
        for operand, contribution in self._contributions():
            operand.accumulate_derivative(contribution)

    # ------------------------------------------------------------------ #
    def __str__(self):
        if self.is_leaf:
            return str(self.payload)
        return rule_for(self.op_tag).label

    def __repr__(self):
        if self.is_leaf:
            return f"Node({self.op_tag}, {self.payload!r}, consumers={self.consumer_count})"
        return (f"Node({self.op_tag}, operands={len(self.operands)}, "
                f"consumers={self.consumer_count})")
