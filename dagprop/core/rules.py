# dagprop/core/rules.py
"""
Rule table for operation nodes.

Each operation tag maps to one `Rule`: a forward function and one local
partial per operand. Both receive the graph's algebra first, then the operand
forward values, e.g. ``rule.partials[1](algebra, a, b)`` is d(a op b)/db.
The modules in `dagprop.ops` fill the table on import.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from ..errors import AbstractMethodInvoked


@dataclass(frozen=True)
class Rule:
    op_tag: str                          # "add", "exp", ...
    label: str                           # printable form: "+", "exp", ...
    forward: Callable
    partials: Tuple[Callable, ...]       # one per operand

    @property
    def arity(self) -> int:
        return len(self.partials)


RULES: Dict[str, Rule] = {}


def register(rule: Rule) -> Rule:
    RULES[rule.op_tag] = rule
    return rule


def rule_for(op_tag: str) -> Rule:
    try:
        return RULES[op_tag]
    except KeyError:
        raise AbstractMethodInvoked(
            f"no forward/derivative rule registered for op {op_tag!r}"
        ) from None
