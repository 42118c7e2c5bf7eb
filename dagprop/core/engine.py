# dagprop/core/engine.py
from __future__ import annotations

import logging
from typing import Optional

from ..config import EngineConfig
from .graph_utils import graph_depth, topological_order
from .node import Node

logger = logging.getLogger(__name__)


def evaluate(root: Node, *, iterative: bool = False):
    """
    Forward value of `root`.

    With ``iterative=True`` the value caches are filled in post-order with an
    explicit stack first, so no call recurses deeper than one level.
    """
    if iterative:
        for node in topological_order(root):
            node.get_value()
    return root.get_value()


def reverse(root: Node, config: Optional[EngineConfig] = None) -> Node:
    """
    Run a single reverse pass from `root`.

    Seeds d root/d root = 1 and drives propagation to completion. Afterwards
    every node reachable from the root holds its finalized `derivative`.

    Args:
        root:   DAG root (consumer_count == 0).
        config: picks the traversal. The explicit-stack traversal is used when
                `config.iterative` is set or the graph is deeper than
                `config.max_recursive_depth`; both apply the same
                accumulation gating.

    Returns:
        The root, for chaining.
    """
    config = (config or EngineConfig()).validate()
    iterative = config.iterative or graph_depth(root) > config.max_recursive_depth
    logger.debug("reverse pass from %r (iterative=%s)", root, iterative)

    if not iterative:
        root.back_propagate()
        return root

    evaluate(root, iterative=True)
    root._seed()
    # Only finalized nodes are ever on the stack
    stack = [root]
    fired = 0
    while stack:
        node = stack.pop()
        fired += 1
        for operand, contribution in node._contributions():
            if operand._receive(contribution):
                stack.append(operand)
    logger.debug("reverse pass fired %d nodes", fired)
    return root
