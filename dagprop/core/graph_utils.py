"""
Graph utilities.

Traversal, statistics and console reports for an expression DAG.
"""

import numpy as np
from typing import Any, Dict, List, Tuple
from collections import Counter

from .node import Node


def topological_order(root: Node) -> List[Node]:
    """
    Every node reachable from `root`, operands before their consumers
    (root last). Iterative DFS, so arbitrarily deep graphs are fine.
    """
    order = []
    visited = set()
    stack = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            order.append(node)
            continue
        if id(node) in visited:
            continue
        visited.add(id(node))
        stack.append((node, True))
        for operand in reversed(node.operands):
            if id(operand) not in visited:
                stack.append((operand, False))
    return order


def graph_depth(root: Node) -> int:
    """Longest root-to-leaf path, in edges."""
    depth = {}
    for node in topological_order(root):
        depth[id(node)] = 1 + max((depth[id(o)] for o in node.operands), default=-1)
    return depth[id(root)]


def _fmt(value) -> str:
    try:
        return f"{float(value):10.6f}"
    except (TypeError, ValueError):
        return str(value)


def print_graph_summary(root: Node, detailed: bool = False) -> Dict:
    """
    Print summary information about the graph

    Args:
        root: DAG root
        detailed: whether to print the per-node list

    Returns:
        Dictionary of statistics (see get_graph_stats)
    """
    stats = get_graph_stats(root)
    n_nodes = stats['nodes']

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {n_nodes:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Depth:              {stats['depth']}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print(f"Shared nodes:       {stats['shared_nodes']}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / n_nodes
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed and n_nodes <= 100:
        print()
        print("="*70)
        print("DETAILED NODE LIST")
        print("="*70)
        index = {id(n): i for i, n in enumerate(topological_order(root))}
        for i, node in enumerate(topological_order(root)):
            operand_info = ", ".join(f"Node{index[id(o)]}" for o in node.operands)
            print(f"Node {i:3d}: {node.op_tag:12s} <- [{operand_info}]  "
                  f"consumers={node.consumer_count}")

    print("="*70 + "\n")
    return stats


def print_computation_graph(root: Node, max_nodes: int = 20) -> None:
    """
    Print the graph structure with forward values and, when final, derivatives

    Args:
        root: DAG root
        max_nodes: maximum number of nodes to print
    """
    print("\n" + "="*70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("="*70)

    nodes = topological_order(root)
    index = {id(n): i for i, n in enumerate(nodes)}

    for i, node in enumerate(nodes[:max_nodes]):
        val = _fmt(node.get_value()) if node.has_value else "?"
        grad = f"  d={_fmt(node.derivative)}" if node.is_finalized else ""
        if node.operands:
            operand_info = ", ".join(f"Node{index[id(o)]}" for o in node.operands)
            print(f"Node {i:4d}: {str(node):12s} ({val}) <- [{operand_info}]{grad}")
        else:
            print(f"Node {i:4d}: {str(node):12s} ({val}) [leaf/input]{grad}")

    if len(nodes) > max_nodes:
        print(f"... ({len(nodes) - max_nodes} more nodes)")

    print("="*70 + "\n")


def get_graph_stats(root: Node) -> Dict:
    """
    Graph statistics (no printing)

    fan-in is the number of operands, fan-out the consumer count.
    """
    nodes = topological_order(root)
    n_nodes = len(nodes)

    fan_ins = [len(node.operands) for node in nodes]
    fan_outs = [node.consumer_count for node in nodes]

    return {
        'nodes': n_nodes,
        'edges': sum(fan_ins),
        'depth': graph_depth(root),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'shared_nodes': sum(1 for c in fan_outs if c > 1),
        'consumer_counts': dict(Counter(fan_outs)),
        'operations': dict(Counter(node.op_tag for node in nodes)),
    }


def graph_signature(root: Node) -> Tuple:
    """
    Hashable structural description of the graph.

    One entry per node in topological order: (op_tag, payload, operand
    positions, consumer_count). Two graphs with the same shape, sharing and
    leaves have equal signatures even though they share no objects.
    """
    nodes = topological_order(root)
    index = {id(n): i for i, n in enumerate(nodes)}
    return tuple(
        (node.op_tag, node.payload,
         tuple(index[id(o)] for o in node.operands),
         node.consumer_count)
        for node in nodes
    )


def _jsonable(value) -> Any:
    if isinstance(value, (np.floating, np.integer)):
        return float(value)
    if isinstance(value, (int, float, str)) or value is None:
        return value
    return str(value)


def to_dict(node: Node) -> Dict:
    """
    Nested, JSON-ready view of the graph. Shared nodes appear once per use.
    Forward values and derivatives are included only where already known.
    """
    out = {'op': node.op_tag, 'label': str(node), 'consumer_count': node.consumer_count}
    if node.has_value:
        out['value'] = _jsonable(node.get_value())
    if node.is_finalized:
        out['derivative'] = _jsonable(node.derivative)
    if node.operands:
        out['operands'] = [to_dict(o) for o in node.operands]
    return out
