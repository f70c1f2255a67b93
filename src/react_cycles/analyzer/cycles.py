"""Depth-first cycle search over the dependency graph.

Each unvisited node (components first, then state nodes) starts a DFS that
keeps a recursion stack and the current path. An edge back into a node on
the stack closes a cycle: the path from that node's first occurrence,
followed by the node again. Nodes are marked visited globally and never
explored twice, so cycles reachable only through an already visited node
are not reported. The search is iterative; deep graphs do not hit the
interpreter recursion limit.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from react_cycles.ir.graph import DependencyGraph
from react_cycles.ir.nodes import Edge

log = logging.getLogger(__name__)


def find_cycles(graph: DependencyGraph) -> list[list[str]]:
    """Return raw cycles; each starts and ends with the same node identity."""
    visited: set[str] = set()
    on_stack: set[str] = set()
    cycles: list[list[str]] = []

    for root in graph.node_ids():
        if root in visited:
            continue
        visited.add(root)
        on_stack.add(root)
        # Frame: (node, path ending at node, remaining outgoing edges)
        stack: list[tuple[str, list[str], Iterator[Edge]]] = [
            (root, [root], iter(graph.outgoing_edges(root))),
        ]
        while stack:
            node, path, edges = stack[-1]
            edge = next(edges, None)
            if edge is None:
                stack.pop()
                on_stack.discard(node)
                continue

            target = edge.dst
            if target in on_stack:
                start = path.index(target)
                cycles.append(path[start:] + [target])
                continue
            if target in visited:
                continue

            visited.add(target)
            on_stack.add(target)
            stack.append((target, path + [target], iter(graph.outgoing_edges(target))))

    log.debug("Cycle search: %d raw cycles over %d nodes", len(cycles), len(graph))
    return cycles
