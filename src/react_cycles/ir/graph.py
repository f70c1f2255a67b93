"""DependencyGraph: components, state nodes, and validated typed edges."""

from __future__ import annotations

import logging
from collections import defaultdict

from react_cycles.ir.nodes import (
    ComponentNode,
    Edge,
    EdgeKind,
    StateKind,
    StateNode,
    state_key,
)

log = logging.getLogger(__name__)


class DependencyGraph:
    """Typed multigraph of components and state nodes.

    The graph only grows: nodes are upserted, edges are appended, and nothing
    is ever removed. An edge is kept only when both of its endpoints are
    registered at the moment it is added.
    """

    def __init__(self) -> None:
        self._components: dict[str, ComponentNode] = {}
        self._states: dict[str, StateNode] = {}
        self._edges: list[Edge] = []
        # Forward adjacency: src identity → list[Edge], in insertion order
        self._fwd: dict[str, list[Edge]] = defaultdict(list)

    def add_component(self, name: str, file_path: str, line_number: int) -> ComponentNode:
        """Register a component (later add wins on a name collision)."""
        node = ComponentNode(name=name, file_path=file_path, line_number=line_number)
        self._components[name] = node
        return node

    def add_state(
        self,
        name: str,
        owner_scope: str,
        state_kind: StateKind,
        file_path: str | None = None,
        line_number: int | None = None,
    ) -> StateNode:
        """Register a state node keyed by ``owner_scope.name`` (upsert)."""
        node = StateNode(
            name=name,
            owner_scope=owner_scope,
            state_kind=StateKind(state_kind),
            file_path=file_path,
            line_number=line_number,
        )
        self._states[node.key] = node
        return node

    def add_edge(self, src: str, dst: str, kind: EdgeKind) -> bool:
        """Append a directed edge if both endpoints exist.

        Returns False (after logging a warning) when either endpoint is
        unknown; never raises.
        """
        if not self.has_node(src):
            log.warning("Source node not found: %s (dropping %s edge to %s)", src, kind, dst)
            return False
        if not self.has_node(dst):
            log.warning("Target node not found: %s (dropping %s edge from %s)", dst, kind, src)
            return False
        edge = Edge(src=src, dst=dst, kind=EdgeKind(kind))
        self._edges.append(edge)
        self._fwd[src].append(edge)
        return True

    def has_node(self, node_id: str) -> bool:
        return node_id in self._components or node_id in self._states

    def has_state(self, key: str) -> bool:
        return key in self._states

    def has_component_state(self, component: str, name: str) -> bool:
        return state_key(component, name) in self._states

    def get_node_info(self, node_id: str) -> ComponentNode | StateNode | None:
        """Look a node up across both node maps (components first)."""
        if node_id in self._components:
            return self._components[node_id]
        return self._states.get(node_id)

    def outgoing_edges(self, node_id: str) -> list[Edge]:
        return self._fwd.get(node_id, [])

    def edge_kinds_between(self, src: str, dst: str) -> set[EdgeKind]:
        return {e.kind for e in self._fwd.get(src, []) if e.dst == dst}

    def node_ids(self) -> list[str]:
        """All identities: components first, then states, in registration order."""
        return list(self._components) + [k for k in self._states if k not in self._components]

    def components(self) -> list[ComponentNode]:
        return list(self._components.values())

    def states(self) -> list[StateNode]:
        return list(self._states.values())

    def all_edges(self) -> list[Edge]:
        return list(self._edges)

    @property
    def component_count(self) -> int:
        return len(self._components)

    @property
    def state_count(self) -> int:
        return len(self._states)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def format_graph(self) -> str:
        """Plain-text dump of the whole graph."""
        lines = ["Components:"]
        for c in self._components.values():
            lines.append(f"  {c.name} ({c.file_path}:{c.line_number})")
        lines.append("")
        lines.append("States:")
        for key, s in self._states.items():
            lines.append(f"  {key} ({s.state_kind.value} in {s.owner_scope})")
        lines.append("")
        lines.append("Edges:")
        for e in self._edges:
            lines.append(f"  {e.src} --{e.kind.value}--> {e.dst}")
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self._components) + len(self._states)
