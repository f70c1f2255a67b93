"""Tests for DependencyGraph: node upserts and validated edges."""

from __future__ import annotations

import logging

from react_cycles.ir.graph import DependencyGraph
from react_cycles.ir.nodes import ComponentNode, EdgeKind, StateKind, StateNode


def make_graph() -> DependencyGraph:
    g = DependencyGraph()
    g.add_component("Parent", "src/Parent.jsx", 3)
    g.add_component("Child", "src/Child.jsx", 1)
    g.add_state("count", "Parent", StateKind.USE_STATE, "src/Parent.jsx", 4)
    return g


class TestNodes:
    def test_add_component(self):
        g = make_graph()
        info = g.get_node_info("Parent")
        assert isinstance(info, ComponentNode)
        assert info.file_path == "src/Parent.jsx"
        assert info.line_number == 3

    def test_component_name_collision_last_write_wins(self):
        g = make_graph()
        g.add_component("Parent", "src/other/Parent.tsx", 10)
        assert g.component_count == 2
        assert g.get_node_info("Parent").file_path == "src/other/Parent.tsx"

    def test_state_keyed_by_owner_and_name(self):
        g = make_graph()
        info = g.get_node_info("Parent.count")
        assert isinstance(info, StateNode)
        assert info.owner_scope == "Parent"
        assert info.state_kind is StateKind.USE_STATE
        assert g.has_state("Parent.count")
        assert g.has_component_state("Parent", "count")

    def test_state_upsert_overwrites_kind(self):
        g = DependencyGraph()
        g.add_state("flag", "global", StateKind.USE_SET_RECOIL_STATE)
        g.add_state("flag", "global", "useRecoilValue")
        assert g.state_count == 1
        assert g.get_node_info("global.flag").state_kind is StateKind.USE_RECOIL_VALUE
        assert g.get_node_info("global.flag").is_global

    def test_unknown_node_info_is_none(self):
        assert make_graph().get_node_info("Nope") is None

    def test_node_ids_components_first(self):
        g = DependencyGraph()
        g.add_state("a", "X", StateKind.USE_STATE)
        g.add_component("X", "x.jsx", 1)
        assert g.node_ids() == ["X", "X.a"]

    def test_len(self):
        assert len(make_graph()) == 3


class TestEdges:
    def test_add_edge_between_known_nodes(self):
        g = make_graph()
        assert g.add_edge("Parent", "Parent.count", EdgeKind.READS) is True
        assert len(g.outgoing_edges("Parent")) == 1
        assert g.all_edges()[0].kind is EdgeKind.READS

    def test_edge_kind_accepts_string_value(self):
        g = make_graph()
        g.add_edge("Parent", "Child", "passes-props")
        assert g.edge_kinds_between("Parent", "Child") == {EdgeKind.PASSES_PROPS}

    def test_multi_edges_are_kept(self):
        g = make_graph()
        g.add_edge("Parent", "Parent.count", EdgeKind.UPDATES)
        g.add_edge("Parent", "Parent.count", EdgeKind.UPDATES)
        assert g.edge_count == 2

    def test_unknown_source_dropped_with_warning(self, caplog):
        g = make_graph()
        with caplog.at_level(logging.WARNING):
            assert g.add_edge("Ghost", "Parent", EdgeKind.CALLS_CALLBACK) is False
        assert g.edge_count == 0
        assert "Source node not found: Ghost" in caplog.text

    def test_unknown_target_dropped_with_warning(self, caplog):
        g = make_graph()
        with caplog.at_level(logging.WARNING):
            assert g.add_edge("Parent", "Parent.missing", EdgeKind.UPDATES_VIA_EFFECT) is False
        assert g.edge_count == 0
        assert "Target node not found: Parent.missing" in caplog.text

    def test_forward_reference_is_not_recovered(self):
        """An edge added before its target exists stays dropped."""
        g = make_graph()
        g.add_edge("Parent", "Sibling", EdgeKind.PASSES_PROPS)
        g.add_component("Sibling", "src/Sibling.jsx", 1)
        assert g.edge_kinds_between("Parent", "Sibling") == set()

    def test_every_edge_has_registered_endpoints(self):
        g = make_graph()
        g.add_edge("Parent", "Child", EdgeKind.PASSES_PROPS)
        g.add_edge("Child", "Nowhere", EdgeKind.CALLS_CALLBACK)
        g.add_edge("Parent.count", "Parent", EdgeKind.TRIGGERS_EFFECT)
        for e in g.all_edges():
            assert g.has_node(e.src) and g.has_node(e.dst)


def test_format_graph():
    g = make_graph()
    g.add_edge("Parent", "Child", EdgeKind.PASSES_PROPS)
    text = g.format_graph()
    assert "Parent (src/Parent.jsx:3)" in text
    assert "Parent.count (useState in Parent)" in text
    assert "Parent --passes-props--> Child" in text
