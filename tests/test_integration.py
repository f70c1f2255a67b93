"""Integration test: run full analyze_project on the sample React app."""

from pathlib import Path

from react_cycles.analyzer.service import analyze_project
from react_cycles.ir import build_dependency_graph
from react_cycles.utils import discover_files

SAMPLE_APP = Path(__file__).parent.parent / "examples" / "sample_app"


def test_full_analysis():
    """Verify analyze_project produces the expected graph and cycles on the sample app."""
    assert SAMPLE_APP.exists(), f"Sample app not found at {SAMPLE_APP}"

    result = analyze_project(SAMPLE_APP)

    # Discovery: 8 source files, one of which does not parse
    assert result.files_analyzed == 7
    assert len(result.files_skipped) == 1
    assert result.files_skipped[0].endswith("Broken.jsx")

    # Components: hook-only and atom files register nothing
    names = [name for name, _ in result.components]
    assert names == ["Counter", "FilterPanel", "ItemRow", "ResultsList", "TodoList"]
    assert result.component("Counter").line_number == 3

    # State: local useState, custom hook results, shared atoms
    assert result.state("Counter.count").state_kind == "useState"
    assert result.state("TodoList.todos").state_kind == "useState"
    assert result.state("TodoList.showDone").state_kind == "custom-hook"
    assert result.state("global.filterAtom").owner_scope == "global"
    assert result.state("global.resultsAtom") is not None

    edges = result.edge_triples()
    assert ("Counter.count", "Counter", "triggers-effect") in edges
    assert ("Counter", "Counter.count", "updates-via-effect") in edges
    assert ("Counter.count", "Counter.count", "self-update") in edges
    assert ("TodoList", "ItemRow", "passes-props") in edges
    assert ("ItemRow", "TodoList", "calls-callback") in edges
    assert ("FilterPanel", "global.filterAtom", "recoil-writes") in edges
    assert ("global.filterAtom", "ResultsList", "recoil-reads") in edges

    # Cycles: only the two-atom loop survives filtering
    assert result.cycles == [[
        "FilterPanel", "global.filterAtom", "ResultsList", "global.resultsAtom", "FilterPanel",
    ]]
    assert result.raw_cycle_count > len(result.cycles)
    assert set(result.suppressed) == {"self_update", "self_state_read", "props_round_trip"}
    assert result.has_cycles


def test_ignored_directory_is_not_analyzed():
    result = analyze_project(SAMPLE_APP, ignore=["legacy"])
    assert result.files_skipped == []
    assert result.files_analyzed == 7


def test_json_dump_uses_from_key():
    result = analyze_project(SAMPLE_APP)
    data = result.model_dump(mode="json", by_alias=True)
    assert set(data["edges"][0]) == {"from", "to", "kind"}
    assert data["components"][0][0] == "Counter"


def test_rerun_is_deterministic():
    first = analyze_project(SAMPLE_APP)
    second = analyze_project(SAMPLE_APP)
    assert first.edge_triples() == second.edge_triples()
    assert first.cycles == second.cycles


def test_build_dependency_graph_matches_project_analysis():
    files = discover_files(SAMPLE_APP)
    graph = build_dependency_graph(files)
    result = analyze_project(SAMPLE_APP)
    assert graph.edge_count == len(result.edges)
    assert [c.name for c in graph.components()] == [name for name, _ in result.components]
