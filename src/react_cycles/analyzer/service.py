"""
react-cycles: analysis entrypoint.

Usage:
    from react_cycles.analyzer.service import analyze_project

    result = analyze_project("~/code/my-app", ignore=["storybook"])

    # result.components : [(name, ComponentInfo)]
    # result.states     : [(key, StateInfo)]
    # result.edges      : [EdgeInfo]
    # result.cycles     : filtered cycles, each [id, ..., id]

For progress reporting, drive an AnalysisSession file by file instead.
"""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path

from react_cycles.analyzer.cycles import find_cycles
from react_cycles.analyzer.false_positives import filter_cycles
from react_cycles.analyzer.models import AnalysisResult, FileProgress, snapshot_graph
from react_cycles.ir import analyze_path
from react_cycles.ir.graph import DependencyGraph
from react_cycles.utils import discover_files

log = logging.getLogger(__name__)


class AnalysisSession:
    """One in-progress accumulation: a file list and the graph it feeds."""

    def __init__(
        self,
        files: list[Path],
        entry: str = "",
        token: str | None = None,
    ) -> None:
        self.token = token or uuid.uuid4().hex
        self.entry = entry
        self.files = list(files)
        self.graph = DependencyGraph()
        self.analyzed: list[str] = []
        self.skipped: list[str] = []

    def analyze_file(self, fpath: str | os.PathLike) -> FileProgress:
        """Analyze one file into this session's graph; returns running totals."""
        fpath = Path(fpath)
        outcome = analyze_path(fpath, self.graph)
        if outcome is None:
            self.skipped.append(str(fpath))
        else:
            self.analyzed.append(str(fpath))
        progress = FileProgress(
            file_path=str(fpath),
            status="skipped" if outcome is None else "success",
            component=outcome.component if outcome else None,
            components_count=self.graph.component_count,
            states_count=self.graph.state_count,
            edges_count=self.graph.edge_count,
        )
        log.debug(
            "%s analyzed - Total: %d components, %d states, %d edges",
            fpath.name, progress.components_count, progress.states_count, progress.edges_count,
        )
        return progress

    def analyze_all(self) -> None:
        for fpath in self.files:
            self.analyze_file(fpath)

    def finalize(self) -> AnalysisResult:
        """Detect and filter cycles over the graph accumulated so far."""
        return build_result(
            self.graph,
            entry=self.entry,
            files_analyzed=len(self.analyzed),
            files_skipped=list(self.skipped),
        )


def build_result(
    graph: DependencyGraph,
    entry: str = "",
    files_analyzed: int = 0,
    files_skipped: list[str] | None = None,
) -> AnalysisResult:
    """Run cycle detection + false-positive filtering and snapshot the graph."""
    raw = find_cycles(graph)
    filtered = filter_cycles(raw, graph)
    log.info(
        "Analysis complete: %d components, %d states, %d edges, %d cycles (%d raw)",
        graph.component_count, graph.state_count, graph.edge_count,
        len(filtered.cycles), len(raw),
    )
    return snapshot_graph(
        graph,
        entry=entry,
        cycles=filtered.cycles,
        raw_cycle_count=len(raw),
        suppressed=dict(filtered.suppressed),
        files_analyzed=files_analyzed,
        files_skipped=files_skipped or [],
    )


def analyze_project(
    entry: str | os.PathLike | None,
    ignore: list[str] | tuple[str, ...] = (),
) -> AnalysisResult:
    """Discover, analyze and check a whole project in one pass.

    Raises:
        InputPathError: *entry* is missing or does not exist.
    """
    files = discover_files(entry, ignore)
    session = AnalysisSession(files, entry=str(entry))
    session.analyze_all()
    return session.finalize()
