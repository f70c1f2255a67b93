"""IR package: the component/state dependency graph and the JS front end.

Provides:
    build_dependency_graph(files) -> DependencyGraph
    analyze_path(fpath, graph) -> FileOutcome | None
"""

from __future__ import annotations

import logging
from pathlib import Path

from react_cycles.errors import SourceParseError
from react_cycles.ir.graph import DependencyGraph
from react_cycles.ir.js_frontend import FileOutcome, analyze_file

log = logging.getLogger(__name__)


def analyze_path(fpath: Path, graph: DependencyGraph) -> FileOutcome | None:
    """Analyze one file into *graph*; returns None when the file is skipped.

    Read and parse failures are logged and never abort the run.
    """
    try:
        return analyze_file(fpath, graph)
    except OSError as exc:
        log.warning("Cannot read %s: %s", fpath, exc)
    except SourceParseError as exc:
        log.warning("Error parsing %s", exc)
    except Exception:
        log.exception("Analysis failed for %s (skipped)", fpath)
    return None


def build_dependency_graph(
    files: list[Path],
    graph: DependencyGraph | None = None,
) -> DependencyGraph:
    """Build (or extend) a DependencyGraph from a list of source files.

    Args:
        files: Source files, analyzed in the given order.
        graph: Existing graph to accumulate into. A fresh one by default.

    Returns:
        The populated graph.
    """
    if graph is None:
        graph = DependencyGraph()

    for fpath in files:
        analyze_path(fpath, graph)

    log.info(
        "Dependency graph built: %d components, %d states, %d edges from %d files",
        graph.component_count, graph.state_count, graph.edge_count, len(files),
    )
    return graph


__all__ = ["analyze_path", "build_dependency_graph", "DependencyGraph", "FileOutcome"]
