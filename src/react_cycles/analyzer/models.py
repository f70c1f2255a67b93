"""Pydantic models for analysis results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from react_cycles.ir.graph import DependencyGraph


# ── Graph snapshot ─────────────────────────────────────────────────────────

# Node attributes are dumped with camelCase keys (filePath, ownerScope, ...)
# when serialized with by_alias=True.

class ComponentInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_path: str = Field(alias="filePath")
    line_number: int = Field(alias="lineNumber")


class StateInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    owner_scope: str = Field(alias="ownerScope")    # component name or "global"
    state_kind: str = Field(alias="stateKind")      # "useState", "custom-hook", ...
    file_path: str | None = Field(default=None, alias="filePath")
    line_number: int | None = Field(default=None, alias="lineNumber")


class EdgeInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    kind: str                 # "reads", "updates", "passes-props", ...


# ── Session progress ───────────────────────────────────────────────────────

class FileProgress(BaseModel):
    """Running totals after one file of a session is analyzed."""
    file_path: str
    status: str = "success"   # "success" | "skipped"
    component: str | None = None
    components_count: int = 0
    states_count: int = 0
    edges_count: int = 0


# ── Top-level result ───────────────────────────────────────────────────────

class AnalysisResult(BaseModel):
    entry: str = ""
    components: list[tuple[str, ComponentInfo]] = Field(default_factory=list)
    states: list[tuple[str, StateInfo]] = Field(default_factory=list)
    edges: list[EdgeInfo] = Field(default_factory=list)
    cycles: list[list[str]] = Field(default_factory=list)

    raw_cycle_count: int = 0
    suppressed: dict[str, int] = Field(default_factory=dict)  # rule → count
    files_analyzed: int = 0
    files_skipped: list[str] = Field(default_factory=list)

    @property
    def has_cycles(self) -> bool:
        return bool(self.cycles)

    def component(self, name: str) -> ComponentInfo | None:
        return next((info for n, info in self.components if n == name), None)

    def state(self, key: str) -> StateInfo | None:
        return next((info for k, info in self.states if k == key), None)

    def edge_triples(self) -> list[tuple[str, str, str]]:
        return [(e.from_, e.to, e.kind) for e in self.edges]


def snapshot_graph(graph: DependencyGraph, **extra) -> AnalysisResult:
    """Copy the graph's nodes and edges into an AnalysisResult."""
    return AnalysisResult(
        components=[
            (c.name, ComponentInfo(file_path=c.file_path, line_number=c.line_number))
            for c in graph.components()
        ],
        states=[
            (s.key, StateInfo(
                name=s.name,
                owner_scope=s.owner_scope,
                state_kind=s.state_kind.value,
                file_path=s.file_path,
                line_number=s.line_number,
            ))
            for s in graph.states()
        ],
        edges=[EdgeInfo(from_=e.src, to=e.dst, kind=e.kind.value) for e in graph.all_edges()],
        **extra,
    )
