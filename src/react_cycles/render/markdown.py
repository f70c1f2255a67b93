"""Render analysis results as a Markdown report."""

from __future__ import annotations

from collections import Counter

from react_cycles.analyzer.models import AnalysisResult
from react_cycles.render._helpers import (
    CYCLE_CONSEQUENCES,
    cycle_path,
    describe_node,
    rule_label,
)


def render_markdown(result: AnalysisResult) -> str:
    """Produce a full Markdown report from an AnalysisResult."""
    sections: list[str] = []

    # ── Title ────────────────────────────────────────────────────────────
    sections.append("# Circular State Dependency Report\n")

    # ── Summary box ──────────────────────────────────────────────────────
    summary_lines = [
        f"- **Entry point**: `{result.entry}`",
        f"- **Files analyzed**: {result.files_analyzed}",
        f"- **Files skipped**: {len(result.files_skipped)}",
        f"- **Components**: {len(result.components)}",
        f"- **State nodes**: {len(result.states)}",
        f"- **Edges**: {len(result.edges)}",
        f"- **Cycles reported**: {len(result.cycles)} (of {result.raw_cycle_count} found)",
    ]
    sections.append("\n".join(summary_lines) + "\n")

    # ── Cycles ───────────────────────────────────────────────────────────
    if result.cycles:
        sections.append("## Circular Dependencies\n")
        for i, cycle in enumerate(result.cycles, 1):
            sections.append(f"### Cycle {i}\n")
            sections.append(f"`{cycle_path(cycle)}`\n")
            sections.append("| Node | Kind | Detail |")
            sections.append("|---|---|---|")
            for node in cycle[:-1]:
                kind, detail = describe_node(result, node)
                sections.append(f"| `{node}` | {kind} | {detail or '-'} |")
            sections.append("")
        sections.append("These circular dependencies may cause:\n")
        sections.append("\n".join(f"- {c}" for c in CYCLE_CONSEQUENCES) + "\n")
    else:
        sections.append("No circular state dependencies found.\n")

    if result.suppressed:
        sections.append("## Suppressed Cycles\n")
        sections.append("| Rule | Count |")
        sections.append("|---|---|")
        for rule, count in sorted(result.suppressed.items()):
            sections.append(f"| {rule_label(rule)} | {count} |")
        sections.append("")

    # ── Components ───────────────────────────────────────────────────────
    if result.components:
        sections.append("## Components\n")
        sections.append("| Component | Location |")
        sections.append("|---|---|")
        for name, info in result.components:
            sections.append(f"| `{name}` | `{info.file_path}:{info.line_number}` |")
        sections.append("")

    # ── State ────────────────────────────────────────────────────────────
    if result.states:
        sections.append("## State\n")
        sections.append("| State | Kind | Owner |")
        sections.append("|---|---|---|")
        for key, info in result.states:
            sections.append(f"| `{key}` | {info.state_kind} | `{info.owner_scope}` |")
        sections.append("")

    # ── Edge kinds ───────────────────────────────────────────────────────
    if result.edges:
        sections.append("## Edges by Kind\n")
        counts = Counter(e.kind for e in result.edges)
        for kind, count in counts.most_common():
            sections.append(f"- `{kind}`: {count}")
        sections.append("")

    if result.files_skipped:
        sections.append("## Skipped Files\n")
        sections.append("\n".join(f"- `{f}`" for f in result.files_skipped) + "\n")

    return "\n".join(sections)
