"""Render analysis results for the terminal."""

from __future__ import annotations

import click

from react_cycles.analyzer.models import AnalysisResult
from react_cycles.render._helpers import CYCLE_CONSEQUENCES, describe_node


def render_text(result: AnalysisResult, color: bool = True) -> str:
    def style(text: str, fg: str) -> str:
        return click.style(text, fg=fg) if color else text

    if not result.cycles:
        return style("No circular state dependencies found!", "green")

    lines = [style(f"Found {len(result.cycles)} circular dependencies:", "red")]
    for i, cycle in enumerate(result.cycles, 1):
        lines.append("")
        lines.append(style(f"Cycle {i}:", "red"))
        for j, node in enumerate(cycle):
            arrow = " → (cycles back)" if j == len(cycle) - 1 else " → "
            kind, detail = describe_node(result, node)
            if kind == "component":
                lines.append(style(f"  [component] {node} ({detail}){arrow}", "yellow"))
            elif kind == "state":
                lines.append(style(f"  [state] {node} ({detail}){arrow}", "cyan"))
            else:
                lines.append(style(f"  [?] {node}{arrow}", "bright_black"))

    lines.append("")
    lines.append(style("These circular dependencies may cause:", "red"))
    lines.extend(style(f"  - {c}", "red") for c in CYCLE_CONSEQUENCES)
    return "\n".join(lines)
