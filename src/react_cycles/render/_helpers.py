"""Shared helpers for render backends (text, markdown)."""

from __future__ import annotations

from react_cycles.analyzer.models import AnalysisResult

# What a state-driven render loop typically leads to, for the report footer.
CYCLE_CONSEQUENCES = [
    "Infinite re-renders",
    "Memory leaks",
    "Performance issues",
    "Unpredictable component behavior",
]

_RULE_LABELS = {
    "self_state_read": "component reads its own state",
    "global_round_trip": "shared atom read/write pair",
    "self_update": "state updater callback",
    "props_round_trip": "props passed down, callback passed up",
    "trivial": "fewer than 3 nodes",
}


def describe_node(result: AnalysisResult, node_id: str) -> tuple[str, str]:
    """Return (kind, detail) for a cycle node: kind is component/state/unknown."""
    comp = result.component(node_id)
    if comp is not None:
        return "component", f"{comp.file_path}:{comp.line_number}"
    state = result.state(node_id)
    if state is not None:
        location = ""
        if state.file_path and state.line_number:
            location = f" at {state.file_path}:{state.line_number}"
        return "state", f"{state.state_kind}{location}"
    return "unknown", ""


def rule_label(rule: str) -> str:
    return _RULE_LABELS.get(rule, rule)


def cycle_path(cycle: list[str]) -> str:
    return " → ".join(cycle)
