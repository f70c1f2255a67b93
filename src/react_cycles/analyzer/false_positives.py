"""Suppress cycles that are structurally benign.

Rules (applied after collapsing consecutive duplicate entries):
  self_state_read       [C, C.x, C]: a component reading its own state
  global_round_trip     [A, B, A] through a global atom: a shared-atom read/write pair
  self_update           [S, S] on a state node: the updater-callback marker edge
  props_round_trip      [P, C, P] over passes-props / calls-callback with no local state
  trivial               anything shorter than 3 identities
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field

from react_cycles.ir.graph import DependencyGraph
from react_cycles.ir.nodes import GLOBAL_SCOPE, EdgeKind, StateNode

log = logging.getLogger(__name__)

_GLOBAL_PREFIX = f"{GLOBAL_SCOPE}."
_PROP_EDGE_KINDS = {EdgeKind.PASSES_PROPS, EdgeKind.CALLS_CALLBACK}


@dataclass
class FilterResult:
    cycles: list[list[str]] = field(default_factory=list)
    suppressed: Counter = field(default_factory=Counter)  # rule name → count


def collapse_repeats(cycle: list[str]) -> list[str]:
    """Drop consecutive duplicates; a self-loop ``[S, S]`` is kept as is."""
    out: list[str] = []
    for node in cycle:
        if not out or out[-1] != node:
            out.append(node)
    if len(out) < 2:
        return list(cycle[:2])
    return out


def suppression_rule(cycle: list[str], graph: DependencyGraph) -> str | None:
    """Name of the first rule that drops *cycle*, or None if it is reported."""
    if len(cycle) == 2:
        if cycle[0] == cycle[1] and "." in cycle[0]:
            return "self_update"
        return "trivial"

    if len(cycle) == 3 and cycle[0] == cycle[2]:
        first, middle = cycle[0], cycle[1]
        if middle.startswith(first + "."):
            return "self_state_read"
        if _is_global(first, graph) or _is_global(middle, graph):
            return "global_round_trip"
        # Either end may be the parent: the search usually enters at the child
        kinds = graph.edge_kinds_between(first, middle) | graph.edge_kinds_between(middle, first)
        if kinds & _PROP_EDGE_KINDS and not any(_is_local_state(n) for n in cycle):
            return "props_round_trip"

    if len(cycle) < 3:
        return "trivial"
    return None


def filter_cycles(cycles: list[list[str]], graph: DependencyGraph) -> FilterResult:
    """Collapse and filter raw cycles. Filtering its own output is a no-op."""
    result = FilterResult()
    for raw in cycles:
        cycle = collapse_repeats(raw)
        rule = suppression_rule(cycle, graph)
        if rule is not None:
            result.suppressed[rule] += 1
            log.debug("Suppressed cycle (%s): %s", rule, " → ".join(cycle))
            continue
        result.cycles.append(cycle)
    return result


def _is_global(node_id: str, graph: DependencyGraph) -> bool:
    info = graph.get_node_info(node_id)
    if isinstance(info, StateNode):
        return info.is_global
    return node_id.startswith(_GLOBAL_PREFIX)


def _is_local_state(node_id: str) -> bool:
    return "." in node_id and not node_id.startswith(_GLOBAL_PREFIX)
