"""ComponentNode, StateNode and Edge dataclasses plus their kind enums."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

GLOBAL_SCOPE = "global"


class StateKind(str, Enum):
    USE_STATE = "useState"
    SET_STATE = "setState"
    CUSTOM_HOOK = "custom-hook"
    INFERRED = "inferred"
    USE_RECOIL_STATE = "useRecoilState"
    USE_RECOIL_VALUE = "useRecoilValue"
    USE_SET_RECOIL_STATE = "useSetRecoilState"


class EdgeKind(str, Enum):
    READS = "reads"
    UPDATES = "updates"
    UPDATES_VIA_EFFECT = "updates-via-effect"
    TRIGGERS_EFFECT = "triggers-effect"
    DEPENDS = "depends"
    SELF_UPDATE = "self-update"
    RECOIL_READS = "recoil-reads"
    RECOIL_WRITES = "recoil-writes"
    PASSES_PROPS = "passes-props"
    CALLS_CALLBACK = "calls-callback"
    CUSTOM_STATE_DEPENDENCY = "custom-state-dependency"


def state_key(owner_scope: str, name: str) -> str:
    """Identity of a state node: ``"<owner_scope>.<name>"``."""
    return f"{owner_scope}.{name}"


@dataclass
class ComponentNode:
    name: str          # identity; not namespaced by file
    file_path: str
    line_number: int


@dataclass
class StateNode:
    name: str
    owner_scope: str                 # component name or "global"
    state_kind: StateKind
    file_path: str | None = None
    line_number: int | None = None

    @property
    def key(self) -> str:
        return state_key(self.owner_scope, self.name)

    @property
    def is_global(self) -> bool:
        return self.owner_scope == GLOBAL_SCOPE


@dataclass(frozen=True)
class Edge:
    src: str          # node identity (component name or state key)
    dst: str
    kind: EdgeKind
