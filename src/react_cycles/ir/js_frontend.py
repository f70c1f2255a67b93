"""Walk a JS/TS source file and emit component/state facts into the graph.

One tree walk handles every construct:
  - useState destructuring and setter calls in the enclosing function
  - useEffect dependencies and setters called inside the effect callback
  - useCallback / useMemo dependencies on known state
  - this.setState in class components
  - Recoil atom hooks (useRecoilState / useRecoilValue / useSetRecoilState)
  - any other use* call, treated as a custom hook returning state
  - JSX children rendered with props (data props vs callback props)

The whole file is scanned, not only the component body, and every finding is
attributed to the file's single registered component.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from tree_sitter import Node

from react_cycles.ir.classifier import find_component, summarize_file
from react_cycles.ir.graph import DependencyGraph
from react_cycles.ir.nodes import GLOBAL_SCOPE, EdgeKind, StateKind, state_key
from react_cycles.ir.syntax import (
    FUNCTION_EXPRESSION_TYPES,
    SyntaxVisitor,
    call_arguments,
    callee_name,
    declarator_target,
    enclosing_function,
    line_of,
    named_children,
    node_text,
    object_pattern_keys,
    parse_source,
    pattern_slots,
    walk,
)

log = logging.getLogger(__name__)

RECOIL_HOOKS = {"useRecoilState", "useRecoilValue", "useSetRecoilState"}
MEMO_HOOKS = {"useCallback", "useMemo"}

# Capitalized tags that are platform primitives rather than project components.
UI_PRIMITIVES = {
    # React built-ins
    "Fragment", "StrictMode", "Suspense", "Profiler",
    # React Native / cross-platform primitives
    "View", "Text", "Image", "ImageBackground", "ScrollView", "FlatList",
    "SectionList", "VirtualizedList", "TextInput", "TouchableOpacity",
    "TouchableHighlight", "TouchableWithoutFeedback", "TouchableNativeFeedback",
    "Pressable", "Button", "Switch", "Modal", "ActivityIndicator",
    "SafeAreaView", "KeyboardAvoidingView", "StatusBar", "RefreshControl",
}

HTML_TAGS = {
    "a", "abbr", "address", "area", "article", "aside", "audio", "b", "base",
    "bdi", "bdo", "blockquote", "body", "br", "button", "canvas", "caption",
    "cite", "code", "col", "colgroup", "data", "datalist", "dd", "del",
    "details", "dfn", "dialog", "div", "dl", "dt", "em", "embed", "fieldset",
    "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5",
    "h6", "head", "header", "hr", "html", "i", "iframe", "img", "input", "ins",
    "kbd", "label", "legend", "li", "link", "main", "map", "mark", "meta",
    "meter", "nav", "noscript", "object", "ol", "optgroup", "option", "output",
    "p", "param", "picture", "pre", "progress", "q", "rp", "rt", "ruby", "s",
    "samp", "script", "section", "select", "small", "source", "span",
    "strong", "style", "sub", "summary", "sup", "svg", "table", "tbody", "td",
    "template", "textarea", "tfoot", "th", "thead", "time", "title", "tr",
    "track", "u", "ul", "var", "video", "wbr",
}

# Attribute values that make a prop a callback regardless of its name.
_CALLBACK_VALUE_TYPES = FUNCTION_EXPRESSION_TYPES | {"call_expression"}


@dataclass(frozen=True)
class ExtractionContext:
    """Per-file values threaded through every extraction handler."""
    file_path: str
    component: str


@dataclass
class FileOutcome:
    file_path: str
    component: str | None = None


def analyze_file(fpath: Path, graph: DependencyGraph) -> FileOutcome:
    """Parse one file, register its component, and emit its facts into *graph*.

    Read and parse errors propagate; callers decide whether to skip the file.
    """
    source = fpath.read_bytes()
    return analyze_source(source, str(fpath), graph)


def analyze_source(source: bytes, file_path: str, graph: DependencyGraph) -> FileOutcome:
    tree = parse_source(source, file_path)
    root = tree.root_node

    declaration = find_component(root)
    if declaration is None:
        log.debug("No React component found in %s: %s",
                  Path(file_path).name, summarize_file(root).describe())
        return FileOutcome(file_path=file_path)

    log.debug("Found component %s (%s) at %s:%d",
              declaration.name, declaration.form, file_path, declaration.line_number)
    graph.add_component(declaration.name, file_path, declaration.line_number)

    ctx = ExtractionContext(file_path=file_path, component=declaration.name)
    StateRelationExtractor(graph, ctx).visit(root)
    return FileOutcome(file_path=file_path, component=declaration.name)


class StateRelationExtractor(SyntaxVisitor):
    """Emit state nodes and edges for one file into a shared graph."""

    def __init__(self, graph: DependencyGraph, ctx: ExtractionContext) -> None:
        self.graph = graph
        self.ctx = ctx

    # ── Dispatch ──────────────────────────────────────────────────────

    def visit_call_expression(self, node: Node) -> None:
        name = callee_name(node)
        if name == "useState":
            self._handle_use_state(node)
        elif name == "useEffect":
            self._handle_use_effect(node)
        elif name in MEMO_HOOKS:
            self._handle_memoized_hook(node)
        elif name in RECOIL_HOOKS:
            self._handle_recoil_hook(node, name)
        elif name and name.startswith("use") and len(name) > 3:
            self._handle_custom_hook(node)

    def visit_member_expression(self, node: Node) -> None:
        obj = node.child_by_field_name("object")
        prop = node.child_by_field_name("property")
        if (obj is not None and obj.type == "this"
                and prop is not None and node_text(prop) == "setState"):
            self._handle_set_state(node)

    def visit_jsx_opening_element(self, node: Node) -> None:
        self._handle_jsx_props(node)

    def visit_jsx_self_closing_element(self, node: Node) -> None:
        self._handle_jsx_props(node)

    # ── Hooks ─────────────────────────────────────────────────────────

    def _handle_use_state(self, call: Node) -> None:
        target = declarator_target(call)
        if target is None or target.type != "array_pattern":
            return
        slots = pattern_slots(target)
        bound = [s for s in slots if s is not None]
        if (len(bound) != 2 or len(slots) < 2
                or slots[0] is None or slots[0].type != "identifier"
                or slots[1] is None or slots[1].type != "identifier"):
            return

        comp = self.ctx.component
        state_name, setter_name = node_text(slots[0]), node_text(slots[1])
        key = state_key(comp, state_name)
        log.debug("useState: %s with setter %s in %s", state_name, setter_name, comp)

        self.graph.add_state(state_name, comp, StateKind.USE_STATE,
                             self.ctx.file_path, line_of(call))
        self.graph.add_edge(comp, key, EdgeKind.READS)

        # Setter calls anywhere in the function that declared the state
        scope = enclosing_function(call) or _root_of(call)
        for node in walk(scope):
            if node.type != "call_expression" or callee_name(node) != setter_name:
                continue
            self.graph.add_edge(comp, key, EdgeKind.UPDATES)
            args = call_arguments(node)
            if args and args[0].type in FUNCTION_EXPRESSION_TYPES:
                # updater callback: setCount(c => c + 1)
                self.graph.add_edge(key, key, EdgeKind.SELF_UPDATE)

    def _handle_use_effect(self, call: Node) -> None:
        args = call_arguments(call)
        callback = args[0] if args else None
        deps = args[1] if len(args) > 1 else None
        comp = self.ctx.component

        if deps is not None and deps.type == "array":
            for dep in named_children(deps):
                if dep.type == "identifier":
                    self.graph.add_edge(state_key(comp, node_text(dep)), comp,
                                        EdgeKind.TRIGGERS_EFFECT)

        if callback is None or callback.type not in FUNCTION_EXPRESSION_TYPES:
            return
        for node in walk(callback):
            if node.type != "call_expression":
                continue
            name = callee_name(node)
            if not name or not name.startswith("set") or len(name) <= 3:
                continue
            state_name = infer_state_name(name)
            key = state_key(comp, state_name)
            # Edge first: a state first seen here keeps no updates-via-effect edge
            self.graph.add_edge(comp, key, EdgeKind.UPDATES_VIA_EFFECT)
            if not self.graph.has_component_state(comp, state_name):
                log.debug("Adding inferred state %s for %s", state_name, comp)
                self.graph.add_state(state_name, comp, StateKind.INFERRED,
                                     self.ctx.file_path, line_of(node))

    def _handle_memoized_hook(self, call: Node) -> None:
        args = call_arguments(call)
        if len(args) < 2 or args[1].type != "array":
            return
        comp = self.ctx.component
        for dep in named_children(args[1]):
            if dep.type != "identifier":
                continue
            name = node_text(dep)
            if self.graph.has_component_state(comp, name):
                self.graph.add_edge(state_key(comp, name), comp, EdgeKind.DEPENDS)

    def _handle_set_state(self, member: Node) -> None:
        comp = self.ctx.component
        self.graph.add_state("state", comp, StateKind.SET_STATE,
                             self.ctx.file_path, line_of(member))
        self.graph.add_edge(comp, state_key(comp, "state"), EdgeKind.UPDATES)

    def _handle_recoil_hook(self, call: Node, hook_name: str) -> None:
        args = call_arguments(call)
        if not args:
            return
        atom = atom_name(args[0])
        key = state_key(GLOBAL_SCOPE, atom)
        comp = self.ctx.component
        log.debug("Recoil atom %s accessed via %s in %s", atom, hook_name, comp)

        self.graph.add_state(atom, GLOBAL_SCOPE, StateKind(hook_name),
                             self.ctx.file_path, line_of(call))
        if hook_name in ("useRecoilValue", "useRecoilState"):
            self.graph.add_edge(key, comp, EdgeKind.RECOIL_READS)
        if hook_name in ("useSetRecoilState", "useRecoilState"):
            self.graph.add_edge(comp, key, EdgeKind.RECOIL_WRITES)

    def _handle_custom_hook(self, call: Node) -> None:
        target = declarator_target(call)
        if target is None:
            return
        comp = self.ctx.component
        for state_name in custom_hook_state_names(target):
            log.debug("Custom hook %s returns state %s in %s",
                      callee_name(call), state_name, comp)
            self.graph.add_state(state_name, comp, StateKind.CUSTOM_HOOK,
                                 self.ctx.file_path, line_of(call))
            self.graph.add_edge(state_key(comp, state_name), comp, EdgeKind.READS)

    # ── JSX ───────────────────────────────────────────────────────────

    def _handle_jsx_props(self, element: Node) -> None:
        """Props passed to a child component: data flows down, callbacks up."""
        name = element.child_by_field_name("name")
        if name is None or name.type != "identifier":
            return
        tag = node_text(name)
        if not is_child_component_tag(tag):
            return
        comp = self.ctx.component
        for attr in named_children(element):
            if attr.type != "jsx_attribute":
                continue
            parts = named_children(attr)
            if not parts:
                continue
            value = parts[1] if len(parts) > 1 else None
            if is_callback_prop(node_text(parts[0]), value):
                self.graph.add_edge(tag, comp, EdgeKind.CALLS_CALLBACK)
            else:
                self.graph.add_edge(comp, tag, EdgeKind.PASSES_PROPS)


# ── Heuristics ───────────────────────────────────────────────────────────


def infer_state_name(setter: str) -> str:
    """``setUserData`` → ``userData``."""
    rest = setter[3:]
    return rest[:1].lower() + rest[1:]


def atom_name(arg: Node) -> str:
    """Atom identity from the first argument of a Recoil hook."""
    if arg.type == "identifier":
        return node_text(arg)
    if arg.type == "member_expression":
        prop = arg.child_by_field_name("property")
        return "member." + (node_text(prop) if prop is not None else "unknown")
    if arg.type == "subscript_expression":
        # atoms[key] names the key; atoms["x"] and other computed keys do not
        index = arg.child_by_field_name("index")
        if index is not None and index.type == "identifier":
            return "member." + node_text(index)
        return "member.unknown"
    return "unknown"


def custom_hook_state_names(target: Node) -> list[str]:
    """Names bound from a custom hook's return value that look like state."""
    if target.type == "identifier":
        return [node_text(target)]
    if target.type == "array_pattern":
        names = [node_text(s) for s in pattern_slots(target)
                 if s is not None and s.type == "identifier"]
        return [n for n in names if not n.startswith("set")]
    if target.type == "object_pattern":
        return [
            k for k in object_pattern_keys(target)
            if not k.startswith(("set", "on"))
            and "Handler" not in k and "Callback" not in k
        ]
    return []


def is_child_component_tag(tag: str) -> bool:
    return tag[:1].isupper() and tag not in UI_PRIMITIVES and tag not in HTML_TAGS


def is_callback_prop(name: str, value: Node | None) -> bool:
    if (name.startswith("on") or "callback" in name
            or "handler" in name or "Handle" in name):
        return True
    if value is not None and value.type == "jsx_expression":
        inner = named_children(value)
        return bool(inner) and inner[0].type in _CALLBACK_VALUE_TYPES
    return False


def _root_of(node: Node) -> Node:
    while node.parent is not None:
        node = node.parent
    return node
