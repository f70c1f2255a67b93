"""Decide which declaration in a file is the React component.

Function and arrow forms qualify when their body contains a JSX element;
class forms qualify when they extend ``Component``/``PureComponent`` (bare or
via ``React.``). One component is registered per file: the search runs three
passes (function declarations, variable declarators, class declarations) and
the last qualifying declaration found wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tree_sitter import Node

from react_cycles.ir.syntax import (
    CLASS_DECLARATION_TYPES,
    FUNCTION_DECLARATION_TYPES,
    FUNCTION_EXPRESSION_TYPES,
    callee_name,
    is_jsx_element,
    line_of,
    named_children,
    node_text,
    walk,
)

_COMPONENT_BASES = {"Component", "PureComponent"}


@dataclass
class ComponentDeclaration:
    name: str
    line_number: int
    form: str  # "function" | "arrow" | "class"


def find_component(root: Node) -> ComponentDeclaration | None:
    """Return the single component declared in the tree rooted at *root*."""
    found: ComponentDeclaration | None = None

    for node in walk(root):
        if node.type in FUNCTION_DECLARATION_TYPES and is_function_component(node):
            name = node.child_by_field_name("name")
            if name is not None:
                found = ComponentDeclaration(node_text(name), line_of(node), "function")

    for node in walk(root):
        if node.type != "variable_declarator":
            continue
        value = node.child_by_field_name("value")
        name = node.child_by_field_name("name")
        if (value is not None and value.type in FUNCTION_EXPRESSION_TYPES
                and name is not None and name.type == "identifier"
                and is_function_component(value)):
            found = ComponentDeclaration(node_text(name), line_of(node), "arrow")

    for node in walk(root):
        if node.type in CLASS_DECLARATION_TYPES and is_class_component(node):
            name = node.child_by_field_name("name")
            if name is not None:
                found = ComponentDeclaration(node_text(name), line_of(node), "class")

    return found


def is_function_component(func: Node) -> bool:
    """True when a JSX element appears anywhere in the function body.

    Hook calls alone make a custom hook, not a component.
    """
    body = func.child_by_field_name("body")
    if body is None:
        return False
    return any(is_jsx_element(n) for n in walk(body))


def is_class_component(cls: Node) -> bool:
    superclass = superclass_of(cls)
    if superclass is None:
        return False
    if superclass.type == "identifier":
        return node_text(superclass) in _COMPONENT_BASES
    if superclass.type == "member_expression":
        obj = superclass.child_by_field_name("object")
        prop = superclass.child_by_field_name("property")
        return (obj is not None and obj.type == "identifier" and node_text(obj) == "React"
                and prop is not None and node_text(prop) in _COMPONENT_BASES)
    return False


def superclass_of(cls: Node) -> Node | None:
    """The ``extends`` expression of a class declaration, if any."""
    for child in named_children(cls):
        if child.type != "class_heritage":
            continue
        for clause in named_children(child):
            if clause.type == "extends_clause":
                return clause.child_by_field_name("value")
    return None


# ── Diagnostics ──────────────────────────────────────────────────────────


@dataclass
class FileSummary:
    """What a file contains, logged when no component is recognized."""
    has_jsx: bool = False
    hook_calls: list[str] = field(default_factory=list)
    function_names: list[str] = field(default_factory=list)
    class_names: list[str] = field(default_factory=list)

    def describe(self) -> str:
        hooks = ", ".join(self.hook_calls) or "none"
        functions = ", ".join(self.function_names[:3]) or "none"
        classes = ", ".join(self.class_names[:3]) or "none"
        return f"JSX={self.has_jsx} hooks=({hooks}) functions=({functions}) classes=({classes})"


def summarize_file(root: Node) -> FileSummary:
    summary = FileSummary()
    for node in walk(root):
        if is_jsx_element(node):
            summary.has_jsx = True
        elif node.type == "call_expression":
            name = callee_name(node)
            if name and name.startswith("use") and len(name) > 3:
                summary.hook_calls.append(name)
        elif node.type in FUNCTION_DECLARATION_TYPES:
            name = node.child_by_field_name("name")
            if name is not None:
                summary.function_names.append(node_text(name))
        elif node.type == "variable_declarator":
            value = node.child_by_field_name("value")
            name = node.child_by_field_name("name")
            if value is not None and value.type in FUNCTION_EXPRESSION_TYPES and name is not None:
                summary.function_names.append(node_text(name))
        elif node.type in CLASS_DECLARATION_TYPES:
            name = node.child_by_field_name("name")
            if name is not None:
                summary.class_names.append(node_text(name))
    return summary
