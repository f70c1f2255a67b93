"""tree-sitter front end: parse JS/TS/JSX sources and walk the resulting tree.

All four supported extensions are parsed with the TSX grammar, which accepts
JSX, TypeScript annotations and decorators. Node kinds are tree-sitter's
``node.type`` strings; ``SyntaxVisitor`` dispatches on them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from functools import lru_cache

import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree

from react_cycles.errors import SourceParseError

log = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")

# Declarations and expressions that open a new function scope.
FUNCTION_DECLARATION_TYPES = {"function_declaration", "generator_function_declaration"}
FUNCTION_EXPRESSION_TYPES = {
    "arrow_function",
    "function_expression",
    "function",             # older tree-sitter-javascript name for function_expression
    "generator_function",
}
FUNCTION_SCOPE_TYPES = FUNCTION_DECLARATION_TYPES | FUNCTION_EXPRESSION_TYPES | {"method_definition"}

CLASS_DECLARATION_TYPES = {"class_declaration", "abstract_class_declaration"}

JSX_ELEMENT_TYPES = {"jsx_element", "jsx_self_closing_element"}


@lru_cache(maxsize=1)
def _tsx_language() -> Language:
    return Language(tstypescript.language_tsx())


def parse_source(source: bytes, filename: str = "<source>") -> Tree:
    """Parse *source* with the TSX grammar.

    tree-sitter recovers from syntax errors; a tree containing error nodes is
    reported as a ``SourceParseError`` so that broken files are skipped rather
    than half-analyzed.
    """
    parser = Parser(_tsx_language())
    tree = parser.parse(source)
    if tree.root_node.has_error:
        line = _first_error_line(tree.root_node)
        raise SourceParseError(f"{filename}: syntax error near line {line}")
    return tree


def _first_error_line(root: Node) -> int:
    for node in walk(root, named_only=False):
        if node.type == "ERROR" or node.is_missing:
            return line_of(node)
    return line_of(root)


# ── Node helpers ─────────────────────────────────────────────────────────


def node_text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace")


def line_of(node: Node) -> int:
    """1-based start line."""
    return node.start_point[0] + 1


def named_children(node: Node) -> list[Node]:
    """Named children without comments."""
    return [c for c in node.named_children if c.type != "comment"]


def walk(node: Node, named_only: bool = True) -> Iterator[Node]:
    """Pre-order, document-order traversal including *node* itself."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        children = named_children(current) if named_only else current.children
        stack.extend(reversed(children))


def enclosing_function(node: Node) -> Node | None:
    """Nearest ancestor that opens a function scope."""
    parent = node.parent
    while parent is not None:
        if parent.type in FUNCTION_SCOPE_TYPES:
            return parent
        parent = parent.parent
    return None


def is_jsx_element(node: Node) -> bool:
    """JSX element with a tag; ``<>...</>`` fragments do not count."""
    if node.type == "jsx_self_closing_element":
        return True
    if node.type == "jsx_element":
        opening = node.child_by_field_name("open_tag")
        return opening is not None and opening.child_by_field_name("name") is not None
    return False


def callee_name(call: Node) -> str | None:
    """Name of a call's callee when it is a plain identifier."""
    func = call.child_by_field_name("function")
    if func is not None and func.type == "identifier":
        return node_text(func)
    return None


def call_arguments(call: Node) -> list[Node]:
    """Positional arguments of a call (empty for tagged templates)."""
    args = call.child_by_field_name("arguments")
    if args is None or args.type != "arguments":
        return []
    return named_children(args)


def declarator_target(call: Node) -> Node | None:
    """Binding target when *call* is the initializer of a variable declarator.

    ``const [a, setA] = useState(0)`` → the ``array_pattern`` node.
    """
    parent = call.parent
    if parent is None or parent.type != "variable_declarator":
        return None
    value = parent.child_by_field_name("value")
    if value is None or value != call:
        return None
    return parent.child_by_field_name("name")


def pattern_slots(array_pattern: Node) -> list[Node | None]:
    """Positional elements of an array pattern, with ``None`` for holes.

    ``[, setX]`` → ``[None, <setX>]``.
    """
    slots: list[Node | None] = []
    current: Node | None = None
    for child in array_pattern.children:
        if child.type == "[":
            continue
        if child.type in (",", "]"):
            slots.append(current)
            current = None
            continue
        if child.is_named and child.type != "comment":
            current = child
    if slots and slots[-1] is None:
        # trailing comma or empty pattern
        slots.pop()
    return slots


def object_pattern_keys(object_pattern: Node) -> list[str]:
    """Property names bound by an object pattern (``{a, b: c, d = 1}`` → a, b, d)."""
    keys: list[str] = []
    for prop in named_children(object_pattern):
        if prop.type == "shorthand_property_identifier_pattern":
            keys.append(node_text(prop))
        elif prop.type == "pair_pattern":
            key = prop.child_by_field_name("key")
            if key is not None and key.type == "property_identifier":
                keys.append(node_text(key))
        elif prop.type == "object_assignment_pattern":
            left = prop.child_by_field_name("left")
            if left is not None and left.type == "shorthand_property_identifier_pattern":
                keys.append(node_text(left))
    return keys


# ── Visitor ──────────────────────────────────────────────────────────────


class SyntaxVisitor:
    """Dispatch on tree-sitter node kinds, in the manner of ``ast.NodeVisitor``.

    ``visit`` walks the whole tree in document order (see ``walk``) and calls
    ``visit_<node.type>`` for every node that has a handler. Handlers do not
    control descent; every node is reached. The walk is iterative, so deeply
    nested expressions do not hit the interpreter recursion limit.
    """

    def visit(self, root: Node) -> None:
        for node in walk(root):
            method = getattr(self, f"visit_{node.type}", None)
            if method is not None:
                method(node)
