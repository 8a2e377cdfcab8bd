"""
Walks GROUSE parse trees without the parser knowing what the walk is for.

Classes and Features:
    - TreeVisitor: Base class that dispatches each node to `visit_<kind>`. A node kind
      with no handler raises `NotImplementedError`, so a visitor that forgets a kind
      fails loudly instead of silently skipping part of the tree.
    - ParseTreePrinter: Renders a tree as indented text, one node per line.
    - ErrorNodeFinder: Collects every `error` node in a tree.

Usage:
    >>> text = ParseTreePrinter().render(tree)
    >>> if find_errors(tree): ...

Raises:
    NotImplementedError: If a visitor lacks a `visit_*` method for a node kind.
"""

from typing import Any

from grouse.grouse_ast import ParseNode


class TreeVisitor:
    """Dispatches parse nodes to per-kind handler methods.

    Subclasses define `visit_<kind>(node)` for the kinds they handle, e.g.
    `visit_declaration`. `walk(tree)` calls the handler for every node in pre-order,
    with `depth` set to the node's nesting level, so handlers never descend themselves.

    Attributes:
        depth (int): Nesting level of the node being visited during `walk`.
    """

    depth = 0

    def visit(self, node: ParseNode) -> Any:
        """Invokes the handler for `node.kind` and returns its result.

        Raises:
            NotImplementedError: If the visitor does not handle the node kind.
        """
        method_name = f"visit_{node.kind}"
        if hasattr(self, method_name):
            return getattr(self, method_name)(node)
        raise NotImplementedError(
            f"{type(self).__name__} has no handler for parse node kind: {node.kind}"
        )

    def walk(self, tree: ParseNode) -> None:
        for depth, node in tree.walk():
            self.depth = depth
            self.visit(node)


class ParseTreePrinter(TreeVisitor):
    """Renders a parse tree as indented text.

    Non-terminals print their kind and location; terminals also print their source
    text. Each level of nesting is indented by four spaces.

    Attributes:
        lines (list[str]): Accumulated output lines.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def indent_str(self) -> str:
        return "    " * self.depth

    def render(self, tree: ParseNode) -> str:
        self.lines = []
        self.walk(tree)
        return "\n".join(self.lines)

    def _line(self, node: ParseNode, detail: str = "") -> None:
        label = f"{node.kind} {detail}" if detail else node.kind
        self.lines.append(f"{self.indent_str()}{label} {node.location}")

    def visit_program(self, node: ParseNode) -> None:
        self._line(node)

    visit_main_block = visit_program
    visit_declaration = visit_program
    visit_print_statement = visit_program

    def visit_binary_operator(self, node: ParseNode) -> None:
        self._line(node, repr(node.value))

    def visit_identifier(self, node: ParseNode) -> None:
        self._line(node, node.value)

    def visit_integer_constant(self, node: ParseNode) -> None:
        self._line(node, str(node.int_value))

    def visit_boolean_constant(self, node: ParseNode) -> None:
        self._line(node, "true" if node.bool_value else "false")

    def visit_separator(self, node: ParseNode) -> None:
        self._line(node, repr(node.value))

    visit_newline = visit_separator

    def visit_error(self, node: ParseNode) -> None:
        self._line(node, f"at {node.value!r}")


class ErrorNodeFinder(TreeVisitor):
    """Collects `error` nodes in pre-order."""

    def __init__(self) -> None:
        self.errors: list[ParseNode] = []

    def visit_error(self, node: ParseNode) -> None:
        self.errors.append(node)

    def _skip(self, node: ParseNode) -> None:
        pass

    visit_program = _skip
    visit_main_block = _skip
    visit_declaration = _skip
    visit_print_statement = _skip
    visit_binary_operator = _skip
    visit_identifier = _skip
    visit_integer_constant = _skip
    visit_boolean_constant = _skip
    visit_separator = _skip
    visit_newline = _skip


def find_errors(tree: ParseNode) -> list[ParseNode]:
    """Returns every `error` node in `tree`, in pre-order."""
    finder = ErrorNodeFinder()
    finder.walk(tree)
    return finder.errors


__all__ = ["ErrorNodeFinder", "ParseTreePrinter", "TreeVisitor", "find_errors"]
