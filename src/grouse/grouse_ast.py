"""
Defines the parse tree node structure for the GROUSE programming language.

Classes:
    ParseNode:
        Represents one instance of a grammar production, as built by the parser.
        Carries the token that anchored its creation and an ordered list of children.

    ParseNodeDict:
        TypedDict representation for serializing ParseNode instances to plain Python
        dictionaries, suitable for JSON output or debugging.

Each ParseNode tracks:
    kind (str): The production variant (one of `NODE_KINDS`, e.g. "declaration").
    token (Token): The anchoring token, used for location reporting and, for
        terminals and operators, the literal or operator text.
    children (list[ParseNode]): Child nodes in left-to-right grammar order.

Node kinds form a closed set. Later stages walk the tree by dispatching on
`kind` (see `grouse.grouse_tree`), so the parser never depends on what they do.

Example:
    node = ParseNode.with_children("binary_operator", plus_token, left, right)
"""

from collections.abc import Iterator
from typing import Any, TypedDict

from grouse.grouse_constants import TRUE
from grouse.grouse_lexer import Token

PROGRAM = "program"
MAIN_BLOCK = "main_block"
DECLARATION = "declaration"
PRINT_STATEMENT = "print_statement"
BINARY_OPERATOR = "binary_operator"
IDENTIFIER = "identifier"
INTEGER_CONSTANT = "integer_constant"
BOOLEAN_CONSTANT = "boolean_constant"
SEPARATOR = "separator"
NEWLINE = "newline"
ERROR = "error"

NODE_KINDS: frozenset[str] = frozenset(
    {
        PROGRAM,
        MAIN_BLOCK,
        DECLARATION,
        PRINT_STATEMENT,
        BINARY_OPERATOR,
        IDENTIFIER,
        INTEGER_CONSTANT,
        BOOLEAN_CONSTANT,
        SEPARATOR,
        NEWLINE,
        ERROR,
    }
)


class ParseNodeDict(TypedDict):
    """
    TypedDict representation of a ParseNode used for serialization.

    Fields:
        kind (str): The node kind (e.g., "program", "binary_operator").
        token_type (str): The anchoring token's type (lextant or category).
        value (str): The anchoring token's source text.
        line (int): Line number of the anchoring token.
        col (int): Column number of the anchoring token.
        children (list[ParseNodeDict]): Child nodes in grammar order.
    """

    kind: str
    token_type: str
    value: str
    line: int
    col: int
    children: list["ParseNodeDict"]


class ParseNode:
    """
    Represents a node in the GROUSE parse tree.

    A node is created from the token that anchors it, or from another node, in which
    case it takes over that node's token (used for nodes that only mark a position).

    Args:
        kind (str): One of `NODE_KINDS`.
        anchor (Token | ParseNode): The anchoring token, or a node whose token to reuse.
        children (list[ParseNode], optional): Initial children in grammar order.

    Raises:
        ValueError: If `kind` is not a known node kind.
    """

    def __init__(
        self,
        kind: str,
        anchor: "Token | ParseNode",
        children: list["ParseNode"] | None = None,
    ):
        if kind not in NODE_KINDS:
            raise ValueError(f"Unknown parse node kind: {kind!r}")
        self.kind = kind
        self.token: Token = anchor.token if isinstance(anchor, ParseNode) else anchor
        self.children: list["ParseNode"] = list(children or [])

    @classmethod
    def with_children(
        cls, kind: str, token: Token, *children: "ParseNode"
    ) -> "ParseNode":
        """Builds a node of `kind` anchored at `token` with the given children, in order."""
        return cls(kind, token, list(children))

    def append_child(self, child: "ParseNode") -> None:
        self.children.append(child)

    def child(self, index: int) -> "ParseNode":
        return self.children[index]

    @property
    def value(self) -> str:
        """Source text of the anchoring token."""
        return self.token.value

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def col(self) -> int:
        return self.token.col

    @property
    def location(self) -> str:
        return self.token.location

    @property
    def int_value(self) -> int:
        """Integer value of an `integer_constant` node."""
        if self.kind != INTEGER_CONSTANT:
            raise TypeError(f"{self.kind} node has no integer value")
        return int(self.token.value)

    @property
    def bool_value(self) -> bool:
        """Truth value of a `boolean_constant` node."""
        if self.kind != BOOLEAN_CONSTANT:
            raise TypeError(f"{self.kind} node has no boolean value")
        return self.token.is_lextant(TRUE)

    def accept(self, visitor: Any) -> Any:
        """Dispatches to `visitor.visit_<kind>(self)` and returns its result."""
        return visitor.visit(self)

    def walk(self) -> Iterator[tuple[int, "ParseNode"]]:
        """Yields `(depth, node)` pairs in pre-order, the root at depth 0.

        Iterative: a chain of n operators nests n levels deep, past the recursion limit
        for long sums.
        """
        stack: list[tuple[int, ParseNode]] = [(0, self)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            stack.extend((depth + 1, c) for c in reversed(node.children))

    def is_error(self) -> bool:
        return self.kind == ERROR

    def _short_repr(self) -> str:
        return f"ParseNode({self.kind}, value={self.token.value!r})"

    def __repr__(self) -> str:
        if not self.children:
            return self._short_repr()
        preview = ", ".join(c._short_repr() for c in self.children[:3])
        if len(self.children) > 3:
            preview += ", ..."
        return f"ParseNode({self.kind}, value={self.token.value!r}, children=[{preview}])"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ParseNode):
            return False
        pairs: list[tuple[ParseNode, ParseNode]] = [(self, other)]
        while pairs:
            mine, theirs = pairs.pop()
            if (
                mine.kind != theirs.kind
                or mine.token != theirs.token
                or len(mine.children) != len(theirs.children)
            ):
                return False
            pairs.extend(zip(mine.children, theirs.children))
        return True

    def _shallow_dict(self) -> ParseNodeDict:
        return {
            "kind": self.kind,
            "token_type": self.token.type,
            "value": self.token.value,
            "line": self.token.line,
            "col": self.token.col,
            "children": [],
        }

    def to_dict(self) -> ParseNodeDict:
        root = self._shallow_dict()
        pending: list[tuple[ParseNode, ParseNodeDict]] = [(self, root)]
        while pending:
            node, out = pending.pop()
            for child in node.children:
                child_dict = child._shallow_dict()
                out["children"].append(child_dict)
                pending.append((child, child_dict))
        return root
