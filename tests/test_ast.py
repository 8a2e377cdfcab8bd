import hypothesis.strategies as st
import pytest
from hypothesis import given

from grouse.grouse_ast import NODE_KINDS, ParseNode
from grouse.grouse_lexer import Token

PLUS = Token("ADD", "+", 1, 3)
ONE = Token("NUMBER", "1", 1, 1)
TWO = Token("NUMBER", "2", 1, 5)


def test_parse_node_repr() -> None:
    node = ParseNode("identifier", Token("IDENT", "x", 1, 1))
    assert repr(node) == "ParseNode(identifier, value='x')"


def test_parse_node_repr_truncates_children() -> None:
    node = ParseNode("print_statement", Token("PRINT", "print", 1, 1))
    for i in range(4):
        node.append_child(ParseNode("integer_constant", Token("NUMBER", str(i), 1, 7 + i)))
    assert repr(node).endswith(", ...])")


def test_unknown_kind_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown parse node kind"):
        ParseNode("while", ONE)


def test_with_children_keeps_order() -> None:
    left = ParseNode("integer_constant", ONE)
    right = ParseNode("integer_constant", TWO)
    node = ParseNode.with_children("binary_operator", PLUS, left, right)
    assert node.value == "+"
    assert node.child(0) is left
    assert node.child(1) is right


def test_append_child() -> None:
    block = ParseNode("main_block", Token("OPEN_BRACE", "{", 1, 6))
    assert block.children == []
    stmt = ParseNode("print_statement", Token("PRINT", "print", 1, 8))
    block.append_child(stmt)
    assert block.children == [stmt]


def test_node_from_node_shares_token() -> None:
    anchor = ParseNode("integer_constant", ONE)
    marker = ParseNode("separator", anchor)
    assert marker.token is ONE
    assert marker.location == "(line 1, col 1)"
    assert marker.children == []


def test_integer_and_boolean_values() -> None:
    assert ParseNode("integer_constant", Token("NUMBER", "042", 1, 1)).int_value == 42
    assert ParseNode("boolean_constant", Token("TRUE", "_true_", 1, 1)).bool_value
    assert not ParseNode("boolean_constant", Token("FALSE", "_false_", 1, 1)).bool_value


def test_value_accessors_reject_other_kinds() -> None:
    node = ParseNode("identifier", Token("IDENT", "x", 1, 1))
    with pytest.raises(TypeError):
        node.int_value
    with pytest.raises(TypeError):
        node.bool_value


def test_is_error() -> None:
    assert ParseNode("error", ONE).is_error()
    assert not ParseNode("integer_constant", ONE).is_error()


def test_eq_compares_kind_token_and_children() -> None:
    a = ParseNode.with_children(
        "binary_operator", PLUS, ParseNode("integer_constant", ONE), ParseNode("integer_constant", TWO)
    )
    b = ParseNode.with_children(
        "binary_operator", PLUS, ParseNode("integer_constant", ONE), ParseNode("integer_constant", TWO)
    )
    c = ParseNode.with_children(
        "binary_operator", PLUS, ParseNode("integer_constant", TWO), ParseNode("integer_constant", ONE)
    )
    assert a == b
    assert a != c
    assert a != ParseNode("binary_operator", PLUS)
    assert a != "binary_operator"


def test_to_dict() -> None:
    node = ParseNode.with_children(
        "declaration",
        Token("IMMUTABLE", "immutable", 1, 8),
        ParseNode("identifier", Token("IDENT", "x", 1, 18)),
    )
    d = node.to_dict()
    assert d == {
        "kind": "declaration",
        "token_type": "IMMUTABLE",
        "value": "immutable",
        "line": 1,
        "col": 8,
        "children": [
            {
                "kind": "identifier",
                "token_type": "IDENT",
                "value": "x",
                "line": 1,
                "col": 18,
                "children": [],
            }
        ],
    }


@given(  # type: ignore[misc]
    st.sampled_from(sorted(NODE_KINDS)),
    st.text(min_size=1),
    st.integers(min_value=1),
    st.integers(min_value=1),
)
def test_to_dict_mirrors_anchor_token(kind: str, value: str, line: int, col: int) -> None:
    node = ParseNode(kind, Token("IDENT", value, line, col))
    d = node.to_dict()
    assert d["kind"] == kind
    assert d["value"] == value
    assert (d["line"], d["col"]) == (line, col)
    assert d["children"] == []


def left_chain(terms: int) -> ParseNode:
    """`1 + 1 + ... + 1` built the way the parser builds it."""
    node = ParseNode("integer_constant", ONE)
    for _ in range(terms - 1):
        node = ParseNode.with_children("binary_operator", PLUS, node, ParseNode("integer_constant", TWO))
    return node


def test_walk_is_preorder_with_depths() -> None:
    node = ParseNode.with_children(
        "binary_operator", PLUS, ParseNode("integer_constant", ONE), ParseNode("integer_constant", TWO)
    )
    assert [(depth, n.value) for depth, n in node.walk()] == [(0, "+"), (1, "1"), (1, "2")]


def test_deep_chain_walk_to_dict_and_eq() -> None:
    chain = left_chain(5000)
    assert max(depth for depth, _ in chain.walk()) == 4999
    assert chain == left_chain(5000)
    assert chain != left_chain(4999)

    d = chain.to_dict()
    depth = 0
    while d["children"]:
        assert d["kind"] == "binary_operator"
        assert d["children"][1]["value"] == "2"
        d = d["children"][0]
        depth += 1
    assert depth == 4999
    assert d["kind"] == "integer_constant"


def test_deep_chain_repr_shows_only_children_heads() -> None:
    assert repr(left_chain(5000)) == (
        "ParseNode(binary_operator, value='+', children=["
        "ParseNode(binary_operator, value='+'), ParseNode(integer_constant, value='2')])"
    )


def test_bool_value_follows_token_type() -> None:
    assert ParseNode("boolean_constant", Token("TRUE", "_false_", 1, 1)).bool_value
