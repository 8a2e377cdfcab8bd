import pytest
from hypothesis import given
from hypothesis import strategies as st

from grouse.grouse_lexer import CharacterStream, Lexer, Token, token_hashmap


def tokenize(source: str) -> list[Token]:
    stream = CharacterStream(source, 0, 1, 1)
    lexer = Lexer(stream)
    tokens = []
    while True:
        tok = lexer.next_token()
        if tok.type == "EOF":
            break
        tokens.append(tok)
    return tokens


def test_punctuation_tokens() -> None:
    code = "{ } := ; , + * >"
    expected = [
        "OPEN_BRACE",
        "CLOSE_BRACE",
        "ASSIGN",
        "TERMINATOR",
        "SEPARATOR",
        "ADD",
        "MULTIPLY",
        "GREATER",
    ]
    assert [tok.type for tok in tokenize(code)] == expected


def test_keyword_tokens() -> None:
    code = "main immutable print _n_ _true_ _false_"
    expected = ["MAIN", "IMMUTABLE", "PRINT", "NEWLINE", "TRUE", "FALSE"]
    assert [tok.type for tok in tokenize(code)] == expected


def test_keywords_are_case_sensitive() -> None:
    tok = Lexer(CharacterStream("MAIN")).next_token()
    assert tok.type == "IDENT"
    assert tok.value == "MAIN"


def test_identifier_token() -> None:
    tok = Lexer(CharacterStream("my_var2")).next_token()
    assert tok.type == "IDENT"
    assert tok.value == "my_var2"


def test_identifier_with_keyword_prefix() -> None:
    tok = Lexer(CharacterStream("mainly")).next_token()
    assert tok.type == "IDENT"
    assert tok.value == "mainly"


def test_number_token() -> None:
    tok = Lexer(CharacterStream("123")).next_token()
    assert tok.type == "NUMBER"
    assert tok.value == "123"


def test_number_then_identifier() -> None:
    toks = tokenize("12ab")
    assert [(t.type, t.value) for t in toks] == [("NUMBER", "12"), ("IDENT", "ab")]


def test_assign_is_longest_match() -> None:
    toks = tokenize("x:=1")
    assert [t.type for t in toks] == ["IDENT", "ASSIGN", "NUMBER"]
    assert toks[1].value == ":="


def test_lone_colon_is_error_token() -> None:
    toks = tokenize(": =")
    assert [(t.type, t.value) for t in toks] == [("ERROR", ":"), ("ERROR", "=")]


def test_line_and_column_tracking() -> None:
    toks = tokenize("main {\n  print 1 ;\n}")
    assert (toks[0].line, toks[0].col) == (1, 1)
    assert (toks[1].line, toks[1].col) == (1, 6)
    assert (toks[2].line, toks[2].col) == (2, 3)
    assert (toks[3].line, toks[3].col) == (2, 9)
    assert (toks[5].line, toks[5].col) == (3, 1)


def test_location_format() -> None:
    tok = Token("IDENT", "x", 3, 7)
    assert tok.location == "(line 3, col 7)"


def test_skip_whitespace_and_comments() -> None:
    toks = tokenize("   \n  # a comment\n123 # trailing")
    assert len(toks) == 1
    assert toks[0].type == "NUMBER"
    assert toks[0].line == 3


def test_unrecognized_character_returns_error() -> None:
    tok = Lexer(CharacterStream("~")).next_token()
    assert tok.type == "ERROR"
    assert tok.value == "~"


def test_non_ascii_letter_is_error_token() -> None:
    tok = Lexer(CharacterStream("é")).next_token()
    assert tok.type == "ERROR"


def test_empty_input_returns_eof() -> None:
    tok = Lexer(CharacterStream("")).next_token()
    assert tok.type == "EOF"
    assert tok.value == "EOF"


def test_eof_is_returned_forever() -> None:
    lexer = Lexer.from_source("x")
    assert lexer.next().type == "IDENT"
    for _ in range(5):
        assert lexer.next().type == "EOF"


def test_iteration_stops_after_eof() -> None:
    toks = list(Lexer.from_source("main { }"))
    assert [t.type for t in toks] == ["MAIN", "OPEN_BRACE", "CLOSE_BRACE", "EOF"]
    assert (toks[-1].line, toks[-1].col) == (1, 9)


def test_is_lextant() -> None:
    tok = Token("ASSIGN", ":=", 1, 1)
    assert tok.is_lextant("ASSIGN")
    assert tok.is_lextant("TERMINATOR", "ASSIGN")
    assert not tok.is_lextant("TERMINATOR")
    assert not tok.is_lextant()


def test_token_repr_and_eq() -> None:
    t1 = Token("NUMBER", "42", 1, 2)
    t2 = Token("NUMBER", "42", 1, 2)
    t3 = Token("IDENT", "x")

    assert repr(t1) == "Token(NUMBER, 42)"
    assert t1 == t2
    assert t1 != t3
    assert len({t1, t2, t3}) == 2


def test_character_stream_methods() -> None:
    stream = CharacterStream("ab")
    assert stream.peek() == "a"
    assert stream.peek(1) == "b"
    assert stream.next() == "a"
    assert not stream.end_of_file()
    stream.next()
    assert stream.end_of_file()
    assert stream.peek() == ""


def test_character_stream_next_past_eof_raises() -> None:
    stream = CharacterStream("")
    with pytest.raises(Exception, match="CharacterStreamError"):
        stream.next()


def test_token_hashmap_spellings_round_trip() -> None:
    for spelling, lextant in token_hashmap.items():
        toks = tokenize(spelling)
        assert len(toks) == 1
        assert toks[0].type == lextant
        assert toks[0].value == spelling


@given(st.text())  # type: ignore[misc]
def test_lexer_never_raises_and_terminates(text: str) -> None:
    toks = list(Lexer.from_source(text))
    assert toks[-1].type == "EOF"
    assert len(toks) <= len(text) + 1


def test_operator_lookahead_matches_longest_punctuator() -> None:
    from grouse.grouse_lexer import MAX_PUNCTUATOR_LENGTH

    assert MAX_PUNCTUATOR_LENGTH == len(":=") == 2
