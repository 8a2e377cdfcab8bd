"""
GROUSE Language Parser

Parses a stream of GROUSE tokens into a parse tree of `ParseNode` objects.

This module implements a recursive-descent parser with one token of lookahead.
Every grammar production P is a pair of methods:

- `starts_P(token)`: a pure predicate telling whether `token` can begin P. Callers use
  it to choose between alternatives and to guard repetition loops.
- `parse_P()`: consumes the tokens of P and returns its node. It re-checks `starts_P`
  and, if that fails, reports a syntax error and returns an `error` node instead.

Grammar
-------
    program        -> MAIN mainBlock                   (then end of input)
    mainBlock      -> { statement* }
    statement      -> declaration | printStatement
    declaration    -> IMMUTABLE identifier := expression ;
    printStatement -> PRINT printExpressionList ;
    printExpressionList -> printExpression*            (nullable)
    printExpression -> expression? ,? _n_?
    expression     -> expr1
    expr1          -> expr2 [> expr2]?                 (at most one comparison)
    expr2          -> expr3 [+ expr3]*                 (left-assoc)
    expr3          -> expr4 [* expr4]*                 (left-assoc)
    expr4          -> literal
    literal        -> integerConstant | identifier | booleanConstant

Parser Behavior
---------------
- Never raises on malformed input. Each error is reported once to the diagnostic sink,
  prefixed with the offending token's location.
- A mismatched token is always consumed, so every failing step makes progress and
  parsing of a finite token stream always terminates.
- An unparseable construct becomes an `error` node in the position the grammar
  expects, so the tree keeps its shape.

Entry Points
------------
- `Parser(scanner, sink).parse()`: parse a whole program.
- `parse(scanner, sink=None)`: module-level shortcut for the above.
- `parse_source(source, sink=None)`: scan and parse a source string.

Returns
-------
ParseNode
    The `program` root, or an `error` node when the program could not be recognized
    or was followed by trailing input.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Protocol

from grouse.grouse_ast import (
    BINARY_OPERATOR,
    BOOLEAN_CONSTANT,
    DECLARATION,
    ERROR,
    IDENTIFIER,
    INTEGER_CONSTANT,
    MAIN_BLOCK,
    NEWLINE,
    PRINT_STATEMENT,
    PROGRAM,
    SEPARATOR,
    ParseNode,
)
from grouse.grouse_constants import (
    ADD,
    ASSIGN,
    CLOSE_BRACE,
    EOF,
    FALSE,
    GREATER,
    IDENT,
    IMMUTABLE,
    MAIN,
    MULTIPLY,
    NUMBER,
    OPEN_BRACE,
    PRINT,
    TERMINATOR,
    TRUE,
)
from grouse.grouse_constants import NEWLINE as NEWLINE_KEYWORD
from grouse.grouse_constants import SEPARATOR as SEPARATOR_PUNCTUATOR
from grouse.grouse_diagnostics import DiagnosticSink, Diagnostics
from grouse.grouse_lexer import Lexer, Token


class Scanner(Protocol):  # pragma: no cover
    """Anything that hands out tokens one at a time and returns `EOF` forever at the end."""

    def next(self) -> Token: ...  # pragma: no cover


class TokenStream:
    """Scanner over an already-built sequence of tokens.

    Once the sequence is used up, the last `EOF` token in it is returned forever. If the
    sequence has no `EOF`, one is synthesized just past the last token.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        self._end: Token | None = None
        self._last: Token | None = None

    def next(self) -> Token:
        if self._end is not None:
            return self._end
        tok = next(self._tokens, None)
        if tok is None:
            line = self._last.line if self._last else 0
            col = self._last.col + len(self._last.value) if self._last else 0
            self._end = Token(EOF, "EOF", line, col)
            return self._end
        self._last = tok
        if tok.type == EOF:
            self._end = tok
        return tok


class Parser:
    """
    GROUSE Parser Class

    Transforms the tokens handed out by a scanner into a parse tree.

    Attributes
    ----------
    scanner : Scanner
        Source of tokens; `next()` is called once per consumed token.
    sink : DiagnosticSink
        Receives one message per syntax error.
    now_reading : Token
        The lookahead token every grammar decision is made on.
    previously_read : Token
        The token consumed by the last `read_token()`.
    """

    def __init__(self, scanner: Scanner, sink: DiagnosticSink | None = None) -> None:
        self.scanner = scanner
        self.sink: DiagnosticSink = sink if sink is not None else Diagnostics()
        self.now_reading: Token = Token(EOF, "EOF")
        self.previously_read: Token = Token(EOF, "EOF")

    @classmethod
    def parse_tokens(
        cls, scanner: Scanner, sink: DiagnosticSink | None = None
    ) -> ParseNode:
        return cls(scanner, sink).parse()

    def parse(self) -> ParseNode:
        """Parse a full GROUSE program and return the root node."""
        self.read_token()
        return self.parse_program()

    ############################################################
    # program is the start symbol
    # program -> MAIN mainBlock

    def parse_program(self) -> ParseNode:
        if not self.starts_program(self.now_reading):
            return self.syntax_error_node("program")
        program = ParseNode(PROGRAM, self.now_reading)

        self.expect(MAIN)
        main_block = self.parse_main_block()
        program.append_child(main_block)

        if not self.now_reading.is_lextant(EOF):
            return self.syntax_error_node("end of program")

        return program

    def starts_program(self, token: Token) -> bool:
        return token.is_lextant(MAIN)

    ############################################################
    # mainBlock -> { statement* }

    def parse_main_block(self) -> ParseNode:
        if not self.starts_main_block(self.now_reading):
            return self.syntax_error_node("mainBlock")
        main_block = ParseNode(MAIN_BLOCK, self.now_reading)
        self.expect(OPEN_BRACE)

        while self.starts_statement(self.now_reading):
            statement = self.parse_statement()
            main_block.append_child(statement)
        self.expect(CLOSE_BRACE)
        return main_block

    def starts_main_block(self, token: Token) -> bool:
        return token.is_lextant(OPEN_BRACE)

    ############################################################
    # statements

    # statement -> declaration | printStatement
    def parse_statement(self) -> ParseNode:
        if not self.starts_statement(self.now_reading):
            return self.syntax_error_node("statement")
        if self.starts_declaration(self.now_reading):
            return self.parse_declaration()
        # starts_statement is exactly declaration-or-print, so this is a print
        return self.parse_print_statement()

    def starts_statement(self, token: Token) -> bool:
        return self.starts_print_statement(token) or self.starts_declaration(token)

    # printStatement -> PRINT printExpressionList ;
    def parse_print_statement(self) -> ParseNode:
        if not self.starts_print_statement(self.now_reading):
            return self.syntax_error_node("print statement")
        result = ParseNode(PRINT_STATEMENT, self.now_reading)

        self.read_token()
        result = self.parse_print_expression_list(result)

        self.expect(TERMINATOR)
        return result

    def starts_print_statement(self, token: Token) -> bool:
        return token.is_lextant(PRINT)

    # printExpressionList -> printExpression*   (nullable)
    # Appends what it parses to the children of `parent`.
    def parse_print_expression_list(self, parent: ParseNode) -> ParseNode:
        while self.starts_print_expression(self.now_reading):
            self.parse_print_expression(parent)
        return parent

    # printExpression -> expression? ,? _n_?
    # Appends what it parses to the children of `parent`.
    def parse_print_expression(self, parent: ParseNode) -> None:
        if self.starts_expression(self.now_reading):
            child = self.parse_expression()
            parent.append_child(child)
        if self.now_reading.is_lextant(SEPARATOR_PUNCTUATOR):
            self.read_token()
            parent.append_child(ParseNode(SEPARATOR, self.previously_read))
        if self.now_reading.is_lextant(NEWLINE_KEYWORD):
            self.read_token()
            parent.append_child(ParseNode(NEWLINE, self.previously_read))

    def starts_print_expression(self, token: Token) -> bool:
        return self.starts_expression(token) or token.is_lextant(
            SEPARATOR_PUNCTUATOR, NEWLINE_KEYWORD
        )

    # declaration -> IMMUTABLE identifier := expression ;
    def parse_declaration(self) -> ParseNode:
        if not self.starts_declaration(self.now_reading):
            return self.syntax_error_node("declaration")
        declaration_token = self.now_reading
        self.read_token()

        identifier = self.parse_identifier()
        self.expect(ASSIGN)
        initializer = self.parse_expression()
        self.expect(TERMINATOR)

        return ParseNode.with_children(
            DECLARATION, declaration_token, identifier, initializer
        )

    def starts_declaration(self, token: Token) -> bool:
        return token.is_lextant(IMMUTABLE)

    ############################################################
    # expressions
    # expr  -> expr1
    # expr1 -> expr2 [> expr2]?
    # expr2 -> expr3 [+ expr3]*  (left-assoc)
    # expr3 -> expr4 [* expr4]*  (left-assoc)
    # expr4 -> literal
    # literal -> integerConstant | identifier | booleanConstant

    # expr -> expr1
    def parse_expression(self) -> ParseNode:
        if not self.starts_expression(self.now_reading):
            return self.syntax_error_node("expression")
        return self.parse_expression1()

    def starts_expression(self, token: Token) -> bool:
        return self.starts_expression1(token)

    # expr1 -> expr2 [> expr2]?
    def parse_expression1(self) -> ParseNode:
        if not self.starts_expression1(self.now_reading):
            return self.syntax_error_node("expression<1>")

        left = self.parse_expression2()
        if self.now_reading.is_lextant(GREATER):
            compare_token = self.now_reading
            self.read_token()
            right = self.parse_expression2()

            return ParseNode.with_children(BINARY_OPERATOR, compare_token, left, right)
        return left

    def starts_expression1(self, token: Token) -> bool:
        return self.starts_expression2(token)

    # expr2 -> expr3 [+ expr3]*  (left-assoc)
    def parse_expression2(self) -> ParseNode:
        if not self.starts_expression2(self.now_reading):
            return self.syntax_error_node("expression<2>")

        left = self.parse_expression3()
        while self.now_reading.is_lextant(ADD):
            additive_token = self.now_reading
            self.read_token()
            right = self.parse_expression3()

            left = ParseNode.with_children(BINARY_OPERATOR, additive_token, left, right)
        return left

    def starts_expression2(self, token: Token) -> bool:
        return self.starts_expression3(token)

    # expr3 -> expr4 [* expr4]*  (left-assoc)
    def parse_expression3(self) -> ParseNode:
        if not self.starts_expression3(self.now_reading):
            return self.syntax_error_node("expression<3>")

        left = self.parse_expression4()
        while self.now_reading.is_lextant(MULTIPLY):
            multiplicative_token = self.now_reading
            self.read_token()
            right = self.parse_expression4()

            left = ParseNode.with_children(
                BINARY_OPERATOR, multiplicative_token, left, right
            )
        return left

    def starts_expression3(self, token: Token) -> bool:
        return self.starts_expression4(token)

    # expr4 -> literal
    def parse_expression4(self) -> ParseNode:
        if not self.starts_expression4(self.now_reading):
            return self.syntax_error_node("expression<4>")
        return self.parse_literal()

    def starts_expression4(self, token: Token) -> bool:
        return self.starts_literal(token)

    # literal -> integerConstant | identifier | booleanConstant
    def parse_literal(self) -> ParseNode:
        if not self.starts_literal(self.now_reading):
            return self.syntax_error_node("literal")

        if self.starts_integer_constant(self.now_reading):
            return self.parse_integer_constant()
        if self.starts_identifier(self.now_reading):
            return self.parse_identifier()
        # starts_literal is exactly the three alternatives, so this is a boolean
        return self.parse_boolean_constant()

    def starts_literal(self, token: Token) -> bool:
        return (
            self.starts_integer_constant(token)
            or self.starts_identifier(token)
            or self.starts_boolean_constant(token)
        )

    # integerConstant (terminal)
    def parse_integer_constant(self) -> ParseNode:
        if not self.starts_integer_constant(self.now_reading):
            return self.syntax_error_node("integer constant")
        self.read_token()
        return ParseNode(INTEGER_CONSTANT, self.previously_read)

    def starts_integer_constant(self, token: Token) -> bool:
        return token.is_lextant(NUMBER)

    # identifier (terminal)
    def parse_identifier(self) -> ParseNode:
        if not self.starts_identifier(self.now_reading):
            return self.syntax_error_node("identifier")
        self.read_token()
        return ParseNode(IDENTIFIER, self.previously_read)

    def starts_identifier(self, token: Token) -> bool:
        return token.is_lextant(IDENT)

    # booleanConstant (terminal)
    def parse_boolean_constant(self) -> ParseNode:
        if not self.starts_boolean_constant(self.now_reading):
            return self.syntax_error_node("boolean constant")
        self.read_token()
        return ParseNode(BOOLEAN_CONSTANT, self.previously_read)

    def starts_boolean_constant(self, token: Token) -> bool:
        return token.is_lextant(TRUE, FALSE)

    ############################################################
    # token cursor and error recovery

    def read_token(self) -> None:
        self.previously_read = self.now_reading
        self.now_reading = self.scanner.next()

    def expect(self, *lextants: str) -> None:
        """Consume the lookahead, reporting an error first if it is not one of `lextants`.

        The token is consumed either way so that a bad token can never stall the parse.
        """
        if not self.now_reading.is_lextant(*lextants):
            self.syntax_error(self.now_reading, f"expecting [{', '.join(lextants)}]")
        self.read_token()

    def syntax_error_node(self, expected_symbol: str) -> ParseNode:
        """Report that `expected_symbol` cannot start here, skip the token, and stand in for it."""
        self.syntax_error(self.now_reading, f"expecting {expected_symbol}")
        error_node = ParseNode(ERROR, self.now_reading)
        self.read_token()
        return error_node

    def syntax_error(self, token: Token, description: str) -> None:
        self.error(f"{token.location} {description}")

    def error(self, message: str) -> None:
        self.sink.report(f"syntax error: {message}")


def parse(scanner: Scanner, sink: DiagnosticSink | None = None) -> ParseNode:
    """Parse the program handed out by `scanner`; errors go to `sink`."""
    return Parser.parse_tokens(scanner, sink)


def parse_source(source: str, sink: DiagnosticSink | None = None) -> ParseNode:
    """Scan and parse GROUSE source text."""
    return Parser.parse_tokens(Lexer.from_source(source), sink)


__all__ = ["Parser", "Scanner", "TokenStream", "parse", "parse_source"]
