"""
Lexical analyzer for the GROUSE programming language.

This module provides the scanner that feeds the GROUSE parser:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with type, value, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips whitespace and single-line comments (`#`)
    - Supports longest-match recognition of punctuation (`:=` before `:`)
    - Recognizes:
        * Identifiers and keywords (`main`, `immutable`, `print`, `_n_`, `_true_`, `_false_`)
        * Integer literals
        * Punctuation: `{ } := ; , + * >`
    - Never raises on bad input: unknown characters become `ERROR` tokens,
      which the parser reports as unexpected.
    - Inexhaustible: once the source is consumed, every call returns an `EOF` token.

Example:
    >>> lexer = Lexer(CharacterStream("main { }"))
    >>> lexer.next()
    Token(MAIN, main)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - token_hashmap
"""

from collections.abc import Iterator
from typing import Any

from grouse.grouse_constants import (
    EOF,
    ERROR,
    IDENT,
    NUMBER,
    punctuator_tokens,
    token_hashmap,
)

MAX_PUNCTUATOR_LENGTH = max(
    len(spelling)
    for spelling, lextant in token_hashmap.items()
    if lextant in punctuator_tokens
)


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    This stream is used by the GROUSE lexer to support character-by-character scanning
    with precise source location metadata for error reporting.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            Exception: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise Exception(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the GROUSE language.

    Attributes:
        type (str): The canonical token type: a lextant (e.g. 'MAIN', 'ASSIGN')
            or one of 'IDENT', 'NUMBER', 'ERROR', 'EOF'.
        value (str): The raw source text of the token ('EOF' for the end marker).
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: str, value: str, line: int = 0, col: int = 0):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    def is_lextant(self, *lextants: str) -> bool:
        """Returns True if this token's type is one of the given lextants."""
        return self.type in lextants

    @property
    def location(self) -> str:
        """Source location in the form used by diagnostics, e.g. `(line 2, col 7)`."""
        return f"(line {self.line}, col {self.col})"

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


class Lexer:
    """Lexical analyzer for the GROUSE language.

    The Lexer takes a CharacterStream and converts it into a stream of Token objects.
    It is the scanner consumed by the parser: `next()` may be called any number of
    times and keeps returning `EOF` once the input is exhausted.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    @classmethod
    def from_source(cls, source: str) -> "Lexer":
        """Builds a lexer over a raw source string."""
        return cls(CharacterStream(source, 0, 1, 1))

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips all whitespace and comments in the stream."""
        while not self.stream.end_of_file():
            if self.peek() in " \t\r\n":
                self.advance()
            elif self.peek() == "#":
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        """Advances through the stream until the end of a comment line."""
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def match_operator(self) -> Token | None:
        """Attempts to match the longest punctuator from the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        match_len = 0
        candidate = ""

        for i in range(MAX_PUNCTUATOR_LENGTH):
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate
                match_len = i + 1

        if max_token:
            for _ in range(match_len):
                self.advance()
            return Token(token_hashmap[max_token], max_token, line, col)

        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token, or an `EOF` token once the source is exhausted.
        """
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token(EOF, "EOF", self.stream.line, self.stream.column)

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Identifier or keyword
        if ch.isascii() and (ch.isalpha() or ch == "_"):
            ident = ""
            while not self.stream.end_of_file() and (
                self.peek().isascii() and (self.peek().isalnum() or self.peek() == "_")
            ):
                ident += self.advance()
            if ident in token_hashmap:
                return Token(token_hashmap[ident], ident, line, col)
            return Token(IDENT, ident, line, col)

        # 2. Integer literal
        if ch.isascii() and ch.isdigit():
            num = ""
            while not self.stream.end_of_file() and (
                self.peek().isascii() and self.peek().isdigit()
            ):
                num += self.advance()
            return Token(NUMBER, num, line, col)

        # 3. Punctuation
        token = self.match_operator()
        if token:
            return token

        # 4. Unknown character -> error token, left for the parser to report
        return Token(ERROR, self.advance(), line, col)

    def next(self) -> Token:
        """Scanner interface used by the parser; same as `next_token()`."""
        return self.next_token()

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens up to and including the first `EOF`."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == EOF:
                return


__all__ = ["CharacterStream", "Lexer", "Token", "token_hashmap"]
