"""
Lexical vocabulary for the GROUSE language.

Every reserved word and punctuation symbol is identified by a canonical
lextant string (e.g. ``"MAIN"``, ``"ASSIGN"``). Tokens carry that string as
their ``type``, and the parser matches tokens against lextants by comparing
these strings.

Exports:
    keyword_tokens: Canonical keyword lextants.
    punctuator_tokens: Canonical punctuator lextants.
    token_hashmap: Maps source spellings to their canonical lextant.
    literal_types: Token types that are not lextants (identifiers, numbers, markers).
"""

# Keywords
MAIN = "MAIN"
IMMUTABLE = "IMMUTABLE"
PRINT = "PRINT"
NEWLINE = "NEWLINE"
TRUE = "TRUE"
FALSE = "FALSE"

# Punctuators
OPEN_BRACE = "OPEN_BRACE"
CLOSE_BRACE = "CLOSE_BRACE"
ASSIGN = "ASSIGN"
TERMINATOR = "TERMINATOR"
SEPARATOR = "SEPARATOR"
ADD = "ADD"
MULTIPLY = "MULTIPLY"
GREATER = "GREATER"

# Non-lextant token categories
EOF = "EOF"
IDENT = "IDENT"
NUMBER = "NUMBER"
ERROR = "ERROR"

keyword_tokens: tuple[str, ...] = (MAIN, IMMUTABLE, PRINT, NEWLINE, TRUE, FALSE)

punctuator_tokens: tuple[str, ...] = (
    OPEN_BRACE,
    CLOSE_BRACE,
    ASSIGN,
    TERMINATOR,
    SEPARATOR,
    ADD,
    MULTIPLY,
    GREATER,
)

literal_types: tuple[str, ...] = (EOF, IDENT, NUMBER, ERROR)

token_hashmap: dict[str, str] = {
    # keywords (case-sensitive)
    "main": MAIN,
    "immutable": IMMUTABLE,
    "print": PRINT,
    "_n_": NEWLINE,
    "_true_": TRUE,
    "_false_": FALSE,
    # punctuation
    "{": OPEN_BRACE,
    "}": CLOSE_BRACE,
    ":=": ASSIGN,
    ";": TERMINATOR,
    ",": SEPARATOR,
    "+": ADD,
    "*": MULTIPLY,
    ">": GREATER,
}

__all__ = [
    "keyword_tokens",
    "literal_types",
    "punctuator_tokens",
    "token_hashmap",
]
