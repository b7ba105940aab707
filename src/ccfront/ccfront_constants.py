"""
Token tables shared by the ccfront lexer and parser.

The tables are ordered: the lexer builds one alternation per table and the
first alternative that matches at the cursor wins, so entries that share a
prefix must list the one that should win first (`ifstream` before `if`,
`+=` before `+`).

Exports:
    - Token kind names (KEYWORD, IDENTIFIER, ...) and TOKEN_KINDS
    - KEYWORDS, OPERATORS, PUNCTUATION_CHARS
    - TYPE_KEYWORDS, HANDLE_KEYWORDS, OPENING_BRACKETS
"""

KEYWORD = "KEYWORD"
IDENTIFIER = "IDENTIFIER"
LITERAL = "LITERAL"
OPERATOR = "OPERATOR"
PUNCTUATION = "PUNCTUATION"
UNKNOWN = "UNKNOWN"

TOKEN_KINDS: tuple[str, ...] = (
    KEYWORD,
    IDENTIFIER,
    LITERAL,
    OPERATOR,
    PUNCTUATION,
    UNKNOWN,
)

KEYWORDS: tuple[str, ...] = (
    "std",
    "ifstream",
    "ofstream",
    "fstream",
    "string",
    "while",
    "if",
    "else",
    "return",
    "int",
    "for",
)

OPERATORS: tuple[str, ...] = (
    "::",  # scope resolution
    ".",  # member access
    "<<",
    ">>",
    "&&",
    "++",
    "--",
    "<=",
    ">=",
    "==",
    "!=",
    "+=",
    "-=",
    "*=",
    "/=",
    "+",
    "-",
    "*",
    "/",
    "<",
    ">",
    "!",
    "=",
)

PUNCTUATION_CHARS = ";(){}<>[],"

# Statement-leading keyword groups used by the parser dispatch
TYPE_KEYWORDS: tuple[str, ...] = ("int", "string")
HANDLE_KEYWORDS: tuple[str, ...] = ("ifstream", "ofstream", "fstream")

OPENING_BRACKETS: dict[str, str] = {"(": ")", "{": "}"}

__all__ = [
    "HANDLE_KEYWORDS",
    "IDENTIFIER",
    "KEYWORD",
    "KEYWORDS",
    "LITERAL",
    "OPENING_BRACKETS",
    "OPERATOR",
    "OPERATORS",
    "PUNCTUATION",
    "PUNCTUATION_CHARS",
    "TOKEN_KINDS",
    "TYPE_KEYWORDS",
    "UNKNOWN",
]
