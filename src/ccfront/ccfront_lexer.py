"""
Lexical analyzer for the ccfront source language.

This module converts raw source text into a list of classified tokens:

Classes:
    CharacterStream: Cursor over the source text with line tracking.
    Token: A single token with kind, literal text, and source line.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Functions:
    tokenize(source): Convenience wrapper returning every token of `source`.

Features:
    - Priority-first matching: an ordered list of rules is tried at the cursor
      and the first rule that matches wins, even when a later rule would
      consume more characters (`integer` lexes as `int` + `eger`).
    - Skips spaces and tabs, counts newlines.
    - Never raises: any character no rule accepts becomes an UNKNOWN token.

Example:
    >>> tokenize("int a;")
    [Token(KEYWORD, 'int', 1), Token(IDENTIFIER, 'a', 1), Token(PUNCTUATION, ';', 1)]

Exports:
    - CharacterStream
    - Token
    - Lexer
    - LEXICAL_RULES
    - tokenize
"""

import re
from typing import Any

from ccfront.ccfront_constants import (
    IDENTIFIER,
    KEYWORD,
    KEYWORDS,
    LITERAL,
    OPERATOR,
    OPERATORS,
    PUNCTUATION,
    PUNCTUATION_CHARS,
    UNKNOWN,
)

WHITESPACE = "WHITESPACE"
NEWLINE = "NEWLINE"


def _alternation(words: tuple[str, ...]) -> str:
    return "|".join(re.escape(w) for w in words)


# Order matters: see module docstring.
LEXICAL_RULES: list[tuple[str, re.Pattern[str]]] = [
    (KEYWORD, re.compile(_alternation(KEYWORDS))),
    (IDENTIFIER, re.compile(r"[A-Za-z_][A-Za-z0-9_]*")),
    (LITERAL, re.compile(r'".*?"')),
    (OPERATOR, re.compile(_alternation(OPERATORS))),
    (PUNCTUATION, re.compile(f"[{re.escape(PUNCTUATION_CHARS)}]")),
    (WHITESPACE, re.compile(r"[ \t]+")),
    (NEWLINE, re.compile(r"\n")),
    (UNKNOWN, re.compile(r".", re.DOTALL)),
]


class CharacterStream:
    """
    Cursor over a source string that tracks the current line.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1):
        self.source = source
        self.position = position
        self.line = line

    def match(self, pattern: re.Pattern[str]) -> str | None:
        """
        Consumes the text `pattern` matches at the cursor, if any.

        Args:
            pattern (re.Pattern[str]): Compiled pattern anchored at the cursor.

        Returns:
            str | None: The consumed text, or None if the pattern does not
            match here (or matches the empty string).
        """
        m = pattern.match(self.source, self.position)
        if m is None or m.end() == self.position:
            return None
        text = m.group()
        self.line += text.count("\n")
        self.position = m.end()
        return text

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token.

    Attributes:
        kind (str): One of the kinds in `ccfront_constants.TOKEN_KINDS`.
        text (str): The literal source text of the token.
        line (int): The 1-based line on which the token starts.
    """

    def __init__(self, kind: str, text: str, line: int = 1):
        self.kind = kind
        self.text = text
        self.line = line

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r}, {self.line})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.text == other.text
            and self.line == other.line
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.text, self.line))


class Lexer:
    """Lexical analyzer driven by `LEXICAL_RULES`.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def next_token(self) -> Token | None:
        """Consumes and returns the next token, or None at end of input.

        Whitespace and newlines are consumed silently; the returned token
        carries the line counter as it stood when the token was matched.
        """
        while not self.stream.end_of_file():
            line = self.stream.line
            for kind, pattern in LEXICAL_RULES:
                text = self.stream.match(pattern)
                if text is None:
                    continue
                if kind in (WHITESPACE, NEWLINE):
                    break
                return Token(kind, text, line)
        return None

    def tokenize(self) -> list[Token]:
        tokens = []
        while True:
            tok = self.next_token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens


def tokenize(source: str) -> list[Token]:
    """Tokenizes `source` from the first line."""
    return Lexer(CharacterStream(source)).tokenize()


__all__ = ["CharacterStream", "LEXICAL_RULES", "Lexer", "Token", "tokenize"]
