"""
Syntax errors raised by the ccfront parser.

All errors derive from `CCSyntaxError`, itself a `SyntaxError`, so callers can
catch either. Every error carries the description of what went wrong and
the source line it was detected on; `str(err)` renders as
`"<description> at line <line>."`.

Parsing is fail-fast: the first error raised ends the parse.
"""


class CCSyntaxError(SyntaxError):
    """Base class for syntax errors detected while parsing.

    Attributes:
        description (str): What the parser expected or found.
        line (int): 1-based source line the error is reported on.
    """

    def __init__(self, description: str, line: int):
        super().__init__(f"{description} at line {line}.")
        self.description = description
        self.line = line


class ExpectedTokenError(CCSyntaxError):
    """A specific token was required at the current position and is absent."""


class UnexpectedTokenError(CCSyntaxError):
    """No statement rule applies to the current token."""

    def __init__(self, text: str, line: int):
        super().__init__(f"Unexpected token: {text}", line)
        self.text = text


class MismatchedBracketError(CCSyntaxError):
    """An opening bracket was never closed."""

    def __init__(self, bracket: str, line: int):
        super().__init__("Mismatched brackets detected", line)
        self.bracket = bracket


class NestingTooDeepError(CCSyntaxError):
    """Blocks are nested deeper than the interpreter's call stack allows."""

    def __init__(self, line: int):
        super().__init__("Statements nested too deeply", line)


__all__ = [
    "CCSyntaxError",
    "ExpectedTokenError",
    "MismatchedBracketError",
    "NestingTooDeepError",
    "UnexpectedTokenError",
]
