"""
ccfront Parser

Recursive-descent parser turning the token list produced by
`ccfront_lexer.tokenize` into a `Program` tree.

Supported Constructs
--------------------
- Declarations: `int a, b;`, `string s;`
- Stream handles: `ifstream in("input.txt");`
- Member calls: `in.close();`
- Control flow: `if (...) { ... }`, `while (...) { ... }`,
  `for (...; ...; ...) { ... }`

Parser Behavior
---------------
- Single forward cursor, no backtracking.
- Fail-fast: the first mismatch raises and ends the parse; there is no
  resynchronization and never a partial tree.
- Every `(` and `{` consumed is recorded in a `BracketTracker` together with
  its line, so running out of input inside a block reports the innermost
  unclosed bracket.
- Expressions are a deliberate stub: a `!` prefix builds a `UnaryOperation`,
  any other operand is consumed as a single token without building a node.

Entry Points
------------
- `Parser(tokens).parse()`: Parse a full program.
- `parse(tokens)`: Module-level shorthand.

Raises
------
ExpectedTokenError, UnexpectedTokenError, MismatchedBracketError, NestingTooDeepError
    All subclasses of `CCSyntaxError` (a `SyntaxError`).
"""

from __future__ import annotations

from ccfront.ccfront_ast import (
    ASTNode,
    Declaration,
    ForLoop,
    HandleDeclaration,
    Identifier,
    IfStatement,
    MemberCall,
    Program,
    UnaryOperation,
    WhileLoop,
)
from ccfront.ccfront_brackets import BracketTracker
from ccfront.ccfront_constants import (
    HANDLE_KEYWORDS,
    IDENTIFIER,
    KEYWORD,
    LITERAL,
    OPERATOR,
    PUNCTUATION,
    TYPE_KEYWORDS,
)
from ccfront.ccfront_errors import (
    ExpectedTokenError,
    MismatchedBracketError,
    NestingTooDeepError,
    UnexpectedTokenError,
)
from ccfront.ccfront_lexer import Token


class Parser:
    """
    ccfront Parser Class

    A parser instance is good for one `parse()` call: it owns the cursor and
    the bracket tracker for that call only.

    Attributes
    ----------
    tokens : list[Token]
        The input token list; read, never modified.
    position : int
        Index of the next unconsumed token.
    brackets : BracketTracker
        Open brackets consumed so far, with their lines.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.brackets: BracketTracker = BracketTracker()

    # Cursor helpers

    def is_at_end(self) -> bool:
        return self.position >= len(self.tokens)

    def current(self) -> Token | None:
        return None if self.is_at_end() else self.tokens[self.position]

    def previous(self) -> Token:
        return self.tokens[self.position - 1]

    def advance(self) -> Token | None:
        """Consumes the current token; a no-op at end of input."""
        if self.is_at_end():
            return None
        self.position += 1
        return self.previous()

    def current_line(self) -> int:
        """Line to report errors on: the current token's, else the last one's."""
        if not self.is_at_end():
            return self.tokens[self.position].line
        return self.tokens[-1].line if self.tokens else 1

    def check(self, kind: str, *texts: str) -> bool:
        tok = self.current()
        if tok is None or tok.kind != kind:
            return False
        return not texts or tok.text in texts

    def match(self, kind: str, *texts: str) -> Token | None:
        """Consumes and returns the current token if it has `kind` (and one of `texts`)."""
        if self.check(kind, *texts):
            return self.advance()
        return None

    def expect(self, kind: str, text: str | None, description: str) -> Token:
        """
        Consumes the current token, which must have `kind` (and `text`, if given).

        Args:
            kind (str): Required token kind.
            text (str | None): Required token text, or None for any text.
            description (str): Error description used when the token is absent.

        Returns:
            Token: The consumed token.

        Raises:
            ExpectedTokenError: If the current token does not match, or input ended.
        """
        tok = self.match(kind, text) if text is not None else self.match(kind)
        if tok is None:
            raise ExpectedTokenError(description, self.current_line())
        return tok

    # Bracket helpers

    def open_bracket(self, bracket: str, description: str) -> Token:
        tok = self.expect(PUNCTUATION, bracket, description)
        self.brackets.push(bracket, tok.line)
        return tok

    def close_bracket(self, bracket: str, description: str) -> Token:
        tok = self.expect(PUNCTUATION, bracket, description)
        self.brackets.pop(bracket)
        return tok

    # Grammar

    def parse(self) -> Program:
        """Parse the whole token list into a Program.

        Raises:
            CCSyntaxError: The first syntax error found. Blocks nested past
                the interpreter's recursion limit raise NestingTooDeepError.
        """
        body: list[ASTNode] = []
        try:
            while not self.is_at_end():
                body.append(self.parse_statement())
        except RecursionError:
            raise NestingTooDeepError(self.current_line()) from None
        self.brackets.check_balanced()
        return Program(tuple(body), line=self.tokens[0].line if self.tokens else 1)

    def parse_statement(self) -> ASTNode:
        """Dispatch on the statement-leading token."""
        if self.match(KEYWORD, *TYPE_KEYWORDS):
            return self.parse_variable_declaration()
        if self.match(KEYWORD, *HANDLE_KEYWORDS):
            return self.parse_handle_declaration()
        if self.match(IDENTIFIER):
            return self.parse_member_call()
        if self.match(KEYWORD, "if"):
            return self.parse_if()
        if self.match(KEYWORD, "while"):
            return self.parse_while()
        if self.match(KEYWORD, "for"):
            return self.parse_for()
        tok = self.current()
        raise UnexpectedTokenError(
            tok.text if tok is not None else "end of input", self.current_line()
        )

    def parse_variable_declaration(self) -> Declaration:
        """`TYPE_KEYWORD Identifier (',' Identifier)* ';'`, after the keyword.

        Raises ExpectedTokenError for a missing identifier or `;`.
        """
        type_tok = self.previous()
        identifiers: list[Identifier] = []
        while True:
            ident = self.expect(
                IDENTIFIER, None, "Expected identifier in variable declaration"
            )
            identifiers.append(Identifier(ident.text, line=ident.line))
            if not self.match(PUNCTUATION, ","):
                break
        self.expect(PUNCTUATION, ";", "Expected ';' at the end of variable declaration")
        return Declaration(type_tok.text, tuple(identifiers), line=type_tok.line)

    def parse_handle_declaration(self) -> HandleDeclaration:
        """`HANDLE_KEYWORD Identifier '(' Literal ')' ';'`, after the keyword.

        Raises ExpectedTokenError for each missing piece.
        """
        type_tok = self.previous()
        ident = self.expect(
            IDENTIFIER, None, "Expected identifier after file declaration keyword"
        )
        self.open_bracket("(", "Expected '(' after file declaration identifier")
        path = self.expect(
            LITERAL, None, "Expected filename literal in file declaration"
        )
        self.close_bracket(
            ")", "Expected ')' after filename literal in file declaration"
        )
        self.expect(PUNCTUATION, ";", "Expected ';' at the end of file declaration")
        return HandleDeclaration(
            type_tok.text,
            Identifier(ident.text, line=ident.line),
            path.text,
            line=type_tok.line,
        )

    def parse_member_call(self) -> MemberCall:
        """`Identifier '.' Identifier '(' ')' ';'`, after the identifier.

        Raises ExpectedTokenError; the call takes no arguments.
        """
        target = self.previous()
        if not self.match(OPERATOR, "."):
            raise ExpectedTokenError(
                "Expected '.' after file identifier", self.current_line()
            )
        method = self.expect(
            IDENTIFIER, None, "Expected method name after '.' in file operation"
        )
        self.open_bracket("(", "Expected '(' after method name in file operation")
        self.close_bracket(")", "Expected ')' in file operation")
        self.expect(PUNCTUATION, ";", "Expected ';' at the end of file operation")
        return MemberCall(
            Identifier(target.text, line=target.line), method.text, line=target.line
        )

    def parse_condition(self, keyword: str) -> ASTNode | None:
        """`'(' Expression ')'` following `if` / `while`."""
        self.open_bracket("(", f"Expected '(' after '{keyword}'")
        condition = self.parse_expression()
        self.close_bracket(
            ")", f"Expected ')' after condition in '{keyword}' statement"
        )
        return condition

    def parse_block(self, description: str) -> tuple[ASTNode, ...]:
        """`'{' Statement* '}'`; running out of input here is a bracket mismatch."""
        self.open_bracket("{", description)
        stmts: list[ASTNode] = []
        while not self.check(PUNCTUATION, "}"):
            if self.is_at_end():
                bracket, line = self.brackets.top()  # type: ignore[misc]
                raise MismatchedBracketError(bracket, line)
            stmts.append(self.parse_statement())
        self.close_bracket("}", "Expected '}'")
        return tuple(stmts)

    def parse_if(self) -> IfStatement:
        """`'if' '(' Expression ')' Block`. An unclosed body raises MismatchedBracketError."""
        if_tok = self.previous()
        condition = self.parse_condition("if")
        body = self.parse_block("Expected '{' after 'if' condition")
        return IfStatement(condition, body, line=if_tok.line)

    def parse_while(self) -> WhileLoop:
        """`'while' '(' Expression ')' Block`. An unclosed body raises MismatchedBracketError."""
        while_tok = self.previous()
        condition = self.parse_condition("while")
        body = self.parse_block("Expected '{' after 'while' condition")
        return WhileLoop(condition, body, line=while_tok.line)

    def parse_for(self) -> ForLoop:
        """
        `'for' '(' Expression ';' Expression ';' Expression ')' Block`.

        Raises ExpectedTokenError for a missing `(`, `;`, `)` or `{`, and
        MismatchedBracketError if the body is never closed.
        """
        for_tok = self.previous()
        self.open_bracket("(", "Expected '(' after 'for'")
        init = self.parse_expression()
        self.expect(
            PUNCTUATION, ";", "Expected ';' after initialization in 'for' statement"
        )
        condition = self.parse_expression()
        self.expect(PUNCTUATION, ";", "Expected ';' after condition in 'for' statement")
        increment = self.parse_expression()
        self.close_bracket(")", "Expected ')' after increment in 'for' statement")
        body = self.parse_block("Expected '{' after 'for' header")
        return ForLoop(init, condition, increment, body, line=for_tok.line)

    def parse_expression(self) -> ASTNode | None:
        """`'!' Expression`, or any single token (which yields no node).

        A run of `!` is read iteratively; the last `!` read is innermost.

        TODO: a real expression grammar (binary operators, precedence) would
        replace the single-token fallback and produce BinaryOperation nodes.
        """
        negations: list[Token] = []
        while self.match(OPERATOR, "!"):
            negations.append(self.previous())
        self.advance()
        node: ASTNode | None = None
        for op_tok in reversed(negations):
            node = UnaryOperation(op_tok.text, node, line=op_tok.line)
        return node


def parse(tokens: list[Token]) -> Program:
    return Parser(tokens).parse()


__all__ = ["Parser", "parse"]
