import sys

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ccfront.ccfront_ast import (
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
from ccfront.ccfront_cli import SAMPLE_PROGRAM
from ccfront.ccfront_constants import IDENTIFIER, PUNCTUATION
from ccfront.ccfront_errors import (
    CCSyntaxError,
    ExpectedTokenError,
    MismatchedBracketError,
    NestingTooDeepError,
    UnexpectedTokenError,
)
from ccfront.ccfront_lexer import Token, tokenize
from ccfront.ccfront_parser import Parser, parse


def parse_source(source: str) -> Program:
    return parse(tokenize(source))


def single(source: str) -> object:
    program = parse_source(source)
    assert len(program.body) == 1
    return program.body[0]


# Statements


def test_empty_program() -> None:
    assert parse([]) == Program(())


def test_variable_declaration() -> None:
    assert single("int a, b;") == Declaration(
        "int", (Identifier("a"), Identifier("b"))
    )


def test_string_declaration() -> None:
    assert single("string s;") == Declaration("string", (Identifier("s"),))


def test_declaration_lines() -> None:
    program = parse_source("int a;\n\nint b,\n c;")
    first, second = program.body
    assert first.line == 1
    assert second.line == 3
    assert [i.line for i in second.identifiers] == [3, 4]


def test_handle_declaration() -> None:
    assert single('ifstream in("input.txt");') == HandleDeclaration(
        "ifstream", Identifier("in"), '"input.txt"'
    )


def test_handle_declaration_keywords() -> None:
    for keyword in ("ofstream", "fstream"):
        node = single(f'{keyword} out("o.txt");')
        assert isinstance(node, HandleDeclaration)
        assert node.type_name == keyword


def test_member_call() -> None:
    assert single("foo.bar();") == MemberCall(Identifier("foo"), "bar")


def test_if_statement() -> None:
    assert single("if (x) { f.close(); }") == IfStatement(
        None, (MemberCall(Identifier("f"), "close"),)
    )


def test_while_with_not_condition() -> None:
    assert single("while (!done) { }") == WhileLoop(UnaryOperation("!", None), ())


def test_double_negation() -> None:
    node = single("if (!!x) {}")
    assert node.condition == UnaryOperation("!", UnaryOperation("!", None))


def test_long_negation_chain() -> None:
    depth = sys.getrecursionlimit() * 2
    node = single("if (" + "!" * depth + "x) {}").condition
    for _ in range(depth):
        assert isinstance(node, UnaryOperation)
        assert node.operator == "!"
        node = node.operand
    assert node is None


def test_for_loop() -> None:
    assert single("for (i; i; i) { int n; }") == ForLoop(
        None, None, None, (Declaration("int", (Identifier("n"),)),)
    )


def test_nested_blocks() -> None:
    source = "while (x) {\n  if (y) {\n    f.close();\n  }\n  int z;\n}\n"
    assert single(source) == WhileLoop(
        None,
        (
            IfStatement(None, (MemberCall(Identifier("f"), "close"),)),
            Declaration("int", (Identifier("z"),)),
        ),
    )


def test_statement_lines_in_body() -> None:
    node = single("while (x) {\n\n  f.close();\n}")
    assert node.line == 1
    assert node.body[0].line == 3


def test_program_with_several_statements() -> None:
    program = parse_source(
        'int a;\nifstream in("a.txt");\nwhile (!eof) {\n  in.close();\n}\n'
    )
    assert [type(stmt) for stmt in program.body] == [
        Declaration,
        HandleDeclaration,
        WhileLoop,
    ]


# Errors


def test_missing_semicolon() -> None:
    with pytest.raises(ExpectedTokenError) as exc:
        parse_source("int a\n")
    assert exc.value.line == 1
    assert str(exc.value) == "Expected ';' at the end of variable declaration at line 1."


def test_error_cites_line_of_offending_token() -> None:
    with pytest.raises(ExpectedTokenError) as exc:
        parse_source("int a\n\nint b;")
    assert exc.value.line == 3


def test_missing_identifier_after_comma() -> None:
    with pytest.raises(ExpectedTokenError, match="Expected identifier in variable declaration"):
        parse_source("int a,;")


def test_unclosed_while_block() -> None:
    with pytest.raises(MismatchedBracketError) as exc:
        parse_source("while (x) {\n")
    assert exc.value.line == 1
    assert exc.value.bracket == "{"
    assert str(exc.value) == "Mismatched brackets detected at line 1."


def test_unclosed_if_block_reports_its_line() -> None:
    with pytest.raises(MismatchedBracketError) as exc:
        parse_source("int a;\n\nif (x) {\n  f.close();\n")
    assert exc.value.line == 3


def test_innermost_unclosed_block_is_reported() -> None:
    with pytest.raises(MismatchedBracketError) as exc:
        parse_source("while (x) {\n  if (y) {\n    f.close();\n")
    assert exc.value.line == 2


def test_closed_inner_block_reports_outer() -> None:
    with pytest.raises(MismatchedBracketError) as exc:
        parse_source("while (x) {\n  if (y) {\n  }\n")
    assert exc.value.line == 1


def test_unknown_token() -> None:
    tokens = tokenize("@")
    with pytest.raises(UnexpectedTokenError) as exc:
        parse(tokens)
    assert exc.value.text == "@"
    assert str(exc.value) == "Unexpected token: @ at line 1."


def test_else_is_unexpected() -> None:
    with pytest.raises(UnexpectedTokenError, match="Unexpected token: else"):
        parse_source("if (x) {} else {}")


def test_stray_closing_brace_is_unexpected() -> None:
    with pytest.raises(UnexpectedTokenError, match="Unexpected token: }"):
        parse_source("int a;\n}")


def test_member_call_requires_dot() -> None:
    with pytest.raises(ExpectedTokenError, match="Expected '.' after file identifier"):
        parse_source("foo bar;")


def test_member_call_rejects_arguments() -> None:
    with pytest.raises(ExpectedTokenError, match=r"Expected '\)' in file operation"):
        parse_source("inputFile.close(;")


def test_handle_declaration_requires_parenthesis() -> None:
    with pytest.raises(ExpectedTokenError) as exc:
        parse_source("fstream outputFile;")
    assert str(exc.value) == (
        "Expected '(' after file declaration identifier at line 1."
    )


def test_handle_declaration_requires_literal() -> None:
    with pytest.raises(ExpectedTokenError, match="Expected filename literal"):
        parse_source("ifstream in(name);")


def test_condition_is_a_single_token() -> None:
    with pytest.raises(ExpectedTokenError) as exc:
        parse_source("if (d > 10) {}")
    assert exc.value.description == "Expected ')' after condition in 'if' statement"


def test_while_requires_parenthesis() -> None:
    with pytest.raises(ExpectedTokenError, match="Expected '\\(' after 'while'"):
        parse_source("while x {}")


def test_for_header_requires_semicolons() -> None:
    with pytest.raises(
        ExpectedTokenError, match="Expected ';' after initialization in 'for' statement"
    ):
        parse_source("for (i i; i) {}")


def test_for_requires_body() -> None:
    with pytest.raises(ExpectedTokenError, match="Expected '{' after 'for' header"):
        parse_source("for (i; i; i) int a;")


def test_unclosed_condition_at_end_of_input() -> None:
    with pytest.raises(ExpectedTokenError) as exc:
        parse_source("int a;\nif (x")
    assert exc.value.line == 2


def test_sample_program_stops_at_first_error() -> None:
    with pytest.raises(ExpectedTokenError) as exc:
        parse_source(SAMPLE_PROGRAM)
    assert exc.value.line == 5


def test_deeply_nested_blocks_raise_syntax_error() -> None:
    depth = sys.getrecursionlimit()
    source = "while (x) {\n" * depth + "}\n" * depth
    with pytest.raises(NestingTooDeepError) as exc:
        parse_source(source)
    assert isinstance(exc.value, CCSyntaxError)
    assert 1 <= exc.value.line <= depth
    assert str(exc.value).startswith("Statements nested too deeply at line ")


def test_parse_works_after_nesting_error() -> None:
    depth = sys.getrecursionlimit()
    with pytest.raises(NestingTooDeepError):
        parse_source("if (x) {" * depth)
    assert single("while (x) { if (y) {} }") == WhileLoop(
        None, (IfStatement(None, ()),)
    )


def test_errors_are_syntax_errors() -> None:
    with pytest.raises(SyntaxError):
        parse_source("@")
    with pytest.raises(CCSyntaxError):
        parse_source("while (x) {")


# Parser state


def test_tracker_is_empty_after_success() -> None:
    parser = Parser(tokenize("while (x) { if (y) { f.close(); } }"))
    parser.parse()
    assert parser.brackets.is_empty()
    assert parser.is_at_end()


def test_parsers_do_not_share_trackers() -> None:
    first = Parser(tokenize("while (x) {"))
    with pytest.raises(MismatchedBracketError):
        first.parse()
    assert len(first.brackets) == 1
    second = Parser(tokenize("int a;"))
    assert second.brackets.is_empty()
    second.parse()


def test_parser_does_not_modify_tokens() -> None:
    tokens = tokenize("int a; f.close();")
    snapshot = list(tokens)
    parse(tokens)
    assert tokens == snapshot


def test_hand_built_tokens() -> None:
    tokens = [
        Token(IDENTIFIER, "x", 4),
        Token("OPERATOR", ".", 4),
        Token(IDENTIFIER, "go", 4),
        Token(PUNCTUATION, "(", 4),
        Token(PUNCTUATION, ")", 5),
        Token(PUNCTUATION, ";", 5),
    ]
    node = parse(tokens).body[0]
    assert node == MemberCall(Identifier("x"), "go")
    assert node.line == 4


@given(st.integers(min_value=1, max_value=20))  # type: ignore[misc]
def test_balanced_nesting_parses(depth: int) -> None:
    parser = Parser(tokenize("while (x) {\n" * depth + "}\n" * depth))
    program = parser.parse()
    assert parser.brackets.is_empty()
    node = program.body[0]
    for _ in range(depth - 1):
        node = node.body[0]
    assert node == WhileLoop(None, ())


@given(st.integers(min_value=1, max_value=20), st.integers(min_value=0, max_value=20))  # type: ignore[misc]
def test_unbalanced_nesting_reports_innermost(depth: int, closed: int) -> None:
    closed = min(closed, depth - 1)
    source = "if (x) {\n" * depth + "}\n" * closed
    with pytest.raises(MismatchedBracketError) as exc:
        parse_source(source)
    assert exc.value.line == depth - closed


def test_grammar_methods_document_their_errors() -> None:
    for method in (
        Parser.expect,
        Parser.parse_variable_declaration,
        Parser.parse_handle_declaration,
        Parser.parse_member_call,
        Parser.parse_if,
        Parser.parse_while,
        Parser.parse_for,
    ):
        assert method.__doc__ and "Error" in method.__doc__, method.__name__
