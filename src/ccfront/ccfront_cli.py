"""
ccfront CLI Entrypoint.

Runs the ccfront front end over a source file, an inline string, or the
built-in sample program, and reports the result.

Features:
    - Read source from `.cc` / `.cpp` files, inline strings, or `--sample`.
    - Print the token listing (`-t`).
    - Print the parsed tree as an outline (`--tree`) or JSON (`--json`).
    - Report the first syntax error on stderr and exit with status 1.

Example usage:
    ccfront program.cpp
    ccfront -s "int a, b;" --tree
    ccfront --sample -t

Functions:
    run_ccfront(source: str, is_string: bool = False, show_tokens: bool = False,
                tree: bool = False, as_json: bool = False, quiet: bool = False) -> int:
        Lex and parse `source`, print what was asked for, return the exit status.

    main() -> None:
        Parses CLI arguments and exits with the status of `run_ccfront`.
"""

import argparse
import json
import sys

from ccfront.ccfront_ast import format_tree
from ccfront.ccfront_errors import CCSyntaxError
from ccfront.ccfront_lexer import Token, tokenize
from ccfront.ccfront_parser import Parser

SOURCE_SUFFIXES = (".cc", ".cpp")

SAMPLE_PROGRAM = """
     int a;
     int b,c;
     ifstream inputFile("input.txt");
     fstream outputFile;
     for ( int i = 0; i < 10; ++i )
    {
        cout << "For Loop Iteration: " << i << endl;
        outputFile << "For Loop Iteration: " << i << endl;
    }


    int i = 0;
    while (i < 5) {
        cout << "While Loop Iteration: " << i << endl;
        outputFile << "While Loop Iteration: " << i << endl;
        ++i;
    }

    if (d > 10) {
        cout << "d is greater than 10" << endl;
        outputFile << "d is greater than 10" << endl;
    } else {
        cout << "d is 10 or less" << endl;
        outputFile << "d is 10 or less" << endl;
    }

    string line;
    while (getline(inputFile, line)) {
        cout << line << endl;
        outputFile << line << endl;
    }

    inputFile.close(;
    outputFile.close();
    """


def format_token(tok: Token) -> str:
    return f"Token: {tok.text} Type: {tok.kind} Line: {tok.line}"


def run_ccfront(
    source: str,
    is_string: bool = False,
    show_tokens: bool = False,
    tree: bool = False,
    as_json: bool = False,
    quiet: bool = False,
) -> int:
    """
    Run the front end: lex, parse, and print the requested output.

    Args:
        source (str): Source text or path to a `.cc` / `.cpp` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        show_tokens (bool): Print every token before parsing.
        tree (bool): Print the parsed tree as an indented outline.
        as_json (bool): Print the parsed tree as JSON.
        quiet (bool): Suppress the success message.

    Returns:
        int: 0 on success, 1 if a syntax error was reported.

    Raises:
        ValueError: If `is_string` is False and the path has an unsupported suffix.
    """
    if not is_string and not source.endswith(SOURCE_SUFFIXES):
        raise ValueError(f"Only {', '.join(SOURCE_SUFFIXES)} files are supported.")
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    tokens = tokenize(source)
    if show_tokens:
        print("Lexer's Output:")
        for tok in tokens:
            print(format_token(tok))

    try:
        program = Parser(tokens).parse()
    except CCSyntaxError as err:
        print(f"[error] >>> {err}", file=sys.stderr)
        return 1

    if tree:
        print(format_tree(program))
    if as_json:
        print(json.dumps(program.to_dict(), indent=2))
    if not quiet:
        print("Parsing completed successfully.")
    return 0


def main() -> None:
    """
    Entry point for the ccfront CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--sample`: Run the built-in sample program.
        - `-t`, `--tokens`: Print the token listing.
        - `--tree`: Print the parsed tree as an outline.
        - `--json`: Print the parsed tree as JSON.
        - `-q`, `--quiet`: Suppress the success message.
    """
    parser = argparse.ArgumentParser(prog="ccfront")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--sample", action="store_true", help="Run the built-in sample program"
    )
    parser.add_argument(
        "-t", "--tokens", action="store_true", help="Print the token listing"
    )
    parser.add_argument("--tree", action="store_true", help="Print the parse tree")
    parser.add_argument(
        "--json", dest="as_json", action="store_true", help="Print the tree as JSON"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Do not print the success message"
    )

    args = parser.parse_args()

    if args.sample:
        source, is_string = SAMPLE_PROGRAM, True
    elif args.source is None:
        parser.error("a source file, -s SOURCE, or --sample is required")
    else:
        source, is_string = args.source, args.string

    try:
        status = run_ccfront(
            source=source,
            is_string=is_string,
            show_tokens=args.tokens,
            tree=args.tree,
            as_json=args.as_json,
            quiet=args.quiet,
        )
    except (OSError, ValueError) as err:
        print(f"[error] >>> {err}", file=sys.stderr)
        status = 2
    sys.exit(status)


if __name__ == "__main__":
    main()
