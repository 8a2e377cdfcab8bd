"""
GROUSE CLI Entrypoint.

This module provides the command-line interface for checking GROUSE source code.
It scans and parses a program and prints either its parse tree or its syntax errors.

Features:
    - Read source from `.grouse` files or inline strings.
    - Dump the token stream, the parse tree as indented text, or the tree as JSON.
    - Output to console or file.
    - Syntax errors go to stderr and make the process exit with status 1.

Example usage:
    grouse hello.grouse
    grouse -s "main { print 1, 2 _n_ ; }"
    grouse hello.grouse --json -o hello.json
    grouse hello.grouse --tokens

Functions:
    run_grouse(source: str, is_string: bool = False, tokens: bool = False,
               as_json: bool = False, out: Optional[str] = None) -> int:
        Executes the GROUSE front end (scan → parse → render) and returns an exit status.

    main() -> None:
        Parses CLI arguments and invokes `run_grouse`.
"""

import argparse
import json
import sys

from grouse.grouse_diagnostics import Diagnostics
from grouse.grouse_lexer import Lexer
from grouse.grouse_parser import Parser
from grouse.grouse_tree import ParseTreePrinter


def run_grouse(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    as_json: bool = False,
    out: str | None = None,
) -> int:
    """
    Run the GROUSE front end: scan, parse, and print the result or write it to a file.

    Args:
        source (str): The GROUSE source code or path to a `.grouse` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path. Defaults to False.
        tokens (bool): If True, renders the token stream instead of the parse tree. Defaults to False.
        as_json (bool): If True, renders the parse tree as JSON. Defaults to False.
        out (str | None): Optional path to write the rendering to. If None, prints to stdout.

    Returns:
        int: 0 when the program parsed cleanly, 1 when any syntax error was reported
            or the tree could not be rendered as JSON.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.grouse'.
    """
    if not is_string and not source.endswith(".grouse"):
        raise ValueError("Only .grouse files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Token dump short-circuits parsing
    if tokens:
        rendered = "\n".join(
            f"{tok.type:<12} {tok.value!r:<12} {tok.location}"
            for tok in Lexer.from_source(source)
        )
        _emit(rendered, out)
        return 0

    # 3. Parsing
    diagnostics = Diagnostics()
    tree = Parser(Lexer.from_source(source), diagnostics).parse()

    # 4. Rendering
    status = 0
    if as_json:
        try:
            _emit(json.dumps(tree.to_dict(), indent=2), out)
        except RecursionError:
            # json nests one call per tree level
            print(
                "error: parse tree is too deeply nested to render as JSON",
                file=sys.stderr,
            )
            status = 1
    else:
        _emit(ParseTreePrinter().render(tree), out)

    # 5. Diagnostics
    for message in diagnostics:
        print(message, file=sys.stderr)
    if diagnostics.has_errors:
        print(f"{len(diagnostics)} syntax error(s)", file=sys.stderr)
        return 1
    return status


def _emit(rendered: str, out: str | None) -> None:
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(rendered + "\n")
    else:
        print(rendered)


def main() -> None:
    """
    Entry point for the GROUSE CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens`: Print the token stream instead of the parse tree.
        - `--json`: Print the parse tree as JSON.
        - `-o`, `--out`: Write the output to a file.

    Exits with status 1 if the program has syntax errors.
    """
    parser = argparse.ArgumentParser(prog="grouse")
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream and stop"
    )
    parser.add_argument(
        "--json", dest="as_json", action="store_true", help="Print the tree as JSON"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")

    args = parser.parse_args()

    status = run_grouse(
        source=args.source,
        is_string=args.string,
        tokens=args.tokens,
        as_json=args.as_json,
        out=args.out,
    )
    if status:
        sys.exit(status)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
