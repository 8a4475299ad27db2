"""
Monkey CLI Entrypoint.

This module provides the command-line interface for parsing Monkey source code.
It prints the canonical, fully parenthesized rendering of the parsed program,
or a JSON dump of its syntax tree, and reports parse errors.

Features:
    - Read source from `.monkey` files or inline strings.
    - Lex and parse the source, printing every parse error on failure.
    - Optional parser tracing to follow precedence decisions.
    - Launch an interactive REPL.

Example usage:
    monkey program.monkey
    monkey -s "a + b * c"
    monkey -s "let x = -5 * 2;" --json
    monkey --repl --trace

Functions:
    run_monkey(source: str, is_string: bool = False, as_json: bool = False,
               trace: bool = False) -> int:
        Executes the parse pipeline and returns a process exit code.

    print_parse_errors(errors: list[str]) -> None:
        Prints parser diagnostics under an error banner.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import json
import sys

from monkey.monkey_lexer import CharacterStream, Lexer
from monkey.monkey_parser import Parser


def print_parse_errors(errors: list[str]) -> None:
    print("[parse error] >>>")
    for msg in errors:
        print(f"\t{msg}")


def run_monkey(
    source: str,
    is_string: bool = False,
    as_json: bool = False,
    trace: bool = False,
) -> int:
    """
    Run the Monkey front end: lex, parse, and print the result.

    Args:
        source (str): The Monkey source code or path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path. Defaults to False.
        as_json (bool): If True, prints the syntax tree as JSON instead of its canonical rendering.
        trace (bool): If True, the parser prints BEGIN/END lines for each expression parse function.

    Returns:
        int: 0 on success, 1 if the parser reported errors.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey'.
    """
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lexing + parsing
    parser = Parser(Lexer(CharacterStream(source)), trace=trace)
    program = parser.parse_program()

    # 3. Report
    if parser.errors:
        print_parse_errors(parser.errors)
        return 1

    if as_json:
        print(json.dumps(program.to_dict(), indent=2))
    else:
        print(program)
    return 0


def main() -> None:
    """
    Entry point for the Monkey CLI.

    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise parses the given file or string and exits with `run_monkey`'s status.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-j`, `--json`: Print the syntax tree as JSON.
        - `--trace`: Print parser tracing output.
        - `--repl`: Launch the interactive REPL.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from monkey.monkey_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-j", "--json", dest="as_json", action="store_true", help="Print the AST as JSON"
    )
    parser.add_argument(
        "--trace", action="store_true", help="Trace parse function calls"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing a file",
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from monkey.monkey_repl import start_repl

        start_repl(trace=args.trace)
    else:
        sys.exit(
            run_monkey(
                source=args.source,
                is_string=args.string,
                as_json=args.as_json,
                trace=args.trace,
            )
        )


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
