#!/usr/bin/env python3
"""
CLI for the Cog interpreter.

Usage:
    python -m coglang run FILE.cog [--keep-going] [--max-errors N] [--encoding ENC]
    python -m coglang check FILE.cog [--json]
    python -m coglang repl

Examples:
    # Run a script, stopping at the first error
    python -m coglang run examples/hello.cog

    # Run every statement, reporting each failure
    python -m coglang run examples/hello.cog --keep-going

    # Parse without executing
    python -m coglang check examples/hello.cog

The log level defaults to $COGLANG_LOG_LEVEL (WARNING if unset); -v selects
DEBUG.
"""

import argparse
import json
import logging
import os
import sys
from contextlib import closing
from pathlib import Path


LOG_LEVEL_ENV = "COGLANG_LOG_LEVEL"


def configure_logging(verbose: bool) -> None:
    """Configure root logging once for the CLI process."""
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, os.environ.get(LOG_LEVEL_ENV, "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def cmd_run(args):
    """Run a Cog script."""
    from . import run_file

    source_path = Path(args.file)
    if not source_path.exists():
        print(f"Error: File not found: {source_path}", file=sys.stderr)
        return 1

    try:
        result = run_file(
            source_path,
            encoding=args.encoding,
            keep_going=args.keep_going,
            max_errors=args.max_errors,
        )
    except (OSError, LookupError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not result.success:
        for diag in result.diagnostics:
            print(diag.format(), file=sys.stderr)
        if args.keep_going:
            print(f"{len(result.diagnostics)} error(s)", file=sys.stderr)
        return 1

    return 0


def cmd_check(args):
    """Check a Cog script for parse errors without running it."""
    from . import check, read_script_lines

    source_path = Path(args.file)
    if not source_path.exists():
        print(f"Error: File not found: {source_path}", file=sys.stderr)
        return 1

    try:
        with closing(read_script_lines(source_path, args.encoding)) as lines:
            result = check(lines, filename=str(source_path))
    except (OSError, LookupError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        data = result.to_json()
        data["file"] = str(source_path)
        print(json.dumps(data, indent=2))
        return 1 if result.has_errors else 0

    if result.diagnostics:
        print(result.collector.format_all(), file=sys.stderr)

    if result.has_errors:
        print(f"Check failed: {result.collector.summary()}")
        return 1

    print(f"OK: {source_path.name} - {result.statement_count} statement(s), "
          f"{result.comment_count} comment(s)")
    if result.has_warnings:
        print(f"  {result.collector.summary()}")
    return 0


def cmd_repl(args):
    """Read statements from stdin and execute them one at a time."""
    from . import Interpreter, CogError

    interactive = sys.stdin.isatty()
    interpreter = Interpreter(filename="<repl>")

    if interactive:
        print("Cog REPL")
        print("Type 'exit' or press Ctrl+D to quit.")

    line_number = 0
    while True:
        try:
            if interactive:
                line = input(">> ")
            else:
                line = sys.stdin.readline()
                if line == "":
                    raise EOFError
                line = line.rstrip("\r\n")
        except EOFError:
            if interactive:
                print("\nExiting.")
            break

        if line.strip() == "exit":
            break

        line_number += 1
        try:
            interpreter.execute_statement(line, line_number)
        except CogError as e:
            print(e.diagnostic.format(), file=sys.stderr)

    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='python -m coglang',
        description='Cog script interpreter',
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log interpreter activity at DEBUG level')

    subparsers = parser.add_subparsers(dest='action', required=True)

    # run command
    run_parser = subparsers.add_parser('run', help='Run a Cog script')
    run_parser.add_argument('file', help='Cog source file')
    run_parser.add_argument('-k', '--keep-going', action='store_true',
                            help='Report a failing statement and continue with the next')
    run_parser.add_argument('--max-errors', type=int, default=20, metavar='N',
                            help='Stop a --keep-going run after N errors (default 20)')
    run_parser.add_argument('--encoding', default='utf-8',
                            help='Source file encoding (default utf-8)')

    # check command
    check_parser = subparsers.add_parser('check', help='Check a Cog script for errors')
    check_parser.add_argument('file', help='Cog source file')
    check_parser.add_argument('--json', action='store_true',
                              help='Print diagnostics as JSON')
    check_parser.add_argument('--encoding', default='utf-8',
                              help='Source file encoding (default utf-8)')

    # repl command
    subparsers.add_parser('repl', help='Start an interactive session')

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.action == 'run':
        return cmd_run(args)
    elif args.action == 'check':
        return cmd_check(args)
    elif args.action == 'repl':
        return cmd_repl(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
