"""
slang Command-Line Interface.

Usage:
    slang tokens input.slsf         # Dump the token stream
    slang ast input.slsf            # Print the parenthesized tree
    slang ast -c "(1 + 2) * 3"      # Same, for a source string
    slang check input.slsf          # Report diagnostics only
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from slang import __version__
from slang.compiler import FrontEndResult, parse_source, scan_source

logger = logging.getLogger("slang.cli")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="slang",
        description="slang - scanner, parser and printer for a small expression language",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Logging level (default: warning)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, help_text in (
        ("tokens", "Show the tokens of a source file"),
        ("ast", "Parse an expression and print its tree"),
        ("check", "Report diagnostics for a source file"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "input",
            type=Path,
            nargs="?",
            help="Input source file (.slsf)",
        )
        sub.add_argument(
            "-c",
            "--command",
            dest="source",
            metavar="SOURCE",
            help="Source text to use instead of a file",
        )

    return parser


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    logging.getLogger("slang").setLevel(getattr(logging, level_name.upper()))


def _read_input(args: argparse.Namespace) -> Optional[tuple[str, str]]:
    """Return (source, filename) for the command, or None after printing why not."""
    if args.source is not None:
        return args.source, "<command>"

    input_path: Optional[Path] = args.input
    if input_path is None:
        print("Error: no input (give a FILE or -c SOURCE)", file=sys.stderr)
        return None
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return None

    logger.debug(f"Reading {input_path}")
    return input_path.read_text(encoding="utf-8"), str(input_path)


def _use_color() -> bool:
    return sys.stdout.isatty() and not os.environ.get("NO_COLOR")


def cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens command."""
    loaded = _read_input(args)
    if loaded is None:
        return 1
    source, filename = loaded

    result = scan_source(source, filename)
    print(f"Tokens count: {len(result.tokens)}")
    for token in result.tokens:
        print(token)

    return 1 if result.errors else 0


def cmd_ast(args: argparse.Namespace) -> int:
    """Handle the ast command."""
    loaded = _read_input(args)
    if loaded is None:
        return 1
    source, filename = loaded

    result = parse_source(source, filename)
    if not result.ok:
        return 1

    print(result.rendered)
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the check command."""
    loaded = _read_input(args)
    if loaded is None:
        return 1
    source, filename = loaded

    result: FrontEndResult = parse_source(source, filename)
    if result.ok:
        print(f"{filename}: no errors")
        return 0

    print(result.reporter.render_all(use_color=_use_color()))
    print(f"{filename}: {result.reporter.error_count()} error(s)")
    return 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    _configure_logging(args.log_level)

    command_handlers = {
        "tokens": cmd_tokens,
        "ast": cmd_ast,
        "check": cmd_check,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
