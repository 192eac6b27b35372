"""Main CLI entry point for sysconfigdata.

Provides commands: show, vars, flags, refs, cycles
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from sysconfigdata.cli.flags import flags_command
from sysconfigdata.cli.refs import cycles_command, refs_command
from sysconfigdata.cli.show import show_command, vars_command

logger = logging.getLogger("sysconfigdata.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Send the package's log records to a Rich handler on stderr.

    Only the ``sysconfigdata`` logger tree is configured; the root logger
    is left alone. Calling this again replaces the installed handler.
    """
    package_logger = logging.getLogger("sysconfigdata")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=verbose,
        show_path=False,
        markup=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
    package_logger.addHandler(handler)
    package_logger.propagate = False


def _add_source_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "source",
        help=(
            "Path to a _sysconfigdata_*.py file, or a directory to search for "
            "one (SYSCONFIGDATA_FILE overrides the search)"
        ),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sysconfigdata",
        description="Sysconfigdata - inspect CPython build configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional parser configuration. Can be a path to a TOML/JSON "
            "file or an inline TOML/JSON string. When omitted, built-in "
            "defaults are used."
        ),
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    show_parser = subparsers.add_parser(
        "show",
        help="Print resolved configuration keys",
    )
    _add_source_argument(show_parser)
    show_parser.add_argument(
        "keys",
        nargs="*",
        help="Keys to print (default: all keys)",
    )
    show_parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of a table",
    )

    vars_parser = subparsers.add_parser(
        "vars",
        help="Print the typed record of well-known build variables",
    )
    _add_source_argument(vars_parser)
    vars_parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of a table",
    )

    flags_parser = subparsers.add_parser(
        "flags",
        help="Print compiler and linker flags for building extensions",
    )
    _add_source_argument(flags_parser)
    flags_parser.add_argument(
        "--cflags",
        action="store_true",
        help="Only print compiler flags",
    )
    flags_parser.add_argument(
        "--ldflags",
        action="store_true",
        help="Only print linker flags",
    )
    flags_parser.add_argument(
        "--embed",
        action="store_true",
        help="Link against the runtime library (for embedding the interpreter)",
    )

    refs_parser = subparsers.add_parser(
        "refs",
        help="Show keys referenced by, and referencing, a key",
    )
    _add_source_argument(refs_parser)
    refs_parser.add_argument(
        "key",
        help="Key to inspect",
    )

    cycles_parser = subparsers.add_parser(
        "cycles",
        help="Report placeholder reference cycles",
    )
    _add_source_argument(cycles_parser)
    cycles_parser.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Maximum number of cycles to report (default: 20, <=0 for all)",
    )

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    # Dispatch to subcommand
    if args.command == "show":
        return show_command(args)
    elif args.command == "vars":
        return vars_command(args)
    elif args.command == "flags":
        return flags_command(args)
    elif args.command == "refs":
        return refs_command(args)
    elif args.command == "cycles":
        return cycles_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
