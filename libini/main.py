"""Main CLI entry point for libini.

Provides commands: show, get, tokens
"""

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from libini.config import ParserConfig, load_parser_config
from libini.model import IniParseResult, LookupStatus, ValueKind
from libini.parsers.base import IniError, IniSourceError, StructuralError
from libini.parsers.parser import IniParser
from libini.runtime.pool import shutdown_pool

logger = logging.getLogger("libini.cli")

EXIT_OK = 0
EXIT_LOOKUP_FAILED = 1
EXIT_PARSE_FAILED = 2


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    level = logging.DEBUG if verbose else logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )


def build_arg_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="libini",
        description="libini - typed INI configuration reader",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--config",
        help="Parser configuration file (.toml or .json)",
    )
    parser.add_argument(
        "--async",
        dest="use_async",
        action="store_true",
        help="Parse on the background thread pool and wait for the result",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    show_parser = subparsers.add_parser("show", help="Render every section as a table")
    show_parser.add_argument("file", help="INI file to read")

    get_parser = subparsers.add_parser("get", help="Print the value of one member")
    get_parser.add_argument("file", help="INI file to read")
    get_parser.add_argument("name", help="Member name (first match across sections)")
    get_parser.add_argument(
        "--kind",
        choices=[kind.value for kind in ValueKind],
        help="Require the value to be of this kind",
    )
    get_parser.add_argument(
        "--section",
        help="Only search this section",
    )

    tokens_parser = subparsers.add_parser("tokens", help="Print the token stream")
    tokens_parser.add_argument("file", help="INI file to read")

    return parser


def _format_value(value: object) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_result(result: IniParseResult, console: Console) -> None:
    """Print each section of a parse result as a rich table."""
    if not len(result):
        console.print("[dim]no sections[/dim]")
        return

    for section in result:
        table = Table(title=Text(f"[{section.name}]"), title_justify="left")
        table.add_column("Member", style="cyan")
        table.add_column("Kind", style="magenta")
        table.add_column("Value")
        for member in section:
            table.add_row(Text(member.name), member.kind.value, Text(_format_value(member.value)))
        console.print(table)


def _parse(parser: IniParser, use_async: bool) -> IniParseResult:
    if use_async:
        return parser.parse_async().result()
    return parser.parse()


def show_command(args: argparse.Namespace, config: ParserConfig, console: Console) -> int:
    parser = IniParser(args.file, config)
    render_result(_parse(parser, args.use_async), console)
    return EXIT_OK


def get_command(args: argparse.Namespace, config: ParserConfig, console: Console) -> int:
    parser = IniParser(args.file, config)
    result = _parse(parser, args.use_async)

    scope = result
    if args.section:
        if not result.has_section(args.section):
            console.print(f"section {args.section!r} not found", style="red", markup=False)
            return EXIT_LOOKUP_FAILED
        scope = result.section(args.section)

    if args.kind is None:
        if args.name not in scope:
            console.print(f"member {args.name!r} not found", style="red", markup=False)
            return EXIT_LOOKUP_FAILED
        console.print(_format_value(scope[args.name].value), markup=False)
        return EXIT_OK

    lookup = scope.lookup(args.name, args.kind)
    if lookup.status is LookupStatus.NOT_FOUND:
        console.print(f"member {args.name!r} not found", style="red", markup=False)
        return EXIT_LOOKUP_FAILED
    if lookup.status is LookupStatus.TYPE_MISMATCH:
        console.print(
            f"member {args.name!r} is a {lookup.actual.value}, not a {lookup.expected.value}",
            style="red",
            markup=False,
        )
        return EXIT_LOOKUP_FAILED
    console.print(_format_value(lookup.value), markup=False)
    return EXIT_OK


def tokens_command(args: argparse.Namespace, config: ParserConfig, console: Console) -> int:
    parser = IniParser(args.file, config)
    for index, token in enumerate(parser.tokenize()):
        console.print(f"{index:4d}  {token!r}", markup=False, highlight=False)
    return EXIT_OK


COMMANDS = {
    "show": show_command,
    "get": get_command,
    "tokens": tokens_command,
}


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    console = console or Console()

    setup_logging(args.verbose, console)

    if not args.command:
        parser.print_help()
        return EXIT_OK

    try:
        config = load_parser_config(args.config)
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"invalid configuration: {e}", style="red", markup=False)
        return EXIT_PARSE_FAILED

    try:
        return COMMANDS[args.command](args, config, console)
    except IniSourceError as e:
        console.print(str(e), style="red", markup=False)
        return EXIT_PARSE_FAILED
    except StructuralError as e:
        console.print(f"malformed INI document: {e}", style="red", markup=False)
        return EXIT_PARSE_FAILED
    except IniError as e:
        logger.error("Unexpected libini error: %s", e)
        return EXIT_PARSE_FAILED
    finally:
        if args.use_async:
            shutdown_pool(wait=True)


if __name__ == "__main__":
    sys.exit(main())
