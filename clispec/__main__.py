"""
Clispec CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging
import sys
from argparse import REMAINDER, ArgumentParser
from pathlib import Path
from typing import Sequence

from rich.markup import escape
from rich.table import Table

from clispec.config import loader
from clispec.console import console
from clispec.exceptions import CliValidationError, ClispecError
from clispec.signals import HelpSignal
from clispec.utils import setup_logging


def get_root_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="clispec",
        description="Check a command line against a clispec specification file.",
        epilog=(
            "Options go before the config path. "
            "Everything after it is the command line to check."
        ),
    )
    parser.add_argument("config", type=Path, help="YAML or TOML specification file.")
    parser.add_argument(
        "--log-mode",
        choices=["cli", "json"],
        default=None,
        help="Console log format.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )
    parser.add_argument(
        "args", nargs=REMAINDER, help="Command line to check (prefix with '--')."
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = get_root_parser().parse_args(argv)
    setup_logging(
        mode=args.log_mode,
        console_log_level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    try:
        spec = loader(args.config)
    except (FileNotFoundError, ValueError, ImportError, ClispecError) as error:
        console.print(f"[bold red]Could not load {args.config}:[/] {escape(str(error))}")
        return 2

    checked_args = list(args.args)
    if checked_args and checked_args[0] == "--":
        checked_args = checked_args[1:]

    try:
        cli = spec.parse(checked_args)
    except HelpSignal:
        spec.render_help(console)
        return 0
    except CliValidationError as error:
        console.print(f"[bold red]error ({error.kind}):[/] {escape(str(error))}")
        console.print(f"[bold]usage:[/bold] {escape(spec.get_usage())}")
        return 1

    table = Table(title=spec.program, show_lines=False)
    table.add_column("option")
    table.add_column("value")
    for name, value in cli.as_dict().items():
        table.add_row(f"-{name}", "" if value is None else escape(str(value)))
    console.print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
