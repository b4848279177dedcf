# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `CliSpecification`, the root of an option tree.

A specification wraps the declared options in an implicitly required group,
registers every leaf with a `FlagParser`, and runs each command line through
the same fixed sequence:

1. tokenize `argv` (parser level errors raise `ParseFailedError`),
2. validate the whole tree, then the specification's own validators,
3. fire every present leaf's setter, in tree order.

Any validation failure aborts the call before a single setter runs.

Example Usage:
    spec = CliSpecification.create(
        option("path", arg_name="file", required=True).set_to_file(config.set_path),
        radio(option("fast", is_flag=True), option("slow", is_flag=True)),
        program="sync",
        help_text="Synchronize a file.",
    )
    cli = spec.parse(["-path", "a.txt", "-fast"])
    spec.render_help()
"""
from __future__ import annotations

import shlex
import sys
from dataclasses import dataclass
from typing import Iterable, Sequence

from rich.console import Console
from rich.markup import escape
from rich.padding import Padding
from rich.panel import Panel
from rich.table import Table

from clispec.cli import Cli
from clispec.console import console as default_console
from clispec.exceptions import CliValidationError, InvalidSpecificationError
from clispec.logger import logger
from clispec.options.at_least_one import AtLeastOneOfOption
from clispec.options.base import CliOption, CliOptionBuilder, Requirement
from clispec.options.basic import BasicOption
from clispec.options.group import GroupOption
from clispec.options.radio import RadioOption
from clispec.parser.flag_parser import FlagParser
from clispec.parser.query import query_to_args, url_to_args
from clispec.utils import get_program_invocation
from clispec.validators import CliValidator, ErrorMessage, ValidationRule


@dataclass(frozen=True)
class UsageExample:
    """Represents a usage example shown in help output."""

    usage: str
    description: str


def option(name: str, **kwargs) -> BasicOption:
    """Create a single option builder. See `BasicOption` for keyword arguments."""
    return BasicOption(name, **kwargs)


def group(*options: CliOptionBuilder) -> GroupOption:
    """Options that are required together (or, if all optional, any of them)."""
    return GroupOption(*options)


def radio(*options: CliOptionBuilder) -> RadioOption:
    """Exactly one of the given options."""
    return RadioOption(*options)


def at_least_one_of(*options: CliOptionBuilder) -> AtLeastOneOfOption:
    """Any non-empty subset of the given options."""
    return AtLeastOneOfOption(*options)


def _check_unique_builders(builders: Iterable[CliOptionBuilder]) -> None:
    seen: set[int] = set()
    stack = list(builders)
    while stack:
        builder = stack.pop()
        if id(builder) in seen:
            raise InvalidSpecificationError(
                f"{builder!r} is used more than once in the option tree"
            )
        seen.add(id(builder))
        stack.extend(builder.children)


class CliSpecification:
    """
    Root of an option tree.

    Owns the frozen root node, the flag parser the leaves are registered
    with, specification-wide validators, and the program metadata used to
    render help.
    """

    def __init__(
        self,
        root: GroupOption,
        program: str | None = None,
        help_text: str = "",
        help_epilog: str = "",
        examples: list[tuple[str, str]] | None = None,
        add_help: bool = True,
    ) -> None:
        root.set_required(True)
        self.program: str = program or get_program_invocation()
        self.help_text: str = help_text
        self.help_epilog: str = help_epilog
        self._examples: list[UsageExample] = []
        if examples:
            self.add_examples(examples)
        self._validators: list[CliValidator] = []

        self._root: CliOption = root.build()
        self._parser: FlagParser = FlagParser(program=self.program, add_help=add_help)
        self._root.add_to(self._parser, Requirement.INHERIT)
        logger.debug("Built specification %r", self)

    @classmethod
    def create(cls, *options: CliOptionBuilder, **kwargs) -> CliSpecification:
        """
        Build a specification whose root requires the given options.

        Keyword arguments are passed to `CliSpecification.__init__`.

        Raises:
            InvalidSpecificationError: If no option is given, a builder is used
                twice, or two leaves share a flag.
        """
        _check_unique_builders(options)
        return cls(GroupOption(*options), **kwargs)

    @property
    def root(self) -> CliOption:
        return self._root

    @property
    def parser(self) -> FlagParser:
        return self._parser

    @property
    def examples(self) -> list[UsageExample]:
        return list(self._examples)

    def add_examples(self, examples: list[tuple[str, str]]) -> CliSpecification:
        """
        Add usage examples.

        Args:
            examples (list[tuple[str, str]]): List of (usage, description) tuples.
        """
        for example in examples:
            if not isinstance(example, tuple) or len(example) != 2:
                raise InvalidSpecificationError(
                    "Examples must be a list of (usage, description) tuples"
                )
            self.add_example(*example)
        return self

    def add_example(self, usage: str, description: str) -> CliSpecification:
        if usage is None or description is None:
            raise TypeError("usage and description can not be None")
        example = UsageExample(usage=usage, description=description)
        if all(existing.usage != usage for existing in self._examples):
            self._examples.append(example)
        return self

    def add_validation(
        self, validation_rule: ValidationRule, error_message: ErrorMessage
    ) -> CliSpecification:
        """Add a rule checked after the whole option tree validated."""
        self._validators.append(CliValidator(validation_rule, error_message))
        return self

    def add_validator(self, validator: CliValidator) -> CliSpecification:
        self._validators.append(validator)
        return self

    def parse(self, args: Sequence[str] | str | None = None) -> Cli:
        """
        Parse, validate and consume a command line.

        Args:
            args (Sequence[str] | str | None): The argument vector. A single
                string is split with shell rules. Defaults to `sys.argv[1:]`.

        Returns:
            Cli: The parsed command line.

        Raises:
            CliValidationError: If the command line is rejected. No setter has
                run when this is raised.
            HelpSignal: If help was requested.
        """
        if args is None:
            args = sys.argv[1:]
        elif isinstance(args, str):
            args = shlex.split(args)

        cli = self._parser.parse(args)
        try:
            self._root.validate(cli)
            for validator in self._validators:
                validator.validate(cli)
        except CliValidationError as error:
            logger.debug("[%s] Validation failed (%s): %s", self.program, error.kind, error)
            raise
        logger.debug("[%s] Validated %d option(s)", self.program, len(cli))
        self._root.fire_callback(cli)
        return cli

    def parse_query(self, query: str) -> Cli:
        """Parse a `key=value&flag` query string."""
        return self.parse(query_to_args(query))

    def parse_url(self, url: str) -> Cli:
        """Parse the query string of a URL."""
        return self.parse(url_to_args(url))

    def get_usage_fragment(self) -> str:
        """Usage of the option tree without the program name."""
        fragment = self._root.generate_usage(True) or ""
        if fragment.startswith("(") and fragment.endswith(" )"):
            fragment = fragment[1:-2].strip()
        return fragment

    def get_usage(self) -> str:
        fragment = self.get_usage_fragment()
        if fragment:
            return f"{self.program} {fragment}"
        return self.program

    def get_flag_descriptions(self) -> list[tuple[str, str]]:
        """(flag tokens, description) for every option leaf, in tree order."""
        return [
            (leaf.definition.get_token_text(), leaf.definition.description)
            for leaf in self._root.iter_leaves()
        ]

    def render_help(self, console: Console | None = None) -> None:
        """
        Print formatted help text using Rich output.

        Includes usage, description, options, examples and the footer.
        """
        console = console or default_console
        console.print(f"[bold]usage:[/bold] {escape(self.get_usage())}\n")

        if self.help_text:
            console.print(self.help_text + "\n")

        flags = self.get_flag_descriptions()
        if self._parser.add_help:
            flags.append(("-h, --help", "Show this help message."))
        if flags:
            console.print("[bold]options:[/bold]")
            table = Table(show_header=False, box=None, padding=(0, 2))
            table.add_column("flags", no_wrap=True)
            table.add_column("description")
            for tokens, description in flags:
                table.add_row(escape(tokens), escape(description or ""))
            console.print(Padding(table, (0, 0, 0, 2)))

        if self._examples:
            console.print("\n[bold]examples:[/bold]")
            for example in self._examples:
                block = f"[bold]{escape(self.program)}[/bold] {escape(example.usage)}"
                console.print(Padding(Panel(block, expand=False), (0, 2)))
                console.print(f"    {escape(example.description)}", style="dim")

        if self.help_epilog:
            console.print("\n" + self.help_epilog, style="dim")

    def __str__(self) -> str:
        required = sum(1 for definition in self._parser.definitions if definition.required)
        return (
            f"CliSpecification(program={self.program!r}, flags={len(self._parser)}, "
            f"required={required}, validators={len(self._validators)})"
        )

    def __repr__(self) -> str:
        return str(self)
