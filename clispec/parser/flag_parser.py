# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides the flag tokenizer that option trees register their leaves with.

`FlagParser` wraps an `argparse.ArgumentParser` configured for single-dash
option names (`-foo value`), as used by option trees. It knows nothing about
groups or radios: it only accepts known flags, enforces flags registered as
required at the parser level, and reports which flags were seen.

Key Components:
- `FlagDefinition`: Frozen description of one registered flag.
- `FlagParser`: Registers definitions and turns `argv` into a `Cli`.

Parser level failures (unknown token, missing value, missing parser-required
flag) raise `ParseFailedError` instead of exiting the process.
"""
from __future__ import annotations

from argparse import SUPPRESS, Action, ArgumentParser, Namespace
from dataclasses import dataclass
from typing import Any, Sequence

from clispec.cli import Cli
from clispec.exceptions import InvalidSpecificationError, ParseFailedError
from clispec.logger import logger
from clispec.signals import HelpSignal


@dataclass(frozen=True)
class FlagDefinition:
    """
    Represents one flag registered with the parser.

    Attributes:
        name (str): Short option name, rendered as `-name`.
        has_arg (bool): True if the flag takes a value, False for boolean flags.
        required (bool): True if the parser itself must reject a missing flag.
        long_name (str | None): Optional long option name, rendered as `--long_name`.
        arg_name (str | None): Placeholder shown for the value in usage text.
        description (str): Help text for the flag.
    """

    name: str
    has_arg: bool = True
    required: bool = False
    long_name: str | None = None
    arg_name: str | None = None
    description: str = ""

    @property
    def flags(self) -> tuple[str, ...]:
        if self.long_name:
            return (f"-{self.name}", f"--{self.long_name}")
        return (f"-{self.name}",)

    def get_token_text(self) -> str:
        """Get the flag tokens with the value placeholder, e.g. `-foo, --foo <n>`."""
        text = ", ".join(self.flags)
        if self.has_arg and self.arg_name:
            text = f"{text} <{self.arg_name}>"
        return text


class _HelpAction(Action):
    """Stops parsing as soon as help is requested."""

    def __init__(self, option_strings, dest=SUPPRESS, default=SUPPRESS, help=None):
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            default=default,
            nargs=0,
            help=help,
        )

    def __call__(self, parser, namespace, values, option_string=None):
        raise HelpSignal()


class _RaisingArgumentParser(ArgumentParser):
    """ArgumentParser that raises `ParseFailedError` instead of exiting."""

    def error(self, message: str):
        raise ParseFailedError(message)


class FlagParser:
    """
    Flag tokenizer for option trees.

    Every leaf of a specification registers one `FlagDefinition`. The
    `required` value of a definition is the parser level requirement, which
    composite nodes may weaken (radio choices are never parser-required).
    """

    def __init__(self, program: str | None = None, add_help: bool = True) -> None:
        self.program: str | None = program
        self.add_help: bool = add_help
        self._definitions: dict[str, FlagDefinition] = {}
        self._option_strings: set[str] = set()
        self._parser = _RaisingArgumentParser(
            prog=program,
            add_help=False,
            allow_abbrev=False,
        )
        if add_help:
            self._parser.add_argument(
                "-h", "--help", action=_HelpAction, help="Show this help message."
            )
            self._option_strings.update({"-h", "--help"})

    @property
    def definitions(self) -> list[FlagDefinition]:
        """Registered flag definitions in registration order."""
        return list(self._definitions.values())

    def register(self, definition: FlagDefinition) -> FlagDefinition:
        """
        Register a flag definition.

        Raises:
            InvalidSpecificationError: If the name or one of its option strings
                is already registered.
        """
        if definition.name in self._definitions:
            raise InvalidSpecificationError(
                f"Option '-{definition.name}' is registered more than once"
            )
        for flag in definition.flags:
            if flag in self._option_strings:
                raise InvalidSpecificationError(f"Flag '{flag}' is already in use")

        kwargs: dict[str, Any] = {
            "dest": definition.name,
            "required": definition.required,
            "default": SUPPRESS,
            "help": definition.description,
        }
        if definition.has_arg:
            kwargs["action"] = "store"
            kwargs["metavar"] = definition.arg_name or definition.name.upper()
        else:
            kwargs["action"] = "store_const"
            kwargs["const"] = None
        self._parser.add_argument(*definition.flags, **kwargs)

        self._definitions[definition.name] = definition
        self._option_strings.update(definition.flags)
        logger.debug(
            "Registered flag %s (has_arg=%s, required=%s)",
            definition.flags,
            definition.has_arg,
            definition.required,
        )
        return definition

    def parse(self, args: Sequence[str]) -> Cli:
        """
        Tokenize `args` into a `Cli`.

        Raises:
            ParseFailedError: On unknown tokens, missing values or missing
                parser-required flags.
            HelpSignal: If the help flag was supplied.
        """
        namespace: Namespace = self._parser.parse_args(list(args))
        values = vars(namespace)
        logger.debug("Parsed flags: %s", sorted(values))
        return Cli(values)

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        required = sum(1 for definition in self._definitions.values() if definition.required)
        return f"FlagParser(flags={len(self._definitions)}, required={required})"
