# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Validation rules that run against a parsed `Cli`.

A `CliValidator` pairs a predicate over the whole parsed command line with
either a static error message or a function that derives the message from the
same `Cli`. Validators are attached to option nodes or to the specification
and run in insertion order, after the structural checks of their node.

Included factories:
- int_range_validator: The option's value is an integer within a range.
- choices_validator: The option's value is one of a fixed set of words.
- requires_validator: If one option is present, another must be too.
- excludes_validator: Two options may not appear together.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from clispec.cli import Cli
from clispec.exceptions import CliValidationError, ValidationFailedError

ValidationRule = Callable[[Cli], bool]
ErrorMessage = str | Callable[[Cli], str]


@dataclass(frozen=True)
class CliValidator:
    """A named predicate over a parsed command line plus its error message."""

    rule: ValidationRule
    message: ErrorMessage

    def __post_init__(self) -> None:
        if not callable(self.rule):
            raise TypeError("validation rule must be callable")
        if self.message is None:
            raise TypeError("error message can not be None")

    def get_message(self, cli: Cli) -> str:
        if callable(self.message):
            return self.message(cli)
        return self.message

    def validate(self, cli: Cli) -> None:
        """
        Run the rule.

        Raises:
            ValidationFailedError: If the rule returns False or raises.
        """
        try:
            passed = self.rule(cli)
        except CliValidationError:
            raise
        except Exception as error:
            raise ValidationFailedError(str(error) or self.get_message(cli)) from error
        if not passed:
            raise ValidationFailedError(self.get_message(cli))


def int_range_validator(name: str, minimum: int, maximum: int) -> CliValidator:
    """Validator for integer ranges."""

    def validate(cli: Cli) -> bool:
        if not cli.has_option(name):
            return True
        try:
            value = int(cli.get_option_value(name) or "")
        except ValueError:
            return False
        return minimum <= value <= maximum

    return CliValidator(
        validate,
        f"Invalid value for -{name}. Enter a number between {minimum} and {maximum}.",
    )


def choices_validator(name: str, choices: Sequence[str]) -> CliValidator:
    """Validator for specific word inputs, case-insensitive."""

    def validate(cli: Cli) -> bool:
        if not cli.has_option(name):
            return True
        value = cli.get_option_value(name) or ""
        return value.upper() in [choice.upper() for choice in choices]

    return CliValidator(
        validate,
        lambda cli: (
            f"Invalid value '{cli.get_option_value(name)}' for -{name}. "
            f"Choices: {{{', '.join(choices)}}}."
        ),
    )


def requires_validator(name: str, *required: str) -> CliValidator:
    """If `name` is present, every option in `required` must be present too."""

    def validate(cli: Cli) -> bool:
        if not cli.has_option(name):
            return True
        return all(cli.has_option(other) for other in required)

    return CliValidator(
        validate,
        lambda cli: (
            f"-{name} requires "
            + ", ".join(f"-{other}" for other in required if not cli.has_option(other))
        ),
    )


def excludes_validator(name: str, other: str) -> CliValidator:
    """`name` and `other` may not both be present."""
    return CliValidator(
        lambda cli: not (cli.has_option(name) and cli.has_option(other)),
        f"-{name} can not be used together with -{other}",
    )
