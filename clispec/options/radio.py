# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the radio node: exactly one of several choices.

Choices are always registered with the flag parser as optional, whatever
their own `required` flag says. The radio itself decides: more than one
selected choice fails with `TooManyChoicesError`, none selected fails with
`MissingRequiredChoiceError` when the radio is required. A sub-group counts
as a single choice.
"""
from __future__ import annotations

from dataclasses import dataclass

from clispec.cli import Cli
from clispec.exceptions import MissingRequiredChoiceError, TooManyChoicesError
from clispec.options.base import CompositeCliOption, CompositeOptionBuilder, Requirement
from clispec.parser.flag_parser import FlagParser


@dataclass(frozen=True, kw_only=True)
class RadioCliOption(CompositeCliOption):
    """Runtime radio node."""

    def is_present(self, cli: Cli) -> bool:
        return self._any_present(cli)

    def get_missing(self, cli: Cli) -> str | None:
        if self.is_present(cli):
            return None
        return f"[ {' | '.join(self._missing_markers(cli))} ]"

    def add_to(self, parser: FlagParser, override: Requirement = Requirement.INHERIT) -> None:
        for child in self.children:
            child.add_to(parser, Requirement.OPTIONAL)

    def validate(self, cli: Cli, override: Requirement = Requirement.INHERIT) -> None:
        seen = self.get_seen_list(cli)
        if len(seen) > 1:
            raise TooManyChoicesError(seen)
        if self.required and not seen:
            raise MissingRequiredChoiceError(
                "Radio option was required but did not find selected option choice "
                f"[ {' | '.join(self._forced_usages())} ]"
            )
        for child in self.children:
            child.validate(cli, Requirement.OPTIONAL)
        self.run_validators(cli)

    def generate_usage(self, force: bool = False) -> str | None:
        if not force and not self.required:
            return None
        usages = self._forced_usages()
        if not usages:
            return None
        return f"[ {' | '.join(usages)} ]"


class RadioOption(CompositeOptionBuilder):
    """Builder for a set of mutually exclusive choices."""

    minimum_children = 2
    label = "Radio"

    def set_required(self, required: bool) -> RadioOption:
        self.required = required
        return self

    def build(self) -> RadioCliOption:
        return RadioCliOption(
            required=self.required,
            validators=tuple(self.validators),
            children=self.build_children(),
        )

    def __repr__(self) -> str:
        return f"RadioOption(choices={len(self.children)}, required={self.required})"
