# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the at-least-one-of node: any non-empty subset of its choices.

Like a radio, choices are registered with the flag parser as optional. Unlike
a radio, several choices may be selected together; only an empty selection on
a required node fails. Usage text renders as `{ a | b }+` to tell the two
apart.
"""
from __future__ import annotations

from dataclasses import dataclass

from clispec.cli import Cli
from clispec.exceptions import MissingRequiredChoiceError
from clispec.options.base import CompositeCliOption, CompositeOptionBuilder, Requirement
from clispec.parser.flag_parser import FlagParser


@dataclass(frozen=True, kw_only=True)
class AtLeastOneOfCliOption(CompositeCliOption):
    """Runtime at-least-one-of node."""

    def is_present(self, cli: Cli) -> bool:
        return self._any_present(cli)

    def get_missing(self, cli: Cli) -> str | None:
        if self.is_present(cli):
            return None
        return f"{{ {' | '.join(self._missing_markers(cli))} }}"

    def add_to(self, parser: FlagParser, override: Requirement = Requirement.INHERIT) -> None:
        for child in self.children:
            child.add_to(parser, Requirement.OPTIONAL)

    def validate(self, cli: Cli, override: Requirement = Requirement.INHERIT) -> None:
        if self.required and not self.get_seen_list(cli):
            raise MissingRequiredChoiceError(
                "AtLeastOneOf option was required but did not find selected option choice "
                f"{{ {' | '.join(self._forced_usages())} }}"
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
        return f"{{ {' | '.join(usages)} }}+"


class AtLeastOneOfOption(CompositeOptionBuilder):
    """Builder for a set of choices of which at least one is selected."""

    minimum_children = 2
    label = "At Least One Of"

    def set_required(self, required: bool) -> AtLeastOneOfOption:
        self.required = required
        return self

    def build(self) -> AtLeastOneOfCliOption:
        return AtLeastOneOfCliOption(
            required=self.required,
            validators=tuple(self.validators),
            children=self.build_children(),
        )

    def __repr__(self) -> str:
        return f"AtLeastOneOfOption(choices={len(self.children)}, required={self.required})"
