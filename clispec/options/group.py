# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the group node: options that belong together.

A group with at least one required child is present only when every required
child is present. A group whose children are all optional is present when any
of them is. A required group fails validation when a required child is
missing; every child is validated either way so nested rules still run.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from clispec.cli import Cli
from clispec.exceptions import MissingRequiredGroupError
from clispec.options.base import (
    CliOption,
    CompositeCliOption,
    CompositeOptionBuilder,
    Requirement,
)
from clispec.parser.flag_parser import FlagParser


@dataclass(frozen=True, kw_only=True)
class GroupCliOption(CompositeCliOption):
    """Runtime group node. Children are partitioned once, at construction."""

    required_children: tuple[CliOption, ...] = field(init=False)
    optional_children: tuple[CliOption, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "required_children",
            tuple(child for child in self.children if child.required),
        )
        object.__setattr__(
            self,
            "optional_children",
            tuple(child for child in self.children if not child.required),
        )

    def _child_overrides(
        self, override: Requirement
    ) -> list[tuple[CliOption, Requirement]]:
        effective = override.resolve(self.required)
        return [
            (child, Requirement.of(child.required and effective))
            for child in self.children
        ]

    def is_present(self, cli: Cli) -> bool:
        if self.required_children:
            return all(child.is_present(cli) for child in self.required_children)
        return any(child.is_present(cli) for child in self.optional_children)

    def _missing_required(self, cli: Cli) -> list[str]:
        missing = []
        for child in self.required_children:
            marker = child.get_missing(cli)
            if marker:
                missing.append(marker)
        return missing

    def get_missing(self, cli: Cli) -> str | None:
        missing = self._missing_required(cli)
        if not missing:
            return None
        return f"( {' '.join(missing)} )"

    def add_to(self, parser: FlagParser, override: Requirement = Requirement.INHERIT) -> None:
        for child, child_override in self._child_overrides(override):
            child.add_to(parser, child_override)

    def validate(self, cli: Cli, override: Requirement = Requirement.INHERIT) -> None:
        missing = self._missing_required(cli)
        if missing and self.required:
            raise MissingRequiredGroupError(missing)

        child_overrides = sorted(
            self._child_overrides(override), key=lambda pair: not pair[0].required
        )
        for child, child_override in child_overrides:
            child.validate(cli, child_override)
        self.run_validators(cli)

    def generate_usage(self, force: bool = False) -> str | None:
        if not force and not self.required:
            return None
        required_usages = []
        for child in self.required_children:
            usage = child.generate_usage(True)
            if usage:
                required_usages.append(usage)
        optional_usages = []
        for child in self.optional_children:
            usage = child.generate_usage(True)
            if usage:
                optional_usages.append(f"[ {usage} ]")

        required_group = " , ".join(required_usages)
        optional_group = " , ".join(optional_usages)
        if not required_group and not optional_group:
            return None
        if not required_group:
            return f"({optional_group} )"
        if not optional_group:
            return f"({required_group} )"
        return f"({required_group} {optional_group} )"


class GroupOption(CompositeOptionBuilder):
    """Builder for a group of options that are required together."""

    minimum_children = 1
    label = "group"

    def set_required(self, required: bool) -> GroupOption:
        self.required = required
        return self

    def build(self) -> GroupCliOption:
        return GroupCliOption(
            required=self.required,
            validators=tuple(self.validators),
            children=self.build_children(),
        )

    def __repr__(self) -> str:
        return f"GroupOption(choices={len(self.children)}, required={self.required})"
