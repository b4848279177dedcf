# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Base classes shared by every option node.

An option tree is declared with mutable builders and frozen into immutable
runtime nodes by `build()`. Runtime nodes are frozen dataclasses: they keep no
per-parse state, so a built tree can serve any number of `parse()` calls.

Key Components:
- `Requirement`: Tri-state override propagated down the tree while
  registering flags and validating (inherit, force required, force optional).
- `CliOptionBuilder`: Mutable configuration for one node.
- `CliOption`: Immutable runtime node; every variant implements presence,
  missing/seen reporting, registration, validation, callbacks and usage.
- `CompositeCliOption`: Runtime base for nodes with children.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterator, Sequence

from clispec.cli import Cli
from clispec.exceptions import InvalidSpecificationError
from clispec.validators import CliValidator, ErrorMessage, ValidationRule

if TYPE_CHECKING:
    from clispec.options.basic import BasicCliOption
    from clispec.parser.flag_parser import FlagParser


class Requirement(Enum):
    """
    Requirement override handed from a parent node to its children.

    INHERIT keeps the child's own `required` flag, REQUIRED and OPTIONAL
    replace it.
    """

    INHERIT = "inherit"
    REQUIRED = "required"
    OPTIONAL = "optional"

    @classmethod
    def of(cls, required: bool) -> Requirement:
        return cls.REQUIRED if required else cls.OPTIONAL

    def resolve(self, default: bool) -> bool:
        """Return the effective requiredness given a node's own flag."""
        if self is Requirement.INHERIT:
            return default
        return self is Requirement.REQUIRED


class CliOptionBuilder(ABC):
    """
    Mutable configuration for an option node.

    Builders are not thread safe. Call `build()` once configuration is done.
    """

    def __init__(self) -> None:
        self.required: bool = False
        self.validators: list[CliValidator] = []

    @property
    def children(self) -> Sequence[CliOptionBuilder]:
        return ()

    def set_required(self, required: bool) -> CliOptionBuilder:
        """Is this option required. If never called, the option is optional."""
        self.required = required
        return self

    def add_validation(
        self, validation_rule: ValidationRule, error_message: ErrorMessage
    ) -> CliOptionBuilder:
        """
        Add a validation rule evaluated after this node's structural checks.

        Args:
            validation_rule (Callable[[Cli], bool]): Returns True if the parsed
                command line passes the rule.
            error_message (str | Callable[[Cli], str]): Message of the
                `ValidationFailedError` raised when the rule returns False.
        """
        self.validators.append(CliValidator(validation_rule, error_message))
        return self

    def add_validator(self, validator: CliValidator) -> CliOptionBuilder:
        self.validators.append(validator)
        return self

    @abstractmethod
    def build(self) -> CliOption:
        """Freeze this builder into a runtime node."""


@dataclass(frozen=True, kw_only=True)
class CliOption(ABC):
    """Immutable runtime option node."""

    required: bool = False
    validators: tuple[CliValidator, ...] = ()

    @abstractmethod
    def is_present(self, cli: Cli) -> bool:
        """Structural presence of this node in the parsed command line."""

    @abstractmethod
    def get_missing(self, cli: Cli) -> str | None:
        """Render what is missing for this node to be present, or None."""

    @abstractmethod
    def get_seen_list(self, cli: Cli) -> list[str]:
        """Diagnostic list of what was seen under this node."""

    @abstractmethod
    def add_to(self, parser: FlagParser, override: Requirement = Requirement.INHERIT) -> None:
        """Register every leaf below this node with the flag parser."""

    @abstractmethod
    def validate(self, cli: Cli, override: Requirement = Requirement.INHERIT) -> None:
        """Raise a `CliValidationError` if the parsed command line breaks a rule."""

    @abstractmethod
    def collect_callbacks(self, cli: Cli) -> list[Callable[[], None]]:
        """Convert values of present leaves and return their pending callbacks."""

    @abstractmethod
    def generate_usage(self, force: bool = False) -> str | None:
        """Usage fragment, or None unless forced or required."""

    @abstractmethod
    def iter_leaves(self) -> Iterator[BasicCliOption]:
        """Yield every leaf below this node in tree order."""

    def fire_callback(self, cli: Cli) -> None:
        """
        Fire the callback of every present leaf in tree order.

        All values are converted before the first callback runs, so a
        conversion failure leaves every callback unfired.
        """
        for callback in self.collect_callbacks(cli):
            callback()

    def run_validators(self, cli: Cli) -> None:
        for validator in self.validators:
            validator.validate(cli)


@dataclass(frozen=True, kw_only=True)
class CompositeCliOption(CliOption):
    """Runtime base for option nodes that own child nodes."""

    children: tuple[CliOption, ...] = ()

    def get_seen_list(self, cli: Cli) -> list[str]:
        seen_list: list[str] = []
        for child in self.children:
            seen = child.get_seen_list(cli)
            if seen:
                seen_list.append(f"({','.join(seen)})")
        return seen_list

    def collect_callbacks(self, cli: Cli) -> list[Callable[[], None]]:
        callbacks: list[Callable[[], None]] = []
        for child in self.children:
            callbacks.extend(child.collect_callbacks(cli))
        return callbacks

    def iter_leaves(self) -> Iterator[BasicCliOption]:
        for child in self.children:
            yield from child.iter_leaves()

    def _any_present(self, cli: Cli) -> bool:
        return any(child.is_present(cli) for child in self.children)

    def _forced_usages(self) -> list[str]:
        usages = []
        for child in self.children:
            usage = child.generate_usage(True)
            if usage:
                usages.append(usage)
        return usages

    def _missing_markers(self, cli: Cli) -> list[str]:
        markers = []
        for child in self.children:
            missing = child.get_missing(cli)
            if missing:
                markers.append(missing)
        return markers


class CompositeOptionBuilder(CliOptionBuilder):
    """Builder base for option nodes that own child builders."""

    minimum_children: int = 1
    label: str = "composite"

    def __init__(self, *choices: CliOptionBuilder) -> None:
        super().__init__()
        self._choices: tuple[CliOptionBuilder, ...] = tuple(choices)
        if len(choices) < self.minimum_children:
            plural = "choice" if self.minimum_children == 1 else "choices"
            raise InvalidSpecificationError(
                f"{self.label} option requires at least {self.minimum_children} {plural}"
            )
        for choice in choices:
            if not isinstance(choice, CliOptionBuilder):
                raise TypeError(
                    f"Expected an option builder, got '{type(choice).__name__}'"
                )

    @property
    def children(self) -> Sequence[CliOptionBuilder]:
        return self._choices

    def build_children(self) -> tuple[CliOption, ...]:
        return tuple(choice.build() for choice in self._choices)
