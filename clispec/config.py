# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader that builds a `CliSpecification` from YAML or TOML.

Example (YAML):
    program: sync
    description: Synchronize a file.
    options:
      - option: path
        arg_name: file
        required: true
        type: path
        setter: myapp.settings.set_path
      - radio:
          required: true
          options:
            - option: fast
              flag: true
            - option: slow
              flag: true
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Literal

import toml
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from clispec.importer import resolve_callable
from clispec.logger import logger
from clispec.options.base import CliOptionBuilder
from clispec.options.basic import BasicOption
from clispec.specification import (
    CliSpecification,
    at_least_one_of,
    group,
    option,
    radio,
)
from clispec.validators import choices_validator, int_range_validator

TYPE_MAP: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "path": Path,
    "datetime": datetime,
}

COMPOSITE_KINDS = {
    "group": group,
    "radio": radio,
    "at_least_one_of": at_least_one_of,
}


class RawOption(BaseModel):
    """Raw single option model."""

    option: str
    long_name: str | None = None
    description: str = ""
    arg_name: str | None = None
    flag: bool = False
    required: bool = False
    type: Literal["str", "int", "float", "bool", "path", "datetime"] = "str"
    setter: str | None = None
    choices: list[str] | None = None
    range: tuple[int, int] | None = None

    @field_validator("option")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value or value.startswith("-"):
            raise ValueError("option name must be non-empty and must not start with '-'")
        return value

    @model_validator(mode="after")
    def validate_range(self) -> RawOption:
        if self.range and self.range[0] > self.range[1]:
            raise ValueError("range minimum must not exceed maximum")
        return self

    def to_builder(self) -> BasicOption:
        builder = option(
            self.option,
            long_name=self.long_name,
            description=self.description,
            arg_name=self.arg_name,
            is_flag=self.flag,
            required=self.required,
        )
        if self.setter:
            builder.set_to(TYPE_MAP[self.type], resolve_callable(self.setter))
        if self.choices:
            builder.add_validator(choices_validator(self.option, self.choices))
        if self.range:
            builder.add_validator(int_range_validator(self.option, *self.range))
        return builder


class RawComposite(BaseModel):
    """Raw group, radio or at-least-one-of model."""

    options: list[dict[str, Any]]
    required: bool = False


class RawExample(BaseModel):
    usage: str
    description: str


def convert_option(entry: dict[str, Any]) -> CliOptionBuilder:
    """Convert one raw option entry, recursing into composites."""
    if not isinstance(entry, dict):
        raise ValueError(f"Option entry must be a dictionary, got: {entry!r}")
    if "option" in entry:
        return RawOption(**entry).to_builder()

    kinds = [kind for kind in COMPOSITE_KINDS if kind in entry]
    if len(kinds) != 1 or len(entry) != 1:
        raise ValueError(
            "Option entry must have an 'option' key or exactly one of "
            f"{sorted(COMPOSITE_KINDS)}, got keys: {sorted(entry)}"
        )
    kind = kinds[0]
    if not isinstance(entry[kind], dict):
        raise ValueError(
            f"'{kind}' entry must be a dictionary with an 'options' list, "
            f"got: {entry[kind]!r}"
        )
    raw_composite = RawComposite(**entry[kind])
    builder = COMPOSITE_KINDS[kind](*convert_options(raw_composite.options))
    builder.set_required(raw_composite.required)
    return builder


def convert_options(raw_options: list[dict[str, Any]]) -> list[CliOptionBuilder]:
    return [convert_option(entry) for entry in raw_options]


class SpecificationConfig(BaseModel):
    """Specification configuration model."""

    program: str | None = None
    description: str = ""
    footer: str = ""
    add_help: bool = True
    examples: list[RawExample] = Field(default_factory=list)
    options: list[dict[str, Any]]

    @field_validator("options")
    @classmethod
    def validate_options(cls, value: list[dict[str, Any]]) -> list[dict[str, Any]]:
        if not value:
            raise ValueError("A specification needs at least one option.")
        return value

    def to_specification(self) -> CliSpecification:
        return CliSpecification.create(
            *convert_options(self.options),
            program=self.program,
            help_text=self.description,
            help_epilog=self.footer,
            examples=[(example.usage, example.description) for example in self.examples],
            add_help=self.add_help,
        )


def loader(file_path: Path | str) -> CliSpecification:
    """
    Load a specification from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the config file (YAML or TOML).

    Returns:
        CliSpecification: The built specification.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file format is unsupported or the content is invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict):
        raise ValueError(
            "Configuration file must contain a dictionary with a list of options.\n"
            "Example:\n"
            "program: 'tool'\n"
            "options:\n"
            "  - option: 'path'\n"
            "    required: true"
        )

    logger.debug("Loading specification from %s", path)
    return SpecificationConfig(**raw_config).to_specification()
