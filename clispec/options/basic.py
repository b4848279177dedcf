# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the single option leaf of an option tree.

`BasicOption` is the builder: it names the flag, says whether it takes a
value, and configures the setter that consumes the value once the whole
command line has validated. `build()` freezes it into a `BasicCliOption`.

Example:
    option("count", arg_name="n").set_to_int(config.set_count, lambda n: n > 0)
    option("verbose", is_flag=True).setter(lambda _: config.enable_verbose())
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any, Callable, Iterator

from clispec.cli import Cli
from clispec.coercion import get_converter
from clispec.exceptions import (
    CliValidationError,
    ConversionFailedError,
    MissingRequiredOptionError,
    ValidationFailedError,
)
from clispec.logger import logger
from clispec.options.base import CliOption, CliOptionBuilder, Requirement
from clispec.parser.flag_parser import FlagDefinition, FlagParser

Converter = Callable[[Any], Any]
Consumer = Callable[[Any], Any]
ValuePredicate = Callable[[Any], bool]


def _identity(value: Any) -> Any:
    return value


def _no_op(_: Any) -> None:
    pass


@dataclass(frozen=True, kw_only=True)
class BasicCliOption(CliOption):
    """
    Runtime leaf wrapping one named flag.

    Attributes:
        definition (FlagDefinition): The flag as registered by default. Its
            `required` value is replaced by the override passed to `add_to`.
        converter (Callable): Turns the raw string into the setter's type.
        consumer (Callable): Receives the converted value.
        value_validator (Callable | None): Optional predicate on the
            converted value, checked before the consumer runs.
    """

    definition: FlagDefinition
    converter: Converter = _identity
    consumer: Consumer = _no_op
    value_validator: ValuePredicate | None = None

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def has_arg(self) -> bool:
        return self.definition.has_arg

    def is_present(self, cli: Cli) -> bool:
        return cli.has_option(self.name)

    def get_missing(self, cli: Cli) -> str | None:
        if self.is_present(cli):
            return None
        return f"-{self.name}"

    def get_seen_list(self, cli: Cli) -> list[str]:
        if self.is_present(cli):
            return [self.name]
        return []

    def add_to(self, parser: FlagParser, override: Requirement = Requirement.INHERIT) -> None:
        parser.register(
            dataclasses.replace(self.definition, required=override.resolve(self.required))
        )

    def validate(self, cli: Cli, override: Requirement = Requirement.INHERIT) -> None:
        if not self.is_present(cli):
            if override.resolve(self.required):
                raise MissingRequiredOptionError(self.name)
            return
        self.run_validators(cli)

    def collect_callbacks(self, cli: Cli) -> list[Callable[[], None]]:
        if not self.is_present(cli):
            return []
        raw_value = cli.get_option_value(self.name)
        try:
            value = self.converter(raw_value)
        except CliValidationError:
            raise
        except Exception as error:
            raise ConversionFailedError(
                f"Invalid value {raw_value!r} for -{self.name}: {error}"
            ) from error

        if self.value_validator is not None:
            try:
                passed = self.value_validator(value)
            except CliValidationError:
                raise
            except Exception as error:
                raise ValidationFailedError(str(error)) from error
            if not passed:
                raise ValidationFailedError(
                    f"-{self.name}: setter did not pass validation test"
                )
        return [partial(self._consume, value)]

    def _consume(self, value: Any) -> None:
        logger.debug("Firing setter for -%s", self.name)
        try:
            self.consumer(value)
        except CliValidationError:
            raise
        except Exception as error:
            raise ValidationFailedError(str(error)) from error

    def generate_usage(self, force: bool = False) -> str | None:
        if not force and not self.required:
            return None
        usage = f"-{self.name}"
        if self.has_arg and self.definition.arg_name:
            usage = f"{usage} <{self.definition.arg_name}>"
        return usage

    def iter_leaves(self) -> Iterator[BasicCliOption]:
        yield self


class BasicOption(CliOptionBuilder):
    """
    Builder for a single option.

    Args:
        name (str): Short option name, used as `-name` on the command line and
            as the key of the parsed `Cli`.
        long_name (str | None): Optional `--long_name` alias.
        description (str): Help text.
        arg_name (str | None): Placeholder for the value in usage text.
        is_flag (bool): True for a boolean flag that takes no value.
        required (bool): True if the option must be supplied.
    """

    def __init__(
        self,
        name: str,
        *,
        long_name: str | None = None,
        description: str = "",
        arg_name: str | None = None,
        is_flag: bool = False,
        required: bool = False,
    ) -> None:
        super().__init__()
        if not isinstance(name, str) or not name:
            raise TypeError("option name must be a non-empty string")
        if name.startswith("-"):
            raise ValueError(f"option name '{name}' must not start with '-'")
        self.name: str = name
        self.long_name: str | None = long_name
        self.description: str = description
        self.arg_name: str | None = arg_name
        self.is_flag: bool = is_flag
        self.required = required
        self._converter: Converter = _identity
        self._consumer: Consumer = _no_op
        self._value_validator: ValuePredicate | None = None

    def set_required(self, required: bool) -> BasicOption:
        self.required = required
        return self

    def set_long_name(self, long_name: str) -> BasicOption:
        self.long_name = long_name
        return self

    def set_description(self, description: str) -> BasicOption:
        if description is None:
            raise TypeError("description can not be None")
        self.description = description
        return self

    def set_arg_name(self, arg_name: str) -> BasicOption:
        self.arg_name = arg_name
        return self

    def set_flag(self, is_flag: bool = True) -> BasicOption:
        self.is_flag = is_flag
        return self

    def setter(
        self,
        consumer: Consumer,
        converter: Converter | None = None,
        validator: ValuePredicate | None = None,
    ) -> BasicOption:
        """
        Set the callback fired with this option's value after validation.

        Args:
            consumer (Callable): Receives the (converted) value.
            converter (Callable | None): Converts the raw string first.
                Defaults to identity.
            validator (Callable | None): Predicate over the converted value.
        """
        if not callable(consumer):
            raise TypeError("setter consumer must be callable")
        self._consumer = consumer
        self._converter = converter or _identity
        self._value_validator = validator
        return self

    def set_to(
        self,
        target_type: Any,
        consumer: Consumer,
        validator: ValuePredicate | None = None,
    ) -> BasicOption:
        """Set a callback that receives the value coerced to `target_type`."""
        return self.setter(consumer, get_converter(target_type), validator)

    def set_to_int(
        self, consumer: Callable[[int], Any], validator: ValuePredicate | None = None
    ) -> BasicOption:
        return self.setter(consumer, int, validator)

    def set_to_float(
        self, consumer: Callable[[float], Any], validator: ValuePredicate | None = None
    ) -> BasicOption:
        return self.setter(consumer, float, validator)

    def set_to_file(
        self, consumer: Callable[[Path], Any], validator: ValuePredicate | None = None
    ) -> BasicOption:
        return self.setter(consumer, Path, validator)

    def to_definition(self) -> FlagDefinition:
        return FlagDefinition(
            name=self.name,
            has_arg=not self.is_flag,
            required=self.required,
            long_name=self.long_name,
            arg_name=self.arg_name,
            description=self.description,
        )

    def build(self) -> BasicCliOption:
        return BasicCliOption(
            required=self.required,
            validators=tuple(self.validators),
            definition=self.to_definition(),
            converter=self._converter,
            consumer=self._consumer,
            value_validator=self._value_validator,
        )

    def __repr__(self) -> str:
        return f"BasicOption(name={self.name!r}, required={self.required})"
