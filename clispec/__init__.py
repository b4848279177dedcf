"""
Clispec CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .cli import Cli
from .exceptions import (
    CliValidationError,
    ClispecError,
    ConversionFailedError,
    ErrorKind,
    InvalidSpecificationError,
    MissingRequiredChoiceError,
    MissingRequiredGroupError,
    MissingRequiredOptionError,
    ParseFailedError,
    TooManyChoicesError,
    ValidationFailedError,
)
from .signals import HelpSignal
from .specification import (
    CliSpecification,
    UsageExample,
    at_least_one_of,
    group,
    option,
    radio,
)
from .validators import CliValidator

__all__ = [
    "Cli",
    "CliSpecification",
    "CliValidationError",
    "CliValidator",
    "ClispecError",
    "ConversionFailedError",
    "ErrorKind",
    "HelpSignal",
    "InvalidSpecificationError",
    "MissingRequiredChoiceError",
    "MissingRequiredGroupError",
    "MissingRequiredOptionError",
    "ParseFailedError",
    "TooManyChoicesError",
    "UsageExample",
    "ValidationFailedError",
    "at_least_one_of",
    "group",
    "option",
    "radio",
]
