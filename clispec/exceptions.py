# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by clispec.

Two families exist. `InvalidSpecificationError` is raised while a specification
is being assembled (too few choices, duplicate flags, cyclic trees). Everything
raised while a command line is parsed, validated or consumed derives from
`CliValidationError` and carries an `ErrorKind` so callers can branch on the
failure without matching on message text.

Exception Hierarchy:
- ClispecError
    ├── InvalidSpecificationError
    └── CliValidationError
        ├── ParseFailedError
        ├── MissingRequiredOptionError
        ├── MissingRequiredGroupError
        ├── MissingRequiredChoiceError
        ├── TooManyChoicesError
        ├── ValidationFailedError
        └── ConversionFailedError

No error is retried internally. Any `CliValidationError` aborts the whole
`CliSpecification.parse()` call before a single callback runs.
"""
from enum import Enum


class ErrorKind(Enum):
    """Kinds of command line validation failures."""

    PARSE_FAILED = "parse_failed"
    MISSING_REQUIRED_OPTION = "missing_required_option"
    MISSING_REQUIRED_GROUP = "missing_required_group"
    MISSING_REQUIRED_CHOICE = "missing_required_choice"
    TOO_MANY_CHOICES = "too_many_choices"
    VALIDATION_FAILED = "validation_failed"
    CONVERSION_FAILED = "conversion_failed"

    def __str__(self) -> str:
        return self.value


class ClispecError(Exception):
    """Base exception for clispec."""


class InvalidSpecificationError(ClispecError):
    """Exception raised when an option tree is assembled incorrectly."""


class CliValidationError(ClispecError):
    """The supplied command line did not meet the rules of the specification."""

    kind: ErrorKind = ErrorKind.VALIDATION_FAILED

    def __init__(self, message: str, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def __str__(self) -> str:
        return self.message


class ParseFailedError(CliValidationError):
    """Exception raised when the flag parser rejects a token."""

    kind = ErrorKind.PARSE_FAILED


class MissingRequiredOptionError(CliValidationError):
    """Exception raised when a required option was not supplied."""

    kind = ErrorKind.MISSING_REQUIRED_OPTION

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is required")
        self.name = name


class MissingRequiredGroupError(CliValidationError):
    """Exception raised when a required group is missing some of its members."""

    kind = ErrorKind.MISSING_REQUIRED_GROUP

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"required group was not found require ( {','.join(missing)} )")
        self.missing = missing


class MissingRequiredChoiceError(CliValidationError):
    """Exception raised when a required radio or at-least-one-of has no selection."""

    kind = ErrorKind.MISSING_REQUIRED_CHOICE


class TooManyChoicesError(CliValidationError):
    """Exception raised when more than one radio choice was selected."""

    kind = ErrorKind.TOO_MANY_CHOICES

    def __init__(self, seen: list[str]) -> None:
        super().__init__(
            f"Radio option must only select at most 1 choice but found [{', '.join(seen)}]"
        )
        self.seen = seen


class ValidationFailedError(CliValidationError):
    """Exception raised when a validation rule or setter rejected the input."""

    kind = ErrorKind.VALIDATION_FAILED


class ConversionFailedError(CliValidationError):
    """Exception raised when an option value could not be converted."""

    kind = ErrorKind.CONVERSION_FAILED
