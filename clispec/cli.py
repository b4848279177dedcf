# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Cli`, the read-only view of one parsed command line.

A `Cli` is produced by the flag parser for every `CliSpecification.parse()`
call and handed to option nodes, validators and callbacks. It answers two
questions: was a flag supplied, and what string value did it carry.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping


class Cli:
    """
    A parsed command line that lets the caller see which options were set
    and what their values are.

    Values are keyed by the short option name (without the leading dash).
    Boolean flags map to `None` when present, since they carry no value.
    """

    def __init__(self, values: Mapping[str, str | None]) -> None:
        self._values: Mapping[str, str | None] = MappingProxyType(dict(values))

    def has_option(self, name: str) -> bool:
        """Return True if the option was present on the command line."""
        return name in self._values

    def get_option_value(self, name: str) -> str | None:
        """Return the raw string value of an option, or None if absent or a flag."""
        return self._values.get(name)

    def help_requested(self) -> bool:
        """Return True if the caller registered and supplied `-h` or `-help`."""
        return "h" in self._values or "help" in self._values

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self):
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Cli({dict(self._values)!r})"
