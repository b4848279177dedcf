# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Converts raw option strings into the types option setters expect.

Every option value reaches a setter as a string (or `None` for a boolean
flag). `BasicOption.set_to()` and the config loader use `get_converter()` to
turn that string into an `int`, `float`, `bool`, `Path`, `datetime`, `Enum`
member, `Literal` member, or the first member of a union that accepts it.

Functions:
- coerce_bool: Read a boolean from common truthy/falsy spellings.
- coerce_enum: Resolve an Enum member by name or by value.
- coerce_value: Convert to an arbitrary supported target type.
- get_converter: Bind `coerce_value` to one target type.
"""
import types
from datetime import datetime
from enum import EnumMeta
from functools import partial
from pathlib import Path
from typing import Any, Callable, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

TRUE_WORDS = frozenset({"true", "t", "1", "yes", "y", "on"})
FALSE_WORDS = frozenset({"false", "f", "0", "no", "n", "off"})


def coerce_bool(value: str | bool | None) -> bool:
    """
    Read a boolean from an option value.

    A flag without a value (`None`) counts as True. Unknown non-empty strings
    are truthy.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    word = value.strip().lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    return bool(word)


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Resolve `value` to a member of `enum_type`, by name first and by value second.

    Raises:
        ValueError: If no member matches.
    """
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str) and value in enum_type.__members__:
        return enum_type[value]

    member_type = type(next(iter(enum_type)).value)
    try:
        return enum_type(member_type(value))
    except (ValueError, TypeError):
        allowed = ", ".join(str(member.value) for member in enum_type)
        raise ValueError(f"'{value}' should be one of {{{allowed}}}") from None


def _coerce_union(value: str, members: tuple[Any, ...]) -> Any:
    for member in members:
        try:
            return coerce_value(value, member)
        except (ValueError, TypeError):
            continue
    raise ValueError(f"Value '{value}' could not be coerced to any of {members}")


def _coerce_datetime(value: str) -> datetime:
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as error:
        raise ValueError(f"Value '{value}' is not a recognizable date") from error


def coerce_value(value: str, target_type: Any) -> Any:
    """
    Convert `value` to `target_type`.

    Raises:
        ValueError: If the value does not fit the target type.
    """
    if get_origin(target_type) is Literal:
        allowed = get_args(target_type)
        if value not in allowed:
            raise ValueError(f"'{value}' is not one of {allowed}")
        return value
    if isinstance(target_type, types.UnionType) or get_origin(target_type) is Union:
        return _coerce_union(value, get_args(target_type))
    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)
    if target_type is bool:
        return coerce_bool(value)
    if target_type is datetime:
        return _coerce_datetime(value)
    if target_type is Path:
        return Path(value)
    return target_type(value)


def get_converter(target_type: Any) -> Callable[[str], Any]:
    """Return a one-argument converter for `target_type`."""
    return partial(coerce_value, target_type=target_type)
