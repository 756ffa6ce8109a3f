# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Token helpers and value coercion for Arbor argument parsing.

Flag declarations (`value_flag(type=...)`) and typed acceptance functions
(`accept_typed(...)`) turn raw command-line text into Python values with
`coerce_value`. Supported targets:

- `bool`, with the usual spellings (`true/false`, `yes/no`, `on/off`, `1/0`, ...)
- `Enum` subclasses, matched by member name or by value
- `Literal[...]`, matched exactly
- `Union[...]` / `X | Y`, trying each member in order
- `datetime`, parsed with python-dateutil
- any other callable, applied to the text (`int`, `float`, `Path`, ...)

Every failure surfaces as `ValueError` (or whatever the plain callable raises).
"""
import types
from datetime import datetime
from enum import Enum, EnumMeta
from typing import Any, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

SHORT_FLAG_PREFIX = "-"
LONG_FLAG_PREFIX = "--"

TRUE_WORDS = frozenset({"true", "t", "1", "yes", "y", "on"})
FALSE_WORDS = frozenset({"false", "f", "0", "no", "n", "off"})


def is_flag_token(token: str) -> bool:
    """Return True if the token starts with a dash.

    Dash-prefixed tokens, negative numbers included, always introduce a flag.
    """
    return token.startswith(SHORT_FLAG_PREFIX)


def coerce_bool(value: str | bool) -> bool:
    """
    Convert a string to a boolean.

    Raises:
        ValueError: If the string is not a recognized boolean spelling.
    """
    if isinstance(value, bool):
        return value
    word = value.strip().lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    raise ValueError(f"'{value}' is not a valid boolean")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Enum:
    """
    Resolve `value` to a member of `enum_type`.

    Member names are tried first, then values (after converting `value` to the type
    of the enum's values).
    """
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str) and value in enum_type.__members__:
        return enum_type.__members__[value]

    value_type = type(next(iter(enum_type)).value)
    try:
        return enum_type(value_type(value))
    except (ValueError, TypeError):
        choices = ", ".join(str(member.value) for member in enum_type)
        raise ValueError(f"'{value}' should be one of {{{choices}}}") from None


def _coerce_union(value: str, members: tuple[Any, ...]) -> Any:
    for member in members:
        try:
            return coerce_value(value, member)
        except Exception:
            continue
    raise ValueError(f"Value '{value}' could not be coerced to any of {members}")


def _coerce_datetime(value: str) -> datetime:
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as error:
        raise ValueError(f"Value '{value}' could not be parsed as a datetime") from error


def coerce_value(value: str, target_type: Any) -> Any:
    """
    Convert command-line text to `target_type`.

    Args:
        value (str): The text to convert.
        target_type (Any): A type, typing construct or callable.

    Returns:
        Any: The converted value.

    Raises:
        ValueError: If the text is not valid for the target.
    """
    origin = get_origin(target_type)
    if origin is Literal:
        if value not in get_args(target_type):
            raise ValueError(f"Value '{value}' is not a valid literal for type {target_type}")
        return value
    if origin is Union or isinstance(target_type, types.UnionType):
        return _coerce_union(value, get_args(target_type))
    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)
    if target_type is bool:
        return coerce_bool(value)
    if target_type is datetime:
        return _coerce_datetime(value)
    return target_type(value)


def type_name(target_type: Any) -> str:
    """Return a short readable name for a coercion target."""
    name = getattr(target_type, "__name__", None)
    if name and get_origin(target_type) is None:
        return name.lower()
    return str(target_type).replace("typing.", "").lower()
