# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Flag` dataclass used by `FlagTable` and `FlagParser` to represent a
single named option of a command.

A flag is either boolean (`takes_value=False`: present means `True`, absent means
`False`) or value-taking (`takes_value=True`: the value text is run through the
flag's `parse` function). The value type is fixed when the flag is declared, through
`bool_flag()` or `value_flag(type=...)`, so the parser never has to inspect it.

`Flag.value` is the mutable slot the parser writes to. It is reset to the default at
the end of every parse in which the flag does not appear.

Key Attributes:
- `long_name`: Name used as `--long-name` (stored without dashes).
- `short_name`: Optional single letter used as `-x`.
- `takes_value`: Whether the flag consumes a value.
- `default`: Value used when the flag is absent.
- `parse`: Converts the value text into the flag's value type.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Generic, TypeVar

from arbor.exceptions import FlagDefinitionError
from arbor.parser.utils import LONG_FLAG_PREFIX, SHORT_FLAG_PREFIX, coerce_value, type_name

T = TypeVar("T")


@dataclass(eq=False)
class Flag(Generic[T]):
    """
    Represents a command flag.

    Attributes:
        long_name (str): The long name, without the leading `--`.
        short_name (str | None): Optional single-character short name.
        takes_value (bool): True if the flag requires a value, False for boolean flags.
        default (T | None): The value when the flag is absent. Always False for
            boolean flags.
        parse (Callable[[str], T] | None): Converts value text. Defaults to `str`
            for value flags.
        help (str): Help text for the flag.
        metavar (str): Placeholder shown in usage text for value flags.
        value (T | None): The value from the last parse. Do not set this directly.
    """

    long_name: str
    short_name: str | None = None
    takes_value: bool = False
    default: T | None = None
    parse: Callable[[str], T] | None = None
    help: str = ""
    metavar: str = ""
    value: T | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.long_name = self._fix_long_name(self.long_name)
        self.short_name = self._fix_short_name(self.short_name)
        self.help = self.help.strip()
        if self.takes_value:
            if self.parse is None:
                self.parse = str  # type: ignore[assignment]
            elif not callable(self.parse):
                raise FlagDefinitionError(
                    f"parse for flag '--{self.long_name}' must be callable"
                )
            self.metavar = self.metavar.strip() or self.long_name.upper()
        else:
            if self.default not in (None, False):
                raise FlagDefinitionError(
                    f"Boolean flag '--{self.long_name}' cannot have a default value"
                )
            if self.parse is not None:
                raise FlagDefinitionError(
                    f"Boolean flag '--{self.long_name}' does not take a parse function"
                )
            self.default = False  # type: ignore[assignment]
        self.reset()

    @staticmethod
    def _fix_long_name(long_name: str) -> str:
        if not isinstance(long_name, str):
            raise FlagDefinitionError(f"Flag name '{long_name}' must be a string")
        name = long_name.strip()
        if name.startswith(LONG_FLAG_PREFIX):
            name = name[len(LONG_FLAG_PREFIX) :]
        if not name:
            raise FlagDefinitionError("Flag long name cannot be empty")
        if name.startswith(SHORT_FLAG_PREFIX) or "=" in name or any(
            char.isspace() for char in name
        ):
            raise FlagDefinitionError(f"Invalid flag long name '{long_name}'")
        return name

    @staticmethod
    def _fix_short_name(short_name: str | None) -> str | None:
        if short_name is None:
            return None
        if not isinstance(short_name, str):
            raise FlagDefinitionError(f"Flag short name '{short_name}' must be a string")
        name = short_name.strip()
        if name.startswith(SHORT_FLAG_PREFIX) and len(name) == 2:
            name = name[1:]
        if len(name) != 1 or name in (SHORT_FLAG_PREFIX, "="):
            raise FlagDefinitionError(
                f"Flag short name '{short_name}' must be a single character"
            )
        return name

    @property
    def long_flag(self) -> str:
        return f"{LONG_FLAG_PREFIX}{self.long_name}"

    @property
    def short_flag(self) -> str | None:
        if self.short_name is None:
            return None
        return f"{SHORT_FLAG_PREFIX}{self.short_name}"

    @property
    def flags(self) -> tuple[str, ...]:
        """All spellings of the flag, short first."""
        if self.short_flag:
            return (self.short_flag, self.long_flag)
        return (self.long_flag,)

    def reset(self) -> None:
        """Put the flag back to its default value."""
        self.value = self.default

    def set_present(self) -> None:
        """Mark a boolean flag as given."""
        self.value = True  # type: ignore[assignment]

    def set_from_text(self, text: str) -> None:
        """Parse `text` into the flag's value. Parse errors propagate unchanged."""
        if self.parse is None:
            raise FlagDefinitionError(f"flag {self.long_flag} does not take a value")
        self.value = self.parse(text)

    def get_usage_text(self) -> str:
        """Usage fragment like `[-v|--verbose]` or `[--count=COUNT]`."""
        spelling = "|".join(self.flags)
        if self.takes_value:
            return f"[{spelling}={self.metavar}]"
        return f"[{spelling}]"

    def __str__(self) -> str:
        return (
            f"Flag(long_name='{self.long_name}', short_name={self.short_name!r}, "
            f"takes_value={self.takes_value}, default={self.default!r})"
        )


def bool_flag(long_name: str, short_name: str | None = None, help: str = "") -> Flag[bool]:
    """Declare a boolean flag."""
    return Flag(long_name=long_name, short_name=short_name, help=help)


def value_flag(
    long_name: str,
    short_name: str | None = None,
    *,
    type: Any = str,
    default: Any = None,
    parse: Callable[[str], Any] | None = None,
    help: str = "",
    metavar: str = "",
) -> Flag[Any]:
    """
    Declare a value-taking flag.

    The parse function is `parse` if given, otherwise `coerce_value` bound to `type`.
    A string default is coerced up front so a bad default fails at declaration.
    """
    if parse is None:
        parse = partial(coerce_value, target_type=type)
        if isinstance(default, str) and type is not str:
            try:
                default = parse(default)
            except Exception as error:
                raise FlagDefinitionError(
                    f"Default value {default!r} for '--{long_name}' cannot be coerced "
                    f"to {type_name(type)}: {error}"
                ) from error
        metavar = metavar or type_name(type).upper()
    return Flag(
        long_name=long_name,
        short_name=short_name,
        takes_value=True,
        default=default,
        parse=parse,
        help=help,
        metavar=metavar,
    )
