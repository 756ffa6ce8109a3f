# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `FlagTable`, the set of flags declared by one command.

Flags are keyed by long name, with a second index from short letter to flag so the
parser can resolve `-v` as quickly as `--verbose`. Name conflicts are rejected when a
flag is registered, so a table that was built without errors can always be parsed.

A table owns the value slots of its flags. `snapshot()` copies those values into a
read-only mapping that outlives the next parse.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping

from arbor.exceptions import FlagConflictError
from arbor.parser.flag import Flag, bool_flag, value_flag


class FlagTable:
    """Flags of one command, in declaration order."""

    def __init__(self, flags: list[Flag] | None = None) -> None:
        self._flags: dict[str, Flag] = {}
        self._short: dict[str, Flag] = {}
        for flag in flags or []:
            self.add(flag)

    def add(self, flag: Flag) -> Flag:
        """
        Register a flag.

        Raises:
            FlagConflictError: If its long or short name is already registered.
        """
        if flag.long_name in self._flags:
            raise FlagConflictError(f"Flag '--{flag.long_name}' is already registered")
        if flag.short_name is not None and flag.short_name in self._short:
            existing = self._short[flag.short_name]
            raise FlagConflictError(
                f"Short flag '-{flag.short_name}' for '--{flag.long_name}' is already "
                f"used by '--{existing.long_name}'"
            )
        self._flags[flag.long_name] = flag
        if flag.short_name is not None:
            self._short[flag.short_name] = flag
        return flag

    def add_flag(
        self,
        long_name: str,
        short_name: str | None = None,
        *,
        takes_value: bool = False,
        type: Any = str,
        default: Any = None,
        parse: Callable[[str], Any] | None = None,
        help: str = "",
        metavar: str = "",
    ) -> Flag:
        """Declare and register a flag in one step."""
        if takes_value:
            flag = value_flag(
                long_name,
                short_name,
                type=type,
                default=default,
                parse=parse,
                help=help,
                metavar=metavar,
            )
        else:
            flag = bool_flag(long_name, short_name, help=help)
        return self.add(flag)

    def get(self, long_name: str) -> Flag | None:
        return self._flags.get(long_name)

    def get_short(self, letter: str) -> Flag | None:
        return self._short.get(letter)

    def reset(self) -> None:
        for flag in self._flags.values():
            flag.reset()

    def values(self) -> dict[str, Any]:
        return {name: flag.value for name, flag in self._flags.items()}

    def snapshot(self) -> Mapping[str, Any]:
        """Read-only copy of the current flag values keyed by long name."""
        return MappingProxyType(self.values())

    def __contains__(self, long_name: object) -> bool:
        return long_name in self._flags

    def __iter__(self) -> Iterator[Flag]:
        return iter(self._flags.values())

    def __len__(self) -> int:
        return len(self._flags)

    def __bool__(self) -> bool:
        return bool(self._flags)

    def __str__(self) -> str:
        return f"FlagTable({', '.join(flag.long_flag for flag in self)})"

    def __repr__(self) -> str:
        return str(self)
