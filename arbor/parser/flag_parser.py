# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Flag parsing for a single command level.

`FlagParser` consumes leading flag tokens against a `FlagTable`, writing values into
the table's flags and returning the tokens it did not consume. One parser instance
covers one parse of one command: it keeps a pending set of flags that have not been
seen yet, so a repeated flag is reported and the flags that never appeared can be
reset by `finish()`.

Supported syntax:
- `--name`, `--name=value`, `--name value`
- `-x`, `-x=value`, `-x value`
- `-xyz`, `-xyz=value`, `-xyz value` (merged short flags; only the last letter
  may take a value)

Consumption stops at the first token that does not start with `-`. A value flag
takes the next token whatever it looks like, so `--offset -42` works.

A standalone parser raises `UnknownFlagError` for a flag its table does not declare.
The resolver instead gives each level the flag tables of its enclosing commands
(`outer`, nearest first): a flag one of them declares is set aside in `deferred`,
with its value token, and parsing carries on; any other undeclared flag stops the
parse and is left at the front of the returned tokens.
"""
from __future__ import annotations

from typing import Sequence

from arbor.exceptions import (
    ExtraArgumentError,
    FlagMissingValueError,
    FlagValueError,
    InvalidMergedFlagsError,
    RepeatedFlagError,
    UnexpectedFlagValueError,
    UnknownFlagError,
)
from arbor.logger import logger
from arbor.parser.flag import Flag
from arbor.parser.flag_table import FlagTable
from arbor.parser.utils import LONG_FLAG_PREFIX, SHORT_FLAG_PREFIX


class FlagParser:
    """
    Consumes flag tokens for one command.

    Args:
        table (FlagTable): The command's declared flags.
        outer (Sequence[FlagTable] | None): Flag tables of the enclosing commands,
            nearest first. When given, undeclared flags are deferred or left
            unconsumed instead of raising.
    """

    def __init__(self, table: FlagTable, outer: Sequence[FlagTable] | None = None) -> None:
        self.table = table
        self.outer = outer
        self.pending: dict[str, Flag] = {flag.long_name: flag for flag in table}
        self.deferred: list[str] = []

    def consume(self, tokens: Sequence[str]) -> list[str]:
        """
        Consume leading flag tokens.

        Returns:
            list[str]: The tokens left after the flags, starting at the first token
            that does not look like a flag, or at an undeclared flag when `outer`
            is set.
        """
        remaining = list(tokens)
        while remaining and remaining[0].startswith(SHORT_FLAG_PREFIX):
            if self.outer is not None and not self._declares(remaining[0]):
                if not self._defer(remaining):
                    break
                continue
            token = remaining.pop(0)
            if token.startswith(LONG_FLAG_PREFIX):
                self._consume_long(token, remaining)
            else:
                self._consume_short(token, remaining)
        return remaining

    def finish(self) -> None:
        """Reset every flag that was not given to its default."""
        for flag in self.pending.values():
            flag.reset()
        self.pending.clear()

    @staticmethod
    def _lookup(table: FlagTable, token: str) -> Flag | None:
        """The flag of `table` that owns `token`; for clusters, the one taking its value."""
        if token.startswith(LONG_FLAG_PREFIX):
            name = token[len(LONG_FLAG_PREFIX) :].partition("=")[0]
            return table.get(name) if name else None
        letters = token[len(SHORT_FLAG_PREFIX) :].partition("=")[0]
        if not letters:
            return None
        first = table.get_short(letters[0])
        if first is None:
            return None
        return table.get_short(letters[-1]) or first

    def _declares(self, token: str) -> bool:
        return self._lookup(self.table, token) is not None

    def _defer(self, remaining: list[str]) -> bool:
        token = remaining[0]
        for table in self.outer or ():
            owner = self._lookup(table, token)
            if owner is not None:
                break
        else:
            return False
        self.deferred.append(remaining.pop(0))
        if owner.takes_value and "=" not in token and remaining:
            self.deferred.append(remaining.pop(0))
        logger.debug("Flag %s deferred to an enclosing command", token)
        return True

    def _claim(self, flag: Flag, label: str) -> None:
        if flag.long_name not in self.pending:
            raise RepeatedFlagError(label)
        del self.pending[flag.long_name]

    def _consume_long(self, token: str, remaining: list[str]) -> None:
        name, has_inline, inline = token[len(LONG_FLAG_PREFIX) :].partition("=")
        label = f"{LONG_FLAG_PREFIX}{name}"
        flag = self.table.get(name) if name else None
        if flag is None:
            raise UnknownFlagError(label if name else token)
        self._claim(flag, label)

        if not flag.takes_value:
            if has_inline:
                raise UnexpectedFlagValueError(label, inline)
            flag.set_present()
            logger.debug("Flag %s set", label)
            return
        self._assign(flag, label, inline if has_inline else None, remaining)

    def _consume_short(self, token: str, remaining: list[str]) -> None:
        letters, has_inline, inline = token[len(SHORT_FLAG_PREFIX) :].partition("=")
        if not letters:
            raise UnknownFlagError(token)

        if len(letters) == 1:
            label = f"{SHORT_FLAG_PREFIX}{letters}"
            flag = self.table.get_short(letters)
            if flag is None:
                raise UnknownFlagError(label)
            self._claim(flag, label)
        else:
            for letter in letters[:-1]:
                flag = self._merged_flag(token, letter)
                if flag.takes_value:
                    raise InvalidMergedFlagsError(
                        token, f"'-{letter}' takes a value and must come last"
                    )
                self._claim(flag, f"{SHORT_FLAG_PREFIX}{letter}")
                flag.set_present()
                logger.debug("Flag -%s set from %s", letter, token)
            label = f"{SHORT_FLAG_PREFIX}{letters[-1]}"
            flag = self._merged_flag(token, letters[-1])
            self._claim(flag, label)

        if not flag.takes_value:
            if has_inline and len(letters) == 1:
                raise UnexpectedFlagValueError(label, inline)
            if has_inline:
                raise ExtraArgumentError(label, inline)
            flag.set_present()
            logger.debug("Flag %s set", label)
            return
        self._assign(flag, label, inline if has_inline else None, remaining)

    def _merged_flag(self, token: str, letter: str) -> Flag:
        flag = self.table.get_short(letter)
        if flag is None:
            raise InvalidMergedFlagsError(token, f"unknown flag '-{letter}'")
        return flag

    def _assign(
        self, flag: Flag, label: str, inline: str | None, remaining: list[str]
    ) -> None:
        if inline is None:
            if not remaining:
                raise FlagMissingValueError(label)
            inline = remaining.pop(0)
        try:
            flag.set_from_text(inline)
        except Exception as error:
            raise FlagValueError(label, inline, error) from error
        logger.debug("Flag %s = %r", label, flag.value)


def parse_flags(table: FlagTable, tokens: Sequence[str]) -> list[str]:
    """
    Run one consume pass over `tokens` and reset the flags that were not given.

    Returns:
        list[str]: The unconsumed tokens.
    """
    parser = FlagParser(table)
    remaining = parser.consume(tokens)
    parser.finish()
    return remaining
