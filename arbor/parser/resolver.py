# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Resolves a command line against a tree of commands into an `ExecutionPlan`.

Resolution is depth-first. The first token names a root command. Every level:

1. consumes leading flags,
2. if the command has sub-commands and the next token names one, resolves the
   sub-command first (its record is pushed before the parent's) and consumes the
   flags it hands back,
3. takes the positional prefix (tokens up to the next `-` token) and lets the
   arity resolver decide how many of them the command keeps,
4. consumes the flags that follow,
5. resets the flags that were not given and pushes an `ExecutionRecord`.

Flags a level does not declare but an enclosing command does are set aside and
handed back ahead of the tokens the level did not consume, so the enclosing command
sees them wherever they appeared. Whatever is left after the root command is an
error; an undeclared flag is only reported there.

Errors keep their type and gain context on the way out, for example
`in command 'remote': in sub-command 'add': too few arguments: expected at least 2,
got 1`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Sequence

from arbor.exceptions import (
    ArborError,
    CommandNotFoundError,
    ExtraArgumentsError,
    NoArgumentsError,
    UnknownFlagError,
    UnknownSubCommandError,
)
from arbor.logger import logger
from arbor.parser.arity import resolve_arity
from arbor.parser.flag_parser import FlagParser
from arbor.parser.flag_table import FlagTable
from arbor.parser.parser_types import ExecutionPlan, ExecutionRecord
from arbor.parser.utils import is_flag_token

if TYPE_CHECKING:
    from arbor.command import Command


class CommandResolver:
    """
    Resolves token lists against a set of root commands.

    A resolver writes into the flag tables of the commands it visits. Callers that
    share a command tree between threads must serialize calls to `resolve()`;
    `Program.parse` does this with a lock.

    Args:
        commands (Mapping[str, Command]): Root commands keyed by name.
    """

    def __init__(self, commands: Mapping[str, Command]) -> None:
        self.commands = commands
        self._stalled: tuple[str, str] | None = None

    def resolve(self, tokens: Sequence[str]) -> ExecutionPlan:
        """
        Build the execution plan for `tokens`.

        Raises:
            ArborError: Any resolution error, with its command context attached.
        """
        if not tokens:
            raise NoArgumentsError()

        name, rest = tokens[0], list(tokens[1:])
        command = self.commands.get(name)
        if command is None:
            raise CommandNotFoundError(name)

        self._stalled = None
        plan = ExecutionPlan()
        try:
            remaining = self._resolve_level(command, rest, plan)
            if remaining:
                raise self._leftover_error(remaining)
        except ArborError as error:
            error.add_context(f"in command '{command.name}'")
            raise
        logger.debug("Resolved %s into %s", list(tokens), plan)
        return plan

    def _resolve_level(
        self,
        command: Command,
        tokens: list[str],
        plan: ExecutionPlan,
        outer: tuple[FlagTable, ...] = (),
    ) -> list[str]:
        flag_parser = FlagParser(command.flags, outer)
        remaining = flag_parser.consume(tokens)

        if command.subcommands and remaining and not is_flag_token(remaining[0]):
            subcommand = command.get_subcommand(remaining[0])
            if subcommand is not None:
                try:
                    remaining = self._resolve_level(
                        subcommand, remaining[1:], plan, (command.flags, *outer)
                    )
                except ArborError as error:
                    error.add_context(f"in sub-command '{subcommand.name}'")
                    raise
                remaining = flag_parser.consume(remaining)
            elif self._stalled is None:
                self._stalled = (remaining[0], command.name)

        split = len(remaining)
        for index, token in enumerate(remaining):
            if is_flag_token(token):
                split = index
                break
        arity = resolve_arity(command.argument, remaining[:split])
        remaining = flag_parser.consume(remaining[arity.consumed :])
        flag_parser.finish()
        remaining = flag_parser.deferred + remaining

        record = ExecutionRecord(
            command=command,
            tokens=arity.tokens,
            data=arity.data,
            flags=command.flags.snapshot(),
        )
        plan.push(record)
        logger.debug("Resolved %s, %d token(s) left", record, len(remaining))
        return remaining

    def _leftover_error(self, remaining: list[str]) -> ArborError:
        first = remaining[0]
        if is_flag_token(first):
            return UnknownFlagError(first.partition("=")[0])
        if self._stalled is not None and self._stalled[0] == first:
            return UnknownSubCommandError(first, self._stalled[1])
        return ExtraArgumentsError(remaining)


def resolve(commands: Mapping[str, Command], tokens: Sequence[str]) -> ExecutionPlan:
    """Resolve `tokens` against `commands` into an `ExecutionPlan`."""
    return CommandResolver(commands).resolve(tokens)
