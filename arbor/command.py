# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the Command class for Arbor CLI.

A Command is one node of a program's command tree. It declares:

- How many positional arguments it takes and how they are parsed (`ArgumentSpec`)
- The flags it accepts (`FlagTable`)
- Nested sub-commands, keyed by name
- A run behavior, sync or async, called with `(program, record)`

Commands are normalized when they are created: names and texts are trimmed, a
missing argument spec means the command takes no arguments, a missing run behavior
becomes a no-op and sync behaviors are wrapped to run on the event loop.
"""
from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from arbor.exceptions import CommandAlreadyExistsError
from arbor.logger import logger
from arbor.parser.argument import ArgumentSpec, no_arguments
from arbor.parser.flag import Flag
from arbor.parser.flag_table import FlagTable
from arbor.utils import _noop, ensure_async

if TYPE_CHECKING:
    from arbor.parser.parser_types import ExecutionRecord
    from arbor.program import Program


class Command(BaseModel):
    """
    Represents a command or sub-command of an Arbor program.

    Attributes:
        name (str): The word that selects the command on the command line.
        brief (str): One-line summary shown in command listings.
        usage (str): Usage line. Derived from the arguments and flags if empty.
        description (str): Longer help text.
        argument (ArgumentSpec): Positional argument bounds and acceptance function.
        flags (FlagTable): The flags the command accepts.
        subcommands (dict[str, Command]): Nested commands keyed by name.
        run (Callable): Behavior called as `await run(program, record)`.

    Methods:
        add_flag(): Declare a flag on the command.
        add_subcommand(): Attach a nested command.
        get_subcommand(): Look up a nested command by name.
        __call__(): Run the behavior for one execution record.
    """

    name: str
    brief: str = ""
    usage: str = ""
    description: str = ""
    argument: ArgumentSpec = Field(default_factory=no_arguments)
    flags: FlagTable = Field(default_factory=FlagTable)
    subcommands: dict[str, Command] = Field(default_factory=dict)
    run: Callable[..., Any] = _noop

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("name", mode="before")
    @classmethod
    def fix_name(cls, name: Any) -> str:
        if not isinstance(name, str):
            raise TypeError("Command name must be a string")
        name = name.strip()
        if not name:
            raise ValueError("Command name cannot be empty")
        if name.startswith("-") or any(char.isspace() for char in name):
            raise ValueError(f"Invalid command name '{name}'")
        return name

    @field_validator("brief", "usage", "description", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("argument", mode="before")
    @classmethod
    def fix_argument(cls, argument: Any) -> ArgumentSpec:
        if argument is None:
            return no_arguments()
        if not isinstance(argument, ArgumentSpec):
            raise TypeError("argument must be an ArgumentSpec or None")
        return argument

    @field_validator("flags", mode="before")
    @classmethod
    def fix_flags(cls, flags: Any) -> FlagTable:
        if flags is None:
            return FlagTable()
        if isinstance(flags, FlagTable):
            return flags
        return FlagTable(list(flags))

    @field_validator("subcommands", mode="before")
    @classmethod
    def fix_subcommands(cls, subcommands: Any) -> dict[str, Any]:
        if subcommands is None:
            return {}
        if isinstance(subcommands, dict):
            return subcommands
        fixed: dict[str, Any] = {}
        for subcommand in subcommands:
            if subcommand.name in fixed:
                raise CommandAlreadyExistsError(
                    f"Sub-command '{subcommand.name}' is already registered"
                )
            fixed[subcommand.name] = subcommand
        return fixed

    @field_validator("run", mode="before")
    @classmethod
    def wrap_callable_as_async(cls, run: Any) -> Any:
        if run is None:
            return _noop
        if callable(run):
            return ensure_async(run)
        raise TypeError("run must be a callable")

    def add_flag(
        self, flag: Flag | str, short_name: str | None = None, **kwargs: Any
    ) -> Flag:
        """
        Declare a flag on this command.

        Accepts either a ready `Flag` or the arguments of `FlagTable.add_flag`.
        """
        if isinstance(flag, Flag):
            return self.flags.add(flag)
        return self.flags.add_flag(flag, short_name, **kwargs)

    def add_subcommand(self, command: Command | None = None, **fields: Any) -> Command:
        """Attach a sub-command, built from `fields` if no command is given."""
        if command is None:
            command = Command(**fields)
        if command.name in self.subcommands:
            raise CommandAlreadyExistsError(
                f"Sub-command '{command.name}' is already registered on '{self.name}'"
            )
        self.subcommands[command.name] = command
        return command

    def get_subcommand(self, name: str) -> Command | None:
        return self.subcommands.get(name)

    @property
    def usage_text(self) -> str:
        """The usage line, derived from flags and arguments if none was given."""
        if self.usage:
            return self.usage
        parts = [self.name]
        parts.extend(flag.get_usage_text() for flag in self.flags)
        if self.subcommands:
            parts.append("[sub-command]")
        arguments = self.argument.usage_text()
        if arguments:
            parts.append(arguments)
        return " ".join(parts)

    async def __call__(self, program: Program, record: ExecutionRecord) -> Any:
        """Run the behavior for `record`, logging start and finish."""
        logger.info("[Command:%s] Running with tokens %s", self.name, list(record.tokens))
        start = time.perf_counter()
        try:
            result = await self.run(program, record)
        except Exception as error:
            logger.error("[Command:%s] Failed: %s", self.name, error)
            raise
        duration = time.perf_counter() - start
        logger.info("[Command:%s] Finished in %.3fs", self.name, duration)
        return result

    def __str__(self) -> str:
        return (
            f"Command(name='{self.name}', argument={self.argument}, "
            f"flags={len(self.flags)}, subcommands={list(self.subcommands)})"
        )
