# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""program.py

Main class for building and running Arbor command-line programs.

A `Program` owns the root commands of a command tree, resolves command lines into
execution plans and runs them. Running is split in three steps that can also be
used on their own:

- `parse(tokens)`: resolve tokens into an `ExecutionPlan`
- `execute(plan)`: run the plan's records one after the other
- `run(tokens)`: start the display, parse, execute, close the display

`main()` wraps `run()` for console scripts: it takes the process arguments, prints
errors instead of raising them and returns an exit code.

Example:
    ```
    program = Program("greet", brief="Says hello")
    program.add_command(
        name="hello",
        argument=exactly(1),
        run=lambda program, record: program.println(f"hello {record.tokens[0]}"),
    )
    sys.exit(program.main())
    ```
"""
from __future__ import annotations

import asyncio
import sys
import threading
from typing import Any, Sequence

from prompt_toolkit import PromptSession
from rich.console import Console

from arbor.command import Command
from arbor.config import ProgramConfig
from arbor.console import console as default_console
from arbor.display import Display, LogMessage, TextMessage
from arbor.exceptions import (
    ArborError,
    CommandAlreadyExistsError,
    CommandRunError,
    DisplayClosedError,
    NoArgumentsError,
)
from arbor.help_command import HELP_COMMAND_NAME, build_help_command
from arbor.logger import logger
from arbor.parser.parser_types import ExecutionPlan
from arbor.parser.resolver import resolve
from arbor.signals import QuitSignal
from arbor.utils import get_program_name

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


class Program:
    """
    Root of an Arbor command tree.

    Args:
        name (str | None): Program name shown in help. Defaults to the script name.
        brief (str): One-line summary of the program.
        version (str): Version shown in help.
        description (str): Longer help text.
        config (ProgramConfig | None): Display settings. Defaults to `ProgramConfig()`.
        console (Console | None): Rich console for output.
        include_help_command (bool): Whether to register the built-in `help` command.

    Methods:
        add_command(): Register a root command.
        add_commands(): Register several root commands.
        parse(): Resolve tokens into an execution plan.
        execute(): Run an execution plan.
        run(): Parse and execute with a running display.
        main(): Console-script entry point returning an exit code.
    """

    def __init__(
        self,
        name: str | None = None,
        *,
        brief: str = "",
        version: str = "",
        description: str = "",
        config: ProgramConfig | None = None,
        console: Console | None = None,
        include_help_command: bool = True,
    ) -> None:
        self.name: str = (name or get_program_name()).strip()
        self.brief: str = brief.strip()
        self.version: str = version.strip()
        self.description: str = description.strip()
        self.config: ProgramConfig = config or ProgramConfig()
        self.console: Console = console or default_console
        self.commands: dict[str, Command] = {}
        self.display: Display = Display(
            self.console,
            tab_size=self.config.tab_size,
            maxsize=self.config.queue_size,
        )
        self._parse_lock = threading.Lock()
        self._prompt_session: PromptSession | None = None
        self.help_command: Command | None = None
        if include_help_command:
            self.help_command = self.add_command(build_help_command())

    @property
    def tab_size(self) -> int:
        return self.config.tab_size

    @property
    def spacing(self) -> int:
        return self.config.spacing

    @property
    def tab(self) -> str:
        """One level of indentation."""
        return " " * self.config.tab_size

    def add_command(self, command: Command | None = None, **fields: Any) -> Command:
        """
        Register a root command, built from `fields` if no command is given.

        Raises:
            CommandAlreadyExistsError: If a command with the same name exists.
        """
        if command is None:
            command = Command(**fields)
        if not isinstance(command, Command):
            raise TypeError("command must be an instance of Command.")
        if command.name in self.commands:
            raise CommandAlreadyExistsError(
                f"Command '{command.name}' is already registered"
            )
        self.commands[command.name] = command
        logger.debug("[Program:%s] Registered command '%s'", self.name, command.name)
        return command

    def add_commands(self, commands: Sequence[Command | dict[str, Any]]) -> None:
        for command in commands:
            if isinstance(command, dict):
                self.add_command(**command)
            else:
                self.add_command(command)

    def get_command(self, name: str) -> Command | None:
        return self.commands.get(name)

    def parse(self, tokens: Sequence[str]) -> ExecutionPlan:
        """
        Resolve `tokens` into an execution plan.

        Flag values live on the command tree, so parses of one program are
        serialized.
        """
        with self._parse_lock:
            return resolve(self.commands, list(tokens))

    async def execute(self, plan: ExecutionPlan) -> list[Any]:
        """
        Run the records of `plan` in order, stopping at the first failure.

        Returns:
            list[Any]: The result of each command that ran.

        Raises:
            CommandRunError: If a run behavior raises.
            DisplayClosedError: If the display is done before a command runs.
        """
        results: list[Any] = []
        for record in plan:
            if self.display.is_done:
                raise DisplayClosedError()
            try:
                result = await record.command(self, record)
            except QuitSignal as signal:
                logger.info("[Program:%s] %s", self.name, signal)
                break
            except DisplayClosedError:
                raise
            except Exception as error:
                logger.error(
                    "[Program:%s] Command '%s' failed: %s", self.name, record.name, error
                )
                raise CommandRunError(record.name, error) from error
            results.append(result)
        return results

    async def run(self, tokens: Sequence[str]) -> list[Any]:
        """Parse and execute `tokens` while the display is running."""
        self.display.start()
        try:
            plan = self.parse(tokens)
            logger.info("[Program:%s] Executing %s", self.name, plan)
            return await self.execute(plan)
        finally:
            await self.display.close()

    def main(self, argv: Sequence[str] | None = None, pause: bool = False) -> int:
        """
        Run the program from process arguments and return an exit code.

        Args:
            argv (Sequence[str] | None): Arguments including the program name, as in
                `sys.argv`. Defaults to `sys.argv`.
            pause (bool): Wait for ENTER before returning.

        Returns:
            int: 0 on success, 1 on error, 130 when interrupted.
        """
        args = list(sys.argv if argv is None else argv)
        tokens = args[1:]
        try:
            asyncio.run(self.run(tokens))
            exit_code = EXIT_SUCCESS
        except KeyboardInterrupt:
            logger.warning("[Program:%s] Interrupted", self.name)
            self.console.print("[yellow]Interrupted[/yellow]")
            exit_code = EXIT_INTERRUPTED
        except ArborError as error:
            logger.debug("[Program:%s] Failed: %r", self.name, error)
            self.console.print(f"[bold red]error:[/bold red] {error}", markup=True)
            if isinstance(error, NoArgumentsError) and self.help_command:
                self.console.print(
                    f"Run '{self.name} {HELP_COMMAND_NAME}' to see the available commands."
                )
            exit_code = EXIT_FAILURE

        if pause:
            self._pause()
        return exit_code

    def _pause(self) -> None:
        try:
            PromptSession().prompt("Press ENTER to exit...")
        except (EOFError, KeyboardInterrupt):
            logger.debug("[Program:%s] Pause prompt closed", self.name)

    def print(self, *values: Any, sep: str = " ") -> bool:
        """Write `values` without a trailing newline."""
        return self.display.send(TextMessage(sep.join(map(str, values)), end=""))

    def println(self, *values: Any, sep: str = " ") -> bool:
        """Write `values` followed by a newline."""
        return self.display.send(TextMessage(sep.join(map(str, values))))

    def printf(self, template: str, *args: Any, **kwargs: Any) -> bool:
        """Write `template.format(*args, **kwargs)` without a trailing newline."""
        return self.display.send(TextMessage(template.format(*args, **kwargs), end=""))

    def log(self, message: str) -> bool:
        """Send `message` to the program log through the display."""
        return self.display.send(LogMessage(message))

    @property
    def prompt_session(self) -> PromptSession:
        if self._prompt_session is None:
            self._prompt_session = PromptSession()
        return self._prompt_session

    async def input(self, message: str = "> ") -> str:
        """Flush pending output, then read one line from the user."""
        await self.display.flush()
        return await self.prompt_session.prompt_async(message)

    def __str__(self) -> str:
        return f"Program(name='{self.name}', commands={list(self.commands)})"
