# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the built-in `help` command.

`help` with no arguments lists the program and its commands. `help <command>`
describes one command, and further words walk down its sub-commands, so
`help remote add` describes the `add` sub-command of `remote`. Unknown names raise
`CommandNotFoundError`.

Output is rendered with rich. Indentation uses the program's `tab_size` and table
columns are separated by its `spacing`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import RenderableType
from rich.padding import Padding
from rich.table import Table
from rich.text import Text

from arbor.command import Command
from arbor.exceptions import CommandNotFoundError
from arbor.parser.argument import at_least

if TYPE_CHECKING:
    from arbor.parser.parser_types import ExecutionRecord
    from arbor.program import Program

HELP_COMMAND_NAME = "help"


def _find_command(program: Program, path: tuple[str, ...]) -> tuple[Command, list[str]]:
    """Walk `path` down the command tree, returning the command and its full path."""
    command = program.get_command(path[0])
    if command is None:
        raise CommandNotFoundError(
            path[0], f"command {path[0]!r} is not a valid command"
        )
    names = [command.name]
    for name in path[1:]:
        subcommand = command.get_subcommand(name)
        if subcommand is None:
            raise CommandNotFoundError(
                name, f"{name!r} is not a sub-command of {' '.join(names)!r}"
            )
        command = subcommand
        names.append(command.name)
    return command, names


def _indented(program: Program, renderable: RenderableType) -> Padding:
    return Padding(renderable, (0, 0, 0, program.tab_size), expand=False)


def _table(program: Program) -> Table:
    return Table(
        show_header=False,
        box=None,
        padding=(0, program.spacing),
        pad_edge=False,
    )


def render_program_help(program: Program) -> None:
    console = program.console
    title = Text(program.name, style="bold")
    if program.version:
        title.append(f" v{program.version}", style="dim")
    console.print(title)
    if program.brief:
        console.print(_indented(program, program.brief))
    console.print()
    console.print("[bold]Usage:[/bold]")
    console.print(_indented(program, Text(f"{program.name} <command> [arguments]")))
    if program.description:
        console.print()
        console.print("[bold]Description:[/bold]")
        console.print(_indented(program, program.description))
    console.print()
    console.print("[bold]Commands:[/bold]")
    table = _table(program)
    table.add_column("name", style="cyan", no_wrap=True)
    table.add_column("brief")
    for command in program.commands.values():
        table.add_row(command.name, command.brief)
    console.print(_indented(program, table))


def render_command_help(program: Program, command: Command, path: list[str]) -> None:
    console = program.console
    prefix = " ".join([program.name, *path[:-1]])
    console.print(Text(" ".join(path), style="bold"))
    if command.brief:
        console.print(_indented(program, command.brief))
    console.print()
    console.print("[bold]Usage:[/bold]")
    console.print(_indented(program, Text(f"{prefix} {command.usage_text}")))
    if command.description:
        console.print()
        console.print("[bold]Description:[/bold]")
        console.print(_indented(program, command.description))
    if command.flags:
        console.print()
        console.print("[bold]Flags:[/bold]")
        table = _table(program)
        table.add_column("flag", style="cyan", no_wrap=True)
        table.add_column("help")
        table.add_column("default", style="dim")
        for flag in command.flags:
            spelling = ", ".join(flag.flags)
            if flag.takes_value:
                spelling = f"{spelling} {flag.metavar}"
            default = "" if flag.default is None else f"(default: {flag.default})"
            table.add_row(spelling, flag.help, default)
        console.print(_indented(program, table))
    if command.subcommands:
        console.print()
        console.print("[bold]Sub-commands:[/bold]")
        table = _table(program)
        table.add_column("name", style="cyan", no_wrap=True)
        table.add_column("brief")
        for subcommand in command.subcommands.values():
            table.add_row(subcommand.name, subcommand.brief)
        console.print(_indented(program, table))


async def show_help(program: Program, record: ExecutionRecord) -> None:
    """Run behavior of the `help` command."""
    await program.display.flush()
    if not record.tokens:
        render_program_help(program)
        return
    command, path = _find_command(program, record.tokens)
    render_command_help(program, command, path)


def build_help_command() -> Command:
    return Command(
        name=HELP_COMMAND_NAME,
        brief="Displays help information about the program or a specific command",
        usage="help [command [sub-command...]]",
        description=(
            "If no command is specified, the help command will display help "
            "information about the program. Otherwise, the help command will "
            "display help information about the specified command or sub-command."
        ),
        argument=at_least(0),
        run=show_help,
    )
