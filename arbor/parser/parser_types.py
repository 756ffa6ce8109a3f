# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Result models produced by Arbor's command-line resolution.

Contents:
- `ArityResult`: The outcome of the arity resolver for one command level.
- `ExecutionRecord`: One resolved command invocation (command, positional tokens,
  parsed data, and a snapshot of its flag values).
- `ExecutionPlan`: The ordered records for a whole command line, ready for the
  sequential executor in `arbor.program`.

Records are created by `arbor.parser.resolver` and are immutable. Flag values are
copied into each record when it is created, so a later parse of the same command
tree does not change a plan that was already built.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterator, Mapping

if TYPE_CHECKING:
    from arbor.command import Command


@dataclass(frozen=True)
class ArityResult:
    """How many leading tokens a command consumed and what they parsed into."""

    consumed: int
    tokens: tuple[str, ...]
    data: Any


@dataclass(frozen=True)
class ExecutionRecord:
    """
    A resolved invocation of a single command.

    Attributes:
        command (Command): The command to run.
        tokens (tuple[str, ...]): The positional tokens the command consumed.
        data (Any): What the command's acceptance function returned for `tokens`.
        flags (Mapping[str, Any]): Read-only snapshot of the command's flag values,
            keyed by long name.
    """

    command: Command
    tokens: tuple[str, ...] = ()
    data: Any = None
    flags: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def name(self) -> str:
        return self.command.name

    def flag(self, name: str, default: Any = None) -> Any:
        """Return the snapshot value of the flag `name`."""
        return self.flags.get(name, default)

    def __str__(self) -> str:
        return (
            f"ExecutionRecord(command='{self.command.name}', "
            f"tokens={list(self.tokens)}, flags={dict(self.flags)})"
        )


class ExecutionPlan:
    """
    Ordered execution records for one command line.

    Records are stored in resolution order: a sub-command is resolved before the
    command that names it, so the deepest command comes first. Iterating the plan
    yields execution order, which pops that stack from the top: the outermost
    command runs first and the deepest sub-command runs last.
    """

    def __init__(self, records: list[ExecutionRecord] | None = None) -> None:
        self._records: list[ExecutionRecord] = list(records or [])

    def push(self, record: ExecutionRecord) -> None:
        self._records.append(record)

    @property
    def resolution_order(self) -> tuple[ExecutionRecord, ...]:
        return tuple(self._records)

    @property
    def execution_order(self) -> tuple[ExecutionRecord, ...]:
        return tuple(reversed(self._records))

    @property
    def leaf(self) -> ExecutionRecord | None:
        """The deepest resolved command."""
        return self._records[0] if self._records else None

    def __iter__(self) -> Iterator[ExecutionRecord]:
        return iter(self.execution_order)

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

    def __str__(self) -> str:
        names = " -> ".join(record.name for record in self.execution_order)
        return f"ExecutionPlan({names})"

    def __repr__(self) -> str:
        return str(self)
