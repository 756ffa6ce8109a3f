# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentSpec`, the declaration of how many positional tokens a command
takes and how they are turned into data.

An `ArgumentSpec` carries `[min_args, max_args]` bounds (with `max_args=None` for
unbounded) and an acceptance function. The acceptance function receives a candidate
prefix of the command's positional tokens and either returns parsed data or raises
to reject it. `arbor.parser.arity.resolve_arity` tries candidate counts from the
largest down and keeps the first accepted one.

Constructors:
- `no_arguments()`: Takes nothing. The default for every command.
- `at_least(n)`, `at_most(n)`, `exactly(n)`, `between(low, high)`.

Example:
    spec = exactly(1).with_accept(accept_typed(int))
    resolve_arity(spec, ["7"]).data  # 7
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable

from arbor.exceptions import (
    ArgumentSpecError,
    TooFewArgumentsError,
    TooManyArgumentsError,
)
from arbor.parser.utils import coerce_value

AcceptFunc = Callable[[list[str]], Any]


def accept_tokens(tokens: list[str]) -> list[str]:
    """Default acceptance function: every candidate is accepted as-is."""
    return tokens


@dataclass(frozen=True)
class ArgumentSpec:
    """
    Positional argument bounds plus an acceptance function.

    Attributes:
        min_args (int): Minimum number of positional tokens.
        max_args (int | None): Maximum number of positional tokens, None if unbounded.
        accept (AcceptFunc): Parses a candidate token list or raises to reject it.
    """

    min_args: int = 0
    max_args: int | None = 0
    accept: AcceptFunc = accept_tokens

    def __post_init__(self) -> None:
        if self.min_args < 0:
            raise ArgumentSpecError(f"min_args must be >= 0, got {self.min_args}")
        if self.max_args is not None and self.max_args < self.min_args:
            raise ArgumentSpecError(
                f"max_args ({self.max_args}) must be >= min_args ({self.min_args})"
            )
        if not callable(self.accept):
            raise ArgumentSpecError("accept must be callable")

    @property
    def unbounded(self) -> bool:
        return self.max_args is None

    @property
    def takes_arguments(self) -> bool:
        return self.max_args is None or self.max_args > 0

    def with_accept(self, accept: AcceptFunc | None) -> ArgumentSpec:
        """Return a copy using `accept` (the default acceptance function if None)."""
        return replace(self, accept=accept or accept_tokens)

    def check_count(self, count: int) -> None:
        """Raise if `count` positional tokens fall outside the bounds."""
        if count < self.min_args:
            raise TooFewArgumentsError(expected=self.min_args, got=count)
        if self.max_args is not None and count > self.max_args:
            raise TooManyArgumentsError(expected=self.max_args, got=count)

    def usage_text(self, metavar: str = "arg") -> str:
        """Render the bounds for usage lines, e.g. `<arg> <arg> [arg]...`."""
        parts = [f"<{metavar}>"] * self.min_args
        if self.max_args is None:
            parts.append(f"[{metavar}]...")
        else:
            parts.extend([f"[{metavar}]"] * (self.max_args - self.min_args))
        return " ".join(parts)

    def __str__(self) -> str:
        high = "inf" if self.max_args is None else self.max_args
        return f"ArgumentSpec([{self.min_args}, {high}])"


NO_ARGUMENTS = ArgumentSpec(0, 0)


def no_arguments() -> ArgumentSpec:
    return NO_ARGUMENTS


def at_least(n: int) -> ArgumentSpec:
    """At least `n` tokens, no upper bound. Negative `n` counts as 0."""
    return ArgumentSpec(max(n, 0), None)


def at_most(n: int) -> ArgumentSpec:
    """Up to `n` tokens. `n <= 0` takes no arguments."""
    if n <= 0:
        return NO_ARGUMENTS
    return ArgumentSpec(0, n)


def exactly(n: int) -> ArgumentSpec:
    """Exactly `n` tokens. `n <= 0` takes no arguments."""
    if n <= 0:
        return NO_ARGUMENTS
    return ArgumentSpec(n, n)


def between(low: int, high: int) -> ArgumentSpec:
    """Between `low` and `high` tokens inclusive.

    Negative bounds count as 0 and swapped bounds are put back in order.
    """
    low, high = max(low, 0), max(high, 0)
    if low > high:
        low, high = high, low
    if low == 0 and high == 0:
        return NO_ARGUMENTS
    return ArgumentSpec(low, high)


def accept_typed(target_type: Any, scalar: bool = True) -> AcceptFunc:
    """
    Build an acceptance function that coerces every token to `target_type`.

    With `scalar=True`, a single accepted token yields the value itself rather than
    a one-element list.
    """

    def accept(tokens: list[str]) -> Any:
        values = [coerce_value(token, target_type) for token in tokens]
        if scalar and len(values) == 1:
            return values[0]
        return values

    return accept
