# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in the Arbor CLI framework.

Every error raised while resolving a command line is returned to the caller as one
of these exceptions. Each resolution level adds its own context (the command or
sub-command it was working on) through `ArborError.add_context()`, so the message
reads as a chain from the outermost command down to the failing stage while the
exception keeps its concrete type and attributes.

All exceptions inherit from `ArborError`, the base exception for the framework.

Exception Hierarchy:
- ArborError
    ├── NoArgumentsError
    ├── CommandNotFoundError
    │   └── UnknownSubCommandError
    ├── ArgumentCountError
    │   ├── TooFewArgumentsError
    │   └── TooManyArgumentsError
    ├── ArgumentParseError
    ├── FlagError
    │   ├── UnknownFlagError
    │   ├── RepeatedFlagError
    │   ├── FlagMissingValueError
    │   ├── UnexpectedFlagValueError
    │   ├── FlagValueError
    │   ├── InvalidMergedFlagsError
    │   └── ExtraArgumentError
    ├── ExtraArgumentsError
    ├── FlagConflictError
    ├── FlagDefinitionError
    ├── ArgumentSpecError
    ├── CommandAlreadyExistsError
    ├── CommandRunError
    ├── DisplayClosedError
    └── ConfigError
"""
from __future__ import annotations

from typing import Sequence


class ArborError(Exception):
    """Base exception for the Arbor framework.

    Carries a list of context labels prepended to the message when rendered,
    e.g. ``in command 'remote': in sub-command 'add': expected at least 2
    arguments, got 1``.
    """

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.context: list[str] = []

    def add_context(self, context: str) -> ArborError:
        """Prepend a context label and return the same error for re-raising."""
        self.context.insert(0, context)
        return self

    def __str__(self) -> str:
        return ": ".join([*self.context, self.message])


class NoArgumentsError(ArborError):
    """Exception raised when there is nothing to resolve."""

    def __init__(self, message: str = "no arguments") -> None:
        super().__init__(message)


class CommandNotFoundError(ArborError):
    """Exception raised when the first token does not name a known command."""

    def __init__(self, name: str, message: str | None = None) -> None:
        super().__init__(message or f"command {name!r} not found")
        self.name = name


class UnknownSubCommandError(CommandNotFoundError):
    """Exception raised when a word is left where a sub-command name was expected."""

    def __init__(self, name: str, parent: str) -> None:
        super().__init__(name, f"unknown sub-command {name!r} for command {parent!r}")
        self.parent = parent


class ArgumentCountError(ArborError):
    """Exception raised when the positional argument count is out of bounds."""

    def __init__(self, message: str, expected: int, got: int) -> None:
        super().__init__(message)
        self.expected = expected
        self.got = got


class TooFewArgumentsError(ArgumentCountError):
    """Exception raised when fewer positional arguments than required are given."""

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(
            f"too few arguments: expected at least {expected}, got {got}",
            expected,
            got,
        )


class TooManyArgumentsError(ArgumentCountError):
    """Exception raised when more positional arguments than allowed are given."""

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(
            f"too many arguments: expected at most {expected}, got {got}",
            expected,
            got,
        )


class ArgumentParseError(ArborError):
    """Exception raised when no admissible argument count was accepted."""

    def __init__(self, cause: BaseException | None) -> None:
        super().__init__(f"error parsing arguments: {cause}")
        self.cause = cause


class FlagError(ArborError):
    """Base exception for flag syntax errors. `flag` is the flag as typed."""

    def __init__(self, flag: str, message: str) -> None:
        super().__init__(message)
        self.flag = flag


class UnknownFlagError(FlagError):
    """Exception raised when a flag is not declared by the command."""

    def __init__(self, flag: str) -> None:
        super().__init__(flag, f"unknown flag {flag!r}")


class RepeatedFlagError(FlagError):
    """Exception raised when the same flag is given twice in one parse."""

    def __init__(self, flag: str) -> None:
        super().__init__(flag, f"flag {flag!r} was already given")


class FlagMissingValueError(FlagError):
    """Exception raised when a value flag is last in the input."""

    def __init__(self, flag: str) -> None:
        super().__init__(flag, f"flag {flag!r} requires an argument")


class UnexpectedFlagValueError(FlagError):
    """Exception raised when a boolean long flag is given an inline value."""

    def __init__(self, flag: str, value: str) -> None:
        super().__init__(flag, f"flag {flag!r} does not take an argument")
        self.value = value


class FlagValueError(FlagError):
    """Exception raised when a flag's parse function rejects its value."""

    def __init__(self, flag: str, value: str, cause: BaseException) -> None:
        super().__init__(flag, f"in flag {flag!r}: invalid value {value!r}: {cause}")
        self.value = value
        self.cause = cause


class InvalidMergedFlagsError(FlagError):
    """Exception raised when a merged short-flag cluster cannot be expanded."""

    def __init__(self, flag: str, reason: str) -> None:
        super().__init__(flag, f"invalid merged short flags {flag!r}: {reason}")
        self.reason = reason


class ExtraArgumentError(FlagError):
    """Exception raised when inline text trails a short flag that takes no value."""

    def __init__(self, flag: str, value: str) -> None:
        super().__init__(flag, f"extra argument {value!r} after flag {flag!r}")
        self.value = value


class ExtraArgumentsError(ArborError):
    """Exception raised when tokens are left over after resolution."""

    def __init__(self, tokens: Sequence[str]) -> None:
        super().__init__(f"extra arguments {list(tokens)!r}")
        self.tokens = list(tokens)


class FlagConflictError(ArborError):
    """Exception raised when a flag name is registered twice in one table."""


class FlagDefinitionError(ArborError):
    """Exception raised when a flag declaration is malformed."""


class ArgumentSpecError(ArborError):
    """Exception raised when argument bounds are inconsistent."""


class CommandAlreadyExistsError(ArborError):
    """Exception raised when a command with the same name already exists."""


class CommandRunError(ArborError):
    """Exception raised when a command's run behavior fails."""

    def __init__(self, name: str, cause: BaseException) -> None:
        super().__init__(f"error running command {name!r}: {cause}")
        self.name = name
        self.cause = cause


class DisplayClosedError(ArborError):
    """Exception raised when output is sent to a display that is done."""

    def __init__(self, message: str = "program is done") -> None:
        super().__init__(message)


class ConfigError(ArborError):
    """Exception raised when a configuration file cannot be loaded."""
