# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Arity resolution: how many leading positional tokens belong to a command.

`resolve_arity()` walks the candidate counts of an `ArgumentSpec` from the largest
to the smallest and returns the first one its acceptance function accepts, so a
command always takes as many positional tokens as it can. Tokens it leaves behind
go to the flag parser or, through the resolver, to the enclosing command.
"""
from __future__ import annotations

from typing import Sequence

from arbor.exceptions import ArgumentParseError, TooFewArgumentsError
from arbor.logger import logger
from arbor.parser.argument import ArgumentSpec
from arbor.parser.parser_types import ArityResult


def resolve_arity(spec: ArgumentSpec, tokens: Sequence[str]) -> ArityResult:
    """
    Pick the largest admissible count of leading `tokens` for `spec`.

    Args:
        spec (ArgumentSpec): The command's argument bounds and acceptance function.
        tokens (Sequence[str]): The candidate positional prefix (no flag tokens).

    Returns:
        ArityResult: The consumed count, the consumed tokens and the parsed data.

    Raises:
        TooFewArgumentsError: If fewer than `spec.min_args` tokens are available.
        ArgumentParseError: If the acceptance function rejects every count in range.
    """
    available = len(tokens)
    left = spec.min_args
    if available < left:
        raise TooFewArgumentsError(expected=left, got=available)

    right = available if spec.max_args is None else min(spec.max_args, available)

    last_error: Exception | None = None
    for count in range(right, left - 1, -1):
        candidate = list(tokens[:count])
        try:
            data = spec.accept(candidate)
        except Exception as error:
            logger.debug("Acceptance rejected %d token(s) %s: %s", count, candidate, error)
            last_error = error
            continue
        return ArityResult(consumed=count, tokens=tuple(candidate), data=data)

    raise ArgumentParseError(last_error) from last_error
