"""
Arbor CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument import (
    ArgumentSpec,
    accept_tokens,
    accept_typed,
    at_least,
    at_most,
    between,
    exactly,
    no_arguments,
)
from .arity import resolve_arity
from .flag import Flag, bool_flag, value_flag
from .flag_parser import FlagParser, parse_flags
from .flag_table import FlagTable
from .parser_types import ArityResult, ExecutionPlan, ExecutionRecord
from .resolver import CommandResolver, resolve

__all__ = [
    "ArgumentSpec",
    "ArityResult",
    "CommandResolver",
    "ExecutionPlan",
    "ExecutionRecord",
    "Flag",
    "FlagParser",
    "FlagTable",
    "accept_tokens",
    "accept_typed",
    "at_least",
    "at_most",
    "between",
    "bool_flag",
    "exactly",
    "no_arguments",
    "parse_flags",
    "resolve",
    "resolve_arity",
    "value_flag",
]
