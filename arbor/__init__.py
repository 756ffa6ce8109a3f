"""
Arbor CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .command import Command
from .config import ProgramConfig, find_config, load_config
from .display import Display
from .logger import setup_logging
from .parser import (
    ArgumentSpec,
    ExecutionPlan,
    ExecutionRecord,
    Flag,
    FlagTable,
    at_least,
    at_most,
    between,
    bool_flag,
    exactly,
    no_arguments,
    value_flag,
)
from .program import Program
from .signals import QuitSignal
from .version import __version__

logger = logging.getLogger("arbor")


__all__ = [
    "ArgumentSpec",
    "Command",
    "Display",
    "ExecutionPlan",
    "ExecutionRecord",
    "Flag",
    "FlagTable",
    "Program",
    "ProgramConfig",
    "QuitSignal",
    "__version__",
    "at_least",
    "at_most",
    "between",
    "bool_flag",
    "exactly",
    "find_config",
    "load_config",
    "no_arguments",
    "setup_logging",
    "value_flag",
]
