# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Logging for Arbor.

Every Arbor module logs through the `arbor` logger defined here. Nothing is printed
until a program calls `setup_logging()`, which attaches:

- a console handler: rich's `RichHandler` in "cli" mode, or a python-json-logger
  formatter in "json" mode,
- optionally a file handler writing plain text or JSON lines.

The mode comes from the `mode` argument, then `$ARBOR_LOG_MODE`, then "json" when
running inside a container and "cli" otherwise. `$ARBOR_LOG_LEVEL` overrides the
console level.
"""
from __future__ import annotations

import logging
import os

import pythonjsonlogger.json
from rich.logging import RichHandler

from arbor.utils import running_in_container

logger: logging.Logger = logging.getLogger("arbor")

LOG_MODES = ("cli", "json")
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
TEXT_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"


def _json_formatter() -> logging.Formatter:
    return pythonjsonlogger.json.JsonFormatter(JSON_FORMAT)


def _console_handler(mode: str) -> logging.Handler:
    if mode == "cli":
        return RichHandler(
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    handler = logging.StreamHandler()
    handler.setFormatter(_json_formatter())
    return handler


def _file_handler(log_filename: str, json_format: bool) -> logging.Handler:
    handler = logging.FileHandler(log_filename, "a", "UTF-8")
    if json_format:
        handler.setFormatter(_json_formatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def _resolve_mode(mode: str | None) -> str:
    if mode:
        return mode
    return os.getenv("ARBOR_LOG_MODE") or ("json" if running_in_container() else "cli")


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> logging.Logger:
    """
    Attach console and file handlers to the `arbor` logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        mode (str | None): "cli" for rich console output, "json" for JSON lines.
        log_filename (str | None): Log file path. No file handler when None.
        json_log_to_file (bool): Write the file as JSON lines instead of text.
        file_log_level (int): Level for the file handler.
        console_log_level (int): Level for the console handler.

    Returns:
        logging.Logger: The configured `arbor` logger.

    Raises:
        ValueError: If the mode or `$ARBOR_LOG_LEVEL` is not recognized.
    """
    mode = _resolve_mode(mode)
    if mode not in LOG_MODES:
        raise ValueError(f"Invalid log mode: {mode}")

    env_level = os.getenv("ARBOR_LOG_LEVEL")
    if env_level:
        level = logging.getLevelName(env_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Invalid log level: {env_level}")
        console_log_level = level

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = _console_handler(mode)
    console_handler.setLevel(console_log_level)
    logger.addHandler(console_handler)
    levels = [console_log_level]

    if log_filename:
        file_handler = _file_handler(log_filename, json_log_to_file)
        file_handler.setLevel(file_log_level)
        logger.addHandler(file_handler)
        levels.append(file_log_level)

    logger.setLevel(min(levels))
    logger.propagate = False
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logger.debug("Logging initialized in '%s' mode.", mode)
    return logger
