# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loading for Arbor programs.

A `ProgramConfig` holds the display settings used by `Program` and the help command
(`tab_size` and `spacing`) plus the size of the display queue. Values that are not
positive are replaced by their defaults rather than rejected.

Configuration files may be YAML, TOML or JSON. `find_config()` looks in these places
and uses the first file that exists:

1. `./<program>.yaml`, `./<program>.yml`, `./<program>.toml`, `./<program>.json`
2. the path in `$ARBOR_CONFIG`
3. `~/.config/<program>/config.yaml`, `~/.config/<program>/config.toml`

When no file is found the defaults are used.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, ValidationError, field_validator

from arbor.exceptions import ConfigError
from arbor.logger import logger

DEFAULT_TAB_SIZE = 3
DEFAULT_SPACING = 1
DEFAULT_QUEUE_SIZE = 256

CONFIG_ENV_VAR = "ARBOR_CONFIG"
SUPPORTED_SUFFIXES = (".yaml", ".yml", ".toml", ".json")


class ProgramConfig(BaseModel):
    """Arbor program configuration model."""

    tab_size: int = DEFAULT_TAB_SIZE
    spacing: int = DEFAULT_SPACING
    queue_size: int = DEFAULT_QUEUE_SIZE

    @field_validator("tab_size", mode="after")
    @classmethod
    def fix_tab_size(cls, value: int) -> int:
        return value if value > 0 else DEFAULT_TAB_SIZE

    @field_validator("spacing", mode="after")
    @classmethod
    def fix_spacing(cls, value: int) -> int:
        return value if value > 0 else DEFAULT_SPACING

    @field_validator("queue_size", mode="after")
    @classmethod
    def fix_queue_size(cls, value: int) -> int:
        return value if value > 0 else DEFAULT_QUEUE_SIZE


def _read_raw(path: Path) -> Any:
    suffix = path.suffix.lower()
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(config_file)
        elif suffix == ".toml":
            return toml.load(config_file)
        elif suffix == ".json":
            return json.load(config_file)
    raise ConfigError(f"Unsupported config format: {suffix}")


def load_config(file_path: Path | str) -> ProgramConfig:
    """
    Load a `ProgramConfig` from a YAML, TOML or JSON file.

    An empty file yields the defaults.

    Raises:
        ConfigError: If the file is missing, has an unsupported format, cannot be
            parsed or holds invalid values.
    """
    path = Path(file_path)
    if not path.is_file():
        raise ConfigError(f"No such config file: {file_path}")

    try:
        raw_config = _read_raw(path)
    except (yaml.YAMLError, toml.TomlDecodeError, json.JSONDecodeError) as error:
        raise ConfigError(f"Could not parse config file '{path}': {error}") from error

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ConfigError(
            f"Config file '{path}' must contain a mapping, got {type(raw_config).__name__}"
        )

    try:
        config = ProgramConfig(**raw_config)
    except ValidationError as error:
        raise ConfigError(f"Invalid config in '{path}': {error}") from error
    logger.debug("Loaded config from %s: %s", path, config)
    return config


def config_candidates(program_name: str) -> list[Path]:
    """Paths `find_config()` checks for `program_name`, in order."""
    candidates = [Path.cwd() / f"{program_name}{suffix}" for suffix in SUPPORTED_SUFFIXES]
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        candidates.append(Path(env_path).expanduser())
    config_dir = Path.home() / ".config" / program_name
    candidates.append(config_dir / "config.yaml")
    candidates.append(config_dir / "config.toml")
    return candidates


def find_config(program_name: str) -> ProgramConfig:
    """Load the first config file found for `program_name`, or the defaults."""
    for candidate in config_candidates(program_name):
        if candidate.is_file():
            return load_config(candidate)
    logger.debug("No config file found for '%s', using defaults", program_name)
    return ProgramConfig()


def save_config(config: ProgramConfig, file_path: Path | str) -> None:
    """Write `config` to a YAML, TOML or JSON file chosen by suffix."""
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ConfigError(f"Unsupported config format: {suffix}")
    data = config.model_dump()
    with path.open("w", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            yaml.safe_dump(data, config_file, sort_keys=False)
        elif suffix == ".toml":
            toml.dump(data, config_file)
        else:
            json.dump(data, config_file, indent=2)
