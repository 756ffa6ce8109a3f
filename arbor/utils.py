# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import functools
import inspect
import os
import sys
from typing import Any, Awaitable, Callable, TypeVar

T = TypeVar("T")


async def _noop(*_, **__):
    pass


def get_program_name(argv0: str | None = None) -> str:
    """Returns the program name from an argv[0] style path."""
    script = argv0 if argv0 is not None else sys.argv[0]
    name = os.path.basename(script)
    if name.endswith(".py"):
        name = name[:-3]
    return name or "arbor"


def is_coroutine(function: Callable[..., Any]) -> bool:
    return inspect.iscoroutinefunction(function)


def ensure_async(function: Callable[..., T]) -> Callable[..., Awaitable[T]]:
    if is_coroutine(function):
        return function  # type: ignore

    if not callable(function):
        raise TypeError(f"{function} is not callable")

    @functools.wraps(function)
    async def async_wrapper(*args, **kwargs) -> T:
        return function(*args, **kwargs)

    return async_wrapper


def running_in_container() -> bool:
    """Best guess at whether the process runs inside a container."""
    try:
        with open("/proc/1/cgroup", "r", encoding="UTF-8") as cgroup:
            content = cgroup.read()
    except OSError:
        return False
    return any(
        marker in content for marker in ("docker", "kubepods", "containerd", "podman")
    )
