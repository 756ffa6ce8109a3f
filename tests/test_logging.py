import json
import logging

import pytest
from rich.logging import RichHandler

from arbor.logger import logger, setup_logging
from arbor.utils import ensure_async, get_program_name


@pytest.fixture(autouse=True)
def restore_logger(monkeypatch):
    monkeypatch.delenv("ARBOR_LOG_MODE", raising=False)
    monkeypatch.delenv("ARBOR_LOG_LEVEL", raising=False)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


def test_cli_mode_uses_rich_handler():
    setup_logging(mode="cli")
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)
    assert logger.handlers[0].level == logging.WARNING


def test_env_mode_and_level(monkeypatch):
    monkeypatch.setenv("ARBOR_LOG_MODE", "json")
    monkeypatch.setenv("ARBOR_LOG_LEVEL", "debug")
    setup_logging()
    handler = logger.handlers[0]
    assert not isinstance(handler, RichHandler)
    assert handler.level == logging.DEBUG
    assert logger.level == logging.DEBUG


def test_invalid_mode():
    with pytest.raises(ValueError):
        setup_logging(mode="xml")


def test_invalid_env_level(monkeypatch):
    monkeypatch.setenv("ARBOR_LOG_LEVEL", "loud")
    with pytest.raises(ValueError):
        setup_logging(mode="cli")


def test_json_file_log(tmp_path):
    log_file = tmp_path / "arbor.log"
    setup_logging(mode="cli", log_filename=str(log_file), json_log_to_file=True)
    logger.info("resolved plan")
    for handler in logger.handlers:
        handler.flush()
    record = json.loads(log_file.read_text(encoding="UTF-8").splitlines()[-1])
    assert record["message"] == "resolved plan"
    assert record["name"] == "arbor"


def test_text_file_log(tmp_path):
    log_file = tmp_path / "arbor.log"
    setup_logging(mode="json", log_filename=str(log_file))
    logger.debug("flag parsed")
    for handler in logger.handlers:
        handler.flush()
    assert "[arbor] [DEBUG] flag parsed" in log_file.read_text(encoding="UTF-8")


def test_repeated_setup_replaces_handlers():
    setup_logging(mode="cli")
    setup_logging(mode="cli")
    assert len(logger.handlers) == 1


def test_get_program_name():
    assert get_program_name("/usr/local/bin/tool") == "tool"
    assert get_program_name("scripts/demo.py") == "demo"
    assert get_program_name("") == "arbor"


@pytest.mark.asyncio
async def test_ensure_async_wraps_sync():
    def double(value):
        return value * 2

    async def triple(value):
        return value * 3

    assert await ensure_async(double)(2) == 4
    assert ensure_async(triple) is triple
    with pytest.raises(TypeError):
        ensure_async(42)
