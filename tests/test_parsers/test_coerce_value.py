from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Literal, Union

import pytest

from arbor.parser.utils import coerce_bool, coerce_value, is_flag_token, type_name


class Level(Enum):
    LOW = "low"
    HIGH = "high"


class Priority(Enum):
    MINOR = 1
    MAJOR = 2


@pytest.mark.parametrize(
    "value, target_type, expected",
    [
        ("42", int, 42),
        ("2.5", float, 2.5),
        ("name", str, "name"),
        ("-42", int, -42),
        ("yes", bool, True),
        ("off", bool, False),
    ],
)
def test_coerce_value_basic(value, target_type, expected):
    assert coerce_value(value, target_type) == expected


def test_coerce_bool_rejects_unknown_spelling():
    with pytest.raises(ValueError) as excinfo:
        coerce_bool("maybe")
    assert "not a valid boolean" in str(excinfo.value)


def test_coerce_value_unions():
    assert coerce_value("7", int | str) == 7
    assert coerce_value("seven", int | str) == "seven"
    assert coerce_value("7", Union[float, str]) == 7.0
    with pytest.raises(ValueError) as excinfo:
        coerce_value("seven", int | float)
    assert "could not be coerced" in str(excinfo.value)


def test_coerce_value_enum_by_name_or_value():
    assert coerce_value("low", Level) is Level.LOW
    assert coerce_value("HIGH", Level) is Level.HIGH
    assert coerce_value("2", Priority) is Priority.MAJOR
    with pytest.raises(ValueError) as excinfo:
        coerce_value("medium", Level)
    assert "should be one of" in str(excinfo.value)


def test_coerce_value_literal():
    assert coerce_value("json", Literal["json", "yaml"]) == "json"
    with pytest.raises(ValueError):
        coerce_value("xml", Literal["json", "yaml"])


def test_coerce_value_datetime():
    result = coerce_value("2025-03-04T10:30:00", datetime)
    assert result == datetime(2025, 3, 4, 10, 30)
    with pytest.raises(ValueError):
        coerce_value("not a date", datetime)


def test_coerce_value_plain_callable():
    assert coerce_value("/tmp/out.txt", Path) == Path("/tmp/out.txt")


def test_is_flag_token():
    assert is_flag_token("-v")
    assert is_flag_token("--verbose")
    assert is_flag_token("-42")
    assert not is_flag_token("value")
    assert not is_flag_token("")


def test_type_name():
    assert type_name(int) == "int"
    assert type_name(Level) == "level"
    assert "int" in type_name(int | None)
