from types import MappingProxyType

import pytest

from arbor.exceptions import FlagConflictError, FlagDefinitionError
from arbor.parser import Flag, FlagTable, bool_flag, value_flag


def test_bool_flag_defaults_to_false():
    flag = bool_flag("verbose", "v", help="  Talk more.  ")
    assert flag.takes_value is False
    assert flag.default is False
    assert flag.value is False
    assert flag.help == "Talk more."
    assert flag.flags == ("-v", "--verbose")


def test_value_flag_resolves_parse_from_type():
    flag = value_flag("count", "c", type=int, default=1)
    assert flag.value == 1
    flag.set_from_text("5")
    assert flag.value == 5
    flag.reset()
    assert flag.value == 1
    assert flag.get_usage_text() == "[-c|--count=INT]"


def test_value_flag_string_default_is_coerced():
    flag = value_flag("count", type=int, default="3")
    assert flag.default == 3


def test_value_flag_bad_default():
    with pytest.raises(FlagDefinitionError):
        value_flag("count", type=int, default="three")


def test_value_flag_custom_parse():
    flag = value_flag("tags", parse=lambda text: text.split(","))
    flag.set_from_text("a,b")
    assert flag.value == ["a", "b"]


def test_flag_names_are_normalized():
    flag = Flag(long_name="  --dry-run ", short_name="-n")
    assert flag.long_name == "dry-run"
    assert flag.short_name == "n"
    assert flag.long_flag == "--dry-run"


@pytest.mark.parametrize(
    "long_name, short_name",
    [
        ("", None),
        ("--", None),
        ("na=me", None),
        ("-x", None),
        ("two words", None),
        ("name", "ab"),
        ("name", "-"),
        ("name", "="),
    ],
)
def test_invalid_flag_definitions(long_name, short_name):
    with pytest.raises(FlagDefinitionError):
        Flag(long_name=long_name, short_name=short_name)


def test_bool_flag_cannot_have_default():
    with pytest.raises(FlagDefinitionError):
        Flag(long_name="verbose", default=True)


def test_duplicate_long_name_conflicts():
    table = FlagTable()
    table.add_flag("verbose", "v")
    with pytest.raises(FlagConflictError):
        table.add_flag("verbose")


def test_duplicate_short_name_conflicts():
    table = FlagTable()
    table.add_flag("verbose", "v")
    with pytest.raises(FlagConflictError) as excinfo:
        table.add_flag("version", "v")
    assert "--verbose" in str(excinfo.value)
    assert "version" not in table


def test_table_lookup_and_order():
    table = FlagTable(
        [
            bool_flag("all", "a"),
            value_flag("name", "n"),
            bool_flag("quiet"),
        ]
    )
    assert len(table) == 3
    assert [flag.long_name for flag in table] == ["all", "name", "quiet"]
    assert table.get("name").takes_value
    assert table.get_short("a").long_name == "all"
    assert table.get("missing") is None
    assert table.get_short("q") is None
    assert "quiet" in table


def test_snapshot_is_read_only_and_detached():
    table = FlagTable()
    table.add_flag("count", takes_value=True, type=int, default=0)
    table.get("count").set_from_text("4")
    snapshot = table.snapshot()
    assert isinstance(snapshot, MappingProxyType)
    assert snapshot["count"] == 4
    with pytest.raises(TypeError):
        snapshot["count"] = 5  # type: ignore[index]
    table.reset()
    assert table.values() == {"count": 0}
    assert snapshot["count"] == 4


def test_bool_flag_rejects_text_value():
    flag = bool_flag("verbose", "v")
    with pytest.raises(FlagDefinitionError) as excinfo:
        flag.set_from_text("yes")
    assert "--verbose" in str(excinfo.value)
    assert flag.value is False
