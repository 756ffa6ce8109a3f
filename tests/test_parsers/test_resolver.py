import pytest

from arbor.command import Command
from arbor.exceptions import (
    ArborError,
    CommandNotFoundError,
    ExtraArgumentsError,
    FlagValueError,
    NoArgumentsError,
    RepeatedFlagError,
    TooFewArgumentsError,
    UnknownFlagError,
    UnknownSubCommandError,
)
from arbor.parser import (
    CommandResolver,
    accept_typed,
    at_least,
    at_most,
    between,
    exactly,
    resolve,
)


@pytest.fixture
def commands():
    sub = Command(name="sub", argument=exactly(1))
    sub.add_flag("verbose", "v")
    return {"sub": sub}


@pytest.fixture
def tree():
    remote = Command(name="remote", argument=at_most(1))
    remote.add_flag("verbose", "v")
    add = remote.add_subcommand(name="add", argument=exactly(2))
    add.add_flag("fetch", "f")
    add.add_flag("track", "t", takes_value=True)
    remote.add_subcommand(name="remove", argument=exactly(1))
    return {"remote": remote}


def test_single_positional(commands):
    plan = resolve(commands, ["sub", "7"])
    assert len(plan) == 1
    record = plan.leaf
    assert record.name == "sub"
    assert record.tokens == ("7",)
    assert record.data == ["7"]
    assert dict(record.flags) == {"verbose": False}


def test_leading_flag_before_positional(commands):
    plan = resolve(commands, ["sub", "--verbose", "7"])
    record = plan.leaf
    assert record.flag("verbose") is True
    assert record.tokens == ("7",)


def test_trailing_flag_after_positional(commands):
    plan = resolve(commands, ["sub", "7", "-v"])
    assert plan.leaf.flag("verbose") is True


def test_too_few_arguments(commands):
    with pytest.raises(TooFewArgumentsError) as excinfo:
        resolve(commands, ["sub"])
    assert excinfo.value.expected == 1
    assert excinfo.value.got == 0
    assert str(excinfo.value) == (
        "in command 'sub': too few arguments: expected at least 1, got 0"
    )


def test_unknown_flag(commands):
    with pytest.raises(UnknownFlagError) as excinfo:
        resolve(commands, ["sub", "--unknown"])
    assert "unknown" in excinfo.value.flag
    assert "unknown flag" in str(excinfo.value)


def test_extra_arguments(commands):
    with pytest.raises(ExtraArgumentsError) as excinfo:
        resolve(commands, ["sub", "9", "extra"])
    assert excinfo.value.tokens == ["extra"]
    assert "extra arguments" in str(excinfo.value)


def test_no_arguments():
    with pytest.raises(NoArgumentsError):
        resolve({}, [])


def test_command_not_found(commands):
    with pytest.raises(CommandNotFoundError) as excinfo:
        resolve(commands, ["nope"])
    assert excinfo.value.name == "nope"


def test_subcommand_resolves_first_and_runs_last(tree):
    plan = resolve(tree, ["remote", "add", "origin", "url"])
    assert [record.name for record in plan.resolution_order] == ["add", "remote"]
    assert [record.name for record in plan] == ["remote", "add"]
    assert plan.leaf.tokens == ("origin", "url")
    assert str(plan) == "ExecutionPlan(remote -> add)"


def test_subcommand_flags(tree):
    plan = resolve(tree, ["remote", "add", "-f", "origin", "url", "--track=main"])
    add = plan.leaf
    assert add.flags == {"fetch": True, "track": "main"}


def test_parent_flag_after_subcommand(tree):
    """Flags the sub-command does not declare are left for the parent."""
    plan = resolve(tree, ["remote", "remove", "origin", "--verbose"])
    remote, remove = plan.execution_order
    assert remove.tokens == ("origin",)
    assert remote.flag("verbose") is True
    assert remote.tokens == ()


def test_parent_takes_leftover_positional(tree):
    plan = resolve(tree, ["remote", "remove", "origin", "extra"])
    remote = plan.execution_order[0]
    assert remote.tokens == ("extra",)


def test_error_context_for_subcommand(tree):
    with pytest.raises(TooFewArgumentsError) as excinfo:
        resolve(tree, ["remote", "add", "origin"])
    assert excinfo.value.context == ["in command 'remote'", "in sub-command 'add'"]
    assert str(excinfo.value) == (
        "in command 'remote': in sub-command 'add': "
        "too few arguments: expected at least 2, got 1"
    )


def test_flag_error_context(tree):
    with pytest.raises(ArborError) as excinfo:
        resolve(tree, ["remote", "add", "--track"])
    assert str(excinfo.value).startswith("in command 'remote': in sub-command 'add': ")


def test_unknown_subcommand():
    group = Command(name="group")
    group.add_subcommand(name="list")
    with pytest.raises(UnknownSubCommandError) as excinfo:
        resolve({"group": group}, ["group", "lst"])
    assert excinfo.value.name == "lst"
    assert excinfo.value.parent == "group"
    assert isinstance(excinfo.value, CommandNotFoundError)


def test_positional_stops_at_flag():
    command = Command(name="copy", argument=at_least(0))
    command.add_flag("force", "f")
    plan = resolve({"copy": command}, ["copy", "a", "b", "-f", "c"])
    assert plan.leaf.tokens == ("a", "b")
    assert plan.leaf.flag("force") is True


def test_positional_after_flags_left_over():
    command = Command(name="copy", argument=at_least(0))
    command.add_flag("force", "f")
    with pytest.raises(ExtraArgumentsError) as excinfo:
        resolve({"copy": command}, ["copy", "a", "-f", "c"])
    assert excinfo.value.tokens == ["c"]


def test_greedy_typed_arguments():
    command = Command(
        name="sum", argument=between(1, 3).with_accept(accept_typed(int, scalar=False))
    )
    plan = resolve({"sum": command}, ["sum", "1", "2", "3"])
    assert plan.leaf.data == [1, 2, 3]
    with pytest.raises(ExtraArgumentsError) as excinfo:
        resolve({"sum": command}, ["sum", "1", "2", "x"])
    assert excinfo.value.tokens == ["x"]


def test_flag_value_error_is_chained():
    command = Command(name="wait")
    command.add_flag("seconds", "s", takes_value=True, type=int, default=0)
    with pytest.raises(FlagValueError) as excinfo:
        resolve({"wait": command}, ["wait", "-s", "soon"])
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_records_keep_snapshot_after_next_parse(commands):
    resolver = CommandResolver(commands)
    first = resolver.resolve(["sub", "-v", "1"])
    second = resolver.resolve(["sub", "2"])
    assert first.leaf.flag("verbose") is True
    assert second.leaf.flag("verbose") is False


def test_leftover_flag_for_flagless_command():
    command = Command(name="status")
    with pytest.raises(UnknownFlagError) as excinfo:
        resolve({"status": command}, ["status", "--porcelain=v2"])
    assert excinfo.value.flag == "--porcelain"


@pytest.mark.parametrize(
    "tokens",
    [
        ["remote", "add", "o", "u", "--verbose"],
        ["remote", "add", "o", "u", "--fetch", "--verbose"],
        ["remote", "add", "o", "u", "--verbose", "--fetch"],
        ["remote", "add", "-v", "o", "u", "-f"],
    ],
)
def test_parent_flag_after_subcommand_with_flags(tree, tokens):
    remote, add = resolve(tree, tokens).execution_order
    assert remote.flag("verbose") is True
    assert add.tokens == ("o", "u")
    assert add.flag("fetch") is ("--fetch" in tokens or "-f" in tokens)


def test_parent_value_flag_after_subcommand_keeps_its_value():
    remote = Command(name="remote")
    remote.add_flag("config", "c", takes_value=True)
    add = remote.add_subcommand(name="add", argument=exactly(1))
    add.add_flag("fetch", "f")
    plan = resolve({"remote": remote}, ["remote", "add", "o", "--config", "-x.cfg", "-f"])
    parent, child = plan.execution_order
    assert parent.flag("config") == "-x.cfg"
    assert child.flag("fetch") is True
    assert child.tokens == ("o",)


def test_flag_owned_by_no_command_is_reported_at_the_root(tree):
    with pytest.raises(UnknownFlagError) as excinfo:
        resolve(tree, ["remote", "add", "o", "u", "--bogus", "--fetch"])
    assert excinfo.value.flag == "--bogus"
    assert excinfo.value.context == ["in command 'remote'"]


def test_repeated_flag_in_command(commands):
    with pytest.raises(RepeatedFlagError) as excinfo:
        resolve(commands, ["sub", "--verbose", "--verbose", "7"])
    assert str(excinfo.value).startswith("in command 'sub': ")


def test_parent_flag_repeated_across_levels(tree):
    with pytest.raises(RepeatedFlagError):
        resolve(tree, ["remote", "-v", "add", "o", "u", "--verbose"])
