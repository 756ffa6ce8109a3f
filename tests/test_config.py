import pytest

from arbor.config import (
    ProgramConfig,
    config_candidates,
    find_config,
    load_config,
    save_config,
)
from arbor.exceptions import ConfigError


def test_defaults():
    config = ProgramConfig()
    assert config.tab_size == 3
    assert config.spacing == 1


def test_non_positive_values_are_fixed():
    config = ProgramConfig(tab_size=0, spacing=-2, queue_size=0)
    assert config.tab_size == 3
    assert config.spacing == 1
    assert config.queue_size == 256


@pytest.mark.parametrize(
    "filename, content",
    [
        ("tool.yaml", "tab_size: 4\nspacing: 2\n"),
        ("tool.toml", "tab_size = 4\nspacing = 2\n"),
        ("tool.json", '{"tab_size": 4, "spacing": 2}'),
    ],
)
def test_load_config_formats(tmp_path, filename, content):
    path = tmp_path / filename
    path.write_text(content, encoding="UTF-8")
    config = load_config(path)
    assert config.tab_size == 4
    assert config.spacing == 2


def test_empty_yaml_uses_defaults(tmp_path):
    path = tmp_path / "tool.yaml"
    path.write_text("", encoding="UTF-8")
    assert load_config(path) == ProgramConfig()


@pytest.mark.parametrize(
    "filename, content",
    [
        ("bad.yaml", "tab_size: [1, 2\n"),
        ("bad.toml", "tab_size = \n"),
        ("bad.json", "{"),
        ("list.yaml", "- 1\n- 2\n"),
        ("wrong.yaml", "tab_size: wide\n"),
        ("tool.ini", "tab_size=4"),
    ],
)
def test_malformed_config(tmp_path, filename, content):
    path = tmp_path / filename
    path.write_text(content, encoding="UTF-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")


def test_find_config_prefers_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    env_file = tmp_path / "env.toml"
    env_file.write_text("tab_size = 8\n", encoding="UTF-8")
    monkeypatch.setenv("ARBOR_CONFIG", str(env_file))
    assert find_config("tool").tab_size == 8

    (tmp_path / "tool.yaml").write_text("tab_size: 5\n", encoding="UTF-8")
    assert find_config("tool").tab_size == 5


def test_find_config_user_directory(tmp_path, monkeypatch):
    home = tmp_path / "home"
    config_dir = home / ".config" / "tool"
    config_dir.mkdir(parents=True)
    (config_dir / "config.yaml").write_text("spacing: 3\n", encoding="UTF-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("ARBOR_CONFIG", raising=False)
    assert config_dir / "config.yaml" in config_candidates("tool")
    assert find_config("tool").spacing == 3


def test_find_config_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("ARBOR_CONFIG", raising=False)
    assert find_config("tool") == ProgramConfig()


@pytest.mark.parametrize("filename", ["saved.yaml", "saved.toml", "saved.json"])
def test_save_and_load(tmp_path, filename):
    path = tmp_path / filename
    save_config(ProgramConfig(tab_size=6, spacing=2), path)
    assert load_config(path) == ProgramConfig(tab_size=6, spacing=2)


def test_save_unsupported_format(tmp_path):
    with pytest.raises(ConfigError):
        save_config(ProgramConfig(), tmp_path / "saved.ini")
    assert not (tmp_path / "saved.ini").exists()
