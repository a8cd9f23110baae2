from __future__ import annotations

from pathlib import Path

import pytest

from easy_alias import config
from easy_alias.errors import HomeDirectoryError


@pytest.fixture
def tmp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(config.CONFIG_ENV, raising=False)
    monkeypatch.delenv(config.DATA_HOME_ENV, raising=False)
    return home


# ----------------------------------------------------------------
# Packaged defaults
# ----------------------------------------------------------------


def test_load_system_config_reads_packaged_yaml() -> None:
    cfg = config.load_system_config()
    assert cfg.get_path("system.name") == "easy-alias"
    assert cfg.store == {"directory": ".config", "filename": "eaconfig"}
    assert cfg.get_path("execution.shell") == "/bin/sh"
    assert cfg.get_path("substitution.strict_keys") is False


def test_load_defaults_yaml_missing_file_raises() -> None:
    with pytest.raises(FileNotFoundError):
        config.load_defaults_yaml("nope.yaml")


def test_get_path_nested_and_defaults() -> None:
    cfg = config.YAMLConfig({"ui": {"color": False}, "flat": 1})
    assert cfg.get_path("ui.color", True) is False
    assert cfg.get_path("ui.missing", "d") == "d"
    assert cfg.get_path("flat.deeper", "d") == "d"
    assert cfg.get_path("", "d") == "d"
    assert cfg.get_path("flat") == 1


def test_sections_tolerate_non_mapping_values() -> None:
    cfg = config.YAMLConfig({"store": "oops"})
    assert cfg.store == {}
    assert cfg.get_path("store.directory", "d") == "d"


# ----------------------------------------------------------------
# Alias file location
# ----------------------------------------------------------------


def test_store_config_defaults_to_home_dot_config(tmp_home: Path) -> None:
    """
    Default alias file is <home>/.config/eaconfig.
    """
    sc = config.store_config(config.load_system_config())
    assert sc.path == tmp_home / ".config" / "eaconfig"


def test_store_config_without_yaml_uses_builtin_defaults(tmp_home: Path) -> None:
    assert config.store_config().path == tmp_home / ".config" / "eaconfig"


def test_store_config_respects_yaml_store_section(tmp_path: Path) -> None:
    cfg = config.YAMLConfig({"store": {"directory": "etc", "filename": "aliases"}})
    sc = config.store_config(cfg, environ={}, home=tmp_path)
    assert sc.path == tmp_path / "etc" / "aliases"


def test_store_config_env_override_wins(tmp_path: Path) -> None:
    target = tmp_path / "elsewhere" / "file"
    sc = config.store_config(
        config.load_system_config(),
        environ={config.CONFIG_ENV: str(target)},
        home=tmp_path / "ignored",
    )
    assert sc.path == target


def test_store_config_does_not_create_anything(tmp_home: Path) -> None:
    config.store_config()
    assert not (tmp_home / ".config").exists()


def test_home_dir_failure_is_reported_not_crashing(monkeypatch: pytest.MonkeyPatch) -> None:
    def no_home():
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(config.Path, "home", staticmethod(no_home))
    monkeypatch.delenv(config.CONFIG_ENV, raising=False)

    with pytest.raises(HomeDirectoryError) as exc:
        config.store_config()
    assert exc.value.exit_code == 5


def test_env_override_does_not_need_home(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def no_home():
        raise RuntimeError("no home")

    monkeypatch.setattr(config.Path, "home", staticmethod(no_home))
    monkeypatch.setenv(config.CONFIG_ENV, str(tmp_path / "f"))
    assert config.store_config().path == tmp_path / "f"


# ----------------------------------------------------------------
# Data root / crash log
# ----------------------------------------------------------------


def test_get_data_root_prefers_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(config.DATA_HOME_ENV, str(tmp_path / "data"))
    assert config.get_data_root() == tmp_path / "data"
    # Nothing is created until a crash log is written
    assert not (tmp_path / "data").exists()


def test_get_data_root_defaults_to_local_share(tmp_home: Path) -> None:
    assert config.get_data_root() == tmp_home / ".local" / "share"


def test_crash_log_path_layout(tmp_path: Path) -> None:
    assert config.crash_log_path(tmp_path) == (
        tmp_path / "easy-alias" / "logs" / "crash.log"
    )


# ----------------------------------------------------------------
# Color
# ----------------------------------------------------------------


def test_color_enabled_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NO_COLOR", raising=False)
    assert config.color_enabled(config.load_system_config()) is True
    assert config.color_enabled(None) is True


def test_color_disabled_by_no_color_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    assert config.color_enabled(config.load_system_config()) is False


def test_color_disabled_by_yaml(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NO_COLOR", raising=False)
    assert config.color_enabled(config.YAMLConfig({"ui": {"color": False}})) is False
