"""Tests for vault discovery by walk-up."""

from pathlib import Path

import pytest

from tasknotes.config.discovery import CONFIG_ENV_VAR, VaultLocation, find_vault, is_vault_root


class TestFindVault:
    def test_config_in_start_dir(self, tmp_path: Path) -> None:
        (tmp_path / "tasknotes.toml").write_text("")
        root = tmp_path.resolve()
        assert find_vault(tmp_path) == VaultLocation(root, root / "tasknotes.toml")

    def test_walks_up_to_config(self, tmp_path: Path) -> None:
        (tmp_path / "tasknotes.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        location = find_vault(nested)
        assert location is not None
        assert location.root == tmp_path.resolve()
        assert location.config == (tmp_path / "tasknotes.toml").resolve()

    @pytest.mark.parametrize("marker", [".obsidian", ".tasknotes"])
    def test_marker_dir_without_config(self, tmp_path: Path, marker: str) -> None:
        (tmp_path / marker).mkdir()
        nested = tmp_path / "projects"
        nested.mkdir()
        assert find_vault(nested) == VaultLocation(tmp_path.resolve(), None)

    def test_nearest_vault_wins(self, tmp_path: Path) -> None:
        (tmp_path / "tasknotes.toml").write_text("")
        inner = tmp_path / "inner"
        (inner / ".obsidian").mkdir(parents=True)
        assert find_vault(inner) == VaultLocation(inner.resolve(), None)

    def test_marker_must_be_a_directory(self, tmp_path: Path) -> None:
        (tmp_path / ".obsidian").write_text("")
        assert not is_vault_root(tmp_path)

    def test_env_var_replaces_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        other = tmp_path / "elsewhere.toml"
        other.write_text("")
        (tmp_path / "tasknotes.toml").write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(other))
        assert find_vault(tmp_path) == VaultLocation(tmp_path.resolve(), other)

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "tasknotes.toml").write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
        assert find_vault(tmp_path) == VaultLocation(tmp_path.resolve(), None)

    def test_env_var_without_vault_sets_root(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_dir = tmp_path / "conf"
        config_dir.mkdir()
        config = config_dir / "tasknotes.toml"
        config.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config))
        monkeypatch.setattr("tasknotes.config.discovery._walk_up", lambda _start: None)
        assert find_vault(tmp_path) == VaultLocation(config_dir.resolve(), config)

    def test_no_vault(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("tasknotes.config.discovery._walk_up", lambda _start: None)
        assert find_vault(tmp_path) is None
