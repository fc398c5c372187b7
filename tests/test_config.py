"""Tests for layered configuration loading."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from unitylauncher.config import LauncherConfig, load_config, read_config_file
from unitylauncher.exceptions import ConfigError


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's real config file out of these tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


class TestDefaults:
    def test_no_file_no_env(self) -> None:
        config = load_config(env={})
        assert config.max_workers == 8
        assert config.candidate_timeout == 2.0
        assert config.editor_roots == ()
        assert config.projects_root is None


class TestConfigFile:
    def test_full_file(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_text(
            "projects_root: /data/projects\n"
            "editor_roots:\n"
            "  - /opt/unity/a\n"
            "  - /opt/unity/b\n"
            "hub_executable: /opt/unityhub/unityhub\n"
            "max_workers: 4\n"
            "candidate_timeout: 0.5\n"
        )
        config = load_config(cfg, env={})
        assert config.projects_root == Path("/data/projects")
        assert config.editor_roots == (Path("/opt/unity/a"), Path("/opt/unity/b"))
        assert config.hub_executable == Path("/opt/unityhub/unityhub")
        assert config.max_workers == 4
        assert config.candidate_timeout == 0.5

    def test_single_editor_root_string(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_text("editor_roots: /opt/unity\n")
        assert load_config(cfg, env={}).editor_roots == (Path("/opt/unity"),)

    def test_empty_file(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_text("")
        assert read_config_file(cfg) == {}

    def test_env_selects_file(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.yaml"
        cfg.write_text("max_workers: 2\n")
        config = load_config(env={"UNITYLAUNCHER_CONFIG": str(cfg)})
        assert config.max_workers == 2

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_text("max_workers: [1, 2\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(cfg, env={})

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(cfg, env={})

    def test_unknown_key(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_text("colour: blue\n")
        with pytest.raises(ConfigError, match="Unknown setting"):
            load_config(cfg, env={})

    def test_wrong_type(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_text("max_workers: lots\n")
        with pytest.raises(ConfigError, match="integer"):
            load_config(cfg, env={})

    def test_explicit_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "absent.yaml", env={})


class TestEnvironment:
    def test_env_overrides_file(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_text("max_workers: 4\nprojects_root: /from/file\n")
        config = load_config(cfg, env={
            "UNITYLAUNCHER_MAX_WORKERS": "16",
            "UNITYLAUNCHER_PROJECTS_ROOT": "/from/env",
        })
        assert config.max_workers == 16
        assert config.projects_root == Path("/from/env")

    def test_editor_roots_pathsep(self) -> None:
        roots = os.pathsep.join(["/a", "/b"])
        config = load_config(env={"UNITYLAUNCHER_EDITOR_ROOTS": roots})
        assert config.editor_roots == (Path("/a"), Path("/b"))

    def test_bad_number(self) -> None:
        with pytest.raises(ConfigError):
            load_config(env={"UNITYLAUNCHER_CANDIDATE_TIMEOUT": "soon"})


class TestValidation:
    def test_zero_workers(self) -> None:
        with pytest.raises(ConfigError):
            LauncherConfig(max_workers=0).validate()

    def test_non_positive_timeout(self) -> None:
        with pytest.raises(ConfigError):
            load_config(env={}, candidate_timeout=0)

    def test_editor_roots_tuple_override(self, tmp_path: Path) -> None:
        config = load_config(env={}, editor_roots=(tmp_path / "a", tmp_path / "b"))
        assert config.editor_roots == (tmp_path / "a", tmp_path / "b")

    def test_editor_roots_mapping_rejected(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_text("editor_roots:\n  a: /opt\n")
        with pytest.raises(ConfigError, match="list of paths"):
            load_config(cfg, env={})

    def test_overrides_applied_last(self, tmp_path: Path) -> None:
        config = load_config(env={}, platform="darwin", home=tmp_path)
        assert config.platform == "darwin"
        assert config.home == tmp_path
