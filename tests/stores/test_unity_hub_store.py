"""Tests for UnityHubStore and reload source collection."""

from __future__ import annotations

from pathlib import Path, PurePath

import pytest

from unitylauncher.config import LauncherConfig
from unitylauncher.exceptions import MalformedRecord
from unitylauncher.stores.base import (
    PRODUCT_EDITORS,
    PRODUCT_HUB,
    STORE_FAVORITES,
    STORE_PROJECT_DIR,
    STORE_RECENT_PROJECTS,
    STORE_SECONDARY_INSTALL,
)
from unitylauncher.stores.unity_hub import UnityHubStore, collect_sources, platform_layout

from tests.discovery.helpers import write_hub_data, write_linux_prefs
from tests.fakes import FakeStore


def _linux_config(tmp_path: Path, **kwargs) -> LauncherConfig:
    return LauncherConfig(platform="linux", home=tmp_path, hub_data_dir=tmp_path / "hub", **kwargs)


class TestPlatformLayout:
    def test_windows(self, tmp_path: Path) -> None:
        layout = platform_layout("win32", tmp_path)
        assert layout.executable_subpath == PurePath("Editor", "Unity.exe")
        assert layout.hub_data_dir.name == "UnityHub"

    def test_macos(self, tmp_path: Path) -> None:
        layout = platform_layout("darwin", tmp_path)
        assert layout.executable_subpath.parts[-1] == "Unity"
        assert layout.hub_data_dir == tmp_path / "Library" / "Application Support" / "UnityHub"

    def test_linux(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        layout = platform_layout("linux", tmp_path)
        assert layout.executable_subpath == PurePath("Editor", "Unity")
        assert layout.hub_data_dir == tmp_path / ".config" / "UnityHub"
        assert layout.default_editor_root == tmp_path / "Unity" / "Hub" / "Editor"


class TestUnityHubStore:
    """Test the Linux store end to end against a fake home."""

    def test_lists(self, tmp_path: Path) -> None:
        write_hub_data(
            tmp_path / "hub",
            favorites=["/p/Fav"],
            projects_dir=tmp_path / "Projects",
            secondary_install="/opt/unity",
        )
        write_linux_prefs(tmp_path, ["/p/Recent"])
        store = UnityHubStore(_linux_config(tmp_path))
        assert store.load_list(STORE_FAVORITES) == ["/p/Fav"]
        assert store.load_list(STORE_PROJECT_DIR) == [str(tmp_path / "Projects")]
        assert store.load_list(STORE_SECONDARY_INSTALL) == ["/opt/unity"]
        assert store.load_list(STORE_RECENT_PROJECTS) == ["/p/Recent"]

    def test_unknown_store_id(self, tmp_path: Path) -> None:
        with pytest.raises(KeyError):
            UnityHubStore(_linux_config(tmp_path)).load_list("nope")

    def test_read_platform_list_degrades(self, tmp_path: Path) -> None:
        messages: list[str] = []
        store = UnityHubStore(_linux_config(tmp_path))
        assert store.read_platform_list(STORE_FAVORITES, messages.append) == []
        assert len(messages) == 1
        assert "favoriteProjects.json" in messages[0]

    def test_hub_override(self, tmp_path: Path) -> None:
        hub = tmp_path / "unityhub"
        hub.write_text("")
        store = UnityHubStore(_linux_config(tmp_path, hub_executable=hub))
        assert store.get_install_root(PRODUCT_HUB) == hub

    def test_hub_override_missing_file(self, tmp_path: Path) -> None:
        store = UnityHubStore(_linux_config(tmp_path, hub_executable=tmp_path / "absent"))
        assert store.get_install_root(PRODUCT_HUB) is None

    def test_editors_root(self, tmp_path: Path) -> None:
        store = UnityHubStore(_linux_config(tmp_path))
        assert store.get_install_root(PRODUCT_EDITORS) == tmp_path / "Unity" / "Hub" / "Editor"


class TestCollectSources:
    """Test that each source degrades independently."""

    def test_all_sources(self, tmp_path: Path) -> None:
        hub = tmp_path / "hub.exe"
        store = FakeStore(
            editors_root=tmp_path / "editors",
            hub=hub,
            lists={
                STORE_SECONDARY_INSTALL: [str(tmp_path / "second")],
                STORE_PROJECT_DIR: [str(tmp_path / "projects")],
                STORE_FAVORITES: ["/p/Fav"],
                STORE_RECENT_PROJECTS: ["/p/Recent"],
            },
        )
        messages: list[str] = []
        sources = collect_sources(store, LauncherConfig(platform="linux", home=tmp_path), messages.append)
        assert sources.editor_roots == (tmp_path / "editors", tmp_path / "second")
        assert sources.projects_root == tmp_path / "projects"
        assert sources.favorites == ("/p/Fav",)
        assert sources.recents == ("/p/Recent",)
        assert sources.hub_executable == hub
        assert messages == []

    def test_missing_sources_warn(self, tmp_path: Path) -> None:
        store = FakeStore(editors_root=tmp_path / "editors")
        messages: list[str] = []
        sources = collect_sources(store, LauncherConfig(platform="linux", home=tmp_path), messages.append)
        assert sources.editor_roots == (tmp_path / "editors",)
        assert sources.projects_root is None
        assert sources.favorites == ()
        assert sources.recents == ()
        assert sources.hub_executable is None
        assert any("Unity Hub not found" in m for m in messages)
        assert any(STORE_FAVORITES in m for m in messages)

    def test_missing_secondary_install_is_silent(self, tmp_path: Path) -> None:
        store = FakeStore(editors_root=tmp_path / "e", hub=tmp_path / "h", lists={
            STORE_PROJECT_DIR: [], STORE_FAVORITES: [], STORE_RECENT_PROJECTS: [],
        })
        messages: list[str] = []
        collect_sources(store, LauncherConfig(platform="linux", home=tmp_path), messages.append)
        assert messages == []

    def test_malformed_favorites_only_affects_favorites(self, tmp_path: Path) -> None:
        store = FakeStore(lists={
            STORE_FAVORITES: MalformedRecord("favoriteProjects.json: invalid JSON"),
            STORE_RECENT_PROJECTS: ["/p/Recent"],
        })
        messages: list[str] = []
        sources = collect_sources(store, LauncherConfig(platform="linux", home=tmp_path), messages.append)
        assert sources.favorites == ()
        assert sources.recents == ("/p/Recent",)
        assert any("invalid JSON" in m for m in messages)

    def test_config_overrides_win(self, tmp_path: Path) -> None:
        store = FakeStore(editors_root=tmp_path / "ignored", lists={
            STORE_PROJECT_DIR: ["/ignored"],
        })
        config = LauncherConfig(
            platform="linux", home=tmp_path,
            editor_roots=(tmp_path / "mine",), projects_root=tmp_path / "projects",
        )
        sources = collect_sources(store, config, lambda m: None)
        assert sources.editor_roots == (tmp_path / "mine",)
        assert sources.projects_root == tmp_path / "projects"
