"""Unity Hub metadata store and per-platform layout.

``UnityHubStore`` combines the Hub JSON files with the Editor's
recent-projects preferences for the configured platform, and
``collect_sources`` turns it into the inputs of one reload.

Platform Notes:
    Windows keeps the Hub install folder in the registry
    (``HKLM\\SOFTWARE\\Unity Technologies\\Hub``). macOS and Linux have no
    such record, so a few well-known locations are probed instead.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from unitylauncher.config import LauncherConfig
from unitylauncher.exceptions import MalformedRecord, SourceUnavailable
from unitylauncher.stores.base import (
    PRODUCT_EDITORS,
    PRODUCT_HUB,
    STORE_FAVORITES,
    STORE_PROJECT_DIR,
    STORE_RECENT_PROJECTS,
    STORE_SECONDARY_INSTALL,
    MetadataStore,
)
from unitylauncher.stores.hub_files import (
    read_favorites,
    read_project_dir,
    read_secondary_install_path,
)
from unitylauncher.stores.recents import (
    LINUX_EDITOR_PREFS,
    MACOS_EDITOR_PLIST,
    read_plist_recent_projects,
    read_prefs_recent_projects,
    read_windows_recent_projects,
)

logger = logging.getLogger(__name__)

WINDOWS_HUB_KEY = r"SOFTWARE\Unity Technologies\Hub"


@dataclass(frozen=True)
class PlatformLayout:
    """Where Unity puts things on one platform.

    Attributes:
        name: Human-readable platform name.
        executable_subpath: Editor executable relative to a version folder.
        default_editor_root: Hub's default editor install folder.
        hub_data_dir: Hub data folder, relative to home unless absolute.
        hub_candidates: Hub executables to probe, in order.
    """

    name: str
    executable_subpath: PurePath
    default_editor_root: Path
    hub_data_dir: Path
    hub_candidates: tuple[Path, ...] = field(default_factory=tuple)


def platform_layout(platform: str, home: Path) -> PlatformLayout:
    """Return the Unity layout for a ``sys.platform`` value."""
    if platform in ("win32", "cygwin"):
        appdata = os.environ.get("APPDATA")
        data_dir = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return PlatformLayout(
            name="Windows",
            executable_subpath=PurePath("Editor", "Unity.exe"),
            default_editor_root=Path(r"C:\Program Files\Unity\Hub\Editor"),
            hub_data_dir=data_dir / "UnityHub",
        )
    if platform == "darwin":
        return PlatformLayout(
            name="macOS",
            executable_subpath=PurePath("Unity.app", "Contents", "MacOS", "Unity"),
            default_editor_root=Path("/Applications/Unity/Hub/Editor"),
            hub_data_dir=home / "Library" / "Application Support" / "UnityHub",
            hub_candidates=(Path("/Applications/Unity Hub.app/Contents/MacOS/Unity Hub"),),
        )
    config_home = os.environ.get("XDG_CONFIG_HOME")
    return PlatformLayout(
        name="Linux",
        executable_subpath=PurePath("Editor", "Unity"),
        default_editor_root=home / "Unity" / "Hub" / "Editor",
        hub_data_dir=(Path(config_home) if config_home else home / ".config") / "UnityHub",
        hub_candidates=(
            home / "Applications" / "Unity Hub.AppImage",
            Path("/usr/bin/unityhub"),
            Path("/opt/unityhub/unityhub"),
        ),
    )


def _windows_hub_executable() -> Path | None:
    try:
        import winreg
    except ImportError:
        return None
    try:
        key = winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, WINDOWS_HUB_KEY)
    except OSError:
        return None
    try:
        location, _kind = winreg.QueryValueEx(key, "InstallLocation")
    except OSError:
        return None
    finally:
        winreg.CloseKey(key)
    return Path(location) / "Unity Hub.exe" if location else None


class UnityHubStore(MetadataStore):
    """Metadata store backed by the Hub data folder and Editor prefs.

    Args:
        config: Effective launcher configuration; path overrides in it
            take precedence over what the Hub records.
    """

    def __init__(self, config: LauncherConfig) -> None:
        self._config = config
        self.layout = platform_layout(config.platform, config.home)
        self.data_dir = config.hub_data_dir or self.layout.hub_data_dir

    def get_install_root(self, product_key: str) -> Path | None:
        if product_key == PRODUCT_EDITORS:
            return self.layout.default_editor_root
        if product_key != PRODUCT_HUB:
            raise KeyError(product_key)

        if self._config.hub_executable is not None:
            candidates: tuple[Path, ...] = (self._config.hub_executable,)
        elif self._config.platform in ("win32", "cygwin"):
            found = _windows_hub_executable()
            candidates = (found,) if found else ()
        else:
            candidates = self.layout.hub_candidates
        for candidate in candidates:
            if candidate.is_file():
                return candidate
        return None

    def load_list(self, store_id: str) -> list[str]:
        if store_id == STORE_FAVORITES:
            return read_favorites(self.data_dir)
        if store_id == STORE_SECONDARY_INSTALL:
            return read_secondary_install_path(self.data_dir)
        if store_id == STORE_PROJECT_DIR:
            return read_project_dir(self.data_dir)
        if store_id == STORE_RECENT_PROJECTS:
            return self._recent_projects()
        raise KeyError(store_id)

    def _recent_projects(self) -> list[str]:
        platform = self._config.platform
        if platform in ("win32", "cygwin"):
            return read_windows_recent_projects()
        if platform == "darwin":
            return read_plist_recent_projects(self._config.home / MACOS_EDITOR_PLIST)
        return read_prefs_recent_projects(self._config.home / LINUX_EDITOR_PREFS)


@dataclass(frozen=True)
class HubSources:
    """Inputs of one reload, as read from the metadata store.

    Attributes:
        editor_roots: Editor install roots, highest priority first.
        executable_subpath: Editor executable relative to a version folder.
        projects_root: Hub projects folder, if known.
        favorites: Favorite project paths.
        recents: Recently-used project paths.
        hub_executable: Fallback launcher, if found.
    """

    editor_roots: tuple[Path, ...]
    executable_subpath: PurePath
    projects_root: Path | None = None
    favorites: tuple[str, ...] = ()
    recents: tuple[str, ...] = ()
    hub_executable: Path | None = None


def collect_sources(
    store: MetadataStore,
    config: LauncherConfig,
    warn: Callable[[str], None],
) -> HubSources:
    """Read every input of a reload, degrading each one independently.

    Args:
        store: Metadata store to read.
        config: Effective configuration (overrides win over the store).
        warn: Receives one message per unavailable source.

    Returns:
        The collected sources. Never raises for a missing source.
    """
    layout = platform_layout(config.platform, config.home)

    if config.editor_roots:
        editor_roots = tuple(config.editor_roots)
    else:
        roots: list[Path] = []
        primary = store.get_install_root(PRODUCT_EDITORS)
        if primary is not None:
            roots.append(primary)
        roots.extend(Path(p) for p in _optional_list(store, STORE_SECONDARY_INSTALL, warn))
        editor_roots = tuple(roots)

    if config.projects_root is not None:
        projects_root: Path | None = config.projects_root
    else:
        found = store.read_platform_list(STORE_PROJECT_DIR, warn)
        projects_root = Path(found[0]) if found else None

    hub_executable = store.get_install_root(PRODUCT_HUB)
    if hub_executable is None:
        warn("Unity Hub not found")

    return HubSources(
        editor_roots=editor_roots,
        executable_subpath=layout.executable_subpath,
        projects_root=projects_root,
        favorites=tuple(store.read_platform_list(STORE_FAVORITES, warn)),
        recents=tuple(store.read_platform_list(STORE_RECENT_PROJECTS, warn)),
        hub_executable=hub_executable,
    )


def _optional_list(
    store: MetadataStore, store_id: str, warn: Callable[[str], None],
) -> list[str]:
    """Read a list whose absence is normal (e.g. no secondary install)."""
    try:
        return store.load_list(store_id)
    except SourceUnavailable:
        logger.debug("Store %s not present", store_id)
        return []
    except MalformedRecord as exc:
        warn(str(exc))
        return []
