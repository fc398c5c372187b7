"""Data models for the discovery module.

Contains the immutable records produced by a reload: installed editors,
indexed projects, and the snapshot that bundles them for the query side.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from unitylauncher.discovery.editors import EditorRegistry


@dataclass(frozen=True)
class Editor:
    """A single installed Unity editor.

    Attributes:
        version: Version string taken from the install directory name
            (e.g. ``"2021.3.5f1"``). Natural key of the registry.
        launch_path: Absolute path to the editor executable.
    """

    version: str
    launch_path: Path


@dataclass(frozen=True)
class Project:
    """A local directory recognised as a Unity project.

    Attributes:
        name: Display name, the last segment of ``path``.
        path: Absolute path to the project root.
        required_version: Editor version from ``ProjectVersion.txt``.
        is_favorite: True if the path is in the Hub favorites list.
        is_version_installed: True if ``required_version`` was a key of
            the editor registry when the index was built.
        last_modified: Modification time of the project directory.
    """

    name: str
    path: Path
    required_version: str
    is_favorite: bool
    is_version_installed: bool
    last_modified: datetime


@dataclass(frozen=True)
class IndexSnapshot:
    """Everything one reload discovered, published as a single unit.

    Attributes:
        editors: Registry of installed editors.
        projects: Indexed projects, in no particular order.
        hub_executable: Fallback launcher, or None if the Hub was not found.
        built_at: When the snapshot was built.
    """

    editors: EditorRegistry
    projects: tuple[Project, ...] = ()
    hub_executable: Path | None = None
    built_at: datetime = field(default_factory=datetime.now)
