"""Shared test helpers for building fake Unity installs and projects.

Each helper creates a minimal but realistic directory structure under a
temporary folder: Hub editor roots, projects with a
``ProjectSettings/ProjectVersion.txt`` marker, and Hub data files.
"""

from __future__ import annotations

import base64
import json
import os
from datetime import datetime
from pathlib import Path, PurePath

LINUX_EXE = PurePath("Editor", "Unity")


def create_editor(root: Path, version: str, subpath: str | PurePath = LINUX_EXE) -> Path:
    """Create ``<root>/<version>/<subpath>`` and return the executable."""
    exe = root / version / subpath
    exe.parent.mkdir(parents=True, exist_ok=True)
    exe.write_text("#!/bin/sh\n")
    return exe


def create_project(
    parent: Path,
    name: str,
    version: str | None = "2021.3.5f1",
    modified: datetime | None = None,
    marker_text: str | None = None,
) -> Path:
    """Create a Unity project folder.

    Args:
        parent: Folder to create the project in.
        name: Project folder name.
        version: Editor version to write; None writes no marker at all.
        modified: Directory modification time to set.
        marker_text: Raw marker content, overriding ``version``.
    """
    project = parent / name
    settings = project / "ProjectSettings"
    settings.mkdir(parents=True, exist_ok=True)
    if marker_text is not None:
        (settings / "ProjectVersion.txt").write_text(marker_text)
    elif version is not None:
        (settings / "ProjectVersion.txt").write_text(
            f"m_EditorVersion: {version}\n"
            f"m_EditorVersionWithRevision: {version} (40eb3a945986)\n"
        )
    if modified is not None:
        ts = modified.timestamp()
        os.utime(project, (ts, ts))
    return project


def write_hub_data(
    data_dir: Path,
    *,
    favorites: list[str] | None = None,
    projects_dir: Path | None = None,
    secondary_install: str | None = None,
    double_encode: bool = True,
) -> Path:
    """Write Unity Hub JSON files the way the Hub does."""
    data_dir.mkdir(parents=True, exist_ok=True)
    if favorites is not None:
        payload = json.dumps(favorites)
        if double_encode:
            payload = json.dumps(payload)
        (data_dir / "favoriteProjects.json").write_text(payload)
    if projects_dir is not None:
        (data_dir / "projectDir.json").write_text(
            json.dumps({"directoryPath": str(projects_dir)})
        )
    if secondary_install is not None:
        (data_dir / "secondaryInstallPath.json").write_text(json.dumps(secondary_install))
    return data_dir


def write_linux_prefs(home: Path, recents: list[str]) -> Path:
    """Write an Editor prefs file with RecentlyUsedProjectPaths entries."""
    prefs = home / ".local" / "share" / "unity3d" / "prefs"
    prefs.parent.mkdir(parents=True, exist_ok=True)
    lines = ['<unity_prefs version_major="1" version_minor="1">']
    for i, path in enumerate(recents):
        encoded = base64.b64encode(path.encode("utf-8")).decode("ascii")
        lines.append(
            f'\t<pref name="RecentlyUsedProjectPaths-{i}" type="string">{encoded}</pref>'
        )
    lines.append("</unity_prefs>")
    prefs.write_text("\n".join(lines))
    return prefs
