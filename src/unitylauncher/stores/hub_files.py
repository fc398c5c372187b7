"""Readers for the Unity Hub's JSON data files.

The Hub keeps its settings as small JSON files in its data folder
(``%APPDATA%\\UnityHub`` on Windows). Several of them hold a JSON value
that was serialised a second time, so the file content is a JSON *string*
whose text is the real document::

    "[\\"C:\\\\\\\\Projects\\\\\\\\Game\\"]"

``decode_hub_json`` unwraps one such layer when it finds one.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from unitylauncher.exceptions import MalformedRecord, SourceUnavailable

FAVORITES_FILE = "favoriteProjects.json"
SECONDARY_INSTALL_FILE = "secondaryInstallPath.json"
PROJECT_DIR_FILE = "projectDir.json"


def read_hub_file(path: Path) -> str:
    """Return the text of a Hub data file.

    Raises:
        SourceUnavailable: If the file is missing or unreadable.
    """
    try:
        return path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as exc:
        raise SourceUnavailable(f"Unity Hub file {path} not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceUnavailable(f"Unity Hub file {path} could not be read: {exc}") from exc


def decode_hub_json(text: str, *, unwrap: bool = True) -> Any:
    """Decode Hub JSON, optionally unwrapping one string-encoded layer.

    Raises:
        MalformedRecord: If the text (or the unwrapped text) is not JSON.
    """
    try:
        value = json.loads(text)
        if unwrap and isinstance(value, str) and value.strip()[:1] in ("[", "{"):
            value = json.loads(value)
    except json.JSONDecodeError as exc:
        raise MalformedRecord(f"invalid JSON: {exc.msg}") from exc
    return value


def read_favorites(data_dir: Path) -> list[str]:
    """Read the Hub's favorite project paths.

    Raises:
        SourceUnavailable: If ``favoriteProjects.json`` is missing.
        MalformedRecord: If it is not a JSON list of strings.
    """
    path = data_dir / FAVORITES_FILE
    try:
        value = decode_hub_json(read_hub_file(path))
    except MalformedRecord as exc:
        raise MalformedRecord(f"{path}: {exc}") from exc
    if not isinstance(value, list):
        raise MalformedRecord(f"{path}: expected a list of paths")
    return [entry for entry in value if isinstance(entry, str) and entry.strip()]


def read_secondary_install_path(data_dir: Path) -> list[str]:
    """Read the Hub's secondary editor install folder.

    Returns:
        A one-element list, or an empty list if the Hub stores an empty
        string (no secondary location configured).

    Raises:
        SourceUnavailable: If ``secondaryInstallPath.json`` is missing.
        MalformedRecord: If it does not hold a JSON string.
    """
    path = data_dir / SECONDARY_INSTALL_FILE
    try:
        value = decode_hub_json(read_hub_file(path), unwrap=False)
    except MalformedRecord as exc:
        raise MalformedRecord(f"{path}: {exc}") from exc
    if not isinstance(value, str):
        raise MalformedRecord(f"{path}: expected a path string")
    value = value.strip()
    return [value] if value else []


def read_project_dir(data_dir: Path) -> list[str]:
    """Read the Hub's default projects folder.

    Raises:
        SourceUnavailable: If ``projectDir.json`` is missing.
        MalformedRecord: If it has no ``directoryPath`` string.
    """
    path = data_dir / PROJECT_DIR_FILE
    try:
        value = decode_hub_json(read_hub_file(path))
    except MalformedRecord as exc:
        raise MalformedRecord(f"{path}: {exc}") from exc
    directory = value.get("directoryPath") if isinstance(value, dict) else None
    if directory is not None and not isinstance(directory, str):
        raise MalformedRecord(f"{path}: directoryPath must be a string")
    if not directory:
        raise MalformedRecord(f"{path}: no directoryPath entry")
    return [directory]
