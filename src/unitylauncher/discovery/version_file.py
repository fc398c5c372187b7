"""Reader for the ``ProjectSettings/ProjectVersion.txt`` marker file.

Unity writes a small YAML-like file into every project::

    m_EditorVersion: 2021.3.5f1
    m_EditorVersionWithRevision: 2021.3.5f1 (40eb3a945986)

Only ``m_EditorVersion`` is needed. The file is parsed line by line
instead of as YAML: older editors wrote it with stray whitespace that a
strict YAML parser rejects.
"""

from __future__ import annotations

from pathlib import Path

from unitylauncher.exceptions import MalformedRecord

VERSION_FILE = Path("ProjectSettings") / "ProjectVersion.txt"
_VERSION_KEY = "m_EditorVersion"


def version_file_path(project_dir: Path) -> Path:
    """Return where the marker file of ``project_dir`` would live."""
    return project_dir / VERSION_FILE


def parse_editor_version(text: str) -> str:
    """Extract the editor version from the marker file content.

    Args:
        text: Full content of ``ProjectVersion.txt``.

    Returns:
        The version token, e.g. ``"2021.3.5f1"``.

    Raises:
        MalformedRecord: If no non-empty ``m_EditorVersion`` entry exists.
    """
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip() == _VERSION_KEY:
            version = value.strip()
            if version:
                return version
            break
    raise MalformedRecord(f"no {_VERSION_KEY} entry")


def read_editor_version(project_dir: Path) -> str | None:
    """Read the required editor version of a candidate project.

    Args:
        project_dir: Candidate project directory.

    Returns:
        The version string, or None if the directory has no marker file
        (the usual case for a directory that is not a Unity project).

    Raises:
        MalformedRecord: If the marker file exists but cannot be read or
            parsed.
    """
    marker = version_file_path(project_dir)
    if not marker.is_file():
        return None
    try:
        text = marker.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedRecord(f"{marker}: {exc}") from exc
    try:
        return parse_editor_version(text)
    except MalformedRecord as exc:
        raise MalformedRecord(f"{marker}: {exc}") from exc
