"""Tests for ProjectVersion.txt parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from unitylauncher.discovery.version_file import (
    parse_editor_version,
    read_editor_version,
)
from unitylauncher.exceptions import MalformedRecord

from tests.discovery.helpers import create_project


class TestParseEditorVersion:
    """Test parsing of the marker file content."""

    def test_standard_file(self) -> None:
        text = (
            "m_EditorVersion: 2021.3.5f1\n"
            "m_EditorVersionWithRevision: 2021.3.5f1 (40eb3a945986)\n"
        )
        assert parse_editor_version(text) == "2021.3.5f1"

    def test_crlf_line_endings(self) -> None:
        assert parse_editor_version("m_EditorVersion: 2019.4.1f1\r\n") == "2019.4.1f1"

    def test_revision_line_first(self) -> None:
        """Only the exact key matches, not a key with the same prefix."""
        text = (
            "m_EditorVersionWithRevision: 2021.3.5f1 (40eb3a945986)\n"
            "m_EditorVersion: 2021.3.5f1\n"
        )
        assert parse_editor_version(text) == "2021.3.5f1"

    def test_extra_whitespace(self) -> None:
        assert parse_editor_version("  m_EditorVersion :   2020.1.0f1  \n") == "2020.1.0f1"

    def test_missing_key(self) -> None:
        with pytest.raises(MalformedRecord):
            parse_editor_version("m_SomethingElse: 1\n")

    def test_empty_value(self) -> None:
        with pytest.raises(MalformedRecord):
            parse_editor_version("m_EditorVersion:\n")

    def test_empty_file(self) -> None:
        with pytest.raises(MalformedRecord):
            parse_editor_version("")


class TestReadEditorVersion:
    """Test reading the marker from a project directory."""

    def test_valid_project(self, tmp_path: Path) -> None:
        project = create_project(tmp_path, "Game", "2022.3.10f1")
        assert read_editor_version(project) == "2022.3.10f1"

    def test_directory_without_marker(self, tmp_path: Path) -> None:
        """A plain folder is not a project: None, not an error."""
        folder = tmp_path / "NotAProject"
        folder.mkdir()
        assert read_editor_version(folder) is None

    def test_nonexistent_directory(self, tmp_path: Path) -> None:
        assert read_editor_version(tmp_path / "gone") is None

    def test_malformed_marker(self, tmp_path: Path) -> None:
        project = create_project(tmp_path, "Broken", marker_text="garbage\n")
        with pytest.raises(MalformedRecord, match="ProjectVersion.txt"):
            read_editor_version(project)

    def test_undecodable_marker(self, tmp_path: Path) -> None:
        project = create_project(tmp_path, "Binary", version=None)
        (project / "ProjectSettings" / "ProjectVersion.txt").write_bytes(b"\xff\xfe\x00\x81")
        with pytest.raises(MalformedRecord):
            read_editor_version(project)
