"""Discovery of installed Unity editors and local Unity projects.

Public API::

    from unitylauncher.discovery import EditorRegistry, ProjectIndexer

    registry = EditorRegistry.scan(roots, "Editor/Unity.exe")
    projects = ProjectIndexer(registry).index(projects_root, favorites, recents)
    for project in projects:
        print(project.name, project.required_version, project.is_version_installed)
"""

from __future__ import annotations

from unitylauncher.discovery.editors import EditorRegistry
from unitylauncher.discovery.models import Editor, IndexSnapshot, Project
from unitylauncher.discovery.projects import ProjectIndexer

__all__ = [
    "Editor",
    "EditorRegistry",
    "IndexSnapshot",
    "Project",
    "ProjectIndexer",
]
