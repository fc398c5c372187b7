"""Registry of installed Unity editors.

Each editor root (the Hub's primary install location, then the optional
secondary location) contains one directory per installed version::

    <root>/2021.3.5f1/Editor/Unity.exe
    <root>/2022.3.10f1/Editor/Unity.exe

Roots are scanned in priority order. A version found under more than one
root keeps the entry from the first root.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path, PurePath

from unitylauncher.discovery.models import Editor

logger = logging.getLogger(__name__)


class EditorRegistry:
    """Immutable mapping from version string to installed editor.

    Usage::

        registry = EditorRegistry.scan([primary, secondary], "Editor/Unity.exe")
        editor = registry.get("2021.3.5f1")
    """

    def __init__(self, editors: Iterable[Editor] = ()) -> None:
        self._editors: dict[str, Editor] = {}
        for editor in editors:
            self._editors.setdefault(editor.version, editor)

    @classmethod
    def scan(
        cls,
        roots: Iterable[Path],
        executable_subpath: str | PurePath,
        warn: Callable[[str], None] | None = None,
    ) -> EditorRegistry:
        """Enumerate installed editors under each root, in order.

        Args:
            roots: Editor install roots, highest priority first.
            executable_subpath: Location of the executable relative to a
                version directory.
            warn: Receives a message for every root that cannot be read.

        Returns:
            A registry holding the first editor found for each version.
        """
        found: list[Editor] = []
        for root in roots:
            try:
                found.extend(_scan_root(Path(root), executable_subpath))
            except OSError as exc:
                message = f"Editor folder {root} could not be read: {exc.strerror or exc}"
                logger.debug("%s", message)
                if warn is not None:
                    warn(message)
        registry = cls(found)
        logger.debug("Found %d Unity editor(s)", len(registry))
        return registry

    def get(self, version: str) -> Editor | None:
        """Return the editor installed for ``version``, if any."""
        return self._editors.get(version)

    def versions(self) -> list[str]:
        """Return the installed version strings, sorted."""
        return sorted(self._editors)

    def __contains__(self, version: object) -> bool:
        return version in self._editors

    def __iter__(self) -> Iterator[Editor]:
        return iter(self._editors.values())

    def __len__(self) -> int:
        return len(self._editors)

    def __repr__(self) -> str:
        return f"EditorRegistry({self.versions()!r})"


def _scan_root(root: Path, executable_subpath: str | PurePath) -> list[Editor]:
    """List the editors directly under one root.

    Raises:
        OSError: If the root does not exist or cannot be listed.
    """
    editors: list[Editor] = []
    for entry in sorted(root.iterdir()):
        try:
            if not entry.is_dir():
                continue
            executable = entry / executable_subpath
            if not executable.is_file():
                continue
        except OSError:
            continue
        editors.append(Editor(version=entry.name, launch_path=executable))
    return editors
