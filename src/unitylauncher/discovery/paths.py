"""Path normalisation used to deduplicate candidate projects.

The same project can reach the indexer through three sources, each with
its own spelling: the Hub lists children of the projects folder with
backslashes, the Editor's recent list stores forward slashes, and Windows
and macOS file systems ignore case.
"""

from __future__ import annotations

import ntpath
import os
import posixpath
import sys

CASE_INSENSITIVE_PLATFORMS = frozenset({"win32", "cygwin", "darwin"})


def is_case_insensitive(platform: str | None = None) -> bool:
    """Return True if paths on ``platform`` compare case-insensitively."""
    return (platform or sys.platform) in CASE_INSENSITIVE_PLATFORMS


def normalize_path(path: str | os.PathLike[str], platform: str | None = None) -> str:
    """Return a comparison key for ``path``.

    The key is absolute when ``platform`` is the running platform, has
    redundant separators and ``..`` segments collapsed, no trailing
    separator, and is case-folded on case-insensitive platforms. It is a
    key only, never a path to open.
    """
    platform = platform or sys.platform
    native = platform == sys.platform
    raw = os.fspath(path)
    if platform in ("win32", "cygwin"):
        raw = raw.replace("/", "\\")
        key = ntpath.abspath(raw) if native else ntpath.normpath(raw)
    else:
        key = posixpath.abspath(raw) if native else posixpath.normpath(raw)
    if is_case_insensitive(platform):
        key = key.casefold()
    return key
