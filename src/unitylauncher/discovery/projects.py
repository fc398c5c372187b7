"""Project indexer: merges candidate sources and reconciles versions.

Discovery Algorithm:
    1. Gather candidates: every subdirectory of the Hub projects folder,
       every favorites entry and every recently-used entry.
    2. Deduplicate by normalised path (first spelling seen wins).
    3. Resolve each candidate on its own worker, at most ``max_workers``
       at a time: read ``ProjectSettings/ProjectVersion.txt``, look the
       version up in the editor registry, check favorites membership,
       stat the directory. Each read is timed from when it starts.
    4. Join, dropping candidates that are not projects, are malformed, or
       took longer than the per-candidate timeout.

Each candidate is independent, so a broken or hung project only removes
itself from the index.
"""

from __future__ import annotations

import concurrent.futures
import logging
import threading
import time
from collections import deque
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path, PureWindowsPath

from unitylauncher.discovery.editors import EditorRegistry
from unitylauncher.discovery.models import Project
from unitylauncher.discovery.paths import normalize_path
from unitylauncher.discovery.version_file import read_editor_version
from unitylauncher.exceptions import MalformedRecord, SourceUnavailable

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8
DEFAULT_CANDIDATE_TIMEOUT = 2.0


def list_project_root(root: Path) -> list[Path]:
    """Return the immediate subdirectories of the projects folder.

    Raises:
        SourceUnavailable: If the folder is missing or cannot be listed.
    """
    try:
        entries = sorted(root.iterdir())
    except OSError as exc:
        raise SourceUnavailable(
            f"Projects folder {root} could not be read: {exc.strerror or exc}"
        ) from exc
    children: list[Path] = []
    for entry in entries:
        try:
            if entry.is_dir():
                children.append(entry)
        except OSError:
            continue
    return children


def project_name(path: Path, platform: str | None = None) -> str:
    """Return the display name of a project: its last path segment."""
    if platform in ("win32", "cygwin"):
        return PureWindowsPath(str(path)).name
    return path.name


class ProjectIndexer:
    """Builds the project list for one editor registry snapshot.

    Usage::

        indexer = ProjectIndexer(registry, warn=channel.warn)
        projects = indexer.index(projects_root, favorites, recents)

    Args:
        registry: Editor registry the ``is_version_installed`` flag is
            computed against. The flag is a snapshot of this registry.
        warn: Receives one message per dropped candidate or unreadable
            source.
        max_workers: Upper bound on concurrent candidate reads.
        candidate_timeout: Seconds to wait for a single candidate.
        platform: ``sys.platform`` value used for path comparison.
    """

    def __init__(
        self,
        registry: EditorRegistry,
        *,
        warn: Callable[[str], None] | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        candidate_timeout: float = DEFAULT_CANDIDATE_TIMEOUT,
        platform: str | None = None,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self._registry = registry
        self._warn = warn or (lambda message: logger.warning("%s", message))
        self._max_workers = max_workers
        self._candidate_timeout = candidate_timeout
        self._platform = platform

    def gather_candidates(
        self,
        projects_root: Path | None,
        favorites: Iterable[str | Path] = (),
        recents: Iterable[str | Path] = (),
    ) -> list[Path]:
        """Union of all candidate sources, deduplicated by normalised path.

        Args:
            projects_root: Hub projects folder, or None if not configured.
            favorites: Favorite project paths.
            recents: Recently-used project paths.

        Returns:
            Candidate paths in first-seen order.
        """
        sources: list[Iterable[str | Path]] = []
        if projects_root is not None:
            try:
                sources.append(list_project_root(Path(projects_root)))
            except SourceUnavailable as exc:
                self._warn(str(exc))
        sources.append(favorites)
        sources.append(recents)

        seen: dict[str, Path] = {}
        for source in sources:
            for raw in source:
                if not str(raw).strip():
                    continue
                key = normalize_path(raw, self._platform)
                if key not in seen:
                    seen[key] = Path(raw)
        return list(seen.values())

    def resolve(self, path: Path, favorite_keys: frozenset[str] = frozenset()) -> Project | None:
        """Turn one candidate path into a ``Project``.

        Returns:
            The project, or None if ``path`` has no version marker.

        Raises:
            MalformedRecord: If the marker is unreadable or unparseable, or
                the directory cannot be stat'ed.
        """
        version = read_editor_version(path)
        if version is None:
            return None
        try:
            mtime = path.stat().st_mtime
        except OSError as exc:
            raise MalformedRecord(f"{path}: {exc.strerror or exc}") from exc
        return Project(
            name=project_name(path, self._platform),
            path=path,
            required_version=version,
            is_favorite=normalize_path(path, self._platform) in favorite_keys,
            is_version_installed=version in self._registry,
            last_modified=datetime.fromtimestamp(mtime),
        )

    def _start(self, path: Path, favorite_keys: frozenset[str]) -> concurrent.futures.Future:
        """Resolve ``path`` on its own daemon thread.

        A read that never returns keeps its thread but not its slot: the
        caller stops waiting on it and the thread cannot hold up exit.
        """
        future: concurrent.futures.Future = concurrent.futures.Future()

        def run() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(self.resolve(path, favorite_keys))
            except BaseException as exc:  # noqa: BLE001 - handed to the waiting caller
                future.set_exception(exc)

        threading.Thread(
            target=run, name=f"unitylauncher-index-{path.name}", daemon=True,
        ).start()
        return future

    def index(
        self,
        projects_root: Path | None,
        favorites: Iterable[str | Path] = (),
        recents: Iterable[str | Path] = (),
    ) -> tuple[Project, ...]:
        """Gather, resolve and join all candidates.

        At most ``max_workers`` reads run at once. Each read has
        ``candidate_timeout`` seconds from the moment it starts; one that
        overruns is abandoned and its slot goes to the next candidate.

        Args:
            projects_root: Hub projects folder, or None if not configured.
            favorites: Favorite project paths.
            recents: Recently-used project paths.

        Returns:
            The indexed projects, in candidate order.
        """
        favorites = list(favorites)
        favorite_keys = frozenset(normalize_path(f, self._platform) for f in favorites if str(f).strip())
        candidates = self.gather_candidates(projects_root, favorites, recents)
        if not candidates:
            return ()

        queue = deque(enumerate(candidates))
        running: dict[concurrent.futures.Future, tuple[int, Path, float]] = {}
        resolved: dict[int, Project] = {}
        while queue or running:
            while queue and len(running) < self._max_workers:
                position, path = queue.popleft()
                deadline = time.monotonic() + self._candidate_timeout
                running[self._start(path, favorite_keys)] = (position, path, deadline)

            nearest = min(deadline for _, _, deadline in running.values())
            done, _ = concurrent.futures.wait(
                running,
                timeout=max(0.0, nearest - time.monotonic()),
                return_when=concurrent.futures.FIRST_COMPLETED,
            )
            for future in done:
                position, path, _ = running.pop(future)
                project = self._collect(path, future)
                if project is not None:
                    resolved[position] = project

            now = time.monotonic()
            for future, (_, path, deadline) in list(running.items()):
                if deadline <= now and not future.done():
                    del running[future]
                    self._warn(f"Skipped project {path}: timed out reading it")

        logger.debug(
            "Indexed %d project(s) from %d candidate(s)", len(resolved), len(candidates),
        )
        return tuple(resolved[position] for position in sorted(resolved))

    def _collect(self, path: Path, future: concurrent.futures.Future) -> Project | None:
        try:
            return future.result()
        except MalformedRecord as exc:
            self._warn(f"Skipped project {path}: {exc}")
        except OSError as exc:
            self._warn(f"Skipped project {path}: {exc.strerror or exc}")
        return None
