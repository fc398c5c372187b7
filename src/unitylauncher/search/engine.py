"""Query engine: ranks indexed projects and opens the chosen one.

Ranking Pipeline:
    1. Empty query: every project is a candidate with base score 0.
       Otherwise each project name is scored by the fuzzy matcher and
       projects scoring 0 are dropped.
    2. Favorite and recency bonuses are added (see ``ranking``).
    3. Results are sorted by total score, highest first; ties are broken
       by case-folded name, then by path, so output is deterministic.

Every step builds new values from the immutable snapshot; nothing is
mutated, so concurrent searches over the same snapshot are safe.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import NamedTuple

from unitylauncher.discovery.models import IndexSnapshot, Project
from unitylauncher.exceptions import QueryCancelled
from unitylauncher.launch.launcher import LaunchResult, ProcessLauncher, SubprocessLauncher
from unitylauncher.search.fuzzy import FuzzyMatcher, fuzzy_score
from unitylauncher.search.ranking import total_score

logger = logging.getLogger(__name__)

PROJECT_PATH_FLAG = "-projectPath"


class ScoredProject(NamedTuple):
    """A project paired with its relevance for one query."""

    project: Project
    score: int


def _sort_key(item: ScoredProject) -> tuple[int, str, str]:
    return (-item.score, item.project.name.casefold(), str(item.project.path))


class QueryEngine:
    """Search and launch over one published ``IndexSnapshot``.

    Args:
        snapshot: The index to search. Never modified.
        matcher: Fuzzy scoring function ``(query, text) -> int``.
        launcher: Starts editors; defaults to ``SubprocessLauncher``.
        warn: Receives user-visible warnings from ``launch``.
        clock: Returns "now" for the recency bonus.
    """

    def __init__(
        self,
        snapshot: IndexSnapshot,
        *,
        matcher: FuzzyMatcher = fuzzy_score,
        launcher: ProcessLauncher | None = None,
        warn: Callable[[str], None] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._snapshot = snapshot
        self._matcher = matcher
        self._launcher = launcher or SubprocessLauncher()
        self._warn = warn or (lambda message: logger.warning("%s", message))
        self._clock = clock

    @property
    def snapshot(self) -> IndexSnapshot:
        return self._snapshot

    def search(
        self, query: str, cancel: threading.Event | None = None,
    ) -> list[ScoredProject]:
        """Rank the indexed projects for ``query``.

        Args:
            query: Free text typed by the user.
            cancel: Set by the caller to abandon the search.

        Returns:
            Matching projects, best first.

        Raises:
            QueryCancelled: If ``cancel`` was set before scoring finished.
        """
        query = query.strip()
        now = self._clock()
        scored: list[ScoredProject] = []
        for project in self._snapshot.projects:
            if cancel is not None and cancel.is_set():
                raise QueryCancelled(f"search for {query!r} cancelled")
            if query:
                match = self._matcher(query, project.name)
                if match <= 0:
                    continue
            else:
                match = 0
            scored.append(ScoredProject(project, total_score(project, match, now)))
        scored.sort(key=_sort_key)
        return scored

    def resolve_launch_target(self, project: Project) -> Path | None:
        """Pick the program that should open ``project``.

        Returns:
            The editor installed for the project's version, else the Hub,
            else None. A warning is emitted whenever the editor is missing.
        """
        editor = self._snapshot.editors.get(project.required_version)
        if editor is not None:
            return editor.launch_path

        hub = self._snapshot.hub_executable
        if hub is None:
            self._warn(
                f"Unity version {project.required_version} and Unity Hub not found; "
                f"no usable launcher for {project.name}"
            )
            return None
        self._warn(f"Unity version {project.required_version} not found, opening Unity Hub")
        return hub

    def launch(self, project: Project) -> LaunchResult | None:
        """Open ``project`` once, without waiting for the process.

        Returns:
            The launch outcome, or None if there was nothing to launch.
        """
        target = self.resolve_launch_target(project)
        if target is None:
            return None
        result = self._launcher.start_detached(target, [PROJECT_PATH_FLAG, str(project.path)])
        if not result.ok:
            self._warn(f"Could not start {target}: {result.error}")
        return result
