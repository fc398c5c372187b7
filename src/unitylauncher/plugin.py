"""Host-facing surface: reload, query, activate.

``UnityProjectsPlugin`` is what a search launcher embeds. It owns the
current ``IndexSnapshot`` and swaps in a freshly built one on every
``reload()``; queries read whichever snapshot is current when they start
and never see a half-built index.

Usage::

    plugin = UnityProjectsPlugin()
    plugin.reload()
    for entry in plugin.query("tower"):
        print(entry.title, entry.subtitle)
    plugin.activate(entry)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from unitylauncher.config import LauncherConfig, load_config
from unitylauncher.discovery.editors import EditorRegistry
from unitylauncher.discovery.models import IndexSnapshot, Project
from unitylauncher.discovery.projects import ProjectIndexer
from unitylauncher.exceptions import QueryCancelled
from unitylauncher.launch.launcher import ProcessLauncher
from unitylauncher.notify import LoggingWarningChannel, WarningChannel
from unitylauncher.search.engine import QueryEngine
from unitylauncher.search.fuzzy import FuzzyMatcher, fuzzy_score
from unitylauncher.stores.base import MetadataStore
from unitylauncher.stores.unity_hub import UnityHubStore, collect_sources

logger = logging.getLogger(__name__)

FAVORITE_MARK = "★ "
MISSING_VERSION_MARK = "❌"


@dataclass(frozen=True)
class ResultEntry:
    """One row of search output for the host UI.

    Attributes:
        title: Project name.
        subtitle: Favorite marker, installed marker, version and path.
        project: The underlying project, handed back to ``activate``.
        score: Relevance score.
    """

    title: str
    subtitle: str
    project: Project
    score: int


def format_subtitle(project: Project) -> str:
    """Render the one-line summary shown under a project name."""
    favorite = FAVORITE_MARK if project.is_favorite else "  "
    installed = " " if project.is_version_installed else MISSING_VERSION_MARK
    return f"{favorite}{installed}{project.required_version:<12}\t{project.path}"


class UnityProjectsPlugin:
    """Discovers Unity editors and projects and answers search queries.

    Args:
        config: Launcher settings; loaded from file/env when omitted.
        store: Metadata store; defaults to ``UnityHubStore(config)``.
        launcher: Process launcher for ``activate``.
        warnings: User-visible warning channel.
        matcher: Fuzzy scoring function.
        clock: Returns "now" for the recency bonus.
    """

    def __init__(
        self,
        config: LauncherConfig | None = None,
        *,
        store: MetadataStore | None = None,
        launcher: ProcessLauncher | None = None,
        warnings: WarningChannel | None = None,
        matcher: FuzzyMatcher = fuzzy_score,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config or load_config()
        self.store = store or UnityHubStore(self.config)
        self.warnings = warnings or LoggingWarningChannel()
        self._launcher = launcher
        self._matcher = matcher
        self._clock = clock
        self._reload_lock = threading.Lock()
        self._publish_lock = threading.Lock()
        self._engine = self._make_engine(IndexSnapshot(editors=EditorRegistry()))

    def _make_engine(self, snapshot: IndexSnapshot) -> QueryEngine:
        return QueryEngine(
            snapshot,
            matcher=self._matcher,
            launcher=self._launcher,
            warn=self.warnings.warn,
            clock=self._clock,
        )

    @property
    def snapshot(self) -> IndexSnapshot:
        """The currently published index."""
        with self._publish_lock:
            return self._engine.snapshot

    def reload(self) -> None:
        """Rebuild editors and projects from scratch and publish them.

        Safe to call repeatedly; concurrent calls run one after another.
        Missing or malformed sources only produce warnings.
        """
        warn = self.warnings.warn
        with self._reload_lock:
            sources = collect_sources(self.store, self.config, warn)
            registry = EditorRegistry.scan(
                sources.editor_roots, sources.executable_subpath, warn,
            )
            if len(registry) == 0:
                warn("No Unity editor installation found")

            indexer = ProjectIndexer(
                registry,
                warn=warn,
                max_workers=self.config.max_workers,
                candidate_timeout=self.config.candidate_timeout,
                platform=self.config.platform,
            )
            projects = indexer.index(sources.projects_root, sources.favorites, sources.recents)
            snapshot = IndexSnapshot(
                editors=registry,
                projects=projects,
                hub_executable=sources.hub_executable,
                built_at=self._clock(),
            )
            engine = self._make_engine(snapshot)
            with self._publish_lock:
                self._engine = engine
        logger.info(
            "Reloaded: %d editor(s), %d project(s)", len(registry), len(projects),
        )

    def query(self, text: str, cancel: threading.Event | None = None) -> list[ResultEntry]:
        """Return ranked result entries for ``text``.

        A cancelled query returns an empty list; the host is expected to
        discard it in favour of the query that superseded it.
        """
        with self._publish_lock:
            engine = self._engine
        try:
            ranked = engine.search(text, cancel)
        except QueryCancelled:
            logger.debug("Query %r cancelled", text)
            return []
        return [
            ResultEntry(
                title=item.project.name,
                subtitle=format_subtitle(item.project),
                project=item.project,
                score=item.score,
            )
            for item in ranked
        ]

    def activate(self, selection: ResultEntry | Project) -> bool:
        """Open the selected project with the right editor.

        Always returns True: the selection is considered handled even if
        nothing could be started (the user was warned).
        """
        project = selection.project if isinstance(selection, ResultEntry) else selection
        with self._publish_lock:
            engine = self._engine
        engine.launch(project)
        return True
