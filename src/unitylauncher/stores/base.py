"""Base class for platform metadata stores.

A metadata store answers two questions the core cannot answer from the
file system alone: where a product is installed, and what a persisted
list (favorites, recent projects, extra install folders) contains. The
concrete stores wrap the Windows registry, macOS plists, the Linux
Unity prefs file and the Unity Hub JSON files.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

from unitylauncher.exceptions import MalformedRecord, SourceUnavailable

logger = logging.getLogger(__name__)

# Product keys understood by ``get_install_root``.
PRODUCT_HUB = "hub"
PRODUCT_EDITORS = "editors"

# Store identifiers understood by ``read_platform_list``.
STORE_FAVORITES = "favoriteProjects"
STORE_RECENT_PROJECTS = "recentlyUsedProjectPaths"
STORE_SECONDARY_INSTALL = "secondaryInstallPath"
STORE_PROJECT_DIR = "projectDir"


class MetadataStore(ABC):
    """Read-only access to one platform's Unity metadata.

    Subclasses implement ``get_install_root`` and ``load_list``.
    ``read_platform_list`` wraps ``load_list`` so that callers always get
    a list back, with failures reported on the warning channel.
    """

    @abstractmethod
    def get_install_root(self, product_key: str) -> Path | None:
        """Return the install location of ``product_key``, if known.

        For ``PRODUCT_HUB`` this is the Hub executable; for
        ``PRODUCT_EDITORS`` the default editor install folder.
        """

    @abstractmethod
    def load_list(self, store_id: str) -> list[str]:
        """Read a persisted list.

        Raises:
            SourceUnavailable: If the backing file or key is missing.
            MalformedRecord: If the content cannot be decoded.
            KeyError: If ``store_id`` is not known to this store.
        """

    def read_platform_list(
        self,
        store_id: str,
        warn: Callable[[str], None] | None = None,
    ) -> list[str]:
        """Read a persisted list, degrading to empty on any failure.

        Args:
            store_id: One of the ``STORE_*`` identifiers.
            warn: Receives a message if the list could not be read.

        Returns:
            The list entries, or an empty list.
        """
        try:
            return self.load_list(store_id)
        except (SourceUnavailable, MalformedRecord) as exc:
            logger.debug("Store %s unavailable: %s", store_id, exc)
            if warn is not None:
                warn(str(exc))
            return []
