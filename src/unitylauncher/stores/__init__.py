"""Platform metadata stores: Unity Hub files, registry, plist and prefs.

Public API::

    from unitylauncher.stores import UnityHubStore, collect_sources

    store = UnityHubStore(config)
    sources = collect_sources(store, config, warn)
"""

from __future__ import annotations

from unitylauncher.stores.base import MetadataStore
from unitylauncher.stores.unity_hub import (
    HubSources,
    PlatformLayout,
    UnityHubStore,
    collect_sources,
    platform_layout,
)

__all__ = [
    "HubSources",
    "MetadataStore",
    "PlatformLayout",
    "UnityHubStore",
    "collect_sources",
    "platform_layout",
]
