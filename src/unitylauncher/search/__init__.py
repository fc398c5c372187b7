"""Fuzzy search and ranking over an index snapshot."""

from __future__ import annotations

from unitylauncher.search.engine import QueryEngine, ScoredProject
from unitylauncher.search.fuzzy import FuzzyMatcher, fuzzy_score
from unitylauncher.search.ranking import (
    FAVORITE_BONUS,
    RECENCY_MAX_BONUS,
    recency_bonus,
    total_score,
)

__all__ = [
    "FAVORITE_BONUS",
    "FuzzyMatcher",
    "QueryEngine",
    "RECENCY_MAX_BONUS",
    "ScoredProject",
    "fuzzy_score",
    "recency_bonus",
    "total_score",
]
