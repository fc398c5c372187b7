"""Ranking bonuses added on top of the fuzzy match score.

Score Model:
    total = fuzzy(query, name) + favorite + recency

    favorite = 100 if the project is a Hub favorite, else 0
    recency  = max(0, 50 - 3 * days_since_modified)

``days_since_modified`` counts whole days, so a project touched today
gets the full 50 and one untouched for 17 days or more gets nothing.
Both bonuses are non-negative, so they only ever move a project up.
"""

from __future__ import annotations

from datetime import datetime

from unitylauncher.discovery.models import Project

FAVORITE_BONUS = 100
RECENCY_MAX_BONUS = 50
RECENCY_DECAY_PER_DAY = 3


def days_since(moment: datetime, now: datetime) -> int:
    """Whole days elapsed from ``moment`` to ``now``; never negative."""
    return max(0, (now - moment).days)


def recency_bonus(last_modified: datetime, now: datetime) -> int:
    """Linearly decaying bonus for recently modified projects."""
    return max(0, RECENCY_MAX_BONUS - RECENCY_DECAY_PER_DAY * days_since(last_modified, now))


def favorite_bonus(project: Project) -> int:
    return FAVORITE_BONUS if project.is_favorite else 0


def total_score(project: Project, match_score: int, now: datetime) -> int:
    """Combine the fuzzy score with both bonuses."""
    return match_score + favorite_bonus(project) + recency_bonus(project.last_modified, now)
