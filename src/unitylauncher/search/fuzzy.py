"""Default fuzzy matcher.

Any callable ``(query, text) -> int`` can be plugged into the query
engine; a host launcher normally supplies its own. This one is used by
the CLI and whenever no matcher is given.

Score tiers (case-insensitive):

    ====  =====  ==================================================
    Tier  Score  Condition
    ====  =====  ==================================================
      1    100   Text equals query
      2     90   Text starts with query
      3     75   Query is a substring starting at a word boundary
      4     65   Query is a substring anywhere
      5   1-60   Query characters appear in order (subsequence);
                 fewer gaps and more word-start hits score higher
      -      0   No match
    ====  =====  ==================================================
"""

from __future__ import annotations

import re
from collections.abc import Callable

FuzzyMatcher = Callable[[str, str], int]

_WORD_SPLIT_RE = re.compile(r"[\s_\-.]+")
_SUBSEQUENCE_MAX = 60


def _word_starts(text: str) -> set[int]:
    """Indices where a word begins: after a separator or at a camelCase hump."""
    starts = {0}
    for i in range(1, len(text)):
        prev, cur = text[i - 1], text[i]
        if _WORD_SPLIT_RE.match(prev) and not _WORD_SPLIT_RE.match(cur):
            starts.add(i)
        elif prev.islower() and cur.isupper():
            starts.add(i)
        elif not prev.isdigit() and cur.isdigit():
            starts.add(i)
    return starts


def _subsequence_score(query: str, text: str, starts: set[int]) -> int:
    folded = text.casefold()
    pos = 0
    gaps = 0
    boundary_hits = 0
    last = -1
    for ch in query:
        found = folded.find(ch, pos)
        if found < 0:
            return 0
        if last >= 0 and found != last + 1:
            gaps += 1
        if found in starts:
            boundary_hits += 1
        last = found
        pos = found + 1
    score = _SUBSEQUENCE_MAX - 5 * gaps + 3 * boundary_hits - (len(text) - len(query)) // 4
    return max(1, min(_SUBSEQUENCE_MAX, score))


def fuzzy_score(query: str, text: str) -> int:
    """Score how well ``text`` matches ``query``.

    Args:
        query: What the user typed.
        text: Candidate display text.

    Returns:
        A non-negative integer; 0 means no match.
    """
    q = query.strip().casefold()
    if not q or not text:
        return 0
    t = text.casefold()
    if q == t:
        return 100
    if t.startswith(q):
        return 90
    starts = _word_starts(text)
    index = t.find(q)
    if index >= 0:
        return 75 if index in starts else 65
    return _subsequence_score(q.replace(" ", ""), text, starts)
