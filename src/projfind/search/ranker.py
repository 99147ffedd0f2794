"""
Filter-then-sort ranking of picker candidates.

``rank`` is called once per query change and always recomputes from the full
candidate list, so a candidate excluded by an earlier query reappears as soon
as the query stops excluding it. Sorting is stable: candidates with equal
scores keep their input order, which makes every ranking pass deterministic.

Example:
    >>> from projfind.search.ranker import rank
    >>> rank(["Door.js", "DoorManager.tsx", "random.txt"], "door")
    ['Door.js', 'DoorManager.tsx']
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from ..core.types import MatchProfile, ScoredCandidate
from .fuzzy import match

T = TypeVar("T")

LabelFunc = Callable[[Any], str]


def score_candidates(
    candidates: Sequence[T],
    query: str,
    profile: MatchProfile = MatchProfile.PLAIN,
    key: LabelFunc | None = None,
) -> list[ScoredCandidate]:
    """
    Match every candidate and return the hits ordered by relevance.

    Args:
        candidates: Strings, or structured items rendered through ``key``
        query: Current query
        profile: Matcher variant
        key: Display-string function for structured items (default ``str``)

    Returns:
        ScoredCandidate list sorted by score descending, then input index
    """
    label_of = key or str
    scored: list[ScoredCandidate] = []
    for index, item in enumerate(candidates):
        label = label_of(item)
        is_match, score = match(label, query, profile)
        if is_match:
            scored.append(ScoredCandidate(item=item, label=label, score=score, index=index))

    scored.sort(key=lambda sc: (-sc.score, sc.index))
    return scored


def rank(
    candidates: Sequence[T],
    query: str,
    profile: MatchProfile = MatchProfile.PLAIN,
    key: LabelFunc | None = None,
) -> list[T]:
    """Filter ``candidates`` by ``query`` and order them by descending score.

    An empty query returns the candidates in their original order.
    """
    if not query:
        return list(candidates)
    return [sc.item for sc in score_candidates(candidates, query, profile, key)]


def clamp_selection(index: int, results: Sequence[Any], selected: Any = None) -> int:
    """
    Keep a 0-based selection index valid after a re-rank.

    The index falls back to the first row when the previously selected item
    no longer appears in ``results``; otherwise it is clamped into range.
    """
    if not results:
        return 0
    if selected is not None and selected not in results:
        return 0
    return max(0, min(index, len(results) - 1))
