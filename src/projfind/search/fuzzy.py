"""
Fuzzy matching for picker candidates.

This module decides whether a query fuzzy-matches a single candidate string and
computes the relevance score the ranker sorts on. Scoring is tiered so literal
searches behave predictably while still allowing lenient fuzzy fallback:

    1. Literal substring hit (case-insensitive): ``EXACT_MATCH_SCORE``
    2. Path-aware substring hit, where whitespace in the query stands for a
       path separator (``MatchProfile.PATH`` only): ``PATH_MATCH_SCORE``
    3. In-order subsequence match, scored per character with consecutive-run
       and word-boundary bonuses

Spaces in the query are separators and never need to match anything in the
fuzzy tier. Non-matches are a normal negative result ``(False, 0)``; the
functions here never raise for string input.

Example:
    >>> from projfind.search.fuzzy import match, MatchProfile
    >>> match("src/app/page.tsx", "src app", MatchProfile.PATH)
    (True, 1800)
    >>> match("abc", "d")
    (False, 0)
"""

from __future__ import annotations

import re

from ..core.types import MatchProfile

EXACT_MATCH_SCORE = 2000
PATH_MATCH_SCORE = 1800

BASE_CHAR_SCORE = 1
CONSECUTIVE_BONUS = 5
SEPARATOR_BONUS = 20
AFTER_SEPARATOR_BONUS = 10
CAMEL_CASE_BONUS = 15
WORD_SEPARATOR_BONUS = 15

PATH_SEPARATOR = "/"
WORD_SEPARATORS = frozenset("_-")

_WHITESPACE_RE = re.compile(r"\s+")


def path_query(query: str) -> str:
    """Turn ``"src app"`` into ``"src/app"`` for path-aware matching."""
    return _WHITESPACE_RE.sub(PATH_SEPARATOR, query)


def _boundary_bonus(
    original: str, folded: str, pos: int, after_separator: bool
) -> tuple[int, bool]:
    """Score path and word boundaries around ``pos``.

    Returns the bonus and whether this position started a path segment, which
    the next matched character uses for its continuation bonus.
    """
    bonus = 0
    prev = folded[pos - 1] if pos > 0 else ""

    starts_segment = pos == 0 or prev == PATH_SEPARATOR
    if starts_segment:
        bonus += SEPARATOR_BONUS
    elif after_separator:
        bonus += AFTER_SEPARATOR_BONUS

    # Case information only survives in the original candidate
    if pos > 0:
        before, current = original[pos - 1], original[pos]
        if current.isupper() and (before.islower() or before.isdigit()):
            bonus += CAMEL_CASE_BONUS

    if prev in WORD_SEPARATORS:
        bonus += WORD_SEPARATOR_BONUS

    return bonus, starts_segment


def fuzzy_score(
    candidate: str, query: str, profile: MatchProfile = MatchProfile.PLAIN
) -> int | None:
    """
    Score an in-order subsequence match of ``query`` inside ``candidate``.

    Each query character is looked up at or after the search cursor and the
    cursor then moves one past the hit, so positions are never reused and the
    scan never backtracks. Returns None when some character cannot be found.

    Args:
        candidate: Display string being searched
        query: User query, spaces are skipped
        profile: Enables boundary bonuses for ``MatchProfile.PATH``

    Returns:
        Accumulated score, or None for a non-match
    """
    folded = candidate.lower()
    pattern = query.lower()
    # lower() can change the length of some non-ASCII strings
    original = candidate if len(candidate) == len(folded) else folded
    path_aware = profile == MatchProfile.PATH

    score = 0
    cursor = 0
    streak = 0
    after_separator = False

    for char in pattern:
        if char == " ":
            continue

        pos = folded.find(char, cursor)
        if pos < 0:
            return None

        score += BASE_CHAR_SCORE

        if pos == cursor:
            streak += 1
            score += streak * CONSECUTIVE_BONUS
        else:
            streak = 0

        if path_aware:
            bonus, after_separator = _boundary_bonus(original, folded, pos, after_separator)
            score += bonus

        cursor = pos + 1

    return score


def match(
    candidate: str, query: str, profile: MatchProfile = MatchProfile.PLAIN
) -> tuple[bool, int]:
    """
    Decide whether ``query`` fuzzy-matches ``candidate`` and score it.

    Args:
        candidate: Display string of a picker entry
        query: Query typed so far, may be empty
        profile: ``PLAIN`` for TODO/usage lists, ``PATH`` for file paths

    Returns:
        ``(is_match, score)``; an empty query always yields ``(True, 0)``
    """
    if not query:
        return True, 0

    folded = candidate.lower()
    pattern = query.lower()

    if pattern in folded:
        return True, EXACT_MATCH_SCORE

    if profile == MatchProfile.PATH:
        as_path = path_query(pattern)
        if as_path != pattern and as_path in folded:
            return True, PATH_MATCH_SCORE

    score = fuzzy_score(candidate, query, profile)
    if score is None:
        return False, 0
    return True, score


def match_positions(
    candidate: str, query: str, profile: MatchProfile = MatchProfile.PLAIN
) -> list[int]:
    """Indices of ``candidate`` characters that ``match`` would use.

    Mirrors the tiers of ``match`` and is only used for highlighting output.
    Returns an empty list for an empty query or a non-match.
    """
    if not query:
        return []

    folded = candidate.lower()
    pattern = query.lower()

    start = folded.find(pattern)
    if start >= 0:
        return list(range(start, start + len(pattern)))

    if profile == MatchProfile.PATH:
        as_path = path_query(pattern)
        start = folded.find(as_path) if as_path != pattern else -1
        if start >= 0:
            return list(range(start, start + len(as_path)))

    positions: list[int] = []
    cursor = 0
    for char in pattern:
        if char == " ":
            continue
        pos = folded.find(char, cursor)
        if pos < 0:
            return []
        positions.append(pos)
        cursor = pos + 1
    return positions

