"""
Matching and ranking of picker candidates.

- Fuzzy matching with substring, path-aware and subsequence tiers
- Stable filter-then-sort ranking over a full candidate list
"""

from .fuzzy import (
    EXACT_MATCH_SCORE,
    PATH_MATCH_SCORE,
    fuzzy_score,
    match,
    match_positions,
    path_query,
)
from .ranker import clamp_selection, rank, score_candidates

__all__ = [
    # Matching
    "EXACT_MATCH_SCORE",
    "PATH_MATCH_SCORE",
    "fuzzy_score",
    "match",
    "match_positions",
    "path_query",
    # Ranking
    "clamp_selection",
    "rank",
    "score_candidates",
]
