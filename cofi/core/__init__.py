"""
Core algorithms for cofi.

Pure, stateless-or-self-contained pieces with no I/O:
- match_scorer: tiered query scoring
- window_matcher: window identity predicates (exact, fuzzy title, wildcard)
- history: MRU history tracking and partitioning
"""

from .match_scorer import MatchScorer, score, is_subsequence
from .window_matcher import exact_match, fuzzy_title_match, wildcard_match
from .history import HistoryTracker, update_history, partition_and_reorder, is_own_window

__all__ = [
    "MatchScorer",
    "score",
    "is_subsequence",
    "exact_match",
    "fuzzy_title_match",
    "wildcard_match",
    "HistoryTracker",
    "update_history",
    "partition_and_reorder",
    "is_own_window",
]
