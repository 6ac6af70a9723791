"""
Lexical keyword filtering.

- keyword_filter.py: two-tier (critical / moderate) KeywordFilter and list parsers
"""

from toxicity_filter.keywords.keyword_filter import (
    CRITICAL_KEYWORD_SCORE,
    MODERATE_KEYWORD_SCORE,
    CriticalEntry,
    KeywordFilter,
)

__all__ = [
    "CRITICAL_KEYWORD_SCORE",
    "MODERATE_KEYWORD_SCORE",
    "CriticalEntry",
    "KeywordFilter",
]
