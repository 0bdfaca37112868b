"""
Free-text search and autocomplete.

This module provides:
- Text normalization and tokenization
- Levenshtein distance and fuzzy token matching
- Tiered relevance scoring
- SearchService and SuggestionService

Usage:
    from discovery.search import SearchService

    service = SearchService(catalog)
    page = await service.search("pashmina shawl", page=1, page_size=20)
"""

from .base import MatchType, ScoredCandidate, SearchFilters, SearchPage, Suggestion
from .matcher import MAX_EDIT_DISTANCE, fuzzy_matches, levenshtein_distance
from .scorer import RelevanceScorer, relevance_score
from .service import SearchService
from .suggestions import SuggestionService, iter_suggestions
from .tokenizer import normalize, tokenize, unique_tokens

__all__ = [
    # Types
    "MatchType",
    "ScoredCandidate",
    "SearchFilters",
    "SearchPage",
    "Suggestion",
    # Text
    "normalize",
    "tokenize",
    "unique_tokens",
    # Matching
    "MAX_EDIT_DISTANCE",
    "fuzzy_matches",
    "levenshtein_distance",
    # Scoring
    "RelevanceScorer",
    "relevance_score",
    # Services
    "SearchService",
    "SuggestionService",
    "iter_suggestions",
]
