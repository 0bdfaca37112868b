"""
Product discovery engine for the marketplace.

Free-text search with fuzzy matching and relevance ranking, autocomplete
suggestions, weighted ratings, and collaborative / content-based
recommendations over an injected catalog and behavior history.

Usage:
    from discovery import InMemoryCatalog, SearchService

    service = SearchService(InMemoryCatalog(products))
    page = await service.search("pashmina", page=1, page_size=20)
"""

from discovery.catalog import (
    BehaviorHistory,
    Catalog,
    CatalogQuery,
    InMemoryBehaviorHistory,
    InMemoryCatalog,
)
from discovery.config import Settings, get_settings
from discovery.errors import DiscoveryError, NotFoundError, ValidationError
from discovery.models import BilingualText, Language, Product, VerificationStatus
from discovery.ratings import RatingSummary, aggregate_ratings, calculate_weighted_rating
from discovery.recommend import RecommendationService
from discovery.search import SearchFilters, SearchPage, SearchService, Suggestion, SuggestionService

__version__ = "1.0.0"

__all__ = [
    # Collaborators
    "BehaviorHistory",
    "Catalog",
    "CatalogQuery",
    "InMemoryBehaviorHistory",
    "InMemoryCatalog",
    # Config
    "Settings",
    "get_settings",
    # Errors
    "DiscoveryError",
    "NotFoundError",
    "ValidationError",
    # Models
    "BilingualText",
    "Language",
    "Product",
    "VerificationStatus",
    # Ratings
    "RatingSummary",
    "aggregate_ratings",
    "calculate_weighted_rating",
    # Services
    "RecommendationService",
    "SearchFilters",
    "SearchPage",
    "SearchService",
    "Suggestion",
    "SuggestionService",
]
