"""
Product recommendations.

This module provides:
- Jaccard and cosine similarity measures
- FeatureSpace encoding of products for content-based filtering
- RecommendationService combining both strategies
"""

from .service import RELATED_CATEGORY_RATIO, RecommendationService
from .similarity import (
    COLLABORATIVE_THRESHOLD,
    CONTENT_THRESHOLD,
    FeatureSpace,
    cosine_similarity,
    is_similar_user,
    jaccard_similarity,
)

__all__ = [
    # Similarity
    "COLLABORATIVE_THRESHOLD",
    "CONTENT_THRESHOLD",
    "FeatureSpace",
    "cosine_similarity",
    "is_similar_user",
    "jaccard_similarity",
    # Service
    "RELATED_CATEGORY_RATIO",
    "RecommendationService",
]
