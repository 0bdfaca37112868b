"""
Shared types for search and suggestions.

This module defines:
- MatchType: Which textual signal matched a product
- ScoredCandidate: A product paired with its relevance score
- SearchFilters: Optional filters applied on top of eligibility
- SearchPage: Paginated search response
- Suggestion: Autocomplete entry
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from discovery.catalog import CatalogQuery
from discovery.errors import ValidationError
from discovery.models import Product


class MatchType(str, Enum):
    """Textual signal behind a relevance score."""
    EXACT_TITLE = "exact_title"
    TITLE = "title"
    FUZZY_TITLE = "fuzzy_title"
    DESCRIPTION = "description"
    FUZZY_DESCRIPTION = "fuzzy_description"


@dataclass(frozen=True)
class ScoredCandidate:
    """Product with its score for the duration of one ranking."""
    product: Product
    score: float
    boost: float
    match_type: MatchType


@dataclass
class SearchFilters:
    """Filters to apply to search queries."""
    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_rating: float | None = None
    seller_id: str | None = None

    def validate(self) -> None:
        """Reject inconsistent ranges."""
        if self.min_price is not None and self.min_price < 0:
            raise ValidationError("min_price cannot be negative", details={"field": "min_price"})
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValidationError(
                "min_price cannot exceed max_price",
                details={"min_price": self.min_price, "max_price": self.max_price},
            )
        if self.min_rating is not None and not 0 <= self.min_rating <= 5:
            raise ValidationError(
                "min_rating must be between 0 and 5",
                details={"field": "min_rating", "value": self.min_rating},
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        return {k: v for k, v in self.__dict__.items() if v is not None}

    def to_catalog_query(self) -> CatalogQuery:
        """Eligible-products query narrowed by these filters."""
        return CatalogQuery.eligible(**self.to_dict())


class SearchPage(BaseModel):
    """One page of search results."""
    items: list[Product] = Field(default_factory=list)
    total_count: int = 0
    current_page: int = 1
    total_pages: int = 0

    @classmethod
    def empty(cls, page: int = 1) -> "SearchPage":
        """Well-formed empty result."""
        return cls(items=[], total_count=0, current_page=page, total_pages=0)


class Suggestion(BaseModel):
    """Autocomplete suggestion built from a product title."""
    text: str
    category: str | None = None
