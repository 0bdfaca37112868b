"""Free-text product search with fuzzy matching, ranking and pagination."""

import math
import time

import structlog

from discovery.catalog import Catalog
from discovery.config import Settings, get_settings
from discovery.errors import validate_range, validate_text
from discovery.search.base import SearchFilters, SearchPage
from discovery.search.scorer import RelevanceScorer

logger = structlog.get_logger()


class SearchService:
    """Search over discoverable catalog products.

    Usage:
        service = SearchService(catalog)
        page = await service.search("pashmina", page=1, page_size=20)
    """

    def __init__(
        self,
        catalog: Catalog,
        scorer: RelevanceScorer | None = None,
        settings: Settings | None = None,
    ):
        """Initialize the service.

        Args:
            catalog: Catalog query interface
            scorer: Relevance scorer (built from settings if None)
            settings: Settings (uses get_settings() if None)
        """
        self.catalog = catalog
        self.settings = settings or get_settings()
        self.scorer = scorer or RelevanceScorer(
            max_query_tokens=self.settings.max_query_tokens,
            language=self.settings.default_language,
        )

    async def search(
        self,
        query: str,
        page: int = 1,
        page_size: int | None = None,
        filters: SearchFilters | None = None,
    ) -> SearchPage:
        """Search for products.

        Args:
            query: Free-text query
            page: 1-indexed page number
            page_size: Results per page (settings default if None)
            filters: Optional category/price/rating/seller filters

        Returns:
            SearchPage; empty for an empty query or a page past the end

        Raises:
            ValidationError: If query is not a string, or page, page_size or
                filters are out of range
        """
        if page_size is None:
            page_size = self.settings.search_default_page_size
        validate_range(page, "page", minimum=1)
        validate_range(page_size, "page_size", minimum=1, maximum=self.settings.max_page_size)
        filters = filters or SearchFilters()
        filters.validate()

        prepared = self.scorer.prepare(validate_text(query, "query"))
        if prepared.is_empty:
            return SearchPage.empty(page)

        start_time = time.time()

        candidates = await self.catalog.find_products(filters.to_catalog_query())
        # Eligibility is re-checked whatever the catalog returned.
        candidates = [p for p in candidates if p.is_discoverable]
        if filters.category is not None:
            candidates = [p for p in candidates if p.category == filters.category]

        ranked = self.scorer.rank(prepared, candidates)

        total_count = len(ranked)
        total_pages = math.ceil(total_count / page_size)
        offset = (page - 1) * page_size
        items = [c.product for c in ranked[offset:offset + page_size]]

        logger.debug(
            "search_completed",
            query=prepared.text,
            page=page,
            total_count=total_count,
            returned=len(items),
            filters=filters.to_dict(),
            latency_ms=round((time.time() - start_time) * 1000, 2),
        )

        return SearchPage(
            items=items,
            total_count=total_count,
            current_page=page,
            total_pages=total_pages,
        )
