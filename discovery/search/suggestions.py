"""Autocomplete suggestions built from product titles."""

from collections.abc import Iterable, Iterator
from itertools import islice

import structlog

from discovery.catalog import Catalog, CatalogQuery
from discovery.config import Settings, get_settings
from discovery.errors import validate_range, validate_text
from discovery.models import Language, Product
from discovery.search.base import Suggestion
from discovery.search.tokenizer import normalize

logger = structlog.get_logger()

# Normalized queries shorter than this carry too little signal.
MIN_SUGGESTION_QUERY_LENGTH = 2


def iter_suggestions(
    products: Iterable[Product],
    query: str,
    language: Language | str = Language.EN,
) -> Iterator[Suggestion]:
    """Yield distinct title suggestions for ``query``, best first.

    Titles that start with or contain the query qualify. Ordering is by
    weighted rating, then prefix matches before inner matches, then product
    id. Each normalized title is yielded once. Calling again restarts the
    sequence.
    """
    normalized_query = normalize(query)
    if len(normalized_query) < MIN_SUGGESTION_QUERY_LENGTH:
        return

    matches: list[tuple[Product, str, str, bool]] = []
    for product in products:
        if not product.is_discoverable:
            continue
        title = product.title.text_for(language)
        normalized_title = normalize(title)
        if normalized_query not in normalized_title:
            continue
        matches.append((
            product,
            title,
            normalized_title,
            normalized_title.startswith(normalized_query),
        ))

    matches.sort(key=lambda m: (-m[0].quality, not m[3], m[0].id))

    seen: set[str] = set()
    for product, title, normalized_title, _ in matches:
        if normalized_title in seen:
            continue
        seen.add(normalized_title)
        yield Suggestion(text=title, category=product.category)


class SuggestionService:
    """Autocomplete over discoverable product titles."""

    def __init__(self, catalog: Catalog, settings: Settings | None = None):
        self.catalog = catalog
        self.settings = settings or get_settings()

    async def suggest(self, partial_query: str, limit: int | None = None) -> list[Suggestion]:
        """Get up to ``limit`` suggestions for a partial query.

        Raises:
            ValidationError: If the query is not a string or limit is out of range
        """
        partial_query = validate_text(partial_query, "query")
        if limit is None:
            limit = self.settings.suggestion_default_limit
        validate_range(limit, "limit", minimum=1, maximum=self.settings.max_suggestion_limit)

        if len(normalize(partial_query)) < MIN_SUGGESTION_QUERY_LENGTH:
            return []

        products = await self.catalog.find_products(CatalogQuery.eligible())
        suggestions = list(islice(
            iter_suggestions(products, partial_query, self.settings.default_language),
            limit,
        ))

        logger.debug(
            "suggestions_generated",
            query=partial_query,
            candidates=len(products),
            returned=len(suggestions),
        )
        return suggestions
