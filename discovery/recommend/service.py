"""
Recommendation service.

Handles:
- Related products for a product page (category-biased content similarity)
- Similar products (pure content-based filtering)
- Collaborative recommendations from users with overlapping behavior
- Personalized recommendations: collaborative first, then content-based and
  popularity backfill up to the requested limit
"""

import math
from collections import defaultdict

import structlog

from discovery.catalog import BehaviorHistory, Catalog, CatalogQuery
from discovery.config import Settings, get_settings
from discovery.errors import NotFoundError, validate_object_id, validate_range
from discovery.models import Product
from discovery.ratings import MAX_AVERAGE_RATING
from discovery.recommend.similarity import (
    COLLABORATIVE_THRESHOLD,
    CONTENT_THRESHOLD,
    FeatureSpace,
    jaccard_similarity,
)

logger = structlog.get_logger()

# Minimum share of related products drawn from the source product's category.
RELATED_CATEGORY_RATIO = 0.8

# Off-category related products must be in this price band or share the seller.
RELATED_PRICE_BAND = (0.5, 1.5)

# Content-based backfill seeds taken from the user's history.
BACKFILL_SEED_COUNT = 3


class RecommendationService:
    """Collaborative and content-based product recommendations.

    Usage:
        service = RecommendationService(catalog, behavior_history)
        related = await service.related_products(product_id, limit=10)
        for_you = await service.personalized_recommendations(user_id, limit=10)
    """

    def __init__(
        self,
        catalog: Catalog,
        history: BehaviorHistory,
        settings: Settings | None = None,
    ):
        self.catalog = catalog
        self.history = history
        self.settings = settings or get_settings()

    # ------------------------------------------------------------------
    # Content-based
    # ------------------------------------------------------------------

    async def related_products(self, product_id: str, limit: int | None = None) -> list[Product]:
        """Products related to ``product_id``, at least 80% from its category.

        Candidates share the category, sit in the price band, or share the
        seller. When the category cannot supply its share the list is
        truncated rather than padded with other categories.

        Raises:
            ValidationError: Malformed id or limit out of range
            NotFoundError: Unknown product
        """
        limit = self._validate_limit(limit)
        source = await self._load_product(product_id)
        pool = await self._eligible_pool(exclude_id=source.id)

        low, high = (source.price * f for f in RELATED_PRICE_BAND)
        same_category = [p for p in pool if p.category == source.category]
        other_category = [
            p for p in pool
            if p.category != source.category
            and (low <= p.price <= high or p.seller_id == source.seller_id)
        ]

        space = FeatureSpace([source, *same_category, *other_category])
        similarities = {p.id: space.similarity(source, p) for p in same_category + other_category}

        def ranked(products: list[Product]) -> list[Product]:
            return sorted(products, key=lambda p: (-similarities[p.id], -p.quality, p.id))

        same_ranked = ranked(same_category)
        same_slots = math.ceil(limit * RELATED_CATEGORY_RATIO)

        if len(same_ranked) >= same_slots:
            others = ranked(other_category)[:limit - same_slots]
            chosen = same_ranked[:limit - len(others)] + others
        else:
            others = []
            chosen = same_ranked

        related = ranked(chosen)

        logger.debug(
            "related_products_computed",
            product_id=source.id,
            category=source.category,
            same_category=len(related) - len(others),
            other_category=len(others),
        )
        return related

    async def similar_products(self, product_id: str, limit: int | None = None) -> list[Product]:
        """Products whose cosine similarity to ``product_id`` is at least 0.5.

        Raises:
            ValidationError: Malformed id or limit out of range
            NotFoundError: Unknown product
        """
        limit = self._validate_limit(limit)
        source = await self._load_product(product_id)
        pool = await self._eligible_pool(exclude_id=source.id)
        return self._similar_to(source, pool)[:limit]

    def _similar_to(self, source: Product, pool: list[Product]) -> list[Product]:
        candidates = [p for p in pool if p.id != source.id]
        space = FeatureSpace([source, *candidates])

        scored = []
        for product in candidates:
            similarity = space.similarity(source, product)
            if similarity >= CONTENT_THRESHOLD:
                scored.append((product, similarity))

        scored.sort(key=lambda item: (-item[1], -item[0].quality, item[0].id))
        return [product for product, _ in scored]

    # ------------------------------------------------------------------
    # Collaborative
    # ------------------------------------------------------------------

    async def collaborative_recommendations(
        self,
        user_id: str,
        limit: int | None = None,
    ) -> list[Product]:
        """Products used by behaviorally similar users, best first.

        Raises:
            ValidationError: Malformed id or limit out of range
            NotFoundError: Unknown user
        """
        limit = self._validate_limit(limit)
        history = await self._load_history(user_id)
        scored = await self._collaborative_scores(user_id, history)
        return [product for product, _ in scored[:limit]]

    async def _collaborative_scores(
        self,
        user_id: str,
        history: set[str],
    ) -> list[tuple[Product, float]]:
        """Rank neighbor items by summed neighbor similarity amplified by rating."""
        if not history:
            return []

        neighbor_scores: dict[str, float] = defaultdict(float)
        neighbors = 0
        histories = await self.history.all_histories()
        for other_id in sorted(histories):
            if other_id == user_id:
                continue
            other_items = histories[other_id]
            similarity = jaccard_similarity(history, other_items)
            if similarity < COLLABORATIVE_THRESHOLD:
                continue
            neighbors += 1
            for item_id in other_items - history:
                neighbor_scores[item_id] += similarity

        if not neighbor_scores:
            return []

        products = await self.catalog.find_products(
            CatalogQuery.eligible(product_ids=sorted(neighbor_scores))
        )
        scored = [
            (p, neighbor_scores[p.id] * (1 + p.quality / MAX_AVERAGE_RATING))
            for p in products
            if p.is_discoverable and p.id in neighbor_scores
        ]
        scored.sort(key=lambda item: (-item[1], item[0].id))

        logger.debug(
            "collaborative_candidates",
            user_id=user_id,
            neighbors=neighbors,
            candidates=len(scored),
        )
        return scored

    # ------------------------------------------------------------------
    # Personalized
    # ------------------------------------------------------------------

    async def personalized_recommendations(
        self,
        user_id: str,
        limit: int | None = None,
    ) -> list[Product]:
        """Recommendations for a user, padded up to ``limit`` when possible.

        Order of sources: collaborative filtering, content-based neighbors of
        the user's history, then overall popularity. Items already in the
        user's history are never returned.

        Raises:
            ValidationError: Malformed id or limit out of range
            NotFoundError: Unknown user
        """
        limit = self._validate_limit(limit)
        history = await self._load_history(user_id)

        results: list[Product] = []
        seen: set[str] = set(history)

        def take(products: list[Product]) -> None:
            for product in products:
                if len(results) >= limit:
                    return
                if product.id in seen or not product.is_discoverable:
                    continue
                seen.add(product.id)
                results.append(product)

        collaborative = await self._collaborative_scores(user_id, history)
        take([product for product, _ in collaborative])
        collaborative_count = len(results)

        if len(results) < limit:
            pool = await self._eligible_pool()
            for seed_id in sorted(history)[:BACKFILL_SEED_COUNT]:
                seed = await self.catalog.get_product(seed_id)
                if seed is None:
                    continue
                take(self._similar_to(seed, pool))

            if len(results) < limit:
                take(self._popular(pool))

        if len(results) > collaborative_count:
            logger.debug(
                "recommendations_backfilled",
                user_id=user_id,
                collaborative=collaborative_count,
                backfilled=len(results) - collaborative_count,
            )
        return results

    @staticmethod
    def _popular(pool: list[Product]) -> list[Product]:
        return sorted(
            pool,
            key=lambda p: (-p.quality, -p.review_count, -p.purchase_count, p.id),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate_limit(self, limit: int | None) -> int:
        if limit is None:
            limit = self.settings.recommendation_default_limit
        return validate_range(
            limit,
            "limit",
            minimum=1,
            maximum=self.settings.max_recommendation_limit,
        )

    async def _load_product(self, product_id: str) -> Product:
        validate_object_id(product_id, "product")
        product = await self.catalog.get_product(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    async def _load_history(self, user_id: str) -> set[str]:
        validate_object_id(user_id, "user")
        if not await self.history.has_user(user_id):
            raise NotFoundError("User", user_id)
        return await self.history.get_history(user_id)

    async def _eligible_pool(self, exclude_id: str | None = None) -> list[Product]:
        query = CatalogQuery.eligible(exclude_ids=[exclude_id] if exclude_id else [])
        products = await self.catalog.find_products(query)
        return [p for p in products if p.is_discoverable and p.id != exclude_id]
