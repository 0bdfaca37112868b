"""In-memory implementations of the collaborator interfaces.

Used by tests and by callers that already hold the catalog in memory.
"""

from collections.abc import Iterable

import structlog

from discovery.catalog.base import BehaviorHistory, Catalog, CatalogQuery
from discovery.models import Product

logger = structlog.get_logger()


class InMemoryCatalog(Catalog):
    """Catalog backed by a list of products, returned in insertion order."""

    def __init__(self, products: Iterable[Product] = ()):
        self._products: dict[str, Product] = {}
        for product in products:
            self.add(product)

    def add(self, product: Product) -> None:
        """Insert or replace a product."""
        self._products[product.id] = product

    def __len__(self) -> int:
        return len(self._products)

    async def find_products(self, query: CatalogQuery) -> list[Product]:
        return [p for p in self._products.values() if query.matches(p)]

    async def get_product(self, product_id: str) -> Product | None:
        return self._products.get(product_id)


class InMemoryBehaviorHistory(BehaviorHistory):
    """Behavior history built from view and purchase records.

    Views and purchases are merged into one set per user.
    """

    def __init__(
        self,
        views: dict[str, Iterable[str]] | None = None,
        purchases: dict[str, Iterable[str]] | None = None,
        users: Iterable[str] = (),
    ):
        self._histories: dict[str, set[str]] = {user_id: set() for user_id in users}
        for records in (views or {}, purchases or {}):
            for user_id, product_ids in records.items():
                self._histories.setdefault(user_id, set()).update(product_ids)

        logger.debug("behavior_history_loaded", users=len(self._histories))

    async def has_user(self, user_id: str) -> bool:
        return user_id in self._histories

    async def get_history(self, user_id: str) -> set[str]:
        return set(self._histories.get(user_id, ()))

    async def all_histories(self) -> dict[str, set[str]]:
        return {user_id: set(items) for user_id, items in self._histories.items()}
