"""
Collaborator interfaces consumed by the discovery engine.

This module defines:
- CatalogQuery: predicate passed to the catalog
- Catalog: read access to catalog products
- BehaviorHistory: read access to per-user view/purchase history
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from discovery.models import Product, VerificationStatus


@dataclass
class CatalogQuery:
    """Field-equality and range predicate over catalog products."""
    active_only: bool = True
    approved_only: bool = True
    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_rating: float | None = None
    seller_id: str | None = None
    product_ids: list[str] | None = None
    exclude_ids: list[str] = field(default_factory=list)

    @classmethod
    def eligible(cls, **kwargs: Any) -> "CatalogQuery":
        """Query restricted to discoverable products."""
        return cls(active_only=True, approved_only=True, **kwargs)

    def matches(self, product: Product) -> bool:
        """Evaluate the predicate against a single product."""
        if self.active_only and not product.is_active:
            return False
        if self.approved_only and product.verification_status is not VerificationStatus.APPROVED:
            return False
        if self.category is not None and product.category != self.category:
            return False
        if self.min_price is not None and product.price < self.min_price:
            return False
        if self.max_price is not None and product.price > self.max_price:
            return False
        if self.min_rating is not None and product.average_rating < self.min_rating:
            return False
        if self.seller_id is not None and product.seller_id != self.seller_id:
            return False
        if self.product_ids is not None and product.id not in self.product_ids:
            return False
        if product.id in self.exclude_ids:
            return False
        return True


class Catalog(ABC):
    """Read-only catalog query interface."""

    @abstractmethod
    async def find_products(self, query: CatalogQuery) -> list[Product]:
        """Return products matching ``query`` in a stable order."""

    @abstractmethod
    async def get_product(self, product_id: str) -> Product | None:
        """Return a product by id regardless of eligibility, or None."""


class BehaviorHistory(ABC):
    """Read-only per-user behavior history (views and purchases)."""

    @abstractmethod
    async def has_user(self, user_id: str) -> bool:
        """Check whether the user is known."""

    @abstractmethod
    async def get_history(self, user_id: str) -> set[str]:
        """Product ids the user viewed or purchased. Empty, never an error."""

    @abstractmethod
    async def all_histories(self) -> dict[str, set[str]]:
        """Histories of every known user keyed by user id."""
