"""
Catalog and behavior-history interfaces.

Usage:
    from discovery.catalog import InMemoryCatalog, CatalogQuery

    catalog = InMemoryCatalog(products)
    products = await catalog.find_products(CatalogQuery.eligible(category="food"))
"""

from .base import BehaviorHistory, Catalog, CatalogQuery
from .memory import InMemoryBehaviorHistory, InMemoryCatalog

__all__ = [
    # Interfaces
    "BehaviorHistory",
    "Catalog",
    "CatalogQuery",
    # In-memory adapters
    "InMemoryBehaviorHistory",
    "InMemoryCatalog",
]
