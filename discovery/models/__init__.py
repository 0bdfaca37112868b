"""Data models for the discovery engine."""

from discovery.models.enums import Language, VerificationStatus
from discovery.models.product import BilingualText, Product

__all__ = [
    # Enums
    "Language",
    "VerificationStatus",
    # Products
    "BilingualText",
    "Product",
]
