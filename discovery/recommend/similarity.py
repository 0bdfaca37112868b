"""
Similarity measures for the two recommendation strategies.

- Jaccard similarity over behavior sets (collaborative filtering)
- Cosine similarity over product feature vectors (content-based filtering)

Both are pure, symmetric and bounded to [0, 1].
"""

from collections.abc import Collection, Iterable, Sequence

import numpy as np

from discovery.models import Product

# Users at or above this Jaccard similarity are neighbors.
COLLABORATIVE_THRESHOLD = 0.3

# Products at or above this cosine similarity are similar.
CONTENT_THRESHOLD = 0.5


def jaccard_similarity(a: Collection[str], b: Collection[str]) -> float:
    """``|A ∩ B| / |A ∪ B|``; 0 when both sets are empty."""
    set_a, set_b = set(a), set(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def is_similar_user(a: Collection[str], b: Collection[str]) -> bool:
    """Check whether two behavior sets clear the collaborative threshold."""
    return jaccard_similarity(a, b) >= COLLABORATIVE_THRESHOLD


def cosine_similarity(u: Sequence[float] | np.ndarray, v: Sequence[float] | np.ndarray) -> float:
    """``(u·v) / (|u| |v|)``; 0 when either vector has zero magnitude."""
    vec_u = np.asarray(u, dtype=float)
    vec_v = np.asarray(v, dtype=float)
    if vec_u.shape != vec_v.shape or vec_u.size == 0:
        return 0.0

    norm_u = np.linalg.norm(vec_u)
    norm_v = np.linalg.norm(vec_v)
    if norm_u == 0 or norm_v == 0:
        return 0.0

    return float(np.clip(np.dot(vec_u, vec_v) / (norm_u * norm_v), 0.0, 1.0))


class FeatureSpace:
    """Feature vectors for a pool of products.

    Dimensions: one-hot category, price normalized by the pool's maximum
    price, one-hot seller.
    """

    def __init__(self, products: Iterable[Product]):
        pool = list(products)
        self.categories = sorted({p.category for p in pool})
        self.sellers = sorted({p.seller_id for p in pool})
        self.max_price = max((p.price for p in pool), default=0.0)
        self._category_index = {c: i for i, c in enumerate(self.categories)}
        self._seller_index = {s: i for i, s in enumerate(self.sellers)}

    @property
    def dimensions(self) -> int:
        return len(self.categories) + 1 + len(self.sellers)

    def vector(self, product: Product) -> np.ndarray:
        """Encode a product of the pool."""
        vec = np.zeros(self.dimensions, dtype=float)
        category_idx = self._category_index.get(product.category)
        if category_idx is not None:
            vec[category_idx] = 1.0

        price_idx = len(self.categories)
        vec[price_idx] = product.price / self.max_price if self.max_price > 0 else 0.0

        seller_idx = self._seller_index.get(product.seller_id)
        if seller_idx is not None:
            vec[price_idx + 1 + seller_idx] = 1.0
        return vec

    def similarity(self, a: Product, b: Product) -> float:
        """Cosine similarity of two products in this space."""
        return cosine_similarity(self.vector(a), self.vector(b))
