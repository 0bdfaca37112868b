"""Rating aggregation.

The weighted rating is the quality signal read by search ranking, suggestions
and recommendations. It shrinks the average rating towards zero for products
with few reviews so that a handful of five-star reviews cannot outrank a
product with hundreds of slightly lower ones.
"""

from collections.abc import Iterable

from pydantic import BaseModel

from discovery.errors import ValidationError
from discovery.models import Product

# Shrinkage constant: reviews needed before the weighted rating reaches half
# of the average rating.
RATING_CONFIDENCE_K = 10

MIN_REVIEW_RATING = 1
MAX_REVIEW_RATING = 5
MAX_AVERAGE_RATING = 5.0


class RatingSummary(BaseModel):
    """Aggregated rating fields for one product."""

    average_rating: float = 0.0
    review_count: int = 0
    weighted_rating: float = 0.0


def calculate_weighted_rating(average_rating: float, review_count: int) -> float:
    """Compute ``average * count / (count + K)``.

    Returns 0 when there are no reviews.

    Raises:
        ValidationError: If the average is outside [0, 5] or the count is negative
    """
    if not 0 <= average_rating <= MAX_AVERAGE_RATING:
        raise ValidationError(
            "Average rating must be between 0 and 5",
            details={"field": "average_rating", "value": average_rating},
        )
    if review_count < 0:
        raise ValidationError(
            "Review count cannot be negative",
            details={"field": "review_count", "value": review_count},
        )
    if review_count == 0:
        return 0.0
    return (average_rating * review_count) / (review_count + RATING_CONFIDENCE_K)


def aggregate_ratings(ratings: Iterable[int | float]) -> RatingSummary:
    """Summarize individual review ratings (each 1-5) into product rating fields."""
    values = list(ratings)
    for value in values:
        if not MIN_REVIEW_RATING <= value <= MAX_REVIEW_RATING:
            raise ValidationError(
                "Rating must be between 1 and 5",
                details={"field": "rating", "value": value},
            )

    if not values:
        return RatingSummary()

    average = sum(values) / len(values)
    return RatingSummary(
        average_rating=average,
        review_count=len(values),
        weighted_rating=calculate_weighted_rating(average, len(values)),
    )


def apply_rating_summary(product: Product, summary: RatingSummary) -> Product:
    """Return a copy of ``product`` carrying the summary's rating fields.

    The engine never persists this; the review workflow writes it back.
    """
    return product.model_copy(
        update={
            "average_rating": summary.average_rating,
            "review_count": summary.review_count,
            "weighted_rating": summary.weighted_rating,
        }
    )
