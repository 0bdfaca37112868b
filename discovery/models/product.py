"""Catalog product models consumed by the discovery engine."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from discovery.models.enums import Language, VerificationStatus


class BilingualText(BaseModel):
    """English text with an optional Nepali translation."""

    model_config = ConfigDict(frozen=True)

    en: str
    ne: str | None = None

    def text_for(self, language: Language | str = Language.EN) -> str:
        """Return the text in ``language``, falling back to English."""
        if Language(language) is Language.NE and self.ne:
            return self.ne
        return self.en


class Product(BaseModel):
    """A catalog item as returned by the catalog query interface.

    Accepts both snake_case names and the camelCase keys of the catalog
    documents (``averageRating``, ``sellerId``, ``_id`` ...).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., alias="_id")
    title: BilingualText
    description: BilingualText
    price: float = Field(..., ge=0)
    category: str
    inventory: int = Field(default=0, ge=0)
    seller_id: str = Field(..., alias="sellerId")
    is_active: bool = Field(default=True, alias="isActive")
    verification_status: VerificationStatus = Field(
        default=VerificationStatus.PENDING,
        alias="verificationStatus",
    )

    # Calculated fields
    average_rating: float = Field(default=0.0, ge=0, le=5, alias="averageRating")
    review_count: int = Field(default=0, ge=0, alias="reviewCount")
    weighted_rating: float | None = Field(default=None, ge=0, le=5, alias="weightedRating")
    view_count: int = Field(default=0, ge=0, alias="viewCount")
    purchase_count: int = Field(default=0, ge=0, alias="purchaseCount")

    @field_validator("id", "seller_id", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> str:
        """Accept driver identifier objects by their string form."""
        if v is None:
            return v
        return str(v)

    @field_validator("title", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        """Allow plain strings for English-only text."""
        if isinstance(v, str):
            return {"en": v}
        return v

    @model_validator(mode="after")
    def fill_weighted_rating(self) -> "Product":
        """Derive the weighted rating when the document lacks one or carries
        a value above the average it shrinks."""
        if self.weighted_rating is None or self.weighted_rating > self.average_rating:
            from discovery.ratings import calculate_weighted_rating

            object.__setattr__(
                self,
                "weighted_rating",
                calculate_weighted_rating(self.average_rating, self.review_count),
            )
        return self

    @property
    def is_discoverable(self) -> bool:
        """Active and approved: the only products search or recommendations may return."""
        return self.is_active and self.verification_status is VerificationStatus.APPROVED

    @property
    def quality(self) -> float:
        """Weighted rating used as the quality signal."""
        return self.weighted_rating or 0.0
