"""Enumerations for catalog data."""

from enum import Enum


class VerificationStatus(str, Enum):
    """Seller-submitted product verification state."""

    PENDING = "pending"
    """Awaiting admin review."""

    APPROVED = "approved"
    """Verified; the only state eligible for discovery."""

    REJECTED = "rejected"
    """Failed verification."""


class Language(str, Enum):
    """Languages carried by bilingual catalog text."""

    EN = "en"
    NE = "ne"
