"""Error taxonomy for the discovery engine.

Every failure the engine can surface maps to one of these classes so callers
(typically an HTTP layer) can branch on them. Empty results are never errors.
"""

import re
from typing import Any

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


class DiscoveryError(Exception):
    """Base discovery error."""

    def __init__(
        self,
        message: str,
        error_code: str = "DISCOVERY_ERROR",
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to an error payload."""
        payload: dict[str, Any] = {
            "code": self.error_code,
            "message": self.message,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(DiscoveryError):
    """Malformed identifier or out-of-range input."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class NotFoundError(DiscoveryError):
    """Referenced product or user does not exist."""

    def __init__(self, resource: str, identifier: str | None = None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} '{identifier}' not found"
        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            details={"resource": resource, "identifier": identifier},
        )


def validate_object_id(value: Any, kind: str = "product") -> str:
    """Validate a 24-character hexadecimal document identifier.

    Args:
        value: Identifier supplied by the caller
        kind: Resource name used in the error message

    Returns:
        The identifier, unchanged

    Raises:
        ValidationError: If the identifier is not a valid reference
    """
    if not isinstance(value, str) or not OBJECT_ID_PATTERN.match(value):
        raise ValidationError(
            f"Invalid {kind} ID",
            details={"field": f"{kind}_id", "value": str(value)},
        )
    return value


def validate_range(
    value: Any,
    name: str,
    minimum: int,
    maximum: int | None = None,
) -> int:
    """Validate an integer parameter such as page, page_size or limit."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{name} must be an integer",
            details={"field": name, "value": value},
        )
    if value < minimum or (maximum is not None and value > maximum):
        bound = f"at least {minimum}" if maximum is None else f"between {minimum} and {maximum}"
        raise ValidationError(
            f"{name} must be {bound}",
            details={"field": name, "value": value},
        )
    return value


def validate_text(value: Any, name: str) -> str:
    """Validate a free-text parameter; None reads as the empty string."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(
            f"{name} must be a string",
            details={"field": name, "value": str(value)},
        )
    return value
