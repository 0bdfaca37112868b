"""
Text normalization shared by search, suggestions and fuzzy matching.

Normalized text is case-folded, has punctuation and symbols replaced by
spaces, and has every whitespace run collapsed to a single space.
"""

import unicodedata

# Unicode general categories replaced by a separator: punctuation and symbols.
_SEPARATOR_CATEGORIES = ("P", "S")


def normalize(text: str | None) -> str:
    """Normalize free text into a comparable form.

    Args:
        text: Raw text (may be None or empty)

    Returns:
        Normalized text; empty when the input carries no words
    """
    if not text:
        return ""

    folded = text.casefold()
    cleaned = "".join(
        " " if unicodedata.category(ch)[0] in _SEPARATOR_CATEGORIES else ch
        for ch in folded
    )
    return " ".join(cleaned.split())


def tokenize(text: str | None) -> list[str]:
    """Split text into normalized tokens."""
    normalized = normalize(text)
    if not normalized:
        return []
    return normalized.split(" ")


def unique_tokens(
    text: str | None,
    limit: int | None = None,
    min_length: int = 1,
) -> list[str]:
    """Distinct normalized tokens in first-seen order.

    Args:
        text: Raw text
        limit: Maximum number of tokens to keep
        min_length: Shorter tokens are dropped

    Returns:
        List of distinct tokens
    """
    tokens: list[str] = []
    seen: set[str] = set()
    for token in tokenize(text):
        if len(token) < min_length or token in seen:
            continue
        seen.add(token)
        tokens.append(token)
        if limit is not None and len(tokens) >= limit:
            break
    return tokens
