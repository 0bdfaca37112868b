"""Levenshtein edit distance and fuzzy token matching."""

# Typos up to two edits apart still match.
MAX_EDIT_DISTANCE = 2

# Tokens shorter than this never take part in fuzzy matching.
MIN_FUZZY_TOKEN_LENGTH = 3


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character insertions, deletions or
    substitutions turning ``a`` into ``b``.
    """
    if a == b:
        return 0
    # Iterate over the longer string; the row is as wide as the shorter one.
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current

    return previous[-1]


def fuzzy_matches(query: str, candidate: str, threshold: int = MAX_EDIT_DISTANCE) -> bool:
    """Check whether two normalized strings are within ``threshold`` edits."""
    if abs(len(query) - len(candidate)) > threshold:
        return False
    return levenshtein_distance(query, candidate) <= threshold


def any_fuzzy_match(
    query_tokens: list[str],
    text_tokens: list[str],
    threshold: int = MAX_EDIT_DISTANCE,
) -> bool:
    """Check whether any query token fuzzy-matches any text token."""
    for query_token in query_tokens:
        for text_token in text_tokens:
            if fuzzy_matches(query_token, text_token, threshold):
                return True
    return False
