"""
Relevance scoring for free-text search.

A product's base boost comes from the strongest textual signal it carries:

    exact title match        3
    title contains query     2
    fuzzy title token        2
    description contains     1
    fuzzy description token  1

The weighted rating then amplifies the boost by at most 50%, which keeps every
tier strictly above the one below it. Products with no signal are excluded.
"""

from dataclasses import dataclass, field

import structlog

from discovery.models import Language, Product
from discovery.search.base import MatchType, ScoredCandidate
from discovery.search.matcher import MAX_EDIT_DISTANCE, MIN_FUZZY_TOKEN_LENGTH, any_fuzzy_match
from discovery.search.tokenizer import normalize, unique_tokens

logger = structlog.get_logger()

EXACT_TITLE_BOOST = 3.0
TITLE_BOOST = 2.0
DESCRIPTION_BOOST = 1.0

# Weighted rating is at most 5, so the amplifier never exceeds 1.5.
RATING_WEIGHT = 0.1

DEFAULT_MAX_QUERY_TOKENS = 32

MATCH_BOOSTS: dict[MatchType, float] = {
    MatchType.EXACT_TITLE: EXACT_TITLE_BOOST,
    MatchType.TITLE: TITLE_BOOST,
    MatchType.FUZZY_TITLE: TITLE_BOOST,
    MatchType.DESCRIPTION: DESCRIPTION_BOOST,
    MatchType.FUZZY_DESCRIPTION: DESCRIPTION_BOOST,
}


@dataclass
class PreparedQuery:
    """A query normalized once per ranking."""
    text: str
    fuzzy_tokens: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.text


def relevance_score(boost: float, weighted_rating: float) -> float:
    """Combine a textual boost with the quality signal."""
    return boost * (1 + RATING_WEIGHT * weighted_rating)


class RelevanceScorer:
    """Scores catalog products against a search query.

    Attributes:
        max_query_tokens: Cap on distinct query tokens used for fuzzy checks
        language: Which side of the bilingual text is matched
    """

    def __init__(
        self,
        max_query_tokens: int = DEFAULT_MAX_QUERY_TOKENS,
        language: Language | str = Language.EN,
    ):
        self.max_query_tokens = max_query_tokens
        self.language = Language(language)

    def prepare(self, query: str) -> PreparedQuery:
        """Normalize the query and pick its fuzzy-match tokens."""
        return PreparedQuery(
            text=normalize(query),
            fuzzy_tokens=unique_tokens(
                query,
                limit=self.max_query_tokens,
                min_length=MIN_FUZZY_TOKEN_LENGTH,
            ),
        )

    def match(self, query: PreparedQuery, product: Product) -> MatchType | None:
        """Return the strongest textual signal, or None."""
        if query.is_empty:
            return None

        title = normalize(product.title.text_for(self.language))
        if title == query.text:
            return MatchType.EXACT_TITLE
        if query.text in title:
            return MatchType.TITLE

        title_tokens = unique_tokens(title, min_length=MIN_FUZZY_TOKEN_LENGTH)
        if any_fuzzy_match(query.fuzzy_tokens, title_tokens, MAX_EDIT_DISTANCE):
            return MatchType.FUZZY_TITLE

        description = normalize(product.description.text_for(self.language))
        if query.text in description:
            return MatchType.DESCRIPTION

        description_tokens = unique_tokens(description, min_length=MIN_FUZZY_TOKEN_LENGTH)
        if any_fuzzy_match(query.fuzzy_tokens, description_tokens, MAX_EDIT_DISTANCE):
            return MatchType.FUZZY_DESCRIPTION

        return None

    def score(self, query: str | PreparedQuery, product: Product) -> ScoredCandidate | None:
        """Score one product; None for zero-signal products."""
        prepared = query if isinstance(query, PreparedQuery) else self.prepare(query)
        match_type = self.match(prepared, product)
        if match_type is None:
            return None

        boost = MATCH_BOOSTS[match_type]
        return ScoredCandidate(
            product=product,
            score=relevance_score(boost, product.quality),
            boost=boost,
            match_type=match_type,
        )

    def rank(self, query: str | PreparedQuery, products: list[Product]) -> list[ScoredCandidate]:
        """Score, drop zero-signal products and order by score.

        Equal scores are ordered by product id so the output is deterministic.
        """
        prepared = query if isinstance(query, PreparedQuery) else self.prepare(query)
        if prepared.is_empty:
            return []

        scored = [
            candidate
            for candidate in (self.score(prepared, product) for product in products)
            if candidate is not None
        ]
        scored.sort(key=lambda c: (-c.score, -c.boost, c.product.id))

        logger.debug(
            "products_ranked",
            query=prepared.text,
            candidates=len(products),
            matched=len(scored),
        )
        return scored
