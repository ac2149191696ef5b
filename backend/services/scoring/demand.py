"""Demand score: market desirability of a title, 0-3.

The keyword source is a placeholder for real signals (wishlist counts,
search frequency, genre popularity). Any DemandSource can be swapped in
through the registry without changing the engine.
"""

import logging

from services.scoring.base import DemandSource, clamp

logger = logging.getLogger(__name__)

NEUTRAL_DEMAND = 1.0
POPULAR_TITLE_DEMAND = 3.0
TRENDING_GENRE_DEMAND = 2.0
MAX_DEMAND_SCORE = 3.0

# Matched as case-insensitive substrings of the title
POPULAR_TITLES = (
    "harry potter",
    "lord of the rings",
    "the hobbit",
    "hunger games",
    "to kill a mockingbird",
    "pride and prejudice",
    "the great gatsby",
    "1984",
    "the alchemist",
    "percy jackson",
    "diary of a wimpy kid",
    "the very hungry caterpillar",
)

TRENDING_GENRE_KEYWORDS = (
    "fantasy",
    "mystery",
    "romance",
    "thriller",
    "science fiction",
    "sci-fi",
    "graphic novel",
    "manga",
    "cookbook",
    "craft",
    "self-help",
)


class KeywordDemandSource(DemandSource):
    source_name = "keyword"

    def __init__(
        self,
        popular_titles: tuple[str, ...] = POPULAR_TITLES,
        genre_keywords: tuple[str, ...] = TRENDING_GENRE_KEYWORDS,
    ) -> None:
        self.popular_titles = tuple(t.lower() for t in popular_titles)
        self.genre_keywords = tuple(k.lower() for k in genre_keywords)

    def score(self, title: str | None, author: str | None) -> float:
        if not title:
            return NEUTRAL_DEMAND

        title_lower = title.lower()
        if any(known in title_lower for known in self.popular_titles):
            return POPULAR_TITLE_DEMAND
        if any(keyword in title_lower for keyword in self.genre_keywords):
            return TRENDING_GENRE_DEMAND
        return NEUTRAL_DEMAND


_default_source = KeywordDemandSource()


def calculate_demand_score(
    title: str | None,
    author: str | None,
    source: DemandSource | None = None,
) -> float:
    """Return the demand score in [0, 3]."""
    source = source or _default_source
    value = source.score(title, author)
    clamped = clamp(value, 0.0, MAX_DEMAND_SCORE)
    if clamped != value:
        logger.debug("Demand source %s returned %s, clamped to %s", source.source_name, value, clamped)
    return clamped
