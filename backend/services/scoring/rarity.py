"""Rarity score: bonus for scarce, out-of-print or collectible editions, 0-1."""

import logging

from services.scoring.base import RaritySource, clamp

logger = logging.getLogger(__name__)

MAX_RARITY_SCORE = 1.0


class NullRaritySource(RaritySource):
    """No catalog lookup available yet: every edition scores 0."""

    source_name = "none"

    def score(self, title: str | None, author: str | None) -> float:
        return 0.0


_default_source = NullRaritySource()


def calculate_rarity_score(
    title: str | None,
    author: str | None,
    source: RaritySource | None = None,
) -> float:
    """Return the rarity score in [0, 1]."""
    source = source or _default_source
    value = source.score(title, author)
    clamped = clamp(value, 0.0, MAX_RARITY_SCORE)
    if clamped != value:
        logger.debug("Rarity source %s returned %s, clamped to %s", source.source_name, value, clamped)
    return clamped
