"""Abstract data sources behind the demand and rarity scores."""

from abc import ABC, abstractmethod


class DemandSource(ABC):
    """Estimates market desirability of a title.

    Subclasses must implement:
        - source_name: identifier used in the source registry
        - score(title, author): demand in [0, 3]
    """

    source_name: str = ""
    max_score: float = 3.0

    @abstractmethod
    def score(self, title: str | None, author: str | None) -> float:
        """Return a demand score in [0, max_score]."""


class RaritySource(ABC):
    """Estimates scarcity of an edition (out of print, collectible).

    Subclasses must implement:
        - source_name: identifier used in the source registry
        - score(title, author): rarity in [0, 1]
    """

    source_name: str = ""
    max_score: float = 1.0

    @abstractmethod
    def score(self, title: str | None, author: str | None) -> float:
        """Return a rarity score in [0, max_score]."""


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
