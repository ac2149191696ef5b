"""Lazy registry of demand and rarity sources, keyed by configured name."""

import logging

from services.scoring.base import DemandSource, RaritySource

logger = logging.getLogger(__name__)

_demand_sources: dict[str, DemandSource] = {}
_rarity_sources: dict[str, RaritySource] = {}


def _create_demand_source(name: str) -> DemandSource:
    if name == "keyword":
        from services.scoring.demand import KeywordDemandSource
        return KeywordDemandSource()
    raise ValueError(f"Unknown demand source: {name}")


def _create_rarity_source(name: str) -> RaritySource:
    if name == "none":
        from services.scoring.rarity import NullRaritySource
        return NullRaritySource()
    raise ValueError(f"Unknown rarity source: {name}")


def get_demand_source(name: str) -> DemandSource:
    """Get a demand source by name, creating it on first access."""
    if name not in _demand_sources:
        logger.info("Creating demand source: %s", name)
        _demand_sources[name] = _create_demand_source(name)
    return _demand_sources[name]


def get_rarity_source(name: str) -> RaritySource:
    """Get a rarity source by name, creating it on first access."""
    if name not in _rarity_sources:
        logger.info("Creating rarity source: %s", name)
        _rarity_sources[name] = _create_rarity_source(name)
    return _rarity_sources[name]


def clear() -> None:
    """Drop all cached sources. Useful for testing."""
    _demand_sources.clear()
    _rarity_sources.clear()
