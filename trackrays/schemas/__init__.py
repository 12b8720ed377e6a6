"""Data schemas for track matching and ray projection."""

from .entities import Entity, EntityRegistry, split_keywords
from .features import (
    UNMATCHED,
    LineFeature,
    ProjectedFeature,
    ProjectedCollection,
    RecomputeStats,
)

__all__ = [
    # Tracks
    "Entity",
    "EntityRegistry",
    "split_keywords",
    # Features
    "UNMATCHED",
    "LineFeature",
    "ProjectedFeature",
    "ProjectedCollection",
    "RecomputeStats",
]
