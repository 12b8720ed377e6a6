"""Shared fixtures for the root-level test modules."""

import pytest

from trackrays.ingestion import import_from_text
from trackrays.schemas import LineFeature

PALETTE = ["#111111", "#222222", "#333333"]


@pytest.fixture
def palette():
    return list(PALETTE)


@pytest.fixture
def owl_registry(palette):
    """Two tracks: hawk, then owl / barn owl."""
    return import_from_text("hawk\nowl,barn owl\n", palette=palette)


@pytest.fixture
def make_line():
    def _make(properties, coordinates=None):
        return LineFeature(
            coordinates=coordinates or [[-118.0, 37.0], [-118.01, 37.01]],
            properties=properties,
        )

    return _make
