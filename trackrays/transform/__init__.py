"""Matching and projection transforms."""

from .matching import (
    PropertySerializationError,
    serialize_properties,
    compile_keywords,
    match_tokens,
    classify,
    format_label,
)
from .projection import (
    EARTH_RADIUS_M,
    METERS_PER_MILE,
    InvalidGeometryError,
    initial_bearing,
    destination,
    line_endpoints,
    project_ray,
    project_rays,
)
from .recompute import recompute
from .summary import summarize_matches

__all__ = [
    # Matching
    "PropertySerializationError",
    "serialize_properties",
    "compile_keywords",
    "match_tokens",
    "classify",
    "format_label",
    # Projection
    "EARTH_RADIUS_M",
    "METERS_PER_MILE",
    "InvalidGeometryError",
    "initial_bearing",
    "destination",
    "line_endpoints",
    "project_ray",
    "project_rays",
    # Pipeline
    "recompute",
    "summarize_matches",
]
