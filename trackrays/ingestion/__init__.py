"""Ingestion of keyword and GeoJSON imports."""

from .keywords import parse_keyword_lines, import_from_text
from .geojson import parse_line_features, load_line_features

__all__ = [
    "parse_keyword_lines",
    "import_from_text",
    "parse_line_features",
    "load_line_features",
]
