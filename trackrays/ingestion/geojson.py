"""GeoJSON line import."""

from typing import Any, List

import orjson

from trackrays.exceptions import GeoJSONImportError
from trackrays.schemas.features import LineFeature
from trackrays.utils.logging_utils import get_logger

logger = get_logger(__name__)


def _feature_list(data: Any) -> List[Any]:
    if not isinstance(data, dict):
        raise GeoJSONImportError(
            f"Expected a GeoJSON object, got {type(data).__name__}"
        )

    kind = data.get("type")
    if kind == "FeatureCollection":
        features = data.get("features")
        if not isinstance(features, list):
            raise GeoJSONImportError("FeatureCollection has no 'features' list")
        return features
    if kind == "Feature":
        return [data]

    raise GeoJSONImportError(
        f"Unsupported GeoJSON type: {kind!r}. Expected FeatureCollection or Feature"
    )


def parse_line_features(data: Any) -> List[LineFeature]:
    """Extract LineString features from parsed GeoJSON.

    Features that are not LineStrings are skipped with a warning. Coordinate
    values are not validated here.

    Args:
        data: Parsed GeoJSON (FeatureCollection or single Feature)

    Returns:
        Line features in file order

    Raises:
        GeoJSONImportError: If the top-level object is not a feature collection
    """
    features = _feature_list(data)

    lines = []
    skipped = 0
    for i, feature in enumerate(features):
        geometry = feature.get("geometry") if isinstance(feature, dict) else None
        if not isinstance(geometry, dict) or geometry.get("type") != "LineString":
            kind = geometry.get("type") if isinstance(geometry, dict) else None
            logger.warning(f"Skipping feature {i}: geometry type {kind!r} is not LineString")
            skipped += 1
            continue

        coordinates = geometry.get("coordinates")
        properties = feature.get("properties")
        lines.append(
            LineFeature(
                coordinates=coordinates if isinstance(coordinates, list) else [],
                properties=properties if isinstance(properties, dict) else None,
            )
        )

    logger.info(f"Imported {len(lines)} line features ({skipped} skipped)")
    return lines


def load_line_features(text: str | bytes) -> List[LineFeature]:
    """Parse GeoJSON text into line features.

    Raises:
        GeoJSONImportError: If the text is not valid JSON or not a feature collection
    """
    try:
        data = orjson.loads(text)
    except orjson.JSONDecodeError as e:
        raise GeoJSONImportError(f"Invalid GeoJSON: {e}") from e

    return parse_line_features(data)
