"""Line feature input and projected output schemas."""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

UNMATCHED = -1  # Entity index for lines that match no track


class LineFeature(BaseModel):
    """Imported GPS line with its opaque property bag.

    Coordinates are kept as imported; they are validated only when the
    line is projected so a bad feature can be skipped on its own.
    """

    coordinates: List[Any] = Field(default_factory=list, description="GeoJSON positions")
    properties: Optional[Dict[str, Any]] = Field(
        None, description="Property bag, key order preserved from the file"
    )

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "coordinates": [[-118.0, 37.0], [-118.01, 37.01]],
                "properties": {"name": "Barn Owl nest 3"},
            }
        }


class ProjectedFeature(BaseModel):
    """Render-ready ray for one surviving line."""

    entity_index: int = Field(..., description="Matched track index, -1 if unmatched")
    color: str = Field(..., description="Line color")
    label: str = Field(..., description="Property values joined with ', '")
    coordinates: Tuple[Tuple[float, float], Tuple[float, float]] = Field(
        ..., description="[forward, backward] ray endpoints as (lon, lat)"
    )
    origin: Tuple[float, float] = Field(..., description="First point of the source line (lon, lat)")

    class Config:
        frozen = True

    @property
    def matched(self) -> bool:
        return self.entity_index != UNMATCHED

    def to_geojson(self) -> Dict[str, Any]:
        """GeoJSON Feature with the render contract properties."""
        return {
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": [list(point) for point in self.coordinates],
            },
            "properties": {
                "entityIndex": self.entity_index,
                "color": self.color,
                "label": self.label,
            },
        }


class RecomputeStats(BaseModel):
    """Counts from one recompute pass."""

    total: int = 0
    matched: int = 0
    unmatched: int = 0
    dropped_unmatched: int = 0
    dropped_hidden: int = 0
    skipped_invalid: int = 0


class ProjectedCollection(BaseModel):
    """Output of a recompute: the features to render plus pass statistics."""

    features: List[ProjectedFeature] = Field(default_factory=list)
    stats: RecomputeStats = Field(default_factory=RecomputeStats)

    def __len__(self) -> int:
        return len(self.features)

    def to_geojson(self) -> Dict[str, Any]:
        """GeoJSON FeatureCollection consumed by the map surface."""
        return {
            "type": "FeatureCollection",
            "features": [feature.to_geojson() for feature in self.features],
        }
