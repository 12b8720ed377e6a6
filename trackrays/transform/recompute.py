"""Full recompute of the render collection from lines and the track registry."""

from typing import List, Optional, Sequence

import numpy as np

from trackrays.conf.settings import settings
from trackrays.schemas.entities import EntityRegistry
from trackrays.schemas.features import (
    UNMATCHED,
    LineFeature,
    ProjectedCollection,
    ProjectedFeature,
    RecomputeStats,
)
from trackrays.utils.logging_utils import get_logger
from .matching import (
    PropertySerializationError,
    compile_keywords,
    format_label,
    match_tokens,
    serialize_properties,
)
from .projection import InvalidGeometryError, initial_bearing, line_endpoints, project_rays

logger = get_logger(__name__)


def recompute(
    lines: Sequence[LineFeature],
    registry: EntityRegistry,
    distance_m: Optional[float] = None,
    unmatched_color: Optional[str] = None,
) -> ProjectedCollection:
    """Classify, filter, project and label every line.

    Steps per line:
        1. Classify against the registry (first matching track wins)
        2. Drop unmatched lines when show_unmatched is off, and lines whose
           track is hidden
        3. Project a ray through the first point along the initial bearing,
           ``distance_m`` in both directions
        4. Attach color and label

    Lines whose properties cannot be serialized, or whose first two
    positions are unusable, are skipped with a warning.

    Args:
        lines: Imported line features
        registry: Track registry snapshot
        distance_m: Ray half-length (defaults to settings)
        unmatched_color: Color for unmatched lines (defaults to settings)

    Returns:
        ProjectedCollection in input order
    """
    distance_m = settings.ray_distance_m if distance_m is None else distance_m
    unmatched_color = unmatched_color or settings.unmatched_color

    stats = RecomputeStats(total=len(lines))
    compiled = compile_keywords(registry)

    kept: List[tuple] = []
    endpoints: List[np.ndarray] = []

    for i, line in enumerate(lines):
        try:
            index = match_tokens(serialize_properties(line.properties), compiled)
        except PropertySerializationError as e:
            logger.warning(f"Skipping line {i}: {e}")
            stats.skipped_invalid += 1
            continue

        if index == UNMATCHED:
            stats.unmatched += 1
            if not registry.show_unmatched:
                stats.dropped_unmatched += 1
                continue
            color = unmatched_color
        else:
            stats.matched += 1
            entity = registry.entities[index]
            if not entity.visible:
                stats.dropped_hidden += 1
                continue
            color = entity.display_color

        try:
            endpoints.append(line_endpoints(line.coordinates))
        except InvalidGeometryError as e:
            logger.warning(f"Skipping line {i}: {e}")
            stats.skipped_invalid += 1
            continue

        kept.append((index, color, format_label(line.properties)))

    features = []
    if kept:
        points = np.stack(endpoints)
        bearings = initial_bearing(
            points[:, 0, 0], points[:, 0, 1], points[:, 1, 0], points[:, 1, 1]
        )
        starts = points[:, 0, :]
        forward, backward = project_rays(starts, bearings, distance_m, settings.earth_radius_m)

        for (index, color, label), start, fwd, back in zip(kept, starts, forward, backward):
            features.append(
                ProjectedFeature(
                    entity_index=index,
                    color=color,
                    label=label,
                    coordinates=(
                        (float(fwd[0]), float(fwd[1])),
                        (float(back[0]), float(back[1])),
                    ),
                    origin=(float(start[0]), float(start[1])),
                )
            )

    logger.info(
        f"Recomputed {len(features)}/{stats.total} rays "
        f"(matched={stats.matched}, unmatched={stats.unmatched}, "
        f"hidden={stats.dropped_hidden + stats.dropped_unmatched}, "
        f"invalid={stats.skipped_invalid})"
    )

    return ProjectedCollection(features=features, stats=stats)
