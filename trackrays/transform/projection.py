"""Great-circle bearing and destination math for ray projection.

All functions accept scalars or numpy arrays (degrees in, degrees out) and
use a spherical earth, matching what web map libraries draw.
"""

import math
import numbers
from typing import Any, Sequence, Tuple

import numpy as np

from trackrays.exceptions import TrackRaysError

EARTH_RADIUS_M = 6371008.8
METERS_PER_MILE = 1609.344


class InvalidGeometryError(TrackRaysError, ValueError):
    """Raised when a line cannot be projected (too few or non-numeric points)."""


def initial_bearing(lon1, lat1, lon2, lat2):
    """Initial great-circle bearing from point 1 to point 2.

    Returns:
        Bearing in degrees, normalized to [0, 360). Identical points give 0.
    """
    phi1 = np.radians(lat1)
    phi2 = np.radians(lat2)
    dlon = np.radians(np.subtract(lon2, lon1))

    a = np.sin(dlon) * np.cos(phi2)
    b = np.cos(phi1) * np.sin(phi2) - np.sin(phi1) * np.cos(phi2) * np.cos(dlon)

    return np.mod(np.degrees(np.arctan2(a, b)), 360.0)


def destination(lon, lat, distance_m, bearing_deg, radius_m: float = EARTH_RADIUS_M):
    """Point reached travelling ``distance_m`` along ``bearing_deg`` from (lon, lat).

    Negative distances travel the reverse heading. Longitudes are not
    wrapped, so a ray crossing the antimeridian stays continuous.

    Returns:
        (lon, lat) in degrees
    """
    phi1 = np.radians(lat)
    lam1 = np.radians(lon)
    theta = np.radians(bearing_deg)
    delta = np.divide(distance_m, radius_m)

    phi2 = np.arcsin(
        np.sin(phi1) * np.cos(delta) + np.cos(phi1) * np.sin(delta) * np.cos(theta)
    )
    lam2 = lam1 + np.arctan2(
        np.sin(theta) * np.sin(delta) * np.cos(phi1),
        np.cos(delta) - np.sin(phi1) * np.sin(phi2),
    )

    return np.degrees(lam2), np.degrees(phi2)


def _is_number(value: Any) -> bool:
    # bool is an int subclass; numpy scalars register as numbers.Real
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def line_endpoints(coordinates: Sequence[Any]) -> np.ndarray:
    """First two positions of a line as a (2, 2) float array of (lon, lat).

    Any trailing vertices and altitude components are ignored.

    Raises:
        InvalidGeometryError: Fewer than two positions, or non-finite lon/lat
    """
    if not isinstance(coordinates, (list, tuple)) or len(coordinates) < 2:
        count = len(coordinates) if isinstance(coordinates, (list, tuple)) else 0
        raise InvalidGeometryError(f"Line needs at least 2 positions, got {count}")

    endpoints = []
    for position in coordinates[:2]:
        if not isinstance(position, (list, tuple)) or len(position) < 2:
            raise InvalidGeometryError(f"Malformed position: {position!r}")

        lon, lat = position[0], position[1]
        if not (_is_number(lon) and _is_number(lat)):
            raise InvalidGeometryError(f"Non-numeric position: {position!r}")
        try:
            lon, lat = float(lon), float(lat)
        except OverflowError as e:
            raise InvalidGeometryError(f"Non-finite position: {position!r}") from e

        if not (math.isfinite(lon) and math.isfinite(lat)):
            raise InvalidGeometryError(f"Non-finite position: {position!r}")

        endpoints.append((lon, lat))

    return np.array(endpoints, dtype=float)


def project_rays(
    starts: np.ndarray,
    bearings: np.ndarray,
    distance_m: float,
    radius_m: float = EARTH_RADIUS_M,
) -> Tuple[np.ndarray, np.ndarray]:
    """Forward and backward ray endpoints for many lines at once.

    Args:
        starts: (n, 2) array of (lon, lat) start points
        bearings: (n,) bearings in degrees
        distance_m: Distance in each direction
        radius_m: Earth radius

    Returns:
        (forward, backward) (n, 2) arrays of (lon, lat)
    """
    lon, lat = starts[:, 0], starts[:, 1]
    fwd_lon, fwd_lat = destination(lon, lat, distance_m, bearings, radius_m)
    back_lon, back_lat = destination(lon, lat, -distance_m, bearings, radius_m)

    return np.column_stack([fwd_lon, fwd_lat]), np.column_stack([back_lon, back_lat])


def project_ray(
    coordinates: Sequence[Any],
    distance_m: float = 100 * METERS_PER_MILE,
    radius_m: float = EARTH_RADIUS_M,
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Ray through a line's first point along its initial bearing.

    Args:
        coordinates: GeoJSON LineString positions
        distance_m: Distance in each direction from the first point
        radius_m: Earth radius

    Returns:
        ((lon, lat) forward, (lon, lat) backward)

    Raises:
        InvalidGeometryError: If the line cannot be projected
    """
    endpoints = line_endpoints(coordinates)
    bearing = initial_bearing(endpoints[0, 0], endpoints[0, 1], endpoints[1, 0], endpoints[1, 1])
    forward, backward = project_rays(endpoints[:1], np.atleast_1d(bearing), distance_m, radius_m)

    return (
        (float(forward[0, 0]), float(forward[0, 1])),
        (float(backward[0, 0]), float(backward[0, 1])),
    )
