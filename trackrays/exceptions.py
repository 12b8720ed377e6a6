"""Exception types raised by trackrays."""


class TrackRaysError(Exception):
    """Base class for trackrays errors."""


class GeoJSONImportError(TrackRaysError, ValueError):
    """Raised when a GeoJSON import cannot be read as a feature collection."""
