"""Store (de)serialization and event handlers behind the dashboard callbacks.

Everything here is plain Python so the callbacks in ``app`` stay thin.
Store values are JSON-compatible dicts; each handler takes the current
store snapshots and returns new ones.
"""

import base64
import binascii
from typing import Any, Dict, List, Optional, Sequence, Tuple

from trackrays.exceptions import GeoJSONImportError
from trackrays.ingestion import import_from_text, load_line_features
from trackrays.schemas.entities import EntityRegistry
from trackrays.schemas.features import LineFeature, ProjectedCollection
from trackrays.transform import recompute, summarize_matches
from trackrays.utils.io_utils import decode_text
from trackrays.utils.logging_utils import get_logger

logger = get_logger(__name__)


class UploadError(ValueError):
    """Raised when upload contents cannot be decoded."""


def decode_upload(contents: str) -> str:
    """Decode a ``dcc.Upload`` data URL to text.

    Raises:
        UploadError: If the contents are not a base64 data URL
    """
    try:
        _, encoded = contents.split(",", 1)
        return decode_text(base64.b64decode(encoded))
    except (ValueError, binascii.Error) as e:
        raise UploadError(f"Could not decode upload: {e}") from e


def registry_from_store(data: Optional[Dict[str, Any]]) -> EntityRegistry:
    if not data:
        return EntityRegistry()
    return EntityRegistry.model_validate(data)


def registry_to_store(registry: EntityRegistry) -> Dict[str, Any]:
    return registry.model_dump(mode="json")


def lines_from_store(data: Optional[List[Dict[str, Any]]]) -> List[LineFeature]:
    return [LineFeature.model_validate(item) for item in data or []]


def lines_to_store(lines: Sequence[LineFeature]) -> List[Dict[str, Any]]:
    return [line.model_dump(mode="json") for line in lines]


def handle_lines_upload(
    contents: str,
    filename: Optional[str],
    current: Optional[List[Dict[str, Any]]],
) -> Tuple[Optional[List[Dict[str, Any]]], str]:
    """Replace the line store from an uploaded GeoJSON file.

    On failure the current store is kept and the status explains why.

    Returns:
        (lines store, status message)
    """
    try:
        lines = load_line_features(decode_upload(contents))
    except (UploadError, GeoJSONImportError) as e:
        logger.error(f"GeoJSON import of {filename} failed: {e}")
        return current, f"Could not import {filename}: {e}"

    return lines_to_store(lines), f"Loaded {len(lines)} lines from {filename}"


def handle_keywords_upload(
    contents: str,
    filename: Optional[str],
    current: Optional[Dict[str, Any]],
) -> Tuple[Dict[str, Any], str]:
    """Replace the registry from an uploaded keyword file.

    The show-unmatched toggle survives the reimport; everything else is new.

    Returns:
        (registry store, status message)
    """
    previous = registry_from_store(current)
    try:
        text = decode_upload(contents)
    except UploadError as e:
        logger.error(f"Keyword import of {filename} failed: {e}")
        return registry_to_store(previous), f"Could not import {filename}: {e}"

    registry = import_from_text(text, previous=previous)
    return registry_to_store(registry), f"Loaded {len(registry)} tracks from {filename}"


def apply_legend_state(
    current: Optional[Dict[str, Any]],
    show_unmatched: bool,
    visible: Sequence[Tuple[int, bool]],
    extra_keywords: Sequence[Tuple[int, Optional[str]]],
) -> Dict[str, Any]:
    """Fold the legend control values into the registry.

    Args:
        current: Registry store
        show_unmatched: Unknown-row checkbox
        visible: (track index, checked) for each visibility checkbox
        extra_keywords: (track index, text) for each extra-keyword input

    Returns:
        Updated registry store
    """
    registry = registry_from_store(current).set_show_unmatched(show_unmatched)

    for index, value in visible:
        registry = registry.set_visible(index, value)
    for index, text in extra_keywords:
        registry = registry.set_extra_keywords(index, text)

    return registry_to_store(registry)


def compute_view(
    lines_data: Optional[List[Dict[str, Any]]],
    registry_data: Optional[Dict[str, Any]],
) -> Tuple[ProjectedCollection, Dict[int, int]]:
    """Recompute the rays and per-track match counts from the stores.

    Returns:
        (projected collection, {track index or -1: line count})
    """
    lines = lines_from_store(lines_data)
    registry = registry_from_store(registry_data)

    collection = recompute(lines, registry)
    summary = summarize_matches(lines, registry)
    counts = dict(zip(summary["entity_index"].tolist(), summary["count"].tolist()))

    return collection, counts
