"""Keyword matching of line property bags against tracks.

Matching is a plain substring search: the property bag is serialized to
compact JSON, lowercased, and each track's keyword tokens are looked for in
that text. The first track (lowest index) with any hit wins. Because the
serialized text contains the property keys too, a token equal to a key
name matches every line carrying that key.
"""

import math
from typing import Any, Dict, List, Optional

import orjson

from trackrays.exceptions import TrackRaysError
from trackrays.schemas.entities import EntityRegistry
from trackrays.schemas.features import UNMATCHED

LABEL_SEPARATOR = ", "

# Largest magnitude at which every whole float is an exact integer
MAX_SAFE_INTEGER = 2**53


class PropertySerializationError(TrackRaysError, ValueError):
    """Raised when a property bag cannot be serialized for matching."""


def _is_whole(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and abs(value) <= MAX_SAFE_INTEGER


def _normalize_numbers(value: Any) -> Any:
    """Whole floats become ints so ``3.0`` reads ``3`` everywhere."""
    if isinstance(value, float):
        return int(value) if _is_whole(value) else value
    if isinstance(value, dict):
        return {k: _normalize_numbers(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_numbers(item) for item in value]
    return value


def _dumps(value: Any) -> str:
    try:
        text = orjson.dumps(
            _normalize_numbers(value), option=orjson.OPT_NON_STR_KEYS, default=str
        )
    except (TypeError, RecursionError) as e:
        # orjson.JSONEncodeError is a TypeError
        raise PropertySerializationError(f"Cannot serialize properties: {e}") from e
    return text.decode("utf-8")


def serialize_properties(properties: Optional[Dict[str, Any]]) -> str:
    """Canonical lowercase text of a property bag (``"null"`` when missing).

    Key order is preserved, non-ASCII characters are kept verbatim and whole
    floats are written without a fraction.

    Raises:
        PropertySerializationError: Nesting too deep or integers beyond 64 bits
    """
    return _dumps(properties).lower()


def compile_keywords(registry: EntityRegistry) -> List[List[str]]:
    """Lowercased keyword tokens per track, in registry order."""
    return [[token.lower() for token in entity.keywords] for entity in registry.entities]


def match_tokens(text: str, compiled: List[List[str]]) -> int:
    """Index of the first track with a token contained in ``text``, or UNMATCHED."""
    for index, tokens in enumerate(compiled):
        if any(token in text for token in tokens):
            return index
    return UNMATCHED


def classify(properties: Optional[Dict[str, Any]], registry: EntityRegistry) -> int:
    """Classify one property bag against the registry.

    Args:
        properties: Line property bag
        registry: Current track registry

    Returns:
        Matched track index, or UNMATCHED (-1)

    Raises:
        PropertySerializationError: If the property bag cannot be serialized
    """
    return match_tokens(serialize_properties(properties), compile_keywords(registry))


def _label_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if _is_whole(value) else str(value)
    if isinstance(value, (list, tuple)):
        return ",".join(_label_value(item) for item in value)
    if isinstance(value, dict):
        return _dumps(value)
    return str(value)


def format_label(properties: Optional[Dict[str, Any]]) -> str:
    """Join property values with ``", "`` in the file's key order.

    Missing values render empty, whole floats drop their ``.0``, lists are
    comma-joined and nested objects are shown as compact JSON.
    """
    if not properties:
        return ""
    return LABEL_SEPARATOR.join(_label_value(value) for value in properties.values())
