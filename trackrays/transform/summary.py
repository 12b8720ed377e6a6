"""Per-track match counts for the legend and CLI report."""

from typing import List, Sequence

import pandas as pd

from trackrays.conf.settings import settings
from trackrays.schemas.entities import EntityRegistry
from trackrays.schemas.features import UNMATCHED, LineFeature
from trackrays.utils.logging_utils import get_logger
from .matching import (
    PropertySerializationError,
    compile_keywords,
    match_tokens,
    serialize_properties,
)

logger = get_logger(__name__)

UNMATCHED_NAME = "unknown"


def summarize_matches(lines: Sequence[LineFeature], registry: EntityRegistry) -> pd.DataFrame:
    """Count how many lines each track matches, ignoring visibility toggles.

    Lines whose properties cannot be serialized are left out of every count.

    Args:
        lines: Imported line features
        registry: Track registry snapshot

    Returns:
        DataFrame with columns entity_index, keywords, color, visible, count.
        The unmatched row (entity_index -1) comes first.
    """
    compiled = compile_keywords(registry)

    matched: List[int] = []
    for i, line in enumerate(lines):
        try:
            matched.append(match_tokens(serialize_properties(line.properties), compiled))
        except PropertySerializationError as e:
            logger.warning(f"Not counting line {i}: {e}")

    counts = pd.Series(matched, dtype="int64").value_counts()

    rows = [
        {
            "entity_index": UNMATCHED,
            "keywords": UNMATCHED_NAME,
            "color": settings.unmatched_color,
            "visible": registry.show_unmatched,
        }
    ]
    for i, entity in enumerate(registry.entities):
        rows.append(
            {
                "entity_index": i,
                "keywords": entity.base_keywords,
                "color": entity.display_color,
                "visible": entity.visible,
            }
        )

    df = pd.DataFrame(rows, columns=["entity_index", "keywords", "color", "visible"])
    df["count"] = df["entity_index"].map(counts).fillna(0).astype("int64")

    return df
