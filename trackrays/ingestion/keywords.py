"""Keyword file import: one track per non-blank line."""

from typing import List, Optional, Sequence

from trackrays.conf.settings import settings
from trackrays.schemas.entities import EntityRegistry
from trackrays.utils.logging_utils import get_logger

logger = get_logger(__name__)


def parse_keyword_lines(text: str) -> List[str]:
    """Split keyword file text into track lines.

    Lines are split on ``\\n``; a trailing ``\\r`` from CRLF exports is
    removed and whitespace-only lines are discarded. Line text is otherwise
    kept verbatim (commas are split later, at match time).
    """
    lines = []
    for raw in text.split("\n"):
        line = raw.rstrip("\r")
        if line.strip():
            lines.append(line)
    return lines


def import_from_text(
    text: str,
    palette: Optional[Sequence[str]] = None,
    previous: Optional[EntityRegistry] = None,
) -> EntityRegistry:
    """Build a fresh registry from keyword file text.

    The whole prior registry is replaced; only its ``show_unmatched`` flag
    is carried over when ``previous`` is given.

    Args:
        text: Raw keyword file contents
        palette: Track colors (defaults to the configured palette)
        previous: Registry being replaced

    Returns:
        New EntityRegistry (possibly empty)
    """
    palette = list(palette) if palette is not None else settings.palette
    lines = parse_keyword_lines(text)

    show_unmatched = previous.show_unmatched if previous is not None else True
    registry = EntityRegistry.from_lines(lines, palette, show_unmatched=show_unmatched)

    if not lines:
        logger.warning("Keyword import contained no tracks; every line will be unmatched")
    else:
        logger.info(f"Imported {len(lines)} tracks ({len(palette)} palette colors)")

    return registry
