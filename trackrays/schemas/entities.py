"""Track entity and registry schemas."""

from typing import Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

from trackrays.utils.logging_utils import get_logger

logger = get_logger(__name__)

KEYWORD_SEPARATOR = ","


def split_keywords(text: str) -> List[str]:
    """Split a comma-separated keyword string into trimmed, non-empty tokens."""
    return [token.strip() for token in text.split(KEYWORD_SEPARATOR) if token.strip()]


class Entity(BaseModel):
    """A named track with its matching keywords and display color.

    ``base_keywords`` is the raw text of one line from the keyword import;
    ``extra_keywords`` is edited afterwards in the legend.
    """

    display_color: str = Field(..., description="Palette color assigned at import")
    base_keywords: str = Field(..., description="Raw keyword line from the import file")
    extra_keywords: str = Field("", description="Additional comma-separated keywords")
    visible: bool = Field(True, description="Whether matched lines are rendered")

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "display_color": "#ff0044",
                "base_keywords": "owl,barn owl",
                "extra_keywords": "BANO",
                "visible": True,
            }
        }

    @property
    def keywords(self) -> List[str]:
        """Base then extra keywords, split and trimmed (case untouched)."""
        return split_keywords(self.base_keywords) + split_keywords(self.extra_keywords)


class EntityRegistry(BaseModel):
    """Immutable snapshot of the imported tracks and the unmatched toggle.

    Mutators never change the snapshot in place; they return an updated
    copy, or the same instance when the call is a no-op.
    """

    entities: Tuple[Entity, ...] = Field(default_factory=tuple)
    show_unmatched: bool = Field(True, description="Render lines that match no track")

    class Config:
        frozen = True

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        palette: Sequence[str],
        show_unmatched: bool = True,
    ) -> "EntityRegistry":
        """Create one entity per keyword line, coloring by index.

        Args:
            lines: Keyword lines (already stripped of blanks)
            palette: Colors, cycled by index modulo palette length
            show_unmatched: Initial unmatched toggle

        Returns:
            New registry
        """
        if not palette:
            raise ValueError("Palette must contain at least one color")

        entities = tuple(
            Entity(display_color=palette[i % len(palette)], base_keywords=line)
            for i, line in enumerate(lines)
        )
        return cls(entities=entities, show_unmatched=show_unmatched)

    def __len__(self) -> int:
        return len(self.entities)

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self.entities)

    def _replace_entity(self, index: int, **update) -> "EntityRegistry":
        if not self._in_range(index):
            logger.debug(f"Ignoring update for stale track index {index} (have {len(self)})")
            return self

        entities = list(self.entities)
        entities[index] = entities[index].model_copy(update=update)
        return self.model_copy(update={"entities": tuple(entities)})

    def set_visible(self, index: int, value: bool) -> "EntityRegistry":
        """Toggle one track's visibility. Out-of-range index is a no-op."""
        return self._replace_entity(index, visible=bool(value))

    def set_extra_keywords(self, index: int, text: Optional[str]) -> "EntityRegistry":
        """Replace one track's extra keywords verbatim. Out-of-range index is a no-op."""
        return self._replace_entity(index, extra_keywords=text or "")

    def set_show_unmatched(self, value: bool) -> "EntityRegistry":
        """Toggle rendering of lines that match no track."""
        return self.model_copy(update={"show_unmatched": bool(value)})

    def keywords_for(self, index: int) -> List[str]:
        """Combined base and extra keywords for one track ([] if out of range)."""
        if not self._in_range(index):
            return []
        return self.entities[index].keywords
