"""Configuration for the track ray pipeline."""

from .settings import Settings, settings, load_palette

__all__ = ["Settings", "settings", "load_palette"]
