"""Configuration settings for the track ray pipeline."""

from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PALETTE_FILE = Path(__file__).parent / "palette.yaml"


class Settings(BaseSettings):
    """Global pipeline settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    # Ray projection
    ray_distance: float = 100.0
    ray_units: Literal["miles", "kilometers", "meters"] = "miles"
    earth_radius_m: float = 6371008.8  # Mean earth radius

    # Colors
    unmatched_color: str = "#000000"
    palette_file: Optional[str] = None  # None = packaged palette.yaml

    # Map defaults
    map_center_lat: float = 37.67930024679403
    map_center_lon: float = -118.73568101989429
    map_zoom: float = 10
    map_style: str = "open-street-map"
    map_height_px: int = 500
    line_width: float = 2
    label_size: int = 12

    # App settings
    app_title: str = "Track Rays"
    app_host: str = "127.0.0.1"
    app_port: int = 8050
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = False
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    logs_path: str = "logs"

    @property
    def ray_distance_m(self) -> float:
        """Ray half-length in meters."""
        factor = {"miles": 1609.344, "kilometers": 1000.0, "meters": 1.0}[self.ray_units]
        return self.ray_distance * factor

    @property
    def palette(self) -> List[str]:
        """Track color palette loaded from the configured YAML file."""
        return load_palette(self.palette_file)


def load_palette(palette_file: Optional[str | Path] = None) -> List[str]:
    """Load the track color palette from YAML.

    Args:
        palette_file: Path to a YAML file with a top-level ``palette`` list.
            Defaults to the packaged palette.

    Returns:
        List of color strings
    """
    path = Path(palette_file) if palette_file else DEFAULT_PALETTE_FILE

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    palette = data.get("palette") or []
    if not palette:
        raise ValueError(f"No colors found in palette file {path}")

    return [str(color) for color in palette]


# Global settings instance
settings = Settings()
