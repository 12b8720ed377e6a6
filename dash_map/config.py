"""Configuration for the track ray dashboard."""

from trackrays.conf.settings import settings

# App settings
APP_TITLE = settings.app_title
APP_HOST = settings.app_host
APP_PORT = settings.app_port
DEBUG = settings.debug

# Map view
MAP_CENTER = {"lat": settings.map_center_lat, "lon": settings.map_center_lon}
MAP_ZOOM = settings.map_zoom
MAP_STYLE = settings.map_style
MAP_HEIGHT_PX = settings.map_height_px

# Line styling
LINE_WIDTH = settings.line_width
LABEL_SIZE = settings.label_size
UNMATCHED_COLOR = settings.unmatched_color
UNMATCHED_NAME = "unknown"

# Legend
SWATCH_WIDTH_PX = 32
EXTRA_KEYWORDS_PLACEHOLDER = "additional keys, comma separated"

# Upload labels
LINES_UPLOAD_LABEL = "GeoJSON (exported from Gaia GPS)"
KEYWORDS_UPLOAD_LABEL = "CSV (exported from Excel)"
