"""Configuration management for the marker builder."""
import os
from typing import Dict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Description option value that renders the whole entity instead of a field
RENDERED_ENTITY = "#rendered_entity"

# Marker options
DEFAULT_VIEW_MODE: str = os.getenv("ROWMARKERS_DEFAULT_VIEW_MODE", "teaser")
FORM_VIEW_MODE_FALLBACK: str = "full"
DISPLAY_TITLE: str = os.getenv("ROWMARKERS_DISPLAY_TITLE", "Map Marker")

# Raise instead of returning no markers when a geo value cannot be decoded
STRICT_GEOMETRY: bool = os.getenv("ROWMARKERS_STRICT_GEOMETRY", "false").lower() == "true"

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Map export settings
MAP_DEFAULT_ZOOM: int = int(os.getenv("MAP_DEFAULT_ZOOM", "10"))
MARKER_CRS: str = "EPSG:4326"

# Field storage types that carry geometry, by decoding path
GEO_STORAGE_TYPES: Dict[str, str] = {
    "geofield": "wkt",
    "geolocation": "structured",
}
