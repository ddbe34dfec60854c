"""Pytest configuration and fixtures."""
import pytest
import pandas as pd
from types import SimpleNamespace
from rowmarkers.core.accessors import DataFrameFieldAccessor
from rowmarkers.core.interfaces import EntityRenderer, DisplayModeRepository
from rowmarkers.core.models import FieldHandler, MarkerOptions, ResultRow


class RecordingRenderer(EntityRenderer):
    """Entity renderer that records its calls."""

    def __init__(self):
        self.calls = []

    def render(self, entity, view_mode, langcode=None):
        self.calls.append((entity, view_mode, langcode))
        return f"<article>{entity.title} ({view_mode})</article>"


class StaticDisplayModes(DisplayModeRepository):
    """View mode registry with fixed modes per entity type."""

    def __init__(self, modes):
        self.modes = modes

    def get_view_modes(self, entity_type_id):
        return self.modes.get(entity_type_id, {})


@pytest.fixture
def field_handlers():
    """Field handlers of a sample listing."""
    return {
        "title": FieldHandler("title", admin_label="Content: Title"),
        "body": FieldHandler("body", admin_label="Content: Body"),
        "geom": FieldHandler("geom", admin_label="Content: Location", storage_type="geofield", field_name="field_geom"),
        "place": FieldHandler("place", storage_type="geolocation", field_name="field_place"),
    }


@pytest.fixture
def listing_values():
    """Formatted field values of a sample listing."""
    return pd.DataFrame([
        {"title": "Cafe", "body": "Coffee and cake", "geom": "MULTIPOINT ((2 1), (4 3))"},
        {"title": "Library", "body": "Books", "geom": "POINT (31.58 4.85)"},
        {"title": "Nowhere", "body": None, "geom": None},
        {"title": "Broken", "body": "Bad data", "geom": "not a geometry"},
    ])


@pytest.fixture
def accessor(listing_values):
    """Field value accessor over the sample listing."""
    return DataFrameFieldAccessor(listing_values)


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def display_modes():
    return StaticDisplayModes({
        "node": {
            "full": {"label": "Full content"},
            "teaser": {"label": "Teaser"},
        }
    })


@pytest.fixture
def options():
    """Options matching the sample listing."""
    return MarkerOptions(geo_field_id="geom", name_field_id="title", description_field_id="", view_mode="teaser")


@pytest.fixture
def entity():
    """A backing entity with a geolocation value."""
    return SimpleNamespace(
        title="Cafe",
        langcode="en",
        field_place=[{"lat": 4.85, "lng": 31.58}, {"lat": 4.9, "lng": 31.6}],
    )


@pytest.fixture
def rows(entity):
    """Result rows of the sample listing."""
    return [
        ResultRow(index=0, entity=entity),
        ResultRow(index=1),
        ResultRow(index=2),
        ResultRow(index=3),
    ]
