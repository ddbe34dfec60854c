"""Tests for DataFrame-backed field access."""
import pandas as pd
from rowmarkers.core.accessors import DataFrameFieldAccessor


def test_get_field_value(accessor):
    assert accessor.get_field_value(1, "geom") == "POINT (31.58 4.85)"
    assert accessor.get_field_value(2, "geom") is None


def test_get_field_missing_cells(accessor):
    assert accessor.get_field(0, "title") == "Cafe"
    assert accessor.get_field(2, "body") is None
    assert accessor.get_field(0, "unknown") is None
    assert accessor.get_field(99, "title") is None


def test_rendered_frame_is_used_for_output():
    values = pd.DataFrame({"title": ["Cafe"], "rating": [4.5]}, index=[10])
    rendered = pd.DataFrame({"title": ["<a href=\"/node/1\">Cafe</a>"]}, index=[10])
    accessor = DataFrameFieldAccessor(values, rendered)

    # Rows are addressed by position in the listing
    assert accessor.get_field(0, "title") == "<a href=\"/node/1\">Cafe</a>"
    assert accessor.get_field_value(0, "title") == "Cafe"
    assert accessor.get_field_value(0, "rating") == 4.5


def test_nan_is_missing():
    accessor = DataFrameFieldAccessor(pd.DataFrame({"rating": [float("nan"), 3.0]}))
    assert accessor.get_field(0, "rating") is None
    assert accessor.get_field(1, "rating") == "3.0"
