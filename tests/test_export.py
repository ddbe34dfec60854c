"""Tests for marker export."""
from shapely.geometry import Polygon
from rowmarkers.core.export import build_marker_deck, marker_geometry, markers_to_geodataframe, markers_to_geojson
from rowmarkers.core.geometry import points_from_wkt
from rowmarkers.core.models import GeoPoint


def _markers():
    markers = points_from_wkt("GEOMETRYCOLLECTION (POINT (31 5), POINT (33 7), LINESTRING (30 4, 32 6))")
    for marker in markers:
        marker.label = "Cafe"
        marker.popup = "<p>Open</p>"
    markers[0]["icon"] = "cafe"
    return markers


def test_marker_geometry_round_trips_types():
    markers = points_from_wkt([
        "POINT (31 5)",
        "POLYGON ((30 4, 32 4, 32 6, 30 6, 30 4))",
        "MULTIPOLYGON (((30 4, 32 4, 32 6, 30 4)), ((33 4, 34 4, 34 5, 33 4)))",
        "MULTILINESTRING ((30 4, 32 6), (33 4, 34 5))",
    ])

    geom_types = [marker_geometry(m).geom_type for m in markers]
    assert geom_types == ["Point", "Polygon", "MultiPolygon", "MultiLineString"]
    assert marker_geometry(markers[1]).equals(Polygon([(30, 4), (32, 4), (32, 6), (30, 6)]))


def test_markers_to_geojson():
    collection = markers_to_geojson(_markers())

    assert collection["type"] == "FeatureCollection"
    assert len(collection["features"]) == 3

    first = collection["features"][0]
    assert first["geometry"]["type"] == "Point"
    assert tuple(first["geometry"]["coordinates"]) == (31.0, 5.0)
    assert first["properties"] == {"label": "Cafe", "popup": "<p>Open</p>", "type": "point", "icon": "cafe"}
    assert collection["features"][2]["geometry"]["type"] == "LineString"


def test_markers_to_geodataframe():
    gdf = markers_to_geodataframe(_markers())

    assert len(gdf) == 3
    assert gdf.crs.to_string() == "EPSG:4326"
    assert list(gdf["label"]) == ["Cafe"] * 3
    assert gdf.geometry.iloc[1].x == 33.0
    assert gdf.geometry.iloc[1].y == 7.0


def test_markers_to_geodataframe_empty():
    gdf = markers_to_geodataframe([])
    assert gdf.empty
    assert "label" in gdf.columns


def test_build_marker_deck():
    deck = build_marker_deck(_markers(), zoom=8)

    assert [layer.type for layer in deck.layers] == ["ScatterplotLayer", "GeoJsonLayer"]
    assert deck.initial_view_state.zoom == 8
    assert 4.0 <= deck.initial_view_state.latitude <= 7.0


def test_build_marker_deck_points_only():
    deck = build_marker_deck([GeoPoint(lat=4.85, lng=31.58, label="Juba")])

    assert [layer.type for layer in deck.layers] == ["ScatterplotLayer"]
    assert deck.initial_view_state.longitude == 31.58
