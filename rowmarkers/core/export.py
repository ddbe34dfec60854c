"""Export markers to GeoJSON, GeoDataFrames and pydeck maps."""
from typing import Any, Dict, List, Optional
import geopandas as gpd
import pydeck as pdk
from shapely.geometry import LineString, MultiLineString, MultiPolygon, Point, Polygon, mapping
from rowmarkers.core.config import MAP_DEFAULT_ZOOM, MARKER_CRS
from rowmarkers.core.models import GeoPoint


def _coords(marker: GeoPoint) -> List[tuple]:
    return [(lng, lat) for lat, lng in (marker.points or [])]


def marker_geometry(marker: GeoPoint):
    """
    Build the shapely geometry of a marker.

    Args:
        marker: GeoPoint of any type

    Returns:
        Shapely geometry in lon/lat order
    """
    if marker.type == "linestring":
        return LineString(_coords(marker))
    if marker.type == "polygon":
        return Polygon(_coords(marker))
    if marker.type == "multipolyline":
        return MultiLineString([_coords(c) for c in marker.components or []])
    if marker.type == "multipolygon":
        return MultiPolygon([Polygon(_coords(c)) for c in marker.components or []])
    return Point(marker.lng, marker.lat)


def _properties(marker: GeoPoint) -> Dict[str, Any]:
    return {"label": marker.label, "popup": marker.popup, "type": marker.type, **marker.extra}


def markers_to_geojson(markers: List[GeoPoint]) -> Dict[str, Any]:
    """Convert markers to a GeoJSON FeatureCollection."""
    features = []
    for marker in markers:
        features.append({
            "type": "Feature",
            "properties": _properties(marker),
            "geometry": mapping(marker_geometry(marker)),
        })
    return {"type": "FeatureCollection", "features": features}


def markers_to_geodataframe(markers: List[GeoPoint]) -> gpd.GeoDataFrame:
    """Convert markers to a GeoDataFrame in EPSG:4326."""
    if not markers:
        return gpd.GeoDataFrame(
            {"label": [], "popup": [], "type": []},
            geometry=gpd.GeoSeries([], crs=MARKER_CRS),
        )

    records = [{**_properties(m), "geometry": marker_geometry(m)} for m in markers]
    return gpd.GeoDataFrame(records, geometry="geometry", crs=MARKER_CRS)


def build_marker_deck(markers: List[GeoPoint], zoom: Optional[int] = None) -> pdk.Deck:
    """
    Build a pydeck map of the markers.

    Points are drawn with a ScatterplotLayer, lines and polygons with a
    GeoJsonLayer. The view is centred on the mean marker position.

    Args:
        markers: Markers to draw
        zoom: Initial zoom level (default from config)

    Returns:
        pydeck Deck
    """
    layers = []

    points = [m for m in markers if m.type == "point"]
    shapes = [m for m in markers if m.type != "point"]

    if points:
        layers.append(
            pdk.Layer(
                "ScatterplotLayer",
                data=[{
                    "lon": m.lng,
                    "lat": m.lat,
                    "name": m.label,
                    "popup": m.popup,
                } for m in points],
                get_position=["lon", "lat"],
                get_color=[255, 0, 0, 200],
                get_radius=500,
                radius_min_pixels=6,
                radius_max_pixels=30,
                pickable=True
            )
        )

    if shapes:
        layers.append(
            pdk.Layer(
                "GeoJsonLayer",
                data=markers_to_geojson(shapes),
                get_fill_color=[0, 100, 200, 80],
                get_line_color=[0, 100, 200, 255],
                line_width_min_pixels=2,
                pickable=True
            )
        )

    if markers:
        latitude = sum(m.lat for m in markers) / len(markers)
        longitude = sum(m.lng for m in markers) / len(markers)
    else:
        latitude, longitude = 0.0, 0.0

    view_state = pdk.ViewState(
        longitude=longitude,
        latitude=latitude,
        zoom=MAP_DEFAULT_ZOOM if zoom is None else zoom,
        pitch=0
    )

    return pdk.Deck(
        map_style=None,
        initial_view_state=view_state,
        layers=layers,
        tooltip={"text": "{name}"}
    )
