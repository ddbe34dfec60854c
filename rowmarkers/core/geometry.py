"""Decoding of geo field values into marker geometry."""
import math
from numbers import Real
from collections.abc import Iterable
from typing import Any, List, Tuple
from shapely import wkt
from shapely.errors import ShapelyError
from rowmarkers.core.errors import GeometryDecodeError
from rowmarkers.core.models import GeoPoint


def _finite(value: float, key: str) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise GeometryDecodeError(f"Non-finite {key} value: {value!r}")
    return value


def _vertices(coords) -> List[Tuple[float, float]]:
    # shapely coordinates are (x=lng, y=lat[, z])
    return [(_finite(c[1], "lat"), _finite(c[0], "lng")) for c in coords]


def _anchor(geometry) -> Tuple[float, float]:
    point = geometry.representative_point()
    return float(point.y), float(point.x)


def geometry_to_points(geometry) -> List[GeoPoint]:
    """
    Normalize a shapely geometry into marker geometry records.
    
    Points become one record each, multi-points and collections are
    flattened in member order. Lines and polygons become a single record
    carrying their vertices, anchored at a representative point.
    
    Args:
        geometry: Shapely geometry object
        
    Returns:
        List of GeoPoint records without display text
    """
    if geometry is None or geometry.is_empty:
        return []
    
    geom_type = geometry.geom_type
    
    if geom_type == "Point":
        return [GeoPoint(lat=_finite(geometry.y, "lat"), lng=_finite(geometry.x, "lng"))]
    
    if geom_type in ("MultiPoint", "GeometryCollection"):
        return [p for member in geometry.geoms for p in geometry_to_points(member)]
    
    if geom_type in ("LineString", "LinearRing", "Polygon"):
        if geom_type == "Polygon":
            vertices, marker_type = _vertices(geometry.exterior.coords), "polygon"
        else:
            vertices, marker_type = _vertices(geometry.coords), "linestring"
        lat, lng = _anchor(geometry)
        return [GeoPoint(lat=lat, lng=lng, type=marker_type, points=vertices)]
    
    if geom_type in ("MultiLineString", "MultiPolygon"):
        components = [p for member in geometry.geoms for p in geometry_to_points(member)]
        if not components:
            return []
        lat, lng = _anchor(geometry)
        multi_type = "multipolygon" if geom_type == "MultiPolygon" else "multipolyline"
        return [GeoPoint(lat=lat, lng=lng, type=multi_type, components=components)]
    
    return []


def points_from_wkt(value: Any) -> List[GeoPoint]:
    """
    Decode formatted geofield output assumed to be well-known text.
    
    Args:
        value: A WKT string, or a list of them for multi-valued fields
        
    Returns:
        List of GeoPoint records, empty for an empty value
        
    Raises:
        GeometryDecodeError: If the value is not well-known text
    """
    if value is None:
        return []
    
    if isinstance(value, str):
        values = [value]
    elif isinstance(value, (list, tuple)):
        values = list(value)
    else:
        raise GeometryDecodeError(f"Unsupported geo value of type {type(value).__name__}")
    
    points = []
    for item in values:
        if item is None:
            continue
        if not isinstance(item, str):
            raise GeometryDecodeError(f"Unsupported geo value of type {type(item).__name__}")
        text = item.strip()
        if not text:
            continue
        try:
            geometry = wkt.loads(text)
        except ShapelyError as e:
            raise GeometryDecodeError(f"Not well-known text: {text[:60]!r}") from e
        points.extend(geometry_to_points(geometry))
    
    return points


def _item_value(item: Any, key: str) -> Any:
    if isinstance(item, dict):
        return item.get(key)
    return getattr(item, key, None)


def _coordinate(value: Any, key: str) -> float:
    if isinstance(value, Real) and not isinstance(value, bool):
        return _finite(value, key)
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            number = None
        if number is not None:
            return _finite(number, key)
    raise GeometryDecodeError(f"Invalid {key} value: {value!r}")


def points_from_geolocation(items: Any) -> List[GeoPoint]:
    """
    Decode the raw items of a geolocation field.
    
    Args:
        items: One item or an iterable of items, each a mapping or object
            with ``lat`` and ``lng``
        
    Returns:
        One point record per non-empty item
        
    Raises:
        GeometryDecodeError: If an item has a missing or non-numeric coordinate
    """
    if items is None:
        return []
    
    if isinstance(items, dict) or not isinstance(items, Iterable) or isinstance(items, str):
        items = [items]
    
    points = []
    for item in items:
        lat = _item_value(item, "lat")
        lng = _item_value(item, "lng")
        if lat in (None, "") and lng in (None, ""):
            continue
        points.append(GeoPoint(lat=_coordinate(lat, "lat"), lng=_coordinate(lng, "lng")))
    
    return points
