"""Data models for marker options, result rows and map markers."""
from dataclasses import dataclass, field, fields as dataclass_fields
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple
from rowmarkers.core.config import DEFAULT_VIEW_MODE, GEO_STORAGE_TYPES, RENDERED_ENTITY


class GeoFieldKind(Enum):
    """How the raw value of a geo-capable field is decoded."""
    WKT = "wkt"
    STRUCTURED = "structured"


@dataclass(frozen=True)
class MarkerOptions:
    """Administrator-configured options of a marker display."""
    geo_field_id: str = ""
    name_field_id: str = ""
    description_field_id: str = ""
    view_mode: str = DEFAULT_VIEW_MODE

    @property
    def renders_entity(self) -> bool:
        return self.description_field_id == RENDERED_ENTITY

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "MarkerOptions":
        """Build options from persisted settings, ignoring unknown keys."""
        data = data or {}
        known = {f.name for f in dataclass_fields(cls)}
        values = {k: ("" if v is None else str(v)) for k, v in data.items() if k in known}
        if not values.get("view_mode"):
            values.pop("view_mode", None)
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for persisting with the display."""
        return {
            "geo_field_id": self.geo_field_id,
            "name_field_id": self.name_field_id,
            "description_field_id": self.description_field_id,
            "view_mode": self.view_mode,
        }


@dataclass
class ResultRow:
    """One item of a listing result set."""
    index: int
    entity: Any = None
    relationship_entities: Dict[str, Any] = field(default_factory=dict)


@dataclass
class FieldHandler:
    """A field configured on the listing, as seen by the marker builder."""
    field_id: str
    admin_label: str = ""
    storage_type: Optional[str] = None
    field_name: Optional[str] = None
    relationship: Optional[str] = None

    @property
    def label(self) -> str:
        return self.admin_label or self.field_id

    @property
    def geo_kind(self) -> Optional[GeoFieldKind]:
        """Decoding path for geo-capable storage types, None otherwise."""
        kind = GEO_STORAGE_TYPES.get(self.storage_type or "")
        return GeoFieldKind(kind) if kind else None

    def get_entity(self, row: ResultRow) -> Any:
        """Entity that backs this field on the given row."""
        if self.relationship:
            return row.relationship_entities.get(self.relationship)
        return row.entity


# Attributes of GeoPoint that are not extension attributes
_CORE_KEYS = ("type", "lat", "lng", "label", "popup", "points", "components")


@dataclass
class GeoPoint:
    """A single mappable location plus its display text.

    Extension code may set arbitrary extra attributes with item access,
    e.g. ``point["icon"] = {...}``; they are kept in ``extra`` and merged
    into ``to_dict()``.
    """
    lat: float
    lng: float
    popup: str = ""
    label: str = ""
    type: str = "point"
    points: Optional[List[Tuple[float, float]]] = None
    components: Optional[List["GeoPoint"]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        if key in _CORE_KEYS:
            return getattr(self, key)
        return self.extra[key]

    def __setitem__(self, key: str, value: Any):
        if key in _CORE_KEYS:
            setattr(self, key, value)
        else:
            self.extra[key] = value

    def __contains__(self, key: str) -> bool:
        return key in _CORE_KEYS or key in self.extra

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def geometry_dict(self) -> Dict[str, Any]:
        """Geometry part of the record, without display text."""
        data = {"type": self.type, "lat": self.lat, "lng": self.lng}
        if self.points is not None:
            data["points"] = [{"lat": lat, "lng": lng} for lat, lng in self.points]
        if self.components is not None:
            data["components"] = [c.geometry_dict() for c in self.components]
        return data

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the record consumed by the map layer."""
        data = self.geometry_dict()
        data["label"] = self.label
        data["popup"] = self.popup
        data.update(self.extra)
        return data
