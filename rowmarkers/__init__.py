"""Build map markers from the rows of a listing."""

from .core.builder import MarkerBuilder
from .core.models import MarkerOptions, ResultRow, FieldHandler, GeoPoint, GeoFieldKind
from .core.form import build_options_form, OptionsForm, SelectElement
from .core.errors import RowMarkersError, GeometryResolutionError, GeometryDecodeError, OptionsFormError
from .core.config import RENDERED_ENTITY

__version__ = "0.1.0"

__all__ = [
    "MarkerBuilder",
    "MarkerOptions",
    "ResultRow",
    "FieldHandler",
    "GeoPoint",
    "GeoFieldKind",
    "build_options_form",
    "OptionsForm",
    "SelectElement",
    "RowMarkersError",
    "GeometryResolutionError",
    "GeometryDecodeError",
    "OptionsFormError",
    "RENDERED_ENTITY",
]
