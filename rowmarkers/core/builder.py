"""Marker builder: turns listing rows into map markers."""
from typing import Callable, Dict, Iterable, List, Optional
from rowmarkers.core.config import DISPLAY_TITLE, STRICT_GEOMETRY
from rowmarkers.core.errors import GeometryDecodeError, GeometryResolutionError, RowMarkersError
from rowmarkers.core.geometry import points_from_geolocation, points_from_wkt
from rowmarkers.core.interfaces import EntityRenderer, FieldValueAccessor
from rowmarkers.core.models import FieldHandler, GeoFieldKind, GeoPoint, MarkerOptions, ResultRow
from rowmarkers.utils.logging import log_error, log_structured

MarkerDecorator = Callable[[GeoPoint, ResultRow], None]
MarkerObserver = Callable[[GeoPoint, ResultRow, "MarkerBuilder"], None]


class MarkerBuilder:
    """Build map markers for the rows of a listing."""

    def __init__(
        self,
        options: MarkerOptions,
        fields: Dict[str, FieldHandler],
        accessor: FieldValueAccessor,
        renderer: Optional[EntityRenderer] = None,
        decorator: Optional[MarkerDecorator] = None,
        observers: Optional[Iterable[MarkerObserver]] = None,
        title: str = DISPLAY_TITLE,
        strict: Optional[bool] = None,
    ):
        """
        Initialize marker builder.

        Args:
            options: Marker options of the display
            fields: Field handlers of the listing, keyed by field id
            accessor: Per-row field value access
            renderer: Entity renderer used for the rendered entity description
            decorator: Called with each marker before the observers run
            observers: Called in order with each marker, its row and the builder
            title: Display title used in validation messages
            strict: Raise on undecodable geo values instead of returning no markers
        """
        self.options = options
        self.fields = fields
        self.accessor = accessor
        self.renderer = renderer
        self.decorator = decorator
        self.observers: List[MarkerObserver] = list(observers or [])
        self.title = title
        self.strict = STRICT_GEOMETRY if strict is None else strict

        # Bind the geo field once
        self.geo_handler: Optional[FieldHandler] = fields.get(options.geo_field_id) if options.geo_field_id else None
        self.geo_kind: Optional[GeoFieldKind] = self.geo_handler.geo_kind if self.geo_handler else None

    def add_observer(self, observer: MarkerObserver):
        """Register an observer to run after those already registered."""
        self.observers.append(observer)

    def validate(self) -> List[str]:
        """
        Validate the marker options.

        Returns:
            List of error messages, empty if the options are usable
        """
        errors = []
        if not self.options.geo_field_id:
            errors.append(f"Row {self.title} requires the data source to be configured.")
        return errors

    def render(self, row: ResultRow) -> List[GeoPoint]:
        """
        Build the markers of one row.

        Args:
            row: The listing row

        Returns:
            List of markers, empty if the row has no usable geo value
        """
        points = self.resolve_geometry(row)
        if not points:
            return []
        return self.build_markers(points, row)

    def render_rows(self, rows: Iterable[ResultRow]) -> List[GeoPoint]:
        """Build the markers of a result set in listing order."""
        markers = []
        row_count = 0
        for row in rows:
            markers.extend(self.render(row))
            row_count += 1

        log_structured(
            "debug",
            "Rendered listing markers",
            rows=row_count,
            markers=len(markers),
            geo_field=self.options.geo_field_id,
        )
        return markers

    def resolve_geometry(self, row: ResultRow) -> List[GeoPoint]:
        """
        Decode the geo field of a row into raw points.

        Args:
            row: The listing row

        Returns:
            List of points without display text
        """
        if self.geo_handler is None or self.geo_kind is None:
            if self.options.geo_field_id:
                log_structured(
                    "warning",
                    "Geo field is not a geo-capable field of this listing",
                    geo_field=self.options.geo_field_id,
                    row_index=row.index,
                )
            return []

        try:
            if self.geo_kind is GeoFieldKind.STRUCTURED:
                return self._resolve_structured(row)
            return self._resolve_wkt(row)
        except GeometryDecodeError as e:
            if self.strict:
                raise GeometryResolutionError(self.options.geo_field_id, row.index, str(e)) from e
            log_structured(
                "warning",
                "Could not decode geo value, row has no markers",
                geo_field=self.options.geo_field_id,
                row_index=row.index,
                reason=str(e),
            )
            return []

    def _resolve_structured(self, row: ResultRow) -> List[GeoPoint]:
        entity = self.geo_handler.get_entity(row)
        field_name = self.geo_handler.field_name or self.geo_handler.field_id
        if entity is None:
            return []
        if isinstance(entity, dict):
            items = entity.get(field_name)
        else:
            items = getattr(entity, field_name, None)
        return points_from_geolocation(items)

    def _resolve_wkt(self, row: ResultRow) -> List[GeoPoint]:
        # Assumes the field is output with a well-known text formatter
        value = self.accessor.get_field_value(row.index, self.options.geo_field_id)
        if not value:
            return []
        return points_from_wkt(value)

    def popup_body(self, row: ResultRow) -> str:
        """Description shown in the popup of every marker of the row."""
        if self.options.renders_entity:
            if row.entity is None:
                return ""
            if self.renderer is None:
                raise RowMarkersError("Rendering the entity as description requires an entity renderer")
            langcode = getattr(row.entity, "langcode", None)
            try:
                return self.renderer.render(row.entity, self.options.view_mode, langcode)
            except Exception as e:
                log_error(e, {"row_index": row.index, "view_mode": self.options.view_mode})
                raise
        if self.options.description_field_id:
            return self.accessor.get_field(row.index, self.options.description_field_id) or ""
        return ""

    def marker_label(self, row: ResultRow) -> str:
        """Label shown on every marker of the row."""
        if not self.options.name_field_id:
            return ""
        return self.accessor.get_field(row.index, self.options.name_field_id) or ""

    def build_markers(self, points: List[GeoPoint], row: ResultRow) -> List[GeoPoint]:
        """
        Attach display text to the points of a row and run the extensions.

        Args:
            points: Raw points of the row
            row: The listing row

        Returns:
            The same points, decorated
        """
        popup = self.popup_body(row)
        label = self.marker_label(row)

        for point in points:
            point.popup = popup
            point.label = label

            if self.decorator is not None:
                self.decorator(point, row)

            for observer in self.observers:
                observer(point, row, self)

        return points
